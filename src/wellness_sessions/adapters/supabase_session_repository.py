"""Supabase-backed wellness session repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from wellness_sessions.domain.errors import StorageFailure
from wellness_sessions.domain.sessions import (
    SessionFields,
    SessionStatus,
    WellnessSession,
)
from wellness_sessions.services.sessions import SessionRepository

_COLUMNS = "id, user_id, title, tags, json_file_url, status, created_at, updated_at"


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for wellness sessions."""

    client: Client
    table_name: str = "wellness_sessions"
    users_table: str = "users"

    def create_session(
        self, user_id: UUID, fields: SessionFields, status: SessionStatus
    ) -> WellnessSession:
        """Insert a session row and return it."""
        response = (
            self.client.table(self.table_name)
            .insert(
                {
                    "user_id": str(user_id),
                    "title": fields.title,
                    "tags": fields.tags,
                    "json_file_url": fields.json_file_url,
                    "status": status.value,
                }
            )
            .execute()
        )
        if not response.data:
            raise StorageFailure("Failed to create session")
        return _row_to_session(response.data[0])

    def update_owned_session(
        self,
        session_id: UUID,
        user_id: UUID,
        fields: SessionFields,
        status: SessionStatus,
    ) -> WellnessSession | None:
        """Replace session fields, matching on both id and owner."""
        response = (
            self.client.table(self.table_name)
            .update(
                {
                    "title": fields.title,
                    "tags": fields.tags,
                    "json_file_url": fields.json_file_url,
                    "status": status.value,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(session_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            return None
        return _row_to_session(response.data[0])

    def get_session(self, session_id: UUID) -> WellnessSession | None:
        """Return a session by id, if present."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("id", str(session_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _row_to_session(response.data[0])

    def list_published(self) -> list[WellnessSession]:
        """Return published sessions joined with their owner's email."""
        response = (
            self.client.table(self.table_name)
            .select(f"{_COLUMNS}, owner:{self.users_table}(email)")
            .eq("status", SessionStatus.PUBLISHED.value)
            .order("created_at", desc=True)
            .execute()
        )
        return [_row_to_session(row) for row in response.data or []]

    def list_by_owner(self, user_id: UUID) -> list[WellnessSession]:
        """Return all sessions for a user, most recently updated first."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("updated_at", desc=True)
            .execute()
        )
        return [_row_to_session(row) for row in response.data or []]


def _row_to_session(row: dict[str, object]) -> WellnessSession:
    owner = row.get("owner")
    owner_email = owner.get("email") if isinstance(owner, dict) else None
    return WellnessSession(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        title=str(row["title"]),
        tags=list(row.get("tags") or []),
        json_file_url=str(row.get("json_file_url") or ""),
        status=SessionStatus(row["status"]),
        created_at=_parse_timestamp(row["created_at"]),
        updated_at=_parse_timestamp(row["updated_at"]),
        owner_email=owner_email,
    )


def _parse_timestamp(value: object) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))
