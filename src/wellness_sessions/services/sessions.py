"""Session lifecycle: ownership-scoped listing, drafting and publishing."""

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from wellness_sessions.domain.errors import (
    NotFoundOrUnauthorized,
    SessionError,
    StorageFailure,
    Unauthenticated,
)
from wellness_sessions.domain.models import CallerIdentity
from wellness_sessions.domain.sessions import (
    SessionFields,
    SessionStatus,
    WellnessSession,
    can_edit,
    can_view,
    validate_fields,
)

_logger = logging.getLogger(__name__)


class SessionRepository(Protocol):
    """Persistence interface for wellness sessions."""

    def create_session(
        self, user_id: UUID, fields: SessionFields, status: SessionStatus
    ) -> WellnessSession:
        """Insert a new session owned by the user and return it."""

    def update_owned_session(
        self,
        session_id: UUID,
        user_id: UUID,
        fields: SessionFields,
        status: SessionStatus,
    ) -> WellnessSession | None:
        """Replace a session's fields if the user owns it; return None otherwise."""

    def get_session(self, session_id: UUID) -> WellnessSession | None:
        """Return a session by id, if present."""

    def list_published(self) -> list[WellnessSession]:
        """Return published sessions with owner emails, newest created first."""

    def list_by_owner(self, user_id: UUID) -> list[WellnessSession]:
        """Return a user's sessions, most recently updated first."""


@contextmanager
def _storage_errors(message: str) -> Iterator[None]:
    """Translate unexpected persistence errors into StorageFailure."""
    try:
        yield
    except SessionError:
        raise
    except Exception as exc:
        _logger.exception(message)
        raise StorageFailure(message) from exc


def coerce_session_id(raw: UUID | str | None) -> UUID | None:
    """Parse an optional session id; malformed ids cannot exist, so are not found."""
    if raw is None or isinstance(raw, UUID):
        return raw
    cleaned = raw.strip()
    if not cleaned:
        return None
    try:
        return UUID(cleaned)
    except ValueError as exc:
        raise NotFoundOrUnauthorized from exc


def _require_session_id(raw: UUID | str) -> UUID:
    session_id = coerce_session_id(raw)
    if session_id is None:
        raise NotFoundOrUnauthorized
    return session_id


def _require_caller(caller: CallerIdentity | None) -> CallerIdentity:
    if caller is None:
        raise Unauthenticated
    return caller


@dataclass
class SessionService:
    """Application service for the session lifecycle."""

    repository: SessionRepository

    def list_published(self) -> list[WellnessSession]:
        """Return every published session for the public listing."""
        with _storage_errors("Failed to load sessions"):
            sessions = self.repository.list_published()
        visible = [session for session in sessions if can_view(session, None)]
        _logger.info("Public sessions found: %s", len(visible))
        return visible

    def get_published(self, session_id: UUID | str) -> WellnessSession:
        """Return a single session readable by anonymous callers."""
        session_id = _require_session_id(session_id)
        with _storage_errors("Failed to load session"):
            session = self.repository.get_session(session_id)
        if session is None or not can_view(session, None):
            raise NotFoundOrUnauthorized
        return session

    def list_for_owner(self, caller: CallerIdentity | None) -> list[WellnessSession]:
        """Return all sessions owned by the caller."""
        owner = _require_caller(caller)
        with _storage_errors("Failed to load your sessions"):
            sessions = self.repository.list_by_owner(owner.id)
        owned = [session for session in sessions if can_edit(session, owner.id)]
        _logger.info("User sessions found: user_id=%s count=%s", owner.id, len(owned))
        return owned

    def get_for_owner(
        self, caller: CallerIdentity | None, session_id: UUID | str
    ) -> WellnessSession:
        """Return one of the caller's sessions by id."""
        owner = _require_caller(caller)
        session_id = _require_session_id(session_id)
        with _storage_errors("Server error"):
            session = self.repository.get_session(session_id)
        if session is None or not can_edit(session, owner.id):
            raise NotFoundOrUnauthorized
        return session

    def save_draft(  # noqa: PLR0913
        self,
        caller: CallerIdentity | None,
        session_id: UUID | str | None,
        title: str | None,
        tags: str | Iterable[str] | None,
        json_file_url: str | None,
    ) -> WellnessSession:
        """Create or replace a session with status draft."""
        return self._save(
            caller,
            session_id,
            SessionStatus.DRAFT,
            title=title,
            tags=tags,
            json_file_url=json_file_url,
            failure_message="Failed to save draft",
        )

    def publish(  # noqa: PLR0913
        self,
        caller: CallerIdentity | None,
        session_id: UUID | str | None,
        title: str | None,
        tags: str | Iterable[str] | None,
        json_file_url: str | None,
    ) -> WellnessSession:
        """Create or replace a session with status published."""
        return self._save(
            caller,
            session_id,
            SessionStatus.PUBLISHED,
            title=title,
            tags=tags,
            json_file_url=json_file_url,
            failure_message="Failed to publish session",
        )

    def _save(  # noqa: PLR0913
        self,
        caller: CallerIdentity | None,
        session_id: UUID | str | None,
        status: SessionStatus,
        *,
        title: str | None,
        tags: str | Iterable[str] | None,
        json_file_url: str | None,
        failure_message: str,
    ) -> WellnessSession:
        owner = _require_caller(caller)
        fields = validate_fields(title, tags, json_file_url)
        session_id = coerce_session_id(session_id)
        with _storage_errors(failure_message):
            if session_id is None:
                session = self.repository.create_session(owner.id, fields, status)
            else:
                existing = self.repository.get_session(session_id)
                if existing is None or not can_edit(existing, owner.id):
                    raise NotFoundOrUnauthorized
                session = self.repository.update_owned_session(
                    session_id, owner.id, fields, status
                )
                if session is None:
                    raise NotFoundOrUnauthorized
        _logger.info(
            "Session saved: id=%s status=%s user_id=%s",
            session.id,
            session.status.value,
            owner.id,
        )
        return session
