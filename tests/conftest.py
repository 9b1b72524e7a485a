"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from wellness_sessions.config import Settings
from wellness_sessions.containers import AppContainer
from wellness_sessions.domain.models import CallerIdentity
from wellness_sessions.domain.sessions import (
    SessionFields,
    SessionStatus,
    WellnessSession,
)
from wellness_sessions.services.auth import AuthGate, AuthService
from wellness_sessions.services.sessions import SessionRepository, SessionService

OWNER_ONE = CallerIdentity(
    id=UUID("11111111-1111-1111-1111-111111111111"), email="u1@example.com"
)
OWNER_TWO = CallerIdentity(
    id=UUID("22222222-2222-2222-2222-222222222222"), email="u2@example.com"
)


@dataclass
class TickingClock:
    """Clock that advances one second per reading."""

    current: datetime = datetime(2024, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@dataclass
class InMemorySessionRepository(SessionRepository):
    """In-memory session repository for tests."""

    sessions: dict[UUID, WellnessSession] = field(default_factory=dict)
    emails: dict[UUID, str] = field(default_factory=dict)
    clock: TickingClock = field(default_factory=TickingClock)

    def create_session(
        self, user_id: UUID, fields: SessionFields, status: SessionStatus
    ) -> WellnessSession:
        now = self.clock()
        session = WellnessSession(
            id=uuid4(),
            user_id=user_id,
            title=fields.title,
            tags=list(fields.tags),
            json_file_url=fields.json_file_url,
            status=status,
            created_at=now,
            updated_at=now,
        )
        self.sessions[session.id] = session
        return session

    def update_owned_session(
        self,
        session_id: UUID,
        user_id: UUID,
        fields: SessionFields,
        status: SessionStatus,
    ) -> WellnessSession | None:
        current = self.sessions.get(session_id)
        if current is None or current.user_id != user_id:
            return None
        updated = replace(
            current,
            title=fields.title,
            tags=list(fields.tags),
            json_file_url=fields.json_file_url,
            status=status,
            updated_at=self.clock(),
        )
        self.sessions[session_id] = updated
        return updated

    def get_session(self, session_id: UUID) -> WellnessSession | None:
        return self.sessions.get(session_id)

    def list_published(self) -> list[WellnessSession]:
        published = [
            replace(session, owner_email=self.emails.get(session.user_id))
            for session in self.sessions.values()
            if session.status is SessionStatus.PUBLISHED
        ]
        return sorted(published, key=lambda s: s.created_at, reverse=True)

    def list_by_owner(self, user_id: UUID) -> list[WellnessSession]:
        owned = [s for s in self.sessions.values() if s.user_id == user_id]
        return sorted(owned, key=lambda s: s.updated_at, reverse=True)


@dataclass
class FailingSessionRepository(InMemorySessionRepository):
    """Repository whose every call fails like a dropped connection."""

    def create_session(self, user_id, fields, status):  # type: ignore[no-untyped-def]
        raise ConnectionError("database unavailable")

    def get_session(self, session_id):  # type: ignore[no-untyped-def]
        raise ConnectionError("database unavailable")

    def list_published(self):  # type: ignore[no-untyped-def]
        raise ConnectionError("database unavailable")

    def list_by_owner(self, user_id):  # type: ignore[no-untyped-def]
        raise ConnectionError("database unavailable")


@dataclass
class FakeAuthGate(AuthGate):
    """Auth gate backed by a static token table."""

    tokens: dict[str, CallerIdentity] = field(
        default_factory=lambda: {"token-u1": OWNER_ONE, "token-u2": OWNER_TWO}
    )

    def resolve(self, token: str) -> CallerIdentity | None:
        return self.tokens.get(token)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    repository = InMemorySessionRepository()
    repository.emails[OWNER_ONE.id] = OWNER_ONE.email or ""
    repository.emails[OWNER_TWO.id] = OWNER_TWO.email or ""
    return repository


@pytest.fixture
def session_service(session_repository: InMemorySessionRepository) -> SessionService:
    return SessionService(session_repository)


@pytest.fixture
def container(
    settings: Settings, session_service: SessionService
) -> AppContainer:
    return AppContainer(
        settings=settings,
        auth_service=AuthService(FakeAuthGate()),
        session_service=session_service,
    )


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
