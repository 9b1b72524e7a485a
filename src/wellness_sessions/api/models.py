"""Request and response models for the sessions API."""

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field

from wellness_sessions.domain.sessions import SessionStatus, WellnessSession


class SessionSaveRequest(BaseModel):
    """Form payload for save-draft and publish."""

    id: str | None = None
    title: str | None = None
    tags: str | list[str] | None = None
    json_file_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("json_file_url", "contentUrl"),
    )


class SessionResponse(BaseModel):
    """Wire representation of a wellness session."""

    id: UUID
    user_id: UUID
    title: str
    tags: list[str]
    json_file_url: str
    status: SessionStatus
    created_at: datetime
    updated_at: datetime
    owner_email: str | None = None

    @classmethod
    def from_record(cls, session: WellnessSession) -> "SessionResponse":
        return cls(
            id=session.id,
            user_id=session.user_id,
            title=session.title,
            tags=session.tags,
            json_file_url=session.json_file_url,
            status=session.status,
            created_at=session.created_at,
            updated_at=session.updated_at,
            owner_email=session.owner_email,
        )


class SessionSavedResponse(BaseModel):
    """Result of a save-draft or publish call."""

    message: str
    session: SessionResponse
