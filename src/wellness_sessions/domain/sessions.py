"""Domain models and rules for wellness sessions."""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID

from wellness_sessions.domain.errors import ValidationFailed

TITLE_MAX_LENGTH = 200
CONTENT_URL_PATTERN = re.compile(r"^https?://.+")


class SessionStatus(str, Enum):
    """Publication status of a session."""

    DRAFT = "draft"
    PUBLISHED = "published"


@dataclass(frozen=True)
class WellnessSession:
    """Represents a persisted wellness session."""

    id: UUID
    user_id: UUID
    title: str
    tags: list[str]
    json_file_url: str
    status: SessionStatus
    created_at: datetime
    updated_at: datetime
    owner_email: str | None = None


@dataclass(frozen=True)
class SessionFields:
    """Validated, normalized fields written on every save."""

    title: str
    tags: list[str] = field(default_factory=list)
    json_file_url: str = ""


def parse_tags(raw: str | Iterable[str] | None) -> list[str]:
    """Split comma-delimited tags, dropping empty pieces and keeping order."""
    if raw is None:
        return []
    pieces = raw.split(",") if isinstance(raw, str) else raw
    tags = []
    for piece in pieces:
        tag = str(piece).strip().lower()
        if tag:
            tags.append(tag)
    return tags


def validate_fields(
    title: str | None,
    tags: str | Iterable[str] | None,
    json_file_url: str | None,
) -> SessionFields:
    """Normalize raw form input, raising ValidationFailed on bad values."""
    errors: dict[str, str] = {}
    cleaned_title = (title or "").strip()
    if not cleaned_title:
        errors["title"] = "Title is required"
    elif len(cleaned_title) > TITLE_MAX_LENGTH:
        errors["title"] = "Title too long"

    cleaned_url = (json_file_url or "").strip()
    if cleaned_url and not CONTENT_URL_PATTERN.match(cleaned_url):
        errors["json_file_url"] = "Must be a valid HTTP/HTTPS URL"

    if errors:
        raise ValidationFailed(errors)
    return SessionFields(
        title=cleaned_title,
        tags=parse_tags(tags),
        json_file_url=cleaned_url,
    )


def can_edit(session: WellnessSession, caller_id: UUID | None) -> bool:
    """Return true when the caller owns the session."""
    return caller_id is not None and session.user_id == caller_id


def can_view(session: WellnessSession, caller_id: UUID | None) -> bool:
    """Return true when the caller may read the session.

    Owners always can; anyone else, including anonymous callers, only once
    the session is published.
    """
    return can_edit(session, caller_id) or session.status is SessionStatus.PUBLISHED
