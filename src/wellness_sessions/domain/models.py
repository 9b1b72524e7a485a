"""Domain models for callers of the sessions API."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated caller resolved by the auth gate."""

    id: UUID
    email: str | None = None
