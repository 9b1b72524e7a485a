"""Caller identity resolution for inbound requests."""

from dataclasses import dataclass
from typing import Protocol

from wellness_sessions.domain.models import CallerIdentity

_BEARER_PREFIX = "bearer "


class AuthGate(Protocol):
    """External collaborator that verifies access tokens."""

    def resolve(self, token: str) -> CallerIdentity | None:
        """Return the caller for a token, or None when it is rejected."""


def parse_bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an Authorization header value."""
    if not authorization:
        return None
    if not authorization.lower().startswith(_BEARER_PREFIX):
        return None
    token = authorization[len(_BEARER_PREFIX) :].strip()
    return token or None


@dataclass
class AuthService:
    """Resolve callers from Authorization headers."""

    gate: AuthGate

    def identify(self, authorization: str | None) -> CallerIdentity | None:
        """Return the caller for the header, or None when unauthenticated."""
        token = parse_bearer_token(authorization)
        if token is None:
            return None
        return self.gate.resolve(token)
