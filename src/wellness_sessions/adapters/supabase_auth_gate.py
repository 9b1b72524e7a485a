"""Supabase Auth-backed caller resolution."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import AuthError, Client

from wellness_sessions.domain.models import CallerIdentity
from wellness_sessions.services.auth import AuthGate

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseAuthGate(AuthGate):
    """Verify access tokens against Supabase Auth."""

    client: Client

    def resolve(self, token: str) -> CallerIdentity | None:
        """Return the user behind an access token, if Supabase accepts it."""
        try:
            response = self.client.auth.get_user(token)
        except AuthError as exc:
            _logger.warning("Rejected access token: %s", exc)
            return None
        if response is None or response.user is None:
            return None
        return CallerIdentity(id=UUID(str(response.user.id)), email=response.user.email)
