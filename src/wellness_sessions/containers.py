"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from wellness_sessions.adapters.supabase_auth_gate import SupabaseAuthGate
from wellness_sessions.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from wellness_sessions.config import Settings
from wellness_sessions.services.auth import AuthService
from wellness_sessions.services.sessions import SessionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    session_service: SessionService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    session_repository = SupabaseSessionRepository(
        supabase_client,
        table_name=resolved_settings.sessions_table,
        users_table=resolved_settings.users_table,
    )
    auth_service = AuthService(SupabaseAuthGate(supabase_client))
    session_service = SessionService(session_repository)

    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        session_service=session_service,
    )
