"""FastAPI dependencies for the sessions API."""

from fastapi import Depends, Header, Request

from wellness_sessions.containers import AppContainer
from wellness_sessions.domain.errors import Unauthenticated
from wellness_sessions.domain.models import CallerIdentity
from wellness_sessions.services.sessions import SessionService


def get_session_service(request: Request) -> SessionService:
    """Return the session service from the app container."""
    container: AppContainer = request.app.state.container
    return container.session_service


def get_caller(
    request: Request, authorization: str | None = Header(default=None)
) -> CallerIdentity | None:
    """Resolve the caller from the Authorization header, if any.

    The result is passed explicitly to every service call; handlers never
    read identity from request state.
    """
    container: AppContainer = request.app.state.container
    return container.auth_service.identify(authorization)


def require_caller(
    caller: CallerIdentity | None = Depends(get_caller),
) -> CallerIdentity:
    """Reject the request with 401 before its body is validated."""
    if caller is None:
        raise Unauthenticated()
    return caller
