"""Session lifecycle endpoints."""

from fastapi import APIRouter, Depends

from wellness_sessions.api.dependencies import get_session_service, require_caller
from wellness_sessions.api.models import (
    SessionResponse,
    SessionSavedResponse,
    SessionSaveRequest,
)
from wellness_sessions.domain.models import CallerIdentity
from wellness_sessions.services.sessions import SessionService

router = APIRouter(tags=["sessions"])


@router.get("/sessions")
async def list_public_sessions(
    service: SessionService = Depends(get_session_service),
) -> list[SessionResponse]:
    """Return all published sessions."""
    return [SessionResponse.from_record(s) for s in service.list_published()]


@router.get("/sessions/{session_id}")
async def get_public_session(
    session_id: str,
    service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    """Return a single published session."""
    session = service.get_published(session_id)
    return SessionResponse.from_record(session)


@router.get("/my-sessions")
async def list_my_sessions(
    caller: CallerIdentity = Depends(require_caller),
    service: SessionService = Depends(get_session_service),
) -> list[SessionResponse]:
    """Return the caller's sessions, drafts included."""
    return [SessionResponse.from_record(s) for s in service.list_for_owner(caller)]


@router.get("/my-sessions/{session_id}")
async def get_my_session(
    session_id: str,
    caller: CallerIdentity = Depends(require_caller),
    service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    """Return one of the caller's sessions."""
    session = service.get_for_owner(caller, session_id)
    return SessionResponse.from_record(session)


@router.post("/my-sessions/save-draft")
async def save_draft(
    payload: SessionSaveRequest,
    caller: CallerIdentity = Depends(require_caller),
    service: SessionService = Depends(get_session_service),
) -> SessionSavedResponse:
    """Create or update a draft session."""
    session = service.save_draft(
        caller,
        payload.id,
        title=payload.title,
        tags=payload.tags,
        json_file_url=payload.json_file_url,
    )
    return SessionSavedResponse(
        message="Draft saved successfully",
        session=SessionResponse.from_record(session),
    )


@router.post("/my-sessions/publish")
async def publish_session(
    payload: SessionSaveRequest,
    caller: CallerIdentity = Depends(require_caller),
    service: SessionService = Depends(get_session_service),
) -> SessionSavedResponse:
    """Create or update a session and publish it."""
    session = service.publish(
        caller,
        payload.id,
        title=payload.title,
        tags=payload.tags,
        json_file_url=payload.json_file_url,
    )
    return SessionSavedResponse(
        message="Session published successfully",
        session=SessionResponse.from_record(session),
    )

