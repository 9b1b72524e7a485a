"""Client-side periodic draft auto-save."""

import asyncio
import contextlib
import logging
from dataclasses import dataclass, field

import httpx

from wellness_sessions.adapters.sessions_api_client import SessionsApi

_logger = logging.getLogger(__name__)


@dataclass
class DraftAutoSaver:
    """Periodically push edited form data through ordinary save-draft calls.

    The server sees these as regular draft saves. The first successful save
    records the returned session id so later saves update the same record.
    """

    api: SessionsApi
    interval_seconds: float = 5.0
    session_id: str | None = None
    last_response: dict[str, object] | None = None
    _pending: dict[str, object] | None = field(default=None, init=False)
    _task: asyncio.Task[None] | None = field(default=None, init=False)

    def update(self, form: dict[str, object]) -> None:
        """Record the latest form state to be saved on the next tick."""
        self._pending = dict(form)

    async def flush(self) -> dict[str, object] | None:
        """Save pending changes now; return the API response if a save ran."""
        form = self._pending
        if form is None or not str(form.get("title") or "").strip():
            return None
        self._pending = None
        payload = dict(form)
        if self.session_id:
            payload["id"] = self.session_id
        try:
            response = await self.api.save_draft(payload)
        except (httpx.HTTPError, ValueError):
            _logger.exception("Auto-save failed")
            if self._pending is None:
                self._pending = form
            return None
        session = response.get("session")
        if isinstance(session, dict) and session.get("id"):
            self.session_id = str(session["id"])
        self.last_response = response
        _logger.info("Auto-saved draft: id=%s", self.session_id)
        return response

    def start(self) -> None:
        """Start the periodic save loop on the running event loop."""
        if self._task is not None:
            return
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Cancel the save loop."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            await self.flush()
