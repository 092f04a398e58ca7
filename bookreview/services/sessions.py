"""
Server-Side Sessions

The client only ever holds an opaque session id in a cookie. The session
itself (at most one credential: token plus username) lives in a
SessionStore on the server.

Lifecycle:
- First request under the session prefix: a fresh Session is created.
  It is only stored, and the cookie only set, once something writes to it
  (a successful login).
- Login: the credential is stored on the session, replacing any earlier one.
- A credential that fails verification is dropped and the session is
  discarded, which returns the client to the anonymous state.
- Every save also sweeps out sessions whose credential has expired, so
  abandoned sessions do not pile up.

There is no logout; a session only goes back to anonymous when its token
stops verifying or the client loses the cookie.
"""

import logging
import secrets
import threading
from dataclasses import dataclass
from datetime import UTC, datetime

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from bookreview.services.security import Credential

logger = logging.getLogger(__name__)


def new_session_id() -> str:
    return secrets.token_urlsafe(24)


@dataclass
class Session:
    session_id: str
    credential: Credential | None = None
    is_new: bool = True
    modified: bool = False

    @property
    def username(self) -> str | None:
        return self.credential.username if self.credential else None

    def authorize(self, credential: Credential) -> None:
        """Attach a freshly issued credential, replacing any previous one."""
        self.credential = credential
        self.modified = True

    def clear(self) -> None:
        """Forget the credential; the session becomes anonymous."""
        if self.credential is not None:
            self.credential = None
            self.modified = True


class SessionStore:
    """Thread-safe in-memory mapping of session id to Session."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def new(self) -> Session:
        return Session(session_id=new_session_id())

    def load(self, session_id: str) -> Session | None:
        with self._lock:
            return self._sessions.get(session_id)

    def save(self, session: Session) -> None:
        """Store a session and sweep out any whose credential has expired."""
        with self._lock:
            self._purge_expired(datetime.now(UTC))
            self._sessions[session.session_id] = session
        session.modified = False

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def purge_expired(self, now: datetime | None = None) -> int:
        """Drop sessions whose credential expired before `now`."""
        with self._lock:
            return self._purge_expired(now or datetime.now(UTC))

    def _purge_expired(self, now: datetime) -> int:
        expired = [
            session_id
            for session_id, session in self._sessions.items()
            if session.credential is None or session.credential.expires_at <= now
        ]
        for session_id in expired:
            del self._sessions[session_id]
        if expired:
            logger.debug(f"Purged {len(expired)} expired session(s)")
        return len(expired)


class SessionMiddleware(BaseHTTPMiddleware):
    """
    Attach a server-side session to requests under `path_prefix`.

    The session is available to handlers as `request.state.session`.
    """

    def __init__(
        self,
        app: ASGIApp,
        store: SessionStore,
        cookie_name: str = "session",
        path_prefix: str = "/customer",
        https_only: bool = False,
    ) -> None:
        super().__init__(app)
        self.store = store
        self.cookie_name = cookie_name
        self.path_prefix = path_prefix.rstrip("/")
        self.https_only = https_only

    def _applies_to(self, path: str) -> bool:
        if not self.path_prefix:
            return True
        return path == self.path_prefix or path.startswith(self.path_prefix + "/")

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not self._applies_to(request.url.path):
            return await call_next(request)

        session = None
        session_id = request.cookies.get(self.cookie_name)
        if session_id:
            session = self.store.load(session_id)
            if session is None:
                logger.debug("Unknown session id presented; starting a new session")
        if session is None:
            session = self.store.new()

        request.state.session = session
        response = await call_next(request)

        if session.credential is None:
            # Anonymous sessions are never kept; a rejected credential ends it
            if not session.is_new:
                self.store.discard(session.session_id)
                logger.debug("Dropped session after its credential was rejected")
        elif session.modified:
            self.store.save(session)
            if session.is_new:
                response.set_cookie(
                    self.cookie_name,
                    session.session_id,
                    path="/",
                    httponly=True,
                    samesite="lax",
                    secure=self.https_only,
                )
                session.is_new = False

        return response
