"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.

Store access:
The application factory puts one CatalogStore, UserDirectory,
TokenService and LatencySimulator on `app.state`. Handlers never import
them; they ask for them here. A test builds a fresh app and gets fresh
stores, with nothing shared between tests.

Credential gate:
`require_login` guards every route under /customer/auth. It rejects a
request whose session holds no credential ("User not logged in") or
whose token fails verification ("User not authenticated"), both with 403.
"""

import logging
from typing import Annotated

from fastapi import Depends, Request

from bookreview.exceptions import AuthError
from bookreview.services.latency import LatencySimulator
from bookreview.services.security import TokenService
from bookreview.services.sessions import Session
from bookreview.stores.catalog import CatalogStore
from bookreview.stores.users import UserDirectory

logger = logging.getLogger(__name__)


# =============================================================================
# Store and Service Access
# =============================================================================
def get_catalog(request: Request) -> CatalogStore:
    return request.app.state.catalog


def get_users(request: Request) -> UserDirectory:
    return request.app.state.users


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def get_latency(request: Request) -> LatencySimulator:
    return request.app.state.latency


Catalog = Annotated[CatalogStore, Depends(get_catalog)]
Users = Annotated[UserDirectory, Depends(get_users)]
Tokens = Annotated[TokenService, Depends(get_token_service)]
Latency = Annotated[LatencySimulator, Depends(get_latency)]


# =============================================================================
# Sessions
# =============================================================================
def get_session(request: Request) -> Session | None:
    """
    The server-side session attached by SessionMiddleware.

    None when the request path is outside the session prefix.
    """
    return getattr(request.state, "session", None)


CurrentSession = Annotated[Session | None, Depends(get_session)]


def require_login(request: Request, session: CurrentSession, tokens: Tokens) -> str:
    """
    Let the request through only if its session holds a valid credential.

    On success the username is also stored on `request.state.username`.

    Returns:
        Username carried by the verified token

    Raises:
        AuthError: 403 if there is no credential or it does not verify
    """
    if session is None or session.credential is None:
        raise AuthError("User not logged in")

    username = tokens.verify(session.credential.token)
    if username is None:
        logger.warning(f"Rejected credential for session user {session.username}")
        session.clear()
        raise AuthError("User not authenticated")

    request.state.username = username
    return username


LoggedInUser = Annotated[str, Depends(require_login)]
