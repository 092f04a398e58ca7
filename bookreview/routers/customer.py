"""
Customer Router

Endpoints for registered users. Everything here runs with a server-side
session (see services/sessions.py).

Endpoints:
- POST /customer/login - Verify credentials and store a token in the session
- PUT /customer/auth/review/{isbn}?review=text - Add or replace own review
- DELETE /customer/auth/review/{isbn} - Delete own review

Everything under /customer/auth sits behind `require_login`. The login
route itself is deliberately outside that gate, otherwise nobody could
ever log in.

The acting username always comes from the session, never from the request,
so a user can only write or delete their own review.
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, status

from bookreview.config import get_settings
from bookreview.dependencies import (
    Catalog,
    CurrentSession,
    LoggedInUser,
    Tokens,
    Users,
    require_login,
)
from bookreview.exceptions import AuthError, NotFoundError, ValidationError
from bookreview.schemas import (
    CredentialsRequest,
    MessageResponse,
    ReviewDeleteResponse,
    ReviewWriteResponse,
)
from bookreview.services.rate_limiter import limiter

logger = logging.getLogger(__name__)

settings = get_settings()

router = APIRouter(
    prefix="/customer",
    tags=["Customer"],
)

auth_router = APIRouter(
    prefix="/auth",
    dependencies=[Depends(require_login)],
    responses={
        403: {"model": MessageResponse, "description": "Not logged in or token invalid"},
    },
)


# =============================================================================
# Login
# =============================================================================
@router.post(
    "/login",
    response_model=MessageResponse,
    summary="Log in",
    responses={
        400: {"model": MessageResponse, "description": "Missing username or password"},
        404: {"model": MessageResponse, "description": "Invalid credentials"},
    },
)
@limiter.limit(settings.rate_limit_write)
def login(
    request: Request,
    users: Users,
    tokens: Tokens,
    session: CurrentSession,
    credentials: CredentialsRequest | None = None,
) -> MessageResponse:
    """
    Check a username/password pair and put a fresh token in the session.

    Logging in again simply replaces the stored token.

    Raises:
        ValidationError: 400 if either field is missing or empty
        AuthError: 404 if the credentials do not match a user
    """
    if credentials is None or not credentials.is_complete:
        raise ValidationError("Username and password are required")

    if not users.verify(credentials.username, credentials.password):
        logger.info(f"Failed login for {credentials.username}")
        raise AuthError(
            "Invalid Login. Check username and password",
            status_code=status.HTTP_404_NOT_FOUND,
        )

    if session is None:
        raise RuntimeError(
            f"No session attached; check SESSION_PATH_PREFIX ({settings.session_path_prefix})"
        )

    session.authorize(tokens.issue(credentials.username))
    logger.info(f"User {credentials.username} logged in")

    return MessageResponse(message="User successfully logged in")


# =============================================================================
# Review Management (requires login)
# =============================================================================
@auth_router.put(
    "/review/{isbn}",
    response_model=ReviewWriteResponse,
    summary="Add or modify your review of a book",
    responses={
        400: {"model": MessageResponse, "description": "Missing review text or unknown book"},
    },
)
@limiter.limit(settings.rate_limit_write)
def put_review(
    request: Request,
    isbn: str,
    catalog: Catalog,
    username: LoggedInUser,
    review: str | None = Query(
        default=None,
        description="Review text",
        examples=["Loved it"],
    ),
) -> ReviewWriteResponse:
    """
    Store the current user's review, replacing any earlier one.

    Raises:
        ValidationError: 400 if the review text is missing or empty
        NotFoundError: 400 if the book does not exist
    """
    if not review:
        raise ValidationError("Review content is required")

    try:
        catalog.put_review(isbn, username, review)
    except NotFoundError:
        raise NotFoundError("Book not found", status_code=status.HTTP_400_BAD_REQUEST)

    return ReviewWriteResponse(
        message=f"Review for book with ISBN {isbn} has been added/modified successfully",
        review=review,
        user=username,
    )


@auth_router.delete(
    "/review/{isbn}",
    response_model=ReviewDeleteResponse,
    summary="Delete your review of a book",
    responses={
        404: {"model": MessageResponse, "description": "Book or review not found"},
    },
)
@limiter.limit(settings.rate_limit_write)
def delete_review(
    request: Request,
    isbn: str,
    catalog: Catalog,
    username: LoggedInUser,
) -> ReviewDeleteResponse:
    """
    Delete the current user's review of a book.

    Raises:
        NotFoundError: 404 if the book does not exist or the user never
            reviewed it
    """
    catalog.delete_review(isbn, username)

    return ReviewDeleteResponse(
        message=f"Review for book with ISBN {isbn} has been deleted successfully",
        user=username,
    )


router.include_router(auth_router)
