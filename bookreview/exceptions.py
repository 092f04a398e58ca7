"""
Domain Errors

Every failure a request can hit is one of these exceptions. Stores and
services raise them; main.py turns them into JSON responses of the form
{"message": ..., **details} with the error's status code.

Error kinds:
- ValidationError: a required field is missing or empty (400)
- DuplicateError: username already taken (409)
- NotFoundError: book, search match or review absent (404)
- AuthError: no session, invalid/expired credential (403)
- StoreUnavailableError: the store failed to answer (500)

A call site may override the default status, e.g. a bad login is reported
as 404 and a missing book on review upsert as 400.
"""

from typing import Any

from fastapi import status


class BookReviewError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        **details: Any,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    def to_content(self) -> dict[str, Any]:
        """Body of the JSON response for this error."""
        return {"message": self.message, **self.details}


class ValidationError(BookReviewError):
    status_code = status.HTTP_400_BAD_REQUEST


class DuplicateError(BookReviewError):
    status_code = status.HTTP_409_CONFLICT


class NotFoundError(BookReviewError):
    status_code = status.HTTP_404_NOT_FOUND


class AuthError(BookReviewError):
    status_code = status.HTTP_403_FORBIDDEN


class StoreUnavailableError(BookReviewError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
