"""
Pydantic Schemas Package

Request and response models for the API. Store records (Book, User) are
plain dataclasses; these schemas control exactly what goes over the wire.
"""

from bookreview.schemas.book import (
    AuthorSearchResponse,
    BookDetailResponse,
    BookListResponse,
    BookMatch,
    BookResponse,
    TitleSearchResponse,
)
from bookreview.schemas.common import CamelModel, MessageResponse
from bookreview.schemas.review import (
    ReviewDeleteResponse,
    ReviewListResponse,
    ReviewWriteResponse,
)
from bookreview.schemas.user import CredentialsRequest

__all__ = [
    "AuthorSearchResponse",
    "BookDetailResponse",
    "BookListResponse",
    "BookMatch",
    "BookResponse",
    "CamelModel",
    "CredentialsRequest",
    "MessageResponse",
    "ReviewDeleteResponse",
    "ReviewListResponse",
    "ReviewWriteResponse",
    "TitleSearchResponse",
]
