"""
Book Pydantic Schemas

Response shapes for catalog reads:
- BookListResponse: the whole catalog, keyed by ISBN
- BookDetailResponse: a single book
- AuthorSearchResponse / TitleSearchResponse: search matches

Every catalog read reports when it ran and how long it took.
"""

from datetime import datetime

from pydantic import Field

from bookreview.schemas.common import CamelModel
from bookreview.stores.catalog import Book


class BookResponse(CamelModel):
    """A book as stored in the catalog."""

    author: str = Field(..., examples=["Jane Austen"])
    title: str = Field(..., examples=["Pride and Prejudice"])
    reviews: dict[str, str] = Field(
        default_factory=dict,
        description="Review text keyed by the username that wrote it",
        examples=[{"alice": "Loved it"}],
    )

    @classmethod
    def from_book(cls, book: Book) -> "BookResponse":
        return cls(author=book.author, title=book.title, reviews=book.reviews)


class BookMatch(BookResponse):
    """A search hit; carries its ISBN since results are a list."""

    isbn: str = Field(..., examples=["8"])

    @classmethod
    def from_book(cls, book: Book) -> "BookMatch":
        return cls(
            isbn=str(book.isbn),
            author=book.author,
            title=book.title,
            reviews=book.reviews,
        )


class TimedResponse(CamelModel):
    message: str
    timestamp: datetime = Field(..., description="When the read completed (UTC)")
    operation_duration: str = Field(
        ...,
        description="Time spent answering, e.g. '12ms'",
        examples=["12ms"],
    )


class BookListResponse(TimedResponse):
    total_books: int = Field(..., ge=0)
    books: dict[str, BookResponse]


class BookDetailResponse(TimedResponse):
    isbn: str
    book: BookResponse


class AuthorSearchResponse(TimedResponse):
    author: str
    books_found: int = Field(..., ge=1)
    books: list[BookMatch]


class TitleSearchResponse(TimedResponse):
    title: str
    books_found: int = Field(..., ge=1)
    books: list[BookMatch]
