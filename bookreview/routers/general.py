"""
Public Router

Endpoints open to everyone; none of them needs a session.

Endpoints:
- POST /register - Create an account
- GET / - The whole catalog
- GET /isbn/{isbn} - One book
- GET /author/{author} - Books whose author contains the text
- GET /title/{title} - Books whose title contains the text
- GET /review/{isbn} - Reviews of one book

Search endpoints answer 404 when nothing matches, not an empty 200;
clients of this API rely on that.
"""

import logging
import time
from datetime import UTC, datetime

from fastapi import APIRouter, Request

from bookreview.config import get_settings
from bookreview.dependencies import Catalog, Latency, Users
from bookreview.exceptions import NotFoundError, ValidationError
from bookreview.schemas import (
    AuthorSearchResponse,
    BookDetailResponse,
    BookListResponse,
    BookMatch,
    BookResponse,
    CredentialsRequest,
    MessageResponse,
    ReviewListResponse,
    TitleSearchResponse,
)
from bookreview.services.rate_limiter import limiter

logger = logging.getLogger(__name__)

settings = get_settings()

router = APIRouter(
    tags=["Public"],
    responses={
        404: {"model": MessageResponse, "description": "Book or match not found"},
    },
)


def _elapsed(started: float) -> str:
    return f"{round((time.perf_counter() - started) * 1000)}ms"


# =============================================================================
# Registration
# =============================================================================
@router.post(
    "/register",
    response_model=MessageResponse,
    summary="Register a new user",
    responses={
        400: {"model": MessageResponse, "description": "Missing username or password"},
        409: {"model": MessageResponse, "description": "Username already taken"},
    },
)
@limiter.limit(settings.rate_limit_write)
def register(
    request: Request,
    users: Users,
    credentials: CredentialsRequest | None = None,
) -> MessageResponse:
    """
    Create an account from a username and password.

    Raises:
        ValidationError: 400 if either field is missing or empty
        DuplicateError: 409 if the username is taken
    """
    if credentials is None or not credentials.is_complete:
        raise ValidationError("Username and password are required")

    users.register(credentials.username, credentials.password)

    return MessageResponse(message="User registered successfully. You can now login.")


# =============================================================================
# Catalog Reads
# =============================================================================
@router.get(
    "/",
    response_model=BookListResponse,
    summary="List all books",
)
async def list_books(request: Request, catalog: Catalog, latency: Latency) -> BookListResponse:
    """Return the full catalog keyed by ISBN."""
    started = time.perf_counter()
    await latency.simulate("retrieving books")

    books = catalog.get_all()
    logger.info(f"Retrieved {len(books)} books")

    return BookListResponse(
        message="Books retrieved successfully",
        total_books=len(books),
        books={str(isbn): BookResponse.from_book(book) for isbn, book in books.items()},
        timestamp=datetime.now(UTC),
        operation_duration=_elapsed(started),
    )


@router.get(
    "/isbn/{isbn}",
    response_model=BookDetailResponse,
    summary="Get a book by ISBN",
)
async def get_book(
    request: Request,
    isbn: str,
    catalog: Catalog,
    latency: Latency,
) -> BookDetailResponse:
    """
    Look a book up by its ISBN.

    Raises:
        NotFoundError: 404 if no book has this ISBN
    """
    started = time.perf_counter()
    await latency.simulate(f"retrieving book with ISBN {isbn}")

    try:
        book = catalog.get_by_id(isbn)
    except NotFoundError:
        logger.info(f"Book with ISBN {isbn} not found")
        raise NotFoundError(f"Book with ISBN {isbn} not found", isbn=isbn)

    return BookDetailResponse(
        message=f"Book with ISBN {isbn} retrieved successfully",
        isbn=isbn,
        book=BookResponse.from_book(book),
        timestamp=datetime.now(UTC),
        operation_duration=_elapsed(started),
    )


@router.get(
    "/author/{author}",
    response_model=AuthorSearchResponse,
    summary="Search books by author",
)
async def search_by_author(
    request: Request,
    author: str,
    catalog: Catalog,
    latency: Latency,
) -> AuthorSearchResponse:
    """
    Case-insensitive author search; results ordered by title.

    Raises:
        NotFoundError: 404 if no author matches
    """
    started = time.perf_counter()
    await latency.simulate(f'searching for books by author "{author}"')

    matches = catalog.find_by_author(author)
    if not matches:
        logger.info(f'No books found by author "{author}"')
        raise NotFoundError(
            f'No books found by author "{author}"',
            author=author,
            booksFound=0,
        )

    logger.info(f'Found {len(matches)} book(s) by author "{author}"')
    return AuthorSearchResponse(
        message=f'Books by author "{author}" retrieved successfully',
        author=author,
        books_found=len(matches),
        books=[BookMatch.from_book(book) for book in matches],
        timestamp=datetime.now(UTC),
        operation_duration=_elapsed(started),
    )


@router.get(
    "/title/{title}",
    response_model=TitleSearchResponse,
    summary="Search books by title",
)
async def search_by_title(
    request: Request,
    title: str,
    catalog: Catalog,
    latency: Latency,
) -> TitleSearchResponse:
    """
    Case-insensitive title search; results ordered by author.

    Raises:
        NotFoundError: 404 if no title matches
    """
    started = time.perf_counter()
    await latency.simulate(f'searching for books with title "{title}"')

    matches = catalog.find_by_title(title)
    if not matches:
        logger.info(f'No books found with title "{title}"')
        raise NotFoundError(
            f'No books found with title "{title}"',
            title=title,
            booksFound=0,
        )

    logger.info(f'Found {len(matches)} book(s) with title "{title}"')
    return TitleSearchResponse(
        message=f'Books with title "{title}" retrieved successfully',
        title=title,
        books_found=len(matches),
        books=[BookMatch.from_book(book) for book in matches],
        timestamp=datetime.now(UTC),
        operation_duration=_elapsed(started),
    )


# =============================================================================
# Reviews
# =============================================================================
@router.get(
    "/review/{isbn}",
    response_model=ReviewListResponse,
    summary="Get the reviews of a book",
)
def get_reviews(request: Request, isbn: str, catalog: Catalog) -> ReviewListResponse:
    """
    Reviews of one book. A book nobody reviewed yields 200 with `{}`.

    Raises:
        NotFoundError: 404 if the book does not exist
    """
    try:
        book = catalog.get_by_id(isbn)
        reviews = catalog.get_reviews(isbn)
    except NotFoundError:
        raise NotFoundError(f"Book with ISBN {isbn} not found")

    if reviews:
        message = f"Reviews for book with ISBN {isbn} retrieved successfully"
    else:
        message = f"No reviews found for book with ISBN {isbn}"

    return ReviewListResponse(
        message=message,
        book_title=book.title,
        reviews=reviews,
        review_count=len(reviews),
    )
