"""
Catalog Store

Holds the fixed set of books and the reviews attached to them.

The catalog is seeded once from DEFAULT_BOOKS; books are never created or
deleted afterwards, only their review maps change. The store is the only
owner of the book records: every read hands out a copy, so callers can
never mutate the catalog behind its back.

Writes go through a lock, which keeps the review maps consistent when
handlers run concurrently. Two writers on the same (book, user) pair still
race; the last write wins.
"""

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field

from bookreview.exceptions import NotFoundError

logger = logging.getLogger(__name__)


@dataclass
class Book:
    """A catalog entry. `reviews` maps username to review text."""

    isbn: int
    author: str
    title: str
    reviews: dict[str, str] = field(default_factory=dict)

    def copy(self) -> "Book":
        return Book(
            isbn=self.isbn,
            author=self.author,
            title=self.title,
            reviews=dict(self.reviews),
        )


# Seed data: (isbn, author, title)
DEFAULT_BOOKS: list[tuple[int, str, str]] = [
    (1, "Chinua Achebe", "Things Fall Apart"),
    (2, "Hans Christian Andersen", "Fairy tales"),
    (3, "Dante Alighieri", "The Divine Comedy"),
    (4, "Unknown", "The Epic Of Gilgamesh"),
    (5, "Unknown", "The Book Of Job"),
    (6, "Unknown", "One Thousand and One Nights"),
    (7, "Unknown", "Njál's Saga"),
    (8, "Jane Austen", "Pride and Prejudice"),
    (9, "Honoré de Balzac", "Le Père Goriot"),
    (10, "Samuel Beckett", "Molloy, Malone Dies, The Unnamable, the trilogy"),
]


def _normalize_isbn(isbn: int | str) -> int | None:
    """
    Turn a path identifier into a catalog key.

    Identifiers arrive as strings from the URL. Only the canonical spelling
    of a key names a book: "1" does, while "01", " 1" and "¹" do not.
    Anything else maps to None (not found).
    """
    if isinstance(isbn, int):
        return isbn
    text = str(isbn)
    if not (text.isascii() and text.isdigit()):
        return None
    key = int(text)
    if str(key) != text:
        return None
    return key


def _sort_key(value: str) -> tuple[str, str]:
    return (value.casefold(), value)


class CatalogStore:
    """In-memory catalog keyed by numeric ISBN."""

    def __init__(self, books: Iterable[tuple[int, str, str]] = DEFAULT_BOOKS) -> None:
        self._books: dict[int, Book] = {
            isbn: Book(isbn=isbn, author=author, title=title)
            for isbn, author, title in books
        }
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._books)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------
    def get_all(self) -> dict[int, Book]:
        """Snapshot of the whole catalog."""
        with self._lock:
            return {isbn: book.copy() for isbn, book in self._books.items()}

    def get_by_id(self, isbn: int | str) -> Book:
        """
        Exact key lookup.

        Raises:
            NotFoundError: If no book has this ISBN
        """
        with self._lock:
            return self._require(isbn).copy()

    def find_by_author(self, author: str) -> list[Book]:
        """
        Case-insensitive substring match on the author.

        Results are ordered by title. An empty list means no match.
        """
        needle = author.casefold()
        with self._lock:
            matches = [
                book.copy()
                for book in self._books.values()
                if needle in book.author.casefold()
            ]
        matches.sort(key=lambda b: _sort_key(b.title))
        return matches

    def find_by_title(self, title: str) -> list[Book]:
        """
        Case-insensitive substring match on the title.

        Results are ordered by author. An empty list means no match.
        """
        needle = title.casefold()
        with self._lock:
            matches = [
                book.copy()
                for book in self._books.values()
                if needle in book.title.casefold()
            ]
        matches.sort(key=lambda b: _sort_key(b.author))
        return matches

    def get_reviews(self, isbn: int | str) -> dict[str, str]:
        """
        Reviews of one book; an empty dict when nobody has reviewed it.

        Raises:
            NotFoundError: If the book does not exist
        """
        with self._lock:
            return dict(self._require(isbn).reviews)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------
    def put_review(self, isbn: int | str, username: str, text: str) -> None:
        """
        Create or overwrite the review `username` left on a book.

        The caller is responsible for rejecting empty text.

        Raises:
            NotFoundError: If the book does not exist
        """
        with self._lock:
            book = self._require(isbn)
            if book.reviews is None:
                book.reviews = {}
            book.reviews[username] = text
        logger.info(f"Review by {username} stored on book {book.isbn}")

    def delete_review(self, isbn: int | str, username: str) -> None:
        """
        Remove the review `username` left on a book.

        Raises:
            NotFoundError: If the book does not exist, or the user has no
                review on it
        """
        with self._lock:
            book = self._require(isbn)
            if not book.reviews or username not in book.reviews:
                raise NotFoundError("Review not found for this user")
            del book.reviews[username]
        logger.info(f"Review by {username} deleted from book {book.isbn}")

    def _require(self, isbn: int | str) -> Book:
        key = _normalize_isbn(isbn)
        book = self._books.get(key) if key is not None else None
        if book is None:
            raise NotFoundError("Book not found")
        return book
