"""
Stores Package

Process-local storage for the service. Each store owns its collection and
guards it with a lock; the application creates one instance of each and
hands them to route handlers through dependencies.

- catalog.py: books and their reviews
- users.py: registered usernames and passwords
"""

from bookreview.stores.catalog import DEFAULT_BOOKS, Book, CatalogStore
from bookreview.stores.users import User, UserDirectory

__all__ = [
    "Book",
    "CatalogStore",
    "DEFAULT_BOOKS",
    "User",
    "UserDirectory",
]
