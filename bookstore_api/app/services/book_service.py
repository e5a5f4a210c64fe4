"""
Read-only catalog queries.

Every call reloads the catalog from storage and filters it in memory.
Lookups by author are case-insensitive exact matches, lookups by title
are case-insensitive substring matches.
"""

from typing import List, Optional

from ..core.errors import NotFoundError
from ..core.storage import CatalogStore
from ..schemas.book import Book, Review


class BookService:
    """Queries over the book catalog."""

    def __init__(self, catalog: CatalogStore) -> None:
        self.catalog = catalog

    def get_all(self) -> List[Book]:
        return self.catalog.load_all()

    def get_by_isbn(self, isbn: str) -> Book:
        """Return the book with exactly this ISBN.

        Raises ``NotFoundError`` if no book matches.
        """
        for book in self.catalog.load_all():
            if book.isbn == isbn:
                return book
        raise NotFoundError("Book not found")

    def get_by_author(self, author: str) -> List[Book]:
        wanted = author.lower()
        return [book for book in self.catalog.load_all() if book.author.lower() == wanted]

    def get_by_title(self, title: str) -> List[Book]:
        wanted = title.lower()
        return [book for book in self.catalog.load_all() if wanted in book.title.lower()]

    def get_reviews(self, isbn: str) -> List[Review]:
        return self.get_by_isbn(isbn).reviews

    def filter_by_isbn(self, isbn: Optional[str]) -> List[Book]:
        """Books for the HTML listing, optionally narrowed to one ISBN."""
        books = self.catalog.load_all()
        query = (isbn or "").strip()
        if not query:
            return books
        return [book for book in books if book.isbn == query]
