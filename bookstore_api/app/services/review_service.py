"""
Business logic for book reviews.

A user owns at most one review per book.  Writing a review a second
time replaces the text in place; deleting removes only the caller's
own review.  Every mutation runs as a critical section over the
catalog: the store's lock is held from loading the catalog until the
updated catalog has been written back.

The service trusts the username it is given.  Authentication happens
in the API layer before the service is called.
"""

import logging
from typing import List

from ..core.errors import NotFoundError
from ..core.storage import CatalogStore
from ..schemas.book import Book, Review

logger = logging.getLogger(__name__)


def _find_book(books: List[Book], isbn: str) -> Book:
    for book in books:
        if book.isbn == isbn:
            return book
    raise NotFoundError("Book not found")


class ReviewService:
    """Create, update and delete reviews."""

    def __init__(self, catalog: CatalogStore) -> None:
        self.catalog = catalog

    def upsert_review(self, isbn: str, username: str, text: str) -> List[Review]:
        """Add the user's review or replace its text.

        Returns the book's updated review list.  Raises
        ``NotFoundError`` if the book does not exist.
        """
        with self.catalog.lock:
            books = self.catalog.load_all()
            book = _find_book(books, isbn)
            existing = next((r for r in book.reviews if r.username == username), None)
            if existing is not None:
                existing.review = text
                action = "updated"
            else:
                book.reviews.append(Review(username=username, review=text))
                action = "added"
            self.catalog.save_all(books)
        logger.info("User %s %s review for book %s", username, action, isbn)
        return book.reviews

    def delete_review(self, isbn: str, username: str) -> List[Review]:
        """Remove the user's review of a book.

        Returns the remaining reviews in their original order.  Raises
        ``NotFoundError`` if the book or the user's review is missing.
        """
        with self.catalog.lock:
            books = self.catalog.load_all()
            book = _find_book(books, isbn)
            index = next((i for i, r in enumerate(book.reviews) if r.username == username), None)
            if index is None:
                raise NotFoundError("Review not found")
            del book.reviews[index]
            self.catalog.save_all(books)
        logger.info("User %s deleted review for book %s", username, isbn)
        return book.reviews
