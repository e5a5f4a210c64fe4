"""
Top‑level router.

Aggregates the domain routers.  Paths are served at the root of the
application (``/books``, ``/review/{isbn}`` and so on), matching the
routes existing clients already call.
"""

from fastapi import APIRouter

from .endpoints import books, home, reviews, users

router = APIRouter()

router.include_router(home.router, tags=["home"])
router.include_router(books.router, tags=["books"])
router.include_router(reviews.router, tags=["reviews"])
router.include_router(users.router, tags=["users"])
