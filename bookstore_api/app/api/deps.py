"""
FastAPI dependencies that hand the request its services.

The services are built once in ``create_app`` and attached to
``app.state``; handlers receive them through ``Depends`` instead of
importing module level singletons.
"""

from fastapi import Request

from ..services.book_service import BookService
from ..services.review_service import ReviewService
from ..services.user_service import UserService


def get_book_service(request: Request) -> BookService:
    return request.app.state.book_service


def get_review_service(request: Request) -> ReviewService:
    return request.app.state.review_service


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service
