"""
API endpoints for writing book reviews.

Both routes require a bearer token.  The username proven by the token
is the owner of the review: a user can only add, change or remove
their own review.  Reading reviews is public and lives with the other
catalog lookups in ``books``.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from starlette.concurrency import run_in_threadpool

from bookstore_api.app.api.deps import get_review_service
from bookstore_api.app.core.errors import NotFoundError, StorageError
from bookstore_api.app.core.security import get_current_username
from bookstore_api.app.schemas.book import ReviewMutationResult, ReviewUpdate
from bookstore_api.app.services.review_service import ReviewService

router = APIRouter()


@router.put(
    "/review/{isbn}",
    response_model=ReviewMutationResult,
    summary="Add or update your review",
)
async def put_review(
    isbn: str,
    data: ReviewUpdate,
    username: str = Depends(get_current_username),
    service: ReviewService = Depends(get_review_service),
) -> ReviewMutationResult:
    """Create the caller's review of a book, or replace its text.

    The review keeps its position in the list when it is updated.
    """
    try:
        reviews = await run_in_threadpool(service.upsert_review, isbn, username, data.review)
    except NotFoundError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update review")
    return ReviewMutationResult(message="Review added/updated successfully", reviews=reviews)


@router.delete(
    "/review/{isbn}",
    response_model=ReviewMutationResult,
    summary="Delete your review",
)
async def delete_review(
    isbn: str,
    username: str = Depends(get_current_username),
    service: ReviewService = Depends(get_review_service),
) -> ReviewMutationResult:
    """Remove the caller's review.  Reviews by other users are untouched."""
    try:
        reviews = await run_in_threadpool(service.delete_review, isbn, username)
    except NotFoundError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete review")
    return ReviewMutationResult(message="Review deleted successfully", reviews=reviews)
