"""
Catalog lookup endpoints.

All routes are public and read the catalog fresh from storage.  A
storage failure is answered with 500 and a short error message.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from starlette.concurrency import run_in_threadpool

from bookstore_api.app.api.deps import get_book_service
from bookstore_api.app.core.errors import NotFoundError, StorageError
from bookstore_api.app.schemas.book import Book, ReviewList
from bookstore_api.app.services.book_service import BookService

router = APIRouter()


@router.get("/books", response_model=List[Book], summary="List all books")
async def list_books(service: BookService = Depends(get_book_service)) -> List[Book]:
    """Return the whole catalog in stored order."""
    try:
        return await run_in_threadpool(service.get_all)
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to retrieve books")


@router.get("/isbn/{isbn}", response_model=Book, summary="Get a book by ISBN")
async def get_book_by_isbn(isbn: str, service: BookService = Depends(get_book_service)) -> Book:
    try:
        return await run_in_threadpool(service.get_by_isbn, isbn)
    except NotFoundError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to retrieve book")


@router.get("/author/{author}", response_model=List[Book], summary="Find books by author")
async def get_books_by_author(author: str, service: BookService = Depends(get_book_service)) -> List[Book]:
    """Case-insensitive exact match on the author name."""
    try:
        return await run_in_threadpool(service.get_by_author, author)
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to retrieve books")


@router.get("/title/{title}", response_model=List[Book], summary="Find books by title")
async def get_books_by_title(title: str, service: BookService = Depends(get_book_service)) -> List[Book]:
    """Case-insensitive substring match on the title."""
    try:
        return await run_in_threadpool(service.get_by_title, title)
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to retrieve books")


@router.get("/review/{isbn}", response_model=ReviewList, summary="Get the reviews of a book")
async def get_book_reviews(isbn: str, service: BookService = Depends(get_book_service)) -> ReviewList:
    """Return only the reviews of the book, not its metadata."""
    try:
        reviews = await run_in_threadpool(service.get_reviews, isbn)
    except NotFoundError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to retrieve reviews")
    return ReviewList(reviews=reviews)
