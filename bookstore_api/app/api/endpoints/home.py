"""
HTML listing of the catalog for browser access.

``GET /`` renders every book, or only the book whose ISBN is given in
the ``isbn`` query parameter.  Book fields are escaped before they are
placed in the page.
"""

import html
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool

from bookstore_api.app.api.deps import get_book_service
from bookstore_api.app.core.errors import StorageError
from bookstore_api.app.schemas.book import Book
from bookstore_api.app.services.book_service import BookService

router = APIRouter()

PAGE_TEMPLATE = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Book List</title>
  </head>
  <body>
    <h1>{heading}</h1>
    {empty_state}
    <ul>{items}</ul>
  </body>
</html>
"""


def render_book_list(books: List[Book], isbn_query: str) -> str:
    items = "".join(
        "<li><strong>{title}</strong> by {author} (ISBN: {isbn}) - Reviews: {count}</li>".format(
            title=html.escape(book.title),
            author=html.escape(book.author),
            isbn=html.escape(book.isbn),
            count=len(book.reviews),
        )
        for book in books
    )
    query = html.escape(isbn_query)
    heading = f"Books for ISBN: {query}" if isbn_query else "All Books"
    empty_state = "" if items else f"<p>No books found for ISBN: {query}</p>"
    return PAGE_TEMPLATE.format(heading=heading, empty_state=empty_state, items=items)


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def home(
    isbn: Optional[str] = Query(None),
    service: BookService = Depends(get_book_service),
):
    try:
        books = await run_in_threadpool(service.filter_by_isbn, isbn)
    except StorageError:
        return PlainTextResponse("Failed to retrieve books", status_code=500)
    return HTMLResponse(render_book_list(books, (isbn or "").strip()))
