"""Bookstore API client.

This module defines a small client wrapper around the bookstore catalog
REST API.  The client uses the ``requests`` library internally to make
HTTP calls.

The client exposes high‑level methods for every public route:

* :meth:`get_all_books` – return the whole catalog.
* :meth:`get_book_by_isbn` – fetch a single book by its ISBN.
* :meth:`get_books_by_author` – books whose author matches exactly.
* :meth:`get_books_by_title` – books whose title contains a string.
* :meth:`get_reviews` – the reviews of one book.
* :meth:`register` / :meth:`login` – create an account and obtain a token.
* :meth:`put_review` / :meth:`delete_review` – manage your own review.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is empty and ``error`` is a dictionary
with keys ``status_code`` and ``message``.  After a successful
:meth:`login` the token is kept and sent as ``Authorization: Bearer``
with subsequent requests.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000"

Error = Optional[Dict[str, Any]]


class BookstoreAPI:
    """Client for interacting with the bookstore catalog API."""

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:3000``.
            token: Optional session token obtained earlier from ``/login``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each response.
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Error]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/books``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("error") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request %s %s failed (%s): %s", method, path, status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request %s %s failed: %s", method, path, exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Catalog lookups
    # ------------------------------------------------------------------
    def get_all_books(self) -> Tuple[List[Dict[str, Any]], Error]:
        """Retrieve the whole catalog."""
        data, error = self._request("GET", "/books")
        if error:
            return [], error
        return data or [], None

    def get_book_by_isbn(self, isbn: str) -> Tuple[Optional[Dict[str, Any]], Error]:
        """Retrieve a single book.  A missing book is reported as a 404 error."""
        return self._request("GET", f"/isbn/{quote(str(isbn), safe='')}")

    def get_books_by_author(self, author: str) -> Tuple[List[Dict[str, Any]], Error]:
        data, error = self._request("GET", f"/author/{quote(author, safe='')}")
        if error:
            return [], error
        return data or [], None

    def get_books_by_title(self, title: str) -> Tuple[List[Dict[str, Any]], Error]:
        data, error = self._request("GET", f"/title/{quote(title, safe='')}")
        if error:
            return [], error
        return data or [], None

    def get_reviews(self, isbn: str) -> Tuple[List[Dict[str, Any]], Error]:
        data, error = self._request("GET", f"/review/{quote(str(isbn), safe='')}")
        if error:
            return [], error
        return data.get("reviews", []), None

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------
    def register(self, username: str, password: str) -> Tuple[Optional[Dict[str, Any]], Error]:
        return self._request("POST", "/register", json_body={"username": username, "password": password})

    def login(self, username: str, password: str) -> Tuple[Optional[str], Error]:
        """Log in and remember the returned token for later calls.

        Returns:
            A tuple ``(token, error)``.
        """
        data, error = self._request("POST", "/login", json_body={"username": username, "password": password})
        if error:
            return None, error
        self.token = data.get("token")
        return self.token, None

    # ------------------------------------------------------------------
    # Reviews (require a token)
    # ------------------------------------------------------------------
    def put_review(self, isbn: str, text: str) -> Tuple[List[Dict[str, Any]], Error]:
        """Add or update the logged in user's review.

        Returns:
            A tuple ``(reviews, error)`` with the book's updated reviews.
        """
        data, error = self._request("PUT", f"/review/{quote(str(isbn), safe='')}", json_body={"review": text})
        if error:
            return [], error
        return data.get("reviews", []), None

    def delete_review(self, isbn: str) -> Tuple[List[Dict[str, Any]], Error]:
        data, error = self._request("DELETE", f"/review/{quote(str(isbn), safe='')}")
        if error:
            return [], error
        return data.get("reviews", []), None
