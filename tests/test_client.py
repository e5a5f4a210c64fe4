import json
from unittest.mock import Mock

import pytest
import requests

from bookstore_client import BookstoreAPI


def make_response(status_code, payload=None):
    response = requests.Response()
    response.status_code = status_code
    if payload is not None:
        response._content = json.dumps(payload).encode("utf-8")
    else:
        response._content = b""
    return response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def api(session):
    return BookstoreAPI(base_url="http://books.test/", session=session)


def test_get_all_books(api, session):
    session.request.return_value = make_response(200, [{"isbn": "1"}])
    books, error = api.get_all_books()
    assert error is None
    assert books == [{"isbn": "1"}]
    kwargs = session.request.call_args.kwargs
    assert kwargs["method"] == "GET"
    assert kwargs["url"] == "http://books.test/books"
    assert "Authorization" not in kwargs["headers"]


def test_path_parameters_are_quoted(api, session):
    session.request.return_value = make_response(200, [])
    api.get_books_by_author("George Orwell")
    assert session.request.call_args.kwargs["url"] == "http://books.test/author/George%20Orwell"
    api.get_books_by_title("a/b")
    assert session.request.call_args.kwargs["url"] == "http://books.test/title/a%2Fb"


def test_http_error_uses_error_message(api, session):
    session.request.return_value = make_response(404, {"error": "Book not found"})
    book, error = api.get_book_by_isbn("nope")
    assert book is None
    assert error == {"status_code": 404, "message": "Book not found"}


def test_connection_error(api, session):
    session.request.side_effect = requests.ConnectionError("refused")
    books, error = api.get_books_by_title("x")
    assert books == []
    assert error["status_code"] is None
    assert "refused" in error["message"]


def test_login_keeps_token_for_review_calls(api, session):
    session.request.return_value = make_response(200, {"message": "Login successful!", "token": "T"})
    token, error = api.login("bob", "x")
    assert (token, error) == ("T", None)
    assert session.request.call_args.kwargs["json"] == {"username": "bob", "password": "x"}

    session.request.return_value = make_response(
        200, {"message": "Review added/updated successfully", "reviews": [{"username": "bob", "review": "great"}]}
    )
    reviews, error = api.put_review("0001", "great")
    kwargs = session.request.call_args.kwargs
    assert kwargs["method"] == "PUT"
    assert kwargs["headers"]["Authorization"] == "Bearer T"
    assert kwargs["json"] == {"review": "great"}
    assert reviews == [{"username": "bob", "review": "great"}]


def test_failed_login_keeps_no_token(api, session):
    session.request.return_value = make_response(401, {"error": "Invalid credentials"})
    token, error = api.login("bob", "wrong")
    assert token is None
    assert error == {"status_code": 401, "message": "Invalid credentials"}
    assert api.token is None


def test_delete_review_and_get_reviews(api, session):
    session.request.return_value = make_response(200, {"message": "Review deleted successfully", "reviews": []})
    reviews, error = BookstoreAPI(base_url="http://books.test", token="T", session=session).delete_review("0001")
    assert (reviews, error) == ([], None)
    assert session.request.call_args.kwargs["method"] == "DELETE"

    session.request.return_value = make_response(200, {"reviews": [{"username": "a", "review": "b"}]})
    reviews, error = api.get_reviews("0001")
    assert reviews == [{"username": "a", "review": "b"}]
