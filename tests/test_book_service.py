import pytest

from bookstore_api.app.core.errors import NotFoundError
from bookstore_api.app.services.book_service import BookService


@pytest.fixture
def service(catalog):
    return BookService(catalog)


def test_get_all(service):
    assert [b.isbn for b in service.get_all()] == ["0001", "0002", "0003", "0004"]


def test_get_by_isbn_returns_that_book(service):
    for book in service.get_all():
        assert service.get_by_isbn(book.isbn) == book


def test_get_by_isbn_unknown(service):
    with pytest.raises(NotFoundError, match="Book not found"):
        service.get_by_isbn("doesnotexist")


def test_get_by_author_is_case_insensitive_exact_match(service):
    assert [b.isbn for b in service.get_by_author("GEORGE ORWELL")] == ["0002", "0003"]
    assert service.get_by_author("Orwell") == []


def test_get_by_title_is_case_insensitive_substring(service):
    assert [b.isbn for b in service.get_by_title("FARM")] == ["0003"]
    assert [b.isbn for b in service.get_by_title("a")] == ["0001", "0003", "0004"]


def test_get_reviews(service):
    assert [r.username for r in service.get_reviews("0004")] == ["carol", "dave"]
    with pytest.raises(NotFoundError):
        service.get_reviews("9999")


def test_filter_by_isbn(service):
    assert len(service.filter_by_isbn(None)) == 4
    assert len(service.filter_by_isbn("   ")) == 4
    assert [b.isbn for b in service.filter_by_isbn(" 0002 ")] == ["0002"]
    assert service.filter_by_isbn("nope") == []
