import json
import os
import stat

import pytest

from bookstore_api.app.core.errors import StorageError
from bookstore_api.app.core.storage import CatalogStore
from bookstore_api.app.schemas.book import Book, Review


def test_load_all_preserves_order(catalog):
    books = catalog.load_all()
    assert [b.isbn for b in books] == ["0001", "0002", "0003", "0004"]
    assert books[3].reviews[0] == Review(username="carol", review="Witty.")


def test_load_missing_file_raises_storage_error(tmp_path):
    store = CatalogStore(str(tmp_path / "nope.json"))
    with pytest.raises(StorageError):
        store.load_all()


@pytest.mark.parametrize("content", ["{not json", '{"isbn": "1"}', '[{"title": "no isbn"}]'])
def test_load_bad_content_raises_storage_error(tmp_path, content):
    path = tmp_path / "books.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(StorageError):
        CatalogStore(str(path)).load_all()


def test_save_all_keeps_field_names_and_extra_keys(tmp_path):
    path = tmp_path / "books.json"
    path.write_text(
        json.dumps([{"isbn": "9", "title": "T", "author": "A", "reviews": [], "year": 1950}]),
        encoding="utf-8",
    )
    store = CatalogStore(str(path))
    books = store.load_all()
    books[0].reviews.append(Review(username="u", review="r"))
    store.save_all(books)

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw == [
        {"isbn": "9", "title": "T", "author": "A", "reviews": [{"username": "u", "review": "r"}], "year": 1950}
    ]
    # No temporary files left behind.
    assert [p.name for p in tmp_path.iterdir()] == ["books.json"]


def test_save_all_into_missing_directory_raises_storage_error(tmp_path):
    store = CatalogStore(str(tmp_path / "missing" / "books.json"))
    with pytest.raises(StorageError):
        store.save_all([Book(isbn="1", title="T", author="A")])


def test_ensure_exists_copies_seed(tmp_path):
    seed = tmp_path / "seed.json"
    seed.write_text(json.dumps([{"isbn": "1", "title": "T", "author": "A", "reviews": []}]), encoding="utf-8")
    store = CatalogStore(str(tmp_path / "data" / "books.json"))
    store.ensure_exists(str(seed))
    assert [b.isbn for b in store.load_all()] == ["1"]


def test_ensure_exists_without_seed_writes_empty_catalog(tmp_path):
    store = CatalogStore(str(tmp_path / "books.json"))
    store.ensure_exists(str(tmp_path / "missing-seed.json"))
    assert store.load_all() == []


def test_ensure_exists_leaves_existing_catalog(catalog, stored_books, tmp_path):
    before = stored_books()
    catalog.ensure_exists(None)
    assert stored_books() == before


@pytest.mark.parametrize("mode", [0o644, 0o664, 0o600])
def test_save_all_keeps_file_mode(catalog, catalog_path, mode):
    os.chmod(catalog_path, mode)
    catalog.save_all(catalog.load_all())
    assert stat.S_IMODE(os.stat(catalog_path).st_mode) == mode


def test_save_all_new_file_follows_umask(tmp_path):
    path = tmp_path / "books.json"
    old_umask = os.umask(0o022)
    try:
        CatalogStore(str(path)).save_all([])
    finally:
        os.umask(old_umask)
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o644
