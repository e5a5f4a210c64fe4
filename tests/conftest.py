import json

import pytest
from fastapi.testclient import TestClient

from bookstore_api.app.core.config import Settings
from bookstore_api.app.core.storage import CatalogStore
from bookstore_api.app.main import create_app
from bookstore_api.app.services.user_service import UserStore

SECRET = "test-secret"

SAMPLE_BOOKS = [
    {"isbn": "0001", "title": "Things Fall Apart", "author": "Chinua Achebe", "reviews": []},
    {"isbn": "0002", "title": "Nineteen Eighty-Four", "author": "George Orwell", "reviews": []},
    {"isbn": "0003", "title": "Animal Farm", "author": "George Orwell", "reviews": []},
    {
        "isbn": "0004",
        "title": "Pride and Prejudice",
        "author": "Jane Austen",
        "reviews": [
            {"username": "carol", "review": "Witty."},
            {"username": "dave", "review": "Too long."},
        ],
    },
]


@pytest.fixture
def catalog_path(tmp_path):
    path = tmp_path / "books.json"
    path.write_text(json.dumps(SAMPLE_BOOKS, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def catalog(catalog_path):
    return CatalogStore(str(catalog_path))


@pytest.fixture
def settings(catalog_path, tmp_path):
    return Settings(
        secret_key=SECRET,
        password_hash_iterations=1000,
        catalog_path=str(catalog_path),
        seed_catalog_path=str(tmp_path / "missing-seed.json"),
    )


@pytest.fixture
def user_store():
    return UserStore()


@pytest.fixture
def client(settings, user_store):
    app = create_app(settings, user_store)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_header(client):
    """Register and log in ``bob``; return his Authorization header."""
    client.post("/register", json={"username": "bob", "password": "x"})
    token = client.post("/login", json={"username": "bob", "password": "x"}).json()["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def stored_books(catalog_path):
    """Return a callable reading the catalog file as plain JSON."""

    def _read():
        return json.loads(catalog_path.read_text(encoding="utf-8"))

    return _read
