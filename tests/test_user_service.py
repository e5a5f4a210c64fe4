import threading

import pytest

from bookstore_api.app.core.config import Settings
from bookstore_api.app.core.errors import ConflictError, InvalidInputError, UnauthorizedError
from bookstore_api.app.core.security import TokenStatus, verify_access_token
from bookstore_api.app.schemas.user import UserRecord
from bookstore_api.app.services.user_service import UserService, UserStore

SECRET = "unit-secret"


@pytest.fixture
def store():
    return UserStore()


@pytest.fixture
def service(store):
    return UserService(store, Settings(secret_key=SECRET, password_hash_iterations=1000))


def test_register_stores_hash_only(service, store):
    service.register("alice", "pw")
    user = store.find_by_username("alice")
    assert user.username == "alice"
    assert user.password_hash != "pw"
    assert "pw" not in repr(user)
    assert len(store) == 1


@pytest.mark.parametrize("username,password", [("", "pw"), ("alice", ""), (None, "pw"), ("alice", None)])
def test_register_requires_both_fields(service, username, password):
    with pytest.raises(InvalidInputError):
        service.register(username, password)


def test_register_duplicate(service):
    service.register("alice", "pw")
    with pytest.raises(ConflictError):
        service.register("alice", "other")


def test_store_add_rejects_duplicate(store):
    store.add(UserRecord(username="alice", password_hash="h"))
    with pytest.raises(ConflictError):
        store.add(UserRecord(username="alice", password_hash="h2"))
    assert store.find_by_username("nobody") is None


def test_login_returns_token_for_user(service):
    service.register("alice", "pw")
    result = verify_access_token(service.login("alice", "pw"), SECRET)
    assert result.status is TokenStatus.VALID
    assert result.username == "alice"


def test_login_failures_are_indistinguishable(service):
    service.register("alice", "pw")
    with pytest.raises(UnauthorizedError) as wrong_password:
        service.login("alice", "wrong")
    with pytest.raises(UnauthorizedError) as unknown_user:
        service.login("nobody", "pw")
    assert wrong_password.value.message == unknown_user.value.message == "Invalid credentials"


def test_store_len_counts_concurrent_adds(store):
    threads = [
        threading.Thread(target=store.add, args=(UserRecord(username=f"user{i}", password_hash="h"),))
        for i in range(20)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(store) == 20
