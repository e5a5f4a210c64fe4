"""
Business logic for users.

Users are kept in memory by a ``UserStore`` and disappear when the
process exits.  ``UserService`` validates registrations, hashes
passwords and issues session tokens on login.  The store is handed to
the service so that a persistent backend can replace it without
touching the API handlers.
"""

import logging
import threading
from typing import List, Optional

from ..core.config import Settings, settings
from ..core.errors import ConflictError, InvalidInputError, UnauthorizedError
from ..core.security import create_access_token, hash_password, verify_password
from ..schemas.user import UserRecord

logger = logging.getLogger(__name__)


class UserStore:
    """In-memory list of registered users.

    ``add`` and ``find_by_username`` are the whole interface used by
    :class:`UserService`.  A lock guards the list so that two
    concurrent registrations of the same name cannot both succeed.
    """

    def __init__(self) -> None:
        self._users: List[UserRecord] = []
        self._lock = threading.Lock()

    def add(self, user: UserRecord) -> None:
        """Append a user.  Raises ``ConflictError`` if the name is taken."""
        with self._lock:
            if any(u.username == user.username for u in self._users):
                raise ConflictError("User already exists")
            self._users.append(user)

    def find_by_username(self, username: str) -> Optional[UserRecord]:
        with self._lock:
            for user in self._users:
                if user.username == username:
                    return user
        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)


class UserService:
    """Registration and login."""

    def __init__(self, store: UserStore, app_settings: Optional[Settings] = None) -> None:
        self.store = store
        self.settings = app_settings or settings

    def register(self, username: Optional[str], password: Optional[str]) -> UserRecord:
        """Register a new user.

        Raises ``InvalidInputError`` when either field is empty and
        ``ConflictError`` when the username is already registered.
        """
        if not username or not password:
            raise InvalidInputError("Username and password required")
        if self.store.find_by_username(username) is not None:
            raise ConflictError("User already exists")
        user = UserRecord(
            username=username,
            password_hash=hash_password(password, self.settings.password_hash_iterations),
        )
        # ``add`` re-checks under the lock in case of a concurrent registration.
        self.store.add(user)
        logger.info("Registered user %s", username)
        return user

    def authenticate(self, username: Optional[str], password: Optional[str]) -> Optional[UserRecord]:
        """Return the user if the credentials match, otherwise ``None``."""
        if not username or not password:
            return None
        user = self.store.find_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user

    def login(self, username: Optional[str], password: Optional[str]) -> str:
        """Check credentials and return a fresh session token.

        Unknown users and wrong passwords both raise the same
        ``UnauthorizedError`` so callers cannot tell which one it was.
        """
        user = self.authenticate(username, password)
        if user is None:
            logger.info("Failed login attempt for %s", username)
            raise UnauthorizedError("Invalid credentials")
        token = create_access_token(
            {"sub": user.username},
            expires_delta=self.settings.access_token_expire_minutes * 60,
            secret_key=self.settings.secret_key,
        )
        logger.info("User %s logged in", user.username)
        return token
