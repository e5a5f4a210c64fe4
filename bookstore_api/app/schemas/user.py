"""
Pydantic models for user data.

Registration and login share the ``Credentials`` body.  Both fields
are optional at the schema level so that the service can answer a
missing field with its own error (400 on registration, 401 on login)
instead of a generic validation failure.
"""

from typing import Optional

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    """Username and password submitted by a client."""

    username: Optional[str] = Field(None, example="alice")
    password: Optional[str] = Field(None, example="strongpassword")


class UserRecord(BaseModel):
    """A registered user as held by the credential store.

    Only the password hash is kept; the raw password never leaves the
    request that carried it.
    """

    username: str
    password_hash: str

    def __repr__(self) -> str:
        return f"UserRecord(username={self.username!r})"


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    message: str
    token: str
