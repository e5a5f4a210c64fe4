"""
Security helpers for password hashing and session tokens.

Session tokens are JSON Web Tokens signed with HMAC‑SHA256 and
base64url encoded.  A token embeds the username in the ``sub`` claim
and an absolute expiration timestamp in ``exp``.  Nothing is stored
server side: a token is valid when its signature checks out and its
``exp`` lies in the future.  There is no revocation.

Passwords are hashed with PBKDF2‑HMAC‑SHA256 and a random salt.  The
iteration count is stored alongside the hash so the cost factor can be
raised without invalidating existing hashes.
"""

import base64
import binascii
import enum
import hashlib
import hmac
import json
import os
import time
from typing import Any, Dict, NamedTuple, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings

HASH_SCHEME = "pbkdf2_sha256"


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    """Compute HMAC‑SHA256 signature of a message using the given secret."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


class TokenStatus(str, enum.Enum):
    VALID = "valid"
    INVALID = "invalid"
    EXPIRED = "expired"


class TokenVerification(NamedTuple):
    """Outcome of :func:`verify_access_token`.

    ``payload`` is only set when ``status`` is ``TokenStatus.VALID``.
    """

    status: TokenStatus
    payload: Optional[Dict[str, Any]] = None

    @property
    def username(self) -> Optional[str]:
        return self.payload.get("sub") if self.payload else None


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[int] = None,
    secret_key: Optional[str] = None,
) -> str:
    """Create a signed JWT token with the given payload.

    The payload is extended with an ``exp`` field holding the
    expiration time as a UNIX timestamp.  Clients send the token back
    in the ``Authorization`` header as ``Bearer <token>``.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (e.g. ``{"sub": "alice"}``).
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.
    secret_key : Optional[str]
        Signing key.  Defaults to ``settings.secret_key``.

    Returns
    -------
    str
        A signed token of the form ``header.payload.signature``.
    """
    to_encode = data.copy()
    exp_seconds = expires_delta if expires_delta is not None else settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + exp_seconds
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature = _sign(signing_input, secret_key or settings.secret_key)
    return f"{header_b64}.{payload_b64}.{_b64_url_encode(signature)}"


def verify_access_token(token: str, secret_key: Optional[str] = None) -> TokenVerification:
    """Verify a token and classify the result.

    The signature is checked with a constant‑time comparison before the
    payload is trusted.  A token whose ``exp`` is not strictly in the
    future is reported as ``EXPIRED``; anything malformed or wrongly
    signed is ``INVALID``.
    """
    parts = token.split(".") if token else []
    if len(parts) != 3:
        return TokenVerification(TokenStatus.INVALID)
    header_b64, payload_b64, signature_b64 = parts
    try:
        header = json.loads(_b64_url_decode(header_b64).decode("utf-8"))
        actual_sig = _b64_url_decode(signature_b64)
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return TokenVerification(TokenStatus.INVALID)
    if not isinstance(header, dict) or header.get("alg") != "HS256":
        return TokenVerification(TokenStatus.INVALID)

    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    expected_sig = _sign(signing_input, secret_key or settings.secret_key)
    if not hmac.compare_digest(expected_sig, actual_sig):
        return TokenVerification(TokenStatus.INVALID)

    try:
        payload = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return TokenVerification(TokenStatus.INVALID)
    if not isinstance(payload, dict) or not payload.get("sub"):
        return TokenVerification(TokenStatus.INVALID)
    try:
        expires_at = int(payload["exp"])
    except (KeyError, TypeError, ValueError):
        return TokenVerification(TokenStatus.INVALID)
    if expires_at <= int(time.time()):
        return TokenVerification(TokenStatus.EXPIRED)
    return TokenVerification(TokenStatus.VALID, payload)


def decode_access_token(token: str, secret_key: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """Return the payload of a valid token, otherwise ``None``."""
    return verify_access_token(token, secret_key).payload


security = HTTPBearer(auto_error=False)


def get_current_username(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """Dependency that returns the username proven by the bearer token.

    The token is the second word of the ``Authorization`` header,
    whatever the scheme word is.  A request without one is rejected
    with 401.  A token that is malformed, tampered with or expired is
    rejected with 403.
    The signing key comes from the settings attached to the running
    application.
    """
    if credentials is not None and credentials.credentials:
        token = credentials.credentials
    else:
        # HTTPBearer ignores other schemes such as "Token abc".
        parts = request.headers.get("Authorization", "").split()
        token = parts[1] if len(parts) > 1 else None
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    app_settings = getattr(request.app.state, "settings", settings)
    result = verify_access_token(token, app_settings.secret_key)
    if result.status is TokenStatus.EXPIRED:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Token expired")
    if result.status is not TokenStatus.VALID:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")
    return result.username


def hash_password(password: str, iterations: Optional[int] = None) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    A 16‑byte random salt is generated for each password.  The result
    has the form ``pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>``.
    """
    rounds = iterations or settings.password_hash_iterations
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
    return f"{HASH_SCHEME}${rounds}${salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored hash string.

    Recomputes the PBKDF2 digest with the stored salt and iteration
    count and compares it in constant time.  A malformed stored value
    never verifies.
    """
    try:
        scheme, rounds, salt_hex, hash_hex = hashed_password.split("$")
        if scheme != HASH_SCHEME:
            return False
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
        dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, int(rounds))
    except (AttributeError, ValueError):
        return False
    return hmac.compare_digest(dk, stored_hash)
