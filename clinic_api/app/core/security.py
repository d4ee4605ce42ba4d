"""
Security helpers for password hashing and JWT authentication.

Tokens are compact JWTs (``header.payload.signature``) signed with
HMAC-SHA256 and base64url encoded without padding.  They embed the
account id, username and role, an issue time (``iat``) and an
expiration timestamp (``exp``).  Nothing is stored server side, so a
token stays valid until it expires; there is no refresh.

Passwords are hashed with PBKDF2-HMAC-SHA256 and a random per-password
salt, stored as ``salthex$hashhex``.

The FastAPI dependencies at the bottom of the module implement access
control: ``get_current_user`` authenticates the bearer token and
``require_roles`` is applied per route to enforce the caller's role.
"""

import base64
import hashlib
import hmac
import json
import os
import time
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings
from .errors import ExpiredTokenError, ForbiddenError, InvalidTokenError, UnauthorizedError

PBKDF2_ITERATIONS = 100_000


def _b64_url_encode(data: bytes) -> str:
    """Base64-url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64-url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(
    claims: Dict[str, Any],
    secret: str,
    expires_minutes: int,
    now: Optional[float] = None,
) -> str:
    """Create a signed JWT carrying ``claims``.

    Parameters
    ----------
    claims : dict
        Identity claims, typically ``{"sub", "id", "username", "role"}``.
    secret : str
        HMAC signing key.
    expires_minutes : int
        Lifetime of the token.
    now : Optional[float]
        Issue time as a UNIX timestamp.  Defaults to the current time.

    Returns
    -------
    str
        A token to be sent as ``Authorization: Bearer <token>``.
    """
    issued_at = int(now if now is not None else time.time())
    to_encode = dict(claims)
    to_encode["iat"] = issued_at
    to_encode["exp"] = issued_at + expires_minutes * 60
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, secret))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str, secret: str, now: Optional[float] = None) -> Dict[str, Any]:
    """Verify a token and return its claims.

    Raises
    ------
    InvalidTokenError
        If the token is malformed, uses another algorithm or its
        signature does not match.
    ExpiredTokenError
        If the signature is valid but ``exp`` lies in the past.
    """
    parts = token.split(".")
    if len(parts) != 3:
        raise InvalidTokenError()
    header_b64, payload_b64, signature_b64 = parts
    try:
        header = json.loads(_b64_url_decode(header_b64))
        actual_sig = _b64_url_decode(signature_b64)
    except (ValueError, TypeError) as e:
        raise InvalidTokenError() from e
    if not isinstance(header, dict) or header.get("alg") != "HS256":
        raise InvalidTokenError()

    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    # Constant-time comparison to prevent timing attacks
    if not hmac.compare_digest(_sign(signing_input, secret), actual_sig):
        raise InvalidTokenError()

    try:
        payload = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
        expires_at = int(payload["exp"])
    except (ValueError, TypeError, KeyError) as e:
        raise InvalidTokenError() from e
    current = now if now is not None else time.time()
    if current > expires_at:
        raise ExpiredTokenError()
    return payload


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2-HMAC with SHA-256 and a fresh 16-byte salt."""
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Check a plain password against a stored ``salthex$hashhex`` string."""
    if not hashed_password or "$" not in hashed_password:
        return False
    salt_hex, hash_hex = hashed_password.split("$", 1)
    try:
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


# ---------------------------------------------------------------------------
# Access control dependencies
# ---------------------------------------------------------------------------

security = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Authenticate the bearer token of the current request.

    A missing token and an invalid or expired one all yield 401.  On
    success the decoded claims are attached to ``request.state.user``
    and returned.
    """
    if credentials is None:
        raise UnauthorizedError("Token missing")
    claims = decode_access_token(credentials.credentials, settings.secret_key)
    request.state.user = claims
    return claims


def require_roles(*roles: str) -> Callable[..., Dict[str, Any]]:
    """Dependency factory allowing only callers whose role is in ``roles``.

    Use as ``Depends(require_roles("admin"))`` on each admin route.
    """

    def _role_dependency(current_user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
        if current_user.get("role") not in roles:
            raise ForbiddenError()
        return current_user

    return _role_dependency


require_admin = require_roles("admin")
