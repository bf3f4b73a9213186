"""
security helpers:
- Argon2 password hashing via argon2-cffi
- JWT access token creation/verification via PyJWT
- Authorization header parsing (Bearer / ApiKey schemes)
"""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import (
    HashingError as Argon2HashingError,
    InvalidHashError,
    VerificationError,
    VerifyMismatchError,
)

from utils.exceptions import (
    EmptyToken,
    HashingError,
    InvalidHashFormat,
    InvalidSignature,
    InvalidToken,
    MalformedSubject,
    MissingHeader,
    MissingScheme,
    TokenExpired,
)

DEFAULT_ISSUER = "chirpy"
JWT_ALGORITHM = "HS256"

BEARER_SCHEME = "Bearer"
API_KEY_SCHEME = "ApiKey"

# argon2id with the library defaults (time_cost, memory_cost, parallelism)
ph = PasswordHasher()


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2id
    """
    try:
        return ph.hash(password)
    except Argon2HashingError as exc:
        raise HashingError("Could not hash password") from exc


def verify_password(password: str, password_hash: str) -> bool:
    """ Verify a plaintext password against an argon2 hash.

    A wrong password returns False; a hash that cannot be parsed raises
    InvalidHashFormat.
    """
    try:
        return ph.verify(password_hash, password)
    except VerifyMismatchError:
        return False
    except (InvalidHashError, VerificationError, ValueError) as exc:
        # ValueError covers hashes that are not ASCII
        raise InvalidHashFormat("Malformed password hash") from exc


def password_needs_rehash(password_hash: str) -> bool:
    """True if the hash was made with parameters other than the current ones."""
    try:
        return ph.check_needs_rehash(password_hash)
    except (InvalidHashError, ValueError) as exc:
        raise InvalidHashFormat("Malformed password hash") from exc


def _now() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(
    user_id: uuid.UUID | str,
    secret: str,
    expires_in: timedelta,
    issuer: str = DEFAULT_ISSUER,
) -> str:
    """Sign a short-lived access token whose subject is the user id.

    exp keeps its fractional seconds so sub-second lifetimes hold exactly.
    """
    now = _now()
    payload = {
        "iss": issuer,
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": (now + expires_in).timestamp(),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def validate_access_token(token: str, secret: str, issuer: str = DEFAULT_ISSUER) -> uuid.UUID:
    """
    Verify the signature of an access token, then its claims, and return the
    subject as a UUID. Nothing is looked up server side: a valid signature
    inside the expiry window is enough.
    """
    try:
        decoded = jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            issuer=issuer,
            # PyJWT compares exp in whole seconds; expiry is checked below
            options={"require": ["exp", "iat", "iss", "sub"], "verify_exp": False},
        )
    except jwt.InvalidSignatureError as exc:
        raise InvalidSignature("Invalid token signature") from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidToken(f"Invalid token: {exc}") from exc

    try:
        expires_at = float(decoded["exp"])
    except (ValueError, TypeError) as exc:
        raise InvalidToken("Invalid token: exp is not a number") from exc
    # valid while now <= exp
    if _now().timestamp() > expires_at:
        raise TokenExpired("Token expired")

    try:
        return uuid.UUID(decoded["sub"])
    except (ValueError, TypeError, AttributeError) as exc:
        raise MalformedSubject("Token subject is not a user id") from exc


def _get_authorization_credential(header_value: str | None, scheme: str) -> str:
    if not header_value:
        raise MissingHeader("No authorization header")
    if not header_value.startswith(scheme):
        raise MissingScheme(f"No `{scheme}` prefix found")

    remainder = header_value[len(scheme):]
    # "Bearerabc" is not the Bearer scheme
    if remainder and not remainder[0].isspace():
        raise MissingScheme(f"No `{scheme}` prefix found")

    credential = remainder.strip()
    if not credential:
        raise EmptyToken("No token found")
    return credential


def get_bearer_token(header_value: str | None) -> str:
    """Return the token from an `Authorization: Bearer <token>` header value."""
    return _get_authorization_credential(header_value, BEARER_SCHEME)


def get_api_key(header_value: str | None) -> str:
    """Return the key from an `Authorization: ApiKey <key>` header value."""
    return _get_authorization_credential(header_value, API_KEY_SCHEME)
