"""
Opaque refresh tokens.

A refresh token is 32 random bytes, hex encoded, stored server side with an
expiry and a nullable revocation time. Unlike access tokens it carries no
claims: every use is checked against the store.
"""
from __future__ import annotations

import logging
import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Tuple

from utils.exceptions import RandomSourceError, TokenExpired, TokenNotFound, TokenRevoked

REFRESH_TOKEN_BYTES = 32
DEFAULT_REFRESH_TOKEN_EXPIRES = timedelta(days=60)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything we store is UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def generate_refresh_token() -> str:
    """Return 256 bits from the OS CSPRNG as 64 hex characters."""
    try:
        return secrets.token_hex(REFRESH_TOKEN_BYTES)
    except NotImplementedError as exc:
        raise RandomSourceError("No secure random source available") from exc


class RefreshTokenManager:
    """
    Issues, validates and revokes refresh tokens against a store exposing
    create_refresh_token / get_refresh_token / revoke_refresh_token
    (models.db_storage.DBStorage).

    Store errors are not caught: a uniqueness violation on insert or a failed
    commit reaches the caller as-is.
    """

    def __init__(
        self,
        store,
        expires_in: timedelta = DEFAULT_REFRESH_TOKEN_EXPIRES,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store
        self.expires_in = expires_in
        self.clock = clock

    def issue(self, user_id) -> Tuple[str, object]:
        now = self.clock()
        token = generate_refresh_token()
        record = self.store.create_refresh_token(
            token=token,
            user_id=str(user_id),
            expires_at=now + self.expires_in,
            created_at=now,
        )
        return token, record

    def validate(self, token: str) -> uuid.UUID:
        """Return the owner of an active token.

        Order of checks: unknown, expired, revoked. Revocation takes effect at
        the instant it is recorded.
        """
        record = self.store.get_refresh_token(token)
        if record is None:
            raise TokenNotFound("Refresh token not found")

        now = self.clock()
        if now > _as_utc(record.expires_at):
            raise TokenExpired("Refresh token expired")
        if record.revoked_at is not None and now >= _as_utc(record.revoked_at):
            raise TokenRevoked("Refresh token revoked")

        return uuid.UUID(str(record.user_id))

    def revoke(self, token: str):
        """Mark a token revoked. Revoking twice keeps the first revocation time."""
        record = self.store.revoke_refresh_token(token, self.clock())
        if record is None:
            raise TokenNotFound("Refresh token not found")
        logging.info("Refresh token revoked for user %s", record.user_id)
        return record
