"""
RefreshTokenStore: issues, resolves and revokes opaque refresh tokens.

Tokens are 32 random bytes, hex encoded. Validity lives only in the
refresh_tokens table: a token is usable while revoked_at is NULL and
now < expires_at.
"""
from __future__ import annotations

from datetime import timedelta
import logging
import secrets
import uuid

from models.base_model import as_utc, utcnow
from models.refresh_token import RefreshToken
from utils.exceptions import TokenExpiredError, TokenNotFoundError, TokenRevokedError

logger = logging.getLogger(__name__)

REFRESH_TOKEN_TTL = timedelta(days=60)
TOKEN_BYTES = 32


def generate_refresh_token() -> str:
    return secrets.token_hex(TOKEN_BYTES)


class RefreshTokenStore:
    def __init__(self, storage, ttl: timedelta = REFRESH_TOKEN_TTL, clock=utcnow):
        self._storage = storage
        self._ttl = ttl
        self._clock = clock

    def issue(self, user_id: uuid.UUID | str) -> RefreshToken:
        """
        Persist a fresh token for user_id.
        A duplicate token value is a fatal PersistenceError, never retried.
        """
        now = self._clock()
        row = RefreshToken(
            token=generate_refresh_token(),
            user_id=str(user_id),
            created_at=now,
            updated_at=now,
            expires_at=now + self._ttl,
            revoked_at=None,
        )
        with self._storage.guard():
            self._storage.new(row)
            self._storage.save()
        logger.info("issued refresh token for user %s", row.user_id)
        return row

    def _lookup(self, token: str) -> RefreshToken | None:
        with self._storage.guard() as session:
            # populate_existing: always reflect the committed row, not a cached copy
            return (
                session.query(RefreshToken)
                .filter(RefreshToken.token == token)
                .populate_existing()
                .first()
            )

    def resolve(self, token: str) -> uuid.UUID:
        row = self._lookup(token)
        if row is None:
            raise TokenNotFoundError("refresh token not found")
        if row.revoked_at is not None:
            raise TokenRevokedError("refresh token revoked")
        if self._clock() >= as_utc(row.expires_at):
            raise TokenExpiredError("refresh token expired")
        return uuid.UUID(row.user_id)

    def revoke(self, token: str) -> None:
        """
        Mark token revoked with one conditional UPDATE.
        Revoking an already revoked token keeps the original revoked_at.
        """
        now = self._clock()
        with self._storage.guard() as session:
            updated = (
                session.query(RefreshToken)
                .filter(RefreshToken.token == token, RefreshToken.revoked_at.is_(None))
                .update(
                    {RefreshToken.revoked_at: now, RefreshToken.updated_at: now},
                    synchronize_session="fetch",
                )
            )
            self._storage.save()
        if updated:
            logger.info("revoked refresh token")
            return
        if self._lookup(token) is None:
            raise TokenNotFoundError("refresh token not found")

    def purge_all(self) -> int:
        with self._storage.guard() as session:
            deleted = session.query(RefreshToken).delete(synchronize_session="fetch")
            self._storage.save()
        logger.warning("purged %d refresh tokens", deleted)
        return deleted
