"""Session lifecycle: login, access-token checks, refresh and revocation."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
import logging
import uuid

from models.user import User
from utils.exceptions import AccountNotFoundError, ForbiddenError, InvalidCredentialsError
from utils.security import create_access_token, decode_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TTL = timedelta(hours=1)


@lru_cache(maxsize=1)
def _dummy_password_hash() -> str:
    # verified against when the email is unknown, so both failure paths pay for one argon2 check
    return hash_password("this-account-does-not-exist")


@dataclass(frozen=True)
class LoginResult:
    user: User
    access_token: str
    refresh_token: str


class SessionIssuer:
    def __init__(self, accounts, refresh_tokens, secret: str,
                 access_ttl: timedelta = ACCESS_TOKEN_TTL, reset_allowed: bool = False):
        if not secret:
            raise ValueError("a signing secret is required")
        self.accounts = accounts
        self.refresh_tokens = refresh_tokens
        self._secret = secret
        self.access_ttl = access_ttl
        self._reset_allowed = reset_allowed

    def login(self, email: str, password: str) -> LoginResult:
        """
        Check credentials and open a session.
        Unknown email and wrong password raise the same InvalidCredentialsError.
        """
        try:
            user = self.accounts.find_by_email(email)
        except AccountNotFoundError:
            verify_password(password, _dummy_password_hash())
            logger.info("login rejected: unknown account")
            raise InvalidCredentialsError("Incorrect email or password") from None

        if not verify_password(password, user.password_hash):
            logger.info("login rejected: bad password for user %s", user.id)
            raise InvalidCredentialsError("Incorrect email or password")

        access_token = create_access_token(user.id, self._secret, self.access_ttl)
        refresh = self.refresh_tokens.issue(user.id)
        logger.info("user %s logged in", user.id)
        return LoginResult(user=user, access_token=access_token, refresh_token=refresh.token)

    def authenticate(self, access_token: str) -> uuid.UUID:
        return decode_access_token(access_token, self._secret)

    def refresh(self, refresh_token: str) -> str:
        """Mint a new access token; the refresh token itself is left as is."""
        user_id = self.refresh_tokens.resolve(refresh_token)
        return create_access_token(user_id, self._secret, self.access_ttl)

    def revoke(self, refresh_token: str) -> None:
        self.refresh_tokens.revoke(refresh_token)

    def purge_all(self) -> int:
        if not self._reset_allowed:
            raise ForbiddenError("Reset is only allowed in development")
        return self.refresh_tokens.purge_all()
