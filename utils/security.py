"""
security helpers:
- Argon2 password hashing via argon2-cffi
- access token creation/verification via PyJWT (HS256)

Neither helper touches the database or Flask; callers pass the secret and TTL.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import jwt
from argon2 import PasswordHasher
from argon2 import exceptions as argon2_exc

from utils.exceptions import (
    HashingError,
    InvalidSignatureError,
    MalformedClaimsError,
    MalformedTokenError,
    TokenExpiredError,
)

JWT_ISSUER = "chirpy"
JWT_ALGORITHM = "HS256"

ph = PasswordHasher()


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2id (salted, self-describing).
    """
    try:
        return ph.hash(password)
    except argon2_exc.HashingError as exc:
        raise HashingError("argon2 failed to hash password") from exc


def verify_password(password: str, password_hash: str) -> bool:
    """ Verify a plaintext password against an Argon2 hash.
    Returns False on mismatch; raises HashingError if the hash is unusable.
    """
    try:
        return ph.verify(password_hash, password)
    except argon2_exc.VerifyMismatchError:
        return False
    except argon2_exc.InvalidHashError as exc:
        raise HashingError("stored password hash is malformed") from exc
    except argon2_exc.VerificationError as exc:
        raise HashingError("argon2 failed to verify password") from exc


def _now() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(user_id: uuid.UUID | str, secret: str, ttl: timedelta) -> str:
    """
    Mint a signed access token for user_id that expires ttl after now.
    """
    issued_at = _now()
    payload = {
        "iss": JWT_ISSUER,
        "sub": str(user_id),
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + ttl).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str, secret: str) -> uuid.UUID:
    """
    Verify signature, expiry and claims of an access token and return its subject.
    No leeway is granted on expiry.
    """
    try:
        decoded = jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            issuer=JWT_ISSUER,
            options={"require": ["iss", "sub", "iat", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenExpiredError("token expired") from exc
    # InvalidSignatureError subclasses DecodeError, so it must come first
    except jwt.InvalidSignatureError as exc:
        raise InvalidSignatureError("token signature mismatch") from exc
    except jwt.DecodeError as exc:
        raise MalformedTokenError("token could not be decoded") from exc
    except jwt.InvalidTokenError as exc:
        raise MalformedClaimsError(f"invalid claims: {exc}") from exc

    try:
        return uuid.UUID(decoded["sub"])
    except (TypeError, ValueError) as exc:
        raise MalformedClaimsError("subject is not a user id") from exc
