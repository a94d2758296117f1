"""
Error taxonomy shared by the auth core, the stores and the HTTP layer.

Every error carries an ErrorKind tag; api.errors.describe_error() is the only
place that turns a kind into a status code and a public message.
"""
from __future__ import annotations

import enum


class ErrorKind(enum.Enum):
    INVALID_CREDENTIALS = "invalid_credentials"
    UNAUTHORIZED = "unauthorized"
    VALIDATION = "validation"
    PERSISTENCE = "persistence"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class AppError(Exception):
    """Base class for errors raised by this application."""
    kind = ErrorKind.INTERNAL


# Password hashing

class HashingError(AppError):
    """The hashing backend failed or a stored hash could not be parsed."""
    kind = ErrorKind.INTERNAL


class InvalidCredentialsError(AppError):
    kind = ErrorKind.INVALID_CREDENTIALS


# Bearer / access / refresh tokens

class InvalidTokenError(AppError):
    """Any reason a presented token cannot be trusted."""
    kind = ErrorKind.UNAUTHORIZED


class MissingTokenError(InvalidTokenError):
    pass


class InvalidSignatureError(InvalidTokenError):
    pass


class TokenExpiredError(InvalidTokenError):
    pass


class MalformedTokenError(InvalidTokenError):
    pass


class MalformedClaimsError(InvalidTokenError):
    pass


class TokenNotFoundError(InvalidTokenError):
    pass


class TokenRevokedError(InvalidTokenError):
    pass


class UnknownSubjectError(InvalidTokenError):
    """A validly signed token names an account that no longer exists."""


# Storage and collaborators

class PersistenceError(AppError):
    """
    The backing store failed.
    retryable is True for connectivity/timeout failures, False for
    constraint violations and anything else.
    """
    kind = ErrorKind.PERSISTENCE

    def __init__(self, message: str, retryable: bool = False):
        super().__init__(message)
        self.retryable = retryable


class ForbiddenError(AppError):
    kind = ErrorKind.FORBIDDEN


class AccountNotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND


class PostNotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND


class EmailTakenError(AppError):
    kind = ErrorKind.CONFLICT
