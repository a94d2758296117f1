from __future__ import annotations
from functools import wraps
from flask import request, g, current_app

from utils.exceptions import MissingTokenError, UnknownSubjectError

BEARER_PREFIX = "Bearer "


def get_bearer_token(header_value: str | None) -> str:
    """
    Return the credential from an `Authorization: Bearer <token>` header value.
    The scheme is case-sensitive and separated by exactly one space; the token
    itself is not inspected.
    """
    if not header_value or not header_value.startswith(BEARER_PREFIX):
        raise MissingTokenError("Missing or invalid Authorization header")
    token = header_value[len(BEARER_PREFIX):]
    if not token:
        raise MissingTokenError("Missing or invalid Authorization header")
    return token


def jwt_required():
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            token = get_bearer_token(request.headers.get("Authorization"))
            issuer = current_app.extensions["session_issuer"]
            # identity always comes from the verified token, never the request body
            user_id = issuer.authenticate(token)
            if issuer.accounts.get(user_id) is None:
                raise UnknownSubjectError("User not found")
            g.current_user_id = user_id
            return fn(*args, **kwargs)

        return wrapper

    return decorator
