from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError
import logging

from utils.exceptions import AppError, ErrorKind, PersistenceError

logger = logging.getLogger(__name__)


def error_response(error: str, message: str, status: int, details: dict | None = None):
    payload = {"error": error, "message": message, "status": status}
    if details:
        payload["details"] = details
    return jsonify(payload), status


def describe_error(kind: ErrorKind, retryable: bool = False) -> tuple[str, int, str]:
    """
    Translate an error kind into (code, status, public message).
    Messages are fixed per kind so no internal detail reaches the caller.
    """
    if kind is ErrorKind.INVALID_CREDENTIALS:
        return "UNAUTHORIZED", 401, "Incorrect email or password"
    if kind is ErrorKind.UNAUTHORIZED:
        return "UNAUTHORIZED", 401, "Unauthorized"
    if kind is ErrorKind.VALIDATION:
        return "VALIDATION_ERROR", 422, "Invalid input"
    if kind is ErrorKind.PERSISTENCE:
        if retryable:
            return "SERVICE_UNAVAILABLE", 503, "Service temporarily unavailable"
        return "INTERNAL_ERROR", 500, "An unexpected error occurred"
    if kind is ErrorKind.FORBIDDEN:
        return "FORBIDDEN", 403, "Forbidden"
    if kind is ErrorKind.NOT_FOUND:
        return "NOT_FOUND", 404, "Resource not found"
    if kind is ErrorKind.CONFLICT:
        return "CONFLICT", 409, "Conflict"
    if kind is ErrorKind.INTERNAL:
        return "INTERNAL_ERROR", 500, "An unexpected error occurred"
    raise ValueError(f"unhandled error kind: {kind!r}")


def register_error_handlers(app):
    # Application errors: one translation for every kind
    @app.errorhandler(AppError)
    def handle_app_error(err: AppError):
        retryable = isinstance(err, PersistenceError) and err.retryable
        code, status, message = describe_error(err.kind, retryable=retryable)
        if status >= 500:
            logger.error("%s: %s", err.__class__.__name__, err, exc_info=err)
        elif err.kind is ErrorKind.FORBIDDEN or err.kind is ErrorKind.CONFLICT:
            # these messages are written for the caller
            message = str(err) or message
        return error_response(code, message, status)

    # Marshmallow validation errors map to 422
    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        code, status, message = describe_error(ErrorKind.VALIDATION)
        return error_response(code, message, status, details=err.messages)

    # 400 Bad Request (generic)
    @app.errorhandler(400)
    def bad_request(e):
        message = getattr(e, "description", "Bad request")
        return error_response("BAD_REQUEST", message, 400)

    # 404 Not Found
    @app.errorhandler(404)
    def not_found(e):
        return error_response("NOT_FOUND", "Resource not found", 404)

    # 405 Method Not Allowed
    @app.errorhandler(405)
    def method_not_allowed(e):
        return error_response("METHOD_NOT_ALLOWED", "Method not allowed", 405)

    # Werkzeug HTTPExceptions map to their status codes
    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return error_response(err.name.upper().replace(" ", "_"), err.description, err.code or 400)

    # 500 Internal Error (catch-all)
    @app.errorhandler(Exception)
    def internal_error(err: Exception):
        logger.exception("Unhandled exception", exc_info=err)
        details = None
        # In dev, include exception details to speed up debugging
        if current_app and current_app.debug:
            details = {"type": err.__class__.__name__}
        return error_response("INTERNAL_ERROR", "An unexpected error occurred", 500, details=details)
