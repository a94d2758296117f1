"""
Authentication blueprint:
- POST /api/login
- POST /api/refresh
- POST /api/revoke

The implementation:
- Uses argon2 for password hashing (via utils.security)
- Issues short-lived HS256 access tokens and long-lived opaque refresh tokens
- Stores refresh tokens in DB (RefreshToken model) so they can be revoked
- Refresh and revoke take the refresh token as a Bearer credential
"""
from __future__ import annotations

from flask import Blueprint, request, jsonify, current_app

from models.schemas.user import UserLoginSchema, UserOutSchema
from utils.decorators import get_bearer_token

bp = Blueprint("auth", __name__)

user_login_schema = UserLoginSchema()
user_out_schema = UserOutSchema()


def _issuer():
    return current_app.extensions["session_issuer"]


@bp.post("/login")
def login():
    """
    Login: return access token and refresh token
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             email: { type: string }
             password: { type: string }
    responses:
      200:
        description: OK (returns user and tokens)
      401:
        description: Incorrect email or password
      422:
        description: Validation error
    """
    payload = request.get_json(silent=True) or {}
    data = user_login_schema.load(payload)

    result = _issuer().login(data["email"], data["password"])

    body = user_out_schema.dump(result.user)
    body.update(
        {
            "token": result.access_token,
            "refresh_token": result.refresh_token,
            "token_type": "bearer",
            "expires_in": int(current_app.config["ACCESS_TOKEN_EXPIRES"].total_seconds()),
        }
    )
    return jsonify(body), 200


@bp.post("/refresh")
def refresh():
    """
    Use a refresh token to obtain a new access token (the refresh token is not rotated)
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: OK (returns a new access token)
      401:
        description: Unauthorized
    """
    refresh_token = get_bearer_token(request.headers.get("Authorization"))
    access_token = _issuer().refresh(refresh_token)
    return jsonify(
        {
            "token": access_token,
            "token_type": "bearer",
            "expires_in": int(current_app.config["ACCESS_TOKEN_EXPIRES"].total_seconds()),
        }
    ), 200


@bp.post("/revoke")
def revoke():
    """
    Revoke a refresh token (logout)
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      204:
        description: ""
      401:
        description: Unauthorized
    """
    refresh_token = get_bearer_token(request.headers.get("Authorization"))
    _issuer().revoke(refresh_token)
    return ("", 204)
