"""
Session blueprint:
- POST /api/login    email + password -> access token + refresh token
- POST /api/refresh  refresh token (Bearer) -> new access token
- POST /api/revoke   refresh token (Bearer) -> 204

Access tokens are stateless HS256 JWTs (utils.security); they cannot be
revoked and simply expire. Refresh tokens are opaque and stored
(utils.refresh_tokens) so logout can revoke them.
"""
from __future__ import annotations

import logging

from flask import Blueprint, request, jsonify, abort, current_app

from api import get_storage
from models.schemas.user import UserLoginSchema, LoginOutSchema
from utils.exceptions import AuthenticationError, InvalidHashFormat, NotFoundError
from utils.refresh_tokens import RefreshTokenManager
from utils.security import (
    create_access_token,
    get_bearer_token,
    hash_password,
    password_needs_rehash,
    verify_password,
)

bp = Blueprint("auth", __name__)

user_login_schema = UserLoginSchema()
login_out_schema = LoginOutSchema()

# Identical for unknown email and wrong password
LOGIN_FAILED_MESSAGE = "Incorrect email or password"


def _refresh_tokens() -> RefreshTokenManager:
    return RefreshTokenManager(get_storage(), current_app.config["REFRESH_TOKEN_EXPIRES"])


def _access_token_for(user_id) -> str:
    return create_access_token(
        user_id,
        current_app.config["JWT_SECRET"],
        current_app.config["ACCESS_TOKEN_EXPIRES"],
        issuer=current_app.config["JWT_ISSUER"],
    )


def _check_credentials(user, password: str) -> bool:
    if not user:
        return False
    try:
        return verify_password(password, user.hashed_password)
    except InvalidHashFormat:
        logging.warning("Stored password hash for user %s is malformed", user.id)
        return False


@bp.post("/login")
def login():
    """
    Login: return the user with an access token and a refresh token
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
           required: [email, password]
           properties:
             email: { type: string }
             password: { type: string }
    responses:
      200:
        description: OK (returns tokens)
      401:
        description: Unauthorized
    """
    payload = request.get_json(silent=True) or {}
    data = user_login_schema.load(payload)

    storage = get_storage()
    user = storage.get_user_by_email(data["email"])
    if not _check_credentials(user, data["password"]):
        logging.info("Failed login attempt")
        abort(401, description=LOGIN_FAILED_MESSAGE)

    if password_needs_rehash(user.hashed_password):
        storage.set_password_hash(user, hash_password(data["password"]))
        logging.info("Rehashed password for user %s", user.id)

    access_token = _access_token_for(user.id)
    refresh_token, _ = _refresh_tokens().issue(user.id)

    body = login_out_schema.dump(user)
    body["token"] = access_token
    body["refresh_token"] = refresh_token
    return jsonify(body), 200


@bp.post("/refresh")
def refresh():
    """
    Exchange a refresh token for a new access token
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: OK (returns a new access token)
        schema:
          type: object
          properties:
            token: { type: string }
      401:
        description: Missing, unknown, expired or revoked refresh token
    """
    try:
        token = get_bearer_token(request.headers.get("Authorization"))
        user_id = _refresh_tokens().validate(token)
    except (AuthenticationError, NotFoundError):
        abort(401, description="Invalid refresh token")

    return jsonify({"token": _access_token_for(user_id)}), 200


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
        description: Revoked
      401:
        description: Missing or unknown refresh token
    """
    try:
        token = get_bearer_token(request.headers.get("Authorization"))
        _refresh_tokens().revoke(token)
    except (AuthenticationError, NotFoundError):
        abort(401, description="Invalid refresh token")

    return ("", 204)
