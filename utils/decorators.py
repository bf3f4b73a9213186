from __future__ import annotations

import uuid
from functools import wraps

from flask import current_app, g, request

from utils.security import DEFAULT_ISSUER, get_bearer_token, validate_access_token


def authenticate(header_value: str | None, secret: str, issuer: str = DEFAULT_ISSUER) -> uuid.UUID:
    """
    Resolve an Authorization header value to a user id.
    The first failure (header, scheme, signature, expiry, subject) propagates unchanged.
    """
    token = get_bearer_token(header_value)
    return validate_access_token(token, secret, issuer=issuer)


def authorize_ownership(user_id, owner_id) -> bool:
    """
    Exact match between the caller and the owner of an already-fetched resource.
    Callers look the resource up first (404), then ask this (403).
    """
    if user_id is None or owner_id is None:
        return False
    return str(user_id) == str(owner_id)


def jwt_required():
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            g.current_user_id = authenticate(
                request.headers.get("Authorization"),
                current_app.config["JWT_SECRET"],
                issuer=current_app.config.get("JWT_ISSUER", DEFAULT_ISSUER),
            )
            return fn(*args, **kwargs)

        return wrapper

    return decorator
