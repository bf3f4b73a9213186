"""
Payment provider (Polka) webhooks.
"""
from __future__ import annotations

import hmac
import logging

from flask import Blueprint, request, abort, current_app

from api import get_storage
from models.schemas.webhook import PolkaWebhookSchema, USER_UPGRADED
from utils.exceptions import AuthenticationError
from utils.security import get_api_key

bp = Blueprint("webhooks", __name__)

polka_webhook_schema = PolkaWebhookSchema()


def check_polka_key():
    expected = current_app.config.get("POLKA_KEY")
    if not expected:
        return
    try:
        key = get_api_key(request.headers.get("Authorization"))
    except AuthenticationError:
        abort(401, description="Invalid API key")
    if not hmac.compare_digest(key.encode(), expected.encode()):
        abort(401, description="Invalid API key")


@bp.post("/polka/webhooks")
def polka_webhook():
    """
    Handle a Polka event; user.upgraded moves the user to Chirpy Red
    ---
    tags:
      - Webhooks
    security:
      - ApiKey: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            event: { type: string, example: user.upgraded }
            data:
              type: object
              properties:
                user_id: { type: string }
    responses:
      204:
        description: Handled (or ignored)
      401:
        description: Invalid API key
      404:
        description: Unknown user
      422:
        description: Invalid payload
    """
    check_polka_key()

    payload = request.get_json(silent=True) or {}
    data = polka_webhook_schema.load(payload)

    if data["event"] != USER_UPGRADED:
        return ("", 204)
    if not data.get("data"):
        abort(422, description="data.user_id is required")

    user = get_storage().upgrade_user(data["data"]["user_id"])
    if not user:
        abort(404)
    logging.info("User %s upgraded to Chirpy Red", user.id)
    return ("", 204)
