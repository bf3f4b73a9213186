from __future__ import annotations

from flask import Blueprint, request, jsonify, g, abort

from api import get_storage
from models.schemas.user import UserCreateSchema, UserUpdateSchema, UserOutSchema
from utils.decorators import jwt_required
from utils.security import hash_password

bp = Blueprint("users", __name__)

user_create_schema = UserCreateSchema()
user_update_schema = UserUpdateSchema()
user_out_schema = UserOutSchema()


@bp.post("/users")
def create_user():
    """
    Register a new user.
    ---
    tags:
      - Users
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          required: [email, password]
          properties:
            email: { type: string }
            password: { type: string, minLength: 8 }
    responses:
      201:
        description: Created
      409:
        description: Email already registered
      422:
        description: Validation error
    """
    payload = request.get_json(silent=True) or {}
    data = user_create_schema.load(payload)

    storage = get_storage()
    if storage.get_user_by_email(data["email"]):
        abort(409, description="Email already registered")

    user = storage.create_user(data["email"], hash_password(data["password"]))
    return jsonify(user_out_schema.dump(user)), 201


@bp.put("/users")
@jwt_required()
def update_user():
    """
    Update the authenticated user's email and password.
    ---
    tags:
      - Users
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          required: [email, password]
          properties:
            email: { type: string }
            password: { type: string, minLength: 8 }
    responses:
      200:
        description: Updated user
      401:
        description: Unauthorized
      409:
        description: Email already registered
      422:
        description: Validation error
    """
    payload = request.get_json(silent=True) or {}
    data = user_update_schema.load(payload)

    storage = get_storage()
    existing = storage.get_user_by_email(data["email"])
    if existing and existing.id != str(g.current_user_id):
        abort(409, description="Email already registered")

    user = storage.update_user(g.current_user_id, data["email"], hash_password(data["password"]))
    if not user:
        # token outlived its account
        abort(401, description="User not found")
    return jsonify(user_out_schema.dump(user)), 200
