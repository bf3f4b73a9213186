from __future__ import annotations

import uuid

from flask import Blueprint, request, jsonify, g, abort, current_app

from api import get_storage
from models.schemas.chirp import ChirpCreateSchema, ChirpListArgsSchema, ChirpOutSchema
from utils.decorators import authorize_ownership, jwt_required
from utils.exceptions import Forbidden

bp = Blueprint("chirps", __name__)

chirp_create_schema = ChirpCreateSchema()
chirp_list_args_schema = ChirpListArgsSchema()
chirp_out_schema = ChirpOutSchema()
chirps_out_schema = ChirpOutSchema(many=True)


def parse_chirp_id(chirp_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(chirp_id)
    except ValueError:
        abort(400, description="Invalid chirp id")


@bp.post("/chirps")
@jwt_required()
def create_chirp():
    """
    Post a chirp as the authenticated user
    ---
    tags:
      - Chirps
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [body]
          properties:
            body: { type: string, maxLength: 140 }
    responses:
      201:
        description: Created
      400:
        description: Chirp is too long
      401:
        description: Unauthorized
    """
    payload = request.get_json(silent=True) or {}
    data = chirp_create_schema.load(payload)

    if len(data["body"]) > current_app.config["MAX_CHIRP_LENGTH"]:
        abort(400, description="Chirp is too long")

    chirp = get_storage().create_chirp(data["body"], g.current_user_id)
    return jsonify(chirp_out_schema.dump(chirp)), 201


@bp.get("/chirps")
def list_chirps():
    """
    List chirps, oldest first by default
    ---
    tags:
      - Chirps
    parameters:
      - in: query
        name: author_id
        type: string
        description: Only chirps by this user
      - in: query
        name: sort
        type: string
        enum: [asc, desc]
        default: asc
    responses:
      200:
        description: List of chirps
      422:
        description: Invalid query parameters
    """
    args = chirp_list_args_schema.load(request.args.to_dict())
    rows = get_storage().get_chirps(
        author_id=args["author_id"],
        descending=args["sort"] == "desc",
    )
    return jsonify(chirps_out_schema.dump(rows)), 200


@bp.get("/chirps/<chirp_id>")
def get_chirp(chirp_id: str):
    """
    Get a single chirp by id
    ---
    tags:
      - Chirps
    parameters:
      - in: path
        name: chirp_id
        type: string
        required: true
    responses:
      200:
        description: Chirp found
      400:
        description: Invalid chirp id
      404:
        description: Not found
    """
    chirp = get_storage().get_chirp(parse_chirp_id(chirp_id))
    if not chirp:
        abort(404)
    return jsonify(chirp_out_schema.dump(chirp)), 200


@bp.delete("/chirps/<chirp_id>")
@jwt_required()
def delete_chirp(chirp_id: str):
    """
    Delete one of your own chirps
    ---
    tags:
      - Chirps
    security:
      - Bearer: []
    parameters:
      - in: path
        name: chirp_id
        type: string
        required: true
    responses:
      204:
        description: Deleted
      401:
        description: Unauthorized
      403:
        description: Chirp belongs to someone else
      404:
        description: Not found
    """
    storage = get_storage()
    # existence first, ownership second
    chirp = storage.get_chirp(parse_chirp_id(chirp_id))
    if not chirp:
        abort(404)
    if not authorize_ownership(g.current_user_id, chirp.user_id):
        raise Forbidden("You can only delete your own chirps")

    storage.delete_chirp(chirp)
    return ("", 204)
