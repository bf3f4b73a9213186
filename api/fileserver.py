"""
Static file server mounted at /app. Every request counts as a hit.
"""
import os

from flask import Blueprint, current_app, send_from_directory

from api import get_hit_counter

bp = Blueprint("fileserver", __name__)

INDEX_FILE = "index.html"


@bp.before_request
def count_hit():
    get_hit_counter().increment()


@bp.get("/", defaults={"filename": ""})
@bp.get("/<path:filename>")
def serve(filename: str):
    """
    Serve a file from FILESERVER_ROOT
    ---
    tags:
      - App
    parameters:
      - in: path
        name: filename
        type: string
        required: false
    responses:
      200:
        description: File contents
      404:
        description: Not found
    """
    root = os.path.abspath(current_app.config["FILESERVER_ROOT"])
    if not filename or filename.endswith("/"):
        filename = f"{filename}{INDEX_FILE}"
    # send_from_directory refuses paths escaping root and 404s on missing files
    return send_from_directory(root, filename)
