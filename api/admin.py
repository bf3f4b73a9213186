from flask import Blueprint, current_app, abort
import logging

from api import get_hit_counter, get_storage

bp = Blueprint("admin", __name__)

METRICS_HTML = """<html>
  <body>
    <h1>Welcome, Chirpy Admin</h1>
    <p>Chirpy has been visited {hits} times!</p>
  </body>
</html>"""


@bp.get("/metrics")
def metrics():
    """
    File server hit count
    ---
    tags:
      - Admin
    produces:
      - text/html
    responses:
      200:
        description: HTML page with the hit count
    """
    html = METRICS_HTML.format(hits=get_hit_counter().value)
    return html, 200, {"Content-Type": "text/html; charset=utf-8"}


@bp.post("/reset")
def reset():
    """
    Reset the hit counter and delete every user (dev platform only)
    ---
    tags:
      - Admin
    responses:
      200:
        description: Reset done
      403:
        description: Not available on this platform
    """
    if current_app.config.get("PLATFORM") != "dev":
        abort(403, description="Reset is only allowed in dev")

    get_hit_counter().reset()
    deleted = get_storage().delete_users()
    logging.warning("Admin reset: hit counter zeroed, %d users deleted", deleted)
    return "", 200
