import os

from flask import Blueprint, current_app, send_from_directory

bp = Blueprint("files", __name__)


@bp.before_request
def count_hit():
    current_app.extensions["hit_counter"].increment()


@bp.get("/", defaults={"filename": "index.html"})
@bp.get("/<path:filename>")
def serve(filename: str):
    """
    Static files from STATIC_ROOT; every request counts as a hit
    ---
    tags:
      - Files
    responses:
      200:
        description: File contents
      404:
        description: Not found
    """
    return send_from_directory(os.path.abspath(current_app.config["STATIC_ROOT"]), filename)
