from flask import Blueprint, current_app

import logging

logger = logging.getLogger(__name__)

bp = Blueprint("admin", __name__)

METRICS_PAGE = """<html>
  <body>
    <h1>Welcome, Chirpy Admin</h1>
    <p>Chirpy has been visited {hits} times!</p>
  </body>
</html>"""


@bp.get("/metrics")
def metrics():
    """
    Admin page with the number of /app hits since the last reset
    ---
    tags:
      - Admin
    produces:
      - text/html
    responses:
      200:
        description: HTML page
    """
    hits = current_app.extensions["hit_counter"].value
    return METRICS_PAGE.format(hits=hits), 200, {"Content-Type": "text/html; charset=utf-8"}


@bp.post("/reset")
def reset():
    """
    Development only: reset the hit counter and delete every session, user and post
    ---
    tags:
      - Admin
    responses:
      200:
        description: Reset done
      403:
        description: Not allowed outside development
    """
    issuer = current_app.extensions["session_issuer"]
    # raises ForbiddenError outside dev/test, before anything is touched
    tokens = issuer.purge_all()
    users = issuer.accounts.delete_all()
    current_app.extensions["hit_counter"].reset()
    logger.warning("environment reset: %d users, %d refresh tokens removed", users, tokens)
    return "OK", 200, {"Content-Type": "text/plain; charset=utf-8"}
