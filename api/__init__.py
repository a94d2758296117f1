from flask import Flask
from flasgger import Swagger
from flask_cors import CORS
import logging

from .config import get_config
from .errors import register_error_handlers
from models import storage  # DBStorage singleton (scoped_session)
from models.account_store import AccountStore
from models.refresh_token_store import RefreshTokenStore
from services.session_issuer import SessionIssuer
from utils.metrics import HitCounter

# Minimal Swagger config: exposes /swagger.json and UI at /apidocs
SWAGGER_TEMPLATE = {
    "swagger": "2.0",
    "info": {
        "title": "Chirpy API",
        "version": "1.0.0",
        "description": "Short text posts with password login, access tokens and revocable refresh tokens.",
    },
    "basePath": "/",
    "schemes": ["http"],
    "securityDefinitions": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Enter the token with the `Bearer ` prefix, e.g. \"Bearer abcde12345\"."
        }
    }
}

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec_1",
            "route": "/swagger.json",
            "rule_filter": lambda rule: True,   # include all endpoints
            "model_filter": lambda tag: True,   # include all models
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/",
}

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def create_app(config_name: str | None = None) -> Flask:
    """
    Application factory: creates and configures the Flask app.
    Builds the storage, the session issuer and the hit counter it owns.
    """
    app = Flask(__name__)

    # Load configuration (reads .env via get_config)
    app.config.from_object(get_config(config_name))
    if not app.config.get("JWT_SECRET"):
        raise RuntimeError("JWT_SECRET must be set")
    if not app.config.get("DATABASE_URL"):
        raise RuntimeError("DATABASE_URL must be set")

    logging.basicConfig(level=app.config["LOG_LEVEL"], format=LOG_FORMAT)

    # Cross-Origin Resource Sharing: enable for dev, configurable for prod
    CORS(app, resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    # Swagger UI and JSON
    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)

    # Register global error handlers that return the uniform error envelope
    register_error_handlers(app)

    storage.configure(app.config["DATABASE_URL"], timeout=app.config["DB_TIMEOUT_SECONDS"])
    storage.reload()

    app.extensions["hit_counter"] = HitCounter()
    app.extensions["session_issuer"] = SessionIssuer(
        accounts=AccountStore(storage),
        refresh_tokens=RefreshTokenStore(storage, ttl=app.config["REFRESH_TOKEN_EXPIRES"]),
        secret=app.config["JWT_SECRET"],
        access_ttl=app.config["ACCESS_TOKEN_EXPIRES"],
        reset_allowed=app.config["RESET_ALLOWED"],
    )

    from .health import bp as health_bp
    from .auth import bp as auth_bp
    from .users import bp as users_bp
    from .posts import bp as posts_bp
    from .admin import bp as admin_bp
    from .files import bp as files_bp

    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(auth_bp, url_prefix="/api")
    app.register_blueprint(users_bp, url_prefix="/api")
    app.register_blueprint(posts_bp, url_prefix="/api")
    app.register_blueprint(admin_bp, url_prefix="/admin")
    app.register_blueprint(files_bp, url_prefix="/app")

    # Ensure the DB session is removed at the end of each request/app context
    @app.teardown_appcontext
    def remove_session(exception=None):
        # This calls scoped_session.remove(), preventing connection leaks
        storage.close()

    return app
