"""
Environment-aware configuration.
Values come from the process environment, with .env loaded first if present.
"""
import os
from dotenv import load_dotenv
from datetime import timedelta

load_dotenv()  # Read .env if present


class BaseConfig:
    DEBUG = False
    TESTING = False
    # CORS: in dev we usually allow '*', in prod supply a comma-separated list in env
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    APP_ENV = os.getenv("APP_ENV", "dev")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    # HS256 signing key; rotating JWT_SECRET invalidates every outstanding access token
    JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret-change-me-dev-secret-change-me")
    ACCESS_TOKEN_EXPIRES = timedelta(hours=1)
    REFRESH_TOKEN_EXPIRES = timedelta(days=60)
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///chirpy.db")
    DB_TIMEOUT_SECONDS = float(os.getenv("DB_TIMEOUT_SECONDS", "5"))
    STATIC_ROOT = os.getenv("STATIC_ROOT", ".")
    # bulk reset of users and sessions (POST /admin/reset)
    RESET_ALLOWED = False


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    APP_ENV = "dev"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
    RESET_ALLOWED = True


class TestingConfig(BaseConfig):
    TESTING = True
    APP_ENV = "test"
    JWT_SECRET = "test-secret-key-that-is-long-enough-for-hs256"
    DATABASE_URL = "sqlite://"
    RESET_ALLOWED = True


class ProductionConfig(BaseConfig):
    DEBUG = False
    APP_ENV = "prod"
    # no fallback: create_app refuses to start without a real secret
    JWT_SECRET = os.getenv("JWT_SECRET")
    DATABASE_URL = os.getenv("DATABASE_URL")


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/test/prod).
    """
    env = (name or os.getenv("APP_ENV", "dev")).lower()
    if env in ["prod", "production"]:
        return ProductionConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return DevelopmentConfig
