"""Application settings read from the environment.

Values are looked up on every call so tests can override them with
``monkeypatch.setenv`` without reloading modules.
"""

import os
from datetime import timedelta

DEVELOPMENT_JWT_SECRET = "storefront-development-secret-change-me"


def current_environment() -> str:
    """Name of the running environment, lower-cased."""
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_jwt_secret() -> str:
    secret = os.getenv("JWT_SECRET", DEVELOPMENT_JWT_SECRET)
    if secret == DEVELOPMENT_JWT_SECRET and current_environment() == "production":
        raise RuntimeError("JWT_SECRET must be set in production")
    return secret


def get_jwt_algorithm() -> str:
    return os.getenv("JWT_ALGORITHM", "HS256")


def get_token_lifetime() -> timedelta:
    return timedelta(hours=int(os.getenv("JWT_EXPIRES_IN_HOURS", "24")))


def get_password_reset_lifetime() -> timedelta:
    return timedelta(minutes=int(os.getenv("PASSWORD_RESET_TTL_MINUTES", "60")))


def get_bcrypt_rounds() -> int:
    return int(os.getenv("BCRYPT_ROUNDS", "12"))


def get_cors_origins() -> list[str]:
    """Comma-separated CORS_ORIGINS; defaults to the local web client."""
    raw = os.getenv("CORS_ORIGINS", "http://localhost:3000")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
