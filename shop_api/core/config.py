"""
Configuration helpers for the seller accounts backend.

`Settings` is built once at process start and handed by reference to the token
issuer, the mailer, the media host client and the repository, so that no other
module reads os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    frontend_base_url: str
    database_url: str
    activation_secret: str
    activation_ttl_seconds: int
    jwt_secret: str
    session_ttl_seconds: int
    user_cookie_name: str
    seller_cookie_name: str
    cookie_secure: bool
    smtp_host: str
    smtp_port: int
    smtp_user: str
    smtp_password: str
    smtp_from: str
    media_cloud_name: str
    media_api_key: str
    media_api_secret: str
    media_folder: str
    cors_origins: tuple[str, ...]


def _int(value: str | None, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _csv(value: str | None) -> tuple[str, ...]:
    return tuple(item.strip().rstrip("/") for item in (value or "").split(",") if item.strip())


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        frontend_base_url=os.getenv("FRONTEND_BASE_URL", "http://localhost:3000").rstrip("/"),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./shop.db"),
        activation_secret=os.getenv("ACTIVATION_SECRET", "dev-activation-secret-change-me-before-deploying"),
        activation_ttl_seconds=_int(os.getenv("ACTIVATION_TTL_SECONDS", "300"), 300),
        jwt_secret=os.getenv("JWT_SECRET_KEY", "dev-session-secret-change-me-before-deploying"),
        session_ttl_seconds=_int(os.getenv("SESSION_TTL_SECONDS", "604800"), 604800),
        user_cookie_name=os.getenv("USER_COOKIE_NAME", "token"),
        seller_cookie_name=os.getenv("SELLER_COOKIE_NAME", "seller_token"),
        cookie_secure=_bool(os.getenv("COOKIE_SECURE"), True),
        smtp_host=os.getenv("SMTP_HOST", ""),
        smtp_port=_int(os.getenv("SMTP_PORT", "465"), 465),
        smtp_user=os.getenv("SMTP_USER", ""),
        smtp_password=os.getenv("SMTP_PASSWORD", ""),
        smtp_from=os.getenv("SMTP_FROM", os.getenv("SMTP_USER", "")),
        media_cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME", ""),
        media_api_key=os.getenv("CLOUDINARY_API_KEY", ""),
        media_api_secret=os.getenv("CLOUDINARY_API_SECRET", ""),
        media_folder=os.getenv("MEDIA_FOLDER", "avatars"),
        cors_origins=_csv(os.getenv("CORS_ORIGINS", "http://localhost:3000")),
    )
