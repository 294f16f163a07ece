"""
Centralized configuration for the Todo List backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SMTP_*, SUPABASE_*).
The JWT secret has no default and is validated at startup.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Todo List API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Tokens
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    access_token_ttl_seconds: int = 3600
    refresh_token_ttl_seconds: int = 7 * 24 * 3600
    recovery_token_ttl_seconds: int = 15 * 60

    # Passwords
    bcrypt_rounds: int = 10

    # Users
    default_avatar_url: str = (
        "https://res.cloudinary.com/demo/image/upload/v1/avatars/default.png"
    )

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""

    # Email (SMTP)
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True
    smtp_timeout: float = 10.0
    email_from: str = "TodoList <no-reply@todolist.com>"
    email_preview_url: str = ""

    # Frontend URLs (for links in emails)
    frontend_url: str = "http://localhost:5173"
    password_reset_url: str = "http://localhost:5173/reset-password"

    def require_jwt_secret(self) -> str:
        """
        Return the JWT secret, refusing to run without one.

        Raises:
            ConfigurationError: If JWT_SECRET is unset or blank
        """
        if not self.jwt_secret.strip():
            raise ConfigurationError(
                "JWT_SECRET is not set. Refusing to sign or verify tokens.",
                details={"setting": "JWT_SECRET"},
            )
        return self.jwt_secret


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
