"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from environment
variables.  Defaults are provided for everything except the token
signing secret, which must be supplied via ``JWT_SECRET``; ``validate``
refuses to start the application without it.  Build a ``Settings``
explicitly (as the tests do) to bypass the environment entirely.
"""

import os
from dataclasses import dataclass, field
from typing import List

from .errors import ConfigurationError


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Clinic API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # HMAC key used to sign session tokens.  There is deliberately no
    # fallback value: an empty key aborts ``create_app``.
    secret_key: str = os.getenv("JWT_SECRET", "")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(6 * 60)))

    # Directory holding one JSON document per collection.  Relative paths
    # are resolved against the current working directory.
    data_dir: str = os.getenv("DATA_DIR", "data")

    cors_origins: List[str] = field(default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", "*")))

    # Account created on first start when the users collection is empty.
    # Nothing is created unless ADMIN_PASSWORD is set.
    admin_username: str = os.getenv("ADMIN_USERNAME", "admin")
    admin_password: str = os.getenv("ADMIN_PASSWORD", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    def validate(self) -> None:
        """Raise ``ConfigurationError`` if the settings cannot be used."""
        if not self.secret_key:
            raise ConfigurationError(
                "JWT_SECRET is not set; refusing to sign tokens with a default key"
            )
        if self.access_token_expire_minutes <= 0:
            raise ConfigurationError("ACCESS_TOKEN_EXPIRE_MINUTES must be positive")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at import time, environment variables should be set
# before importing this module.
settings = Settings()
