"""Main client settings and configuration management.

This module composes all the client settings from the different modules
(app, auth, storage) into a single, accessible `Settings` class.

It loads settings from environment variables and .env files, validates them,
and provides a single `settings` object for use throughout the package.

Environment Support:
- Development: Uses .env
- Test: Uses .env.test, in-memory session store by default
- Staging: Uses .env.staging
- Production: Uses .env.production, HTTPS base URL expected
"""

import logging
import os
from pathlib import Path

from pydantic_settings import SettingsConfigDict

from .app import AppSettings
from .auth import AuthSettings
from .storage import StorageSettings

logger = logging.getLogger(__name__)

ENV_FILES = {
    "development": ".env",
    "test": ".env.test",
    "staging": ".env.staging",
    "production": ".env.production",
}


class Settings(AppSettings, AuthSettings, StorageSettings):
    """The main settings class that aggregates all client configurations.

    It inherits from all the specialized settings classes, providing a unified
    interface to all configuration parameters.

    Usage:
        - Access settings via the singleton instance `settings`, or build a
          dedicated instance with `create_settings()` / `Settings(**overrides)`.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    def __init__(self, **kwargs):
        """Initialize settings with environment-specific configuration."""
        super().__init__(**kwargs)
        self._set_environment_defaults(self.APP_ENV)

    def _set_environment_defaults(self, env: str) -> None:
        """Set environment-specific default values.

        Args:
            env: Environment name
        """
        if env == "test" and "SESSION_STORE_BACKEND" not in self.model_fields_set:
            self.SESSION_STORE_BACKEND = "memory"

        if env == "development" and "DEBUG" not in self.model_fields_set:
            self.DEBUG = True

        logger.debug(
            "Client running in %s environment (store=%s, base_url=%s)",
            env,
            self.SESSION_STORE_BACKEND,
            self.API_BASE_URL,
        )

    def validate_required_fields(self) -> None:
        """Validates settings that would make the client unusable.

        Raises:
            ValueError: If the base URL is missing, or plain HTTP is configured
                in production.
        """
        if not self.API_BASE_URL:
            raise ValueError("Missing required setting: API_BASE_URL")

        if self.APP_ENV == "production" and not self.API_BASE_URL.startswith("https://"):
            error_msg = "API_BASE_URL must use https:// in production"
            logger.error(error_msg)
            raise ValueError(error_msg)


def create_settings(**overrides) -> Settings:
    """Create settings instance with environment-specific configuration.

    Returns:
        Settings: Configured settings instance
    """
    env = overrides.get("APP_ENV") or os.getenv("APP_ENV", "development")
    env_file = ENV_FILES.get(env, ".env")

    if env != "development" and Path(env_file).exists():
        logger.info("Loading client configuration from %s", env_file)
        return Settings(_env_file=env_file, **overrides)
    return Settings(**overrides)


# Create a singleton instance of the settings to be used across the package.
settings = create_settings()
