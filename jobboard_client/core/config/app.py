"""
Application-wide client settings.
"""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """
    Defines client-wide settings like project name, logging, and the backend location.

    Security Note:
        - API_BASE_URL should use HTTPS outside local development so bearer
          tokens are never sent in clear text.
    Performance Note:
        - REQUEST_TIMEOUT_SECONDS bounds every backend call; a timeout is
          reported as a transport failure and never retried.
    """
    PROJECT_NAME: str = "jobboard-client"
    VERSION: str = "0.1.0"
    APP_ENV: str = "development"
    DEBUG: bool = False

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    API_BASE_URL: str = "http://localhost:3000/api/v1"
    REQUEST_TIMEOUT_SECONDS: float = Field(gt=0, default=30.0)

    @field_validator("API_BASE_URL", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """
        Normalizes the base URL so endpoint paths can always start with '/'.

        Args:
            v: Raw base URL.

        Returns:
            The URL without a trailing slash.
        """
        if isinstance(v, str):
            return v.rstrip("/")
        return v
