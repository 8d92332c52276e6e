"""
Session storage settings.

The token pair is the only durable client state. It can live in process memory
(tests, short-lived scripts), in a JSON file under the user's home directory
(survives restarts), or in Redis (shared between worker processes).

**Security Note**: the session file is written with mode 0600. When using Redis,
include credentials and TLS parameters in REDIS_URL if the instance is not on a
trusted network, and never log the URL with its password.
"""

from typing import Literal

from pydantic_settings import BaseSettings


class StorageSettings(BaseSettings):
    SESSION_STORE_BACKEND: Literal["memory", "file", "redis"] = "file"
    SESSION_STORE_PATH: str = "~/.jobboard/session.json"

    REDIS_URL: str = "redis://localhost:6379/0"
    SESSION_KEY_PREFIX: str = "jobboard:"

    ACCESS_TOKEN_KEY: str = "access_token"
    REFRESH_TOKEN_KEY: str = "refresh_token"
