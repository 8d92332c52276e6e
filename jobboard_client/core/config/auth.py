"""Authentication and session-refresh settings.
"""

from pydantic_settings import BaseSettings


class AuthSettings(BaseSettings):
    """Defines the backend auth endpoints and the session-refresh behaviour.

    Security Note:
        - The refresh endpoint is always called without a bearer header; only
          the refresh token in the body identifies the session.
        - LOGIN_PATH is where the host application is sent once a session
          can no longer be refreshed.
    """

    LOGIN_PATH: str = "/login"

    AUTH_LOGIN_ENDPOINT: str = "/auth/login"
    AUTH_REGISTER_ENDPOINT: str = "/auth/register"
    AUTH_REFRESH_ENDPOINT: str = "/auth/refresh"
    AUTH_LOGOUT_ENDPOINT: str = "/auth/logout"
    AUTH_ME_ENDPOINT: str = "/auth/me"
    USER_PROFILE_ENDPOINT: str = "/users/profile"
    USER_CV_ENDPOINT: str = "/users/cv"

    # Share one in-flight refresh between requests that hit 401 together
    COALESCE_REFRESH: bool = True
