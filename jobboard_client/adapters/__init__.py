from .navigation import CallbackLoginRedirect, LoggingLoginRedirect

__all__ = ["CallbackLoginRedirect", "LoggingLoginRedirect"]
