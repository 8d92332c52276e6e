"""Domain interfaces for dependency inversion.

The session manager depends only on these abstractions; infrastructure and
adapters provide the implementations.
"""

from .navigation import ILoginRedirect
from .session_store import ISessionStore
from .transport import IHttpTransport

__all__ = ["ILoginRedirect", "ISessionStore", "IHttpTransport"]
