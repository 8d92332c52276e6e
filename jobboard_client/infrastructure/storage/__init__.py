from .file import FileSessionStore
from .memory import InMemorySessionStore
from .redis import RedisSessionStore

__all__ = ["FileSessionStore", "InMemorySessionStore", "RedisSessionStore"]
