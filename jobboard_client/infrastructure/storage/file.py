"""
JSON file session store.

Persists the token pair to a single JSON file so a session survives process
restarts, the way a browser's local storage survives page reloads:

    {"access_token": "...", "refresh_token": "..."}

**Security Note**: the file holds live bearer credentials. It is created with
mode 0600 and replaced atomically (write to a temp file in the same directory,
then `os.replace`), so a crash mid-write never leaves a half-written pair.
Blocking file I/O runs in a worker thread to keep the event loop free.
"""

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import structlog

from jobboard_client.core.exceptions import StorageError
from jobboard_client.domain.interfaces.session_store import ISessionStore
from jobboard_client.domain.value_objects.token_pair import TokenPair

logger = structlog.get_logger(__name__)


class FileSessionStore(ISessionStore):
    """Stores the token pair in a JSON file."""

    def __init__(
        self,
        path: Union[str, Path],
        access_key: str = "access_token",
        refresh_key: str = "refresh_token",
    ):
        self.path = Path(path).expanduser()
        self.access_key = access_key
        self.refresh_key = refresh_key

    async def get(self) -> Optional[TokenPair]:
        return await asyncio.to_thread(self._read)

    async def set(self, tokens: TokenPair) -> None:
        await asyncio.to_thread(
            self._write, {self.access_key: tokens.access, self.refresh_key: tokens.refresh}
        )
        logger.debug("Session tokens stored", store="file", path=str(self.path), tokens=tokens.mask_for_logging())

    async def clear(self) -> None:
        await asyncio.to_thread(self._remove)
        logger.debug("Session tokens cleared", store="file", path=str(self.path))

    def _read(self) -> Optional[TokenPair]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read session file: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring corrupt session file", path=str(self.path))
            return None

        if not isinstance(data, dict) or not data.get(self.access_key):
            return None
        return TokenPair(access=str(data[self.access_key]), refresh=str(data.get(self.refresh_key) or ""))

    def _write(self, data: dict) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".session-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh)
                os.chmod(tmp_path, 0o600)
                os.replace(tmp_path, self.path)
            except BaseException:
                Path(tmp_path).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write session file: {e}") from e

    def _remove(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to remove session file: {e}") from e
