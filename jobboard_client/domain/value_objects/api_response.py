"""Decoded backend response."""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class ApiResponse:
    """Status, decoded JSON body and headers of one backend response.

    The backend wraps bodies as ``{"success": bool, "data": ..., "message": ...}``;
    the helpers below read that envelope without assuming every field exists.
    """

    status_code: int
    payload: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    @property
    def data(self) -> Any:
        if isinstance(self.payload, Mapping):
            return self.payload.get("data")
        return None

    @property
    def success(self) -> bool:
        """Envelope success flag; a body without one counts as successful when ok."""
        if isinstance(self.payload, Mapping) and "success" in self.payload:
            return bool(self.payload["success"])
        return self.ok

    def message(self, default: Optional[str] = None) -> Optional[str]:
        """Backend-provided error or status message."""
        if isinstance(self.payload, Mapping):
            message = self.payload.get("message")
            if not message and isinstance(self.payload.get("error"), Mapping):
                message = self.payload["error"].get("message")
            if not message and isinstance(self.payload.get("error"), str):
                message = self.payload["error"]
            if message:
                return str(message)
        return default
