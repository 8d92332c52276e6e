"""Outgoing request value object."""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, ClassVar, Mapping, Optional

AUTHORIZATION_HEADER = "Authorization"


def _freeze(value: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(dict(value or {}))


@dataclass(frozen=True)
class PendingRequest:
    """A not-yet-completed backend call plus its auth retry count.

    Instances are immutable: attaching credentials or marking a retry returns
    a new request, so the caller's original is never modified.

    Attributes:
        method: HTTP method, upper-cased.
        path: Endpoint path relative to the API base URL.
        json: JSON body, if any.
        files: Multipart file parts as ``{field: (filename, content, content_type)}``.
            Contents must be bytes so a retried request can send them again.
        params: Query string parameters.
        headers: Extra request headers.
        retry_count: How many times this request was re-sent after a 401.
    """

    method: str
    path: str
    json: Any = None
    files: Optional[Mapping[str, Any]] = None
    params: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    retry_count: int = 0

    MAX_AUTH_RETRIES: ClassVar[int] = 1

    def __post_init__(self):
        if not self.path:
            raise ValueError("Request path cannot be empty")
        if self.retry_count < 0:
            raise ValueError("Retry count cannot be negative")
        if self.json is not None and self.files:
            raise ValueError("A request carries either a JSON body or files, not both")
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "params", _freeze(self.params))
        object.__setattr__(self, "headers", _freeze(self.headers))
        if self.files is not None:
            object.__setattr__(self, "files", _freeze(self.files))

    @property
    def can_retry(self) -> bool:
        return self.retry_count < self.MAX_AUTH_RETRIES

    @property
    def bearer_token(self) -> Optional[str]:
        """Token currently carried in the Authorization header, if any."""
        value = self.headers.get(AUTHORIZATION_HEADER)
        if value and value.startswith("Bearer "):
            return value[len("Bearer "):]
        return None

    def with_bearer(self, token: str) -> "PendingRequest":
        headers = dict(self.headers)
        headers[AUTHORIZATION_HEADER] = f"Bearer {token}"
        return replace(self, headers=headers)

    def mark_retried(self) -> "PendingRequest":
        return replace(self, retry_count=self.retry_count + 1)
