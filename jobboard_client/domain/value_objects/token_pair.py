"""Token pair value object and backend token-payload normalization.

The backend has two token response shapes in the wild, and both are supported
permanently:

* nested: ``{"tokens": {"access": "...", "refresh": "..."}}``
* flat:   ``{"accessToken": "...", "refreshToken": "..."}``

`normalize_token_payload` turns either one into the canonical `TokenPair`.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError


@dataclass(frozen=True)
class TokenPair:
    """Access/refresh bearer tokens issued together by the backend.

    Both values are opaque strings. The access token must be non-empty; the
    refresh token may be empty when the backend did not send one, in which
    case the session cannot be refreshed.
    """

    access: str
    refresh: str = ""

    def __post_init__(self):
        if not self.access:
            raise ValueError("Access token cannot be empty")

    @property
    def can_refresh(self) -> bool:
        return bool(self.refresh)

    def mask_for_logging(self) -> dict:
        """Return masked tokens for safe logging."""
        return {"access": mask_token(self.access), "refresh": mask_token(self.refresh)}


def mask_token(token: Optional[str]) -> str:
    """Mask a token for logging (first 10 chars + asterisks)."""
    if not token:
        return ""
    if len(token) <= 10:
        return "*" * len(token)
    return token[:10] + "*" * (len(token) - 10)


class NestedTokens(BaseModel):
    access: str = Field(min_length=1)
    refresh: Optional[str] = ""


class NestedTokenPayload(BaseModel):
    """``{"tokens": {"access", "refresh"}}`` response shape."""

    model_config = ConfigDict(extra="ignore")

    tokens: NestedTokens

    def to_token_pair(self) -> TokenPair:
        return TokenPair(access=self.tokens.access, refresh=self.tokens.refresh or "")


class FlatTokenPayload(BaseModel):
    """``{"accessToken", "refreshToken"}`` response shape."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    access_token: str = Field(alias="accessToken", min_length=1)
    refresh_token: Optional[str] = Field(default="", alias="refreshToken")

    def to_token_pair(self) -> TokenPair:
        return TokenPair(access=self.access_token, refresh=self.refresh_token or "")


TokenPayload = Union[FlatTokenPayload, NestedTokenPayload]


def parse_token_payload(data: Any) -> Optional[TokenPayload]:
    """Identify which token shape `data` carries.

    The flat shape is checked first; a payload carrying both resolves to the
    flat tokens.

    Returns:
        The matching payload model, or None when no usable access token is present.
    """
    if not isinstance(data, Mapping):
        return None
    for model in (FlatTokenPayload, NestedTokenPayload):
        try:
            return model.model_validate(data)
        except ValidationError:
            continue
    return None


def normalize_token_payload(data: Any) -> Optional[TokenPair]:
    """Normalize a backend ``data`` object into a `TokenPair`.

    Args:
        data: The ``data`` member of a login, register or refresh response.

    Returns:
        The canonical token pair, or None when the payload has no access token.
    """
    payload = parse_token_payload(data)
    if payload is None:
        return None
    return payload.to_token_pair()
