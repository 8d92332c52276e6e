"""Value objects for the session domain.

Value objects are immutable and compared by value: a token pair, an outgoing
request, a decoded response.
"""

from .api_response import ApiResponse
from .pending_request import PendingRequest
from .token_pair import (
    FlatTokenPayload,
    NestedTokenPayload,
    TokenPair,
    mask_token,
    normalize_token_payload,
    parse_token_payload,
)

__all__ = [
    "ApiResponse",
    "PendingRequest",
    "TokenPair",
    "FlatTokenPayload",
    "NestedTokenPayload",
    "mask_token",
    "normalize_token_payload",
    "parse_token_payload",
]
