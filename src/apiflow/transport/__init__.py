"""HTTP transports for apiflow."""

from .base import (
    COMMON_HEADERS,
    DEFAULT_RESPONSE_ENCODING,
    RESPONSE_ENCODINGS,
    FormData,
    PendingRequest,
    ResponseEncoding,
    Transport,
    TransportResponse,
    is_structured,
    validate_status,
)
from .httpx_transport import HttpxTransport
from .requests_transport import RequestsTransport

__all__ = [
    "COMMON_HEADERS",
    "DEFAULT_RESPONSE_ENCODING",
    "RESPONSE_ENCODINGS",
    "FormData",
    "HttpxTransport",
    "PendingRequest",
    "RequestsTransport",
    "ResponseEncoding",
    "Transport",
    "TransportResponse",
    "is_structured",
    "validate_status",
]
