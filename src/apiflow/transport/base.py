"""Transport contract shared by every concrete HTTP backend.

The dispatcher and the pipeline only ever see :class:`PendingRequest` and
:class:`TransportResponse`; a transport turns one into the other.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Protocol, get_args

from pydantic import BaseModel

from ..exceptions import TransportError


ResponseEncoding = Literal["json", "text", "blob", "arraybuffer", "document"]

RESPONSE_ENCODINGS: tuple[str, ...] = get_args(ResponseEncoding)
DEFAULT_RESPONSE_ENCODING: ResponseEncoding = "json"

COMMON_HEADERS: Dict[str, str] = {
    "Content-Type": "application/json",
}


def validate_status(status_code: int) -> bool:
    """Every HTTP status from 200 through 599 counts as a received response."""
    return 200 <= status_code < 600


@dataclass
class FormData:
    """Multipart or urlencoded form payload; passed through to the transport untouched."""

    fields: Dict[str, Any] = field(default_factory=dict)
    files: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PendingRequest:
    """A request on its way through the transform pipeline."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = None
    response_encoding: ResponseEncoding = DEFAULT_RESPONSE_ENCODING


@dataclass
class TransportResponse:
    """A received HTTP response, whatever its status."""

    status_code: int
    data: Any
    headers: Dict[str, str] = field(default_factory=dict)
    request: Optional[PendingRequest] = None


class Transport(Protocol):
    """Executes one HTTP exchange."""

    async def request(self, request: PendingRequest) -> TransportResponse: ...

    async def close(self) -> None: ...


def is_structured(body: Any) -> bool:
    """Return True for bodies that are serialized as JSON (mappings, sequences, models)."""
    return isinstance(body, (Mapping, list, tuple, BaseModel))


def merge_headers(
    defaults: Mapping[str, str], headers: Mapping[str, str], *, form: bool = False
) -> Dict[str, str]:
    """Overlay request headers on the transport defaults, ignoring key case.

    Form bodies drop Content-Type so the HTTP library can write its own
    multipart boundary.
    """
    merged = {key: value for key, value in defaults.items() if key.lower() not in {k.lower() for k in headers}}
    merged.update(headers)
    if form:
        merged = {key: value for key, value in merged.items() if key.lower() != "content-type"}
    return merged


def encode_leftover_body(request: PendingRequest) -> Any:
    """Serialize a structured body that reached the transport unencoded.

    A body that cannot be JSON encoded fails the request with
    :class:`TransportError` instead of being sent in some other form.
    """
    body = request.body
    try:
        if isinstance(body, BaseModel):
            return body.model_dump_json()
        if is_structured(body):
            return json.dumps(body)
    except (TypeError, ValueError) as exc:
        raise TransportError(
            f"{request.method} {request.url} body is not JSON serializable: {exc}",
            request=request,
            error_code="ENCODE_ERROR",
        ) from exc
    if isinstance(body, bytearray):
        return bytes(body)
    return body


def decode_body(content: bytes, text: str, encoding: str) -> Any:
    """Map raw response content onto the requested response encoding.

    json, text and document bodies stay textual; parsing into structured
    data is the job of the response transforms.
    """
    if encoding == "blob":
        return bytes(content)
    if encoding == "arraybuffer":
        return bytearray(content)
    return text
