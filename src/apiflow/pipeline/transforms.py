"""Default request and response transforms."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional

from pydantic import BaseModel

from ..exceptions import UnauthorizedError
from ..runtime import get_active_locale, get_request_metadata
from ..transport.base import FormData, PendingRequest, TransportResponse, is_structured
from .pipeline import TransformPipeline

logger = logging.getLogger(__name__)

LocaleSource = Callable[[], Optional[str]]
UnauthorizedCallback = Callable[[Any], None]

DEFAULT_LOCALE = "en"

_TRACE_HEADERS = {
    "request_id": "X-Request-ID",
    "session_id": "X-Session-ID",
}


def json_request_transform(request: PendingRequest) -> PendingRequest:
    """Serialize a structured body to JSON text; textual, binary and form bodies pass through."""
    body = request.body
    if body is None or isinstance(body, (str, bytes, bytearray, FormData)) or not is_structured(body):
        return request

    try:
        if isinstance(body, BaseModel):
            request.body = body.model_dump_json()
        else:
            request.body = json.dumps(body)
    except (TypeError, ValueError) as exc:
        logger.error("Error stringifying request data for %s %s: %s", request.method, request.url, exc)
    return request


def language_header_transform(
    locale_source: Optional[LocaleSource] = None,
    fallback: str = DEFAULT_LOCALE,
) -> Callable[[PendingRequest], PendingRequest]:
    """Build a transform that sets Accept-Language from ``locale_source``."""
    source = locale_source or get_active_locale

    def _language_header(request: PendingRequest) -> PendingRequest:
        request.headers["Accept-Language"] = source() or fallback
        return request

    return _language_header


def trace_header_transform(request: PendingRequest) -> PendingRequest:
    """Propagate request/session identifiers from the runtime metadata."""
    metadata = get_request_metadata()
    for key, header in _TRACE_HEADERS.items():
        value = metadata.get(key)
        if value:
            request.headers[header] = str(value)
    return request


def json_response_transform(response: TransportResponse) -> TransportResponse:
    """Parse a textual body as JSON, keeping the raw text when it is not JSON."""
    if isinstance(response.data, str):
        try:
            response.data = json.loads(response.data)
        except ValueError:
            pass
    return response


class UnauthorizedHook:
    """Observe 401s and trigger the session-expiry side effect.

    ``check_error`` is an error hook: it fires the callback for transport
    errors carrying a 401 response and returns, so the dispatcher re-raises
    the original error. ``check_response`` is a response transform: a 401
    response fires the callback and, when ``raise_on_unauthorized`` is set,
    is raised as :class:`UnauthorizedError`.
    """

    def __init__(
        self,
        on_unauthorized: Optional[UnauthorizedCallback] = None,
        *,
        raise_on_unauthorized: bool = False,
    ) -> None:
        self.on_unauthorized = on_unauthorized
        self.raise_on_unauthorized = raise_on_unauthorized

    def _trigger(self, response: Any) -> None:
        logger.warning("Unauthorized request - session should be expired")
        if self.on_unauthorized is not None:
            self.on_unauthorized(response)

    def check_response(self, response: TransportResponse) -> TransportResponse:
        if response.status_code == 401:
            self._trigger(response)
            if self.raise_on_unauthorized:
                raise UnauthorizedError(response, request=response.request)
        return response

    def check_error(self, error: Exception) -> None:
        response = getattr(error, "response", None)
        if getattr(response, "status_code", None) == 401 and not isinstance(error, UnauthorizedError):
            self._trigger(response)


def build_default_pipeline(
    default_locale: str = DEFAULT_LOCALE,
    *,
    locale_source: Optional[LocaleSource] = None,
    on_unauthorized: Optional[UnauthorizedCallback] = None,
    raise_on_unauthorized: bool = False,
) -> TransformPipeline:
    """Register the standard transforms in order; the result is left unfrozen."""
    pipeline = TransformPipeline()
    unauthorized = UnauthorizedHook(on_unauthorized, raise_on_unauthorized=raise_on_unauthorized)

    pipeline.add_request_transform(json_request_transform)
    pipeline.add_request_transform(language_header_transform(locale_source, fallback=default_locale))
    pipeline.add_request_transform(trace_header_transform)
    pipeline.add_response_transform(json_response_transform)
    pipeline.add_response_transform(unauthorized.check_response)
    pipeline.add_error_hook(unauthorized.check_error)
    return pipeline
