"""Blocking ``requests`` transport run off the event loop."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional

import requests

from ..exceptions import TransportError
from .base import (
    COMMON_HEADERS,
    FormData,
    PendingRequest,
    TransportResponse,
    decode_body,
    encode_leftover_body,
    merge_headers,
    validate_status,
)

logger = logging.getLogger(__name__)


def join_url(base_url: str, url: str) -> str:
    if not base_url or url.startswith(("http://", "https://")):
        return url
    return base_url.rstrip("/") + "/" + url.lstrip("/")


class RequestsTransport:
    """Send pipeline requests through a ``requests.Session``.

    Each call runs in the default thread pool via ``asyncio.to_thread`` so the
    event loop stays free while the blocking request is in flight.
    """

    def __init__(
        self,
        base_url: str = "",
        *,
        timeout: float = 30.0,
        headers: Optional[Mapping[str, str]] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.default_headers: Dict[str, str] = dict(headers if headers is not None else COMMON_HEADERS)
        self._owns_session = session is None
        self._session = session or requests.Session()

    async def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def _send(self, request: PendingRequest) -> requests.Response:
        is_form = isinstance(request.body, FormData)
        kwargs: Dict[str, Any] = {}

        if is_form:
            kwargs["data"] = request.body.fields
            if request.body.files:
                kwargs["files"] = request.body.files
        elif request.body is not None:
            kwargs["data"] = encode_leftover_body(request)

        return self._session.request(
            request.method,
            join_url(self.base_url, request.url),
            headers=merge_headers(self.default_headers, request.headers, form=is_form),
            timeout=self.timeout,
            **kwargs,
        )

    async def request(self, request: PendingRequest) -> TransportResponse:
        logger.debug("HTTP → %s %s", request.method, request.url)
        try:
            response = await asyncio.to_thread(self._send, request)
        except requests.RequestException as exc:
            raise TransportError(f"{request.method} {request.url} failed: {exc}", request=request) from exc

        result = TransportResponse(
            status_code=response.status_code,
            data=decode_body(response.content, response.text, request.response_encoding),
            headers=dict(response.headers),
            request=request,
        )
        if not validate_status(response.status_code):
            raise TransportError(
                f"{request.method} {request.url} returned unexpected status {response.status_code}",
                request=request,
                response=result,
            )
        return result
