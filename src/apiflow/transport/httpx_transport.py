"""Async transport backed by ``httpx.AsyncClient``."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

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


class HttpxTransport:
    """Send pipeline requests with a shared ``httpx.AsyncClient``.

    Relative request URLs are resolved against ``base_url``. Statuses in the
    200-599 range are returned as responses; only failures that produced no
    usable response raise :class:`TransportError`.
    """

    def __init__(
        self,
        base_url: str = "",
        *,
        timeout: float = 30.0,
        headers: Optional[Mapping[str, str]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url
        self.default_headers: Dict[str, str] = dict(headers if headers is not None else COMMON_HEADERS)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout, connect=10.0),
            follow_redirects=True,
        )

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP session when this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def request(self, request: PendingRequest) -> TransportResponse:
        is_form = isinstance(request.body, FormData)
        headers = merge_headers(self.default_headers, request.headers, form=is_form)
        kwargs: Dict[str, Any] = {}

        if is_form:
            kwargs["data"] = request.body.fields
            if request.body.files:
                kwargs["files"] = request.body.files
        elif request.body is not None:
            kwargs["content"] = encode_leftover_body(request)

        logger.debug("HTTP → %s %s", request.method, request.url)
        try:
            response = await self._client.request(request.method, request.url, headers=headers, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
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
