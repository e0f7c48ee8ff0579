"""Turn request descriptors into transport calls wrapped by the transform pipeline."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, NamedTuple, Optional, Union

from .exceptions import TransportError
from .pipeline import TransformPipeline
from .transport.base import (
    DEFAULT_RESPONSE_ENCODING,
    RESPONSE_ENCODINGS,
    PendingRequest,
    ResponseEncoding,
    Transport,
)

logger = logging.getLogger(__name__)


class Route(NamedTuple):
    """Explicit method and URL for a request."""

    method: str
    url: str


RequestDescriptor = Union[str, Route, Mapping[str, str]]


def normalize_descriptor(descriptor: RequestDescriptor) -> Route:
    """Resolve a descriptor to a Route; a bare path means POST to that path."""
    if isinstance(descriptor, str):
        return Route("POST", descriptor)
    if isinstance(descriptor, Route):
        return Route(descriptor.method.upper(), descriptor.url)
    if isinstance(descriptor, Mapping):
        try:
            return Route(str(descriptor["method"]).upper(), descriptor["url"])
        except KeyError as exc:
            raise TypeError(f"Request descriptor is missing {exc.args[0]!r}: {dict(descriptor)!r}") from exc
    raise TypeError(f"Unsupported request descriptor: {descriptor!r}")


class RequestDispatcher:
    """Send one request through the pipeline and the transport.

    HTTP statuses never decide success here; whatever body the server
    returned is handed back after the response transforms. Only transport
    failures raise, after the pipeline's error hooks have seen them.
    """

    def __init__(self, transport: Transport, pipeline: Optional[TransformPipeline] = None) -> None:
        self.transport = transport
        self.pipeline = pipeline or TransformPipeline()

    async def send(
        self,
        descriptor: RequestDescriptor,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        response_encoding: Optional[ResponseEncoding] = None,
    ) -> Any:
        route = normalize_descriptor(descriptor)
        encoding = response_encoding or DEFAULT_RESPONSE_ENCODING
        if encoding not in RESPONSE_ENCODINGS:
            raise ValueError(f"Unsupported response encoding {encoding!r}; expected one of {RESPONSE_ENCODINGS}")

        request = PendingRequest(
            method=route.method,
            url=route.url,
            headers=dict(headers or {}),
            body=body,
            response_encoding=encoding,
        )
        request = self.pipeline.apply_request_transforms(request)

        try:
            response = await self.transport.request(request)
        except TransportError as exc:
            logger.warning("Transport failure for %s %s: %s", route.method, route.url, exc)
            self.pipeline.apply_error_hooks(exc)
            raise

        response = self.pipeline.apply_response_transforms(response)
        return response.data
