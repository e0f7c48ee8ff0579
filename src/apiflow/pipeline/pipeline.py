"""Ordered request/response transform chain applied around every transport call."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, TypeVar

from ..exceptions import PipelineFrozenError, TransformError
from ..transport.base import PendingRequest, TransportResponse

logger = logging.getLogger(__name__)

RequestTransform = Callable[[PendingRequest], Optional[PendingRequest]]
ResponseTransform = Callable[[TransportResponse], Optional[TransportResponse]]
ErrorHook = Callable[[Exception], None]

_F = TypeVar("_F", bound=Callable)


def _transform_name(transform: Callable) -> str:
    return getattr(transform, "__qualname__", None) or getattr(transform, "__name__", None) or repr(transform)


class TransformPipeline:
    """Registration-ordered transforms shared by every request of a process.

    Request transforms run before the transport call, response transforms
    after it, and error hooks observe transport failures before they are
    re-raised. A transform may return a new object or mutate its argument in
    place and return ``None``; either way the next transform receives the
    result. Transforms may change headers and bodies, never the method or URL.

    Call :meth:`freeze` once wiring is complete; the pipeline is read-only
    afterwards.
    """

    def __init__(self) -> None:
        self._request_transforms: List[RequestTransform] = []
        self._response_transforms: List[ResponseTransform] = []
        self._error_hooks: List[ErrorHook] = []
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def request_transforms(self) -> tuple[RequestTransform, ...]:
        return tuple(self._request_transforms)

    @property
    def response_transforms(self) -> tuple[ResponseTransform, ...]:
        return tuple(self._response_transforms)

    @property
    def error_hooks(self) -> tuple[ErrorHook, ...]:
        return tuple(self._error_hooks)

    def _ensure_mutable(self) -> None:
        if self._frozen:
            raise PipelineFrozenError()

    def add_request_transform(self, transform: _F) -> _F:
        self._ensure_mutable()
        self._request_transforms.append(transform)
        return transform

    def add_response_transform(self, transform: _F) -> _F:
        self._ensure_mutable()
        self._response_transforms.append(transform)
        return transform

    def add_error_hook(self, hook: _F) -> _F:
        self._ensure_mutable()
        self._error_hooks.append(hook)
        return hook

    def freeze(self) -> "TransformPipeline":
        self._frozen = True
        return self

    def apply_request_transforms(self, request: PendingRequest) -> PendingRequest:
        method, url = request.method, request.url
        for transform in self._request_transforms:
            result = transform(request)
            if result is not None:
                request = result
            if request.method != method or request.url != url:
                raise TransformError(
                    f"Request transform {_transform_name(transform)} changed the target "
                    f"from {method} {url} to {request.method} {request.url}"
                )
        return request

    def apply_response_transforms(self, response: TransportResponse) -> TransportResponse:
        for transform in self._response_transforms:
            result = transform(response)
            if result is not None:
                response = result
        return response

    def apply_error_hooks(self, error: Exception) -> None:
        """Let every hook observe ``error``; a hook may raise a replacement."""
        for hook in self._error_hooks:
            logger.debug("Error hook %s observing %s", _transform_name(hook), type(error).__name__)
            hook(error)
