"""Wire transport, pipeline, dispatcher and sender once at process start."""

from __future__ import annotations

import logging
from typing import Literal, Optional

from .auth import TokenSource
from .config import ClientConfig
from .dispatcher import RequestDispatcher
from .notifications.base import ToastBackend
from .pipeline import TransformPipeline, build_default_pipeline
from .pipeline.transforms import LocaleSource, UnauthorizedCallback
from .registry import ServiceRegistry, default_registry
from .sender import AuthenticatedSender
from .transport import HttpxTransport, RequestsTransport, Transport

logger = logging.getLogger(__name__)

TransportKind = Literal["httpx", "requests"]


def create_transport(config: ClientConfig, kind: TransportKind = "httpx") -> Transport:
    if kind == "httpx":
        return HttpxTransport(config.base_url, timeout=config.timeout)
    if kind == "requests":
        return RequestsTransport(config.base_url, timeout=config.timeout)
    raise ValueError(f"Unknown transport kind {kind!r}; expected 'httpx' or 'requests'")


def create_sender(
    config: Optional[ClientConfig] = None,
    *,
    token_source: Optional[TokenSource] = None,
    transport: Optional[Transport] = None,
    transport_kind: TransportKind = "httpx",
    pipeline: Optional[TransformPipeline] = None,
    locale_source: Optional[LocaleSource] = None,
    on_unauthorized: Optional[UnauthorizedCallback] = None,
) -> AuthenticatedSender:
    """Build an authenticated sender over the default transform pipeline.

    The pipeline is frozen before it is returned; pass a pre-built one to
    register extra transforms.
    """
    config = config or ClientConfig.from_environment()
    config.validate_or_raise()

    if pipeline is None:
        pipeline = build_default_pipeline(
            config.default_locale,
            locale_source=locale_source,
            on_unauthorized=on_unauthorized,
        )
    pipeline.freeze()

    transport = transport or create_transport(config, transport_kind)
    logger.debug("Sender configured for %s with %s", config.base_url, type(transport).__name__)
    return AuthenticatedSender(RequestDispatcher(transport, pipeline), token_source)


def create_registry(
    config: Optional[ClientConfig] = None,
    *,
    token_source: Optional[TokenSource] = None,
    toast_backend: Optional[ToastBackend] = None,
    registry: Optional[ServiceRegistry] = None,
    **sender_options,
) -> ServiceRegistry:
    """Populate a registry with a sender, its token source and an optional toast backend.

    Passing ``registry=apiflow.registry.default_registry`` publishes the
    services process-wide.
    """
    registry = registry if registry is not None else ServiceRegistry()
    registry.token_source = token_source
    registry.toast_backend = toast_backend
    registry.publish_sender(create_sender(config, token_source=token_source, **sender_options))
    return registry


def configure_default_registry(config: Optional[ClientConfig] = None, **options) -> ServiceRegistry:
    return create_registry(config, registry=default_registry, **options)
