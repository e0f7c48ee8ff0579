"""apiflow: authenticated request pipeline with CRUD notification lifecycle."""

from .auth import CallableTokenSource, RuntimeTokenSource, StaticTokenSource, TokenSource
from .bootstrap import configure_default_registry, create_registry, create_sender
from .crud import CrudAction, CrudKind, CrudOperationConfig, OutcomeOverride
from .dispatcher import RequestDispatcher, Route
from .exceptions import (
    ActionAlreadyRunError,
    ActionNotConfiguredError,
    ApiflowError,
    ResponsePayloadError,
    TransportError,
    UnauthorizedError,
)
from .notifications import LoggingNotificationService, NotificationService, ToastNotificationService
from .pipeline import TransformPipeline
from .registry import ForwardingProxy, ServiceRegistry, default_registry
from .sender import AuthenticatedSender
from .transport import FormData, HttpxTransport, RequestsTransport

__all__ = [
    "ActionAlreadyRunError",
    "ActionNotConfiguredError",
    "ApiflowError",
    "AuthenticatedSender",
    "CallableTokenSource",
    "CrudAction",
    "CrudKind",
    "CrudOperationConfig",
    "FormData",
    "ForwardingProxy",
    "HttpxTransport",
    "LoggingNotificationService",
    "NotificationService",
    "OutcomeOverride",
    "RequestDispatcher",
    "RequestsTransport",
    "ResponsePayloadError",
    "Route",
    "RuntimeTokenSource",
    "ServiceRegistry",
    "StaticTokenSource",
    "ToastNotificationService",
    "TokenSource",
    "TransformPipeline",
    "TransportError",
    "UnauthorizedError",
    "configure_default_registry",
    "create_registry",
    "create_sender",
    "default_registry",
]
