"""Pick the notification service for a new CRUD action."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .base import NotificationService
from .logging_service import LoggingNotificationService
from .toast import ToastNotificationService

if TYPE_CHECKING:
    from ..registry import ServiceRegistry


def select_notification_service(registry: Optional["ServiceRegistry"] = None) -> NotificationService:
    """Toast notifications when the registry carries a toast backend, log lines otherwise."""
    if registry is None:
        from ..registry import default_registry

        registry = default_registry

    if registry.toast_backend is not None:
        return ToastNotificationService(registry.toast_backend)
    return LoggingNotificationService()
