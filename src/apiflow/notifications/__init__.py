"""Lifecycle notification services."""

from .base import NotificationHandle, NotificationService, ToastBackend
from .factory import select_notification_service
from .logging_service import LoggingNotificationService
from .toast import ToastNotificationService

__all__ = [
    "LoggingNotificationService",
    "NotificationHandle",
    "NotificationService",
    "ToastBackend",
    "ToastNotificationService",
    "select_notification_service",
]
