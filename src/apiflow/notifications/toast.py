"""Notification service backed by a UI toast system."""

from __future__ import annotations

import logging
from typing import List, Optional

from .base import NotificationHandle, ToastBackend

logger = logging.getLogger(__name__)


class ToastNotificationService:
    """Drive a :class:`ToastBackend`, keeping track of outstanding pending toasts.

    Pending toasts are shown with ``pending_duration`` (0 keeps them open
    until dismissed). A toast is only dismissed through its own handle, either
    by ``destroy(handle)`` or by ``error(text, handle)``, so actions sharing
    one service never close each other's toasts. Handles already dismissed
    are ignored and the backend sees each handle at most once.
    """

    def __init__(self, backend: ToastBackend, *, pending_duration: float = 0) -> None:
        self.backend = backend
        self.pending_duration = pending_duration
        self._outstanding: List[NotificationHandle] = []

    def pending(self, text: str) -> Optional[NotificationHandle]:
        handle = self.backend.loading(text, self.pending_duration)
        if handle is not None:
            self._outstanding.append(handle)
        return handle

    def success(self, text: str) -> None:
        self.backend.success(text)

    def error(self, text: str, handle: Optional[NotificationHandle] = None) -> None:
        self.backend.error(text)
        self.destroy(handle)

    def destroy(self, handle: Optional[NotificationHandle] = None) -> None:
        if handle is None or handle not in self._outstanding:
            return
        self._outstanding.remove(handle)
        logger.debug("Dismissing toast %r", handle)
        self.backend.destroy(handle)
