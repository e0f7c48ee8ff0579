"""Fallback notification service that writes to the log."""

from __future__ import annotations

import itertools
import logging
from typing import Dict, Optional

from .base import NotificationHandle

logger = logging.getLogger("apiflow.notifications")


class LoggingNotificationService:
    """Log lifecycle messages when no toast backend is registered.

    ``pending`` returns a numeric handle; ``destroy`` logs the dismissal of
    that pending message once and ignores unknown handles.
    """

    def __init__(self) -> None:
        self._handles = itertools.count(1)
        self._pending: Dict[int, str] = {}

    def pending(self, text: str) -> NotificationHandle:
        handle = next(self._handles)
        self._pending[handle] = text
        logger.info("[Loading] %s", text)
        return handle

    def success(self, text: str) -> None:
        logger.info("[Success] %s", text)

    def error(self, text: str, handle: Optional[NotificationHandle] = None) -> None:
        logger.error("[Error] %s", text)
        self.destroy(handle)

    def destroy(self, handle: Optional[NotificationHandle] = None) -> None:
        text = self._pending.pop(handle, None)
        if text is not None:
            logger.info("[Destroy] %s", text)
