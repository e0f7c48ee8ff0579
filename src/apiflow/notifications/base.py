"""Protocol contracts for lifecycle notifications.

These protocols let the CRUD orchestrator talk to any notification sink
without depending on a particular UI toolkit.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

NotificationHandle = Any


@runtime_checkable
class NotificationService(Protocol):
    """Sink for pending/success/error messages of one operation."""

    def pending(self, text: str) -> Optional[NotificationHandle]: ...

    def success(self, text: str) -> None: ...

    def error(self, text: str, handle: Optional[NotificationHandle] = None) -> None:
        """Show ``text``; when ``handle`` is given, also dismiss that pending message."""

    def destroy(self, handle: Optional[NotificationHandle] = None) -> None: ...


@runtime_checkable
class ToastBackend(Protocol):
    """Minimal surface of a UI toast system (loading/success/error/destroy)."""

    def loading(self, text: str, duration: float) -> Optional[NotificationHandle]: ...

    def success(self, text: str) -> Any: ...

    def error(self, text: str) -> Any: ...

    def destroy(self, handle: NotificationHandle) -> Any: ...
