"""Shared fixtures for the apiflow test suite."""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Tuple

import httpx
import pytest

from apiflow.registry import default_registry
from apiflow.transport import HttpxTransport


class RecordingNotifications:
    """Notification service double that records every call in order."""

    def __init__(self, handle: Any = "handle-1") -> None:
        self.handle = handle
        self.calls: List[Tuple[str, Any]] = []
        self.error_handles: List[Any] = []

    def pending(self, text: str):
        self.calls.append(("pending", text))
        return self.handle

    def success(self, text: str) -> None:
        self.calls.append(("success", text))

    def error(self, text: str, handle: Optional[Any] = None) -> None:
        self.calls.append(("error", text))
        self.error_handles.append(handle)

    def destroy(self, handle: Optional[Any] = None) -> None:
        self.calls.append(("destroy", handle))

    def names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def texts(self, name: str) -> List[Any]:
        return [value for call_name, value in self.calls if call_name == name]


@pytest.fixture
def notifications() -> RecordingNotifications:
    return RecordingNotifications()


@pytest.fixture
def captured_requests() -> List[httpx.Request]:
    return []


@pytest.fixture
def mock_transport_factory(captured_requests) -> Callable[..., HttpxTransport]:
    """Build an HttpxTransport whose client answers from a handler function."""

    def factory(handler: Optional[Callable[[httpx.Request], httpx.Response]] = None) -> HttpxTransport:
        def _default(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"ok": True})

        def _recording(request: httpx.Request) -> httpx.Response:
            captured_requests.append(request)
            return (handler or _default)(request)

        client = httpx.AsyncClient(
            base_url="https://api.example.com/api",
            transport=httpx.MockTransport(_recording),
        )
        return HttpxTransport("https://api.example.com/api", client=client)

    return factory


@pytest.fixture(autouse=True)
def _reset_default_registry():
    """Keep the process-wide registry empty between tests."""
    default_registry.clear()
    yield
    default_registry.clear()


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: mark test as integration test")
