"""Process-level service registry and the forwarding proxy used to publish services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .auth import TokenSource
from .exceptions import ServiceNotRegisteredError
from .notifications.base import ToastBackend


class ForwardingProxy:
    """Forward attribute access to a wrapped object.

    Attributes the target lacks resolve to ``None`` instead of raising, so
    consumers can probe optional capabilities without knowing the concrete
    class behind the proxy.
    """

    __slots__ = ("_target",)

    def __init__(self, target: Any) -> None:
        object.__setattr__(self, "_target", target)

    def __getattr__(self, name: str) -> Any:
        return getattr(object.__getattribute__(self, "_target"), name, None)

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(object.__getattribute__(self, "_target"), name, value)

    def __repr__(self) -> str:
        return f"ForwardingProxy({object.__getattribute__(self, '_target')!r})"


def unwrap(obj: Any) -> Any:
    """Return the object behind a ForwardingProxy (or ``obj`` itself)."""
    if isinstance(obj, ForwardingProxy):
        return object.__getattribute__(obj, "_target")
    return obj


@dataclass
class ServiceRegistry:
    """Named slots for the services shared across a process.

    Build one at startup (see ``apiflow.bootstrap``) and pass it to the
    components that need it.
    """

    sender: Optional[Any] = None
    token_source: Optional[TokenSource] = None
    toast_backend: Optional[ToastBackend] = None

    def publish_sender(self, sender: Any) -> ForwardingProxy:
        proxy = sender if isinstance(sender, ForwardingProxy) else ForwardingProxy(sender)
        self.sender = proxy
        return proxy

    def require_sender(self) -> Any:
        if self.sender is None:
            raise ServiceNotRegisteredError("sender")
        return self.sender

    def clear(self) -> None:
        self.sender = None
        self.token_source = None
        self.toast_backend = None


default_registry = ServiceRegistry()
