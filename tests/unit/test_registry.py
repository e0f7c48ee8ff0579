"""Forwarding proxy and service registry."""

from __future__ import annotations

import pytest

from apiflow.exceptions import ServiceNotRegisteredError
from apiflow.registry import ForwardingProxy, ServiceRegistry, unwrap


class Target:
    kind = "target"

    def __init__(self):
        self.calls = 0

    def ping(self):
        self.calls += 1
        return "pong"


def test_proxy_forwards_attributes_and_methods():
    target = Target()
    proxy = ForwardingProxy(target)

    assert proxy.kind == "target"
    assert proxy.ping() == "pong"
    assert target.calls == 1


def test_proxy_missing_attribute_is_none():
    proxy = ForwardingProxy(Target())

    assert proxy.does_not_exist is None


def test_proxy_writes_through_to_target():
    target = Target()
    proxy = ForwardingProxy(target)

    proxy.calls = 7

    assert target.calls == 7


def test_unwrap_returns_target():
    target = Target()
    assert unwrap(ForwardingProxy(target)) is target
    assert unwrap(target) is target


def test_publish_sender_wraps_once():
    registry = ServiceRegistry()
    target = Target()

    proxy = registry.publish_sender(target)
    again = registry.publish_sender(proxy)

    assert isinstance(proxy, ForwardingProxy)
    assert again is proxy
    assert unwrap(registry.require_sender()) is target


def test_require_sender_raises_when_empty():
    with pytest.raises(ServiceNotRegisteredError):
        ServiceRegistry().require_sender()


def test_clear_empties_slots():
    registry = ServiceRegistry(sender=object(), token_source=object(), toast_backend=object())
    registry.clear()
    assert (registry.sender, registry.token_source, registry.toast_backend) == (None, None, None)
