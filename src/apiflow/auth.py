"""Pluggable sources for the bearer token attached to outgoing requests."""

from __future__ import annotations

import inspect
from typing import Awaitable, Callable, Optional, Protocol, Union, runtime_checkable

from .runtime import get_active_token


@runtime_checkable
class TokenSource(Protocol):
    """Anything that can produce the current ID token, or None when signed out."""

    async def get_id_token(self) -> Optional[str]: ...


class StaticTokenSource:
    """Always return the same token; handy for scripts and tests."""

    def __init__(self, token: Optional[str]) -> None:
        self._token = token

    async def get_id_token(self) -> Optional[str]:
        return self._token


class RuntimeTokenSource:
    """Read the token bound to the current request via ``runtime.request_context``."""

    async def get_id_token(self) -> Optional[str]:
        return get_active_token()


class CallableTokenSource:
    """Adapt a plain function (sync or async) to the TokenSource protocol."""

    def __init__(self, func: Callable[[], Union[Optional[str], Awaitable[Optional[str]]]]) -> None:
        self._func = func

    async def get_id_token(self) -> Optional[str]:
        token = self._func()
        if inspect.isawaitable(token):
            token = await token
        return token
