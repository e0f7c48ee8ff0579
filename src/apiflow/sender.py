"""Authenticated request sending."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .auth import TokenSource
from .dispatcher import RequestDescriptor, RequestDispatcher
from .transport.base import FormData, ResponseEncoding, is_structured

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain"


class AuthenticatedSender:
    """Attach a fresh bearer token to every request and delegate to the dispatcher.

    The token is resolved on each call and never cached. A missing or
    failing token source degrades to an unauthenticated request instead of
    failing the call.
    """

    def __init__(self, dispatcher: RequestDispatcher, token_source: Optional[TokenSource] = None) -> None:
        self.dispatcher = dispatcher
        self.token_source = token_source

    async def _resolve_token(self) -> Optional[str]:
        if self.token_source is None:
            return None
        try:
            return await self.token_source.get_id_token()
        except Exception as exc:
            logger.warning("Failed to get auth token: %s", exc)
            return None

    @staticmethod
    def build_headers(token: Optional[str], body: Any = None) -> Dict[str, str]:
        headers: Dict[str, str] = {
            "Authorization": f"Bearer {token}" if token else "",
        }
        if body is not None:
            if is_structured(body) and not isinstance(body, FormData):
                headers["Content-Type"] = JSON_CONTENT_TYPE
            else:
                headers["Content-Type"] = TEXT_CONTENT_TYPE
        return headers

    async def send(
        self,
        descriptor: RequestDescriptor,
        body: Any = None,
        response_encoding: Optional[ResponseEncoding] = None,
    ) -> Any:
        token = await self._resolve_token()
        headers = self.build_headers(token, body)
        return await self.dispatcher.send(descriptor, body, headers, response_encoding)
