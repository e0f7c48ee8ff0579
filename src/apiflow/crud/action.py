"""CRUD action orchestration with pending/success/error notifications."""

from __future__ import annotations

import inspect
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Mapping, Optional, TypeVar, Union

from ..exceptions import ActionAlreadyRunError, ActionNotConfiguredError
from ..notifications import NotificationService, select_notification_service
from .messages import error_message, pending_message, success_message
from .models import CrudOperationConfig, OutcomeOverride

logger = logging.getLogger(__name__)

R = TypeVar("R")

OverrideLike = Union[OutcomeOverride, Mapping[str, Any], None]
ResultCallback = Callable[[Optional[Any], Optional[BaseException]], Union[OverrideLike, Awaitable[OverrideLike]]]


class ActionState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


class CrudAction(Generic[R]):
    """Run one asynchronous action wrapped in notification lifecycle messages.

    Idle -> Pending -> Success | Error, exactly once per instance. The
    pending message is shown only when ``show_pending`` is set and is
    dismissed on every terminal path. An ``error_key`` override hands the
    handle to ``notifications.error`` instead of dismissing it separately.
    Only this run's own handle is ever dismissed. Errors from the action
    are always re-raised unchanged.

    Example:
        orgs = await CrudAction(
            {"kind": "read", "subject_name": "Organizations", "show_pending": False},
            lambda: sender.send(Route("GET", "/organizations")),
        ).run()
    """

    def __init__(
        self,
        config: Union[CrudOperationConfig, Mapping[str, Any]],
        action: Optional[Callable[[], Union[R, Awaitable[R]]]],
        notifications: Optional[NotificationService] = None,
        *,
        registry: Optional[Any] = None,
    ) -> None:
        self.config = config if isinstance(config, CrudOperationConfig) else CrudOperationConfig.model_validate(config)
        self.action = action
        self.notifications = notifications or select_notification_service(registry)
        self._state = ActionState.IDLE

    @property
    def state(self) -> ActionState:
        return self._state

    async def _invoke_action(self) -> R:
        result = self.action()
        if inspect.isawaitable(result):
            result = await result
        return result

    @staticmethod
    async def _resolve_override(
        on_result: Optional[ResultCallback],
        result: Optional[Any],
        error: Optional[BaseException],
    ) -> OutcomeOverride:
        if on_result is None:
            return OutcomeOverride()
        value = on_result(result, error)
        if inspect.isawaitable(value):
            value = await value
        return OutcomeOverride.coerce(value)

    async def run(self, on_result: Optional[ResultCallback] = None) -> R:
        if self.action is None:
            raise ActionNotConfiguredError()
        if self._state is not ActionState.IDLE:
            raise ActionAlreadyRunError(self.config.subject_name)

        kind = self.config.kind
        subject_name = self.config.subject_name
        handle = None

        self._state = ActionState.PENDING
        if self.config.show_pending:
            handle = self.notifications.pending(pending_message(kind, subject_name))

        try:
            result = await self._invoke_action()
        except Exception as error:
            self._state = ActionState.ERROR
            await self._fail(error, subject_name, handle, on_result)
            raise

        try:
            override = await self._resolve_override(on_result, result, None)
        except Exception:
            self._state = ActionState.ERROR
            self.notifications.destroy(handle)
            raise

        self._state = ActionState.SUCCESS
        if override.pending_key:
            subject_name = override.pending_key

        if override.success_key:
            self.notifications.success(override.success_key)
        elif self.config.show_success:
            self.notifications.success(success_message(kind, subject_name))

        self.notifications.destroy(handle)
        logger.debug("%s %s finished", kind, subject_name)
        return result

    async def _fail(
        self,
        error: Exception,
        subject_name: str,
        handle: Any,
        on_result: Optional[ResultCallback],
    ) -> None:
        logger.debug("%s %s failed: %r", self.config.kind, subject_name, error)
        try:
            override = await self._resolve_override(on_result, None, error)
        except Exception:
            logger.exception("on_result callback failed while handling an error for %s", subject_name)
            override = OutcomeOverride()

        if override.error_key:
            # the service dismisses the pending message it is handed with the error
            self.notifications.error(override.error_key, handle)
            return

        if self.config.show_error:
            self.notifications.error(error_message(self.config.kind, subject_name, error))
        self.notifications.destroy(handle)
