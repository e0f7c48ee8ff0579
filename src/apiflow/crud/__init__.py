"""CRUD action orchestration."""

from .action import ActionState, CrudAction, ResultCallback
from .messages import error_detail, error_message, pending_message, success_message
from .models import CrudKind, CrudOperationConfig, OutcomeOverride

__all__ = [
    "ActionState",
    "CrudAction",
    "CrudKind",
    "CrudOperationConfig",
    "OutcomeOverride",
    "ResultCallback",
    "error_detail",
    "error_message",
    "pending_message",
    "success_message",
]
