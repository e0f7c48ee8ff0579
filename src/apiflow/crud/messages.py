"""Default notification texts for CRUD actions."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

PENDING_VERBS = {
    "create": "Creating",
    "read": "Loading",
    "update": "Updating",
    "delete": "Deleting",
}

SUCCESS_VERBS = {
    "create": "Created",
    "read": "Loaded",
    "update": "Updated",
    "delete": "Deleted",
}

FAILURE_VERBS = {
    "create": "create",
    "read": "load",
    "update": "update",
    "delete": "delete",
}


def pending_message(kind: str, subject_name: str) -> str:
    return f"{PENDING_VERBS.get(kind, 'Processing')} {subject_name}..."


def success_message(kind: str, subject_name: str) -> str:
    return f"{subject_name} {SUCCESS_VERBS.get(kind, 'Processed')} successfully"


def _lookup(obj: Any, key: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(key)
    return getattr(obj, key, None)


def _first_line(text: str) -> Optional[str]:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return None


def error_detail(error: Any) -> Optional[str]:
    """Best available explanation for a failed action.

    Prefers the server's ``response.data.message``, then the error's own
    ``message`` attribute, then the first line of ``str(error)``.
    """
    server_message = _lookup(_lookup(_lookup(error, "response"), "data"), "message")
    if server_message:
        return str(server_message)

    own_message = _lookup(error, "message")
    if own_message:
        return str(own_message)

    if isinstance(error, BaseException):
        return _first_line(str(error))
    return None


def error_message(kind: str, subject_name: str, error: Any = None) -> str:
    base = f"{subject_name} Failed to {FAILURE_VERBS.get(kind, 'process')}"
    detail = error_detail(error)
    return f"{base}: {detail}" if detail else base
