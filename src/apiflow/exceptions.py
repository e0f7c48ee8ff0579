"""Shared exception types for apiflow."""

from __future__ import annotations

from typing import Any, Optional


class ApiflowError(RuntimeError):
    """Base exception for apiflow errors."""

    def __init__(self, message: str, *, error_code: str = "apiflow_error") -> None:
        super().__init__(message)
        self.error_code = error_code


class TransportError(ApiflowError):
    """Raised when a request never produced an HTTP response."""

    def __init__(
        self,
        message: str,
        *,
        request: Optional[Any] = None,
        response: Optional[Any] = None,
        error_code: str = "TRANSPORT_ERROR",
    ) -> None:
        super().__init__(message, error_code=error_code)
        self.request = request
        self.response = response


class UnauthorizedError(TransportError):
    """The server answered 401 for the current credentials."""

    def __init__(self, response: Any, *, request: Optional[Any] = None) -> None:
        url = getattr(request, "url", None) or getattr(getattr(response, "request", None), "url", None)
        message = f"Unauthorized request to {url}" if url else "Unauthorized request"
        super().__init__(message, request=request, response=response, error_code="UNAUTHORIZED")


class TransformError(ApiflowError):
    """A pipeline transform broke the request contract."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_code="TRANSFORM_ERROR")


class PipelineFrozenError(ApiflowError):
    """Raised when registering a transform on a frozen pipeline."""

    def __init__(self) -> None:
        super().__init__(
            "Transform pipeline is frozen; register transforms before the first request",
            error_code="PIPELINE_FROZEN",
        )


class ActionNotConfiguredError(ApiflowError):
    """A CRUD action was run without an action callable."""

    def __init__(self, message: str = "The action is not found.") -> None:
        super().__init__(message, error_code="ACTION_NOT_CONFIGURED")


class ActionAlreadyRunError(ApiflowError):
    """A CRUD action instance was run more than once."""

    def __init__(self, subject_name: str) -> None:
        super().__init__(
            f"Action for '{subject_name}' has already been run; create a new CrudAction",
            error_code="ACTION_ALREADY_RUN",
        )


class ServiceNotRegisteredError(ApiflowError):
    """A registry slot was read before anything was published into it."""

    def __init__(self, slot: str) -> None:
        super().__init__(f"No {slot} has been registered", error_code="SERVICE_NOT_REGISTERED")
        self.slot = slot


class ResponsePayloadError(ApiflowError):
    """A received body is an error payload, or does not have the expected shape.

    ``response`` mirrors a client response (``{"data": payload}``) so the
    server's ``message`` is available as ``error.response["data"]["message"]``.
    """

    def __init__(self, message: str, payload: Any) -> None:
        super().__init__(message, error_code="RESPONSE_PAYLOAD")
        self.payload = payload
        self.response = {"data": payload}
