"""Organizations API."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..crud import CrudAction, CrudKind, CrudOperationConfig, OutcomeOverride
from ..dispatcher import Route
from ..exceptions import ResponsePayloadError
from ..notifications import NotificationService

PREFIX = "/organizations"


class Organization(BaseModel):
    """Organization record as returned by the API."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Any
    name: str
    owner_id: Optional[Any] = Field(default=None, alias="ownerId")
    stripe_customer_id: Optional[str] = Field(default=None, alias="stripeCustomerId")
    plan: Optional[Any] = None
    created_at: Optional[Any] = Field(default=None, alias="createdAt")


def parse_organization(payload: Any) -> Organization:
    """Validate a create response, turning error bodies into :class:`ResponsePayloadError`.

    A body carrying a ``message`` and no ``id`` is the server's error payload.
    """
    if isinstance(payload, dict) and payload.get("message") and "id" not in payload:
        raise ResponsePayloadError(f"Organization request rejected: {payload['message']}", payload)
    try:
        return Organization.model_validate(payload)
    except ValidationError as e:
        message = f"Unexpected organization payload: {e.error_count()} validation errors"
        raise ResponsePayloadError(message, payload) from e


class OrganizationService:
    """CRUD calls for organizations.

    Reads are silent; writes announce themselves through the notification
    service.
    """

    def __init__(
        self,
        sender: Any,
        *,
        notifications: Optional[NotificationService] = None,
        registry: Optional[Any] = None,
    ) -> None:
        self.sender = sender
        self.notifications = notifications
        self.registry = registry

    def _action(self, config: CrudOperationConfig, action) -> CrudAction:
        return CrudAction(config, action, self.notifications, registry=self.registry)

    async def get_all(self) -> List[Dict[str, Any]]:
        config = CrudOperationConfig(
            kind=CrudKind.READ,
            subject_name="Organizations",
            show_pending=False,
            show_success=False,
        )
        return await self._action(config, lambda: self.sender.send(Route("GET", PREFIX))).run()

    async def create(self, name: str) -> Organization:
        config = CrudOperationConfig(kind=CrudKind.CREATE, subject_name="Organization")

        async def _create() -> Organization:
            payload = await self.sender.send(Route("POST", PREFIX), {"name": name})
            return parse_organization(payload)

        def _announce(result: Optional[Organization], error: Optional[BaseException]) -> OutcomeOverride:
            if error is None and result is not None:
                return OutcomeOverride(success_key=f"Organization '{result.name}' created")
            return OutcomeOverride()

        return await self._action(config, _create).run(_announce)

    async def delete(self, organization_id: str) -> Any:
        config = CrudOperationConfig(kind=CrudKind.DELETE, subject_name="Organization")
        return await self._action(
            config, lambda: self.sender.send(Route("DELETE", f"{PREFIX}/{organization_id}"))
        ).run()
