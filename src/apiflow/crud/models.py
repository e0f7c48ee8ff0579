"""Pydantic models for CRUD action configuration and per-call overrides."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class CrudKind(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class CrudOperationConfig(BaseModel):
    """Static configuration of one CRUD action.

    ``kind`` outside the four CRUD verbs is accepted and reported with the
    generic "Processing" wording. camelCase spellings (``subjectName``,
    ``showLoading``...) are accepted for configs coming from JSON.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: str = Field(validation_alias=AliasChoices("kind", "type"))
    subject_name: str = Field(validation_alias=AliasChoices("subject_name", "subjectName", "modelName"))
    show_pending: bool = Field(
        default=True,
        validation_alias=AliasChoices("show_pending", "showPending", "show_loading", "showLoading"),
    )
    show_success: bool = Field(default=True, validation_alias=AliasChoices("show_success", "showSuccess"))
    show_error: bool = Field(default=True, validation_alias=AliasChoices("show_error", "showError"))

    @field_validator("kind", mode="before")
    @classmethod
    def _normalize_kind(cls, value: Any) -> str:
        if isinstance(value, CrudKind):
            return value.value
        return str(value).strip().lower()


class OutcomeOverride(BaseModel):
    """Messages a caller can substitute for one run of an action."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success_key: Optional[str] = Field(default=None, validation_alias=AliasChoices("success_key", "successKey"))
    error_key: Optional[str] = Field(default=None, validation_alias=AliasChoices("error_key", "errorKey"))
    pending_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("pending_key", "pendingKey", "loading_key", "loadingKey"),
    )

    @classmethod
    def coerce(cls, value: Any) -> "OutcomeOverride":
        """Accept a model, a mapping or None from an ``on_result`` callback."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        return cls.model_validate(value)
