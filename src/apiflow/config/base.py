"""Collect-then-raise validation shared by apiflow configuration objects.

A configuration reports every problem it finds in one pass; callers decide
whether to abort with :meth:`Configuration.validate_or_raise`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from ..exceptions import ApiflowError


class ConfigurationError(ApiflowError):
    """Base exception for configuration problems."""

    def __init__(self, message: str, *, error_code: str = "CONFIGURATION_ERROR") -> None:
        super().__init__(message, error_code=error_code)


class InvalidConfigError(ConfigurationError):
    """One or more settings failed validation; ``problems`` lists them all."""

    def __init__(self, problems: Iterable[str]) -> None:
        self.problems = list(problems)
        lines = "\n".join(f"  - {problem}" for problem in self.problems)
        super().__init__(f"Invalid client configuration:\n{lines}", error_code="INVALID_CONFIG")


class SerializationError(ConfigurationError):
    """Settings could not be read from a dict or the environment."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_code="CONFIG_SERIALIZATION")


@dataclass
class ConfigProblems:
    """Problems found while validating a configuration, in discovery order."""

    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add(self, problem: str) -> None:
        self.errors.append(problem)

    def check(self, condition: bool, problem: str) -> bool:
        """Record ``problem`` unless ``condition`` holds; returns ``condition``."""
        if not condition:
            self.add(problem)
        return condition

    def raise_if_any(self) -> None:
        if self.errors:
            raise InvalidConfigError(self.errors)


class Configuration(ABC):
    """Settings object that validates, and round-trips through plain dicts."""

    @abstractmethod
    def validate(self) -> ConfigProblems:
        """Return every problem with the current settings."""

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Return the settings as a JSON-compatible dict."""

    @classmethod
    @abstractmethod
    def from_dict(cls, data: Dict[str, Any]) -> Configuration:
        """Build settings from a dict; raises :class:`SerializationError` on bad values."""

    def validate_or_raise(self) -> None:
        """Raise :class:`InvalidConfigError` listing every problem, if any."""
        self.validate().raise_if_any()
