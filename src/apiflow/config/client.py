"""HTTP client configuration.

Handles the settings shared by every outbound request:
- Base URL the request descriptors are resolved against (APIFLOW_BASE_URL)
- Transport timeout in seconds (APIFLOW_TIMEOUT)
- Fallback locale for the Accept-Language header (APIFLOW_DEFAULT_LOCALE)
- Log level used by the command line entry point (LOG_LEVEL)

Explicit parameters take precedence over environment variables, which take
precedence over the defaults below.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict
from urllib.parse import urlparse

from .base import ConfigProblems, Configuration, SerializationError


DEFAULT_BASE_URL = "http://localhost:8080/api"
DEFAULT_TIMEOUT = 30.0
DEFAULT_LOCALE = "en"
DEFAULT_LOG_LEVEL = "INFO"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class ClientConfig(Configuration):
    """Configuration for the authenticated HTTP client.

    Example usage:
        # From environment variables
        config = ClientConfig.from_environment()

        # Environment with explicit overrides
        config = ClientConfig.with_defaults(base_url="https://api.example.com")
        config.validate_or_raise()
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        default_locale: str = DEFAULT_LOCALE,
        log_level: str = DEFAULT_LOG_LEVEL,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.default_locale = default_locale
        self.log_level = log_level

    @property
    def log_level_value(self) -> int:
        return getattr(logging, str(self.log_level).upper(), logging.INFO)

    def validate(self) -> ConfigProblems:
        problems = ConfigProblems()
        self._check_base_url(problems)

        try:
            timeout = float(self.timeout)
        except (TypeError, ValueError):
            problems.add(f"Timeout must be a number of seconds, got {self.timeout!r}")
        else:
            problems.check(timeout > 0, "Timeout must be greater than zero")

        problems.check(bool(str(self.default_locale or "").strip()), "Default locale cannot be empty")
        problems.check(
            str(self.log_level).upper() in _LOG_LEVELS,
            f"Log level '{self.log_level}' is not one of {', '.join(sorted(_LOG_LEVELS))}",
        )
        return problems

    def _check_base_url(self, problems: ConfigProblems) -> None:
        url = (self.base_url or "").strip()
        if not problems.check(bool(url), "Base URL is required"):
            return
        if not problems.check(
            url.startswith(("http://", "https://")),
            "Base URL must start with 'http://' or 'https://' (e.g., 'https://api.example.com')",
        ):
            return
        problems.check(
            bool(urlparse(url).netloc),
            "Base URL must specify a hostname (e.g., 'https://api.example.com')",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base_url": self.base_url,
            "timeout": self.timeout,
            "default_locale": self.default_locale,
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClientConfig":
        try:
            return cls(
                base_url=data.get("base_url", DEFAULT_BASE_URL),
                timeout=float(data.get("timeout", DEFAULT_TIMEOUT)),
                default_locale=data.get("default_locale", DEFAULT_LOCALE),
                log_level=data.get("log_level", DEFAULT_LOG_LEVEL),
            )
        except (AttributeError, TypeError, ValueError) as e:
            raise SerializationError(f"Failed to deserialize ClientConfig: {e}") from e

    @classmethod
    def from_environment(cls) -> "ClientConfig":
        """Create ClientConfig from APIFLOW_* and LOG_LEVEL environment variables."""
        return cls.from_dict(
            {
                "base_url": os.environ.get("APIFLOW_BASE_URL", DEFAULT_BASE_URL),
                "timeout": os.environ.get("APIFLOW_TIMEOUT", DEFAULT_TIMEOUT),
                "default_locale": os.environ.get("APIFLOW_DEFAULT_LOCALE", DEFAULT_LOCALE),
                "log_level": os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL),
            }
        )

    @classmethod
    def with_defaults(cls, **kwargs) -> "ClientConfig":
        """Create ClientConfig with explicit parameters taking precedence over environment."""
        data = cls.from_environment().to_dict()
        data.update({key: value for key, value in kwargs.items() if value is not None})
        return cls.from_dict(data)
