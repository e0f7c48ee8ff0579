"""Configuration helpers for apiflow."""

from .base import ConfigProblems, Configuration, ConfigurationError, InvalidConfigError, SerializationError
from .client import ClientConfig

__all__ = [
    "ClientConfig",
    "ConfigProblems",
    "Configuration",
    "ConfigurationError",
    "InvalidConfigError",
    "SerializationError",
]
