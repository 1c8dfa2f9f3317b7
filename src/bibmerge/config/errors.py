"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when configuration values are invalid."""


class ConfigError(ConfigurationError):
    """Raised when command-line parameters are invalid or missing."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required configuration values are absent or blank."""
