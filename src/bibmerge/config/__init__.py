"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_vars
from .errors import ConfigError, ConfigurationError, MissingConfigurationError
from .http_resilience import ResilienceConfig, RetryPolicy
from .koha import KohaConfig, get_koha_config
from .logging import configure_logging
from .run import RunConfig, build_parser, build_run_config

__all__ = [
    "ConfigError",
    "ConfigurationError",
    "KohaConfig",
    "MissingConfigurationError",
    "ResilienceConfig",
    "RetryPolicy",
    "RunConfig",
    "build_parser",
    "build_run_config",
    "configure_logging",
    "get_koha_config",
    "optional_env_var",
    "require_env_vars",
]
