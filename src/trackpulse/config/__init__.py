"""Application configuration helpers."""

from __future__ import annotations

from .copilot import CopilotConfig, get_copilot_config
from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .holded import HoldedConfig, get_holded_config
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import StorageConfig, get_storage_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "CopilotConfig",
    "HoldedConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_copilot_config",
    "get_holded_config",
    "get_storage_config",
    "require_env_var",
    "require_env_vars",
]
