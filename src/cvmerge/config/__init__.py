"""Application configuration helpers."""

from __future__ import annotations

from .env import env_bool, env_float, optional_env_var
from .errors import ConfigurationError
from .merge import MergeConfig, get_merge_config

__all__ = [
    "ConfigurationError",
    "MergeConfig",
    "env_bool",
    "env_float",
    "get_merge_config",
    "optional_env_var",
]
