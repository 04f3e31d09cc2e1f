"""Application configuration helpers."""

from __future__ import annotations

from .credentials import API_KEY_ENV_VAR, obtain_credential
from .env import read_env, require_env_var, require_env_vars
from .errors import ConfigurationError, CredentialMissingError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .steam import (
    SteamConfig,
    default_steam_resilience,
    get_steam_config,
    parse_account_id,
    resolve_account_id,
)
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "API_KEY_ENV_VAR",
    "CacheConfig",
    "ConfigurationError",
    "CredentialMissingError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SteamConfig",
    "StorageConfig",
    "configure_logging",
    "default_steam_resilience",
    "get_database_config",
    "get_steam_config",
    "get_storage_config",
    "obtain_credential",
    "parse_account_id",
    "read_env",
    "require_env_var",
    "require_env_vars",
    "resolve_account_id",
]
