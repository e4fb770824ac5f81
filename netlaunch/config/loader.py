"""
Configuration loader for netlaunch.

Loads the network config.yaml, applies NETLAUNCH_* environment
overrides, validates it against the Pydantic schema and caches the
result for the rest of the process.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from netlaunch.config.schema import NetworkConfig
from netlaunch.exceptions import ConfigurationError

CONFIG_PATH_ENV = "NETLAUNCH_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".netlaunch" / "config.yaml"

# Environment variable -> NetworkConfig field
ENV_OVERRIDES: dict[str, str] = {
    "NETLAUNCH_PROVIDER": "provider",
    "NETLAUNCH_API_URL": "api_url",
    "NETLAUNCH_BROADCAST_PATH": "broadcast_path",
    "NETLAUNCH_TIMEOUT": "timeout_seconds",
    "NETLAUNCH_FROM": "from_account",
    "NETLAUNCH_KEYRING_BACKEND": "keyring_backend",
    "NETLAUNCH_KEYRING_DIR": "keyring_dir",
    "NETLAUNCH_CHAIN_BINARY": "chain_binary",
    "NETLAUNCH_SPN_HOME": "spn_home",
}

# Module-level cache: resolved config path (or "") -> NetworkConfig
_loaded_configs: dict[str, NetworkConfig] = {}


def find_config_path(config_path: Optional[str | Path] = None) -> Optional[Path]:
    """
    Resolve which config file to read.

    Explicit path first, then NETLAUNCH_CONFIG, then
    ~/.netlaunch/config.yaml when it exists. Returns None when no file
    applies and defaults should be used.
    """
    if config_path is not None:
        return Path(config_path).expanduser()

    env_path = os.environ.get(CONFIG_PATH_ENV, "").strip()
    if env_path:
        return Path(env_path).expanduser()

    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigurationError(
            f"Config not found: {path}",
            config_path=str(path),
        )

    try:
        with open(path, "r") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Config file is not valid YAML: {path}\n{e}",
            config_path=str(path),
        ) from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"Config file must contain a mapping: {path}",
            config_path=str(path),
        )
    return raw


def apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of raw with NETLAUNCH_* environment values applied."""
    merged = dict(raw)
    for var, field_name in ENV_OVERRIDES.items():
        value = os.environ.get(var)
        if value:
            merged[field_name] = value
    return merged


def load_network_config(
    config_path: Optional[str | Path] = None,
) -> NetworkConfig:
    """
    Load and validate the network configuration.

    Args:
        config_path: Optional explicit path to config.yaml.

    Returns:
        Validated NetworkConfig instance.

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid.
    """
    path = find_config_path(config_path)
    cache_key = str(path) if path is not None else ""
    if cache_key in _loaded_configs:
        return _loaded_configs[cache_key]

    raw = _read_yaml(path) if path is not None else {}
    raw = apply_env_overrides(raw)

    try:
        config = NetworkConfig(**raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid network config ({path or 'defaults'}):\n{e}",
            config_path=cache_key or None,
        ) from e

    _loaded_configs[cache_key] = config
    return config


def clear_cache() -> None:
    """Clear the config cache. Useful for testing."""
    _loaded_configs.clear()
