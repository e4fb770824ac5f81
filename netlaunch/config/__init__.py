from netlaunch.config.loader import clear_cache, load_network_config
from netlaunch.config.schema import (
    DEFAULT_ACCOUNT,
    CampaignUpdateOptions,
    ChainInitOptions,
    KeyringBackend,
    NetworkConfig,
    ProviderName,
    ValidatorOptions,
)

__all__ = [
    "DEFAULT_ACCOUNT",
    "CampaignUpdateOptions",
    "ChainInitOptions",
    "KeyringBackend",
    "NetworkConfig",
    "ProviderName",
    "ValidatorOptions",
    "clear_cache",
    "load_network_config",
]
