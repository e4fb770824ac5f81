"""
Pydantic configuration schema for netlaunch.

`NetworkConfig` is loaded once per process from YAML and environment
overrides. The per-command option models carry what a caller (the CLI,
or any other front-end) supplies for a single workflow run, so the
workflows never read global flag state.

Optional option fields use None for "not provided". An empty string is
a value the caller explicitly passed.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_ACCOUNT = "default"
DEFAULT_SPN_HOME = Path.home() / "spn"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class KeyringBackend(str, Enum):
    TEST = "test"
    OS = "os"
    FILE = "file"
    MEMORY = "memory"


class ProviderName(str, Enum):
    HTTP = "http"
    MOCK = "mock"


# ---------------------------------------------------------------------------
# Process-wide config
# ---------------------------------------------------------------------------

class NetworkConfig(BaseModel):
    """
    Where the launch network lives and how to talk to local tooling.

    This is the top-level model that gets loaded from config.yaml.
    """
    provider: ProviderName = ProviderName.HTTP
    api_url: str = Field(
        "http://localhost:1317",
        description="REST endpoint of the launch network node",
    )
    broadcast_path: str = Field(
        "/netlaunch/tx/broadcast",
        description="Path of the signing gateway that broadcasts message batches",
    )
    timeout_seconds: float = Field(30.0, gt=0)
    from_account: str = Field(
        DEFAULT_ACCOUNT, min_length=1,
        description="Account that signs transactions sent to the network",
    )
    keyring_backend: KeyringBackend = KeyringBackend.TEST
    keyring_dir: Optional[Path] = Field(
        None, description="Keyring directory passed to the chain binary",
    )
    chain_binary: str = Field(
        "simd", min_length=1,
        description="Executable used to init chains and issue gentxs",
    )
    spn_home: Path = Field(
        DEFAULT_SPN_HOME,
        description="Root directory holding one chain home per launch ID",
    )

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("broadcast_path")
    @classmethod
    def ensure_leading_slash(cls, v: str) -> str:
        return v if v.startswith("/") else f"/{v}"

    @field_validator("spn_home", "keyring_dir")
    @classmethod
    def expand_user(cls, v: Optional[Path]) -> Optional[Path]:
        return v.expanduser() if v is not None else None


# ---------------------------------------------------------------------------
# Per-command options
# ---------------------------------------------------------------------------

class ValidatorOptions(BaseModel):
    """Validator fields supplied up front (no interactive fallback)."""
    model_config = ConfigDict(frozen=True)

    account: str = Field(DEFAULT_ACCOUNT, min_length=1)
    website: Optional[str] = None
    details: Optional[str] = None
    security_contact: Optional[str] = None
    moniker: Optional[str] = None
    identity: Optional[str] = None
    self_delegation: Optional[str] = None
    gas_price: Optional[str] = None


class ChainInitOptions(BaseModel):
    """Inputs of one chain init run."""
    model_config = ConfigDict(frozen=True)

    launch_id: str
    validator: ValidatorOptions = Field(default_factory=ValidatorOptions)
    home: Optional[Path] = Field(
        None, description="Overrides NetworkConfig.spn_home for this run",
    )
    keyring_backend: Optional[KeyringBackend] = None
    yes: bool = Field(
        False, description="Overwrite an existing chain home without asking",
    )


class CampaignUpdateOptions(BaseModel):
    """Inputs of one campaign update run."""
    model_config = ConfigDict(frozen=True)

    campaign_id: str
    name: Optional[str] = None
    metadata: Optional[str] = None
    total_supply: Optional[str] = Field(
        None, description="Coin list such as '1000stake,500token'",
    )
