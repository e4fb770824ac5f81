"""Reading and patching genesis files."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from netlaunch.exceptions import GenesisParseError


@dataclass(frozen=True)
class Genesis:
    """The parts of a genesis file the workflows care about."""
    chain_id: str
    stake_denom: str
    account_addresses: tuple[str, ...] = field(default_factory=tuple)

    def has_account(self, address: str) -> bool:
        return address in self.account_addresses


def load_genesis_document(path: str | Path) -> dict[str, Any]:
    """Load the raw genesis JSON document."""
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise GenesisParseError(f"Cannot read genesis file {path}: {e}", path=path) from e

    try:
        document = json.loads(raw)
    except json.JSONDecodeError as e:
        raise GenesisParseError(f"Genesis file {path} is not valid JSON: {e}", path=path) from e

    if not isinstance(document, dict):
        raise GenesisParseError(f"Genesis file {path} must be a JSON object", path=path)
    return document


def read_genesis(path: str | Path) -> Genesis:
    """
    Parse a genesis file.

    The stake denomination comes from app_state.staking.params.bond_denom.

    Raises:
        GenesisParseError: If the file is unreadable or lacks required fields.
    """
    document = load_genesis_document(path)

    try:
        stake_denom = document["app_state"]["staking"]["params"]["bond_denom"]
    except (KeyError, TypeError) as e:
        raise GenesisParseError(
            f"Genesis file {path} has no app_state.staking.params.bond_denom",
            path=path,
        ) from e
    if not isinstance(stake_denom, str) or not stake_denom:
        raise GenesisParseError(f"Genesis file {path} has an empty bond_denom", path=path)

    accounts = (document.get("app_state") or {}).get("auth", {}).get("accounts", [])
    addresses = tuple(
        a["address"] for a in accounts if isinstance(a, dict) and a.get("address")
    )

    return Genesis(
        chain_id=str(document.get("chain_id", "")),
        stake_denom=stake_denom,
        account_addresses=addresses,
    )


def patch_genesis(path: str | Path, *, chain_id: str, stake_denom: str) -> None:
    """Rewrite chain_id and bond_denom of a generated default genesis in place."""
    document = load_genesis_document(path)
    document["chain_id"] = chain_id

    staking = document.setdefault("app_state", {}).setdefault("staking", {})
    staking.setdefault("params", {})["bond_denom"] = stake_denom

    Path(path).write_text(json.dumps(document, indent=2), encoding="utf-8")
