"""
Local chain workspace: one chain home directory per launch ID.

Lifecycle of a home:

    absent -> initialized -> genesis_materialized -> gentx_generated

A small YAML marker (netlaunch.yaml) inside the home records the last
stage reached. Two stages are resumable without initializing again:

- initialized: the run stopped while genesis was being materialized.
  Genesis is materialized again over the files the binary created.
- genesis_materialized: gentx generation failed or never ran.

Chain binary calls are blocking subprocesses. initialize() pushes them to
a worker thread, and callers do the same with generate_gentx(), so
cancelling a run does not wait for them. A binary call that was already
running still finishes in its thread.

Homes are keyed only by launch ID, so runs for different launches never
share a path and need no locking.

Usage:
    workspace = ChainWorkspace(42, spn_home=Path("~/spn"), runner=runner)
    path, exists = workspace.home_exists()
    await workspace.initialize(chain_launch)
    genesis = workspace.read_genesis()
    gentx_path = await asyncio.to_thread(workspace.generate_gentx, profile, account)
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
import shutil
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import httpx
import yaml

from netlaunch.chain.genesis import Genesis, patch_genesis, read_genesis
from netlaunch.chain.runner import ChainRunner
from netlaunch.exceptions import GenesisParseError, RemoteFailure
from netlaunch.network.models import ChainLaunch

if TYPE_CHECKING:
    from netlaunch.accounts import Account
    from netlaunch.onboarding import ValidatorProfile
    from netlaunch.prompts import Prompter

logger = logging.getLogger(__name__)

STATE_FILE = "netlaunch.yaml"
GENESIS_DOWNLOAD_TIMEOUT = 60.0


class WorkspaceStage(str, Enum):
    INITIALIZED = "initialized"
    GENESIS_MATERIALIZED = "genesis_materialized"
    GENTX_GENERATED = "gentx_generated"


class ChainWorkspace:
    """The chain home of a single launch ID."""

    def __init__(
        self,
        launch_id: int,
        *,
        spn_home: Path,
        runner: ChainRunner,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.launch_id = launch_id
        self.spn_home = Path(spn_home).expanduser()
        self.runner = runner
        self._http_transport = http_transport

    @property
    def home(self) -> Path:
        return self.spn_home / str(self.launch_id)

    @property
    def state_path(self) -> Path:
        return self.home / STATE_FILE

    # ── Inspection ───────────────────────────────────────────────

    def home_exists(self) -> tuple[Path, bool]:
        """Return the home path and whether anything exists there."""
        return self.home, self.home.exists()

    def read_state(self) -> dict[str, Any]:
        """Return the marker contents, or {} when absent or unreadable."""
        if not self.state_path.is_file():
            return {}
        try:
            with open(self.state_path) as f:
                raw = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(
                f"Ignoring unreadable workspace marker: {e}",
                extra={"path": str(self.state_path)},
            )
            return {}
        return raw if isinstance(raw, dict) else {}

    def stage(self) -> Optional[WorkspaceStage]:
        state = self.read_state()
        if state.get("launch_id") != self.launch_id:
            return None
        try:
            return WorkspaceStage(state.get("stage"))
        except ValueError:
            return None

    def resume_stage(self) -> Optional[WorkspaceStage]:
        """The stage a run can continue from, or None when the home is stale."""
        stage = self.stage()
        if stage in (WorkspaceStage.INITIALIZED, WorkspaceStage.GENESIS_MATERIALIZED):
            return stage
        return None

    def is_resumable(self) -> bool:
        return self.resume_stage() is not None

    def genesis_path(self) -> Path:
        return self.home / "config" / "genesis.json"

    def gentx_path(self) -> Path:
        return self.home / "config" / "gentx" / "gentx.json"

    def read_genesis(self) -> Genesis:
        return read_genesis(self.genesis_path())

    # ── Confirmation ─────────────────────────────────────────────

    def confirm_overwrite(self, prompter: Prompter) -> bool:
        return prompter.confirm(
            f"The chain has already been initialized under: {self.home}. "
            f"Would you like to overwrite the home directory"
        )

    # ── Mutation ─────────────────────────────────────────────────

    def _write_state(self, stage: WorkspaceStage, chain_id: str) -> None:
        state = {
            "launch_id": self.launch_id,
            "chain_id": chain_id,
            "stage": stage.value,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        self.state_path.write_text(yaml.safe_dump(state, sort_keys=False))

    async def initialize(self, chain_launch: ChainLaunch) -> Path:
        """
        (Re)create the chain home from a launch record.

        Any previous content of the home is removed first. Call only when
        no home existed or the user agreed to overwrite it.

        Returns:
            Path of the materialized genesis file.
        """
        if self.home.exists():
            shutil.rmtree(self.home)
        self.home.mkdir(parents=True)

        await asyncio.to_thread(
            self.runner.init,
            self.home,
            chain_launch.chain_id,
            moniker=chain_launch.chain_id,
        )
        self._write_state(WorkspaceStage.INITIALIZED, chain_launch.chain_id)
        logger.info(
            "chain_home_initialized",
            extra={"launch_id": self.launch_id, "path": str(self.home)},
        )

        return await self.materialize_genesis(chain_launch)

    async def materialize_genesis(self, chain_launch: ChainLaunch) -> Path:
        """
        Write the launch's genesis into an initialized home.

        The published genesis is downloaded when the launch has one,
        otherwise the genesis generated by the binary is patched. Safe to
        repeat on a home whose marker stopped at initialized.
        """
        genesis_path = self.genesis_path()
        if chain_launch.genesis_url is not None:
            content = await self._download_genesis(
                chain_launch.genesis_url.url, chain_launch.genesis_url.hash,
            )
            genesis_path.parent.mkdir(parents=True, exist_ok=True)
            genesis_path.write_bytes(content)
        else:
            patch_genesis(
                genesis_path,
                chain_id=chain_launch.chain_id,
                stake_denom=chain_launch.stake_denom,
            )

        # Fail here rather than later if the materialized file is unusable
        read_genesis(genesis_path)
        self._write_state(WorkspaceStage.GENESIS_MATERIALIZED, chain_launch.chain_id)
        return genesis_path

    async def _download_genesis(self, url: str, expected_hash: str) -> bytes:
        try:
            async with httpx.AsyncClient(
                timeout=GENESIS_DOWNLOAD_TIMEOUT, transport=self._http_transport,
            ) as client:
                response = await client.get(url, follow_redirects=True)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise RemoteFailure(
                f"Could not download genesis from {url}: {e}", service="genesis",
            ) from e

        content = response.content
        if expected_hash:
            digest = hashlib.sha256(content).hexdigest()
            if digest != expected_hash.lower():
                raise GenesisParseError(
                    f"Genesis hash mismatch for {url}: expected {expected_hash}, got {digest}",
                    path=url,
                )
        return content

    def generate_gentx(self, profile: ValidatorProfile, account: Account) -> Path:
        """
        Issue the validator's gentx into config/gentx/gentx.json.

        The account is added to genesis only when it is not already
        there, so rerunning after a failure never rewrites genesis
        content that was already written. On failure the home is left
        as it was and stays resumable.
        """
        genesis = self.read_genesis()

        if not genesis.has_account(account.address):
            self.runner.add_genesis_account(
                self.home, account.address, profile.staking_amount,
            )

        gentx_path = self.gentx_path()
        gentx_path.parent.mkdir(parents=True, exist_ok=True)
        self.runner.gentx(
            self.home,
            account.name,
            profile.staking_amount,
            chain_id=genesis.chain_id,
            output_document=gentx_path,
            flags=profile.gentx_flags(),
        )

        self._write_state(WorkspaceStage.GENTX_GENERATED, genesis.chain_id)
        logger.info(
            "gentx_generated",
            extra={"launch_id": self.launch_id, "path": str(gentx_path)},
        )
        return gentx_path
