"""
Chain init workflow: prepare a validator for a network launch.

Sequence of one run:

    START -> IDENTIFIER_PARSED -> ACCOUNT_VERIFIED -> HOME_CHECKED
          -> [CONFIRMED_OVERWRITE] -> LAUNCH_FETCHED -> CHAIN_INITIALIZED
          -> GENESIS_PARSED -> VALIDATOR_COLLECTED -> GENTX_GENERATED -> DONE

The signing account is verified before anything touches the filesystem.
An existing chain home is only overwritten after confirmation (or with
`yes`). Declining is a normal outcome, not an error, and leaves the home
exactly as it was.

A home left behind by an interrupted run is resumed without a prompt
and without running the binary's init again:

- stopped while materializing genesis: the launch is fetched again and
  genesis is rewritten, then the run continues at CHAIN_INITIALIZED
- stopped after genesis was materialized (gentx failed or never ran):
  no launch fetch, the run picks up at GENESIS_PARSED

Usage:
    workflow = ChainInitWorkflow(config, prompter=RichPrompter())
    result = await workflow.run(ChainInitOptions(launch_id="42"))
    if result.declined:
        ...
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from netlaunch.accounts import AccountRegistry, KeyringAccountRegistry
from netlaunch.chain.runner import ChainRunner
from netlaunch.chain.workspace import ChainWorkspace, WorkspaceStage
from netlaunch.config.schema import ChainInitOptions, NetworkConfig
from netlaunch.exceptions import WorkspaceConflict
from netlaunch.network.client import NetworkClient
from netlaunch.network.ids import parse_id
from netlaunch.observability.logging_config import run_context
from netlaunch.onboarding import ask_validator_info
from netlaunch.prompts import Prompter, RichPrompter
from netlaunch.workflows.stages import StageRecorder

logger = logging.getLogger(__name__)

NetworkFactory = Callable[[], NetworkClient]
WorkspaceFactory = Callable[[int, Path, ChainRunner], ChainWorkspace]


class ChainInitStage(str, Enum):
    START = "start"
    IDENTIFIER_PARSED = "identifier_parsed"
    ACCOUNT_VERIFIED = "account_verified"
    HOME_CHECKED = "home_checked"
    CONFIRMED_OVERWRITE = "confirmed_overwrite"
    LAUNCH_FETCHED = "launch_fetched"
    CHAIN_INITIALIZED = "chain_initialized"
    GENESIS_PARSED = "genesis_parsed"
    VALIDATOR_COLLECTED = "validator_collected"
    GENTX_GENERATED = "gentx_generated"
    DONE = "done"


class ChainInitOutcome(str, Enum):
    COMPLETED = "completed"
    DECLINED = "declined"


@dataclass
class ChainInitResult:
    """Result of a chain init run."""
    outcome: ChainInitOutcome
    launch_id: int
    home: Path
    gentx_path: Optional[Path] = None
    stages: list[ChainInitStage] = field(default_factory=list)
    resumed_from: Optional[WorkspaceStage] = None

    @property
    def declined(self) -> bool:
        return self.outcome == ChainInitOutcome.DECLINED

    @property
    def resumed(self) -> bool:
        return self.resumed_from is not None


def _default_workspace(launch_id: int, spn_home: Path, runner: ChainRunner) -> ChainWorkspace:
    return ChainWorkspace(launch_id, spn_home=spn_home, runner=runner)


class ChainInitWorkflow:
    """
    Runs chain init against injected collaborators.

    Anything not injected is built from the NetworkConfig: the chain
    binary runner, a keyring-backed account registry, a network client
    for the configured provider and terminal prompts.
    """

    def __init__(
        self,
        config: NetworkConfig,
        *,
        network_factory: Optional[NetworkFactory] = None,
        accounts: Optional[AccountRegistry] = None,
        prompter: Optional[Prompter] = None,
        runner: Optional[ChainRunner] = None,
        workspace_factory: Optional[WorkspaceFactory] = None,
    ):
        self.config = config
        self._network_factory = network_factory or (lambda: NetworkClient.from_config(config))
        self._accounts = accounts
        self._prompter = prompter or RichPrompter()
        self._runner = runner
        self._workspace_factory = workspace_factory or _default_workspace

    def _runner_for(self, options: ChainInitOptions) -> ChainRunner:
        if self._runner is not None:
            return self._runner
        backend = options.keyring_backend or self.config.keyring_backend
        return ChainRunner(
            self.config.chain_binary,
            keyring_backend=backend.value,
            keyring_dir=self.config.keyring_dir,
        )

    async def run(self, options: ChainInitOptions) -> ChainInitResult:
        """
        Execute one chain init run.

        Returns:
            ChainInitResult with outcome COMPLETED, or DECLINED when the
            user refused to overwrite an existing home.

        Raises:
            NetLaunchError: Any failing step aborts the run with the
                error it raised. Nothing is retried.
        """
        with run_context(uuid.uuid4().hex[:12]):
            return await self._run(options)

    async def _run(self, options: ChainInitOptions) -> ChainInitResult:
        recorder = StageRecorder("chain_init_stage")
        recorder.enter(ChainInitStage.START)

        launch_id = parse_id(options.launch_id)
        recorder.context["launch_id"] = launch_id
        recorder.enter(ChainInitStage.IDENTIFIER_PARSED)

        runner = self._runner_for(options)
        accounts = self._accounts or KeyringAccountRegistry(runner)
        account = accounts.get_by_name(options.validator.account)
        recorder.enter(ChainInitStage.ACCOUNT_VERIFIED)

        spn_home = options.home or self.config.spn_home
        workspace = self._workspace_factory(launch_id, Path(spn_home).expanduser(), runner)
        home, exists = workspace.home_exists()
        resume_from = workspace.resume_stage() if exists else None
        recorder.enter(ChainInitStage.HOME_CHECKED)

        try:
            if exists and resume_from is None:
                self._confirm_overwrite(workspace, options)
                recorder.enter(ChainInitStage.CONFIRMED_OVERWRITE)
        except WorkspaceConflict:
            logger.info("chain_init_declined", extra={"launch_id": launch_id, "path": str(home)})
            return ChainInitResult(
                outcome=ChainInitOutcome.DECLINED,
                launch_id=launch_id,
                home=home,
                stages=list(recorder.stages),
            )

        if resume_from is not None:
            logger.info(
                "chain_home_resumed",
                extra={"launch_id": launch_id, "path": str(home), "stage": resume_from.value},
            )

        if resume_from is not WorkspaceStage.GENESIS_MATERIALIZED:
            async with self._network_factory() as network:
                chain_launch = await network.chain_launch(launch_id)
            recorder.enter(ChainInitStage.LAUNCH_FETCHED)

            if resume_from is WorkspaceStage.INITIALIZED:
                await workspace.materialize_genesis(chain_launch)
            else:
                await workspace.initialize(chain_launch)
            recorder.enter(ChainInitStage.CHAIN_INITIALIZED)

        genesis = workspace.read_genesis()
        recorder.enter(ChainInitStage.GENESIS_PARSED)

        profile = ask_validator_info(options.validator, genesis.stake_denom, self._prompter)
        recorder.enter(ChainInitStage.VALIDATOR_COLLECTED)

        gentx_path = await asyncio.to_thread(workspace.generate_gentx, profile, account)
        recorder.enter(ChainInitStage.GENTX_GENERATED)

        recorder.enter(ChainInitStage.DONE)
        return ChainInitResult(
            outcome=ChainInitOutcome.COMPLETED,
            launch_id=launch_id,
            home=home,
            gentx_path=gentx_path,
            stages=list(recorder.stages),
            resumed_from=resume_from,
        )

    def _confirm_overwrite(self, workspace: ChainWorkspace, options: ChainInitOptions) -> None:
        if options.yes:
            return
        if not workspace.confirm_overwrite(self._prompter):
            raise WorkspaceConflict(
                f"Overwrite of {workspace.home} declined",
                path=workspace.home,
            )
