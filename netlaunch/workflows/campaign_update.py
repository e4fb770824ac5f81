"""
Campaign update workflow.

    START -> IDENTIFIER_PARSED -> FIELDS_VALIDATED -> PROPOSITIONS_BUILT
          -> NETWORK_FETCHED -> SUBMITTED -> CAMPAIGN_REFETCHED -> DONE

Every input check happens before the network client is even created:
a malformed ID or total supply, or an update with nothing in it, fails
with zero network calls. After submission the campaign is fetched again
so the caller sees what the network actually holds.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from netlaunch.config.schema import CampaignUpdateOptions, NetworkConfig
from netlaunch.exceptions import NoFieldsProvidedError
from netlaunch.network.client import NetworkClient
from netlaunch.network.coins import parse_coins_normalized
from netlaunch.network.ids import parse_id
from netlaunch.network.models import Campaign
from netlaunch.network.propositions import (
    Proposition,
    build_campaign_propositions,
    has_any_field,
)
from netlaunch.observability.logging_config import run_context
from netlaunch.workflows.stages import StageRecorder

logger = logging.getLogger(__name__)

CAMPAIGN_FLAGS = ("name", "metadata", "total-supply")

NetworkFactory = Callable[[], NetworkClient]


class CampaignUpdateStage(str, Enum):
    START = "start"
    IDENTIFIER_PARSED = "identifier_parsed"
    FIELDS_VALIDATED = "fields_validated"
    PROPOSITIONS_BUILT = "propositions_built"
    NETWORK_FETCHED = "network_fetched"
    SUBMITTED = "submitted"
    CAMPAIGN_REFETCHED = "campaign_refetched"
    DONE = "done"


@dataclass
class CampaignUpdateResult:
    """Result of a campaign update run."""
    campaign: Campaign
    propositions: list[Proposition] = field(default_factory=list)
    stages: list[CampaignUpdateStage] = field(default_factory=list)


class CampaignUpdateWorkflow:
    """Submits name, metadata and total supply changes for one campaign."""

    def __init__(
        self,
        config: NetworkConfig,
        *,
        network_factory: Optional[NetworkFactory] = None,
    ):
        self.config = config
        self._network_factory = network_factory or (lambda: NetworkClient.from_config(config))

    async def run(self, options: CampaignUpdateOptions) -> CampaignUpdateResult:
        """
        Execute one campaign update run.

        Raises:
            InvalidFormatError: Malformed campaign ID or total supply.
            NoFieldsProvidedError: Name, metadata and total supply all empty.
            NotFoundError: Unknown campaign.
            RemoteFailure: The network rejected or failed the update.
        """
        with run_context(uuid.uuid4().hex[:12]):
            return await self._run(options)

    async def _run(self, options: CampaignUpdateOptions) -> CampaignUpdateResult:
        recorder = StageRecorder("campaign_update_stage")
        recorder.enter(CampaignUpdateStage.START)

        campaign_id = parse_id(options.campaign_id)
        recorder.context["campaign_id"] = campaign_id
        recorder.enter(CampaignUpdateStage.IDENTIFIER_PARSED)

        total_supply = parse_coins_normalized(options.total_supply)
        if not has_any_field(options.name, options.metadata, total_supply):
            raise NoFieldsProvidedError(
                f"at least one of the flags {', '.join(CAMPAIGN_FLAGS)} must be provided",
                flags=CAMPAIGN_FLAGS,
            )
        recorder.enter(CampaignUpdateStage.FIELDS_VALIDATED)

        propositions = build_campaign_propositions(
            name=options.name,
            metadata=options.metadata,
            total_supply=total_supply,
        )
        recorder.enter(CampaignUpdateStage.PROPOSITIONS_BUILT)

        async with self._network_factory() as network:
            recorder.enter(CampaignUpdateStage.NETWORK_FETCHED)

            await network.update_campaign(campaign_id, propositions)
            recorder.enter(CampaignUpdateStage.SUBMITTED)

            campaign = await network.campaign(campaign_id)
            recorder.enter(CampaignUpdateStage.CAMPAIGN_REFETCHED)

        logger.info(
            "campaign_updated",
            extra={
                "campaign_id": campaign_id,
                "propositions": [p.describe() for p in propositions],
            },
        )
        recorder.enter(CampaignUpdateStage.DONE)
        return CampaignUpdateResult(
            campaign=campaign,
            propositions=propositions,
            stages=list(recorder.stages),
        )
