"""
Workflows: the two externally invokable operations.

Each workflow takes a NetworkConfig plus a per-run options model and
sequences the chain, onboarding and network layers into one run.
"""

from netlaunch.workflows.campaign_update import (
    CampaignUpdateResult,
    CampaignUpdateStage,
    CampaignUpdateWorkflow,
)
from netlaunch.workflows.chain_init import (
    ChainInitOutcome,
    ChainInitResult,
    ChainInitStage,
    ChainInitWorkflow,
)

__all__ = [
    "CampaignUpdateResult",
    "CampaignUpdateStage",
    "CampaignUpdateWorkflow",
    "ChainInitOutcome",
    "ChainInitResult",
    "ChainInitStage",
    "ChainInitWorkflow",
]
