"""
Network layer: identifiers, coin amounts, remote records, propositions
and the facade used to query and update the launch network.
"""

from netlaunch.network.client import (
    HTTPNetworkProvider,
    MockNetworkProvider,
    NetworkClient,
    NetworkProvider,
)
from netlaunch.network.coins import Coin, Coins, parse_coins_normalized
from netlaunch.network.ids import parse_id
from netlaunch.network.models import Campaign, ChainLaunch
from netlaunch.network.propositions import (
    Proposition,
    PropositionKind,
    build_campaign_propositions,
)

__all__ = [
    "Campaign",
    "ChainLaunch",
    "Coin",
    "Coins",
    "HTTPNetworkProvider",
    "MockNetworkProvider",
    "NetworkClient",
    "NetworkProvider",
    "Proposition",
    "PropositionKind",
    "build_campaign_propositions",
    "parse_coins_normalized",
    "parse_id",
]
