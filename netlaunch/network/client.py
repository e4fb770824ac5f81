"""
Network facade for the launch network.

Provider-agnostic client that supports:
- HTTP (REST queries against a node, message batches sent to a signing
  gateway that broadcasts them as one transaction)
- Mock mode (in-memory records for development and testing)

The active provider is chosen by NetworkConfig.provider
(NETLAUNCH_PROVIDER).

All calls are coroutines, so a caller cancels a fetch by cancelling the
task running it. Nothing here retries.

Usage:
    async with NetworkClient.from_config(config) as network:
        launch = await network.chain_launch(42)
        await network.update_campaign(7, propositions)
        campaign = await network.campaign(7)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

import httpx

from netlaunch.config.schema import NetworkConfig, ProviderName
from netlaunch.exceptions import NotFoundError, RemoteFailure
from netlaunch.network.coins import Coins
from netlaunch.network.models import Campaign, ChainLaunch
from netlaunch.network.propositions import (
    Proposition,
    PropositionKind,
    propositions_to_messages,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "spn"


# ---------------------------------------------------------------------------
# Abstract Interface
# ---------------------------------------------------------------------------


class NetworkProvider(ABC):
    """Abstract access to launch and campaign records."""

    @abstractmethod
    async def chain_launch(self, launch_id: int) -> ChainLaunch:
        """Fetch a chain launch record. Raises NotFoundError if unknown."""
        ...

    @abstractmethod
    async def campaign(self, campaign_id: int) -> Campaign:
        """Fetch a campaign record. Raises NotFoundError if unknown."""
        ...

    @abstractmethod
    async def update_campaign(
        self,
        campaign_id: int,
        propositions: Sequence[Proposition],
    ) -> None:
        """Submit propositions as one all-or-nothing batch."""
        ...

    async def aclose(self) -> None:
        """Release any held connections."""


# ---------------------------------------------------------------------------
# HTTP Provider
# ---------------------------------------------------------------------------


class HTTPNetworkProvider(NetworkProvider):
    """
    REST client for a launch network node.

    Queries use the node's gRPC-gateway routes. Campaign updates are
    POSTed to a signing gateway as a list of messages which it signs on
    behalf of `from_account` and broadcasts as a single transaction.
    """

    def __init__(
        self,
        api_url: str,
        *,
        from_account: str,
        keyring_backend: str = "test",
        broadcast_path: str = "/netlaunch/tx/broadcast",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.from_account = from_account
        self.keyring_backend = keyring_backend
        self.broadcast_path = broadcast_path
        self._client = httpx.AsyncClient(
            base_url=self.api_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: NetworkConfig) -> HTTPNetworkProvider:
        return cls(
            config.api_url,
            from_account=config.from_account,
            keyring_backend=config.keyring_backend.value,
            broadcast_path=config.broadcast_path,
            timeout=config.timeout_seconds,
        )

    async def _get(self, path: str, *, resource: str, key: int) -> dict[str, Any]:
        try:
            response = await self._client.get(path)
        except httpx.HTTPError as e:
            raise RemoteFailure(
                f"Could not reach {self.api_url}: {e}", service=SERVICE_NAME,
            ) from e

        if response.status_code == 404:
            raise NotFoundError(
                f"{resource} {key} not found", resource=resource, key=str(key),
            )
        if response.status_code >= 400:
            raise RemoteFailure(
                f"Fetching {resource} {key} failed with HTTP {response.status_code}",
                service=SERVICE_NAME,
                status_code=response.status_code,
                details={"body": response.text[:500]},
            )

        try:
            return response.json()
        except ValueError as e:
            raise RemoteFailure(
                f"Invalid JSON for {resource} {key}", service=SERVICE_NAME,
            ) from e

    async def chain_launch(self, launch_id: int) -> ChainLaunch:
        payload = await self._get(
            f"/tendermint/spn/launch/chain/{launch_id}",
            resource="chain launch", key=launch_id,
        )
        try:
            return ChainLaunch.from_response(payload)
        except ValueError as e:
            raise RemoteFailure(
                f"Unexpected chain launch payload for {launch_id}: {e}",
                service=SERVICE_NAME,
            ) from e

    async def campaign(self, campaign_id: int) -> Campaign:
        payload = await self._get(
            f"/tendermint/spn/campaign/campaign/{campaign_id}",
            resource="campaign", key=campaign_id,
        )
        try:
            return Campaign.from_response(payload)
        except ValueError as e:
            raise RemoteFailure(
                f"Unexpected campaign payload for {campaign_id}: {e}",
                service=SERVICE_NAME,
            ) from e

    async def update_campaign(
        self,
        campaign_id: int,
        propositions: Sequence[Proposition],
    ) -> None:
        messages = propositions_to_messages(
            campaign_id, self.from_account, propositions,
        )
        payload = {
            "from": self.from_account,
            "keyring_backend": self.keyring_backend,
            "messages": messages,
        }

        try:
            response = await self._client.post(self.broadcast_path, json=payload)
        except httpx.HTTPError as e:
            raise RemoteFailure(
                f"Could not broadcast campaign update: {e}", service=SERVICE_NAME,
            ) from e

        if response.status_code == 404:
            raise NotFoundError(
                f"campaign {campaign_id} not found",
                resource="campaign", key=str(campaign_id),
            )
        if response.status_code >= 400:
            raise RemoteFailure(
                f"Campaign update rejected with HTTP {response.status_code}",
                service=SERVICE_NAME,
                status_code=response.status_code,
                details={"body": response.text[:500]},
            )

        try:
            result = response.json()
        except ValueError:
            result = {}
        if not isinstance(result, dict):
            result = {}
        tx = result.get("tx_response", result)
        if not isinstance(tx, dict):
            raise RemoteFailure(
                "Campaign update broadcast returned no transaction response",
                service=SERVICE_NAME,
                details={"body": response.text[:500]},
            )
        code = int(tx.get("code", 0) or 0)
        if code != 0:
            raise RemoteFailure(
                f"Campaign update transaction failed (code {code}): "
                f"{tx.get('raw_log', '')}",
                service=SERVICE_NAME,
                details={"txhash": tx.get("txhash"), "code": code},
            )

        logger.info(
            "campaign_update_broadcast",
            extra={
                "campaign_id": campaign_id,
                "message_count": len(messages),
                "txhash": tx.get("txhash"),
            },
        )

    async def aclose(self) -> None:
        await self._client.aclose()


# ---------------------------------------------------------------------------
# Mock Provider (Development / Testing)
# ---------------------------------------------------------------------------

MOCK_CHAIN_LAUNCHES: list[dict[str, Any]] = [
    {
        "launchID": "42",
        "coordinatorID": "1",
        "genesisChainID": "orbit-42",
        "sourceURL": "https://github.com/example/orbit",
        "sourceHash": "4f1c2e0b9d",
        "stakeDenom": "stake",
        "launchTriggered": False,
    },
    {
        "launchID": "9",
        "coordinatorID": "1",
        "genesisChainID": "orbit-9",
        "sourceURL": "https://github.com/example/orbit",
        "sourceHash": "4f1c2e0b9d",
        "stakeDenom": "stake",
        "launchTriggered": False,
    },
]

MOCK_CAMPAIGNS: list[dict[str, Any]] = [
    {
        "campaignID": "7",
        "campaignName": "orbit",
        "coordinatorID": "1",
        "metadata": "",
        "totalSupply": [{"denom": "stake", "amount": "1000000000"}],
    },
]


class MockNetworkProvider(NetworkProvider):
    """
    In-memory network for development and tests.

    Batches are validated in full before any proposition is applied, so
    a rejected batch leaves the campaign unchanged.
    """

    def __init__(
        self,
        chain_launches: Optional[Sequence[dict[str, Any]]] = None,
        campaigns: Optional[Sequence[dict[str, Any]]] = None,
    ):
        launches = MOCK_CHAIN_LAUNCHES if chain_launches is None else chain_launches
        camps = MOCK_CAMPAIGNS if campaigns is None else campaigns
        self._launches: dict[int, ChainLaunch] = {}
        for raw in launches:
            launch = ChainLaunch.from_response(raw)
            self._launches[launch.launch_id] = launch
        self._campaigns: dict[int, Campaign] = {}
        for raw in camps:
            campaign = Campaign.from_response(raw)
            self._campaigns[campaign.campaign_id] = campaign
        self.submitted: list[tuple[int, list[Proposition]]] = []

    async def chain_launch(self, launch_id: int) -> ChainLaunch:
        launch = self._launches.get(launch_id)
        if launch is None:
            raise NotFoundError(
                f"chain launch {launch_id} not found",
                resource="chain launch", key=str(launch_id),
            )
        return launch

    def _stored_campaign(self, campaign_id: int) -> Campaign:
        campaign = self._campaigns.get(campaign_id)
        if campaign is None:
            raise NotFoundError(
                f"campaign {campaign_id} not found",
                resource="campaign", key=str(campaign_id),
            )
        return campaign

    async def campaign(self, campaign_id: int) -> Campaign:
        return self._stored_campaign(campaign_id)

    async def update_campaign(
        self,
        campaign_id: int,
        propositions: Sequence[Proposition],
    ) -> None:
        current = self._stored_campaign(campaign_id)

        changes: dict[str, Any] = {}
        for prop in propositions:
            if prop.kind is PropositionKind.NAME:
                if not isinstance(prop.value, str) or not prop.value.strip():
                    raise RemoteFailure(
                        "campaign name cannot be empty", service=SERVICE_NAME,
                    )
                changes["name"] = prop.value
            elif prop.kind is PropositionKind.METADATA:
                changes["metadata"] = str(prop.value)
            elif prop.kind is PropositionKind.TOTAL_SUPPLY:
                if not isinstance(prop.value, Coins) or prop.value.empty():
                    raise RemoteFailure(
                        "total supply update cannot be empty", service=SERVICE_NAME,
                    )
                changes["total_supply"] = self._merge_supply(
                    current.total_supply_coins, prop.value,
                )

        self._campaigns[campaign_id] = current.model_copy(update=changes)
        self.submitted.append((campaign_id, list(propositions)))

    @staticmethod
    def _merge_supply(current: Coins, update: Coins) -> list[dict[str, str]]:
        """Denominations in the update replace existing amounts."""
        merged = {c.denom: c for c in current}
        for coin in update:
            merged[coin.denom] = coin
        return Coins(merged.values()).to_list()


# ---------------------------------------------------------------------------
# High-level client
# ---------------------------------------------------------------------------


class NetworkClient:
    """
    High-level network client with provider selection.

    Usage:
        async with NetworkClient.from_config(config) as network:
            campaign = await network.campaign(7)
    """

    def __init__(self, provider: Optional[NetworkProvider] = None):
        self.provider = provider or MockNetworkProvider()

    @classmethod
    def from_config(cls, config: NetworkConfig) -> NetworkClient:
        """Create a NetworkClient for the configured provider."""
        if config.provider == ProviderName.MOCK:
            logger.warning("Using the in-memory mock network provider")
            return cls(provider=MockNetworkProvider())
        return cls(provider=HTTPNetworkProvider.from_config(config))

    async def __aenter__(self) -> NetworkClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def chain_launch(self, launch_id: int) -> ChainLaunch:
        return await self.provider.chain_launch(launch_id)

    async def campaign(self, campaign_id: int) -> Campaign:
        return await self.provider.campaign(campaign_id)

    async def update_campaign(
        self,
        campaign_id: int,
        propositions: Sequence[Proposition],
    ) -> None:
        await self.provider.update_campaign(campaign_id, propositions)

    async def aclose(self) -> None:
        await self.provider.aclose()
