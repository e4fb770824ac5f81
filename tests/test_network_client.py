"""
Tests for the network facade.

Covers:
- Record parsing (ChainLaunch, Campaign envelopes and aliases)
- HTTPNetworkProvider against an httpx.MockTransport
  (queries, 404 -> NotFoundError, failures -> RemoteFailure, broadcast payload)
- MockNetworkProvider all-or-nothing batches
- NetworkClient provider selection and delegation
"""

from __future__ import annotations

import json

import httpx
import pytest

from netlaunch.config.schema import NetworkConfig, ProviderName
from netlaunch.exceptions import NotFoundError, RemoteFailure
from netlaunch.network.client import (
    HTTPNetworkProvider,
    MockNetworkProvider,
    NetworkClient,
)
from netlaunch.network.models import Campaign, ChainLaunch
from netlaunch.network.propositions import (
    MSG_EDIT_CAMPAIGN,
    MSG_UPDATE_TOTAL_SUPPLY,
    Proposition,
    PropositionKind,
    build_campaign_propositions,
)
from tests.fakes import RecordingNetworkProvider


CHAIN_PAYLOAD = {
    "chain": {
        "launchID": "42",
        "coordinatorID": "3",
        "genesisChainID": "orbit-42",
        "sourceURL": "https://github.com/example/orbit",
        "sourceHash": "abc123",
        "initialGenesis": {
            "genesisURL": {"url": "https://example.com/genesis.json", "hash": "ff00"},
        },
        "launchTriggered": False,
    }
}

CAMPAIGN_PAYLOAD = {
    "campaign": {
        "campaignID": "7",
        "campaignName": "orbit",
        "coordinatorID": "3",
        "metadata": "",
        "totalSupply": [{"denom": "stake", "amount": "1000"}],
        "allocatedShares": [],
    }
}


def _provider(handler) -> HTTPNetworkProvider:
    return HTTPNetworkProvider(
        "http://node.test",
        from_account="alice",
        keyring_backend="os",
        transport=httpx.MockTransport(handler),
    )


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


class TestRecords:

    def test_chain_launch_from_response(self):
        launch = ChainLaunch.from_response(CHAIN_PAYLOAD)
        assert launch.launch_id == 42
        assert launch.chain_id == "orbit-42"
        assert launch.coordinator_id == 3
        assert launch.genesis_url is not None
        assert launch.genesis_url.hash == "ff00"
        assert launch.stake_denom == "stake"

    def test_chain_launch_without_custom_genesis(self):
        launch = ChainLaunch.from_response({"launchID": "9", "genesisChainID": "x-9"})
        assert launch.genesis_url is None

    def test_campaign_from_response(self):
        campaign = Campaign.from_response(CAMPAIGN_PAYLOAD)
        assert campaign.campaign_id == 7
        assert campaign.name == "orbit"
        assert campaign.total_supply_coins.amount_of("stake") == 1000

    def test_campaign_display_uses_network_names(self):
        display = Campaign.from_response(CAMPAIGN_PAYLOAD).to_display()
        assert display["campaignName"] == "orbit"
        assert display["totalSupply"] == [{"denom": "stake", "amount": "1000"}]

    def test_records_are_immutable(self):
        campaign = Campaign.from_response(CAMPAIGN_PAYLOAD)
        with pytest.raises(Exception):
            campaign.name = "other"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# HTTP provider
# ---------------------------------------------------------------------------


class TestHTTPNetworkProvider:

    @pytest.mark.asyncio
    async def test_chain_launch_route(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return httpx.Response(200, json=CHAIN_PAYLOAD)

        provider = _provider(handler)
        launch = await provider.chain_launch(42)
        await provider.aclose()

        assert seen == ["/tendermint/spn/launch/chain/42"]
        assert launch.chain_id == "orbit-42"

    @pytest.mark.asyncio
    async def test_campaign_route(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/tendermint/spn/campaign/campaign/7"
            return httpx.Response(200, json=CAMPAIGN_PAYLOAD)

        provider = _provider(handler)
        campaign = await provider.campaign(7)
        assert campaign.name == "orbit"

    @pytest.mark.asyncio
    async def test_404_is_not_found(self):
        provider = _provider(lambda request: httpx.Response(404, json={"code": 5}))
        with pytest.raises(NotFoundError) as exc:
            await provider.campaign(99)
        assert exc.value.resource == "campaign"
        assert exc.value.key == "99"

    @pytest.mark.asyncio
    async def test_server_error_is_remote_failure(self):
        provider = _provider(lambda request: httpx.Response(503, text="unavailable"))
        with pytest.raises(RemoteFailure) as exc:
            await provider.chain_launch(42)
        assert exc.value.status_code == 503

    @pytest.mark.asyncio
    async def test_transport_error_is_remote_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(RemoteFailure):
            await _provider(handler).chain_launch(42)

    @pytest.mark.asyncio
    async def test_invalid_json_is_remote_failure(self):
        provider = _provider(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(RemoteFailure):
            await provider.campaign(7)

    @pytest.mark.asyncio
    async def test_unexpected_payload_is_remote_failure(self):
        provider = _provider(lambda request: httpx.Response(200, json={"chain": {}}))
        with pytest.raises(RemoteFailure):
            await provider.chain_launch(42)

    @pytest.mark.asyncio
    async def test_update_posts_one_batch(self):
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            assert request.url.path == "/netlaunch/tx/broadcast"
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"tx_response": {"code": 0, "txhash": "AB"}})

        props = build_campaign_propositions(name="nova", total_supply="5stake")
        await _provider(handler).update_campaign(7, props)

        assert len(bodies) == 1
        body = bodies[0]
        assert body["from"] == "alice"
        assert body["keyring_backend"] == "os"
        assert [m["@type"] for m in body["messages"]] == [
            MSG_EDIT_CAMPAIGN, MSG_UPDATE_TOTAL_SUPPLY,
        ]

    @pytest.mark.asyncio
    async def test_failed_tx_code_is_remote_failure(self):
        provider = _provider(lambda request: httpx.Response(
            200, json={"tx_response": {"code": 13, "raw_log": "insufficient fee"}},
        ))
        with pytest.raises(RemoteFailure, match="insufficient fee"):
            await provider.update_campaign(7, build_campaign_propositions(name="x"))

    @pytest.mark.parametrize("body", [{"tx_response": None}, {"tx_response": "ok"}])
    @pytest.mark.asyncio
    async def test_missing_tx_response_is_remote_failure(self, body):
        provider = _provider(lambda request: httpx.Response(200, json=body))
        with pytest.raises(RemoteFailure, match="no transaction response"):
            await provider.update_campaign(7, build_campaign_propositions(name="x"))

    @pytest.mark.asyncio
    async def test_rejected_broadcast_is_remote_failure(self):
        provider = _provider(lambda request: httpx.Response(400, text="bad request"))
        with pytest.raises(RemoteFailure) as exc:
            await provider.update_campaign(7, build_campaign_propositions(name="x"))
        assert exc.value.status_code == 400

    def test_from_config(self):
        config = NetworkConfig(
            api_url="http://node.test:1317/",
            from_account="bob",
            broadcast_path="tx",
        )
        provider = HTTPNetworkProvider.from_config(config)
        assert provider.api_url == "http://node.test:1317"
        assert provider.from_account == "bob"
        assert provider.broadcast_path == "/tx"


# ---------------------------------------------------------------------------
# Mock provider
# ---------------------------------------------------------------------------


class TestMockNetworkProvider:

    @pytest.mark.asyncio
    async def test_known_records(self):
        provider = MockNetworkProvider()
        assert (await provider.chain_launch(42)).chain_id == "orbit-42"
        assert (await provider.campaign(7)).name == "orbit"

    @pytest.mark.asyncio
    async def test_unknown_records(self):
        provider = MockNetworkProvider()
        with pytest.raises(NotFoundError):
            await provider.chain_launch(1000)
        with pytest.raises(NotFoundError):
            await provider.campaign(1000)

    @pytest.mark.asyncio
    async def test_update_applies_all(self):
        provider = MockNetworkProvider()
        props = build_campaign_propositions(
            name="nova", metadata="m", total_supply="5token",
        )
        await provider.update_campaign(7, props)

        campaign = await provider.campaign(7)
        assert campaign.name == "nova"
        assert campaign.metadata == "m"
        assert campaign.total_supply_coins.amount_of("stake") == 1000000000
        assert campaign.total_supply_coins.amount_of("token") == 5
        assert provider.submitted == [(7, props)]

    @pytest.mark.asyncio
    async def test_rejected_batch_changes_nothing(self):
        provider = MockNetworkProvider()
        props = [
            build_campaign_propositions(metadata="new")[0],
            Proposition(PropositionKind.NAME, "   "),
        ]
        with pytest.raises(RemoteFailure):
            await provider.update_campaign(7, props)

        campaign = await provider.campaign(7)
        assert campaign.metadata == ""
        assert campaign.name == "orbit"
        assert provider.submitted == []

    @pytest.mark.asyncio
    async def test_update_reads_store_without_fetching(self):
        provider = RecordingNetworkProvider()
        await provider.update_campaign(7, build_campaign_propositions(name="x"))
        assert provider.calls == [("update_campaign", 7)]

    @pytest.mark.asyncio
    async def test_update_unknown_campaign(self):
        provider = MockNetworkProvider()
        with pytest.raises(NotFoundError):
            await provider.update_campaign(1000, build_campaign_propositions(name="x"))
        assert provider.submitted == []


# ---------------------------------------------------------------------------
# NetworkClient
# ---------------------------------------------------------------------------


class TestNetworkClient:

    def test_from_config_mock(self):
        client = NetworkClient.from_config(NetworkConfig(provider=ProviderName.MOCK))
        assert isinstance(client.provider, MockNetworkProvider)

    def test_from_config_http(self):
        client = NetworkClient.from_config(NetworkConfig())
        assert isinstance(client.provider, HTTPNetworkProvider)

    def test_defaults_to_mock(self):
        assert isinstance(NetworkClient().provider, MockNetworkProvider)

    @pytest.mark.asyncio
    async def test_context_manager_delegates(self):
        async with NetworkClient(MockNetworkProvider()) as network:
            props = build_campaign_propositions(name="nova")
            await network.update_campaign(7, props)
            assert (await network.campaign(7)).name == "nova"
