"""
Remote records of the launch network.

Pydantic models parsed from the network's REST responses. Both records
are immutable once fetched: a ChainLaunch only parameterizes local
initialization, and a Campaign changes only through accepted
propositions on the network side.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from netlaunch.network.coins import Coins


class GenesisURL(BaseModel):
    """Location of a custom genesis file published for a launch."""
    model_config = ConfigDict(frozen=True)

    url: str
    hash: str = ""


class ChainLaunch(BaseModel):
    """
    A chain proposed for launch.

    Only the fields the chain init workflow needs are modelled; unknown
    fields in the response are ignored.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    launch_id: int = Field(..., alias="launchID", gt=0)
    chain_id: str = Field(..., alias="genesisChainID", min_length=1)
    coordinator_id: int = Field(0, alias="coordinatorID")
    source_url: str = Field("", alias="sourceURL")
    source_hash: str = Field("", alias="sourceHash")
    genesis_url: Optional[GenesisURL] = Field(None, alias="genesisURL")
    stake_denom: str = Field(
        "stake", alias="stakeDenom", min_length=1,
        description="Bond denomination the validator stakes in",
    )
    launch_triggered: bool = Field(False, alias="launchTriggered")
    metadata: str = ""

    @classmethod
    def from_response(cls, payload: dict[str, Any]) -> ChainLaunch:
        """Parse the {"chain": {...}} envelope returned by the network."""
        body = dict(payload.get("chain", payload))
        initial = body.pop("initialGenesis", None) or {}
        if "genesisURL" in initial and "genesisURL" not in body:
            body["genesisURL"] = initial["genesisURL"]
        return cls.model_validate(body)


class Campaign(BaseModel):
    """A campaign record whose parameters can be updated by propositions."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    campaign_id: int = Field(..., alias="campaignID", gt=0)
    name: str = Field("", alias="campaignName")
    metadata: str = ""
    coordinator_id: int = Field(0, alias="coordinatorID")
    total_supply: list[dict[str, str]] = Field(
        default_factory=list, alias="totalSupply",
    )

    @classmethod
    def from_response(cls, payload: dict[str, Any]) -> Campaign:
        """Parse the {"campaign": {...}} envelope returned by the network."""
        return cls.model_validate(payload.get("campaign", payload))

    @property
    def total_supply_coins(self) -> Coins:
        return Coins.from_list(self.total_supply)

    def to_display(self) -> dict[str, Any]:
        """Plain dict for YAML rendering, keyed the way the network names fields."""
        return self.model_dump(mode="json", by_alias=True)
