"""
Campaign update propositions.

A proposition is one named parameter change carrying its target value.
The builder turns the optional fields of a campaign update into an
ordered list of propositions: name, then metadata, then total supply.
Fields that are absent or empty contribute nothing.

The builder does not require at least one proposition; that
precondition belongs to the campaign update workflow.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence, Union

from netlaunch.network.coins import Coins, parse_coins_normalized

MSG_EDIT_CAMPAIGN = "/tendermint.spn.campaign.MsgEditCampaign"
MSG_UPDATE_TOTAL_SUPPLY = "/tendermint.spn.campaign.MsgUpdateTotalSupply"

TotalSupplyInput = Union[Coins, str, None]


class PropositionKind(str, Enum):
    NAME = "name"
    METADATA = "metadata"
    TOTAL_SUPPLY = "total_supply"


@dataclass(frozen=True)
class Proposition:
    """A single named parameter change."""
    kind: PropositionKind
    value: Union[str, Coins]

    def describe(self) -> str:
        return f"{self.kind.value}={self.value}"


def with_campaign_name(name: str) -> Proposition:
    return Proposition(PropositionKind.NAME, name)


def with_campaign_metadata(metadata: str) -> Proposition:
    return Proposition(PropositionKind.METADATA, metadata)


def with_campaign_total_supply(total_supply: Coins) -> Proposition:
    return Proposition(PropositionKind.TOTAL_SUPPLY, total_supply)


def _as_coins(total_supply: TotalSupplyInput) -> Coins:
    if isinstance(total_supply, Coins):
        return total_supply
    return parse_coins_normalized(total_supply)


def has_any_field(
    name: Optional[str],
    metadata: Optional[str],
    total_supply: TotalSupplyInput,
) -> bool:
    """True when at least one field would produce a proposition."""
    return bool(name) or bool(metadata) or not _as_coins(total_supply).empty()


def build_campaign_propositions(
    name: Optional[str] = None,
    metadata: Optional[str] = None,
    total_supply: TotalSupplyInput = None,
) -> list[Proposition]:
    """
    Build the propositions for a campaign update.

    Args:
        name: New campaign name, or None/"" to leave it unchanged.
        metadata: New metadata, or None/"" to leave it unchanged.
        total_supply: Coins or a coin list string such as "1000stake".

    Returns:
        Propositions in the order name, metadata, total supply.

    Raises:
        InvalidAmountError: If total_supply text is malformed.
    """
    coins = _as_coins(total_supply)

    propositions: list[Proposition] = []
    if name:
        propositions.append(with_campaign_name(name))
    if metadata:
        propositions.append(with_campaign_metadata(metadata))
    if not coins.empty():
        propositions.append(with_campaign_total_supply(coins))
    return propositions


def propositions_to_messages(
    campaign_id: int,
    signer: str,
    propositions: Sequence[Proposition],
) -> list[dict[str, Any]]:
    """
    Translate propositions into network messages for one transaction.

    Name and metadata changes share a single edit message; a total supply
    change is its own message. Broadcasting them together keeps the batch
    all-or-nothing on the network side.
    """
    name = ""
    metadata = ""
    total_supply: Optional[Coins] = None
    for prop in propositions:
        if prop.kind is PropositionKind.NAME:
            name = str(prop.value)
        elif prop.kind is PropositionKind.METADATA:
            metadata = str(prop.value)
        elif prop.kind is PropositionKind.TOTAL_SUPPLY:
            total_supply = prop.value  # type: ignore[assignment]

    messages: list[dict[str, Any]] = []
    if name or metadata:
        messages.append({
            "@type": MSG_EDIT_CAMPAIGN,
            "coordinator": signer,
            "campaignID": str(campaign_id),
            "name": name,
            "metadata": metadata,
        })
    if total_supply is not None and not total_supply.empty():
        messages.append({
            "@type": MSG_UPDATE_TOTAL_SUPPLY,
            "coordinator": signer,
            "campaignID": str(campaign_id),
            "totalSupplyUpdate": total_supply.to_list(),
        })
    return messages
