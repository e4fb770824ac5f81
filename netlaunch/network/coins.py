"""
Coin amounts as used by campaign total supplies.

A coin list is written as amount immediately followed by denomination,
items separated by commas and/or whitespace:

    "1000stake,500token"
    "1000stake 500token"

Parsing normalizes the list: decimal amounts are truncated to whole
units, zero amounts are dropped and coins are sorted by denomination.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal, InvalidOperation
from typing import Any, Iterable, Iterator

from netlaunch.exceptions import InvalidAmountError

DENOM_PATTERN = r"[a-zA-Z][a-zA-Z0-9/:._-]{2,127}"

_COIN = re.compile(rf"([0-9]+(?:\.[0-9]+)?)({DENOM_PATTERN})")
_DENOM = re.compile(DENOM_PATTERN)
_SEPARATORS = re.compile(r"[,\s]+")


@dataclass(frozen=True)
class Coin:
    """A whole-unit amount of a single denomination."""
    denom: str
    amount: int

    def __post_init__(self) -> None:
        if not _DENOM.fullmatch(self.denom):
            raise InvalidAmountError(f"invalid denom: {self.denom}", value=self.denom)
        if self.amount < 0:
            raise InvalidAmountError(
                f"negative coin amount: {self.amount}{self.denom}",
                value=f"{self.amount}{self.denom}",
            )

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"

    def to_dict(self) -> dict[str, str]:
        return {"denom": self.denom, "amount": str(self.amount)}


class Coins:
    """Immutable, denom-sorted collection of non-zero coins."""

    def __init__(self, coins: Iterable[Coin] = ()):
        by_denom: dict[str, Coin] = {}
        for coin in coins:
            if coin.denom in by_denom:
                raise InvalidAmountError(
                    f"duplicate denomination {coin.denom}", value=coin.denom,
                )
            if coin.amount > 0:
                by_denom[coin.denom] = coin
        self._coins: tuple[Coin, ...] = tuple(
            by_denom[d] for d in sorted(by_denom)
        )

    @classmethod
    def from_list(cls, items: Iterable[dict[str, Any]]) -> Coins:
        """Build from the JSON shape [{"denom": ..., "amount": "..."}]."""
        coins = []
        for item in items:
            try:
                coins.append(Coin(denom=item["denom"], amount=int(item["amount"])))
            except (KeyError, TypeError, ValueError) as e:
                raise InvalidAmountError(f"invalid coin entry: {item!r}") from e
        return cls(coins)

    def empty(self) -> bool:
        return not self._coins

    def amount_of(self, denom: str) -> int:
        for coin in self._coins:
            if coin.denom == denom:
                return coin.amount
        return 0

    def to_list(self) -> list[dict[str, str]]:
        return [c.to_dict() for c in self._coins]

    def __iter__(self) -> Iterator[Coin]:
        return iter(self._coins)

    def __len__(self) -> int:
        return len(self._coins)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Coins):
            return NotImplemented
        return self._coins == other._coins

    def __hash__(self) -> int:
        return hash(self._coins)

    def __str__(self) -> str:
        return ",".join(str(c) for c in self._coins)

    def __repr__(self) -> str:
        return f"Coins({str(self)!r})"


def parse_coin_normalized(text: str) -> Coin:
    """Parse a single "<amount><denom>" item, truncating decimal amounts."""
    match = _COIN.fullmatch(text.strip())
    if match is None:
        raise InvalidAmountError(f"invalid coin expression: {text!r}", value=text)

    raw_amount, denom = match.groups()
    try:
        amount = Decimal(raw_amount).quantize(Decimal(1), rounding=ROUND_DOWN)
    except InvalidOperation as e:
        raise InvalidAmountError(f"invalid coin amount: {raw_amount!r}", value=text) from e
    return Coin(denom=denom, amount=int(amount))


def parse_coins_normalized(text: str | None) -> Coins:
    """
    Parse a coin list such as "1000stake,500token".

    None, empty and blank input give an empty Coins.

    Raises:
        InvalidAmountError: On malformed items or duplicate denominations.
    """
    if text is None or not text.strip():
        return Coins()

    items = [item for item in _SEPARATORS.split(text.strip()) if item]
    return Coins(parse_coin_normalized(item) for item in items)
