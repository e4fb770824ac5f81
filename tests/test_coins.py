"""
Tests for coin list parsing and the Coins collection.

Covers:
- Normalized parsing (decimal truncation, zero dropping, denom sorting)
- Separators and blank input
- Malformed expressions and duplicate denominations
- JSON list conversion
"""

import pytest

from netlaunch.exceptions import InvalidAmountError
from netlaunch.network.coins import (
    Coin,
    Coins,
    parse_coin_normalized,
    parse_coins_normalized,
)


class TestParseCoinNormalized:

    def test_integer_amount(self):
        assert parse_coin_normalized("1000stake") == Coin("stake", 1000)

    def test_decimal_amount_is_truncated(self):
        assert parse_coin_normalized("10.99token") == Coin("token", 10)

    def test_ibc_denom(self):
        coin = parse_coin_normalized("5ibc/27394FB092D2ECCD")
        assert coin.denom == "ibc/27394FB092D2ECCD"

    @pytest.mark.parametrize("text", ["stake", "100", "-5stake", "10 stake", "5s", "1.stake"])
    def test_malformed(self, text):
        with pytest.raises(InvalidAmountError):
            parse_coin_normalized(text)


class TestParseCoinsNormalized:

    def test_comma_separated_sorted(self):
        coins = parse_coins_normalized("500token,1000stake")
        assert [str(c) for c in coins] == ["1000stake", "500token"]
        assert str(coins) == "1000stake,500token"

    def test_whitespace_separated(self):
        coins = parse_coins_normalized("1000stake 500token")
        assert coins.amount_of("token") == 500

    def test_zero_amounts_dropped(self):
        coins = parse_coins_normalized("0stake,5token")
        assert len(coins) == 1
        assert coins.amount_of("stake") == 0

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_blank_is_empty(self, text):
        assert parse_coins_normalized(text).empty()

    def test_duplicate_denom(self):
        with pytest.raises(InvalidAmountError, match="duplicate"):
            parse_coins_normalized("1stake,2stake")

    def test_malformed_item_fails_whole_list(self):
        with pytest.raises(InvalidAmountError) as exc:
            parse_coins_normalized("1000stake,abc")
        assert exc.value.value == "abc"


class TestCoins:

    def test_from_list_roundtrip_shape(self):
        items = [{"denom": "stake", "amount": "1000"}]
        assert Coins.from_list(items).to_list() == items

    def test_from_list_rejects_bad_entry(self):
        with pytest.raises(InvalidAmountError):
            Coins.from_list([{"denom": "stake", "amount": "lots"}])

    def test_equality_ignores_input_order(self):
        a = Coins([Coin("token", 1), Coin("stake", 2)])
        b = Coins([Coin("stake", 2), Coin("token", 1)])
        assert a == b
        assert hash(a) == hash(b)

    def test_invalid_denom(self):
        with pytest.raises(InvalidAmountError):
            Coin("1x", 5)

    def test_negative_amount(self):
        with pytest.raises(InvalidAmountError):
            Coin("stake", -1)
