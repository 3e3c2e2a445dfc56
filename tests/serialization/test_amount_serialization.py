"""
Amount serialization tests.

An amount serializes to its formatted string and deserializes through the
parser, so JSON documents carry "$123.45" rather than a raw integer.
"""

from __future__ import annotations

import json
from decimal import Decimal

import pytest

from currencies_kernel import U256, Amount, Checked
from currencies_kernel.domain.currency import ADA, ETH, USD
from currencies_kernel.exceptions import AmountParseError
from currencies_kernel.serialization import (
    AmountJSONEncoder,
    amount_decoder,
    amount_from_json,
    amount_to_json,
    deserialize_amount,
    serialize_amount,
)


class TestStringForm:
    """serialize_amount / deserialize_amount."""

    def test_serialize(self, usd):
        assert serialize_amount(usd.from_raw(123_45)) == "$123.45"

    def test_deserialize(self, usd):
        assert deserialize_amount(usd, "$123.45") == usd.from_raw(123_45)

    def test_checked_class_preserved(self, usd_checked):
        amount = deserialize_amount(usd_checked, "$1.00")
        assert type(amount) is usd_checked

    def test_serialize_rejects_non_amount(self):
        with pytest.raises(TypeError):
            serialize_amount(Decimal("1.00"))

    def test_deserialize_rejects_non_string(self, usd):
        with pytest.raises(TypeError, match="must be a string"):
            deserialize_amount(usd, 12345)

    def test_wrong_currency_text_fails(self, usd):
        with pytest.raises(AmountParseError):
            deserialize_amount(usd, "1.00 ETH")

    def test_decoder(self, eth):
        decode = amount_decoder(eth)
        assert decode("1.000000000000000000 ETH") == eth.from_raw(10**18)


class TestJson:
    """JSON documents and the encoder."""

    def test_amount_to_json(self, usd):
        assert amount_to_json(usd.from_raw(123_45)) == '"$123.45"'

    def test_amount_from_json(self, usd):
        assert amount_from_json(usd, '"$123.45"') == usd.from_raw(123_45)
        assert amount_from_json(usd, b'"$123.45"') == usd.from_raw(123_45)

    def test_non_ascii_symbol_kept(self):
        assert amount_to_json(Amount[ADA].from_raw(1)) == '"₳0.000001"'

    def test_encoder_in_document(self, usd, eth):
        document = {
            "price": usd.from_raw(3_24),
            "gas": eth.from_raw(21000),
            "nonce": U256(2**200),
            "rate": Decimal("1.5"),
        }
        decoded = json.loads(json.dumps(document, cls=AmountJSONEncoder))
        assert decoded == {
            "price": "$3.24",
            "gas": "0.000000000000021000 ETH",
            "nonce": str(2**200),
            "rate": "1.5",
        }

    def test_encoder_rejects_unknown(self):
        with pytest.raises(TypeError, match="not JSON serializable"):
            json.dumps({"x": object()}, cls=AmountJSONEncoder)

    def test_wide_value_round_trip(self):
        cls = Amount[ETH, Checked]
        amount = cls.from_raw(2**256 - 1)
        assert amount_from_json(cls, amount_to_json(amount)) == amount

    def test_usd_value(self):
        assert json.dumps(serialize_amount(Amount[USD].from_raw(12345))) == '"$123.45"'
