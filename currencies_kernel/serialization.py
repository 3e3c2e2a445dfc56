"""
String serialization of amounts.

An amount travels as exactly one string, its formatted text ("$123.45",
"1.5 ETH"). Reading it back uses the same parser as everything else, so
any wire or storage format only needs to carry that string. The currency
is not embedded in the payload; the reader names the amount class it
expects and a text in another currency's style fails to parse.
"""

import json
from collections.abc import Callable
from decimal import Decimal
from typing import Any

from currencies_kernel.domain.amount import Amount
from currencies_kernel.domain.parsing import format_amount, parse_amount
from currencies_kernel.domain.uint import FixedUnsigned

__all__ = [
    "serialize_amount",
    "deserialize_amount",
    "amount_decoder",
    "AmountJSONEncoder",
    "amount_to_json",
    "amount_from_json",
]


def serialize_amount(amount: Amount) -> str:
    """Formatted text of ``amount``."""
    if not isinstance(amount, Amount):
        raise TypeError(f"expected an amount, got {type(amount).__name__}")
    return format_amount(amount)


def deserialize_amount(amount_type: type[Amount], text: str) -> Amount:
    """
    Parse a serialized amount.

    Raises:
        TypeError: ``text`` is not a string.
        AmountParseError: ``text`` is not a complete amount of ``amount_type``.
    """
    if not isinstance(text, str):
        raise TypeError(
            f"a value that can be converted into an amount must be a string, "
            f"got {type(text).__name__}"
        )
    return parse_amount(amount_type, text)


def amount_decoder(amount_type: type[Amount]) -> Callable[[str], Amount]:
    """Single-argument decoder bound to ``amount_type``, for field mappers."""

    def decode(text: str) -> Amount:
        return deserialize_amount(amount_type, text)

    return decode


def _json_serializer(obj: Any) -> Any:
    """
    Custom JSON serializer for types not natively supported.

    Raises:
        TypeError: If object type is not supported.
    """
    if isinstance(obj, Amount):
        return format_amount(obj)
    if isinstance(obj, FixedUnsigned):
        # Decimal string; 256-bit values do not survive JSON numbers.
        return str(obj)
    if isinstance(obj, Decimal):
        return str(obj)

    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class AmountJSONEncoder(json.JSONEncoder):
    """json.JSONEncoder that writes amounts and fixed-width integers as strings."""

    def default(self, obj: Any) -> Any:
        return _json_serializer(obj)


def amount_to_json(amount: Amount) -> str:
    """JSON document holding one amount: ``'"$123.45"'``."""
    return json.dumps(serialize_amount(amount), ensure_ascii=False)


def amount_from_json(amount_type: type[Amount], data: str | bytes) -> Amount:
    return deserialize_amount(amount_type, json.loads(data))
