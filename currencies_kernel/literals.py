"""
Amount literals -- ``amt("USD", "$3.24")``.

Resolves a currency code and parses a literal with the decimal codec,
turning any parse failure into AmountLiteralError so a bad constant in
source code fails loudly where it is defined:

    FEE = amt("USD", "$0.30")
    CAP = amt_checked("ETH", "1.5 ETH")
"""

from __future__ import annotations

from currencies_kernel.domain.amount import CheckedAmount, UncheckedAmount, amount_type
from currencies_kernel.domain.currency import CurrencyDescriptor
from currencies_kernel.domain.parsing import parse_amount
from currencies_kernel.domain.safety import Checked, SafetyMode, Unchecked
from currencies_kernel.exceptions import AmountLiteralError, AmountParseError
from currencies_kernel.logging_config import LogContext, get_logger

__all__ = ["amt", "amt_checked"]

logger = get_logger("literals")


def _literal(
    currency: CurrencyDescriptor | str,
    literal: str,
    safety: type[SafetyMode],
):
    cls = amount_type(currency, safety)
    with LogContext.bind(currency=cls.currency.code, operation="literal"):
        try:
            return parse_amount(cls, literal)
        except AmountParseError as exc:
            logger.warning(
                "amount_literal_rejected",
                extra={
                    "currency": cls.currency.code,
                    "literal": literal,
                    "reason": exc.message,
                    "span": tuple(exc.span),
                },
            )
            raise AmountLiteralError(
                cls.currency.code, literal, exc.span, exc.message
            ) from exc


def amt(currency: CurrencyDescriptor | str, literal: str) -> UncheckedAmount:
    """
    Unchecked amount from a literal.

    Raises:
        InvalidCurrencyError: Unknown currency code.
        AmountLiteralError: Literal does not parse for the currency.
    """
    return _literal(currency, literal, Unchecked)


def amt_checked(currency: CurrencyDescriptor | str, literal: str) -> CheckedAmount:
    """Checked amount from a literal; same errors as ``amt``."""
    return _literal(currency, literal, Checked)
