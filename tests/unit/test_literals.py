"""Tests for amt() / amt_checked() amount literals."""

import pytest

from currencies_kernel import Amount, Checked, amt, amt_checked
from currencies_kernel.domain.currency import ADA, USD
from currencies_kernel.exceptions import AmountLiteralError, InvalidCurrencyError


class TestAmountLiterals:
    """Literals resolve the currency by code and parse with the codec."""

    def test_usd_literal(self):
        amount = amt("USD", "$3.24")
        assert str(amount) == "$3.24"
        assert type(amount) is Amount[USD]

    def test_descriptor_argument(self):
        assert amt(ADA, "₳1,000.000000").raw == 1_000_000000

    def test_case_insensitive_code(self):
        assert amt("usd", "$0.01").raw == 1

    def test_checked_literal(self):
        amount = amt_checked("USD", "$6.29") + amt_checked("USD", "$24.99")
        assert type(amount) is Amount[USD, Checked]
        assert str(amount) == "$31.28"

    def test_literals_compose_with_arithmetic(self):
        assert str(amt("USD", "$3.24") * 3) == "$9.72"


class TestInvalidLiterals:
    """Bad literals raise AmountLiteralError chained to the parse error."""

    def test_message_prefix(self):
        with pytest.raises(AmountLiteralError) as exc_info:
            amt("USD", "$0.001")
        assert str(exc_info.value).startswith("invalid amount: ")
        assert exc_info.value.code == "INVALID_AMOUNT_LITERAL"

    def test_fields(self):
        with pytest.raises(AmountLiteralError) as exc_info:
            amt("USD", "3.24")
        error = exc_info.value
        assert error.currency == "USD"
        assert error.literal == "3.24"
        assert error.span == (0, 1)
        assert error.reason == "expected `$`"
        assert error.__cause__ is not None

    def test_trailing_input(self):
        with pytest.raises(AmountLiteralError, match="unexpected trailing input"):
            amt("USD", "$3.24 ")

    def test_unknown_currency(self):
        with pytest.raises(InvalidCurrencyError):
            amt("NOPE", "1.00")

    def test_rejection_logged(self, captured_logs):
        with pytest.raises(AmountLiteralError):
            amt_checked("USD", "$1,00000")
        records = [r for r in captured_logs() if r["message"] == "amount_literal_rejected"]
        assert len(records) == 1
        assert records[0]["level"] == "WARNING"
        assert records[0]["literal"] == "$1,00000"
        assert records[0]["reason"] == "expected `.`"
