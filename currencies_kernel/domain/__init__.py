"""
Pure domain layer.

Fixed-width integers, currency descriptors, safety markers, amounts and
the decimal codec. No I/O apart from structured logging; every value
object is immutable.
"""

from currencies_kernel.domain.uint import (
    BACKING_TYPES,
    U8,
    U16,
    U32,
    U64,
    U128,
    U256,
    FixedUnsigned,
)
from currencies_kernel.domain.currency import (
    BUILTIN_CURRENCIES,
    CurrencyDescriptor,
    CurrencyRegistry,
    DisplayStyle,
)
from currencies_kernel.domain.safety import Checked, SafetyMode, Unchecked
from currencies_kernel.domain.parsing import (
    ParsedAmount,
    Span,
    format_amount,
    format_raw,
    parse_amount,
    parse_amount_at,
)
from currencies_kernel.domain.amount import (
    Amount,
    CheckedAmount,
    UncheckedAmount,
    amount_type,
)

__all__ = [
    "BACKING_TYPES",
    "BUILTIN_CURRENCIES",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "U256",
    "FixedUnsigned",
    "CurrencyDescriptor",
    "CurrencyRegistry",
    "DisplayStyle",
    "Checked",
    "SafetyMode",
    "Unchecked",
    "ParsedAmount",
    "Span",
    "format_amount",
    "format_raw",
    "parse_amount",
    "parse_amount_at",
    "Amount",
    "CheckedAmount",
    "UncheckedAmount",
    "amount_type",
]
