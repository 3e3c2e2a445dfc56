"""
Currencies Kernel

Fixed-point monetary amounts for arbitrary currencies:
- Exact fixed-width unsigned integers up to 256 bits
- Per-currency amount classes with checked or unchecked arithmetic
- Lossless decimal formatting and parsing with source spans
- Built-in ISO 4217 and crypto currency descriptors
"""

__version__ = "0.1.0"

from currencies_kernel.domain import (
    BACKING_TYPES,
    BUILTIN_CURRENCIES,
    U8,
    U16,
    U32,
    U64,
    U128,
    U256,
    Amount,
    Checked,
    CheckedAmount,
    CurrencyDescriptor,
    CurrencyRegistry,
    DisplayStyle,
    FixedUnsigned,
    ParsedAmount,
    SafetyMode,
    Span,
    Unchecked,
    UncheckedAmount,
    amount_type,
    format_amount,
    format_raw,
    parse_amount,
    parse_amount_at,
)
from currencies_kernel.literals import amt, amt_checked

__all__ = [
    "__version__",
    "BACKING_TYPES",
    "BUILTIN_CURRENCIES",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "U256",
    "Amount",
    "Checked",
    "CheckedAmount",
    "CurrencyDescriptor",
    "CurrencyRegistry",
    "DisplayStyle",
    "FixedUnsigned",
    "ParsedAmount",
    "SafetyMode",
    "Span",
    "Unchecked",
    "UncheckedAmount",
    "amount_type",
    "format_amount",
    "format_raw",
    "parse_amount",
    "parse_amount_at",
    "amt",
    "amt_checked",
]
