"""
Typed Exception Hierarchy for the Currencies Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Monetary arithmetic must fail precisely. Callers catch by type, never by
message text:

    try:
        total = price * quantity
    except IntegerOverflowError as e:
        log.warning("overflow", extra={"code": e.code, "bits": e.bits})

Every class carries a class-level ``code`` (machine-readable, API-safe) and
stores its context as attributes.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    CurrenciesKernelError (base)
    |
    +-- IntegerError
    |   +-- IntegerOverflowError
    |   +-- IntegerUnderflowError
    |   +-- DivisionByZeroError
    |   +-- IntegerParseError
    |
    +-- CurrencyError
    |   +-- InvalidCurrencyError
    |   +-- InvalidCurrencyDescriptorError
    |   +-- CurrencyAlreadyRegisteredError
    |   +-- CurrencyMismatchError
    |   +-- SafetyModeMismatchError
    |
    +-- AmountParseError
    |   +-- AmountSyntaxError
    |   +-- AmountSemanticError
    |       +-- TooManyDecimalDigitsError
    |       +-- UnrepresentableAmountError
    |
    +-- AmountLiteralError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category   | Code                         | When Raised
-----------|------------------------------|---------------------------------------
Integer    | INTEGER_OVERFLOW             | Result above the width's MAX_VALUE
           | INTEGER_UNDERFLOW            | Result below zero
           | DIVISION_BY_ZERO             | Unchecked division/remainder by zero
           | INTEGER_PARSE_ERROR          | Bad radix string
-----------|------------------------------|---------------------------------------
Currency   | INVALID_CURRENCY             | Code not in the registry
           | INVALID_CURRENCY_DESCRIPTOR  | Descriptor violates Base/digit rules
           | CURRENCY_ALREADY_REGISTERED  | Duplicate registration
           | CURRENCY_MISMATCH            | Amounts of different currencies mixed
           | SAFETY_MODE_MISMATCH         | Checked and Unchecked amounts mixed
-----------|------------------------------|---------------------------------------
Parsing    | AMOUNT_SYNTAX_ERROR          | Missing symbol/point, bad grouping
           | TOO_MANY_DECIMAL_DIGITS      | Fraction longer than the currency's
           | UNREPRESENTABLE_AMOUNT       | Digits do not fit the backing width
-----------|------------------------------|---------------------------------------
Literal    | INVALID_AMOUNT_LITERAL       | amt()/amt_checked() literal rejected

Unchecked arithmetic raises the Integer* errors immediately. Checked
arithmetic never raises them; it returns None instead.
"""

from __future__ import annotations


class CurrenciesKernelError(Exception):
    """
    Base exception for all currencies kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "CURRENCIES_KERNEL_ERROR"


# Integer arithmetic exceptions


class IntegerError(CurrenciesKernelError):
    """Base exception for fixed-width integer errors."""

    code: str = "INTEGER_ERROR"


class IntegerOverflowError(IntegerError):
    """Result does not fit in the integer width."""

    code: str = "INTEGER_OVERFLOW"

    def __init__(self, operation: str, bits: int):
        self.operation = operation
        self.bits = bits
        super().__init__(f"arithmetic operation overflow: {operation} on u{bits}")


class IntegerUnderflowError(IntegerError):
    """Result is below zero."""

    code: str = "INTEGER_UNDERFLOW"

    def __init__(self, operation: str, bits: int):
        self.operation = operation
        self.bits = bits
        super().__init__(f"arithmetic operation underflow: {operation} on u{bits}")


class DivisionByZeroError(IntegerError):
    """Unchecked division or remainder with a zero divisor."""

    code: str = "DIVISION_BY_ZERO"

    def __init__(self, operation: str, bits: int):
        self.operation = operation
        self.bits = bits
        super().__init__(f"attempt to divide by zero: {operation} on u{bits}")


class IntegerParseError(IntegerError):
    """Text is not a valid unsigned integer in the requested radix."""

    code: str = "INTEGER_PARSE_ERROR"

    def __init__(self, text: str, radix: int, reason: str):
        self.text = text
        self.radix = radix
        self.reason = reason
        super().__init__(f"cannot parse {text!r} in radix {radix}: {reason}")


# Currency exceptions


class CurrencyError(CurrenciesKernelError):
    """Base exception for currency-related errors."""

    code: str = "CURRENCY_ERROR"


class InvalidCurrencyError(CurrencyError):
    """Currency code is not registered."""

    code: str = "INVALID_CURRENCY"

    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(f"Unknown currency code: '{currency}'")


class InvalidCurrencyDescriptorError(CurrencyError):
    """Currency descriptor violates the Base / decimal digit invariants."""

    code: str = "INVALID_CURRENCY_DESCRIPTOR"

    def __init__(self, currency: str, reason: str):
        self.currency = currency
        self.reason = reason
        super().__init__(f"Invalid currency descriptor {currency}: {reason}")


class CurrencyAlreadyRegisteredError(CurrencyError):
    """A different descriptor is already registered under the same code."""

    code: str = "CURRENCY_ALREADY_REGISTERED"

    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(
            f"Currency '{currency}' already exists in registry. "
            f"Use overwrite=True to replace it."
        )


class CurrencyMismatchError(CurrencyError):
    """Attempted operation on amounts of different currencies."""

    code: str = "CURRENCY_MISMATCH"

    def __init__(self, currency1: str, currency2: str, operation: str):
        self.currency1 = currency1
        self.currency2 = currency2
        self.operation = operation
        super().__init__(
            f"Currency mismatch in {operation}: {currency1} vs {currency2}"
        )


class SafetyModeMismatchError(CurrencyError):
    """Attempted operation mixing Checked and Unchecked amounts."""

    code: str = "SAFETY_MODE_MISMATCH"

    def __init__(self, currency: str, safety1: str, safety2: str, operation: str):
        self.currency = currency
        self.safety1 = safety1
        self.safety2 = safety2
        self.operation = operation
        super().__init__(
            f"Safety mode mismatch in {operation} for {currency}: "
            f"{safety1} vs {safety2}"
        )


# Parsing exceptions


class AmountParseError(CurrenciesKernelError):
    """
    Base exception for decimal amount parse failures.

    Always recoverable. ``span`` is the (start, end) offset pair into
    ``source`` that the failing parse step was looking at.
    """

    code: str = "AMOUNT_PARSE_ERROR"

    def __init__(self, source: str, span: tuple[int, int], message: str):
        self.source = source
        self.span = span
        self.message = message
        super().__init__(f"{message} at {span[0]}..{span[1]} in {source!r}")


class AmountSyntaxError(AmountParseError):
    """Missing or mismatched symbol, missing decimal point, malformed grouping."""

    code: str = "AMOUNT_SYNTAX_ERROR"


class AmountSemanticError(AmountParseError):
    """Text is well-formed but cannot become an amount of the currency."""

    code: str = "AMOUNT_SEMANTIC_ERROR"


class TooManyDecimalDigitsError(AmountSemanticError):
    """Fractional part is longer than the currency's decimal digits."""

    code: str = "TOO_MANY_DECIMAL_DIGITS"

    def __init__(self, source: str, span: tuple[int, int], max_digits: int):
        self.max_digits = max_digits
        super().__init__(source, span, "too many decimal digits")


class UnrepresentableAmountError(AmountSemanticError):
    """Digit string does not fit in the currency's backing width."""

    code: str = "UNREPRESENTABLE_AMOUNT"

    def __init__(self, source: str, span: tuple[int, int], bits: int):
        self.bits = bits
        super().__init__(source, span, "invalid amount")


class AmountLiteralError(CurrenciesKernelError):
    """An amount literal passed to amt()/amt_checked() could not be parsed."""

    code: str = "INVALID_AMOUNT_LITERAL"

    def __init__(self, currency: str, literal: str, span: tuple[int, int], reason: str):
        self.currency = currency
        self.literal = literal
        self.span = span
        self.reason = reason
        super().__init__(f"invalid amount: {reason} (in {currency} literal {literal!r})")
