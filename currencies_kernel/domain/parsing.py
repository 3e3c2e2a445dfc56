"""
Decimal codec -- format amounts as text and parse them back.

Responsibility:
    ``format_raw`` / ``format_amount`` render a raw minor-unit value in the
    currency's display style. ``parse_amount_at`` reads one amount from a
    position in a string and reports the span it consumed;
    ``parse_amount`` additionally requires the whole string to be consumed.

Architecture position:
    Kernel > domain. Depends on currency, uint and exceptions. Knows amount
    classes only through their ``currency`` / ``from_raw`` protocol, so it
    does not import the amount module at runtime.

Grammar (one currency at a time):

    amount   := prefix? whole "." fraction suffix?
    prefix   := SYMBOL                   (PREFIX_ATTACHED)
              | SYMBOL " "               (PREFIX_SPACED)
    whole    := DIGIT+ ("," DIGIT+)*     (a comma sits between two digits)
    fraction := DIGIT{0..decimal_digits}
    suffix   := SYMBOL                   (SUFFIX_ATTACHED)
              | " " SYMBOL               (SUFFIX_SPACED)

Invariants enforced:
    - Format always emits exactly ``decimal_digits`` fractional digits and
      no grouping, so ``parse_amount(cls, format_amount(a)) == a``.
    - Precision is never dropped: a fraction longer than
      ``decimal_digits`` is TooManyDecimalDigitsError, not a truncation.
    - A value that does not fit the backing width is
      UnrepresentableAmountError, never a wrapped or clamped value.

Failure modes:
    - AmountSyntaxError: symbol, space, digit or point missing; malformed
      grouping; trailing input (``parse_amount`` only).
    - TooManyDecimalDigitsError, UnrepresentableAmountError and, for
      non-decimal bases, AmountSemanticError when the minor units reach
      the base.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

from currencies_kernel.domain.currency import CurrencyDescriptor, DisplayStyle
from currencies_kernel.domain.uint import FixedUnsigned
from currencies_kernel.exceptions import (
    AmountParseError,
    AmountSemanticError,
    AmountSyntaxError,
    TooManyDecimalDigitsError,
    UnrepresentableAmountError,
)
from currencies_kernel.logging_config import LogContext, get_logger

if TYPE_CHECKING:
    from currencies_kernel.domain.amount import Amount

__all__ = [
    "Span",
    "ParsedAmount",
    "format_raw",
    "format_amount",
    "parse_amount_at",
    "parse_amount",
]

logger = get_logger("parsing")

_DIGITS = "0123456789"


class Span(NamedTuple):
    """Half-open ``[start, end)`` character offsets into the parsed text."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def slice(self, source: str) -> str:
        return source[self.start : self.end]


@dataclass(frozen=True, slots=True)
class ParsedAmount:
    """An amount read from text plus the span of everything consumed."""

    amount: Amount
    span: Span

    def __repr__(self) -> str:
        return f"ParsedAmount({self.amount!r}, span={tuple(self.span)})"


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------


def format_raw(currency: CurrencyDescriptor, raw: FixedUnsigned | int) -> str:
    """Render ``raw`` minor units of ``currency``; no grouping separators."""
    value = int(raw)
    major, minor = divmod(value, currency.base)
    if currency.decimal_digits:
        number = f"{major}.{minor:0{currency.decimal_digits}d}"
    else:
        number = f"{major}."

    style = currency.style
    if style is DisplayStyle.PREFIX_ATTACHED:
        return f"{currency.symbol}{number}"
    if style is DisplayStyle.PREFIX_SPACED:
        return f"{currency.symbol} {number}"
    if style is DisplayStyle.SUFFIX_ATTACHED:
        return f"{number}{currency.symbol}"
    return f"{number} {currency.symbol}"


def format_amount(amount: Amount) -> str:
    return format_raw(amount.currency, amount.raw)


# ---------------------------------------------------------------------------
# Parse
# ---------------------------------------------------------------------------


class _Cursor:
    """Position in the source text plus the error helpers bound to it."""

    __slots__ = ("source", "position")

    def __init__(self, source: str, position: int):
        self.source = source
        self.position = position

    def peek(self) -> str:
        if self.position < len(self.source):
            return self.source[self.position]
        return ""

    def at_digit(self) -> bool:
        ch = self.peek()
        return ch != "" and ch in _DIGITS

    def syntax_error(self, message: str, width: int = 1) -> AmountSyntaxError:
        end = min(self.position + width, len(self.source))
        return AmountSyntaxError(self.source, Span(self.position, end), message)

    def expect(self, token: str) -> None:
        if not self.source.startswith(token, self.position):
            raise self.syntax_error(f"expected `{token}`", len(token))
        self.position += len(token)

    def digits(self) -> str:
        start = self.position
        while self.at_digit():
            self.position += 1
        return self.source[start : self.position]


def _parse_whole(cursor: _Cursor) -> str:
    if not cursor.at_digit():
        raise cursor.syntax_error("expected digit")
    groups = [cursor.digits()]
    while cursor.peek() == ",":
        cursor.position += 1
        if not cursor.at_digit():
            raise cursor.syntax_error("expected digit")
        groups.append(cursor.digits())
    return "".join(groups)


def _to_raw(
    currency: CurrencyDescriptor,
    source: str,
    whole: str,
    fraction: str,
    whole_span: Span,
    fraction_span: Span,
) -> FixedUnsigned:
    backing = currency.backing
    number_span = Span(whole_span.start, fraction_span.end)
    max_digits = len(str(backing.MAX_VALUE))
    padded = fraction.ljust(currency.decimal_digits, "0")
    significant = (whole + padded if currency.is_decimal else whole).lstrip("0")
    if len(significant) > max_digits:
        raise UnrepresentableAmountError(source, number_span, backing.BITS)
    if currency.is_decimal:
        value = int(significant or "0")
    else:
        minor = int(padded) if padded else 0
        if minor >= currency.base:
            raise AmountSemanticError(
                source,
                fraction_span,
                f"minor units must be below {currency.base}",
            )
        value = int(significant or "0") * currency.base + minor
    if value > backing.MAX_VALUE:
        raise UnrepresentableAmountError(source, number_span, backing.BITS)
    return backing(value)


def _parse(amount_type: type[Amount], text: str, position: int) -> ParsedAmount:
    currency = amount_type.currency
    style = currency.style
    cursor = _Cursor(text, position)

    if style.is_prefix:
        cursor.expect(currency.symbol)
        if style is DisplayStyle.PREFIX_SPACED:
            cursor.expect(" ")

    whole_start = cursor.position
    whole = _parse_whole(cursor)
    whole_span = Span(whole_start, cursor.position)

    cursor.expect(".")

    fraction_start = cursor.position
    fraction = cursor.digits()
    fraction_span = Span(fraction_start, cursor.position)
    if len(fraction) > currency.decimal_digits:
        raise TooManyDecimalDigitsError(text, fraction_span, currency.decimal_digits)

    raw = _to_raw(currency, text, whole, fraction, whole_span, fraction_span)

    if not style.is_prefix:
        if style is DisplayStyle.SUFFIX_SPACED:
            cursor.expect(" ")
        cursor.expect(currency.symbol)

    return ParsedAmount(amount_type.from_raw(raw), Span(position, cursor.position))


def _log_failure(amount_type: type[Amount], exc: AmountParseError) -> None:
    logger.debug(
        "amount_parse_failed",
        extra={
            "currency": amount_type.currency.code,
            "error_code": exc.code,
            "reason": exc.message,
            "span": tuple(exc.span),
        },
    )


def parse_amount_at(
    amount_type: type[Amount],
    text: str,
    position: int = 0,
) -> ParsedAmount:
    """
    Parse one amount of ``amount_type`` starting at ``position``.

    Text after the amount is left alone; ``span.end`` says where the
    amount stopped.

    Raises:
        AmountParseError subclasses, each carrying a span into ``text``.
        TypeError / ValueError for a non-string or out-of-range position.
    """
    if not isinstance(text, str):
        raise TypeError(f"can only parse str, got {type(text).__name__}")
    if not 0 <= position <= len(text):
        raise ValueError(f"position {position} outside 0..{len(text)}")
    with LogContext.bind(currency=amount_type.currency.code, operation="parse"):
        try:
            return _parse(amount_type, text, position)
        except AmountParseError as exc:
            _log_failure(amount_type, exc)
            raise


def parse_amount(amount_type: type[Amount], text: str) -> Amount:
    """Parse ``text`` as exactly one amount; trailing characters are an error."""
    with LogContext.bind(currency=amount_type.currency.code, operation="parse"):
        parsed = parse_amount_at(amount_type, text)
        if parsed.span.end != len(text):
            error = AmountSyntaxError(
                text, Span(parsed.span.end, len(text)), "unexpected trailing input"
            )
            _log_failure(amount_type, error)
            raise error
    return parsed.amount
