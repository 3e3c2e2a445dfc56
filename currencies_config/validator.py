"""
Currency Set Validator (``currencies_config.validator``).

Responsibility
--------------
Validates a ``CurrencySet`` before any of its currencies reach the kernel
registry, so a bad YAML edit is reported as a list of readable problems
instead of the first descriptor error.

Invariants enforced
-------------------
* Code uniqueness -- duplicate codes within a set are errors.
* Code shape -- 2 to 8 letters or digits.
* Backing width -- must name one of the kernel's fixed widths.
* Base -- positive, fits the backing width, equals ``10 ** decimal_digits``
  when it is a power of ten, otherwise below ``10 ** decimal_digits``.
* Display style -- must name a ``DisplayStyle`` member.
* Built-in collision -- redefining a built-in code is a warning; the
  install step decides whether to overwrite.

Failure modes
-------------
* Validation errors (``ConfigValidationResult.errors``)  -> the set MUST
  NOT be installed.
* Validation warnings (``ConfigValidationResult.warnings``)  -> the set
  may be installed but should be reviewed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from currencies_config.schema import CurrencyDef, CurrencySet
from currencies_kernel.domain.currency import (
    BUILTIN_CURRENCIES,
    DisplayStyle,
    is_power_of_ten,
)
from currencies_kernel.domain.uint import BACKING_TYPES

_CODE_PATTERN = re.compile(r"^[A-Z0-9]{2,8}$")
_STYLE_NAMES = frozenset(s.value for s in DisplayStyle)


@dataclass
class ConfigValidationResult:
    """
    Result of currency set validation.

    ``is_valid`` returns ``True`` only when ``errors`` is empty.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)


def validate_currency_set(currency_set: CurrencySet) -> ConfigValidationResult:
    """Validate every currency in a set and the set as a whole."""
    result = ConfigValidationResult()

    _validate_code_uniqueness(currency_set, result)
    for currency in currency_set.currencies:
        _validate_currency(currency, result)
    _validate_builtin_collisions(currency_set, result)

    if not currency_set.currencies:
        result.add_warning(f"Currency set '{currency_set.set_id}' defines no currencies")

    return result


def _validate_code_uniqueness(
    currency_set: CurrencySet, result: ConfigValidationResult
) -> None:
    seen: set[str] = set()
    for currency in currency_set.currencies:
        if currency.code in seen:
            result.add_error(f"Duplicate currency: {currency.code} appears more than once")
        seen.add(currency.code)


def _validate_currency(currency: CurrencyDef, result: ConfigValidationResult) -> None:
    code = currency.code
    if not _CODE_PATTERN.match(code):
        result.add_error(f"Currency '{code}': code must be 2-8 letters or digits")
    if not currency.symbol:
        result.add_error(f"Currency '{code}': symbol is required")
    if currency.style not in _STYLE_NAMES:
        result.add_error(
            f"Currency '{code}': unknown style '{currency.style}' "
            f"(expected one of {', '.join(sorted(_STYLE_NAMES))})"
        )
    if currency.decimal_digits < 0:
        result.add_error(f"Currency '{code}': decimal_digits must be >= 0")
        return

    backing = BACKING_TYPES.get(currency.backing)
    if backing is None:
        result.add_error(
            f"Currency '{code}': unknown backing '{currency.backing}' "
            f"(expected one of {', '.join(BACKING_TYPES)})"
        )
        return

    base = currency.effective_base
    scale = 10**currency.decimal_digits
    if base <= 0:
        result.add_error(f"Currency '{code}': base must be > 0")
    elif base > backing.MAX_VALUE:
        result.add_error(f"Currency '{code}': base {base} does not fit in {currency.backing}")
    elif is_power_of_ten(base) and base != scale:
        result.add_error(
            f"Currency '{code}': base {base} is a power of ten but "
            f"decimal_digits is {currency.decimal_digits}"
        )
    elif not is_power_of_ten(base) and base > scale:
        result.add_error(
            f"Currency '{code}': base {base} needs more than "
            f"{currency.decimal_digits} decimal digits"
        )


def _validate_builtin_collisions(
    currency_set: CurrencySet, result: ConfigValidationResult
) -> None:
    builtin_codes = {d.code for d in BUILTIN_CURRENCIES}
    for currency in currency_set.currencies:
        if currency.code in builtin_codes:
            result.add_warning(
                f"Currency '{currency.code}' redefines a built-in currency"
            )
