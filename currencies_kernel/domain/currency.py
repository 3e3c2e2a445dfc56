"""Currency -- descriptors, display styles and the built-in currency registry."""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass
from enum import Enum
from collections.abc import Iterable
from typing import ClassVar

from currencies_kernel.domain.uint import U64, U128, U256, FixedUnsigned
from currencies_kernel.exceptions import (
    CurrencyAlreadyRegisteredError,
    InvalidCurrencyDescriptorError,
    InvalidCurrencyError,
)
from currencies_kernel.logging_config import get_logger

logger = get_logger("currency")

_CODE_PATTERN = re.compile(r"^[A-Z0-9]{2,8}$")


class DisplayStyle(str, Enum):
    """Where the symbol goes relative to the number."""

    PREFIX_ATTACHED = "PREFIX_ATTACHED"  # $40.00
    PREFIX_SPACED = "PREFIX_SPACED"  # $ 40.00
    SUFFIX_ATTACHED = "SUFFIX_ATTACHED"  # 40.00€
    SUFFIX_SPACED = "SUFFIX_SPACED"  # 40.00 AUD

    @property
    def is_prefix(self) -> bool:
        return self in (DisplayStyle.PREFIX_ATTACHED, DisplayStyle.PREFIX_SPACED)

    @property
    def is_spaced(self) -> bool:
        return self in (DisplayStyle.PREFIX_SPACED, DisplayStyle.SUFFIX_SPACED)


def is_power_of_ten(value: int) -> bool:
    if value < 1:
        return False
    while value % 10 == 0:
        value //= 10
    return value == 1


@dataclass(frozen=True, slots=True)
class CurrencyDescriptor:
    """
    Static metadata for one currency.

    Contract:
        ``base`` is the number of minor units per major unit. Amounts of
        this currency store ``major * base + minor`` in a ``backing`` value.

    Guarantees:
        - Immutable and hashable (frozen dataclass with slots)
        - base > 0 and base fits in the backing width
        - decimal_digits is stored, never derived from base
        - base == 10 ** decimal_digits whenever base is a power of ten;
          any other base is smaller than 10 ** decimal_digits so every
          minor-unit count can be written in decimal_digits digits

    Non-goals:
        - Does NOT know exchange rates
        - Does NOT describe signed amounts
    """

    code: str
    backing: type[FixedUnsigned]
    base: int
    decimal_digits: int
    symbol: str
    style: DisplayStyle = DisplayStyle.PREFIX_ATTACHED
    proper_name: str = ""
    is_iso: bool = False
    is_crypto: bool = False

    def __post_init__(self) -> None:
        normalized = self.code.upper().strip() if isinstance(self.code, str) else ""
        if not _CODE_PATTERN.match(normalized):
            raise InvalidCurrencyDescriptorError(
                str(self.code), "code must be 2-8 letters or digits"
            )
        object.__setattr__(self, "code", normalized)

        if not isinstance(self.style, DisplayStyle):
            object.__setattr__(self, "style", DisplayStyle(self.style))

        if not (isinstance(self.backing, type) and issubclass(self.backing, FixedUnsigned)):
            raise InvalidCurrencyDescriptorError(
                normalized, f"backing must be a FixedUnsigned width, got {self.backing!r}"
            )
        if not self.symbol:
            raise InvalidCurrencyDescriptorError(normalized, "symbol is required")
        if self.decimal_digits < 0:
            raise InvalidCurrencyDescriptorError(normalized, "decimal_digits must be >= 0")
        if self.base <= 0:
            raise InvalidCurrencyDescriptorError(normalized, "base must be > 0")
        if self.base > self.backing.MAX_VALUE:
            raise InvalidCurrencyDescriptorError(
                normalized, f"base {self.base} does not fit in {self.backing.__name__}"
            )
        scale = 10**self.decimal_digits
        if is_power_of_ten(self.base):
            if self.base != scale:
                raise InvalidCurrencyDescriptorError(
                    normalized,
                    f"base {self.base} != 10**{self.decimal_digits}",
                )
        elif self.base > scale:
            raise InvalidCurrencyDescriptorError(
                normalized,
                f"base {self.base} needs more than {self.decimal_digits} decimal digits",
            )

    @classmethod
    def decimal(
        cls,
        code: str,
        backing: type[FixedUnsigned],
        decimal_digits: int,
        symbol: str,
        style: DisplayStyle = DisplayStyle.PREFIX_ATTACHED,
        proper_name: str = "",
        *,
        is_iso: bool = False,
        is_crypto: bool = False,
    ) -> CurrencyDescriptor:
        """Factory for base-10 currencies: base = 10 ** decimal_digits."""
        return cls(
            code=code,
            backing=backing,
            base=10**decimal_digits,
            decimal_digits=decimal_digits,
            symbol=symbol,
            style=style,
            proper_name=proper_name,
            is_iso=is_iso,
            is_crypto=is_crypto,
        )

    @property
    def base_raw(self) -> FixedUnsigned:
        """Base as a value of the backing width."""
        return self.backing(self.base)

    @property
    def is_decimal(self) -> bool:
        """True when minor units are decimal fractions of the major unit."""
        return self.base == 10**self.decimal_digits

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"CurrencyDescriptor({self.code!r})"


class CurrencyRegistry:
    """
    Append-only registry of currency descriptors, keyed by code.

    Built-in currencies are registered when this module is imported;
    additional ones come from ``currencies_config`` currency sets.
    """

    _CURRENCIES: ClassVar[dict[str, CurrencyDescriptor]] = {}
    _lock: ClassVar[threading.Lock] = threading.Lock()

    @classmethod
    def register(cls, descriptor: CurrencyDescriptor, overwrite: bool = False) -> None:
        """
        Register a currency descriptor.

        Re-registering an identical descriptor is a no-op.

        Raises:
            TypeError: If descriptor is not a CurrencyDescriptor.
            CurrencyAlreadyRegisteredError: If a different descriptor is
                registered under the same code and overwrite is False.
        """
        cls.register_all((descriptor,), overwrite=overwrite)

    @classmethod
    def register_all(
        cls, descriptors: Iterable[CurrencyDescriptor], overwrite: bool = False
    ) -> None:
        """
        Register several descriptors as one unit.

        Every descriptor is checked before any is written, so a conflict
        leaves the registry exactly as it was.

        Raises:
            TypeError: If any item is not a CurrencyDescriptor.
            CurrencyAlreadyRegisteredError: If any code is already bound to
                a different descriptor and overwrite is False.
        """
        descriptors = tuple(descriptors)
        for descriptor in descriptors:
            if not isinstance(descriptor, CurrencyDescriptor):
                raise TypeError(
                    f"descriptor must be a CurrencyDescriptor, got {type(descriptor).__name__}"
                )
        with cls._lock:
            staged: dict[str, CurrencyDescriptor] = {}
            replaced: dict[str, bool] = {}
            for descriptor in descriptors:
                current = staged.get(descriptor.code, cls._CURRENCIES.get(descriptor.code))
                if current == descriptor:
                    continue
                if current is not None and not overwrite:
                    raise CurrencyAlreadyRegisteredError(descriptor.code)
                staged[descriptor.code] = descriptor
                replaced[descriptor.code] = descriptor.code in cls._CURRENCIES
            cls._CURRENCIES.update(staged)
        for code, descriptor in staged.items():
            logger.info(
                "currency_registered",
                extra={
                    "code": code,
                    "backing": descriptor.backing.__name__,
                    "base": descriptor.base,
                    "decimal_digits": descriptor.decimal_digits,
                    "replaced": replaced[code],
                },
            )

    @classmethod
    def is_valid(cls, code: str) -> bool:
        """Check if a currency code is registered."""
        if not code or not isinstance(code, str):
            return False
        return code.upper().strip() in cls._CURRENCIES

    @classmethod
    def get_info(cls, code: str) -> CurrencyDescriptor | None:
        """Get a descriptor by code, or None."""
        if not code or not isinstance(code, str):
            return None
        return cls._CURRENCIES.get(code.upper().strip())

    @classmethod
    def get(cls, code: str) -> CurrencyDescriptor:
        """Get a descriptor by code; raises InvalidCurrencyError if unknown."""
        info = cls.get_info(code)
        if info is None:
            raise InvalidCurrencyError(str(code))
        return info

    @classmethod
    def validate(cls, code: str) -> str:
        """Validate and normalize a currency code."""
        return cls.get(code).code

    @classmethod
    def all_codes(cls) -> frozenset[str]:
        """Get all registered currency codes."""
        return frozenset(cls._CURRENCIES.keys())

    @classmethod
    def all_currencies(cls) -> dict[str, CurrencyDescriptor]:
        """Get all registered descriptors."""
        return dict(cls._CURRENCIES)


# ---------------------------------------------------------------------------
# Built-in currencies
# ---------------------------------------------------------------------------

_PA = DisplayStyle.PREFIX_ATTACHED
_SA = DisplayStyle.SUFFIX_ATTACHED
_SS = DisplayStyle.SUFFIX_SPACED

# ISO 4217
USD = CurrencyDescriptor.decimal("USD", U64, 2, "$", _PA, "United States Dollar", is_iso=True)
EUR = CurrencyDescriptor.decimal("EUR", U64, 2, "€", _SA, "Euro", is_iso=True)
GBP = CurrencyDescriptor.decimal("GBP", U64, 2, "£", _PA, "Pound Sterling", is_iso=True)
JPY = CurrencyDescriptor.decimal("JPY", U64, 0, "¥", _PA, "Yen", is_iso=True)
AUD = CurrencyDescriptor.decimal("AUD", U64, 2, "$", _PA, "Australian Dollar", is_iso=True)
CAD = CurrencyDescriptor.decimal("CAD", U64, 2, "$", _PA, "Canadian Dollar", is_iso=True)
CHF = CurrencyDescriptor.decimal("CHF", U64, 2, "CHF", _SS, "Swiss Franc", is_iso=True)
CNY = CurrencyDescriptor.decimal("CNY", U64, 2, "¥", _PA, "Yuan Renminbi", is_iso=True)
INR = CurrencyDescriptor.decimal("INR", U64, 2, "₹", _PA, "Indian Rupee", is_iso=True)
KWD = CurrencyDescriptor.decimal("KWD", U64, 3, "KD", _SS, "Kuwaiti Dinar", is_iso=True)
BHD = CurrencyDescriptor.decimal("BHD", U64, 3, "BD", _SS, "Bahraini Dinar", is_iso=True)
CLF = CurrencyDescriptor.decimal("CLF", U64, 4, "UF", _SS, "Unidad de Fomento", is_iso=True)

# Crypto
BTC = CurrencyDescriptor.decimal("BTC", U256, 8, "BTC", _SS, "Bitcoin", is_crypto=True)
ETH = CurrencyDescriptor.decimal("ETH", U256, 18, "ETH", _SS, "Ethereum", is_crypto=True)
DOT = CurrencyDescriptor.decimal("DOT", U128, 10, "DOT", _SS, "Polkadot", is_crypto=True)
KSM = CurrencyDescriptor.decimal("KSM", U128, 12, "KSM", _SS, "Kusama", is_crypto=True)
ADA = CurrencyDescriptor.decimal("ADA", U64, 6, "₳", _PA, "Cardano", is_crypto=True)
SOL = CurrencyDescriptor.decimal("SOL", U64, 9, "SOL", _SS, "Solana", is_crypto=True)
USDC = CurrencyDescriptor.decimal("USDC", U64, 6, "USDC", _SS, "USD Coin", is_crypto=True)

BUILTIN_CURRENCIES: tuple[CurrencyDescriptor, ...] = (
    USD, EUR, GBP, JPY, AUD, CAD, CHF, CNY, INR, KWD, BHD, CLF,
    BTC, ETH, DOT, KSM, ADA, SOL, USDC,
)

for _descriptor in BUILTIN_CURRENCIES:
    CurrencyRegistry.register(_descriptor)
del _descriptor
