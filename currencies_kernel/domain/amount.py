"""
Amount -- fixed-point monetary values specialised per currency and safety mode.

Responsibility:
    Holds one backing-width integer in minor units and implements the
    fixed-point operator set on it. ``Amount[USD]`` is an unchecked USD
    amount; ``Amount[USD, Checked]`` is its checked counterpart.

Architecture position:
    Kernel > domain. Depends on uint, currency, safety and parsing (for
    ``__str__`` and ``parse``). No I/O, no logging on arithmetic paths.

Invariants enforced:
    - Each (currency, safety) pair maps to exactly one concrete class,
      created once by ``amount_type`` and cached.
    - Binary operators, ordering and equality accept only operands of the
      identical concrete class. A different currency raises
      CurrencyMismatchError; the same currency in the other safety mode
      raises SafetyModeMismatchError.
    - UncheckedAmount operators raise IntegerOverflowError,
      IntegerUnderflowError or DivisionByZeroError.
    - CheckedAmount operators return None for the same conditions and
      refuse compound assignment, so a None can never be rebound silently.
    - Values are immutable.

Runtime currency checks:
    Python has no compile-time monomorphisation, so mixing currencies is a
    runtime error rather than a type error. Static checkers see every
    specialised class as UncheckedAmount or CheckedAmount and will not
    flag ``Amount[USD] + Amount[ETH]``; the CurrencyMismatchError raised at
    the first binary operation is the enforcement point.
"""

from __future__ import annotations

import threading
from typing import Any, ClassVar, TypeVar

from currencies_kernel.domain.currency import CurrencyDescriptor, CurrencyRegistry
from currencies_kernel.domain.parsing import format_raw, parse_amount
from currencies_kernel.domain.safety import Checked, SafetyMode, Unchecked
from currencies_kernel.domain.uint import FixedUnsigned
from currencies_kernel.exceptions import (
    CurrencyMismatchError,
    IntegerOverflowError,
    SafetyModeMismatchError,
)

__all__ = [
    "Amount",
    "UncheckedAmount",
    "CheckedAmount",
    "amount_type",
]

A = TypeVar("A", bound="Amount")


class Amount:
    """
    Base of all amount classes. Never instantiated directly.

    Subscript to get a concrete class:

        Amount[USD]              # UncheckedAmount specialised to USD
        Amount["USD", Checked]   # CheckedAmount specialised to USD
    """

    __slots__ = ("_raw",)

    currency: ClassVar[CurrencyDescriptor]
    safety: ClassVar[type[SafetyMode]]
    backing: ClassVar[type[FixedUnsigned]]
    _base: ClassVar[FixedUnsigned]

    _raw: FixedUnsigned

    def __new__(cls, *args: Any, **kwargs: Any) -> Amount:
        raise TypeError(
            f"{cls.__name__} cannot be constructed directly; "
            f"use from_raw(), parse() or zero()"
        )

    def __class_getitem__(cls, params: Any) -> type[Amount]:
        if "currency" in cls.__dict__:
            raise TypeError(f"{cls.__name__} is already specialised")
        if isinstance(params, tuple):
            if len(params) != 2:
                raise TypeError("expected Amount[currency] or Amount[currency, safety]")
            currency, safety = params
        else:
            currency, safety = params, None
        if cls is UncheckedAmount:
            if safety not in (None, Unchecked):
                raise TypeError("UncheckedAmount only accepts the Unchecked safety mode")
            safety = Unchecked
        elif cls is CheckedAmount:
            if safety not in (None, Checked):
                raise TypeError("CheckedAmount only accepts the Checked safety mode")
            safety = Checked
        return amount_type(currency, safety or Unchecked)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def _require_concrete(cls) -> None:
        if "currency" not in cls.__dict__:
            raise TypeError(
                f"{cls.__name__} is not specialised to a currency; "
                f"use {cls.__name__}[<currency>]"
            )

    @classmethod
    def _wrap(cls: type[A], raw: FixedUnsigned) -> A:
        obj = object.__new__(cls)
        object.__setattr__(obj, "_raw", raw)
        return obj

    @classmethod
    def from_raw(cls: type[A], value: FixedUnsigned | int) -> A:
        """
        Build an amount from a raw minor-unit value.

        Ints and narrower widths are widened to the backing width. No
        semantic validation is performed.
        """
        cls._require_concrete()
        return cls._wrap(cls.backing.widen(value))

    @classmethod
    def zero(cls: type[A]) -> A:
        cls._require_concrete()
        return cls._wrap(cls.backing.zero())

    @classmethod
    def one(cls: type[A]) -> A:
        """One minor unit (raw value 1), not one major unit."""
        cls._require_concrete()
        return cls._wrap(cls.backing.one())

    @classmethod
    def parse(cls: type[A], text: str) -> A:
        """Parse the whole of ``text``; see ``parse_amount``."""
        cls._require_concrete()
        return parse_amount(cls, text)

    @property
    def raw(self) -> FixedUnsigned:
        return self._raw

    @property
    def is_zero(self) -> bool:
        return self._raw.is_zero()

    def as_checked(self) -> CheckedAmount:
        """Same currency and raw value in the Checked mode."""
        return amount_type(self.currency, Checked)._wrap(self._raw)  # type: ignore[return-value]

    def as_unchecked(self) -> UncheckedAmount:
        """Same currency and raw value in the Unchecked mode."""
        return amount_type(self.currency, Unchecked)._wrap(self._raw)  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Immutability and pickling
    # ------------------------------------------------------------------

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[Any, tuple[Any, ...]]:
        return (_restore, (self.currency, self.safety, self._raw))

    def __copy__(self: A) -> A:
        return self

    def __deepcopy__(self: A, memo: dict[int, Any]) -> A:
        return self

    # ------------------------------------------------------------------
    # Operand discipline
    # ------------------------------------------------------------------

    def _same(self, other: Any, operation: str) -> bool:
        """
        True when ``other`` is an amount of exactly this class.

        Returns False for non-amounts so the caller can return
        NotImplemented; raises for amounts of another currency or mode.
        """
        if type(other) is type(self):
            return True
        if isinstance(other, Amount) and "currency" in type(other).__dict__:
            if other.currency != self.currency:
                raise CurrencyMismatchError(
                    self.currency.code, other.currency.code, operation
                )
            raise SafetyModeMismatchError(
                self.currency.code,
                self.safety.__name__,
                other.safety.__name__,
                operation,
            )
        return False

    def _scalar(self, other: Any) -> FixedUnsigned | None:
        """
        Scalar multiplier narrowed to the backing width.

        Returns None when ``other`` is not a scalar at all. Raises
        IntegerOverflowError / IntegerUnderflowError if it does not fit.
        """
        if isinstance(other, FixedUnsigned):
            narrowed = other.narrow(self.backing)
            if narrowed is None:
                raise IntegerOverflowError("mul", self.backing.BITS)
            return narrowed
        if isinstance(other, int) and not isinstance(other, bool):
            return self.backing(other)
        return None

    # ------------------------------------------------------------------
    # Ordering and equality
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not self._same(other, "eq"):
            return NotImplemented
        return self._raw == other._raw  # type: ignore[attr-defined]

    def __ne__(self, other: object) -> bool:
        if not self._same(other, "ne"):
            return NotImplemented
        return self._raw != other._raw  # type: ignore[attr-defined]

    def __lt__(self, other: Any) -> bool:
        if not self._same(other, "lt"):
            return NotImplemented
        return self._raw < other._raw

    def __le__(self, other: Any) -> bool:
        if not self._same(other, "le"):
            return NotImplemented
        return self._raw <= other._raw

    def __gt__(self, other: Any) -> bool:
        if not self._same(other, "gt"):
            return NotImplemented
        return self._raw > other._raw

    def __ge__(self, other: Any) -> bool:
        if not self._same(other, "ge"):
            return NotImplemented
        return self._raw >= other._raw

    def __hash__(self) -> int:
        return hash((self.currency.code, self.safety.__name__, int(self._raw)))

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return format_raw(self.currency, self._raw)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)


class UncheckedAmount(Amount):
    """
    Amount whose operators raise on overflow, underflow and zero division.

    ``a * b`` between amounts is the fixed-point product
    ``(a.raw * b.raw) // base``; ``a * n`` by an unsigned scalar scales the
    raw value by ``n``. ``a / b`` and ``a // b`` return the dimensionless
    backing-typed quotient of the raw values. ``a % b`` is an amount.
    Compound assignment (``+=``, ``-=``, ``*=``) rebinds the name.
    """

    __slots__ = ()

    def __add__(self, other: Any) -> UncheckedAmount:
        if not self._same(other, "add"):
            return NotImplemented
        return self._wrap(self._raw + other._raw)

    def __sub__(self, other: Any) -> UncheckedAmount:
        if not self._same(other, "sub"):
            return NotImplemented
        return self._wrap(self._raw - other._raw)

    def __mul__(self, other: Any) -> UncheckedAmount:
        if isinstance(other, Amount):
            if not self._same(other, "mul"):
                return NotImplemented
            return self._wrap((self._raw * other._raw) // self._base)
        scalar = self._scalar(other)
        if scalar is None:
            return NotImplemented
        return self._wrap(self._raw * scalar)

    def __rmul__(self, other: Any) -> UncheckedAmount:
        if isinstance(other, Amount):
            return NotImplemented
        return self.__mul__(other)

    def __truediv__(self, other: Any) -> FixedUnsigned:
        if not self._same(other, "div"):
            return NotImplemented
        return self._raw // other._raw

    __floordiv__ = __truediv__

    def __mod__(self, other: Any) -> UncheckedAmount:
        if not self._same(other, "rem"):
            return NotImplemented
        return self._wrap(self._raw % other._raw)


class CheckedAmount(Amount):
    """
    Amount whose operators return None instead of raising.

    Every operator has a named equivalent (``checked_add`` and so on).
    Compound assignment raises TypeError: the Optional result has to be
    inspected before it can be used again.
    """

    __slots__ = ()

    def _expect(self, other: Any, operation: str) -> None:
        if not self._same(other, operation):
            raise TypeError(
                f"{type(self).__name__}.checked_{operation} expects an amount of "
                f"the same class, got {type(other).__name__}"
            )

    def checked_add(self, other: Any) -> CheckedAmount | None:
        self._expect(other, "add")
        raw = self._raw.checked_add(other._raw)
        return None if raw is None else self._wrap(raw)

    def checked_sub(self, other: Any) -> CheckedAmount | None:
        self._expect(other, "sub")
        raw = self._raw.checked_sub(other._raw)
        return None if raw is None else self._wrap(raw)

    def checked_mul(self, other: Any) -> CheckedAmount | None:
        """Fixed-point product; None if the raw product overflows."""
        self._expect(other, "mul")
        product = self._raw.checked_mul(other._raw)
        if product is None:
            return None
        raw = product.checked_div(self._base)
        return None if raw is None else self._wrap(raw)

    def checked_scale(self, scalar: FixedUnsigned | int) -> CheckedAmount | None:
        """Raw value times an unsigned scalar; None if it does not fit."""
        if isinstance(scalar, FixedUnsigned):
            narrowed = scalar.narrow(self.backing)
        elif isinstance(scalar, int) and not isinstance(scalar, bool):
            if 0 <= scalar <= self.backing.MAX_VALUE:
                narrowed = self.backing(scalar)
            else:
                narrowed = None
        else:
            raise TypeError(f"cannot scale an amount by {type(scalar).__name__}")
        if narrowed is None:
            return None
        raw = self._raw.checked_mul(narrowed)
        return None if raw is None else self._wrap(raw)

    def checked_div(self, other: Any) -> FixedUnsigned | None:
        self._expect(other, "div")
        return self._raw.checked_div(other._raw)

    def checked_rem(self, other: Any) -> CheckedAmount | None:
        self._expect(other, "rem")
        raw = self._raw.checked_rem(other._raw)
        return None if raw is None else self._wrap(raw)

    def __add__(self, other: Any) -> CheckedAmount | None:
        if not self._same(other, "add"):
            return NotImplemented
        return self.checked_add(other)

    def __sub__(self, other: Any) -> CheckedAmount | None:
        if not self._same(other, "sub"):
            return NotImplemented
        return self.checked_sub(other)

    def __mul__(self, other: Any) -> CheckedAmount | None:
        if isinstance(other, Amount):
            if not self._same(other, "mul"):
                return NotImplemented
            return self.checked_mul(other)
        if isinstance(other, FixedUnsigned) or (
            isinstance(other, int) and not isinstance(other, bool)
        ):
            return self.checked_scale(other)
        return NotImplemented

    def __rmul__(self, other: Any) -> CheckedAmount | None:
        if isinstance(other, Amount):
            return NotImplemented
        return self.__mul__(other)

    def __truediv__(self, other: Any) -> FixedUnsigned | None:
        if not self._same(other, "div"):
            return NotImplemented
        return self.checked_div(other)

    __floordiv__ = __truediv__

    def __mod__(self, other: Any) -> CheckedAmount | None:
        if not self._same(other, "rem"):
            return NotImplemented
        return self.checked_rem(other)

    def _no_compound(self, other: Any) -> Any:
        raise TypeError(
            f"{type(self).__name__} does not support compound assignment; "
            f"use the operator and handle the Optional result"
        )

    __iadd__ = _no_compound
    __isub__ = _no_compound
    __imul__ = _no_compound
    __itruediv__ = _no_compound
    __ifloordiv__ = _no_compound
    __imod__ = _no_compound


# ---------------------------------------------------------------------------
# Specialisation
# ---------------------------------------------------------------------------

_VARIANTS: dict[type[SafetyMode], type[Amount]] = {
    Unchecked: UncheckedAmount,
    Checked: CheckedAmount,
}

_cache: dict[tuple[CurrencyDescriptor, type[SafetyMode]], type[Amount]] = {}
_cache_lock = threading.Lock()


def amount_type(
    currency: CurrencyDescriptor | str,
    safety: type[SafetyMode] = Unchecked,
) -> type[Amount]:
    """
    Return the concrete amount class for a currency and safety mode.

    ``currency`` is a descriptor or a registered code (case-insensitive).
    Repeated calls return the identical class object.

    Raises:
        InvalidCurrencyError: Unknown currency code.
        TypeError: ``safety`` is not Unchecked or Checked.
    """
    if isinstance(currency, str):
        descriptor = CurrencyRegistry.get(currency)
    elif isinstance(currency, CurrencyDescriptor):
        descriptor = currency
    else:
        raise TypeError(
            f"currency must be a CurrencyDescriptor or code, got {type(currency).__name__}"
        )
    variant = _VARIANTS.get(safety)  # type: ignore[arg-type]
    if variant is None:
        raise TypeError(f"safety must be Unchecked or Checked, got {safety!r}")

    key = (descriptor, safety)
    cls = _cache.get(key)
    if cls is not None:
        return cls
    with _cache_lock:
        cls = _cache.get(key)
        if cls is None:
            name = (
                f"Amount[{descriptor.code}]"
                if safety is Unchecked
                else f"Amount[{descriptor.code}, {safety.__name__}]"
            )
            cls = type(
                name,
                (variant,),
                {
                    "__slots__": (),
                    "__module__": __name__,
                    "__qualname__": name,
                    "currency": descriptor,
                    "safety": safety,
                    "backing": descriptor.backing,
                    "_base": descriptor.base_raw,
                },
            )
            _cache[key] = cls
    return cls


def _restore(
    currency: CurrencyDescriptor,
    safety: type[SafetyMode],
    raw: FixedUnsigned,
) -> Amount:
    return amount_type(currency, safety).from_raw(raw)
