"""
Fixed-width unsigned integers -- exact arithmetic at 8 to 256 bits.

Responsibility:
    Provides the backing types for Amount raw values: U8, U16, U32, U64,
    U128 (the "native" widths) and U256 (the wide width used by currencies
    whose minor-unit range exceeds 128 bits, e.g. ETH with 18 decimals).

Architecture position:
    Kernel > leaf module. Pure functional, zero I/O. Independent of
    currencies; imported by currency, amount and parsing.

Invariants enforced:
    - A value is always within [0, 2**BITS - 1]. Construction from an int
      or from a wider width that does not fit raises; widening never fails.
    - Operators never wrap silently. ``+ - * // %`` raise
      IntegerOverflowError / IntegerUnderflowError / DivisionByZeroError.
    - ``checked_*`` never raise for in-range operands; they return None.
    - ``wrapping_*`` and left shifts follow native modulo-2**BITS rules.
    - Ordering, equality and hashing follow the integer magnitude, so
      ``U256(5) == U64(5) == 5``.

Failure modes:
    - IntegerOverflowError / IntegerUnderflowError / DivisionByZeroError
      from unchecked operators.
    - IntegerParseError from ``from_str_radix`` on malformed text.
    - TypeError for non-integer operands (floats, Decimals, strings).

Python's ``int`` is already arbitrary precision, so each width stores a
single ``int`` and enforces its bounds explicitly instead of keeping an
array of machine words.
"""

from __future__ import annotations

import operator
from typing import Any, ClassVar, TypeVar

from currencies_kernel.exceptions import (
    DivisionByZeroError,
    IntegerOverflowError,
    IntegerParseError,
    IntegerUnderflowError,
)

__all__ = [
    "FixedUnsigned",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "U256",
    "BACKING_TYPES",
]

T = TypeVar("T", bound="FixedUnsigned")

_RADIX_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


class FixedUnsigned:
    """
    Base class of all fixed-width unsigned integers.

    Concrete widths only declare ``BITS``; ``MIN_VALUE`` and ``MAX_VALUE``
    are filled in by ``__init_subclass__``.

    Mixed-width operands: a narrower operand is widened to the receiver's
    width; a wider one makes the receiver return NotImplemented so the
    wider type handles the operation. Plain ints are converted to the
    receiver's width and must fit.
    """

    __slots__ = ("_value",)

    BITS: ClassVar[int] = 0
    MIN_VALUE: ClassVar[FixedUnsigned]
    MAX_VALUE: ClassVar[FixedUnsigned]
    _MASK: ClassVar[int] = 0

    _value: int

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.BITS <= 0 or cls.BITS % 8:
            raise TypeError(f"{cls.__name__}.BITS must be a positive multiple of 8")
        cls._MASK = (1 << cls.BITS) - 1
        cls.MIN_VALUE = cls._new(0)
        cls.MAX_VALUE = cls._new(cls._MASK)

    def __new__(cls: type[T], value: Any = 0) -> T:
        if not cls.BITS:
            raise TypeError("FixedUnsigned is abstract; use one of U8..U256")
        if isinstance(value, FixedUnsigned):
            raw = value._value
        else:
            raw = operator.index(value)
        if raw < 0:
            raise IntegerUnderflowError("construct", cls.BITS)
        if raw > cls._MASK:
            raise IntegerOverflowError("construct", cls.BITS)
        return cls._new(raw)

    @classmethod
    def _new(cls: type[T], raw: int) -> T:
        obj = object.__new__(cls)
        object.__setattr__(obj, "_value", raw)
        return obj

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[type, tuple[int]]:
        return (type(self), (self._value,))

    # ------------------------------------------------------------------
    # Constructors and conversions
    # ------------------------------------------------------------------

    @classmethod
    def zero(cls: type[T]) -> T:
        return cls.MIN_VALUE  # type: ignore[return-value]

    @classmethod
    def one(cls: type[T]) -> T:
        return cls._new(1)

    @classmethod
    def wrapping(cls: type[T], value: int) -> T:
        """Build from any int, reducing it modulo 2**BITS."""
        return cls._new(operator.index(value) & cls._MASK)

    @classmethod
    def widen(cls: type[T], source: FixedUnsigned | int) -> T:
        """
        Widen a narrower (or equal) width or a non-negative int.

        Never fails for a narrower FixedUnsigned; raises TypeError if the
        source width is wider than ``cls``.
        """
        if isinstance(source, FixedUnsigned):
            if source.BITS > cls.BITS:
                raise TypeError(
                    f"cannot widen {type(source).__name__} into {cls.__name__}"
                )
            return cls._new(source._value)
        return cls(source)

    def narrow(self, target: type[T]) -> T | None:
        """Convert to ``target``; None if any high bit would be lost."""
        if self._value > target._MASK:
            return None
        return target._new(self._value)

    def to_int(self) -> int:
        return self._value

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def to_bytes(self, byteorder: str = "big") -> bytes:
        """Fixed-length (BITS // 8 bytes) unsigned encoding."""
        return self._value.to_bytes(self.BITS // 8, byteorder)  # type: ignore[arg-type]

    @classmethod
    def from_bytes(cls: type[T], data: bytes, byteorder: str = "big") -> T:
        if len(data) > cls.BITS // 8:
            raise IntegerOverflowError("from_bytes", cls.BITS)
        return cls._new(int.from_bytes(data, byteorder))  # type: ignore[arg-type]

    # ------------------------------------------------------------------
    # Radix text
    # ------------------------------------------------------------------

    @classmethod
    def from_str_radix(cls: type[T], text: str, radix: int = 10) -> T:
        """
        Parse an unsigned integer written in ``radix`` (2..36).

        Only digit characters are accepted: no sign, no ``0x`` prefix, no
        whitespace, no ``_`` separators. Letters are case-insensitive.

        Raises:
            IntegerParseError: Empty text, bad radix or invalid digit.
            IntegerOverflowError: Value does not fit in ``BITS``.
        """
        if not 2 <= radix <= 36:
            raise IntegerParseError(text, radix, "radix must be in 2..36")
        if not text:
            raise IntegerParseError(text, radix, "empty string")
        allowed = _RADIX_DIGITS[:radix]
        for ch in text.lower():
            if ch not in allowed:
                raise IntegerParseError(text, radix, f"invalid digit {ch!r}")
        raw = int(text, radix)
        if raw > cls._MASK:
            raise IntegerOverflowError("from_str_radix", cls.BITS)
        return cls._new(raw)

    def to_str_radix(self, radix: int = 10) -> str:
        """Lower-case digits in ``radix`` (2..36), no prefix."""
        if not 2 <= radix <= 36:
            raise ValueError(f"radix must be in 2..36, got {radix}")
        if radix == 10:
            return str(self._value)
        if radix in (2, 8, 16):
            return format(self._value, {2: "b", 8: "o", 16: "x"}[radix])
        value = self._value
        if value == 0:
            return "0"
        digits = []
        while value:
            value, digit = divmod(value, radix)
            digits.append(_RADIX_DIGITS[digit])
        return "".join(reversed(digits))

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"

    def __format__(self, format_spec: str) -> str:
        return format(self._value, format_spec)

    # ------------------------------------------------------------------
    # Operand handling
    # ------------------------------------------------------------------

    def _operand(self, other: Any) -> int | None:
        """Raw value of ``other`` at this width, or None if not handled here."""
        if isinstance(other, FixedUnsigned):
            if other.BITS <= self.BITS:
                return other._value
            return None
        if isinstance(other, int):
            return type(self)(other)._value
        return None

    def _require(self, other: Any, operation: str) -> int:
        raw = self._operand(other)
        if raw is None:
            raise TypeError(
                f"unsupported operand for {type(self).__name__}.{operation}: "
                f"{type(other).__name__}"
            )
        return raw

    def _fit(self: T, raw: int, operation: str) -> T:
        if raw < 0:
            raise IntegerUnderflowError(operation, self.BITS)
        if raw > self._MASK:
            raise IntegerOverflowError(operation, self.BITS)
        return self._new(raw)

    # ------------------------------------------------------------------
    # Unchecked operators (raise, never wrap)
    # ------------------------------------------------------------------

    def __add__(self: T, other: Any) -> T:
        raw = self._operand(other)
        if raw is None:
            return NotImplemented
        return self._fit(self._value + raw, "add")

    def __radd__(self: T, other: Any) -> T:
        return self.__add__(other)

    def __sub__(self: T, other: Any) -> T:
        raw = self._operand(other)
        if raw is None:
            return NotImplemented
        return self._fit(self._value - raw, "sub")

    def __rsub__(self: T, other: Any) -> T:
        raw = self._operand(other)
        if raw is None:
            return NotImplemented
        return self._fit(raw - self._value, "sub")

    def __mul__(self: T, other: Any) -> T:
        raw = self._operand(other)
        if raw is None:
            return NotImplemented
        return self._fit(self._value * raw, "mul")

    def __rmul__(self: T, other: Any) -> T:
        return self.__mul__(other)

    def __floordiv__(self: T, other: Any) -> T:
        raw = self._operand(other)
        if raw is None:
            return NotImplemented
        if raw == 0:
            raise DivisionByZeroError("div", self.BITS)
        return self._new(self._value // raw)

    def __rfloordiv__(self: T, other: Any) -> T:
        raw = self._operand(other)
        if raw is None:
            return NotImplemented
        if self._value == 0:
            raise DivisionByZeroError("div", self.BITS)
        return self._new(raw // self._value)

    # Integer division: ``/`` never produces a fraction.
    __truediv__ = __floordiv__
    __rtruediv__ = __rfloordiv__

    def __mod__(self: T, other: Any) -> T:
        raw = self._operand(other)
        if raw is None:
            return NotImplemented
        if raw == 0:
            raise DivisionByZeroError("rem", self.BITS)
        return self._new(self._value % raw)

    def __rmod__(self: T, other: Any) -> T:
        raw = self._operand(other)
        if raw is None:
            return NotImplemented
        if self._value == 0:
            raise DivisionByZeroError("rem", self.BITS)
        return self._new(raw % self._value)

    def __divmod__(self: T, other: Any) -> tuple[T, T]:
        raw = self._operand(other)
        if raw is None:
            return NotImplemented
        return self.div_rem(self._new(raw))

    def __pow__(self: T, exponent: int) -> T:
        exponent = operator.index(exponent)
        if exponent < 0:
            raise ValueError("negative exponent")
        if self._value > 1 and exponent >= self.BITS:
            raise IntegerOverflowError("pow", self.BITS)
        return self._fit(self._value**exponent, "pow")

    def add(self: T, other: Any) -> T:
        return self._fit(self._value + self._require(other, "add"), "add")

    def sub(self: T, other: Any) -> T:
        return self._fit(self._value - self._require(other, "sub"), "sub")

    def mul(self: T, other: Any) -> T:
        return self._fit(self._value * self._require(other, "mul"), "mul")

    def div(self: T, other: Any) -> T:
        return self.div_floor(other)

    def rem(self: T, other: Any) -> T:
        return self.mod_floor(other)

    # ------------------------------------------------------------------
    # Checked / saturating / wrapping families
    # ------------------------------------------------------------------
    # These accept any FixedUnsigned width or any int. The operand is
    # taken as a plain integer and range handling belongs to the family:
    # checked returns None, saturating clamps, wrapping masks.

    def _plain(self, other: Any, operation: str) -> int:
        raw = self._magnitude(other)
        if raw is None:
            raise TypeError(
                f"unsupported operand for {type(self).__name__}.{operation}: "
                f"{type(other).__name__}"
            )
        return raw

    def _checked_operand(self, other: Any, operation: str) -> int | None:
        raw = self._plain(other, operation)
        return raw if 0 <= raw <= self._MASK else None

    def _saturated_operand(self, other: Any, operation: str) -> int:
        return min(max(self._plain(other, operation), 0), self._MASK)

    def _wrapped_operand(self, other: Any, operation: str) -> int:
        return self._plain(other, operation) & self._MASK

    def checked_add(self: T, other: Any) -> T | None:
        rhs = self._checked_operand(other, "checked_add")
        if rhs is None:
            return None
        raw = self._value + rhs
        return self._new(raw) if raw <= self._MASK else None

    def checked_sub(self: T, other: Any) -> T | None:
        rhs = self._checked_operand(other, "checked_sub")
        if rhs is None:
            return None
        raw = self._value - rhs
        return self._new(raw) if raw >= 0 else None

    def checked_mul(self: T, other: Any) -> T | None:
        rhs = self._checked_operand(other, "checked_mul")
        if rhs is None:
            return None
        raw = self._value * rhs
        return self._new(raw) if raw <= self._MASK else None

    def checked_div(self: T, other: Any) -> T | None:
        rhs = self._checked_operand(other, "checked_div")
        return self._new(self._value // rhs) if rhs else None

    def checked_rem(self: T, other: Any) -> T | None:
        rhs = self._checked_operand(other, "checked_rem")
        return self._new(self._value % rhs) if rhs else None

    def checked_pow(self: T, exponent: int) -> T | None:
        try:
            return self**exponent
        except IntegerOverflowError:
            return None

    def saturating_add(self: T, other: Any) -> T:
        raw = self._value + self._saturated_operand(other, "saturating_add")
        return self._new(min(raw, self._MASK))

    def saturating_sub(self: T, other: Any) -> T:
        raw = self._value - self._saturated_operand(other, "saturating_sub")
        return self._new(max(raw, 0))

    def saturating_mul(self: T, other: Any) -> T:
        raw = self._value * self._saturated_operand(other, "saturating_mul")
        return self._new(min(raw, self._MASK))

    def wrapping_add(self: T, other: Any) -> T:
        return self._new((self._value + self._wrapped_operand(other, "wrapping_add")) & self._MASK)

    def wrapping_sub(self: T, other: Any) -> T:
        return self._new((self._value - self._wrapped_operand(other, "wrapping_sub")) & self._MASK)

    def wrapping_mul(self: T, other: Any) -> T:
        return self._new((self._value * self._wrapped_operand(other, "wrapping_mul")) & self._MASK)

    # ------------------------------------------------------------------
    # Integer-theoretic operations
    # ------------------------------------------------------------------

    def div_floor(self: T, other: Any) -> T:
        raw = self._require(other, "div_floor")
        if raw == 0:
            raise DivisionByZeroError("div_floor", self.BITS)
        return self._new(self._value // raw)

    def mod_floor(self: T, other: Any) -> T:
        raw = self._require(other, "mod_floor")
        if raw == 0:
            raise DivisionByZeroError("mod_floor", self.BITS)
        return self._new(self._value % raw)

    def div_rem(self: T, other: Any) -> tuple[T, T]:
        return self.div_floor(other), self.mod_floor(other)

    def gcd(self: T, other: Any) -> T:
        """Greatest common divisor by repeated floor-mod (Euclid)."""
        a: T = self
        b: T = self._new(self._require(other, "gcd"))
        while b:
            a, b = b, a.mod_floor(b)
        return a

    def lcm(self: T, other: Any) -> T:
        """
        Least common multiple as ``product // gcd``.

        Uses unchecked arithmetic: raises IntegerOverflowError if the
        product does not fit and DivisionByZeroError when both are zero.
        """
        rhs = self._new(self._require(other, "lcm"))
        return (self * rhs) // self.gcd(rhs)

    def divides(self, other: Any) -> bool:
        """True iff self != 0 and other is a multiple of self."""
        raw = self._require(other, "divides")
        return self._value != 0 and raw % self._value == 0

    def is_multiple_of(self, other: Any) -> bool:
        """True iff other != 0 and self is a multiple of other."""
        raw = self._require(other, "is_multiple_of")
        return raw != 0 and self._value % raw == 0

    def is_even(self) -> bool:
        return self._value & 1 == 0

    def is_odd(self) -> bool:
        return self._value & 1 == 1

    def is_zero(self) -> bool:
        return self._value == 0

    # ------------------------------------------------------------------
    # Bits
    # ------------------------------------------------------------------

    def bit_length(self) -> int:
        return self._value.bit_length()

    def count_ones(self) -> int:
        return bin(self._value).count("1")

    def leading_zeros(self) -> int:
        return self.BITS - self._value.bit_length()

    def trailing_zeros(self) -> int:
        if self._value == 0:
            return self.BITS
        return (self._value & -self._value).bit_length() - 1

    def __and__(self: T, other: Any) -> T:
        raw = self._operand(other)
        if raw is None:
            return NotImplemented
        return self._new(self._value & raw)

    __rand__ = __and__

    def __or__(self: T, other: Any) -> T:
        raw = self._operand(other)
        if raw is None:
            return NotImplemented
        return self._new(self._value | raw)

    __ror__ = __or__

    def __xor__(self: T, other: Any) -> T:
        raw = self._operand(other)
        if raw is None:
            return NotImplemented
        return self._new(self._value ^ raw)

    __rxor__ = __xor__

    def __invert__(self: T) -> T:
        return self._new(self._value ^ self._MASK)

    def __lshift__(self: T, count: Any) -> T:
        shift = operator.index(count)
        if shift < 0:
            raise ValueError("negative shift count")
        if shift >= self.BITS:
            return self._new(0)
        return self._new((self._value << shift) & self._MASK)

    def __rshift__(self: T, count: Any) -> T:
        shift = operator.index(count)
        if shift < 0:
            raise ValueError("negative shift count")
        if shift >= self.BITS:
            return self._new(0)
        return self._new(self._value >> shift)

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    @staticmethod
    def _magnitude(other: Any) -> int | None:
        if isinstance(other, FixedUnsigned):
            return other._value
        if isinstance(other, int):
            return other
        return None

    def __eq__(self, other: object) -> bool:
        raw = self._magnitude(other)
        if raw is None:
            return NotImplemented
        return self._value == raw

    def __ne__(self, other: object) -> bool:
        raw = self._magnitude(other)
        if raw is None:
            return NotImplemented
        return self._value != raw

    def __lt__(self, other: Any) -> bool:
        raw = self._magnitude(other)
        if raw is None:
            return NotImplemented
        return self._value < raw

    def __le__(self, other: Any) -> bool:
        raw = self._magnitude(other)
        if raw is None:
            return NotImplemented
        return self._value <= raw

    def __gt__(self, other: Any) -> bool:
        raw = self._magnitude(other)
        if raw is None:
            return NotImplemented
        return self._value > raw

    def __ge__(self, other: Any) -> bool:
        raw = self._magnitude(other)
        if raw is None:
            return NotImplemented
        return self._value >= raw

    def __hash__(self) -> int:
        return hash(self._value)


class U8(FixedUnsigned):
    __slots__ = ()
    BITS = 8


class U16(FixedUnsigned):
    __slots__ = ()
    BITS = 16


class U32(FixedUnsigned):
    __slots__ = ()
    BITS = 32


class U64(FixedUnsigned):
    __slots__ = ()
    BITS = 64


class U128(FixedUnsigned):
    __slots__ = ()
    BITS = 128


class U256(FixedUnsigned):
    """256-bit unsigned integer, the backing width of wide crypto currencies."""

    __slots__ = ()
    BITS = 256


BACKING_TYPES: dict[str, type[FixedUnsigned]] = {
    "u8": U8,
    "u16": U16,
    "u32": U32,
    "u64": U64,
    "u128": U128,
    "u256": U256,
}
