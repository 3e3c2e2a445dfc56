"""Safety modes -- marker types selecting checked or unchecked arithmetic."""

from __future__ import annotations

from typing import Any, NoReturn


class SafetyMode:
    """
    Marker base class. Safety modes are types, never instances.

    The mode is part of a concrete amount class (``Amount[USD]`` vs
    ``Amount[USD, Checked]``) and cannot change for a value at runtime.
    """

    __slots__ = ()

    def __new__(cls, *args: Any, **kwargs: Any) -> NoReturn:
        raise TypeError(f"{cls.__name__} is a marker type and cannot be instantiated")


class Unchecked(SafetyMode):
    """Operators raise on overflow, underflow and division by zero."""

    __slots__ = ()


class Checked(SafetyMode):
    """Operators return None instead of raising; no compound assignment."""

    __slots__ = ()
