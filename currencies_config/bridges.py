"""
Config -> Kernel Bridges.

Converts currency set definitions into kernel ``CurrencyDescriptor``
values and registers them. These live in currencies_config (the
producer) because the kernel must never import currencies_config.

Usage:
    from currencies_config.bridges import build_descriptors, register_currency_set

    currency_set = get_currency_set("default")
    descriptors = build_descriptors(currency_set)
"""

from __future__ import annotations

from currencies_config.schema import CurrencyDef, CurrencySet
from currencies_kernel.domain.currency import (
    CurrencyDescriptor,
    CurrencyRegistry,
    DisplayStyle,
)
from currencies_kernel.domain.uint import BACKING_TYPES


def build_descriptor(definition: CurrencyDef) -> CurrencyDescriptor:
    """Build a kernel descriptor from one definition.

    Raises:
        KeyError: Unknown backing name.
        InvalidCurrencyDescriptorError: Base / digit invariants violated.
    """
    return CurrencyDescriptor(
        code=definition.code,
        backing=BACKING_TYPES[definition.backing],
        base=definition.effective_base,
        decimal_digits=definition.decimal_digits,
        symbol=definition.symbol,
        style=DisplayStyle(definition.style),
        proper_name=definition.proper_name,
        is_iso=definition.is_iso,
        is_crypto=definition.is_crypto,
    )


def build_descriptors(currency_set: CurrencySet) -> tuple[CurrencyDescriptor, ...]:
    return tuple(build_descriptor(d) for d in currency_set.currencies)


def register_currency_set(
    currency_set: CurrencySet,
    overwrite: bool = False,
) -> tuple[CurrencyDescriptor, ...]:
    """Build every descriptor, then register the whole set as one unit.

    An invalid definition or a conflicting code registers nothing.
    """
    descriptors = build_descriptors(currency_set)
    CurrencyRegistry.register_all(descriptors, overwrite=overwrite)
    return descriptors
