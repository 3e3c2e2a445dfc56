"""
Currency set schema.

Defines the human-authored, reviewable source artifact for additional
currencies. YAML files are parsed into these types by the loader,
checked by the validator and turned into kernel descriptors by the
bridges.

Key distinction:
  CurrencyDef        = source artifact (strings and ints from YAML)
  CurrencyDescriptor = kernel artifact (validated, backing type resolved)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique


@unique
class CurrencySetStatus(str, Enum):
    """Lifecycle status for a currency set. Only PUBLISHED sets install."""

    DRAFT = "draft"
    APPROVED = "approved"
    PUBLISHED = "published"
    RETIRED = "retired"


@dataclass(frozen=True)
class CurrencyDef:
    """One currency as written in YAML.

    ``base`` is optional; when omitted the currency is decimal and the
    base is ``10 ** decimal_digits``.
    """

    code: str
    backing: str  # u8 .. u256
    decimal_digits: int
    symbol: str
    style: str = "PREFIX_ATTACHED"
    base: int | None = None
    proper_name: str = ""
    is_iso: bool = False
    is_crypto: bool = False

    @property
    def effective_base(self) -> int:
        if self.base is None:
            return 10**self.decimal_digits
        return self.base


@dataclass(frozen=True)
class CurrencySet:
    """A versioned group of currency definitions.

    Attributes:
        set_id: Unique identifier (e.g., "default-currencies")
        version: Set version number
        checksum: SHA-256 of the canonical YAML content
        status: Lifecycle status
        currencies: All currency definitions, in file order
        description: Free text for reviewers
    """

    set_id: str
    version: int
    checksum: str
    status: CurrencySetStatus
    currencies: tuple[CurrencyDef, ...]
    description: str = ""

    @property
    def codes(self) -> tuple[str, ...]:
        return tuple(c.code for c in self.currencies)
