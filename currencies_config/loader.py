"""
Currency Set Loader (``currencies_config.loader``).

Responsibility
--------------
Loads a currency set YAML file and parses it into typed
``currencies_config.schema`` dataclass instances. Callers normally go
through ``currencies_config.get_currency_set()``.

Invariants enforced
-------------------
* Missing required keys raise ``KeyError``; wrongly typed values raise
  ``ValueError``. No silent defaults for required fields.
* Every parsed object is a frozen dataclass from ``schema.py``.
* ``compute_checksum`` produces a deterministic SHA-256 hash for set
  identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from currencies_config.schema import CurrencyDef, CurrencySet, CurrencySetStatus


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _require_int(data: dict[str, Any], key: str) -> int:
    value = data[key]
    # YAML booleans are ints in Python; reject them explicitly.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{key}' must be an integer, got {value!r}")
    return value


def parse_currency_def(data: dict[str, Any]) -> CurrencyDef:
    """Parse a ``CurrencyDef`` from a dict."""
    base = data.get("base")
    if base is not None and (isinstance(base, bool) or not isinstance(base, int)):
        raise ValueError(f"'base' must be an integer, got {base!r}")
    return CurrencyDef(
        code=str(data["code"]).upper().strip(),
        backing=str(data["backing"]).lower().strip(),
        decimal_digits=_require_int(data, "decimal_digits"),
        symbol=str(data["symbol"]),
        style=str(data.get("style", "PREFIX_ATTACHED")).upper().strip(),
        base=base,
        proper_name=str(data.get("proper_name", "")),
        is_iso=bool(data.get("is_iso", False)),
        is_crypto=bool(data.get("is_crypto", False)),
    )


def parse_currency_set(data: dict[str, Any]) -> CurrencySet:
    """
    Parse a ``CurrencySet`` from the top-level YAML mapping.

    The checksum covers the whole mapping, so any edit to the file
    changes it.
    """
    currencies = tuple(parse_currency_def(c) for c in data.get("currencies", []))
    return CurrencySet(
        set_id=data["set_id"],
        version=_require_int(data, "version"),
        checksum=compute_checksum(data),
        status=CurrencySetStatus(str(data.get("status", "draft")).lower()),
        currencies=currencies,
        description=str(data.get("description", "")),
    )


def load_currency_set(path: Path) -> CurrencySet:
    """Load and parse one currency set file."""
    return parse_currency_set(load_yaml_file(path))


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
