"""
currencies_config -- YAML-driven currency sets.

Responsibility:
    Loads additional currency definitions from versioned YAML sets,
    validates them and installs them into the kernel registry. The
    built-in currencies in ``currencies_kernel.domain.currency`` need no
    configuration; sets add to them.

Architecture position:
    Configuration -- sits above ``currencies_kernel``. The kernel MUST
    NEVER import from ``currencies_config``; ``bridges`` translates set
    definitions into kernel descriptors.

Invariants enforced:
    - A set is validated in full before any of its currencies is built.
    - Checksum pinning: when an APPROVED_FINGERPRINT file exists in the
      set directory, the set's checksum must match it.
    - Only PUBLISHED sets are installed.

Failure modes:
    - ``FileNotFoundError`` -- no such set directory or YAML file.
    - ``ValueError`` -- validation failures, or installing a set that is
      not published.
    - ``ConfigIntegrityError`` -- checksum mismatch against the pin file.
    - ``CurrencyAlreadyRegisteredError`` -- a set redefines a registered
      code differently and ``overwrite`` is False.

Every successful ``get_currency_set()`` call emits a
``CURRENCY_CONFIG_TRACE`` log entry with the set id, version, checksum
and currency codes.
"""

from __future__ import annotations

import logging
from pathlib import Path

from currencies_config.bridges import register_currency_set
from currencies_config.integrity import ConfigIntegrityError, verify_fingerprint_pin
from currencies_config.loader import load_currency_set
from currencies_config.schema import CurrencyDef, CurrencySet, CurrencySetStatus
from currencies_config.validator import ConfigValidationResult, validate_currency_set
from currencies_kernel.domain.currency import CurrencyDescriptor
from currencies_kernel.logging_config import LogContext

__all__ = [
    "ConfigIntegrityError",
    "ConfigValidationResult",
    "CurrencyDef",
    "CurrencySet",
    "CurrencySetStatus",
    "get_currency_set",
    "install_currency_set",
]

_logger = logging.getLogger("currencies_kernel.config")

# Default currency sets directory
_DEFAULT_CONFIG_DIR = Path(__file__).parent / "sets"

CURRENCIES_FILE = "currencies.yaml"


def get_currency_set(
    name: str = "default",
    config_dir: Path | None = None,
) -> CurrencySet:
    """Load, validate and pin-check one currency set.

    Args:
        name: Set directory name under ``config_dir``.
        config_dir: Override path to the sets directory. Defaults to
            currencies_config/sets/.

    Returns:
        The validated ``CurrencySet``.

    Raises:
        FileNotFoundError: If the set directory or its YAML file is missing.
        ValueError: If validation fails.
        ConfigIntegrityError: If APPROVED_FINGERPRINT exists and does not
            match the set's checksum.
    """
    sets_dir = Path(config_dir) if config_dir is not None else _DEFAULT_CONFIG_DIR
    set_dir = sets_dir / name
    path = set_dir / CURRENCIES_FILE
    if not path.is_file():
        raise FileNotFoundError(f"Currency set not found: {path}")

    with LogContext.bind(currency_set=name):
        currency_set = load_currency_set(path)

        validation = validate_currency_set(currency_set)
        if not validation.is_valid:
            raise ValueError(
                "Currency set validation failed:\n"
                + "\n".join(f"  - {e}" for e in validation.errors)
            )
        for warning in validation.warnings:
            _logger.warning(
                "currency_set_warning",
                extra={"set_id": currency_set.set_id, "warning": warning},
            )

        verify_fingerprint_pin(
            set_id=currency_set.set_id,
            checksum=currency_set.checksum,
            set_dir=set_dir,
        )

        _logger.info(
            "CURRENCY_CONFIG_TRACE",
            extra={
                "trace_type": "CURRENCY_CONFIG_TRACE",
                "set_id": currency_set.set_id,
                "set_version": currency_set.version,
                "set_status": currency_set.status.value,
                "checksum": currency_set.checksum,
                "currency_count": len(currency_set.currencies),
                "codes": list(currency_set.codes),
            },
        )

    return currency_set


def install_currency_set(
    name: str = "default",
    config_dir: Path | None = None,
    overwrite: bool = False,
) -> tuple[CurrencyDescriptor, ...]:
    """Load a published set and register its currencies.

    Installing the same set twice is a no-op: identical descriptors
    re-register silently.

    Raises:
        ValueError: If the set is not PUBLISHED or fails validation.
        CurrencyAlreadyRegisteredError: If a code is already registered
            with a different descriptor and ``overwrite`` is False.
    """
    currency_set = get_currency_set(name, config_dir)
    if currency_set.status is not CurrencySetStatus.PUBLISHED:
        raise ValueError(
            f"Currency set '{currency_set.set_id}' is {currency_set.status.value}; "
            f"only published sets can be installed"
        )
    with LogContext.bind(currency_set=name):
        return register_currency_set(currency_set, overwrite=overwrite)
