"""
Currency Set Integrity -- checksum pinning for approved sets.

When a currency set directory contains an APPROVED_FINGERPRINT file, the
set's checksum must match the pinned value. This prevents unreviewed
edits to an approved set (a changed decimal digit count silently
rescales every stored amount of that currency).

The pin file is a single line: the SHA-256 hex string produced by
``compute_checksum()``. If no pin file exists the check is skipped.
"""

from __future__ import annotations

from pathlib import Path

PINFILE_NAME = "APPROVED_FINGERPRINT"


class ConfigIntegrityError(Exception):
    """Currency set checksum does not match the approved pin.

    Attributes:
        set_id: The currency set identifier.
        expected: The pinned (approved) checksum.
        actual: The computed checksum.
        pin_path: Path to the APPROVED_FINGERPRINT file.
    """

    code: str = "CONFIG_INTEGRITY_MISMATCH"

    def __init__(
        self,
        set_id: str,
        expected: str,
        actual: str,
        pin_path: Path,
    ):
        self.set_id = set_id
        self.expected = expected
        self.actual = actual
        self.pin_path = pin_path
        super().__init__(
            f"Config integrity check failed for '{set_id}': "
            f"pinned checksum {expected[:16]}... != "
            f"computed checksum {actual[:16]}... "
            f"(pin file: {pin_path})"
        )


def read_pinned_fingerprint(set_dir: Path) -> str | None:
    """Pinned SHA-256 hex string, or None if no pin file exists."""
    pin_path = set_dir / PINFILE_NAME
    if not pin_path.is_file():
        return None
    return pin_path.read_text().strip()


def verify_fingerprint_pin(set_id: str, checksum: str, set_dir: Path) -> None:
    """Verify that the checksum matches the pin file (no-op without one).

    Raises:
        ConfigIntegrityError: If a pin exists and the checksum differs.
    """
    pinned = read_pinned_fingerprint(set_dir)
    if pinned is None:
        return

    if checksum != pinned:
        raise ConfigIntegrityError(
            set_id=set_id,
            expected=pinned,
            actual=checksum,
            pin_path=set_dir / PINFILE_NAME,
        )
