"""EAN-13 barcode codec: checksum, validation and assembly.

Pure functions, no I/O. Weighting follows GS1: digits at 0-based even index
(odd EAN position) weigh 1, digits at odd index weigh 3.
"""
from enum import Enum

from catalog_core.errors import InvalidBarcode, SequenceOverflow

BARCODE_LENGTH = 13
MAX_PREFIX = 999
MAX_SEQUENCE = 999_999_999

_DIGITS = frozenset("0123456789")


class BarcodeCategory(str, Enum):
    """Subject kind of an issued barcode; each has its own counter."""

    BOOK = "book"
    LOCATION = "location"


def _is_ascii_digits(value: str) -> bool:
    # str.isdigit() accepts non-ASCII digits such as "٣"
    return bool(value) and all(ch in _DIGITS for ch in value)


def checksum(first12: str) -> int:
    """Return the EAN-13 check digit for a 12-digit string."""
    if len(first12) != BARCODE_LENGTH - 1 or not _is_ascii_digits(first12):
        raise InvalidBarcode("expected 12 ASCII digits", value=first12)
    total = sum(int(d) * (1 if i % 2 == 0 else 3) for i, d in enumerate(first12))
    return (10 - (total % 10)) % 10


def validate(code: str) -> bool:
    """True if code is 13 ASCII digits with a correct check digit."""
    if not isinstance(code, str) or len(code) != BARCODE_LENGTH or not _is_ascii_digits(code):
        return False
    return checksum(code[:12]) == int(code[12])


def assemble(prefix: int, sequence: int) -> str:
    """Build a barcode from a 3-digit prefix and a 9-digit sequence value."""
    if not 0 <= prefix <= MAX_PREFIX:
        raise InvalidBarcode("prefix must be in 0..999", prefix=prefix)
    if sequence < 0:
        raise InvalidBarcode("sequence must not be negative", sequence=sequence)
    if sequence > MAX_SEQUENCE:
        raise SequenceOverflow(prefix=prefix, sequence=sequence)
    base = f"{prefix:03d}{sequence:09d}"
    return base + str(checksum(base))
