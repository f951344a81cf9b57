"""Configuration from environment."""
import os

PORT = int(os.environ.get("PORT", "8001"))

# When TESTING=true, use test DB URL so tests never touch production.
if os.environ.get("TESTING") == "true":
    DATABASE_URL = os.environ.get("TESTING_DATABASE_URL", "sqlite:///:memory:")
else:
    DATABASE_URL = os.environ.get(
        "DATABASE_URL",
        "sqlite:///./library.db",
    )

# Internal-use EAN-13 prefix block (GS1 restricted distribution range).
BARCODE_PREFIX_MIN = int(os.environ.get("BARCODE_PREFIX_MIN", "200"))
BARCODE_PREFIX_MAX = int(os.environ.get("BARCODE_PREFIX_MAX", "299"))

BOOK_BARCODE_PREFIX = int(os.environ.get("BOOK_BARCODE_PREFIX", "200"))
LOCATION_BARCODE_PREFIX = int(os.environ.get("LOCATION_BARCODE_PREFIX", "210"))


def prefix_in_range(prefix: int) -> bool:
    """True if prefix lies in the configured internal-use range."""
    return BARCODE_PREFIX_MIN <= prefix <= BARCODE_PREFIX_MAX


def _validate() -> None:
    if not 0 <= BARCODE_PREFIX_MIN <= BARCODE_PREFIX_MAX <= 999:
        raise ValueError(
            f"BARCODE_PREFIX_MIN/BARCODE_PREFIX_MAX must satisfy 0 <= min <= max <= 999, "
            f"got {BARCODE_PREFIX_MIN}..{BARCODE_PREFIX_MAX}"
        )
    for name, value in (
        ("BOOK_BARCODE_PREFIX", BOOK_BARCODE_PREFIX),
        ("LOCATION_BARCODE_PREFIX", LOCATION_BARCODE_PREFIX),
    ):
        if not prefix_in_range(value):
            raise ValueError(
                f"{name}={value} is outside the barcode prefix range "
                f"{BARCODE_PREFIX_MIN}..{BARCODE_PREFIX_MAX}"
            )


_validate()

# Upper bound on the time one request may spend in barcode issuance and hierarchy checks.
REQUEST_DEADLINE_S = float(os.environ.get("REQUEST_DEADLINE_S", "10"))
