"""SequenceStore contract and its SQL-backed implementation."""
from typing import Optional, Protocol

from sqlalchemy.orm import Session

from catalog_core.barcode import BarcodeCategory
from repositories import sequence_repository


class SequenceStore(Protocol):
    """Persisted per-category monotonic counter.

    get_next must increment and read back atomically: concurrent callers in the
    same category each receive a distinct, strictly increasing value.
    """

    def get_next(self, category: BarcodeCategory) -> tuple[int, int]:
        """Return (sequence, prefix)."""
        ...

    def set_prefix(self, category: BarcodeCategory, prefix: int, description: Optional[str] = None) -> None:
        ...


class SqlSequenceStore:
    """SequenceStore over the barcode_sequence table.

    Atomicity comes from the single UPDATE ... RETURNING in
    sequence_repository.next_sequence; no in-process lock is held.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_next(self, category: BarcodeCategory) -> tuple[int, int]:
        return sequence_repository.next_sequence(self.session, category)

    def set_prefix(self, category: BarcodeCategory, prefix: int, description: Optional[str] = None) -> None:
        sequence_repository.set_prefix(self.session, category, prefix, description)
