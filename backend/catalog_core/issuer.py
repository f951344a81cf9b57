"""Barcode issuance: fresh sequence value + EAN-13 assembly."""
import logging
from typing import Optional

from catalog_core import barcode
from catalog_core.barcode import BarcodeCategory
from catalog_core.deadline import Deadline, check_deadline
from catalog_core.errors import SequenceOverflow
from catalog_core.sequence_store import SequenceStore

logger = logging.getLogger(__name__)


class BarcodeIssuer:
    """Mints barcodes for a category from a SequenceStore.

    Every call consumes one sequence value, even if the caller later discards the
    barcode. The issuer guarantees a fresh sequence value, not uniqueness against
    externally supplied barcodes; that is the storage unique constraint's job.
    """

    def __init__(self, store: SequenceStore) -> None:
        self.store = store

    def issue(self, category: BarcodeCategory, deadline: Optional[Deadline] = None) -> str:
        check_deadline(deadline, "issue")
        sequence, prefix = self.store.get_next(category)
        if sequence > barcode.MAX_SEQUENCE:
            # Operator must rotate the prefix; never pick a new one here.
            logger.warning(
                "Barcode sequence overflow for %s (prefix %03d, sequence %d)",
                category.value,
                prefix,
                sequence,
            )
            raise SequenceOverflow(category=category.value, prefix=prefix, sequence=sequence)
        code = barcode.assemble(prefix, sequence)
        logger.debug("Issued %s barcode %s", category.value, code)
        return code
