# Catalog core: barcode codec and issuance, location hierarchy rules
from catalog_core.barcode import BarcodeCategory, assemble, checksum, validate
from catalog_core.deadline import Deadline
from catalog_core.hierarchy import LocationCandidate, validate_create, validate_delete, validate_reparent
from catalog_core.issuer import BarcodeIssuer
from catalog_core.location_types import LocationType, parse_location_type
from catalog_core.sequence_store import SequenceStore, SqlSequenceStore

__all__ = [
    "BarcodeCategory",
    "BarcodeIssuer",
    "Deadline",
    "LocationCandidate",
    "LocationType",
    "SequenceStore",
    "SqlSequenceStore",
    "assemble",
    "checksum",
    "parse_location_type",
    "validate",
    "validate_create",
    "validate_delete",
    "validate_reparent",
]
