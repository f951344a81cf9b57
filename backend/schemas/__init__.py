# Schemas package
from .barcodes import BarcodeValidation, SequenceResponse, SequenceUpdate
from .books import BookCreate, BookResponse
from .health import HealthResponse
from .locations import LocationCreate, LocationResponse, LocationUpdate

__all__ = [
    "BarcodeValidation",
    "BookCreate",
    "BookResponse",
    "HealthResponse",
    "LocationCreate",
    "LocationResponse",
    "LocationUpdate",
    "SequenceResponse",
    "SequenceUpdate",
]
