"""Barcode API routes: validation and sequence administration."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from catalog_core import barcode as barcode_codec
from catalog_core.barcode import BarcodeCategory
from catalog_core.errors import ValidationError
from db import get_db
from repositories.sequence_repository import list_sequences, set_prefix
from schemas.barcodes import BarcodeValidation, SequenceResponse, SequenceUpdate

router = APIRouter(prefix="/barcodes", tags=["barcodes"])


def _parse_category(value: str) -> BarcodeCategory:
    try:
        return BarcodeCategory(value)
    except ValueError:
        raise ValidationError("unknown barcode category", category=value) from None


@router.get("/validate/{code}", response_model=BarcodeValidation)
def validate_barcode(code: str) -> BarcodeValidation:
    """Check that code is a well-formed EAN-13."""
    return BarcodeValidation(barcode=code, valid=barcode_codec.validate(code))


@router.get("/sequences", response_model=list[SequenceResponse])
def get_sequences(active_only: bool = False, db: Session = Depends(get_db)) -> list[SequenceResponse]:
    """List the barcode counters, one per category and prefix used."""
    return [SequenceResponse.model_validate(s) for s in list_sequences(db, active_only=active_only)]


@router.put("/sequences/{category}", response_model=SequenceResponse)
def put_sequence(category: str, body: SequenceUpdate, db: Session = Depends(get_db)) -> SequenceResponse:
    """Set the prefix for a category (administrative; a prefix used before resumes its own counter)."""
    seq = set_prefix(db, _parse_category(category), body.prefix, body.description)
    return SequenceResponse.model_validate(seq)
