"""Book API routes."""
import logging
import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from catalog_core import barcode as barcode_codec
from catalog_core.barcode import BarcodeCategory
from catalog_core.barcode_image import PNG_MEDIA_TYPE, render_png
from catalog_core.deadline import Deadline
from catalog_core.errors import (
    BarcodeExists,
    InvalidBarcode,
    InvalidLocationType,
    NotFound,
    ParentNotFound,
    ValidationError,
)
from catalog_core.issuer import BarcodeIssuer
from catalog_core.location_types import LocationType, parse_location_type
from catalog_core.sequence_store import SqlSequenceStore
from db import get_db
from repositories.book_repository import (
    create_book as repo_create_book,
    delete_book as repo_delete_book,
    get_book,
    get_book_by_barcode,
    list_books_by_location,
)
from repositories.location_repository import get_location
from schemas.books import BookCreate, BookResponse
from utils import config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/books", tags=["books"])


def _check_shelf(db: Session, location_id: str, for_update: bool = False) -> None:
    """Books are stored on shelves only; location_id must name an existing shelf."""
    loc = get_location(db, location_id, for_update=for_update)
    if loc is None:
        raise ParentNotFound("location not found", location_id=location_id)
    if parse_location_type(loc.type) is not LocationType.SHELF:
        raise InvalidLocationType("books can only be placed on a shelf", type=loc.type)


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


@router.post("", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
def create_book(body: BookCreate, db: Session = Depends(get_db)) -> BookResponse:
    """Create a book with a freshly issued library barcode."""
    deadline = Deadline.after(config.REQUEST_DEADLINE_S)
    title = body.title.strip()
    if not title:
        raise ValidationError("title is required")
    factory_barcode = body.factory_barcode.strip() if body.factory_barcode else None
    if factory_barcode is not None:
        if not barcode_codec.validate(factory_barcode):
            raise InvalidBarcode("invalid ean13 format", barcode=factory_barcode)
        if get_book_by_barcode(db, factory_barcode) is not None:
            raise BarcodeExists(barcode=factory_barcode)
    if body.location_id is not None:
        _check_shelf(db, body.location_id)

    code = BarcodeIssuer(SqlSequenceStore(db)).issue(BarcodeCategory.BOOK, deadline)
    if get_book_by_barcode(db, code) is not None:
        # A factory barcode already on file collides with the issued one.
        raise BarcodeExists(barcode=code)
    if body.location_id is not None:
        _check_shelf(db, body.location_id, for_update=True)
    book = repo_create_book(
        db,
        barcode=code,
        factory_barcode=factory_barcode,
        title=title,
        year=body.year,
        description=body.description,
        location_id=body.location_id,
    )
    logger.info("Created book %s (%s)", book.id, book.barcode)
    return BookResponse.model_validate(book)


@router.get("/scan/{value}", response_model=BookResponse)
def scan(value: str, db: Session = Depends(get_db)) -> BookResponse:
    """Find a book by a scanned EAN-13 (issued or factory) or by its id."""
    value = value.strip()
    if barcode_codec.validate(value):
        book = get_book_by_barcode(db, value)
    elif _is_uuid(value):
        book = get_book(db, value)
    else:
        raise InvalidBarcode(barcode=value)
    if book is None:
        raise NotFound("book not found", value=value)
    return BookResponse.model_validate(book)


@router.get("/location/{location_id}", response_model=list[BookResponse])
def list_by_location(location_id: str, db: Session = Depends(get_db)) -> list[BookResponse]:
    """List books stored at a location."""
    if get_location(db, location_id) is None:
        raise NotFound("location not found", location_id=location_id)
    return [BookResponse.model_validate(b) for b in list_books_by_location(db, location_id)]


@router.get("/{book_id}", response_model=BookResponse)
def get_book_by_id(book_id: str, db: Session = Depends(get_db)) -> BookResponse:
    """Get a book by id."""
    book = get_book(db, book_id)
    if book is None:
        raise NotFound("book not found", book_id=book_id)
    return BookResponse.model_validate(book)


@router.get(
    "/{book_id}/barcode",
    response_class=Response,
    responses={200: {"content": {PNG_MEDIA_TYPE: {}}}},
)
def get_book_barcode(book_id: str, db: Session = Depends(get_db)) -> Response:
    """PNG label of the book's issued barcode."""
    book = get_book(db, book_id)
    if book is None:
        raise NotFound("book not found", book_id=book_id)
    return Response(content=render_png(book.barcode), media_type=PNG_MEDIA_TYPE)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(book_id: str, db: Session = Depends(get_db)) -> None:
    """Delete a book by id."""
    if not repo_delete_book(db, book_id):
        raise NotFound("book not found", book_id=book_id)
