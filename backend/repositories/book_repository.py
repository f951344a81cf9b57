"""Book repository: create, get, lookup by barcode, list by location, delete."""
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog_core.errors import BarcodeExists
from models.book import Book


def create_book(
    session: Session,
    *,
    barcode: str,
    title: str,
    factory_barcode: Optional[str] = None,
    year: Optional[int] = None,
    description: Optional[str] = None,
    location_id: Optional[str] = None,
) -> Book:
    """Create a book, commit, and return it. Unique barcode violations raise BarcodeExists."""
    book = Book(
        barcode=barcode,
        factory_barcode=factory_barcode,
        title=title,
        year=year,
        description=description,
        location_id=location_id,
    )
    session.add(book)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        if "barcode" in str(e.orig).lower():
            raise BarcodeExists(barcode=factory_barcode or barcode) from e
        raise
    session.refresh(book)
    return book


def get_book(session: Session, book_id: str) -> Optional[Book]:
    """Return book by id or None."""
    return session.get(Book, book_id)


def get_book_by_barcode(session: Session, barcode: str) -> Optional[Book]:
    """Return the book whose issued or factory barcode equals barcode, or None."""
    return session.execute(
        select(Book).where(or_(Book.barcode == barcode, Book.factory_barcode == barcode))
    ).scalars().first()


def list_books_by_location(session: Session, location_id: str) -> list[Book]:
    """Return all books stored at a location, ordered by title."""
    result = session.execute(
        select(Book).where(Book.location_id == location_id).order_by(Book.title)
    )
    return list(result.scalars().all())


def delete_book(session: Session, book_id: str) -> bool:
    """Delete book by id. Returns True if deleted, False if not found."""
    book = get_book(session, book_id)
    if book is None:
        return False
    session.delete(book)
    session.commit()
    return True
