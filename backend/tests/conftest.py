# Set test environment before any application or db imports.
import os

os.environ["TESTING"] = "true"
os.environ["TESTING_DATABASE_URL"] = "sqlite:///:memory:"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from db import SessionLocal, get_db, make_engine
from main import app
from models import Base
from models.barcode_sequence import BarcodeSequence  # noqa: F401 - register with Base
from models.book import Book  # noqa: F401
from models.location import Location  # noqa: F401
from repositories.sequence_repository import ensure_sequences


def _get_engine():
    """Engine used by the app (in-memory when TESTING=true)."""
    return SessionLocal.kw["bind"]


@pytest.fixture(scope="session")
def engine():
    """One in-memory engine per test run; create tables and counter rows once."""
    eng = _get_engine()
    Base.metadata.create_all(eng)
    session = SessionLocal()
    try:
        ensure_sequences(session)
    finally:
        session.close()
    return eng


@pytest.fixture
def db_session(engine):
    """Function-scoped session; each test runs in a transaction that is rolled back."""
    connection = engine.connect()
    trans = connection.begin()
    session = Session(bind=connection)
    session.begin_nested()
    try:
        yield session
    finally:
        session.close()
        if trans.is_active:
            trans.rollback()
        connection.close()


@pytest.fixture
def file_db(tmp_path):
    """Fresh file-backed SQLite database with its own engine; yields a sessionmaker.

    Used where exact counter values matter or where several connections must
    contend for the same counter row.
    """
    eng = make_engine(f"sqlite:///{tmp_path / 'test_catalog.db'}")
    Base.metadata.create_all(eng)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=eng)
    try:
        yield factory
    finally:
        eng.dispose()


@pytest.fixture
def file_session(file_db):
    """Session on a fresh file-backed database."""
    session = file_db()
    try:
        yield session
    finally:
        session.close()


def _override_get_db(session):
    """Return a generator that yields the given session (for dependency override)."""
    def override():
        yield session
    return override


@pytest.fixture
def client(db_session):
    """API test client; overrides get_db to use the test db_session, cleared on teardown."""
    app.dependency_overrides[get_db] = _override_get_db(db_session)
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def new_barcode():
    """Return a factory for valid, unique EAN-13 codes outside the issued prefixes."""
    import uuid

    from catalog_core.barcode import assemble

    def make() -> str:
        return assemble(299, uuid.uuid4().int % 1_000_000_000)

    return make
