"""Library catalog FastAPI backend."""
import logging
import os
import subprocess
import sys

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)
from fastapi.middleware.cors import CORSMiddleware

from db import SessionLocal
from api.barcodes import router as barcodes_router
from api.books import router as books_router
from api.locations import router as locations_router
from catalog_core.errors import CatalogError
from repositories.sequence_repository import ensure_sequences
from schemas.health import HealthResponse

app = FastAPI(
    title="Library Catalog",
    description="Catalog backend: books, storage locations and EAN-13 barcode issuance",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes under /api
app.include_router(locations_router, prefix="/api")
app.include_router(books_router, prefix="/api")
app.include_router(barcodes_router, prefix="/api")


@app.get("/api/health", response_model=HealthResponse)
def api_health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(version=app.version)


@app.exception_handler(CatalogError)
def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Map every catalog error kind to its status code and a structured body."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.on_event("startup")
def startup() -> None:
    """Run DB migrations and seed missing barcode sequences."""
    backend_dir = os.path.dirname(os.path.abspath(__file__))
    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        cwd=backend_dir,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        raise RuntimeError(f"Alembic upgrade failed: {result.stderr or result.stdout}")
    _seed_sequences()


def _seed_sequences() -> None:
    """Create the per-category counter rows on first start."""
    db = SessionLocal()
    try:
        for category in ensure_sequences(db):
            logger.info("Seeded barcode sequence for %s", category.value)
    finally:
        db.close()


@app.get("/")
def root() -> dict:
    """Root info."""
    return {"service": "library-catalog", "docs": "/docs", "health": "/api/health"}


if __name__ == "__main__":
    import uvicorn

    from utils.config import PORT

    uvicorn.run("main:app", host="0.0.0.0", port=PORT)
