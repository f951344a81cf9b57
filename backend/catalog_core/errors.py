"""Error taxonomy for barcode issuance and the location hierarchy.

Every error carries a stable ``code`` and the HTTP status the API boundary
maps it to, so callers can branch on the kind without parsing messages.
"""
from typing import Any


class CatalogError(Exception):
    """Base class for all catalog errors.

    Usage:
        raise ParentNotFound(parent_id=parent_id)
    """

    code = "CATALOG_ERROR"
    status_code = 500
    message = "catalog error"

    def __init__(self, message: str | None = None, **context: Any) -> None:
        self.context = context
        if message is not None:
            self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.message} ({ctx_str})" if ctx_str else self.message

    def to_dict(self) -> dict[str, Any]:
        """Body for API error responses."""
        return {
            "detail": self.message,
            "code": self.code,
            **{k: str(v) if v is not None else None for k, v in self.context.items()},
        }


# === Validation (caller error) ===

class ValidationError(CatalogError):
    code = "VALIDATION_ERROR"
    status_code = 400
    message = "invalid input"


class InvalidBarcode(CatalogError):
    code = "INVALID_BARCODE"
    status_code = 400
    message = "invalid barcode"


class InvalidPrefix(CatalogError):
    code = "INVALID_PREFIX"
    status_code = 400
    message = "barcode prefix out of range"


# === Hierarchy conflicts ===

class InvalidLocationType(CatalogError):
    code = "INVALID_LOCATION_TYPE"
    status_code = 422
    message = "invalid location type"


class ParentNotFound(CatalogError):
    code = "PARENT_NOT_FOUND"
    status_code = 422
    message = "parent not found"


class LocationCannotHaveParent(CatalogError):
    code = "LOCATION_CANNOT_HAVE_PARENT"
    status_code = 422
    message = "location can not have parent"


class LocationHasChildren(CatalogError):
    code = "LOCATION_HAS_CHILDREN"
    status_code = 409
    message = "location has children"


# === Storage ===

class NotFound(CatalogError):
    code = "NOT_FOUND"
    status_code = 404
    message = "not found"


class BarcodeExists(CatalogError):
    code = "BARCODE_EXISTS"
    status_code = 409
    message = "barcode already exists"


class StoreUnavailable(CatalogError):
    code = "STORE_UNAVAILABLE"
    status_code = 503
    message = "sequence store unavailable"


# === Resource exhaustion / configuration ===

class SequenceOverflow(CatalogError):
    """Terminal for the category until an operator rotates the prefix."""

    code = "SEQUENCE_OVERFLOW"
    status_code = 503
    message = "barcode sequence overflow"


class SequenceNotConfigured(CatalogError):
    code = "SEQUENCE_NOT_CONFIGURED"
    status_code = 500
    message = "barcode sequence not configured"


class OperationCancelled(CatalogError):
    code = "OPERATION_CANCELLED"
    status_code = 504
    message = "deadline exceeded"
