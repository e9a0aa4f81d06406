"""Domain exceptions and their translation to HTTP responses.

Services raise these from their business layer; each FastAPI app installs
``register_exception_handlers`` so routers never build error responses by hand.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from storefront.common.logging import get_logger

logger = get_logger(__name__)


class StorefrontError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(StorefrontError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "RESOURCE_NOT_FOUND"


class ProductNotFoundError(NotFoundError): pass
class CategoryNotFoundError(NotFoundError): pass
class CartNotFoundError(NotFoundError): pass
class ItemNotFoundError(NotFoundError): pass
class OrderNotFoundError(NotFoundError): pass
class InventoryNotFoundError(NotFoundError): pass


class AlreadyExistsError(StorefrontError):
    status_code = status.HTTP_409_CONFLICT
    error = "DUPLICATE_RESOURCE"


class DuplicateSkuError(AlreadyExistsError):
    error = "DUPLICATE_SKU"


class DuplicateCategoryError(AlreadyExistsError): pass
class CartAlreadyExistsError(AlreadyExistsError): pass
class InventoryAlreadyExistsError(AlreadyExistsError): pass


class InvalidInputError(StorefrontError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "INVALID_INPUT"


class BusinessRuleError(StorefrontError):
    """An operation is not allowed in the entity's current state."""
    status_code = status.HTTP_400_BAD_REQUEST
    error = "BUSINESS_RULE_VIOLATION"


class UnauthorizedError(StorefrontError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "UNAUTHORIZED"


class InsufficientStockError(StorefrontError):
    status_code = status.HTTP_409_CONFLICT
    error = "INSUFFICIENT_STOCK"


def error_body(status_code: int, message: str, error: str | None = None) -> dict:
    body = {"status": status_code, "message": message}
    if error:
        body["error"] = error
    return body


async def _storefront_error(request: Request, exc: StorefrontError):
    logger.warning("request_failed", path=request.url.path, error=exc.error, message=exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.status_code, exc.message, exc.error))


async def _validation_error(request: Request, exc: RequestValidationError):
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ())[1:]) or "body"
        parts.append(f"{field} - {err.get('msg')}; ")
    message = "Validation failed: " + "".join(parts)
    logger.warning("validation_failed", path=request.url.path, message=message)
    return JSONResponse(status_code=400, content=error_body(400, message, "VALIDATION_FAILED"))


async def _integrity_error(request: Request, exc: IntegrityError):
    logger.error("data_integrity_violation", path=request.url.path, detail=str(exc.orig))
    message = "Data integrity violation"
    if "sku" in str(exc.orig).lower():
        message = "SKU must be unique. This SKU already exists."
    return JSONResponse(status_code=409, content=error_body(409, message, "DATA_INTEGRITY_VIOLATION"))


async def _unhandled_error(request: Request, exc: Exception):
    logger.exception("unexpected_error", path=request.url.path)
    return JSONResponse(status_code=500, content=error_body(500, "An unexpected error occurred", "INTERNAL_SERVER_ERROR"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, _storefront_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(IntegrityError, _integrity_error)
    app.add_exception_handler(Exception, _unhandled_error)
