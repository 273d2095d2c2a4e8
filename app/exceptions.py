# app/exceptions.py
# Error kinds raised by the request stages, and the handlers that turn them
# into JSON responses. Every failure response has the shape
# {"error": <kind>, "message": <text>} plus "fields" for validation errors.

import logging
from typing import Any, Dict, List, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ProductApiException(Exception):
    """
    Base exception for the product API.

    Carries the error kind and HTTP status so the translator can build the
    response without knowing which stage raised it.
    """

    def __init__(
        self,
        message: str,
        kind: str = "Internal",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "error": self.kind,
            "message": self.message,
        }
        result.update(self.details)
        return result


class NotFoundError(ProductApiException):
    """Raised when a product id is not in the collection."""

    def __init__(self, product_id: Optional[str] = None, message: str = "Product not found"):
        super().__init__(message=message, kind="NotFound", status_code=404)
        self.product_id = product_id


class ValidationError(ProductApiException):
    """Raised when a product payload fails the schema check."""

    def __init__(self, fields: List[str], message: Optional[str] = None):
        fields = list(fields)
        if message is None:
            message = "Invalid product payload: " + ", ".join(fields) if fields else "Invalid product payload"
        super().__init__(
            message=message,
            kind="ValidationError",
            status_code=400,
            details={"fields": fields},
        )
        self.fields = fields


class AuthenticationError(ProductApiException):
    """Raised when the API key is missing or wrong."""

    def __init__(self, message: str = "Invalid or missing API key"):
        super().__init__(message=message, kind="AuthenticationError", status_code=401)


class InvalidQueryError(ProductApiException):
    """Raised when page/limit cannot be parsed as positive integers."""

    def __init__(self, parameter: str, value: Any):
        super().__init__(
            message=f"Query parameter '{parameter}' must be a positive integer, got {value!r}",
            kind="InvalidQuery",
            status_code=400,
        )
        self.parameter = parameter


# ---------------------------
# Exception handlers
# ---------------------------
async def product_api_exception_handler(request: Request, exc: ProductApiException) -> JSONResponse:
    logger.warning(
        "%s %s -> %s: %s", request.method, request.url.path, exc.kind, exc.message
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """FastAPI's own parameter validation is reported as a ValidationError too."""
    fields = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path", "header")]
        name = ".".join(loc) or "body"
        if name not in fields:
            fields.append(name)
    return await product_api_exception_handler(request, ValidationError(fields))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing failures from the framework (unknown path, wrong method)."""
    if exc.status_code == 404:
        kind = "NotFound"
    elif exc.status_code == 405:
        kind = "MethodNotAllowed"
    else:
        kind = "HTTPError"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": kind, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error handling %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal", "message": "An unexpected error occurred"},
    )
