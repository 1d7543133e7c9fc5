"""Error types and the handlers that keep every error body as ``{"error": ...}``."""

import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sehc.core.results import INTERNAL_ERROR_MESSAGE
from sehc.core.validators import required_message

logger = logging.getLogger("sehc.errors")

STOCK_CONFLICT_MESSAGE = "Not enough items in stock for one or more inventory items."
STOCK_CONSTRAINT_NAME = "ck_inventory_items_quantity_non_negative"


class StockConflictError(Exception):
    """Requested consumption exceeds what is left in stock."""

    def __init__(self, message: str = STOCK_CONFLICT_MESSAGE) -> None:
        super().__init__(message)


def _field_name(loc: List[Any]) -> str:
    parts = [str(part) for part in loc if part not in ("body", "query", "path")]
    return ".".join(parts) or "body"


def validation_message(errors: List[Dict[str, Any]]) -> str:
    missing = [_field_name(err["loc"]) for err in errors if err.get("type") == "missing"]
    if missing:
        return required_message(missing)
    first = errors[0] if errors else {}
    if first.get("type") == "json_invalid":
        return "Request body is not valid JSON"
    return f"Invalid value for {_field_name(first.get('loc', []))}: {first.get('msg', 'invalid input')}"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = validation_message(list(exc.errors()))
        logger.warning("[%s] %s - %s", request.method, request.url.path, message)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = str(exc.detail)
        if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
            message = "invalid route"
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("[%s] %s - unhandled error", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR_MESSAGE},
        )
