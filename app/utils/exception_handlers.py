from typing import Any, cast

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from app.core.exceptions import GameError
from app.schemas.common import APIResponse


def http_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    exc = cast(HTTPException, exc)
    return JSONResponse(
        status_code=exc.status_code, content=APIResponse[Any].error(exc.detail).model_dump()
    )


def game_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Recoverable game errors, e.g. insufficient funds or a bad round index."""
    exc = cast(GameError, exc)
    logger.info(f"Rejected request: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code, content=APIResponse[Any].error(exc.message).model_dump()
    )


def validation_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    exc = cast(RequestValidationError, exc)
    errors = [{"loc": err["loc"], "msg": err["msg"], "type": err["type"]} for err in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=APIResponse[Any].error("Validation error", errors).model_dump(),
    )


def general_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error("Unhandled error")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=APIResponse[Any].error(str(exc)).model_dump(),
    )
