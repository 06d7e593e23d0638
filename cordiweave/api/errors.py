import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cordiweave.core.errors import (
    CordiWeaveError,
    DonationNotCompletedError,
    InvalidAmountError,
    InvalidCartError,
    ProductNotFoundError,
    UnknownShippingMethodError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[CordiWeaveError], int] = {
    InvalidCartError: 422,
    UnknownShippingMethodError: 422,
    ProductNotFoundError: 404,
    InvalidAmountError: 422,
    DonationNotCompletedError: 409,
}


def status_for(exc: CordiWeaveError) -> int:
    for error_type, status_code in STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status_code
    return 400


async def cordiweave_error_handler(request: Request, exc: CordiWeaveError) -> JSONResponse:
    status_code = status_for(exc)
    logger.info("%s %s -> %s (%s)", request.method, request.url.path, status_code, exc.error_code)
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": exc.message, "error_code": exc.error_code},
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("%s %s -> 500", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Internal server error"},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "message": "Validation failed",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CordiWeaveError, cordiweave_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
