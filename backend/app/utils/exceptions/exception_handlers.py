"""
Global Exception Handlers

Unified handling of all API exceptions to ensure consistent error response format.
"""

import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError, HTTPException
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.utils.model.response_model import BaseResponse
from app.utils.model.response_code import ResponseCode
from .base_exceptions import BusinessException

logger = logging.getLogger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle request parameter validation errors

    Args:
        request: Request object
        exc: Validation exception

    Returns:
        Unified format error response (400)
    """
    logger.warning(f"Validation error on {request.url}: {exc.errors()}")

    errors = []
    serializable_errors = []

    for error in exc.errors():
        # Prefer ctx error field, fallback to msg
        if "ctx" in error and isinstance(error["ctx"], dict) and "error" in error["ctx"]:
            message = str(error["ctx"]["error"])
        else:
            message = error["msg"]
        errors.append(message)

        serializable_error = {
            "loc": list(error["loc"]),
            "msg": error["msg"],
            "type": error["type"],
        }
        if "ctx" in error and isinstance(error["ctx"], dict):
            serializable_error["ctx"] = {k: str(v) for k, v in error["ctx"].items()}

        serializable_errors.append(serializable_error)

    response = BaseResponse.validation_error(
        data={"details": serializable_errors},
        message="; ".join(errors) or "Validation failed",
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=response.model_dump()
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """
    Handle HTTP exceptions

    Args:
        request: Request object
        exc: HTTP exception

    Returns:
        Unified format error response
    """
    logger.warning(f"HTTP {exc.status_code} on {request.url}: {exc.detail}")

    if exc.status_code == status.HTTP_404_NOT_FOUND:
        response = BaseResponse.not_found(message=exc.detail)
    elif exc.status_code == status.HTTP_400_BAD_REQUEST:
        response = BaseResponse.bad_request(message=exc.detail)
    else:
        response = BaseResponse.error(
            message=str(exc.detail),
            code=exc.status_code
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=response.model_dump()
    )


async def starlette_http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return await http_exception_handler(request, HTTPException(status_code=exc.status_code, detail=exc.detail))


async def business_exception_handler(request: Request, exc: BusinessException) -> JSONResponse:
    """
    Handle business logic exceptions

    The exception code doubles as the HTTP status.
    """
    if exc.code >= 500:
        logger.error(f"Business error on {request.url}: {exc.message}")
    else:
        logger.warning(f"Business error on {request.url}: {exc.message}")

    response = BaseResponse.error(
        message=exc.message,
        data=exc.data,
        code=exc.code,
    )

    return JSONResponse(
        status_code=exc.code,
        content=response.model_dump()
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all uncaught exceptions

    The internal error text is logged, never returned.
    """
    logger.error(f"Unhandled exception on {request.url}: {exc}", exc_info=True)

    response = BaseResponse.error(
        message="Internal server error, please try again later",
        data=None,
        code=ResponseCode.INTERNAL_SERVER_ERROR
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=response.model_dump()
    )


def register_exception_handlers(app):
    """
    Register all exception handlers

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, starlette_http_exception_handler)
    app.add_exception_handler(BusinessException, business_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Exception handlers registered")
