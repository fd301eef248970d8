# loyalty/core/error_handlers.py

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from loyalty.constants.error_codes import ErrorCode
from loyalty.core.exceptions import AppException
from loyalty.utils.logger import get_logger

logger = get_logger(__name__)

HTTP_STATUS_TO_ERROR_CODE = {
    400: ErrorCode.VALIDATION_ERROR,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.PERMISSION_DENIED,
    404: ErrorCode.NOT_FOUND,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION_ERROR,
}


def error_response(
    status_code: int,
    message: str,
    error_code: ErrorCode,
    details=None,
    headers: dict | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": message,
            "error_code": error_code,
            "details": details,
        },
        headers=headers,
    )


# =====================================================
# SERVICE ERRORS
# =====================================================
async def app_exception_handler(request: Request, exc: AppException):
    if exc.status_code >= 500:
        logger.error(
            "Service error",
            extra={"path": request.url.path, "error_code": exc.error_code.value},
        )
    return error_response(exc.status_code, exc.message, exc.error_code, exc.details)


# =====================================================
# REQUEST VALIDATION
# =====================================================
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(
        "Request rejected by validation",
        extra={"path": request.url.path, "errors": len(exc.errors())},
    )
    return error_response(
        422,
        "Invalid request data",
        ErrorCode.VALIDATION_ERROR,
        jsonable_encoder(exc.errors()),
    )


# =====================================================
# PLAIN HTTP ERRORS (auth guard, routing)
# =====================================================
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    error_code = HTTP_STATUS_TO_ERROR_CODE.get(exc.status_code, ErrorCode.INTERNAL_ERROR)
    return error_response(
        exc.status_code,
        exc.detail,
        error_code,
        headers=getattr(exc, "headers", None),
    )


# =====================================================
# CONSTRAINT VIOLATIONS
# =====================================================
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.exception(
        "Database constraint violation",
        extra={"path": request.url.path, "method": request.method},
    )
    return error_response(409, "Database constraint violation", ErrorCode.CONFLICT)


# =====================================================
# LAST RESORT
# =====================================================
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception",
        extra={"path": request.url.path, "method": request.method},
    )
    return error_response(
        500,
        "Something went wrong. Please try again.",
        ErrorCode.INTERNAL_ERROR,
    )
