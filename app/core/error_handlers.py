from fastapi import Request, Response
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.constants.error_codes import ErrorCode
from app.core.exceptions import AppException
from app.utils.logger import get_logger

logger = get_logger(__name__)


# -------------------------
# ERROR CODE -> HTTP STATUS
# -------------------------
# "Not found" answers 204 with an empty body; existing clients rely on it.
ERROR_CODE_TO_HTTP_STATUS = {
    ErrorCode.VALIDATION_ERROR: 406,
    ErrorCode.NO_LOGS: 406,
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.PASSWORD_MISMATCH: 401,
    ErrorCode.PERMISSION_DENIED: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.USER_NOT_FOUND: 204,
    ErrorCode.CONFLICT: 409,
    ErrorCode.USER_EMAIL_EXISTS: 409,
    ErrorCode.INTERNAL_ERROR: 500,
}


def error_body(message: str, error_code: ErrorCode, details=None) -> dict:
    return {
        "success": False,
        "message": message,
        "error_code": error_code,
        "details": details,
    }


# -------------------------
# APP EXCEPTIONS
# -------------------------
async def app_exception_handler(request: Request, exc: AppException):
    status_code = ERROR_CODE_TO_HTTP_STATUS.get(exc.error_code, 500)

    if status_code == 204:
        logger.info(
            exc.message,
            extra={"path": request.url.path, "error_code": exc.error_code},
        )
        return Response(status_code=204)

    return JSONResponse(
        status_code=status_code,
        content=error_body(exc.message, exc.error_code, exc.details),
    )


# -------------------------
# FASTAPI VALIDATION
# -------------------------
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
):
    return JSONResponse(
        status_code=406,
        content=error_body(
            "Invalid data",
            ErrorCode.VALIDATION_ERROR,
            jsonable_encoder(exc.errors()),
        ),
    )


# -------------------------
# HTTP EXCEPTIONS (mapped)
# -------------------------
HTTP_STATUS_TO_ERROR_CODE = {
    400: ErrorCode.VALIDATION_ERROR,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.PERMISSION_DENIED,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.NOT_FOUND,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION_ERROR,
}


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
):
    error_code = HTTP_STATUS_TO_ERROR_CODE.get(
        exc.status_code,
        ErrorCode.INTERNAL_ERROR,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail, error_code),
        headers=getattr(exc, "headers", None),
    )


# -------------------------
# DB INTEGRITY ERRORS
# -------------------------
async def integrity_error_handler(
    request: Request, exc: IntegrityError
):
    logger.exception("DB Integrity error")

    return JSONResponse(
        status_code=409,
        content=error_body("Database constraint violation", ErrorCode.CONFLICT),
    )


# -------------------------
# LAST RESORT
# -------------------------
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=500,
        content=error_body("Internal Server Error", ErrorCode.INTERNAL_ERROR),
    )
