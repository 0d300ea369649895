"""
Error taxonomy and the handlers that turn it into JSON failure responses
"""
import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

class AppError(Exception):
    """Base class for failures reported to the caller as {success: false}"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"

class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not Authorized Login Again"

class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"

class UpstreamFailure(AppError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Payment provider unavailable"

class InternalError(AppError):
    default_message = "Error"

def failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})

async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = None
    if isinstance(exc, Unauthorized):
        headers = {"WWW-Authenticate": "Bearer"}
    response = failure(exc.status_code, exc.message)
    if headers:
        response.headers.update(headers)
    return response

async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = ValidationError.default_message
    return failure(status.HTTP_400_BAD_REQUEST, message)

async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception(f"Database error on {request.method} {request.url.path}")
    return failure(InternalError.status_code, InternalError.default_message)

async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return failure(InternalError.status_code, InternalError.default_message)

def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
