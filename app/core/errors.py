"""
Error handling utilities following FastAPI best practices
"""

import traceback
from typing import Any, Optional

from fastapi import HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from slowapi.errors import RateLimitExceeded

from app.core.config import config
from app.core.logger import logger


class ErrorResponse(Exception):
    """Custom exception for application errors"""

    def __init__(self, message: str, status_code: int = 400, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ErrorResponseModel(BaseModel):
    """Pydantic model for error responses"""
    message: str
    details: Optional[Any] = None


def _error_body(message: str, details: Any = None) -> dict:
    body = {"message": message}
    if details:
        body["details"] = jsonable_encoder(details)
    return body


async def error_response_handler(request: Request, exc: ErrorResponse):
    """Handler for custom ErrorResponse exceptions"""
    metadata = {
        "event": "error_response",
        "status_code": exc.status_code,
        "url": str(request.url),
        "method": request.method,
        **exc.details,
    }

    if exc.status_code >= 500:
        logger.error(f"Error: {exc.message}", metadata=metadata)
    else:
        logger.warning(f"Error: {exc.message}", metadata=metadata)

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.details),
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """Handler for FastAPI/Starlette HTTPException"""
    logger.warning(
        f"HTTPException: {exc.detail}",
        metadata={
            "event": "http_exception",
            "status_code": exc.status_code,
            "url": str(request.url),
            "method": request.method,
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handler for request body/query validation failures"""
    logger.warning(
        "Validation error",
        metadata={
            "event": "validation_error",
            "url": str(request.url),
            "errors": jsonable_encoder(exc.errors()),
        }
    )

    return JSONResponse(
        status_code=400,
        content=_error_body("Validation error", exc.errors()),
    )


async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Handler for slowapi rate limit exhaustion"""
    logger.warning(
        "Rate limit exceeded",
        metadata={
            "event": "rate_limit_exceeded",
            "url": str(request.url),
            "client": request.client.host if request.client else None,
            "limit": str(exc.detail),
        }
    )

    return JSONResponse(status_code=429, content=_error_body("Rate limit exceeded"))


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Last-resort handler so every failure still answers with a message body"""
    metadata = {
        "event": "unhandled_exception",
        "url": str(request.url),
        "method": request.method,
    }

    if config.environment == "development":
        metadata["traceback"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )

    logger.error("Unhandled exception", error=exc, metadata=metadata)

    return JSONResponse(status_code=500, content=_error_body("Internal server error"))
