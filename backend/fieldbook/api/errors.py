"""RFC 7807 Problem Details error response formatting"""

import logging
from typing import Optional, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from fieldbook.schemas.common import field_errors
from fieldbook.services.exceptions import (
    BlobNotFoundError,
    BlobStoreError,
    CascadeFailureError,
    FieldbookError,
    IntegrityViolationError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

ERROR_TYPE_BASE = "urn:fieldbook:errors"

# Request parts FastAPI prefixes to validation error locations
REQUEST_LOCATIONS = ("body", "query", "path", "form")


class ValidationErrorDetail(BaseModel):
    """Validation error detail for a specific field"""
    field: str
    message: str


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs"""
    type: str = Field(..., description="URI reference identifying the problem type")
    title: str = Field(..., description="Short, human-readable summary")
    status: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="Human-readable explanation")
    instance: Optional[str] = Field(None, description="URI reference identifying the specific occurrence")
    errors: Optional[List[ValidationErrorDetail]] = Field(None, description="Validation errors")


# Documented error bodies for the API routers
PROBLEM_RESPONSES = {
    code: {"model": ProblemDetail, "description": title}
    for code, title in [
        (400, "Validation Error"),
        (404, "Not Found"),
        (409, "Integrity Violation"),
        (500, "Internal Server Error"),
        (502, "Bad Gateway"),
    ]
}


def create_error_response(
    status_code: int,
    title: str,
    detail: str,
    error_type: Optional[str] = None,
    instance: Optional[str] = None,
    errors: Optional[List[Dict[str, str]]] = None
) -> JSONResponse:
    """
    Create an RFC 7807 compliant error response

    Args:
        status_code: HTTP status code
        title: Short error title
        detail: Detailed error message
        error_type: Error type name (defaults to generic type based on status code)
        instance: Request path or identifier
        errors: List of validation errors with field and message

    Returns:
        JSONResponse with problem details
    """
    # Default error types based on status code
    error_type_map = {
        400: "validation_error",
        404: "not_found",
        409: "integrity_violation",
        500: "internal_server_error",
        502: "bad_gateway",
    }

    if not error_type:
        error_type = error_type_map.get(status_code, "error")

    problem = {
        "type": f"{ERROR_TYPE_BASE}:{error_type}",
        "title": title,
        "status": status_code,
        "detail": detail
    }

    if instance:
        problem["instance"] = instance

    if errors:
        problem["errors"] = errors

    return JSONResponse(
        status_code=status_code,
        content=problem
    )


def not_found_error(detail: str = "Resource not found", instance: Optional[str] = None) -> JSONResponse:
    """Create a 404 Not Found error response"""
    return create_error_response(
        status_code=status.HTTP_404_NOT_FOUND,
        title="Not Found",
        detail=detail,
        instance=instance
    )


def validation_error(
    detail: str = "Validation failed",
    errors: Optional[List[Dict[str, str]]] = None,
    instance: Optional[str] = None
) -> JSONResponse:
    """Create a 400 Validation Error response"""
    return create_error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        title="Validation Error",
        detail=detail,
        errors=errors,
        instance=instance
    )


def integrity_error(detail: str, instance: Optional[str] = None) -> JSONResponse:
    """Create a 409 Integrity Violation error response"""
    return create_error_response(
        status_code=status.HTTP_409_CONFLICT,
        title="Integrity Violation",
        detail=detail,
        instance=instance
    )


def internal_server_error(
    detail: str = "An internal server error occurred",
    error_type: Optional[str] = None,
    instance: Optional[str] = None
) -> JSONResponse:
    """Create a 500 Internal Server Error response"""
    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        title="Internal Server Error",
        detail=detail,
        error_type=error_type,
        instance=instance
    )


def bad_gateway_error(detail: str, instance: Optional[str] = None) -> JSONResponse:
    """Create a 502 Bad Gateway error response"""
    return create_error_response(
        status_code=status.HTTP_502_BAD_GATEWAY,
        title="Bad Gateway",
        detail=detail,
        instance=instance
    )


def problem_for(exc: FieldbookError, instance: Optional[str] = None) -> JSONResponse:
    """Map a records core error onto its HTTP problem response"""
    if isinstance(exc, ValidationError):
        return validation_error(exc.message, errors=exc.errors, instance=instance)
    if isinstance(exc, (NotFoundError, BlobNotFoundError)):
        return not_found_error(exc.message, instance=instance)
    if isinstance(exc, IntegrityViolationError):
        return integrity_error(exc.message, instance=instance)
    if isinstance(exc, CascadeFailureError):
        return internal_server_error(exc.message, error_type=exc.code, instance=instance)
    if isinstance(exc, BlobStoreError):
        return bad_gateway_error(exc.message, instance=instance)
    return internal_server_error(exc.message, instance=instance)


def register_exception_handlers(app: FastAPI) -> None:
    """Render core errors and request validation failures as problem documents"""

    @app.exception_handler(FieldbookError)
    async def handle_fieldbook_error(request: Request, exc: FieldbookError):
        return problem_for(exc, instance=request.url.path)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = field_errors(exc.errors(), skip=REQUEST_LOCATIONS)
        logger.warning(f"Rejected request to {request.url.path}: {errors}")
        return validation_error("Request validation failed", errors=errors, instance=request.url.path)
