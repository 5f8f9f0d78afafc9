"""Global exception handlers for standardized error responses.

Implements RFC 7807 Problem Details for HTTP APIs. Domain errors are mapped
to HTTP status codes by kind (see txgroups.models.errors.kind_to_status).
"""

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from txgroups.core.logging import logger
from txgroups.domain.errors import DomainError
from txgroups.models.errors import ProblemDetail, ValidationErrorDetail, kind_to_status


def _problem_response(problem: ProblemDetail) -> JSONResponse:
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(mode="json", exclude_none=True),
    )


async def domain_error_handler(  # noqa: ASYNC100
    request: Request, exc: DomainError
) -> JSONResponse:
    """Handle domain errors raised by the group service.

    Args:
        request: The FastAPI request object.
        exc: The domain error that was raised.

    Returns:
        JSONResponse with ProblemDetail body and the kind as extension.
    """
    status = kind_to_status.get(exc.kind, 500)

    if status >= 500:
        logger.error(f"Domain error [{exc.kind}] on {request.method} {request.url.path}: {exc}")
    else:
        logger.info(f"Domain error [{exc.kind}] on {request.method} {request.url.path}: {exc}")

    return _problem_response(
        ProblemDetail(
            title=exc.kind.replace("_", " ").title(),
            status=status,
            detail=str(exc),
            instance=str(request.url.path),
            kind=exc.kind,
        )
    )


async def http_exception_handler(  # noqa: ASYNC100
    request: Request, exc: HTTPException
) -> JSONResponse:
    """Handle HTTPException with RFC 7807 ProblemDetail response."""
    logger.warning(f"HTTPException: {exc.status_code} - {exc.detail}")

    return _problem_response(
        ProblemDetail(
            title="An error occurred",
            status=exc.status_code,
            detail=str(exc.detail),
            instance=str(request.url.path),
        )
    )


async def general_exception_handler(  # noqa: ASYNC100
    request: Request, exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions with 500 Internal Server Error."""
    logger.opt(exception=exc).error(
        f"Unexpected error: {type(exc).__name__} on {request.method} {request.url.path}"
    )

    return _problem_response(
        ProblemDetail(
            title="Internal Server Error",
            status=500,
            detail="An unexpected error occurred. Please try again later.",
            instance=str(request.url.path),
        )
    )


async def validation_exception_handler(  # noqa: ASYNC100
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors with field-level details."""
    errors = [
        ValidationErrorDetail(
            type=error["type"],
            loc=tuple(str(loc) for loc in error["loc"]),
            msg=error["msg"],
            input=error.get("input"),
        )
        for error in exc.errors()
    ]

    logger.warning(f"Validation error: {len(errors)} errors on {request.url.path}")

    return _problem_response(
        ProblemDetail(
            title="Validation Error",
            status=422,
            detail=f"One or more validation errors occurred ({len(errors)} errors).",
            instance=str(request.url.path),
            errors=errors,
        )
    )
