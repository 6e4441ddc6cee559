"""Error Handlers — global exception handlers for the website.

Invariants:
    - WebsiteError → structured JSON with error code, message, severity
    - RequestValidationError → 400 JSON with field-level details
    - HTTPException (404, 405, ...) → rendered error page with the same status
    - Exception (catch-all) → 500 error page, never leaks internal details

Design Decisions:
    - Four handlers: domain (WebsiteError), validation (Pydantic),
      HTTP status (Starlette), catch-all (Exception)
    - Error pages are templates, not the static error.html: they share the
      layout and carry the request id for support requests
    - The catch-all runs in Starlette's ServerErrorMiddleware, outside
      SecurityHeadersMiddleware: it reads the request id and header set from
      the request state instead
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from website.core.errors import ErrorSeverity, WebsiteError
from website.infrastructure.observability import request_id_var

logger = logging.getLogger(__name__)

ERROR_TITLES = {
    status.HTTP_400_BAD_REQUEST: "Bad Request",
    status.HTTP_404_NOT_FOUND: "Not Found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "Method Not Allowed",
}


def register_error_handlers(app: FastAPI, templates: Jinja2Templates) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_website_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app, templates)
    _register_generic_error_handler(app, templates)


def current_request_id(request: Request) -> str | None:
    return request_id_var.get() or getattr(request.state, "request_id", None)


def render_error_page(
    templates: Jinja2Templates, request: Request, status_code: int,
):
    """Render the shared error view for a status code."""
    return templates.TemplateResponse(
        request,
        "shared/error.html",
        {
            "title": ERROR_TITLES.get(status_code, "Error"),
            "status_code": status_code,
            "request_id": current_request_id(request),
        },
        status_code=status_code,
    )


def _register_website_error_handler(app: FastAPI) -> None:

    @app.exception_handler(WebsiteError)
    async def website_error_handler(request: Request, exc: WebsiteError):
        """Handle all website domain errors."""
        logger.warning(
            f"WebsiteError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        exc.context.path = request.url.path
        exc.context.request_id = request_id_var.get()
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI, templates: Jinja2Templates) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Render an error page for 4xx/5xx raised by routing or static files."""
        logger.info(
            f"HTTP {exc.status_code} on {request.url.path}",
            extra={"path": request.url.path, "status_code": exc.status_code},
        )
        response = render_error_page(templates, request, exc.status_code)
        for name, value in (exc.headers or {}).items():
            response.headers[name] = value
        return response


def _register_generic_error_handler(app: FastAPI, templates: Jinja2Templates) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"request_id": current_request_id(request), "path": request.url.path},
        )
        response = render_error_page(
            templates, request, status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
        for name, value in getattr(request.state, "response_headers", {}).items():
            response.headers[name] = value
        return response


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
