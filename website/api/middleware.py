"""Middleware — request ids, security headers and case-insensitive page routing.

Invariants:
    - Every HTTP response passing through SecurityHeadersMiddleware carries the
      headers from core/security_headers.build_response_headers
    - An incoming X-Request-Id is reused; otherwise a new one is generated
    - request_id_var is set for the duration of the request only
    - The request id and header set are also stored on the request state for
      the catch-all error handler, which runs outside this middleware
    - Page routes match regardless of case and one trailing slash; static file
      paths are passed through untouched

Design Decisions:
    - Pure ASGI middleware over BaseHTTPMiddleware: no response body buffering,
      ContextVar changes visible to the route handlers
    - Page route matching delegates to Starlette's own Route.matches, so path
      parameters and methods behave exactly as without the middleware
"""

import logging
import time
import uuid

from fastapi.routing import APIRoute
from starlette.datastructures import Headers, MutableHeaders
from starlette.routing import Match
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from website.config import Settings
from website.core.security_headers import build_response_headers
from website.infrastructure.observability import request_id_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "x-request-id"
MAX_REQUEST_ID_LENGTH = 128


def _request_id_from(scope: Scope) -> str:
    incoming = Headers(scope=scope).get(REQUEST_ID_HEADER, "").strip()
    if incoming and len(incoming) <= MAX_REQUEST_ID_LENGTH and incoming.isprintable():
        return incoming
    return uuid.uuid4().hex


class SecurityHeadersMiddleware:
    """Adds the site's security and diagnostic headers to every response."""

    def __init__(self, app: ASGIApp, settings: Settings):
        self.app = app
        self.settings = settings

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = _request_id_from(scope)
        headers = build_response_headers(
            request_id=request_id,
            datacenter=self.settings.azure_datacenter,
            instance=self.settings.website_instance_id,
            revision=self.settings.git_commit,
            cdn_hosts=self.settings.cdn_hosts,
            is_development=self.settings.is_development,
        )
        state = scope.setdefault("state", {})
        state["request_id"] = request_id
        state["response_headers"] = headers
        started = time.perf_counter()
        status_code = 500

        async def send_with_headers(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                response_headers = MutableHeaders(scope=message)
                for name, value in headers.items():
                    response_headers[name] = value
            await send(message)

        token = request_id_var.set(request_id)
        try:
            await self.app(scope, receive, send_with_headers)
        finally:
            logger.info(
                f"{scope['method']} {scope['path']} {status_code}",
                extra={
                    "path": scope["path"],
                    "status_code": status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
            request_id_var.reset(token)


def path_candidates(path: str) -> list[str]:
    """Alternative spellings of a page path, most specific first."""
    trimmed = path.rstrip("/") or "/"
    candidates = [path, trimmed, trimmed.lower()]
    return list(dict.fromkeys(candidates))


def match_page_route(routes, scope: Scope) -> str | None:
    """Return the first candidate path that an APIRoute matches, if any."""
    for candidate in path_candidates(scope["path"]):
        probe = {**scope, "path": candidate}
        for route in routes:
            if not isinstance(route, APIRoute):
                continue
            match, _ = route.matches(probe)
            if match is not Match.NONE:
                return candidate
    return None


class CaseInsensitiveRoutingMiddleware:
    """Rewrites /HOME/ABOUT and /home/about/ to the registered /home/about."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            routes = scope["app"].router.routes
            matched = match_page_route(routes, scope)
            if matched is not None and matched != scope["path"]:
                scope = {**scope, "path": matched, "raw_path": matched.encode("utf-8")}
        await self.app(scope, receive, send)
