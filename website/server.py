"""Process Entry Point — builds the app and serves it with uvicorn.

Invariants:
    - Returns 0 after a normal shutdown
    - Any failure while building or starting the host (bad settings, a port
      already in use, a failed lifespan startup) is written to stderr and
      reported as exit code 1; nothing is logged through the (possibly
      unconfigured) logging pipeline

Design Decisions:
    - uvicorn.Server over uvicorn.run: uvicorn.run exits the process itself
      when startup fails, which would bypass the error reporting here
    - Listening socket bound before uvicorn starts, so a bind failure surfaces
      as the OSError that caused it
    - No Server header (server_header=False): the stack is not advertised
    - log_config=None: uvicorn's loggers propagate to the root logger that
      configure_logging sets up, so access logs reach every sink
"""

import socket
import sys
import traceback

import uvicorn

from website.config import Settings, get_settings
from website.main import create_app


def bind_socket(host: str, port: int) -> socket.socket:
    """Bind the listening socket; raises OSError when the address is in use."""
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    return sock


def serve(settings: Settings) -> None:
    app = create_app(settings)
    config = uvicorn.Config(
        app,
        lifespan="on",
        server_header=False,
        proxy_headers=True,
        forwarded_allow_ips="*",
        log_config=None,
    )
    server = uvicorn.Server(config)
    sock = bind_socket(settings.host, settings.port)
    try:
        server.run(sockets=[sock])
    finally:
        sock.close()
    if not server.started:
        raise RuntimeError(
            f"The website failed to start on {settings.host}:{settings.port}.",
        )


def main() -> int:
    try:
        serve(get_settings())
        return 0
    except Exception as ex:
        details = "".join(traceback.format_exception(ex))
        print(f"Unhandled exception: {details}", file=sys.stderr)
        return 1
