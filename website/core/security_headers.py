"""Security Headers — the fixed header set attached to every response.

Invariants:
    - build_response_headers always returns every name in REQUIRED_HEADERS
    - img-src allows data: (the lazy image placeholder is a data URI)
    - upgrade-insecure-requests only outside development (local HTTP must work)

Design Decisions:
    - Plain functions over a middleware class: the middleware in api/middleware.py
      only handles ASGI plumbing, header values are computed here
    - Report-only policy mirrors the enforced one so violations show up before
      directives are tightened
"""

from collections.abc import Iterable

REQUIRED_HEADERS = (
    "content-security-policy",
    "X-Content-Type-Options",
    "X-Download-Options",
    "X-Frame-Options",
    "X-XSS-Protection",
    "X-Datacenter",
    "X-Instance",
    "X-Request-Id",
    "X-Revision",
)

FEATURE_POLICY = "; ".join((
    "accelerometer 'none'",
    "camera 'none'",
    "geolocation 'none'",
    "gyroscope 'none'",
    "magnetometer 'none'",
    "microphone 'none'",
    "payment 'none'",
    "usb 'none'",
))


def build_content_security_policy(
    cdn_hosts: Iterable[str], is_development: bool,
) -> str:
    """Build the Content-Security-Policy value for the site."""
    cdn = " ".join(cdn_hosts)
    directives = [
        "default-src 'self'",
        f"script-src 'self' {cdn}".rstrip(),
        f"style-src 'self' {cdn}".rstrip(),
        f"img-src 'self' data: {cdn}".rstrip(),
        f"font-src 'self' {cdn}".rstrip(),
        "connect-src 'self'",
        "media-src 'none'",
        "object-src 'none'",
        "child-src 'self'",
        "frame-ancestors 'none'",
        "form-action 'self'",
        "base-uri 'self'",
        "manifest-src 'self'",
        "worker-src 'self'",
        "block-all-mixed-content",
    ]
    if not is_development:
        directives.append("upgrade-insecure-requests")
    return "; ".join(directives) + ";"


def build_response_headers(
    *,
    request_id: str,
    datacenter: str,
    instance: str,
    revision: str,
    cdn_hosts: Iterable[str],
    is_development: bool,
) -> dict[str, str]:
    """Compute the headers added to a response."""
    policy = build_content_security_policy(cdn_hosts, is_development)
    return {
        "content-security-policy": policy,
        "content-security-policy-report-only": policy,
        "feature-policy": FEATURE_POLICY,
        "Referrer-Policy": "no-referrer-when-downgrade",
        "X-Content-Type-Options": "nosniff",
        "X-Download-Options": "noopen",
        "X-Frame-Options": "DENY",
        "X-XSS-Protection": "1; mode=block",
        "X-Datacenter": datacenter,
        "X-Instance": instance,
        "X-Request-Id": request_id,
        "X-Revision": revision,
    }
