"""Content Types — exact media types for the site's static resources.

Invariants:
    - Known extensions map to fixed media types regardless of the host's
      mimetypes database (which varies across platforms and Python versions)
    - Extension-less well-known files map by name
    - Unknown files fall back to mimetypes, then application/octet-stream
"""

import mimetypes
from pathlib import PurePosixPath

DEFAULT_MEDIA_TYPE = "application/octet-stream"

MEDIA_TYPES_BY_NAME = {
    "apple-app-site-association": "application/json",
}

MEDIA_TYPES_BY_EXTENSION = {
    ".css": "text/css",
    ".gif": "image/gif",
    ".html": "text/html",
    ".ico": "image/x-icon",
    ".jpg": "image/jpeg",
    ".js": "application/javascript",
    ".json": "application/json",
    ".map": "text/plain",
    ".png": "image/png",
    ".svg": "image/svg+xml",
    ".txt": "text/plain",
    ".webmanifest": "application/manifest+json",
    ".webp": "image/webp",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".xml": "text/xml",
}


def media_type_for(path: str) -> str:
    """Return the media type served for a static file path."""
    name = PurePosixPath(path).name.lower()
    if name in MEDIA_TYPES_BY_NAME:
        return MEDIA_TYPES_BY_NAME[name]
    suffix = PurePosixPath(name).suffix
    if suffix in MEDIA_TYPES_BY_EXTENSION:
        return MEDIA_TYPES_BY_EXTENSION[suffix]
    guessed, _ = mimetypes.guess_type(name)
    return guessed or DEFAULT_MEDIA_TYPE
