"""File Versions — cache-busting query strings for static assets.

Invariants:
    - Only site-relative paths ("/...") that exist under the static root are versioned
    - The version is the unpadded base64url SHA-256 of the file contents
    - Cached per file; recomputed when the file's mtime or size changes
    - Existing query strings and fragments are preserved

Design Decisions:
    - Content hash over build number: unchanged files keep their browser cache
      across deployments
"""

import base64
import hashlib
import logging
import os
import threading
from pathlib import Path
from urllib.parse import urlsplit, urlunsplit

logger = logging.getLogger(__name__)

VERSION_KEY = "v"


class FileVersionProvider:
    """Appends v=<content hash> to URLs of files under a static root."""

    def __init__(self, root: str | os.PathLike):
        self.root = Path(root).resolve()
        self._cache: dict[Path, tuple[tuple[float, int], str]] = {}
        self._lock = threading.Lock()

    def _resolve(self, path: str) -> Path | None:
        candidate = (self.root / path.lstrip("/")).resolve()
        if self.root not in candidate.parents:
            return None
        return candidate if candidate.is_file() else None

    def version_of(self, file: Path) -> str:
        stat = file.stat()
        key = (stat.st_mtime, stat.st_size)
        with self._lock:
            cached = self._cache.get(file)
            if cached and cached[0] == key:
                return cached[1]
        digest = hashlib.sha256(file.read_bytes()).digest()
        version = base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")
        with self._lock:
            self._cache[file] = (key, version)
        return version

    def add_file_version(self, url: str) -> str:
        """Return url with a version query string, or unchanged if not a local file."""
        parts = urlsplit(url)
        if parts.scheme or parts.netloc or not parts.path.startswith("/"):
            return url
        file = self._resolve(parts.path)
        if file is None:
            logger.debug(f"No static file to version for {url}")
            return url
        query = f"{VERSION_KEY}={self.version_of(file)}"
        if parts.query:
            query = f"{parts.query}&{query}"
        return urlunsplit(("", "", parts.path, query, parts.fragment))
