"""Lazy Images — rewrites image attributes so the browser defers loading them.

Invariants:
    - Output src is always PLACEHOLDER_SRC; the real URL moves to data-original
    - "lazy" is appended after the existing class tokens, whose order is kept
    - "lazy" appears exactly once, so applying the transform twice changes nothing
      in the class list
    - Input mapping is never mutated

Design Decisions:
    - Pure function over attribute mappings: the Jinja2 global in
      infrastructure/templating.py does the URL versioning, this only rewrites
    - Placeholder is a 1x1 transparent GIF: the page layout is stable before
      site.js swaps in the real image
"""

from collections.abc import Mapping
from html import escape

CLASS_ATTRIBUTE = "class"
DATA_ORIGINAL_ATTRIBUTE = "data-original"
SOURCE_ATTRIBUTE = "src"
LAZY_CLASS = "lazy"

PLACEHOLDER_SRC = (
    "data:image/gif;base64,"
    "R0lGODlhAQABAIAAAAAAAP///yH5BAEAAAAALAAAAAABAAEAAAIBRAA7"
)


def append_css_class(css: str | None, token: str) -> str:
    """Append a class token, keeping existing order and skipping duplicates."""
    tokens = (css or "").split()
    if token not in tokens:
        tokens.append(token)
    return " ".join(tokens)


def lazy_image_attributes(attributes: Mapping[str, object]) -> dict[str, str]:
    """Transform <img> attributes for lazy loading.

    Every attribute other than src and class is passed through unchanged.
    Raises ValueError when there is no src to defer.
    """
    src = attributes.get(SOURCE_ATTRIBUTE)
    if src is None or not str(src).strip():
        raise ValueError("Lazy images require a non-empty 'src' attribute")

    result = {
        name: str(value) for name, value in attributes.items()
        if value is not None
    }
    css = attributes.get(CLASS_ATTRIBUTE)
    result[CLASS_ATTRIBUTE] = append_css_class(
        str(css) if css is not None else None, LAZY_CLASS,
    )
    result[DATA_ORIGINAL_ATTRIBUTE] = str(src)
    result[SOURCE_ATTRIBUTE] = PLACEHOLDER_SRC
    return result


def render_img_tag(attributes: Mapping[str, str]) -> str:
    """Render a self-closing <img /> element with escaped attribute values."""
    rendered = " ".join(
        f'{name}="{escape(value, quote=True)}"'
        for name, value in attributes.items()
    )
    return f"<img {rendered} />" if rendered else "<img />"
