"""Templating — Jinja2 environment with asset versioning and lazy image helpers.

Invariants:
    - asset_url() and lazy_img() version the same way (one FileVersionProvider)
    - lazy_img() returns Markup: attribute values are escaped once, in core/lazy_image
    - settings exposed read-only to templates (branch/revision meta tags)
"""

from pathlib import Path

from fastapi.templating import Jinja2Templates
from markupsafe import Markup

from website.config import Settings
from website.core.lazy_image import lazy_image_attributes, render_img_tag
from website.infrastructure.file_versions import FileVersionProvider

PACKAGE_ROOT = Path(__file__).resolve().parent.parent
TEMPLATES_DIR = PACKAGE_ROOT / "templates"
STATIC_DIR = PACKAGE_ROOT / "static"


def create_templates(
    settings: Settings,
    versions: FileVersionProvider,
    directory: Path = TEMPLATES_DIR,
) -> Jinja2Templates:
    """Build the Jinja2Templates used by the page routes."""
    templates = Jinja2Templates(directory=str(directory))

    def asset_url(path: str) -> str:
        return versions.add_file_version(path)

    def lazy_img(src: str, **attributes) -> Markup:
        # class is a keyword in Python; templates pass css= or class_=
        css = attributes.pop("css", None) or attributes.pop("class_", None)
        attrs = {"src": versions.add_file_version(src)}
        if css:
            attrs["class"] = css
        attrs.update({
            name.replace("_", "-"): value for name, value in attributes.items()
        })
        return Markup(render_img_tag(lazy_image_attributes(attrs)))

    templates.env.globals.update(
        asset_url=asset_url,
        lazy_img=lazy_img,
        settings=settings,
    )
    return templates
