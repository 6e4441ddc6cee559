"""Static Files — StaticFiles with the site's content types and cache policy.

Invariants:
    - Content-Type comes from core/content_types.media_type_for, not the host's
      mimetypes database
    - Versioned requests (?v=...) are cacheable for a year, others for a day
"""

import os

from starlette.datastructures import QueryParams
from starlette.responses import FileResponse, Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

from website.core.content_types import media_type_for
from website.infrastructure.file_versions import VERSION_KEY

ONE_DAY = 60 * 60 * 24
ONE_YEAR = ONE_DAY * 365


class SiteStaticFiles(StaticFiles):

    def file_response(
        self,
        full_path: str | os.PathLike,
        stat_result: os.stat_result,
        scope: Scope,
        status_code: int = 200,
    ) -> Response:
        response = super().file_response(full_path, stat_result, scope, status_code)
        if isinstance(response, FileResponse):
            media_type = media_type_for(os.fspath(full_path))
            response.media_type = media_type
            if media_type.startswith("text/"):
                media_type += "; charset=utf-8"
            response.headers["content-type"] = media_type

        versioned = VERSION_KEY in QueryParams(scope.get("query_string", b""))
        max_age = ONE_YEAR if versioned else ONE_DAY
        response.headers["cache-control"] = f"public, max-age={max_age}"
        return response
