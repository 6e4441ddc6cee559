"""Tools Controller — the /tools page and the JSON generators it calls.

Invariants:
    - GET /tools renders HTML; /tools/* endpoints return JSON
    - Invalid generator arguments raise ToolInputError (400 JSON envelope)
    - Responses are never cached (every call must be fresh randomness)

Design Decisions:
    - Generators live in core/tools.py; this module only maps HTTP ⇄ core
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from website.api.dependencies import get_templates
from website.core import tools as tools_core
from website.schemas.tools import (
    GuidResponse, HashRequest, HashResponse, MachineKeyResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/tools", tags=["tools"])

NO_CACHE = "no-cache, no-store"


@router.get("", response_class=HTMLResponse)
async def index(
    request: Request, templates: Jinja2Templates = Depends(get_templates),
):
    return templates.TemplateResponse(
        request, "tools/index.html",
        {
            "title": "Tools",
            "guid_formats": tools_core.GUID_FORMATS,
            "hash_algorithms": tools_core.HASH_ALGORITHMS,
            "hash_formats": tools_core.HASH_FORMATS,
            "decryption_algorithms": list(tools_core.DECRYPTION_ALGORITHMS),
            "validation_algorithms": list(tools_core.VALIDATION_ALGORITHMS),
        },
    )


@router.get("/guid", response_model=GuidResponse)
async def guid(
    response: Response,
    format: str = Query("D", max_length=1),
    uppercase: bool = False,
):
    """Generate a new GUID."""
    response.headers["Cache-Control"] = NO_CACHE
    return GuidResponse(guid=tools_core.generate_guid(format, uppercase))


@router.post("/hash", response_model=HashResponse)
async def hash_text(body: HashRequest, response: Response):
    """Hash plaintext with the requested algorithm and output format."""
    response.headers["Cache-Control"] = NO_CACHE
    value = tools_core.generate_hash(body.algorithm, body.format, body.plaintext)
    return HashResponse(hash=value)


@router.get("/machinekey", response_model=MachineKeyResponse)
async def machine_key(
    response: Response,
    decryption_algorithm: str = Query(..., alias="decryptionAlgorithm"),
    validation_algorithm: str = Query(..., alias="validationAlgorithm"),
):
    """Generate an ASP.NET machine key."""
    response.headers["Cache-Control"] = NO_CACHE
    key = tools_core.generate_machine_key(decryption_algorithm, validation_algorithm)
    logger.info(
        f"Generated machine key ({decryption_algorithm}/{validation_algorithm})",
    )
    return MachineKeyResponse(
        decryption_key=key.decryption_key,
        validation_key=key.validation_key,
        machine_key_xml=key.machine_key_xml,
    )
