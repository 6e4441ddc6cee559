"""Projects Controller — renders the open source project catalog."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from website.api.dependencies import get_templates
from website.core.catalog import PROJECTS

router = APIRouter(tags=["projects"], default_response_class=HTMLResponse)


@router.get("/projects")
async def projects(
    request: Request, templates: Jinja2Templates = Depends(get_templates),
):
    return templates.TemplateResponse(
        request, "projects/index.html",
        {"title": "Projects", "projects": PROJECTS},
    )
