"""Home Controller — the landing page and the about page.

Invariants:
    - GET / and GET /home/about render HTML (text/html)
    - Case and trailing-slash variants reach these routes via
      CaseInsensitiveRoutingMiddleware, never via redirects
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from website.api.dependencies import get_templates

router = APIRouter(tags=["home"], default_response_class=HTMLResponse)


@router.get("/")
async def index(
    request: Request, templates: Jinja2Templates = Depends(get_templates),
):
    return templates.TemplateResponse(request, "home/index.html", {"title": "Home"})


@router.get("/home/about")
async def about(
    request: Request, templates: Jinja2Templates = Depends(get_templates),
):
    return templates.TemplateResponse(request, "home/about.html", {"title": "About"})
