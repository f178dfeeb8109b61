"""Browser client: a single page with the product form and grid."""

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(include_in_schema=False)


@router.get("/", response_class=HTMLResponse)
def index(request: Request) -> HTMLResponse:
    config = request.app.state.config
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": config.app.title,
            "api_base": "/api/products",
            "allowed_extensions": config.uploads.allowed_extensions,
        },
    )
