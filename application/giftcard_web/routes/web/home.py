from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from giftcard_web.utils.templating import templates

home_router = APIRouter(tags=["web-home"])


@home_router.get("/", response_class=HTMLResponse, name="home")
async def home(request: Request):
    """Landing page"""
    return templates.TemplateResponse(request, "index.html")
