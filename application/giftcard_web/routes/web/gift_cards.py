from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse

# Core functions
from giftcard_web.core.gift_card_functions import (
    GiftCardLookupError,
    accept_gift_card_core,
    create_gift_card_core,
    get_gift_card_details_core,
    search_gift_cards_core,
    search_pagination,
)
from giftcard_web.core.constants import DEFAULT_EXPIRATION_DAYS

# Services
from giftcard_web.integrations.gift_card_api import GiftCardAPIService

from giftcard_web.utils.templating import details_url, templates


web_router = APIRouter(prefix="/gift-cards", tags=["web-gift-cards"])


def get_gift_card_api_service() -> GiftCardAPIService:
    """One client per request; overridden in tests"""
    return GiftCardAPIService()


async def _form_data(request: Request) -> Dict[str, Any]:
    form = await request.form()
    return {key: value for key, value in form.items()}


async def _load_gift_card_view(gift_card_id: str, service: GiftCardAPIService):
    try:
        return await get_gift_card_details_core(gift_card_id, service)
    except GiftCardLookupError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


# Static paths are registered before /{gift_card_id} so they are not taken for ids

@web_router.get("/new", response_class=HTMLResponse, name="new_gift_card")
async def new_gift_card(request: Request):
    """Empty gift card creation form"""
    context = {"errors": {}, "values": {"expirationDays": str(DEFAULT_EXPIRATION_DAYS)}}
    return templates.TemplateResponse(request, "gift_cards/new.html", context)


@web_router.post("/new", response_class=HTMLResponse)
async def create_gift_card(request: Request, service: GiftCardAPIService = Depends(get_gift_card_api_service)):
    """Create a gift card and go to its page, or re-render the form with errors"""
    result = await create_gift_card_core(await _form_data(request), service)
    if result.ok:
        return RedirectResponse(details_url(result.data), status_code=303)
    context = {"errors": result.errors, "values": result.values}
    return templates.TemplateResponse(request, "gift_cards/new.html", context, status_code=result.http_status)


@web_router.get("/search", response_class=HTMLResponse, name="search_gift_cards")
async def search_form(request: Request):
    """Empty search form"""
    return templates.TemplateResponse(request, "gift_cards/search.html", {"errors": {}, "values": {}, "search_performed": False})


@web_router.post("/search", response_class=HTMLResponse)
async def search_gift_cards(request: Request, service: GiftCardAPIService = Depends(get_gift_card_api_service)):
    """Search gift cards by recipient phone"""
    result = await search_gift_cards_core(await _form_data(request), service)
    context = {
        "errors": result.errors,
        "values": result.values,
        "search_performed": True,
        "gift_cards": result.data if result.ok else [],
        "pagination": search_pagination(result) if result.ok else None,
    }
    return templates.TemplateResponse(request, "gift_cards/search.html", context, status_code=result.api_http_status)


@web_router.get("/{gift_card_id}", response_class=HTMLResponse, name="gift_card_details")
async def gift_card_details(gift_card_id: str, request: Request, service: GiftCardAPIService = Depends(get_gift_card_api_service)):
    """Gift card page with QR code or accept panel"""
    view = await _load_gift_card_view(gift_card_id, service)
    context = {"view": view, "errors": {}, "values": {}, "accept_open": False}
    return templates.TemplateResponse(request, "gift_cards/detail.html", context)


@web_router.post("/{gift_card_id}", response_class=HTMLResponse)
async def accept_gift_card(gift_card_id: str, request: Request, service: GiftCardAPIService = Depends(get_gift_card_api_service)):
    """Accept the gift card; on failure the page is rebuilt from a fresh fetch"""
    result = await accept_gift_card_core(gift_card_id, await _form_data(request), service)
    if result.ok:
        return RedirectResponse(details_url(gift_card_id), status_code=303)
    view = await _load_gift_card_view(gift_card_id, service)
    context = {"view": view, "errors": result.errors, "values": result.values, "accept_open": True}
    return templates.TemplateResponse(request, "gift_cards/detail.html", context, status_code=result.http_status)
