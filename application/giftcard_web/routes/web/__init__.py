from fastapi import APIRouter
from giftcard_web.routes.web.home import home_router
from giftcard_web.routes.web.gift_cards import web_router as gift_cards_router

web_router = APIRouter(tags=["web"])
web_router.include_router(home_router)
web_router.include_router(gift_cards_router)
