from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from giftcard_web.logging.utils import initialize_logging, get_app_logger
from giftcard_web.middlewares.logging_middleware import AuditMiddleware

load_dotenv()

# Initialize Sentry (must be done early, before other imports)
from giftcard_web.config.sentry import init_sentry
init_sentry()

# Initialize structured logging
initialize_logging()
logger = get_app_logger('giftcard_web.main')

# Settings
from giftcard_web.config.settings import GiftCardWebConfigs
configs = GiftCardWebConfigs()

logger.info(f"Running in {'debug' if configs.DEBUG else 'production'} mode | gift_card_api={configs.GIFT_CARD_API_BASE_URL}")


@asynccontextmanager
async def lifespan(_: FastAPI):
    logger.info("Starting Gift Card Web")
    yield
    logger.info("Shutting down Gift Card Web")

# Disable docs in production (when DEBUG=false)
docs_url = "/docs" if configs.DEBUG else None
redoc_url = "/redoc" if configs.DEBUG else None

app = FastAPI(
    title="Gift Card Web",
    version=configs.APP_VERSION,
    lifespan=lifespan,
    docs_url=docs_url,
    redoc_url=redoc_url
)

# Request/Audit logging middleware
app.add_middleware(AuditMiddleware)

# Register custom exception handlers
from giftcard_web.middlewares.handlers import register_exception_handlers
register_exception_handlers(app)

# Static assets
from giftcard_web.utils.templating import STATIC_DIR
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

# Routes
from giftcard_web.routes.web import web_router
from giftcard_web.routes.health import router as health_router

app.include_router(web_router)
app.include_router(health_router, tags=["health"])
