"""
Jinja2 templates shared by the page routes and the error boundary.
"""
from pathlib import Path
from urllib.parse import quote

from fastapi.templating import Jinja2Templates

from giftcard_web.core.constants import EXPIRATION_DAY_OPTIONS
from giftcard_web.utils.datetime_helpers import get_utc_now

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

SITE_NAME = "Gift Card System"


def details_url(gift_card_id: str) -> str:
    """Page URL of a gift card; the id is quoted as a single path segment"""
    return f"/gift-cards/{quote(str(gift_card_id), safe='')}"


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["site_name"] = SITE_NAME
templates.env.globals["expiration_day_options"] = EXPIRATION_DAY_OPTIONS
templates.env.globals["current_year"] = lambda: get_utc_now().year
templates.env.globals["details_url"] = details_url
