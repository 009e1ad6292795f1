"""
Client for the external gift card API.

The API owns issuance, balances, acceptance and QR generation. This client
only relays requests and normalises every outcome into a
GiftCardAPIReturnMessage:

* success=True                      -> 2xx, `data` holds the payload's "data"
* success=False, status_code set    -> non-2xx, `message` from the payload if any
* success=False, status_code=None   -> transport failure (network, bad JSON)
"""

from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx
from pydantic import BaseModel

# Logger
from giftcard_web.logging.utils import get_app_logger
logger = get_app_logger("gift_card_api")

# Settings
from giftcard_web.config.settings import GiftCardWebConfigs
configs = GiftCardWebConfigs()

# DTOs
from giftcard_web.dto.gift_card import GiftCardAcceptRequest, GiftCardCreateRequest


class GiftCardAPIReturnMessage(BaseModel):
    success: bool
    message: Optional[str] = None
    status_code: Optional[int] = None
    data: Optional[Any] = None

    @property
    def is_transport_error(self) -> bool:
        return not self.success and self.status_code is None


class GiftCardAPIService:
    """Service for communicating with the external gift card API"""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_base_url = configs.GIFT_CARD_API_BASE_URL
        self.timeout = configs.GIFT_CARD_API_TIMEOUT
        self.transport = transport

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "User-Agent": f"{configs.APP_NAME}/{configs.APP_VERSION}",
        }

    def return_message(self, success: bool, message: Optional[str] = None, status_code: Optional[int] = None, data: Any = None) -> GiftCardAPIReturnMessage:
        return GiftCardAPIReturnMessage(success=success, message=message, status_code=status_code, data=data)

    @staticmethod
    def _error_message(response: httpx.Response) -> Optional[str]:
        """Server-provided {"message": ...} when the error body has one"""
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            message = body.get("message")
            if isinstance(message, str) and message.strip():
                return message
        return None

    async def _request(self, event: str, method: str, path: str, json: Optional[Dict[str, Any]] = None, params: Optional[Dict[str, Any]] = None) -> GiftCardAPIReturnMessage:
        url = f"{self.api_base_url}{path}"
        logger.info(f"{event}_request | method={method} url={url}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(method, url, json=json, params=params, headers=self._get_headers())
        except httpx.HTTPError as e:
            logger.error(f"{event}_transport_error | method={method} url={url} error_type={type(e).__name__} error={e}")
            return self.return_message(success=False)

        if response.is_success:
            try:
                body = response.json()
            except ValueError:
                logger.error(f"{event}_invalid_json | url={url} status={response.status_code}")
                return self.return_message(success=False)
            data = body.get("data") if isinstance(body, dict) else None
            logger.info(f"{event}_success | url={url} status={response.status_code}")
            return self.return_message(success=True, status_code=response.status_code, data=data)

        message = self._error_message(response)
        if response.status_code >= 500:
            logger.error(f"{event}_failed | url={url} status={response.status_code} message={message}")
        else:
            logger.warning(f"{event}_failed | url={url} status={response.status_code} message={message}")
        return self.return_message(success=False, message=message, status_code=response.status_code)

    async def create_gift_card(self, request: GiftCardCreateRequest) -> GiftCardAPIReturnMessage:
        """
        Issue a new gift card.
        Args:
            request: issuer/recipient details, balance in cents, expiration days
        Returns:
            GiftCardAPIReturnMessage whose data is the created card
        """
        return await self._request("gift_card_create", "POST", "/api/gift-cards", json=request.model_dump())

    async def get_gift_card(self, gift_card_id: str) -> GiftCardAPIReturnMessage:
        """
        Fetch one gift card.
        Args:
            gift_card_id: gift card identifier
        Returns:
            GiftCardAPIReturnMessage whose data is the card
        """
        return await self._request("gift_card_details", "GET", f"/api/gift-cards/{quote(gift_card_id, safe='')}")

    async def accept_gift_card(self, gift_card_id: str, request: GiftCardAcceptRequest) -> GiftCardAPIReturnMessage:
        """
        Accept a gift card on behalf of its recipient. Whether the phone
        matches the recipient is decided by the API.
        Args:
            gift_card_id: gift card identifier
            request: gift card id and the phone number supplied by the user
        Returns:
            GiftCardAPIReturnMessage whose data is the updated card
        """
        path = f"/api/gift-cards/{quote(gift_card_id, safe='')}/accept"
        return await self._request("gift_card_accept", "POST", path, json=request.model_dump())

    async def list_by_recipient(self, phone: str, page: int = 1, per_page: Optional[int] = None) -> GiftCardAPIReturnMessage:
        """
        List gift cards sent to a phone number, newest first.
        Args:
            phone: recipient phone number
            page: 1-based page number
            per_page: page size, API default when None
        Returns:
            GiftCardAPIReturnMessage whose data is a list of cards
        """
        params = {"page": page}
        if per_page is not None:
            params["per_page"] = per_page
        path = f"/api/gift-cards/by-recipient/{quote(phone, safe='')}"
        return await self._request("gift_card_search", "GET", path, params=params)
