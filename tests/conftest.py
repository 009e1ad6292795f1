"""
Pytest configuration and shared fixtures.
"""

import json
import os
import sys
from datetime import timedelta

import httpx
import pytest

# Make the application package importable without installing it
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'application'))

from giftcard_web.integrations.gift_card_api import GiftCardAPIService
from giftcard_web.utils.datetime_helpers import get_utc_now


def gift_card_payload(**overrides):
    """A gift card as the API returns it, expiring in 30 days"""
    now = get_utc_now()
    card = {
        "id": "3f2b8c1e-9a4d-4e7b-8c2f-1d5e6a7b8c9d",
        "issuer_name": "Alice Sender",
        "recipient_name": "Bob Receiver",
        "recipient_phone": "5551234567",
        "balance": 2500,
        "initial_balance": 5000,
        "expiration_date": (now + timedelta(days=30, hours=1)).isoformat(),
        "is_accepted": False,
        "is_active": True,
        "qr_code": None,
        "created_at": (now - timedelta(days=1)).isoformat(),
    }
    card.update(overrides)
    return card


class FakeGiftCardAPI:
    """
    Records every request and answers from a route table keyed by
    (method, path). Unrouted requests get a 404.
    """

    def __init__(self):
        self.requests = []
        self.routes = {}

    def respond(self, method, path, status_code=200, json_body=None, exc=None, content=None):
        self.routes[(method, path)] = (status_code, json_body, exc, content)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.raw_path.decode().split('?')[0])
        if key not in self.routes:
            return httpx.Response(404, json={"message": "Not routed"})
        status_code, json_body, exc, content = self.routes[key]
        if exc is not None:
            raise exc
        if content is not None:
            return httpx.Response(status_code, content=content)
        return httpx.Response(status_code, json=json_body)

    def calls(self, method=None, path=None):
        return [
            r for r in self.requests
            if (method is None or r.method == method)
            and (path is None or r.url.raw_path.decode().split('?')[0] == path)
        ]

    @staticmethod
    def body(request: httpx.Request):
        return json.loads(request.content.decode())


@pytest.fixture
def fake_api():
    return FakeGiftCardAPI()


@pytest.fixture
def api_service(fake_api):
    """GiftCardAPIService wired to the fake API"""
    return GiftCardAPIService(transport=httpx.MockTransport(fake_api.handler))


@pytest.fixture
def client(api_service):
    """TestClient for the web app using the fake API"""
    from fastapi.testclient import TestClient
    from giftcard_web.main import app
    from giftcard_web.routes.web.gift_cards import get_gift_card_api_service

    app.dependency_overrides[get_gift_card_api_service] = lambda: api_service
    with TestClient(app, raise_server_exceptions=False, follow_redirects=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_gift_card():
    return gift_card_payload
