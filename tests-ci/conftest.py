"""
Pytest configuration for CI tests
Provides common fixtures and a fake Helix backend (no network)
"""
from typing import Dict, List, Optional, Set

import pytest

from helixapi.api_client import ApiCallOptions
from helixapi.errors import HelixRequestError


def make_subscription(
    sub_id: str,
    status: str = "enabled",
    type: str = "stream.online",
    method: str = "webhook",
) -> Dict:
    """Raw subscription as sent by Helix"""
    transport = {"method": method}
    if method == "webhook":
        transport["callback"] = "https://example.com/eventsub"
    else:
        transport["session_id"] = "session-abc"
    return {
        "id": sub_id,
        "status": status,
        "type": type,
        "version": "1",
        "condition": {"broadcaster_user_id": "1337"},
        "created_at": "2023-03-04T10:11:12.123456789Z",
        "transport": transport,
        "cost": 1,
    }


class FakeHelix:
    """
    Fake `call_api` collaborator.

    GET renvoie les pages dans l'ordre (curseur = index de la page suivante),
    DELETE enregistre l'id supprimé ou lève une erreur pour les ids de
    `fail_delete`.
    """

    def __init__(self, pages: List[List[Dict]], fail_delete: Optional[Set[str]] = None, fail_page: Optional[int] = None):
        self.pages = pages
        self.fail_delete = fail_delete or set()
        self.fail_page = fail_page
        self.calls: List[ApiCallOptions] = []
        self.deleted: List[str] = []
        self.fetched_pages: List[int] = []

    async def call_api(self, options: ApiCallOptions):
        self.calls.append(options)

        if options.method == "GET":
            index = int(options.query.get("after", 0))
            if index == self.fail_page:
                raise HelixRequestError(503, "Service Unavailable", url=options.url)
            self.fetched_pages.append(index)
            next_index = index + 1
            total = sum(len(page) for page in self.pages)
            return {
                "data": self.pages[index],
                "pagination": {"cursor": str(next_index)} if next_index < len(self.pages) else {},
                "total": total,
                "total_cost": total,
                "max_total_cost": 10000,
            }

        if options.method == "DELETE":
            sub_id = options.query["id"]
            if sub_id in self.fail_delete:
                raise HelixRequestError(500, "Internal Server Error", url=options.url)
            self.deleted.append(sub_id)
            return None

        raise AssertionError(f"Unexpected call {options.method} {options.url}")


@pytest.fixture
def three_pages():
    """3 pages, la 2e page contient une subscription `enabled` en 2e position"""
    return [
        [make_subscription("a1", "webhook_callback_verification_failed"),
         make_subscription("a2", "notification_failures_exceeded")],
        [make_subscription("b1", "authorization_revoked"),
         make_subscription("b2", "enabled"),
         make_subscription("b3", "user_removed")],
        [make_subscription("c1", "websocket_disconnected")],
    ]


@pytest.fixture
def mock_config():
    """Mock configuration for tests (no real API keys needed)"""
    return {
        "twitch": {
            "client_id": "test_client_id_mock",
            "app_access_token": "app-token-mock",
            "request_timeout": 5.0,
            "page_size": 50,
            "tokens": {
                1337: {
                    "access_token": "oauth:user-token-mock",
                    "scopes": ["moderator:read:followers", "channel:read:subscriptions"],
                    "login": "el_serda",
                },
            },
        },
        "bot": {
            "name": "test_bot",
        },
    }
