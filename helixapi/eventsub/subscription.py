"""
EventSub subscription records as returned by `GET/POST eventsub/subscriptions`.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from helixapi.errors import HelixError
from helixapi.pagination import (
    HelixPaginatedRequestWithTotal,
    HelixPaginatedResultWithTotal,
    extract_cursor,
)

SUBSCRIPTIONS_URL = "eventsub/subscriptions"


class EventSubSubscriptionStatus(str, Enum):
    ENABLED = "enabled"
    WEBHOOK_CALLBACK_VERIFICATION_PENDING = "webhook_callback_verification_pending"
    WEBHOOK_CALLBACK_VERIFICATION_FAILED = "webhook_callback_verification_failed"
    NOTIFICATION_FAILURES_EXCEEDED = "notification_failures_exceeded"
    AUTHORIZATION_REVOKED = "authorization_revoked"
    MODERATOR_REMOVED = "moderator_removed"
    USER_REMOVED = "user_removed"
    VERSION_REMOVED = "version_removed"
    BETA_MAINTENANCE = "beta_maintenance"
    WEBSOCKET_DISCONNECTED = "websocket_disconnected"
    WEBSOCKET_FAILED_PING_PONG = "websocket_failed_ping_pong"
    WEBSOCKET_RECEIVED_INBOUND_TRAFFIC = "websocket_received_inbound_traffic"
    WEBSOCKET_CONNECTION_UNUSED = "websocket_connection_unused"
    WEBSOCKET_INTERNAL_ERROR = "websocket_internal_error"
    WEBSOCKET_NETWORK_TIMEOUT = "websocket_network_timeout"
    WEBSOCKET_NETWORK_ERROR = "websocket_network_error"


# Statuts "sains" : tout le reste est considéré cassé
ACTIVE_STATUSES = (
    EventSubSubscriptionStatus.ENABLED,
    EventSubSubscriptionStatus.WEBHOOK_CALLBACK_VERIFICATION_PENDING,
)

_FRACTION_RE = re.compile(r"\.(\d+)")


def parse_helix_date(value: Optional[str]) -> Optional[datetime]:
    """Parse Helix RFC3339 dates (nanosecond fractions, trailing Z)."""
    if not value:
        return None
    # fromisoformat (3.10) ne veut que 3 ou 6 chiffres, Helix en envoie de 1 à 9
    value = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value).replace("Z", "+00:00")
    return datetime.fromisoformat(value)


@dataclass
class HelixEventSubSubscription:
    """
    One EventSub subscription.

    `status` is kept as the raw string sent by Twitch so that statuses added
    later do not break parsing; compare it against EventSubSubscriptionStatus.
    """
    id: str
    status: str
    type: str
    version: str
    condition: Dict[str, Any] = field(default_factory=dict)
    creation_date: Optional[datetime] = None
    transport_method: str = ""
    transport_details: Dict[str, Any] = field(default_factory=dict)
    cost: int = 0
    _api: Any = field(default=None, repr=False, compare=False)

    @classmethod
    def from_data(cls, data: Dict[str, Any], api: Any = None) -> "HelixEventSubSubscription":
        transport = dict(data.get("transport") or {})
        return cls(
            id=data["id"],
            status=data.get("status", ""),
            type=data.get("type", ""),
            version=data.get("version", ""),
            condition=dict(data.get("condition") or {}),
            creation_date=parse_helix_date(data.get("created_at")),
            transport_method=transport.pop("method", ""),
            transport_details=transport,
            cost=data.get("cost", 0),
            _api=api,
        )

    @property
    def callback_url(self) -> Optional[str]:
        return self.transport_details.get("callback")

    @property
    def session_id(self) -> Optional[str]:
        return self.transport_details.get("session_id")

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    async def unsubscribe(self) -> None:
        """Supprime cette subscription (DELETE eventsub/subscriptions?id=...)."""
        if self._api is None:
            raise HelixError(f"Subscription {self.id} is not attached to an API client")
        await self._api.delete_subscription(self.id)


@dataclass
class HelixPaginatedEventSubSubscriptionsResult(HelixPaginatedResultWithTotal[HelixEventSubSubscription]):
    total_cost: int = 0
    max_total_cost: int = 0


def create_subscriptions_result(response: Dict[str, Any], api: Any) -> HelixPaginatedEventSubSubscriptionsResult:
    return HelixPaginatedEventSubSubscriptionsResult(
        data=[HelixEventSubSubscription.from_data(item, api) for item in response.get("data", [])],
        cursor=extract_cursor(response),
        total=response.get("total", 0),
        total_cost=response.get("total_cost", 0),
        max_total_cost=response.get("max_total_cost", 0),
    )


class HelixPaginatedEventSubSubscriptionsRequest(HelixPaginatedRequestWithTotal[HelixEventSubSubscription]):
    """Lazy walk over `eventsub/subscriptions`, exposing the cost counters."""

    def __init__(self, api: Any, query: Optional[Dict[str, Any]] = None, user_id: Optional[str] = None):
        super().__init__(
            api.client,
            SUBSCRIPTIONS_URL,
            lambda data: HelixEventSubSubscription.from_data(data, api),
            query=query,
            user_id=user_id,
            page_size=api.page_size,
        )

    @property
    def total_cost(self) -> int:
        return self._last_response.get("total_cost", 0)

    @property
    def max_total_cost(self) -> int:
        return self._last_response.get("max_total_cost", 0)

