"""
HelixEventSubApi - gestion des subscriptions EventSub via Helix.

Endpoints couverts (`eventsub/subscriptions`) :
- GET    : liste des subscriptions (filtres status / type / user_id)
- POST   : création d'une subscription
- DELETE : suppression d'une subscription

Ce module suppose qu'un listener EventSub (webhook ou websocket) tourne déjà
et est joignable via le transport donné ; il ne fait que gérer les
subscriptions côté Twitch.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Union

from twitchAPI.type import AuthScope

from helixapi.api_client import ApiCallOptions
from helixapi.errors import InvalidTransportError
from helixapi.eventsub.bulk_unsubscribe import (
    SubscriptionCondition,
    delete_subscriptions_with_condition,
    is_broken_subscription,
)
from helixapi.eventsub.catalog import get_topic
from helixapi.eventsub.conditions import DropEntitlementGrantFilter, extract_user_id
from helixapi.eventsub.subscription import (
    SUBSCRIPTIONS_URL,
    HelixEventSubSubscription,
    HelixPaginatedEventSubSubscriptionsRequest,
    HelixPaginatedEventSubSubscriptionsResult,
    create_subscriptions_result,
)
from helixapi.eventsub.transports import (
    TransportOptions,
    transport_method,
    transport_to_dict,
    uses_app_auth,
)
from helixapi.pagination import DEFAULT_PAGE_SIZE, HelixPagination, create_pagination_query

LOGGER = logging.getLogger(__name__)


class HelixEventSubApi:
    """
    EventSub subscription management.

    Args:
        client: `call_api` collaborator (HelixApiClient or anything exposing
            `async call_api(ApiCallOptions)`)
        page_size: `first` used by the lazy paginators
    """

    def __init__(self, client, page_size: int = DEFAULT_PAGE_SIZE):
        self.client = client
        self.page_size = page_size

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    async def _get_subscriptions_page(
        self,
        query: Dict[str, Any],
        pagination: Optional[HelixPagination],
        user_id: Optional[str] = None,
    ) -> HelixPaginatedEventSubSubscriptionsResult:
        result = await self.client.call_api(ApiCallOptions(
            url=SUBSCRIPTIONS_URL,
            query={**create_pagination_query(pagination), **query},
            user_id=user_id,
        ))
        return create_subscriptions_result(result or {}, self)

    async def get_subscriptions(
        self, pagination: Optional[HelixPagination] = None
    ) -> HelixPaginatedEventSubSubscriptionsResult:
        """Une page des subscriptions du client (token app requis côté Twitch)."""
        return await self._get_subscriptions_page({}, pagination)

    def get_subscriptions_paginated(self) -> HelixPaginatedEventSubSubscriptionsRequest:
        return HelixPaginatedEventSubSubscriptionsRequest(self)

    async def get_subscriptions_for_status(
        self, status: str, pagination: Optional[HelixPagination] = None
    ) -> HelixPaginatedEventSubSubscriptionsResult:
        return await self._get_subscriptions_page({"status": status}, pagination)

    def get_subscriptions_for_status_paginated(self, status: str) -> HelixPaginatedEventSubSubscriptionsRequest:
        return HelixPaginatedEventSubSubscriptionsRequest(self, {"status": status})

    async def get_subscriptions_for_type(
        self, type: str, pagination: Optional[HelixPagination] = None
    ) -> HelixPaginatedEventSubSubscriptionsResult:
        return await self._get_subscriptions_page({"type": type}, pagination)

    def get_subscriptions_for_type_paginated(self, type: str) -> HelixPaginatedEventSubSubscriptionsRequest:
        return HelixPaginatedEventSubSubscriptionsRequest(self, {"type": type})

    async def get_subscriptions_for_user(
        self, user: Any, pagination: Optional[HelixPagination] = None
    ) -> HelixPaginatedEventSubSubscriptionsResult:
        user_id = extract_user_id(user)
        return await self._get_subscriptions_page({"user_id": user_id}, pagination, user_id=user_id)

    def get_subscriptions_for_user_paginated(self, user: Any) -> HelixPaginatedEventSubSubscriptionsRequest:
        user_id = extract_user_id(user)
        return HelixPaginatedEventSubSubscriptionsRequest(self, {"user_id": user_id}, user_id=user_id)

    # ------------------------------------------------------------------
    # Create / delete
    # ------------------------------------------------------------------

    async def create_subscription(
        self,
        type: str,
        version: str,
        condition: Dict[str, Any],
        transport: TransportOptions,
        user: Any = None,
        required_scopes: Optional[Iterable[Union[str, AuthScope]]] = None,
        is_batched: bool = False,
    ) -> HelixEventSubSubscription:
        """
        Sends an arbitrary subscription request.

        Webhook subscriptions are made with the app token and ignore
        `required_scopes`. Every other transport needs a user context and a
        user token carrying at least one of `required_scopes`.

        Raises:
            InvalidTransportError: non-webhook transport without user context
        """
        app_auth = uses_app_auth(transport)
        if not app_auth and user is None:
            raise InvalidTransportError(
                f"Transport {transport_method(transport)} can only handle subscriptions with user context"
            )

        json_body: Dict[str, Any] = {
            "type": type,
            "version": version,
            "condition": condition,
            "transport": transport_to_dict(transport),
        }
        if is_batched:
            json_body["is_batching_enabled"] = True

        result = await self.client.call_api(ApiCallOptions(
            url=SUBSCRIPTIONS_URL,
            method="POST",
            json_body=json_body,
            scopes=None if app_auth else list(required_scopes or []) or None,
            user_id=None if user is None else extract_user_id(user),
            force_type="app" if app_auth else "user",
        ))

        subscription = HelixEventSubSubscription.from_data(result["data"][0], self)
        LOGGER.info(f"📌 Subscription {type} v{version} créée ({subscription.id}, status={subscription.status})")
        return subscription

    async def delete_subscription(self, id: str) -> None:
        await self.client.call_api(ApiCallOptions(
            url=SUBSCRIPTIONS_URL,
            method="DELETE",
            query={"id": id},
        ))
        LOGGER.debug(f"🗑️ Subscription {id} supprimée")

    async def _delete_subscriptions_with_condition(
        self, condition: Optional[SubscriptionCondition] = None
    ) -> int:
        return await delete_subscriptions_with_condition(self.get_subscriptions_paginated(), condition)

    async def delete_all_subscriptions(self) -> int:
        """Supprime *toutes* les subscriptions du client."""
        return await self._delete_subscriptions_with_condition()

    async def delete_broken_subscriptions(self) -> int:
        """Supprime les subscriptions ni `enabled` ni en attente de vérification."""
        return await self._delete_subscriptions_with_condition(is_broken_subscription)

    # ------------------------------------------------------------------
    # Catalog-driven subscribe
    # ------------------------------------------------------------------

    async def subscribe(self, topic_name: str, transport: TransportOptions, **params: Any) -> HelixEventSubSubscription:
        """
        Subscribe to a catalog topic.

        Example:
            await api.subscribe("channel_follow_v2", transport, broadcaster="123", moderator="456")

        Raises:
            UnknownTopicError: no topic with that name
            TypeError: missing / unexpected condition parameters
        """
        topic = get_topic(topic_name)
        return await self.create_subscription(
            topic.event_type,
            topic.version,
            topic.build_condition(**params),
            transport,
            topic.user_id(**params),
            topic.required_scopes,
            topic.batched,
        )

    async def subscribe_to_stream_online_events(self, broadcaster: Any, transport: TransportOptions):
        return await self.subscribe("stream_online", transport, broadcaster=broadcaster)

    async def subscribe_to_stream_offline_events(self, broadcaster: Any, transport: TransportOptions):
        return await self.subscribe("stream_offline", transport, broadcaster=broadcaster)

    async def subscribe_to_channel_follow_events_v2(self, broadcaster: Any, moderator: Any, transport: TransportOptions):
        return await self.subscribe("channel_follow_v2", transport, broadcaster=broadcaster, moderator=moderator)

    async def subscribe_to_user_update_events(self, user: Any, transport: TransportOptions, with_email: bool = False):
        topic_name = "user_update_with_email" if with_email else "user_update"
        return await self.subscribe(topic_name, transport, user=user)

    async def subscribe_to_drop_entitlement_grant_events(
        self, filter: DropEntitlementGrantFilter, transport: TransportOptions
    ):
        return await self.subscribe("drop_entitlement_grant", transport, filter=filter)
