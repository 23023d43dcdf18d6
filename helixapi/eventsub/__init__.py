"""
helixapi/eventsub/
==================

Gestion des subscriptions EventSub via Helix.

Modules:
- eventsub_api : HelixEventSubApi (list / create / delete / subscribe)
- catalog : table des topics (type, version, condition, scopes)
- bulk_unsubscribe : suppression en masse (toutes / cassées)
- subscription : modèle d'une subscription + pagination dédiée
- conditions / transports : construction du corps de la requête
"""

from helixapi.eventsub.bulk_unsubscribe import delete_subscriptions_with_condition, is_broken_subscription
from helixapi.eventsub.catalog import EVENTSUB_TOPICS, EventSubTopic, get_topic
from helixapi.eventsub.conditions import DropEntitlementGrantFilter
from helixapi.eventsub.eventsub_api import HelixEventSubApi
from helixapi.eventsub.subscription import EventSubSubscriptionStatus, HelixEventSubSubscription
from helixapi.eventsub.transports import WebhookTransport, WebSocketTransport

__all__ = [
    "DropEntitlementGrantFilter",
    "EVENTSUB_TOPICS",
    "EventSubSubscriptionStatus",
    "EventSubTopic",
    "HelixEventSubApi",
    "HelixEventSubSubscription",
    "WebSocketTransport",
    "WebhookTransport",
    "delete_subscriptions_with_condition",
    "get_topic",
    "is_broken_subscription",
]
