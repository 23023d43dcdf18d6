"""
Suppression en masse de subscriptions EventSub.

Les subscriptions sont lues page par page et supprimées une par une, dans
l'ordre de la pagination : on attend la fin de chaque DELETE avant de
demander l'élément suivant (jamais de DELETE en parallèle).
Toute erreur (page ou DELETE) interrompt le balayage et remonte telle quelle ;
le nombre de subscriptions déjà supprimées est alors inconnu pour l'appelant.
"""

import logging
from typing import AsyncIterable, Callable, Optional

from helixapi.eventsub.subscription import ACTIVE_STATUSES, HelixEventSubSubscription

LOGGER = logging.getLogger(__name__)

SubscriptionCondition = Callable[[HelixEventSubSubscription], bool]


def is_broken_subscription(subscription: HelixEventSubSubscription) -> bool:
    """Ni `enabled`, ni en attente de vérification du callback webhook."""
    return subscription.status not in ACTIVE_STATUSES


async def delete_subscriptions_with_condition(
    subscriptions: AsyncIterable[HelixEventSubSubscription],
    condition: Optional[SubscriptionCondition] = None,
) -> int:
    """
    Unsubscribes every record of `subscriptions` matching `condition`.

    Args:
        subscriptions: lazily paginated source of subscriptions
        condition: predicate; None means every subscription

    Returns:
        Number of subscriptions deleted
    """
    deleted = 0
    async for subscription in subscriptions:
        if condition is None or condition(subscription):
            LOGGER.debug(f"🗑️ Unsubscribe {subscription.type} ({subscription.id}, status={subscription.status})")
            await subscription.unsubscribe()
            deleted += 1

    LOGGER.info(f"✅ {deleted} subscription(s) EventSub supprimée(s)")
    return deleted
