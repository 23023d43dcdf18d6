"""
Builders de conditions EventSub.

Une condition indique à quelle entité (broadcaster, modérateur, reward, ...)
une subscription s'applique. Les ids sont toujours envoyés en string.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


def extract_user_id(user: Any) -> str:
    """Accepts a raw id (str/int) or any object with an `id` attribute."""
    if isinstance(user, (str, int)):
        return str(user)
    return str(user.id)


def single_key_condition(key: str, value: Any) -> Dict[str, str]:
    return {key: str(value)}


def broadcaster_condition(broadcaster: Any) -> Dict[str, str]:
    return {"broadcaster_user_id": extract_user_id(broadcaster)}


def moderator_condition(broadcaster: Any, moderator: Any) -> Dict[str, str]:
    return {
        "broadcaster_user_id": extract_user_id(broadcaster),
        "moderator_user_id": extract_user_id(moderator),
    }


def reward_condition(broadcaster: Any, reward_id: str) -> Dict[str, str]:
    return {
        "broadcaster_user_id": extract_user_id(broadcaster),
        "reward_id": reward_id,
    }


@dataclass
class DropEntitlementGrantFilter:
    organization_id: str
    category_id: Optional[str] = None
    campaign_id: Optional[str] = None


def drop_entitlement_grant_condition(filter: DropEntitlementGrantFilter) -> Dict[str, str]:
    condition = {"organization_id": filter.organization_id}
    if filter.category_id is not None:
        condition["category_id"] = filter.category_id
    if filter.campaign_id is not None:
        condition["campaign_id"] = filter.campaign_id
    return condition
