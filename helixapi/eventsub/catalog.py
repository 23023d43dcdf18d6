"""
EventSub topic catalog.

Each subscription type is a row: event type, version, how to build its
condition, the scope set the acting user needs and which parameter carries
the user context. HelixEventSubApi.subscribe() turns a row plus its
parameters into a create_subscription() call.

Source: https://dev.twitch.tv/docs/eventsub/eventsub-subscription-types/
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from twitchAPI.type import AuthScope

from helixapi.errors import UnknownTopicError
from helixapi.eventsub.conditions import (
    broadcaster_condition,
    drop_entitlement_grant_condition,
    extract_user_id,
    moderator_condition,
    reward_condition,
    single_key_condition,
)


@dataclass(frozen=True)
class EventSubTopic:
    name: str
    event_type: str
    version: str
    condition: Callable[..., Dict[str, str]]
    scopes: Tuple[AuthScope, ...] = ()
    user_param: Optional[str] = "broadcaster"  # None -> pas de contexte user
    batched: bool = False

    def build_condition(self, **params: Any) -> Dict[str, str]:
        return self.condition(**params)

    def user_id(self, **params: Any) -> Optional[str]:
        if self.user_param is None:
            return None
        return extract_user_id(params[self.user_param])

    @property
    def required_scopes(self) -> Optional[List[AuthScope]]:
        return list(self.scopes) if self.scopes else None


def _raid_from(broadcaster):
    return single_key_condition("from_broadcaster_user_id", extract_user_id(broadcaster))


def _raid_to(broadcaster):
    return single_key_condition("to_broadcaster_user_id", extract_user_id(broadcaster))


def _extension(client_id):
    return single_key_condition("extension_client_id", client_id)


def _client(client_id):
    return single_key_condition("client_id", client_id)


def _user(user):
    return single_key_condition("user_id", extract_user_id(user))


SUBSCRIPTIONS = (AuthScope.CHANNEL_READ_SUBSCRIPTIONS,)
CHARITY = (AuthScope.CHANNEL_READ_CHARITY,)
SHIELD_MODE = (AuthScope.MODERATOR_READ_SHIELD_MODE, AuthScope.MODERATOR_MANAGE_SHIELD_MODE)
REDEMPTIONS = (AuthScope.CHANNEL_READ_REDEMPTIONS, AuthScope.CHANNEL_MANAGE_REDEMPTIONS)
POLLS = (AuthScope.CHANNEL_READ_POLLS, AuthScope.CHANNEL_MANAGE_POLLS)
PREDICTIONS = (AuthScope.CHANNEL_READ_PREDICTIONS, AuthScope.CHANNEL_MANAGE_PREDICTIONS)
GOALS = (AuthScope.CHANNEL_READ_GOALS,)
HYPE_TRAIN = (AuthScope.CHANNEL_READ_HYPE_TRAIN,)
SHOUTOUTS = (AuthScope.MODERATOR_READ_SHOUTOUTS, AuthScope.MODERATOR_MANAGE_SHOUTOUTS)


EVENTSUB_TOPICS: Tuple[EventSubTopic, ...] = (
    # Stream / channel
    EventSubTopic("stream_online", "stream.online", "1", broadcaster_condition),
    EventSubTopic("stream_offline", "stream.offline", "1", broadcaster_condition),
    EventSubTopic("channel_update", "channel.update", "1", broadcaster_condition),
    # v1 réservé aux clients qui avaient une subscription avant le 17/02/2023
    EventSubTopic("channel_follow", "channel.follow", "1", broadcaster_condition),
    EventSubTopic(
        "channel_follow_v2", "channel.follow", "2", moderator_condition,
        (AuthScope.MODERATOR_READ_FOLLOWERS,), user_param="moderator",
    ),

    # Subs / bits
    EventSubTopic("channel_subscription", "channel.subscribe", "1", broadcaster_condition, SUBSCRIPTIONS),
    EventSubTopic("channel_subscription_gift", "channel.subscription.gift", "1", broadcaster_condition, SUBSCRIPTIONS),
    EventSubTopic("channel_subscription_message", "channel.subscription.message", "1", broadcaster_condition, SUBSCRIPTIONS),
    EventSubTopic("channel_subscription_end", "channel.subscription.end", "1", broadcaster_condition, SUBSCRIPTIONS),
    EventSubTopic("channel_cheer", "channel.cheer", "1", broadcaster_condition, (AuthScope.BITS_READ,)),

    # Charity
    EventSubTopic("channel_charity_campaign_start", "channel.charity_campaign.start", "1", broadcaster_condition, CHARITY),
    EventSubTopic("channel_charity_campaign_stop", "channel.charity_campaign.stop", "1", broadcaster_condition, CHARITY),
    EventSubTopic("channel_charity_donation", "channel.charity_campaign.donate", "1", broadcaster_condition, CHARITY),
    EventSubTopic("channel_charity_campaign_progress", "channel.charity_campaign.progress", "1", broadcaster_condition, CHARITY),

    # Moderation
    EventSubTopic("channel_ban", "channel.ban", "1", broadcaster_condition, (AuthScope.CHANNEL_MODERATE,)),
    EventSubTopic("channel_unban", "channel.unban", "1", broadcaster_condition, (AuthScope.CHANNEL_MODERATE,)),
    EventSubTopic(
        "channel_shield_mode_begin", "channel.shield_mode.begin", "1", moderator_condition,
        SHIELD_MODE,
    ),
    EventSubTopic(
        "channel_shield_mode_end", "channel.shield_mode.end", "1", moderator_condition,
        SHIELD_MODE,
    ),
    EventSubTopic("channel_moderator_add", "channel.moderator.add", "1", broadcaster_condition, (AuthScope.MODERATION_READ,)),
    EventSubTopic("channel_moderator_remove", "channel.moderator.remove", "1", broadcaster_condition, (AuthScope.MODERATION_READ,)),

    # Raids
    EventSubTopic("channel_raid_from", "channel.raid", "1", _raid_from),
    EventSubTopic("channel_raid_to", "channel.raid", "1", _raid_to),

    # Channel points
    EventSubTopic("channel_reward_add", "channel.channel_points_custom_reward.add", "1", broadcaster_condition, REDEMPTIONS),
    EventSubTopic("channel_reward_update", "channel.channel_points_custom_reward.update", "1", broadcaster_condition, REDEMPTIONS),
    EventSubTopic("channel_reward_update_for_reward", "channel.channel_points_custom_reward.update", "1", reward_condition, REDEMPTIONS),
    EventSubTopic("channel_reward_remove", "channel.channel_points_custom_reward.remove", "1", broadcaster_condition, REDEMPTIONS),
    EventSubTopic("channel_reward_remove_for_reward", "channel.channel_points_custom_reward.remove", "1", reward_condition, REDEMPTIONS),
    EventSubTopic(
        "channel_redemption_add", "channel.channel_points_custom_reward_redemption.add", "1",
        broadcaster_condition, REDEMPTIONS,
    ),
    EventSubTopic(
        "channel_redemption_add_for_reward", "channel.channel_points_custom_reward_redemption.add", "1",
        reward_condition, REDEMPTIONS,
    ),
    EventSubTopic(
        "channel_redemption_update", "channel.channel_points_custom_reward_redemption.update", "1",
        broadcaster_condition, REDEMPTIONS,
    ),
    EventSubTopic(
        "channel_redemption_update_for_reward", "channel.channel_points_custom_reward_redemption.update", "1",
        reward_condition, REDEMPTIONS,
    ),

    # Polls / predictions
    EventSubTopic("channel_poll_begin", "channel.poll.begin", "1", broadcaster_condition, POLLS),
    EventSubTopic("channel_poll_progress", "channel.poll.progress", "1", broadcaster_condition, POLLS),
    EventSubTopic("channel_poll_end", "channel.poll.end", "1", broadcaster_condition, POLLS),
    EventSubTopic("channel_prediction_begin", "channel.prediction.begin", "1", broadcaster_condition, PREDICTIONS),
    EventSubTopic("channel_prediction_progress", "channel.prediction.progress", "1", broadcaster_condition, PREDICTIONS),
    EventSubTopic("channel_prediction_lock", "channel.prediction.lock", "1", broadcaster_condition, PREDICTIONS),
    EventSubTopic("channel_prediction_end", "channel.prediction.end", "1", broadcaster_condition, PREDICTIONS),

    # Goals / hype train
    EventSubTopic("channel_goal_begin", "channel.goal.begin", "1", broadcaster_condition, GOALS),
    EventSubTopic("channel_goal_progress", "channel.goal.progress", "1", broadcaster_condition, GOALS),
    EventSubTopic("channel_goal_end", "channel.goal.end", "1", broadcaster_condition, GOALS),
    EventSubTopic("channel_hype_train_begin", "channel.hype_train.begin", "1", broadcaster_condition, HYPE_TRAIN),
    EventSubTopic("channel_hype_train_progress", "channel.hype_train.progress", "1", broadcaster_condition, HYPE_TRAIN),
    EventSubTopic("channel_hype_train_end", "channel.hype_train.end", "1", broadcaster_condition, HYPE_TRAIN),

    # Shoutouts
    EventSubTopic(
        "channel_shoutout_create", "channel.shoutout.create", "1", moderator_condition,
        SHOUTOUTS,
    ),
    EventSubTopic(
        "channel_shoutout_receive", "channel.shoutout.receive", "1", moderator_condition,
        SHOUTOUTS,
    ),

    # App-level topics (webhook only, pas de contexte user)
    EventSubTopic("extension_bits_transaction_create", "extension.bits_transaction.create", "1", _extension, user_param=None),
    EventSubTopic("user_authorization_grant", "user.authorization.grant", "1", _client, user_param=None),
    EventSubTopic("user_authorization_revoke", "user.authorization.revoke", "1", _client, user_param=None),
    EventSubTopic(
        "drop_entitlement_grant", "drop.entitlement.grant", "1", drop_entitlement_grant_condition,
        user_param=None, batched=True,
    ),

    # User
    EventSubTopic("user_update", "user.update", "1", _user, user_param="user"),
    # Email ajouté aux notifications (websocket uniquement)
    EventSubTopic("user_update_with_email", "user.update", "1", _user, (AuthScope.USER_READ_EMAIL,), user_param="user"),
)

TOPICS_BY_NAME: Dict[str, EventSubTopic] = {topic.name: topic for topic in EVENTSUB_TOPICS}


def get_topic(name: str) -> EventSubTopic:
    try:
        return TOPICS_BY_NAME[name]
    except KeyError:
        raise UnknownTopicError(f"Unknown EventSub topic '{name}'") from None
