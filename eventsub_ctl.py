#!/usr/bin/env python3
"""
EventSub Control CLI - Administration des subscriptions EventSub via Helix.

Commands:
    eventsub_ctl.py list [--status S] [--type T] [--user ID]  - List subscriptions
    eventsub_ctl.py subscribe TOPIC --callback URL --secret S -p broadcaster=123
    eventsub_ctl.py subscribe drop_entitlement_grant --callback URL --secret S -p organization_id=ORG
    eventsub_ctl.py delete ID                                 - Delete one subscription
    eventsub_ctl.py delete-all                                - Delete *all* subscriptions
    eventsub_ctl.py delete-broken                             - Delete broken subscriptions
    eventsub_ctl.py topics                                    - Show the topic catalog
    eventsub_ctl.py emotes "25:0-4,12-16/1902:6-10"           - Parse an IRC emotes tag

Usage:
    python eventsub_ctl.py list --status enabled --config config/config.yaml
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Tuple

from core.config import DEFAULT_CONFIG_PATH, HelixSettings, load_config
from helixapi.api_client import HelixApiClient
from helixapi.auth_manager import AuthManager
from helixapi.errors import HelixError
from helixapi.eventsub.catalog import EVENTSUB_TOPICS
from helixapi.eventsub.conditions import DropEntitlementGrantFilter
from helixapi.eventsub.eventsub_api import HelixEventSubApi
from helixapi.eventsub.transports import TransportOptions, WebhookTransport, WebSocketTransport
from twitch_chat.emotes import parse_emote_offsets

LOGGER = logging.getLogger("eventsub_ctl")


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s %(message)s",
        force=True  # Override any existing config
    )


def create_eventsub_api(settings: HelixSettings) -> Tuple[HelixApiClient, HelixEventSubApi]:
    """Build the httpx client + EventSub API from the settings."""
    auth = AuthManager(app_token=settings.app_access_token or None)
    auth.load_tokens(settings.tokens)
    client = HelixApiClient(
        settings.client_id,
        auth,
        base_url=settings.api_base_url,
        timeout=settings.request_timeout,
    )
    return client, HelixEventSubApi(client, page_size=settings.page_size)


def parse_params(raw_params: Optional[List[str]]) -> Dict[str, str]:
    """["broadcaster=123", "moderator=456"] -> {"broadcaster": "123", ...}"""
    params = {}
    for raw in raw_params or []:
        key, sep, value = raw.partition("=")
        if not sep:
            raise ValueError(f"Invalid parameter '{raw}' (expected key=value)")
        params[key] = value
    return params


def build_subscribe_params(topic: str, raw_params: Optional[List[str]]) -> Dict[str, Any]:
    """Condition parameters of `subscribe`, as keyword arguments of HelixEventSubApi.subscribe()."""
    params = parse_params(raw_params)
    if topic == "drop_entitlement_grant":
        # -p organization_id=... [-p category_id=...] [-p campaign_id=...]
        return {"filter": DropEntitlementGrantFilter(**params)}
    return params


def build_transport(args) -> TransportOptions:
    if args.session_id:
        return WebSocketTransport(session_id=args.session_id)
    if args.callback and args.secret:
        return WebhookTransport(callback=args.callback, secret=args.secret)
    raise ValueError("Either --session-id or --callback + --secret is required")


# ============================================================================
# Commands
# ============================================================================

async def cmd_list(api: HelixEventSubApi, args) -> int:
    """List subscriptions (optionally filtered)."""
    if args.status:
        request = api.get_subscriptions_for_status_paginated(args.status)
    elif args.type:
        request = api.get_subscriptions_for_type_paginated(args.type)
    elif args.user:
        request = api.get_subscriptions_for_user_paginated(args.user)
    else:
        request = api.get_subscriptions_paginated()

    subscriptions = await request.get_all()

    print("\n" + "=" * 80)
    print(f"EventSub Subscriptions ({len(subscriptions)} total, cost {request.total_cost}/{request.max_total_cost})")
    print("=" * 80)
    if subscriptions:
        print(f"   {'ID':<38} {'Type':<40} {'Status':<12}")
        print(f"   {'-' * 76}")
        for sub in subscriptions:
            print(f"   {sub.id:<38} {sub.type + ' v' + sub.version:<40} {sub.status:<12}")
    else:
        print("   (none)")
    print("=" * 80 + "\n")
    return 0


async def cmd_subscribe(api: HelixEventSubApi, args) -> int:
    subscription = await api.subscribe(args.topic, build_transport(args), **build_subscribe_params(args.topic, args.param))
    print(f"✅ {subscription.type} v{subscription.version}: {subscription.id} ({subscription.status})")
    return 0


async def cmd_delete(api: HelixEventSubApi, args) -> int:
    await api.delete_subscription(args.id)
    print(f"🗑️ Subscription {args.id} deleted")
    return 0


async def cmd_delete_all(api: HelixEventSubApi, args) -> int:
    deleted = await api.delete_all_subscriptions()
    print(f"🗑️ {deleted} subscription(s) deleted")
    return 0


async def cmd_delete_broken(api: HelixEventSubApi, args) -> int:
    deleted = await api.delete_broken_subscriptions()
    print(f"🗑️ {deleted} broken subscription(s) deleted")
    return 0


def cmd_topics(args) -> int:
    for topic in EVENTSUB_TOPICS:
        scopes = ", ".join(scope.value for scope in topic.scopes) or "-"
        print(f"   {topic.name:<38} {topic.event_type + ' v' + topic.version:<58} {scopes}")
    return 0


def cmd_emotes(args) -> int:
    print(json.dumps(parse_emote_offsets(args.raw), indent=2))
    return 0


API_COMMANDS = {
    "list": cmd_list,
    "subscribe": cmd_subscribe,
    "delete": cmd_delete,
    "delete-all": cmd_delete_all,
    "delete-broken": cmd_delete_broken,
}

LOCAL_COMMANDS = {
    "topics": cmd_topics,
    "emotes": cmd_emotes,
}


async def run_api_command(settings: HelixSettings, args) -> int:
    client, api = create_eventsub_api(settings)
    async with client:
        return await API_COMMANDS[args.command](api, args)


# ============================================================================
# Main
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="EventSub Control CLI")
    parser.add_argument("--config", type=str, default=DEFAULT_CONFIG_PATH, help="Path to config.yaml")
    parser.add_argument("--log-level", type=str, help="Override the configured log level")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    list_parser = subparsers.add_parser("list", help="List subscriptions")
    list_parser.add_argument("--status", type=str, help="Filter by status")
    list_parser.add_argument("--type", type=str, help="Filter by subscription type")
    list_parser.add_argument("--user", type=str, help="Filter by user id")

    subscribe_parser = subparsers.add_parser("subscribe", help="Subscribe to a catalog topic")
    subscribe_parser.add_argument("topic", type=str, help="Topic name (see `topics`)")
    subscribe_parser.add_argument("--callback", type=str, help="Webhook callback URL")
    subscribe_parser.add_argument("--secret", type=str, help="Webhook secret")
    subscribe_parser.add_argument("--session-id", type=str, help="EventSub WebSocket session id")
    subscribe_parser.add_argument("-p", "--param", action="append", help="Condition parameter key=value")

    delete_parser = subparsers.add_parser("delete", help="Delete one subscription")
    delete_parser.add_argument("id", type=str, help="Subscription id")

    subparsers.add_parser("delete-all", help="Delete all subscriptions")
    subparsers.add_parser("delete-broken", help="Delete subscriptions that are neither enabled nor pending")
    subparsers.add_parser("topics", help="Show the EventSub topic catalog")

    emotes_parser = subparsers.add_parser("emotes", help="Parse an IRC emotes tag")
    emotes_parser.add_argument("raw", type=str, help="Raw tag value")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command in LOCAL_COMMANDS:
        return LOCAL_COMMANDS[args.command](args)

    settings = load_config(args.config)
    setup_logging(args.log_level or settings.log_level)

    try:
        return asyncio.run(run_api_command(settings, args))
    except (HelixError, ValueError, TypeError) as e:
        LOGGER.error(f"❌ {e}")
        return 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n👋 Interrupted")
        sys.exit(0)
