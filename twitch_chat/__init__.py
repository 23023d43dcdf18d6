"""
twitch_chat/
============

Utilitaires pour les métadonnées du chat Twitch (tags IRC).
"""

from twitch_chat.emotes import emote_offsets_from_tags, parse_emote_offsets

__all__ = ["emote_offsets_from_tags", "parse_emote_offsets"]
