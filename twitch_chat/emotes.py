"""
Parsing du tag IRC `emotes`.

Format: "<emote_id>:<start>-<end>,<start>-<end>/<emote_id>:<start>-<end>"
ex: "25:0-4,12-16/1902:6-10"

Les placements restent des strings brutes ("0-4") : ils ne sont ni découpés
ni validés ici. Les entrées mal formées sont ignorées sans erreur, le tag
venant du chat n'est pas fiable.
"""

from typing import Dict, List, Mapping, Optional

EmoteOffsets = Dict[str, List[str]]


def parse_emote_offsets(emotes: Optional[str]) -> EmoteOffsets:
    """
    Parse le tag `emotes` en {emote_id: [placements]}.

    - tag absent ou vide -> {}
    - entrée sans ':' ou sans placements ("25", "25:") -> ignorée
    - emote_id en double -> la dernière occurrence gagne
    """
    if not emotes:
        return {}

    offsets: EmoteOffsets = {}
    for emote in emotes.split("/"):
        # Au plus 2 morceaux : tout ce qui suit un second ':' est ignoré
        parts = emote.split(":")[:2]
        if len(parts) < 2 or not parts[1]:
            continue
        emote_id, placements = parts
        offsets[emote_id] = placements.split(",")

    return offsets


def emote_offsets_from_tags(tags: Mapping[str, Optional[str]]) -> EmoteOffsets:
    """Raccourci pour un dict de tags IRC (pydle, twitchAPI, ...)."""
    return parse_emote_offsets(tags.get("emotes"))
