"""
Tests pour twitch_chat/emotes.py (parsing du tag IRC `emotes`)
"""
import pytest

from twitch_chat.emotes import emote_offsets_from_tags, parse_emote_offsets


@pytest.mark.unit
class TestParseEmoteOffsets:
    """Cas limites du parsing des offsets d'emotes"""

    @pytest.mark.parametrize("raw", [None, ""])
    def test_absent_or_empty(self, raw):
        """Tag absent ou vide -> dict vide"""
        assert parse_emote_offsets(raw) == {}

    def test_single_emote_multiple_placements(self):
        assert parse_emote_offsets("25:0-4,12-16") == {"25": ["0-4", "12-16"]}

    def test_multiple_emotes(self):
        assert parse_emote_offsets("25:0-4/1902:6-10") == {"25": ["0-4"], "1902": ["6-10"]}

    def test_full_scenario(self):
        result = parse_emote_offsets("25:0-4,12-16/1902:6-10")
        assert result == {"25": ["0-4", "12-16"], "1902": ["6-10"]}
        assert list(result) == ["25", "1902"]

    def test_entry_without_colon_is_dropped(self):
        """Entrée sans ':' ignorée"""
        assert parse_emote_offsets("25") == {}

    def test_entry_with_empty_placements_is_dropped(self):
        """'25:' -> placements vides -> entrée ignorée"""
        assert parse_emote_offsets("25:") == {}

    def test_malformed_entry_does_not_affect_siblings(self):
        """Une entrée cassée n'empêche pas de lire les autres"""
        result = parse_emote_offsets("25:0-4/garbage/1902:6-10/33:")
        assert result == {"25": ["0-4"], "1902": ["6-10"]}

    def test_duplicate_emote_last_wins(self):
        assert parse_emote_offsets("25:0-4/25:6-10") == {"25": ["6-10"]}

    def test_duplicate_keeps_first_position(self):
        """Le doublon écrase la valeur mais garde l'ordre d'insertion initial"""
        result = parse_emote_offsets("25:0-4/1902:5-9/25:10-14")
        assert list(result) == ["25", "1902"]
        assert result["25"] == ["10-14"]

    def test_placements_are_not_validated(self):
        """Les placements sont des strings opaques"""
        assert parse_emote_offsets("emotesv2_abc:x-y,,7") == {"emotesv2_abc": ["x-y", "", "7"]}

    def test_only_first_two_colon_parts_are_used(self):
        """Au-delà du second ':' tout est ignoré"""
        assert parse_emote_offsets("25:0-4:junk") == {"25": ["0-4"]}

    def test_pure_and_repeatable(self):
        """Deux appels -> résultats égaux mais instances distinctes"""
        raw = "25:0-4,12-16/1902:6-10"
        first = parse_emote_offsets(raw)
        second = parse_emote_offsets(raw)
        assert first == second
        assert first is not second
        first["25"].append("99-100")
        assert parse_emote_offsets(raw)["25"] == ["0-4", "12-16"]

    def test_from_tags(self):
        assert emote_offsets_from_tags({"emotes": "25:0-4"}) == {"25": ["0-4"]}
        assert emote_offsets_from_tags({"display-name": "el_serda"}) == {}
