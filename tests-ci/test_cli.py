"""
Tests pour eventsub_ctl.py (commandes locales + helpers)
"""
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest

import eventsub_ctl
from helixapi.errors import MissingTokenError
from helixapi.eventsub.conditions import DropEntitlementGrantFilter
from helixapi.eventsub.transports import WebhookTransport, WebSocketTransport


@pytest.mark.unit
class TestHelpers:

    def test_parse_params(self):
        assert eventsub_ctl.parse_params(["broadcaster=123", "moderator=456"]) == {
            "broadcaster": "123", "moderator": "456",
        }
        assert eventsub_ctl.parse_params(None) == {}
        assert eventsub_ctl.parse_params(["reward_id=a=b"]) == {"reward_id": "a=b"}

    def test_parse_params_invalid(self):
        with pytest.raises(ValueError):
            eventsub_ctl.parse_params(["broadcaster"])

    def test_build_subscribe_params(self):
        assert eventsub_ctl.build_subscribe_params("stream_online", ["broadcaster=1337"]) == {"broadcaster": "1337"}

        params = eventsub_ctl.build_subscribe_params(
            "drop_entitlement_grant", ["organization_id=org-1", "campaign_id=camp-9"],
        )
        assert params == {"filter": DropEntitlementGrantFilter("org-1", campaign_id="camp-9")}

    def test_build_subscribe_params_bad_drop_filter(self):
        """Clé inconnue ou organization_id manquant -> TypeError"""
        with pytest.raises(TypeError):
            eventsub_ctl.build_subscribe_params("drop_entitlement_grant", ["filter=org1"])
        with pytest.raises(TypeError):
            eventsub_ctl.build_subscribe_params("drop_entitlement_grant", ["category_id=509658"])

    def test_build_transport(self):
        args = SimpleNamespace(session_id="sess", callback=None, secret=None)
        assert eventsub_ctl.build_transport(args) == WebSocketTransport(session_id="sess")

        args = SimpleNamespace(session_id=None, callback="https://example.com/cb", secret="abcdefghij")
        assert eventsub_ctl.build_transport(args) == WebhookTransport("https://example.com/cb", "abcdefghij")

        with pytest.raises(ValueError):
            eventsub_ctl.build_transport(SimpleNamespace(session_id=None, callback="https://x", secret=None))


@pytest.mark.unit
class TestLocalCommands:
    """Commandes sans accès réseau"""

    def test_emotes(self, capsys):
        assert eventsub_ctl.main(["emotes", "25:0-4,12-16/1902:6-10"]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output == {"25": ["0-4", "12-16"], "1902": ["6-10"]}

    def test_topics(self, capsys):
        assert eventsub_ctl.main(["topics"]) == 0
        output = capsys.readouterr().out
        assert "channel_follow_v2" in output
        assert "moderator:read:followers" in output

    def test_no_command(self, capsys):
        assert eventsub_ctl.main([]) == 1


@pytest.mark.unit
class TestApiCommands:
    """Commandes API avec un HelixEventSubApi mocké"""

    @pytest.mark.asyncio
    async def test_delete_broken(self, capsys):
        api = Mock()
        api.delete_broken_subscriptions = AsyncMock(return_value=4)

        assert await eventsub_ctl.cmd_delete_broken(api, SimpleNamespace()) == 0
        assert "4 broken subscription(s) deleted" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_subscribe(self, capsys):
        api = Mock()
        api.subscribe = AsyncMock(return_value=Mock(type="stream.online", version="1", id="abc", status="enabled"))
        args = SimpleNamespace(
            topic="stream_online", param=["broadcaster=1337"],
            session_id="sess", callback=None, secret=None,
        )

        assert await eventsub_ctl.cmd_subscribe(api, args) == 0
        api.subscribe.assert_awaited_once_with("stream_online", WebSocketTransport(session_id="sess"), broadcaster="1337")
        assert "abc" in capsys.readouterr().out

    def test_api_error_returns_1(self, tmp_path, monkeypatch):
        """Une HelixError est loggée et le code retour vaut 1"""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(eventsub_ctl, "run_api_command", Mock(side_effect=MissingTokenError("no token")))

        assert eventsub_ctl.main(["--config", str(tmp_path / "none.yaml"), "delete-all"]) == 1

    @pytest.mark.asyncio
    async def test_subscribe_drop_entitlement_grant(self, capsys):
        api = Mock()
        api.subscribe = AsyncMock(return_value=Mock(type="drop.entitlement.grant", version="1", id="d1", status="enabled"))
        args = SimpleNamespace(
            topic="drop_entitlement_grant", param=["organization_id=org-1"],
            session_id=None, callback="https://example.com/cb", secret="s3cr3t-s3cr3t",
        )

        assert await eventsub_ctl.cmd_subscribe(api, args) == 0
        api.subscribe.assert_awaited_once_with(
            "drop_entitlement_grant",
            WebhookTransport("https://example.com/cb", "s3cr3t-s3cr3t"),
            filter=DropEntitlementGrantFilter("org-1"),
        )

    @pytest.mark.parametrize("extra", [
        [],  # broadcaster manquant
        ["-p", "broadcaster=1337", "-p", "moderator=42"],  # paramètre inconnu
    ])
    def test_subscribe_bad_params_returns_1(self, tmp_path, monkeypatch, extra):
        """Paramètres de condition invalides -> erreur loggée, pas de traceback"""
        monkeypatch.chdir(tmp_path)
        argv = [
            "--config", str(tmp_path / "none.yaml"),
            "subscribe", "stream_online", "--callback", "https://example.com/cb", "--secret", "s3cr3t-s3cr3t",
        ]

        assert eventsub_ctl.main(argv + extra) == 1

    def test_subscribe_bad_drop_filter_returns_1(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        argv = [
            "--config", str(tmp_path / "none.yaml"),
            "subscribe", "drop_entitlement_grant", "--callback", "https://example.com/cb",
            "--secret", "s3cr3t-s3cr3t", "-p", "filter=org1",
        ]

        assert eventsub_ctl.main(argv) == 1
