"""
Tests pour core/config.py (config.yaml + variables d'environnement)
"""
import pytest
import yaml

from core.config import HelixSettings, load_config, load_yaml
from helixapi.api_client import HELIX_BASE_URL


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ("TWITCH_CLIENT_ID", "TWITCH_APP_ACCESS_TOKEN", "TWITCH_PAGE_SIZE", "TWITCH_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    # Pas de .env du poste de dev
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.mark.unit
class TestConfig:
    """Chargement de la configuration"""

    def test_defaults(self, clean_env, tmp_path):
        settings = load_config(tmp_path / "missing.yaml")
        assert settings.api_base_url == HELIX_BASE_URL
        assert settings.request_timeout == 10.0
        assert settings.page_size == 100
        assert settings.tokens == {}

    def test_yaml_section(self, clean_env, tmp_path, mock_config):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump(mock_config), encoding="utf-8")

        settings = load_config(config_file)

        assert settings.client_id == "test_client_id_mock"
        assert settings.app_access_token == "app-token-mock"
        assert settings.request_timeout == 5.0
        assert settings.page_size == 50
        # user_id int dans le YAML -> clé string
        assert list(settings.tokens) == ["1337"]
        assert settings.tokens["1337"]["login"] == "el_serda"

    def test_environment(self, clean_env, tmp_path):
        clean_env.setenv("TWITCH_CLIENT_ID", "env-client")
        clean_env.setenv("TWITCH_PAGE_SIZE", "20")

        settings = load_config(tmp_path / "missing.yaml")

        assert settings.client_id == "env-client"
        assert settings.page_size == 20

    def test_yaml_overrides_environment(self, clean_env, tmp_path, mock_config):
        clean_env.setenv("TWITCH_CLIENT_ID", "env-client")
        clean_env.setenv("TWITCH_LOG_LEVEL", "DEBUG")
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump(mock_config), encoding="utf-8")

        settings = load_config(config_file)

        assert settings.client_id == "test_client_id_mock"
        assert settings.log_level == "DEBUG"

    def test_load_yaml_missing_and_empty(self, tmp_path):
        assert load_yaml(tmp_path / "nope.yaml") == {}
        empty = tmp_path / "empty.yaml"
        empty.write_text("", encoding="utf-8")
        assert load_yaml(empty) == {}

    def test_settings_direct(self, clean_env):
        settings = HelixSettings(client_id="abc", tokens={42: {"access_token": "t"}})
        assert settings.tokens == {"42": {"access_token": "t"}}
