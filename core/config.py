#!/usr/bin/env python3
"""
Configuration centralisée du client Helix.

Deux sources, comme pour le bot :
- variables d'environnement (préfixe TWITCH_, fichier .env) via pydantic-settings
- config/config.yaml (section `twitch:`), prioritaire sur l'environnement
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from helixapi.api_client import HELIX_BASE_URL

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/config.yaml"


class HelixSettings(BaseSettings):
    """Configuration via variables d'environnement (TWITCH_CLIENT_ID, ...)."""

    model_config = SettingsConfigDict(env_prefix="TWITCH_", env_file=".env", extra="ignore")

    # App Twitch
    client_id: str = ""
    client_secret: str = ""
    app_access_token: str = ""

    # Helix
    api_base_url: str = HELIX_BASE_URL
    request_timeout: float = 10.0
    page_size: int = 100

    log_level: str = "INFO"

    # {user_id: {"access_token": ..., "scopes": [...], "login": ...}}
    tokens: Dict[str, Dict[str, Any]] = {}

    @field_validator("tokens", mode="before")
    @classmethod
    def stringify_user_ids(cls, value: Any) -> Any:
        # Les user_id non quotés dans le YAML arrivent en int
        if isinstance(value, dict):
            return {str(key): data for key, data in value.items()}
        return value


def load_yaml(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Charge config.yaml ({} si le fichier n'existe pas)"""
    config_file = Path(config_path)
    if not config_file.exists():
        LOGGER.warning(f"Config file {config_path} not found, using environment only")
        return {}
    with open(config_file, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config(config_path: Optional[Union[str, Path]] = DEFAULT_CONFIG_PATH) -> HelixSettings:
    """
    Build the settings: environment first, then the `twitch:` section of the
    YAML file on top.
    """
    twitch_config: Dict[str, Any] = {}
    if config_path is not None:
        twitch_config = load_yaml(config_path).get("twitch", {}) or {}

    settings = HelixSettings(**twitch_config)
    LOGGER.debug(
        f"Config chargée: base_url={settings.api_base_url}, "
        f"timeout={settings.request_timeout}s, {len(settings.tokens)} user token(s)"
    )
    return settings
