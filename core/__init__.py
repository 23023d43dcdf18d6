"""
Core - Utilitaires transverses (configuration)
"""

from core.config import HelixSettings, load_config

__all__ = ["HelixSettings", "load_config"]
