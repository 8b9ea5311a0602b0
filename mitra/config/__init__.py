"""Configuration: settings model, constants and environment loading."""

from mitra.config.env import configure_logging, get_settings, load_env
from mitra.config.settings import Settings

__all__ = ["Settings", "configure_logging", "get_settings", "load_env"]
