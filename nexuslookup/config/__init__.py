"""Configuration module for nexuslookup."""

from nexuslookup.config.loader import get_config_path, load_config, save_config
from nexuslookup.config.schema import Config, InternetSettings

__all__ = ["Config", "InternetSettings", "load_config", "save_config", "get_config_path"]
