"""Configuration loading utilities."""

import json
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic.alias_generators import to_camel

from nexuslookup.config.schema import DEFAULT_BASE_URLS, Config

# Fields the browser settings panel persisted at the top level before the
# `internet` section existed.
_LEGACY_SETTINGS_FIELDS = (
    "enabled",
    "auto_search",
    "max_results",
    "safe_search",
    "allowed_domains",
    "blocked_domains",
)

_PROVIDER_SECTIONS: dict[str, tuple[str, ...]] = {
    "search": ("wikipedia", "duckduckgo"),
    "weather": ("wttr", "open_meteo", "geocoding"),
    "fetch": ("allorigins",),
}


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".nexuslookup" / "config.json"


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from file or create default.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Loaded configuration object.
    """
    path = config_path or get_config_path()

    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            data = _migrate_config(data)
            return Config.model_validate(data)
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning("Failed to load config from {}: {}", path, e)
            logger.warning("Using default configuration.")

    return Config()


def save_config(config: Config, config_path: Path | None = None) -> None:
    """
    Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Optional path to save to. Uses default if not provided.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", by_alias=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def _find_key(data: dict, name: str) -> str | None:
    """Return whichever spelling of a snake_case field `data` uses, if any."""
    for key in (to_camel(name), name):
        if key in data:
            return key
    return None


def _section(data: dict, name: str) -> dict:
    key = _find_key(data, name)
    if key is None:
        key = to_camel(name)
        data[key] = {}
    return data[key]


def _migrate_config(data: dict[str, Any]) -> dict[str, Any]:
    """Migrate old config formats to current."""
    # Move legacy top-level settings -> internet.*
    internet_cfg = _section(data, "internet")
    for name in _LEGACY_SETTINGS_FIELDS:
        key = _find_key(data, name)
        if key is None:
            continue
        value = data.pop(key)
        if _find_key(internet_cfg, name) is None:
            internet_cfg[key] = value

    # Fill default provider base URLs when missing/empty
    sources_cfg = _section(data, "sources")
    for section, names in _PROVIDER_SECTIONS.items():
        providers_cfg = _section(_section(sources_cfg, section), "providers")
        for name in names:
            provider_cfg = _section(providers_cfg, name)
            if not any(provider_cfg.get(key) for key in ("baseUrl", "base_url")):
                provider_cfg[_find_key(provider_cfg, "base_url") or "baseUrl"] = DEFAULT_BASE_URLS[name]

    return data
