import copy
import json

from nexuslookup.config.loader import _migrate_config, load_config, save_config
from nexuslookup.config.schema import Config


def test_migrate_legacy_flat_settings_into_internet_section() -> None:
    raw = {
        "enabled": False,
        "autoSearch": True,
        "blockedDomains": ["spam.example"],
    }

    migrated = _migrate_config(copy.deepcopy(raw))

    assert "enabled" not in migrated
    assert migrated["internet"]["enabled"] is False
    assert migrated["internet"]["autoSearch"] is True
    assert migrated["internet"]["blockedDomains"] == ["spam.example"]


def test_migrate_does_not_override_new_internet_section() -> None:
    raw = {
        "autoSearch": True,
        "internet": {"autoSearch": False},
    }

    migrated = _migrate_config(copy.deepcopy(raw))
    assert migrated["internet"]["autoSearch"] is False


def test_migrate_fills_default_provider_base_urls() -> None:
    raw = {
        "sources": {
            "search": {
                "providers": {
                    "wikipedia": {"baseUrl": ""},
                    "duckduckgo": {"baseUrl": "https://ddg.mirror.example/"},
                }
            }
        }
    }

    migrated = _migrate_config(copy.deepcopy(raw))
    sources = migrated["sources"]
    assert sources["search"]["providers"]["wikipedia"]["baseUrl"] == (
        "https://en.wikipedia.org/w/rest.php/v1/search/page"
    )
    assert sources["search"]["providers"]["duckduckgo"]["baseUrl"] == "https://ddg.mirror.example/"
    assert sources["weather"]["providers"]["openMeteo"]["baseUrl"] == "https://api.open-meteo.com/v1/forecast"
    assert sources["fetch"]["providers"]["allorigins"]["baseUrl"] == "https://api.allorigins.win/get"


def test_migrate_keeps_snake_case_provider_urls() -> None:
    raw = {
        "sources": {
            "search": {"providers": {"wikipedia": {"base_url": "https://mirror.local/search"}}},
            "weather": {"providers": {"open_meteo": {"base_url": "https://meteo.local/v1/forecast"}}},
        }
    }

    migrated = _migrate_config(copy.deepcopy(raw))
    config = Config.model_validate(migrated)

    assert "baseUrl" not in migrated["sources"]["search"]["providers"]["wikipedia"]
    assert "openMeteo" not in migrated["sources"]["weather"]["providers"]
    assert config.sources.search.providers.wikipedia.base_url == "https://mirror.local/search"
    assert config.sources.weather.providers.open_meteo.base_url == "https://meteo.local/v1/forecast"
    assert config.sources.weather.providers.wttr.base_url == "https://wttr.in"


def test_migrate_legacy_snake_case_settings() -> None:
    migrated = _migrate_config({"auto_search": True, "internet": {"max_results": 3}, "max_results": 9})
    config = Config.model_validate(migrated)

    assert config.internet.auto_search is True
    assert config.internet.max_results == 3


def test_config_roundtrip_with_camel_case() -> None:
    config = Config()
    data = config.model_dump(mode="json", by_alias=True)
    reloaded = Config.model_validate(data)

    assert "autoSearch" in data["internet"]
    assert reloaded.internet.blocked_domains == config.internet.blocked_domains
    assert reloaded.sources.weather.order == ["wttr", "open_meteo"]


def test_load_config_from_legacy_file(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"autoSearch": True, "maxResults": 2}), encoding="utf-8")

    config = load_config(path)

    assert config.internet.auto_search is True
    assert config.internet.max_results == 2
    assert config.sources.search.providers.wikipedia.base_url.startswith("https://en.wikipedia.org")


def test_load_config_invalid_json_uses_defaults(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    config = load_config(path)
    assert config == Config()


def test_save_then_load_preserves_settings(tmp_path) -> None:
    path = tmp_path / "nested" / "config.json"
    config = Config()
    config.internet.allowed_domains = {"wikipedia.org"}
    config.lookup.context_results = 5

    save_config(config, path)
    reloaded = load_config(path)

    assert reloaded.internet.allowed_domains == {"wikipedia.org"}
    assert reloaded.lookup.context_results == 5
    assert "contextResults" in json.loads(path.read_text(encoding="utf-8"))["lookup"]
