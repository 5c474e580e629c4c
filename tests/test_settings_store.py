import threading

import pytest
from pydantic import ValidationError

from nexuslookup.config.schema import InternetSettings
from nexuslookup.lookup.settings import SettingsStore


def test_defaults() -> None:
    settings = SettingsStore().get()

    assert settings.enabled is True
    assert settings.auto_search is False
    assert settings.max_results == 5
    assert settings.safe_search is True
    assert settings.allowed_domains == set()
    assert settings.blocked_domains == {"adult-content.com", "malware-site.com"}


def test_get_returns_defensive_copy() -> None:
    store = SettingsStore()

    copy = store.get()
    copy.blocked_domains.add("evil.example")
    copy.enabled = False

    fresh = store.get()
    assert "evil.example" not in fresh.blocked_domains
    assert fresh.enabled is True


def test_update_merges_partial_fields() -> None:
    store = SettingsStore()

    store.update({"autoSearch": True})
    updated = store.update(max_results=2)

    assert updated.auto_search is True
    assert updated.max_results == 2
    assert updated.blocked_domains == {"adult-content.com", "malware-site.com"}


def test_update_ignores_unknown_keys() -> None:
    store = SettingsStore()
    updated = store.update({"theme": "cyberpunk", "safeSearch": False})

    assert updated.safe_search is False
    assert not hasattr(updated, "theme")


def test_update_skips_none_and_coerces_lists() -> None:
    store = SettingsStore()
    updated = store.update({"maxResults": None, "allowed_domains": ["wikipedia.org", "wikipedia.org"]})

    assert updated.max_results == 5
    assert updated.allowed_domains == {"wikipedia.org"}


def test_update_rejects_uncoercible_value_without_changes() -> None:
    store = SettingsStore()

    with pytest.raises(ValidationError):
        store.update({"maxResults": "plenty", "autoSearch": True})

    settings = store.get()
    assert settings.max_results == 5
    assert settings.auto_search is False


def test_replace_swaps_whole_value() -> None:
    store = SettingsStore()
    store.replace(InternetSettings(enabled=False, allowed_domains={"wikipedia.org"}))

    settings = store.get()
    assert settings.enabled is False
    assert settings.allowed_domains == {"wikipedia.org"}


def test_concurrent_updates_do_not_lose_fields() -> None:
    store = SettingsStore()

    def toggle_auto() -> None:
        for _ in range(50):
            store.update(auto_search=True)

    def set_results() -> None:
        for i in range(50):
            store.update(max_results=i + 1)

    threads = [threading.Thread(target=toggle_auto), threading.Thread(target=set_results)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    settings = store.get()
    assert settings.auto_search is True
    assert settings.max_results == 50
