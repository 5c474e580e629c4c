"""Allow-list / block-list checks on candidate URLs."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol, TypeVar
from urllib.parse import urlparse

if TYPE_CHECKING:
    from nexuslookup.config.schema import InternetSettings
    from nexuslookup.lookup.settings import SettingsStore


class _HasUrl(Protocol):
    url: str


R = TypeVar("R", bound=_HasUrl)


def extract_hostname(url: str) -> str | None:
    """Return the lower-cased hostname, or None when the URL cannot be parsed."""
    try:
        parsed = urlparse(url.strip())
        host = parsed.hostname
    except (AttributeError, ValueError):
        return None
    if parsed.scheme not in {"http", "https"} or not host:
        return None
    return host.rstrip(".").lower()


def is_allowed(url: str, settings: "InternetSettings") -> bool:
    """Check a URL against the blocked and allowed domain lists. Fails closed."""
    host = extract_hostname(url)
    if host is None:
        return False

    if any(blocked.lower() in host for blocked in settings.blocked_domains if blocked):
        return False

    allowed = [d.lower() for d in settings.allowed_domains if d]
    if allowed:
        return any(entry in host for entry in allowed)
    return True


class DomainPolicy:
    """Domain policy bound to a settings store, re-read on every check."""

    def __init__(self, store: "SettingsStore"):
        self.store = store

    def is_allowed(self, url: str) -> bool:
        return is_allowed(url, self.store.get())

    def filter(self, items: Iterable[R]) -> list[R]:
        """Drop items whose URL fails the policy."""
        settings = self.store.get()
        return [item for item in items if is_allowed(item.url, settings)]
