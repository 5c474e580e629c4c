"""Mutable internet settings shared by every lookup component."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any

from loguru import logger

from nexuslookup.config.schema import InternetSettings


class SettingsStore:
    """Holds the current `InternetSettings`; readers always get a copy."""

    def __init__(self, settings: InternetSettings | None = None):
        self._settings = settings.model_copy(deep=True) if settings is not None else InternetSettings()
        self._lock = threading.Lock()

    def get(self) -> InternetSettings:
        with self._lock:
            return self._settings.model_copy(deep=True)

    def update(self, partial: Mapping[str, Any] | None = None, **fields: Any) -> InternetSettings:
        """
        Merge fields over the current settings.

        Keys may be camelCase (as the settings panel sends them) or snake_case.
        Omitted fields, fields given as None and unknown keys keep the current
        value. Given values are coerced the way pydantic coerces them (lists
        become sets); a value that cannot be coerced raises `ValidationError`
        and leaves the settings untouched.
        """
        raw = {k: v for k, v in {**(partial or {}), **fields}.items() if v is not None}
        incoming = InternetSettings.model_validate(raw)
        changes = {name: getattr(incoming, name) for name in incoming.model_fields_set}

        with self._lock:
            self._settings = self._settings.model_copy(update=changes, deep=True)
            snapshot = self._settings.model_copy(deep=True)

        if changes:
            logger.debug("Internet settings updated: {}", sorted(changes))
        return snapshot

    def replace(self, settings: InternetSettings) -> None:
        """Swap in a persisted settings value supplied by a collaborator."""
        with self._lock:
            self._settings = settings.model_copy(deep=True)
