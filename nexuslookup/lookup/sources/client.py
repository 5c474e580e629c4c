"""Build the ordered network tiers from configuration."""

from collections.abc import Callable
from functools import partial
from typing import TYPE_CHECKING, Any, Literal

from nexuslookup.config.schema import DEFAULT_BASE_URLS
from nexuslookup.lookup.models import SearchResult, WebContent
from nexuslookup.lookup.resolver import Tier
from nexuslookup.lookup.sources.duckduckgo import search_duckduckgo
from nexuslookup.lookup.sources.fetch import fetch_direct, fetch_via_proxy
from nexuslookup.lookup.sources.open_meteo import weather_open_meteo
from nexuslookup.lookup.sources.wikipedia import search_wikipedia
from nexuslookup.lookup.sources.wttr import weather_wttr

if TYPE_CHECKING:
    from nexuslookup.config.schema import Config, SourceConfig

SearchProvider = Literal["wikipedia", "duckduckgo"]
WeatherProvider = Literal["wttr", "open_meteo"]
FetchProvider = Literal["direct", "allorigins"]


class SourceCatalog:
    """Provider dispatcher for the search, weather and fetch chains."""

    _SEARCHERS: dict[SearchProvider, Callable[..., Any]] = {
        "wikipedia": search_wikipedia,
        "duckduckgo": search_duckduckgo,
    }
    _WEATHER: dict[WeatherProvider, Callable[..., Any]] = {
        "wttr": weather_wttr,
        "open_meteo": weather_open_meteo,
    }
    _FETCHERS: dict[FetchProvider, Callable[..., Any]] = {
        "direct": fetch_direct,
        "allorigins": fetch_via_proxy,
    }

    def __init__(self, config: "Config | None" = None):
        from nexuslookup.config.schema import Config

        self.config = config or Config()

    def search_tiers(self) -> list[Tier[list[SearchResult]]]:
        cfg = self.config.sources.search
        tiers: list[Tier[list[SearchResult]]] = []
        for name in self._check_order(cfg.order, self._SEARCHERS, "search"):
            provider_cfg: "SourceConfig" = getattr(cfg.providers, name)
            run = partial(
                self._SEARCHERS[name],
                base_url=self._base_url(name, provider_cfg),
                user_agent=self.config.user_agent,
                timeout=provider_cfg.timeout,
            )
            tiers.append(Tier(name=name, run=run, timeout=provider_cfg.timeout))
        return tiers

    def weather_tiers(self) -> list[Tier[str]]:
        cfg = self.config.sources.weather
        tiers: list[Tier[str]] = []
        for name in self._check_order(cfg.order, self._WEATHER, "weather"):
            provider_cfg: "SourceConfig" = getattr(cfg.providers, name)
            extra: dict[str, Any] = {}
            if name == "open_meteo":
                extra["geocoding_url"] = self._base_url("geocoding", cfg.providers.geocoding)
            run = partial(
                self._WEATHER[name],
                base_url=self._base_url(name, provider_cfg),
                user_agent=self.config.user_agent,
                timeout=provider_cfg.timeout,
                **extra,
            )
            # Open-Meteo makes two requests; give the chain room for both.
            budget = provider_cfg.timeout * (2 if name == "open_meteo" else 1)
            tiers.append(Tier(name=name, run=run, timeout=budget))
        return tiers

    def fetch_tiers(self) -> list[Tier[WebContent]]:
        cfg = self.config.sources.fetch
        tiers: list[Tier[WebContent]] = []
        for name in self._check_order(cfg.order, self._FETCHERS, "fetch"):
            provider_cfg: "SourceConfig" = getattr(cfg.providers, name)
            kwargs: dict[str, Any] = {
                "user_agent": self.config.user_agent,
                "max_chars": cfg.max_chars,
                "timeout": provider_cfg.timeout,
            }
            if name != "direct":
                kwargs["base_url"] = self._base_url(name, provider_cfg)
            tiers.append(Tier(name=name, run=partial(self._FETCHERS[name], **kwargs), timeout=provider_cfg.timeout))
        return tiers

    @staticmethod
    def _check_order(order: list[str], known: dict[str, Any], capability: str) -> list[str]:
        names = [(name or "").strip().lower() for name in order]
        unknown = [name for name in names if name not in known]
        if unknown:
            raise ValueError(f"unknown {capability} provider: {', '.join(unknown)}")
        return list(dict.fromkeys(names))

    @staticmethod
    def _base_url(name: str, provider_cfg: "SourceConfig") -> str:
        return provider_cfg.base_url or DEFAULT_BASE_URLS[name]
