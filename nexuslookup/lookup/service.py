"""Internet lookup facade used by the prompt assembler and settings UI."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger

from nexuslookup.config.schema import Config, InternetSettings
from nexuslookup.lookup import formatter, intent, synthetic
from nexuslookup.lookup.errors import (
    DomainRejectedError,
    InternetDisabledError,
    LookupCancelledError,
)
from nexuslookup.lookup.location import extract_weather_location, normalize_location
from nexuslookup.lookup.models import LookupOutcome, QueryIntent, SearchResult, WebContent
from nexuslookup.lookup.policy import DomainPolicy
from nexuslookup.lookup.resolver import CancelToken, FallbackResolver, Tier
from nexuslookup.lookup.settings import SettingsStore
from nexuslookup.lookup.sources import SourceCatalog


def _non_empty(results: list[SearchResult]) -> bool:
    return bool(results)


class InternetService:
    """
    Decides whether a message needs outside facts and resolves them.

    Network tiers come from `Config.sources` unless given explicitly; the
    synthetic generator always closes each chain, so only disabled access,
    a rejected domain or a cancellation ever reach the caller as errors.
    """

    def __init__(
        self,
        store: SettingsStore | None = None,
        config: Config | None = None,
        *,
        search_tiers: Sequence[Tier[list[SearchResult]]] | None = None,
        weather_tiers: Sequence[Tier[str]] | None = None,
        fetch_tiers: Sequence[Tier[WebContent]] | None = None,
        resolver: FallbackResolver | None = None,
    ):
        self.config = config or Config()
        self.store = store or SettingsStore(self.config.internet)
        self.policy = DomainPolicy(self.store)
        self.resolver = resolver or FallbackResolver()

        catalog = SourceCatalog(self.config)
        self.search_tiers = list(search_tiers) if search_tiers is not None else catalog.search_tiers()
        self.weather_tiers = list(weather_tiers) if weather_tiers is not None else catalog.weather_tiers()
        self.fetch_tiers = list(fetch_tiers) if fetch_tiers is not None else catalog.fetch_tiers()

    # Settings

    def get_settings(self) -> InternetSettings:
        return self.store.get()

    def update_settings(self, partial: Mapping[str, Any] | None = None, **fields: Any) -> InternetSettings:
        return self.store.update(partial, **fields)

    # Classification

    def is_allowed(self, url: str) -> bool:
        return self.policy.is_allowed(url)

    def should_lookup(self, message: str) -> bool:
        return intent.should_lookup(message, self.store.get())

    def classify(self, message: str) -> QueryIntent:
        return intent.classify(message, self.store.get())

    def extract_weather_location(self, message: str) -> str | None:
        return extract_weather_location(message)

    def format_results(self, results: Sequence[SearchResult]) -> str:
        return formatter.format_results(results)

    # Resolution

    async def search_web(
        self,
        query: str,
        max_results: int | None = None,
        *,
        cancel: CancelToken | None = None,
    ) -> list[SearchResult]:
        """Search the web, falling back to synthetic results. Never raises on network faults."""
        settings = self._require_enabled()
        limit = max(1, max_results or settings.max_results)
        category = intent.classify_category(query, settings)

        resolution = await self.resolver.resolve(
            "search",
            self.search_tiers,
            lambda: synthetic.synthetic_search(query, category, limit),
            accept=_non_empty,
            cancel=cancel,
            query=query,
            count=limit,
        )

        allowed = self.policy.filter(resolution.value)
        seen: set[str] = set()
        unique: list[SearchResult] = []
        for result in allowed:
            if result.url in seen:
                continue
            seen.add(result.url)
            unique.append(result)

        logger.info("search '{}': {} result(s) via {}", query[:80], len(unique[:limit]), resolution.source)
        return unique[:limit]

    async def get_weather(self, location: str, *, cancel: CancelToken | None = None) -> str:
        """Describe current weather; simulated and labelled when no source answers."""
        self._require_enabled()
        place = normalize_location(location)

        resolution = await self.resolver.resolve(
            "weather",
            self.weather_tiers,
            lambda: synthetic.synthetic_weather(place),
            accept=bool,
            cancel=cancel,
            location=place,
        )
        return resolution.value

    async def fetch_url(self, url: str, *, cancel: CancelToken | None = None) -> WebContent:
        """Fetch a page's text; the domain policy is checked up front and again on the final URL."""
        self._require_enabled()
        if not self.policy.is_allowed(url):
            raise DomainRejectedError(url)

        resolution = await self.resolver.resolve(
            "fetch",
            self.fetch_tiers,
            lambda: synthetic.synthetic_web_content(url),
            accept=self._landed_on_allowed_host,
            cancel=cancel,
            url=url,
        )
        return resolution.value

    def _landed_on_allowed_host(self, page: WebContent) -> bool:
        # A source may follow redirects; the page URL is where it ended up.
        if self.policy.is_allowed(page.url):
            return True
        logger.warning("Discarding fetched page from disallowed host: {}", page.url)
        return False

    async def lookup(
        self,
        message: str,
        *,
        force: bool = False,
        cancel: CancelToken | None = None,
    ) -> LookupOutcome:
        """
        Build the context text for a chat prompt.

        Never raises: failures become a best-effort context string and
        cancellation is reported through `LookupOutcome.cancelled`.
        """
        settings = self.store.get()
        if not settings.enabled:
            return LookupOutcome()
        if not (force or intent.should_lookup(message, settings)):
            return LookupOutcome()

        query_intent = intent.classify(message, settings)
        if query_intent.category == "none":
            query_intent = QueryIntent("generic")
        outcome = LookupOutcome(intent=query_intent)

        try:
            if query_intent.location:
                weather = await self.get_weather(query_intent.location, cancel=cancel)
                outcome.context = f"Weather: {weather}"
                outcome.summary = f"Weather data for {query_intent.location}"
            else:
                results = await self.search_web(message, self.config.lookup.context_results, cancel=cancel)
                if results:
                    outcome.context = f"Information: {formatter.format_results(results)}"
                    outcome.summary = f"Found {len(results)} web results"
                else:
                    outcome.summary = "No web results found"
        except LookupCancelledError as e:
            logger.info("Lookup cancelled: {}", e)
            return LookupOutcome(summary="Lookup stopped", cancelled=True, intent=query_intent)
        except Exception as e:
            logger.error("Lookup failed: {}", e)
            if query_intent.location:
                outcome.context = f"Weather unavailable for {query_intent.location}."
                outcome.summary = "Weather lookup failed"
            else:
                outcome.context = "Web search unavailable."
                outcome.summary = "Web search failed"

        if self.config.lookup.include_time:
            outcome.context = f"{outcome.context} Time: {formatter.current_time_info()}".strip()
        return outcome

    def _require_enabled(self) -> InternetSettings:
        settings = self.store.get()
        if not settings.enabled:
            raise InternetDisabledError()
        return settings
