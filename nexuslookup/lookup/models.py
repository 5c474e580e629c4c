"""Shared lookup models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, Literal, TypeVar

T = TypeVar("T")

IntentCategory = Literal["weather", "news", "price", "howto", "definition", "generic", "none"]


@dataclass(frozen=True, slots=True)
class SearchResult:
    """One retrieved or synthesized fact card."""

    title: str
    url: str
    snippet: str = ""
    timestamp: str | None = None
    simulated: bool = False


@dataclass(frozen=True, slots=True)
class WebContent:
    """Plain-text extract of a fetched page."""

    url: str
    title: str
    content: str
    timestamp: datetime
    simulated: bool = False


@dataclass(frozen=True, slots=True)
class QueryIntent:
    """Why a message warrants a lookup, computed per call."""

    category: IntentCategory
    location: str | None = None

    @property
    def wants_lookup(self) -> bool:
        return self.category != "none"


@dataclass(frozen=True, slots=True)
class WeatherReading:
    """Synthetic weather bucket for a location."""

    location: str
    condition: str
    region: str
    temp_c: int
    humidity: int
    wind_kmh: int
    us_units: bool

    @property
    def temp_f(self) -> int:
        return round(self.temp_c * 9 / 5 + 32)

    @property
    def wind_mph(self) -> int:
        return round(self.wind_kmh * 0.621371)


@dataclass(slots=True)
class Resolution(Generic[T]):
    """Outcome of a fallback chain."""

    value: T
    source: str
    simulated: bool = False
    failures: list[tuple[str, str]] = field(default_factory=list)


@dataclass(slots=True)
class LookupOutcome:
    """Text handed to the prompt assembler."""

    context: str = ""
    summary: str = ""
    cancelled: bool = False
    intent: QueryIntent = field(default_factory=lambda: QueryIntent("none"))

    @property
    def has_context(self) -> bool:
        return bool(self.context.strip())
