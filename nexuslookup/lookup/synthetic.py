"""Deterministic last-resort results, seeded by the input text.

Every value produced here is clearly labelled as simulated so callers and
tests can always tell it apart from real data.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from urllib.parse import quote, urlparse

from nexuslookup.lookup.models import IntentCategory, SearchResult, WeatherReading, WebContent

SIMULATED_NOTICE = "*Simulated data - real-time sources are currently unavailable.*"

WEATHER_CONDITIONS: tuple[str, ...] = (
    "sunny and clear",
    "partly cloudy",
    "mostly cloudy",
    "light rain",
    "overcast",
    "foggy",
    "scattered showers",
)

DEFAULT_RANGE_C = (15, 25)

# First match wins; ranges are inclusive, in Celsius.
REGION_RANGES: tuple[tuple[str, re.Pattern[str], tuple[int, int]], ...] = (
    ("florida", re.compile(r"\b(?:florida|fl|miami|orlando|tampa)\b", re.I), (20, 35)),
    ("alaska", re.compile(r"\b(?:alaska|ak|anchorage|fairbanks|juneau)\b", re.I), (-10, 10)),
    ("california", re.compile(r"\b(?:california|ca|los angeles|san francisco)\b", re.I), (18, 28)),
    ("pennsylvania", re.compile(r"\b(?:pennsylvania|pa|trevose|philadelphia)\b", re.I), (-5, 8)),
)

_US_STATE_SUFFIX = re.compile(r",\s*[A-Z]{2}$", re.I)

_SEARCH_TEMPLATES: dict[IntentCategory, tuple[tuple[str, str, str], ...]] = {
    "weather": (
        ("Weather forecast for {q}", "https://weather.example.com/forecast/{slug}",
         "Hourly and ten-day forecast covering {q}."),
        ("{q} - current conditions", "https://weather.example.com/now/{slug}",
         "Temperature, humidity and wind readings for {q}."),
        ("Climate overview: {q}", "https://en.wikipedia.org/wiki/{slug}",
         "Seasonal climate background relevant to {q}."),
    ),
    "news": (
        ("Latest news about {q}", "https://news.example.com/search?q={slug}",
         "Recent news articles and updates related to {q}."),
        ("{q} - live updates", "https://news.example.com/live/{slug}",
         "Running coverage and timeline of developments on {q}."),
        ("{q} - Wikipedia", "https://en.wikipedia.org/wiki/{slug}",
         "Background information about {q} from Wikipedia, the free encyclopedia."),
    ),
    "howto": (
        ("How to {q}", "https://howto.example.com/{slug}",
         "Step-by-step guide and tutorials for {q}."),
        ("{q} - community answers", "https://forum.example.com/topic/{slug}",
         "Community discussions and worked examples about {q}."),
        ("{q} explained", "https://research.example.com/{slug}",
         "An overview of the approaches commonly used for {q}."),
    ),
    "definition": (
        ("{q} - Wikipedia", "https://en.wikipedia.org/wiki/{slug}",
         "Comprehensive information about {q} from Wikipedia, the free encyclopedia."),
        ("Definition of {q}", "https://dictionary.example.com/define/{slug}",
         "Meaning, usage and related terms for {q}."),
        ("{q} - Research and Analysis", "https://research.example.com/{slug}",
         "In-depth research and analysis on {q} with expert insights."),
    ),
    "price": (
        ("{q} - price comparison", "https://prices.example.com/compare/{slug}",
         "Current listed prices for {q} across several retailers."),
        ("{q} market data", "https://markets.example.com/quote/{slug}",
         "Quotes, price history and trading volume for {q}."),
        ("Is {q} worth it?", "https://forum.example.com/topic/{slug}",
         "Buyer discussions about value and pricing of {q}."),
    ),
    "generic": (
        ("{q} - Wikipedia", "https://en.wikipedia.org/wiki/{slug}",
         "Comprehensive information about {q} from Wikipedia, the free encyclopedia."),
        ("Latest news about {q}", "https://news.example.com/search?q={slug}",
         "Recent news articles and updates related to {q}."),
        ("{q} - Research and Analysis", "https://research.example.com/{slug}",
         "In-depth research and analysis on {q} with expert insights."),
        ("{q} - Community Discussion", "https://forum.example.com/topic/{slug}",
         "Community discussions and user-generated content about {q}."),
    ),
}


def text_hash(text: str) -> int:
    """Sum of code points; stable across processes, unlike hash()."""
    return sum(ord(ch) for ch in text)


def region_for(location: str) -> tuple[str, tuple[int, int]]:
    for region, pattern, temp_range in REGION_RANGES:
        if pattern.search(location):
            return region, temp_range
    return "default", DEFAULT_RANGE_C


def uses_us_units(location: str) -> bool:
    return bool(_US_STATE_SUFFIX.search(location.strip()))


def synthetic_weather_reading(location: str) -> WeatherReading:
    """Pick condition and numbers for a location; same input, same reading."""
    seed = text_hash(location)
    region, (low, high) = region_for(location)
    return WeatherReading(
        location=location,
        condition=WEATHER_CONDITIONS[seed % len(WEATHER_CONDITIONS)],
        region=region,
        temp_c=low + seed % (high - low + 1),
        humidity=40 + (seed // 7) % 41,
        wind_kmh=5 + (seed // 11) % 20,
        us_units=uses_us_units(location),
    )


def describe_weather(reading: WeatherReading) -> str:
    if reading.us_units:
        return (
            f"Current weather in {reading.location}: {reading.condition}, {reading.temp_f}°F. "
            f"Humidity: {reading.humidity}%, Wind: {reading.wind_mph} mph."
        )
    return (
        f"Current weather in {reading.location}: {reading.condition}, {reading.temp_c}°C. "
        f"Humidity: {reading.humidity}%, Wind: {reading.wind_kmh} km/h."
    )


def synthetic_weather(location: str) -> str:
    return f"{describe_weather(synthetic_weather_reading(location))} {SIMULATED_NOTICE}"


def synthetic_search(query: str, category: IntentCategory = "generic", max_results: int = 4) -> list[SearchResult]:
    """Produce 2-4 templated results for a query, varied by intent category."""
    topic = " ".join(query.split()) or "this topic"
    templates = _SEARCH_TEMPLATES.get(category) or _SEARCH_TEMPLATES["generic"]
    count = min(len(templates), 2 + text_hash(topic) % 3, max(1, max_results))
    slug = quote(topic.replace(" ", "_"), safe="_")
    stamp = datetime.now(timezone.utc).isoformat()

    return [
        SearchResult(
            title=title.format(q=topic),
            url=url.format(slug=slug),
            snippet=f"{snippet.format(q=topic)} {SIMULATED_NOTICE}",
            timestamp=stamp,
            simulated=True,
        )
        for title, url, snippet in templates[:count]
    ]


def synthetic_web_content(url: str) -> WebContent:
    host = urlparse(url).hostname or url
    return WebContent(
        url=url,
        title=f"Content from {host}",
        content=(
            f"The page at {url} could not be retrieved, so no extracted text is available. "
            f"{SIMULATED_NOTICE}"
        ),
        timestamp=datetime.now(timezone.utc),
        simulated=True,
    )
