"""Configuration schema using Pydantic."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_BLOCKED_DOMAINS = {"adult-content.com", "malware-site.com"}

DEFAULT_BASE_URLS: dict[str, str] = {
    "wikipedia": "https://en.wikipedia.org/w/rest.php/v1/search/page",
    "duckduckgo": "https://api.duckduckgo.com/",
    "wttr": "https://wttr.in",
    "open_meteo": "https://api.open-meteo.com/v1/forecast",
    "geocoding": "https://nominatim.openstreetmap.org/search",
    "allorigins": "https://api.allorigins.win/get",
}


class Base(BaseModel):
    """Base model accepting both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class InternetSettings(Base):
    """User-facing switches for internet access."""

    enabled: bool = True
    auto_search: bool = False
    max_results: int = 5
    safe_search: bool = True
    allowed_domains: set[str] = Field(default_factory=set)
    blocked_domains: set[str] = Field(default_factory=lambda: set(DEFAULT_BLOCKED_DOMAINS))


class SourceConfig(Base):
    """One network provider."""

    base_url: str = ""
    timeout: float = 8.0


class SearchProvidersConfig(Base):
    wikipedia: SourceConfig = Field(default_factory=SourceConfig)
    duckduckgo: SourceConfig = Field(default_factory=SourceConfig)


class SearchSourcesConfig(Base):
    """Web search tiers, attempted in `order` before synthesis."""

    order: list[str] = Field(default_factory=lambda: ["wikipedia", "duckduckgo"])
    providers: SearchProvidersConfig = Field(default_factory=SearchProvidersConfig)


class WeatherProvidersConfig(Base):
    wttr: SourceConfig = Field(default_factory=SourceConfig)
    open_meteo: SourceConfig = Field(default_factory=SourceConfig)
    geocoding: SourceConfig = Field(default_factory=SourceConfig)


class WeatherSourcesConfig(Base):
    """Weather tiers, attempted in `order` before synthesis."""

    order: list[str] = Field(default_factory=lambda: ["wttr", "open_meteo"])
    providers: WeatherProvidersConfig = Field(default_factory=WeatherProvidersConfig)


class FetchProvidersConfig(Base):
    direct: SourceConfig = Field(default_factory=lambda: SourceConfig(timeout=10.0))
    allorigins: SourceConfig = Field(default_factory=SourceConfig)


class FetchSourcesConfig(Base):
    """URL fetch tiers, attempted in `order` before the placeholder page."""

    order: list[str] = Field(default_factory=lambda: ["direct", "allorigins"])
    providers: FetchProvidersConfig = Field(default_factory=FetchProvidersConfig)
    max_chars: int = 2000


class SourcesConfig(Base):
    search: SearchSourcesConfig = Field(default_factory=SearchSourcesConfig)
    weather: WeatherSourcesConfig = Field(default_factory=WeatherSourcesConfig)
    fetch: FetchSourcesConfig = Field(default_factory=FetchSourcesConfig)


class LookupConfig(Base):
    """How lookups are summarised for the prompt assembler."""

    context_results: int = 3
    include_time: bool = True


class Config(Base):
    """Root configuration for nexuslookup."""

    internet: InternetSettings = Field(default_factory=InternetSettings)
    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    lookup: LookupConfig = Field(default_factory=LookupConfig)
    user_agent: str = "NexusPrime/1.0 (https://nexusprime.ai)"
