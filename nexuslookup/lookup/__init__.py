"""External knowledge lookup: classify, resolve through fallback tiers, format."""

from nexuslookup.lookup.errors import (
    DomainRejectedError,
    InternetDisabledError,
    InternetLookupError,
    LookupCancelledError,
    SourceError,
)
from nexuslookup.lookup.models import LookupOutcome, QueryIntent, SearchResult, WebContent
from nexuslookup.lookup.resolver import CancelToken, FallbackResolver, Tier
from nexuslookup.lookup.service import InternetService
from nexuslookup.lookup.settings import SettingsStore

__all__ = [
    "CancelToken",
    "DomainRejectedError",
    "FallbackResolver",
    "InternetDisabledError",
    "InternetLookupError",
    "InternetService",
    "LookupCancelledError",
    "LookupOutcome",
    "QueryIntent",
    "SearchResult",
    "SettingsStore",
    "SourceError",
    "Tier",
    "WebContent",
]
