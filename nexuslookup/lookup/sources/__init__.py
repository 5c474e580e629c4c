"""Network sources for the lookup engine."""

from nexuslookup.lookup.sources.client import SourceCatalog

__all__ = ["SourceCatalog"]
