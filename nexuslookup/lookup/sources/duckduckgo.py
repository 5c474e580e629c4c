"""DuckDuckGo Instant Answer adapter."""

from datetime import datetime, timezone
from typing import Any

import httpx

from nexuslookup.lookup.errors import SourceError
from nexuslookup.lookup.models import SearchResult


def _flatten_topics(topics: list[Any]) -> list[dict[str, Any]]:
    # Related topics may be grouped one level deep under "Topics".
    flat: list[dict[str, Any]] = []
    for item in topics:
        if not isinstance(item, dict):
            continue
        if "Topics" in item:
            flat.extend(t for t in item["Topics"] if isinstance(t, dict))
        else:
            flat.append(item)
    return flat


async def search_duckduckgo(
    *,
    query: str,
    count: int,
    base_url: str,
    user_agent: str,
    timeout: float = 8.0,
) -> list[SearchResult]:
    """Search with the Instant Answer API and normalize abstract + related topics."""
    async with httpx.AsyncClient() as client:
        response = await client.get(
            base_url,
            params={"q": query, "format": "json", "no_html": 1, "skip_disambig": 1},
            headers={
                "Accept": "application/json",
                "User-Agent": user_agent,
            },
            timeout=timeout,
        )
        response.raise_for_status()

    data = response.json()
    if not isinstance(data, dict):
        raise SourceError("duckduckgo payload is not an object")

    stamp = datetime.now(timezone.utc).isoformat()
    results: list[SearchResult] = []
    if data.get("AbstractURL") and data.get("AbstractText"):
        results.append(
            SearchResult(
                title=data.get("Heading") or query,
                url=data["AbstractURL"],
                snippet=data["AbstractText"],
                timestamp=stamp,
            )
        )

    for topic in _flatten_topics(data.get("RelatedTopics") or []):
        url = topic.get("FirstURL")
        text = topic.get("Text", "")
        if not url or not text:
            continue
        results.append(
            SearchResult(
                title=text.split(" - ")[0][:120],
                url=url,
                snippet=text,
                timestamp=stamp,
            )
        )
    return results[:count]
