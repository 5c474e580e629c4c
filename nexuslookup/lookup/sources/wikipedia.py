"""Wikipedia REST search adapter."""

import re
from datetime import datetime, timezone
from urllib.parse import quote

import httpx

from nexuslookup.lookup.errors import SourceError
from nexuslookup.lookup.models import SearchResult

_TAG_RE = re.compile(r"<[^>]+>")


async def search_wikipedia(
    *,
    query: str,
    count: int,
    base_url: str,
    user_agent: str,
    timeout: float = 8.0,
) -> list[SearchResult]:
    """Search Wikipedia page titles and excerpts."""
    async with httpx.AsyncClient() as client:
        response = await client.get(
            base_url,
            params={"q": query, "limit": count},
            headers={
                "Accept": "application/json",
                "User-Agent": user_agent,
            },
            timeout=timeout,
        )
        response.raise_for_status()

    pages = response.json().get("pages")
    if not isinstance(pages, list):
        raise SourceError("wikipedia payload has no pages list")

    stamp = datetime.now(timezone.utc).isoformat()
    results: list[SearchResult] = []
    for page in pages[:count]:
        title = page.get("title", "")
        key = page.get("key") or title.replace(" ", "_")
        if not key:
            continue
        snippet = _TAG_RE.sub("", page.get("excerpt") or "") or page.get("description") or ""
        results.append(
            SearchResult(
                title=title,
                url=f"https://en.wikipedia.org/wiki/{quote(key)}",
                snippet=snippet or f"Wikipedia article about {title}",
                timestamp=stamp,
            )
        )
    return results
