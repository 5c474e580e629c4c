"""Page fetch-and-extract adapters."""

import re
from datetime import datetime, timezone
from urllib.parse import urlparse

import httpx
from selectolax.lexbor import LexborHTMLParser

from nexuslookup.lookup.errors import SourceError
from nexuslookup.lookup.models import WebContent

_WS_RE = re.compile(r"\s+")


def extract_page(url: str, html: str, max_chars: int) -> WebContent:
    """Turn raw HTML into a title and capped plain text."""
    parser = LexborHTMLParser(html)
    title_node = parser.css_first("title")
    title = title_node.text(strip=True) if title_node else ""

    parser.strip_tags(["script", "style", "noscript", "template"])
    root = parser.body or parser.root
    text = root.text(separator=" ") if root else ""
    content = _WS_RE.sub(" ", text).strip()[:max_chars]

    return WebContent(
        url=url,
        title=title or urlparse(url).hostname or url,
        content=content,
        timestamp=datetime.now(timezone.utc),
    )


async def fetch_direct(
    *,
    url: str,
    user_agent: str,
    max_chars: int = 2000,
    timeout: float = 10.0,
) -> WebContent:
    """
    GET the page itself.

    Redirects are followed; the returned page carries the final URL so the
    caller can re-check it against the domain policy.
    """
    async with httpx.AsyncClient(follow_redirects=True) as client:
        response = await client.get(
            url,
            headers={"User-Agent": user_agent, "Accept": "text/html,*/*"},
            timeout=timeout,
        )
        response.raise_for_status()

    return extract_page(str(response.url), response.text, max_chars)


async def fetch_via_proxy(
    *,
    url: str,
    base_url: str,
    user_agent: str,
    max_chars: int = 2000,
    timeout: float = 8.0,
) -> WebContent:
    """Fetch through an allorigins-style proxy returning {"contents": html}."""
    async with httpx.AsyncClient() as client:
        response = await client.get(
            base_url,
            params={"url": url},
            headers={"User-Agent": user_agent, "Accept": "application/json"},
            timeout=timeout,
        )
        response.raise_for_status()

    payload = response.json()
    contents = payload.get("contents")
    if not isinstance(contents, str) or not contents:
        raise SourceError("proxy returned no contents")

    # allorigins reports where its own redirects ended up.
    status = payload.get("status")
    final_url = status.get("url") if isinstance(status, dict) else None
    return extract_page(final_url or url, contents, max_chars)
