"""Render lookup results as plain text for prompt embedding."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from nexuslookup.lookup.models import SearchResult, WebContent

NO_RESULTS = "No search results found."


def format_results(results: Sequence[SearchResult]) -> str:
    """Enumerate results in the order given."""
    if not results:
        return NO_RESULTS

    return "\n".join(
        f"{i}. **{r.title}**\n   URL: {r.url}\n   {r.snippet}\n"
        for i, r in enumerate(results, 1)
    )


def format_web_content(page: WebContent) -> str:
    return f"**{page.title}**\nURL: {page.url}\n\n{page.content}"


def current_time_info(now: datetime | None = None) -> str:
    moment = (now or datetime.now()).astimezone()
    return f"Current date and time: {moment.strftime('%Y-%m-%d %H:%M:%S')} ({moment.tzname()})"
