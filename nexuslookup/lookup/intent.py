"""Heuristic gate and category classifier for lookup-worthy messages."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from nexuslookup.lookup.location import extract_weather_location
from nexuslookup.lookup.models import IntentCategory, QueryIntent

if TYPE_CHECKING:
    from nexuslookup.config.schema import InternetSettings

SEARCH_TRIGGERS: tuple[str, ...] = (
    "what is", "who is", "when did", "where is", "how to",
    "latest", "recent", "current", "today", "news about",
    "search for", "find information", "look up",
    "weather in", "weather for", "temperature", "forecast",
    "how's the weather", "what's the weather",
    "tell me about", "information about", "details about",
    "update on", "status of", "price of", "stock price",
    "happening in", "events in",
)

LEADERSHIP_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(?:president|prime minister|chancellor|governor|mayor|ceo)\b", re.I),
    re.compile(r"\b(?:leader|head) of\b", re.I),
    re.compile(r"\bwho (?:runs|leads|heads|governs)\b", re.I),
    re.compile(r"\b(?:elected|election|won the vote)\b", re.I),
)

# Checked top to bottom; the first rule that matches decides the category.
CATEGORY_RULES: tuple[tuple[IntentCategory, re.Pattern[str]], ...] = (
    ("weather", re.compile(r"weather|temperature|forecast|\brain\b|\bsnow\b|humidity", re.I)),
    ("news", re.compile(r"latest|current|today|recent|news|happening", re.I)),
    ("howto", re.compile(r"how to|how do i|how can i|step by step", re.I)),
    ("definition", re.compile(r"what is|what are|definition|define\b|meaning of", re.I)),
    ("price", re.compile(r"price|cost|\bbuy\b|stock", re.I)),
)


def matches_trigger(message: str) -> bool:
    """True when the message contains a trigger phrase or a leadership pattern."""
    lower = message.lower()
    if any(trigger in lower for trigger in SEARCH_TRIGGERS):
        return True
    return any(pattern.search(message) for pattern in LEADERSHIP_PATTERNS)


def should_lookup(message: str, settings: "InternetSettings") -> bool:
    """Decide whether a message warrants an implicit lookup."""
    if not settings.enabled or not settings.auto_search:
        return False
    return matches_trigger(message or "")


def classify_category(message: str, settings: "InternetSettings") -> IntentCategory:
    text = message or ""
    for category, pattern in CATEGORY_RULES:
        if pattern.search(text):
            return category
    return "generic" if should_lookup(text, settings) else "none"


def classify(message: str, settings: "InternetSettings") -> QueryIntent:
    """Category plus, for weather, the extracted location."""
    category = classify_category(message, settings)
    location = extract_weather_location(message) if category == "weather" else None
    return QueryIntent(category=category, location=location)
