"""Pull a location phrase out of a weather-flavoured message."""

from __future__ import annotations

import re

# Stop at ?, !, end of text, a sentence-ending period, or a comma that is not
# followed by a trailing two-letter region code ("Trevose, PA?").
_TERMINATOR = r"(?=\s*(?:[?!]|\.(?:\s|$)|,(?!\s*[a-z]{2}\s*(?:[?!.]|$))|$))"
_PLACE = r"([^\W_](?:[^\W_]|[\s,.'-])*?)"

LOCATION_PATTERNS: tuple[tuple[str, re.Pattern[str], int], ...] = (
    ("weather_in", re.compile(rf"\bweather (?:in|for) {_PLACE}{_TERMINATOR}", re.I), 1),
    ("whats_the_weather", re.compile(rf"\bwhat'?s the weather (?:in|for) {_PLACE}{_TERMINATOR}", re.I), 1),
    ("hows_the_weather", re.compile(rf"\bhow'?s the weather (?:in|for) {_PLACE}{_TERMINATOR}", re.I), 1),
    ("temperature_in", re.compile(rf"\btemperature (?:in|for) {_PLACE}{_TERMINATOR}", re.I), 1),
    ("weather_bare", re.compile(rf"\bweather {_PLACE}{_TERMINATOR}", re.I), 3),
)

_STATE_CODES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("PA", re.compile(r"\b(?:pa|pennsylvania)\b", re.I)),
    ("CA", re.compile(r"\b(?:ca|california)\b", re.I)),
    ("NY", re.compile(r"\b(?:ny|new york)\b", re.I)),
    ("TX", re.compile(r"\b(?:tx|texas)\b", re.I)),
    ("FL", re.compile(r"\b(?:fl|florida)\b", re.I)),
)


def match_location(pattern: re.Pattern[str], message: str, min_length: int = 1) -> str | None:
    """Apply one pattern; return the raw captured phrase if it is long enough."""
    match = pattern.search(message)
    if not match:
        return None
    captured = match.group(1).strip()
    return captured if len(captured) >= min_length else None


def extract_weather_location(message: str) -> str | None:
    """Return the first location any pattern captures, normalized, or None."""
    text = (message or "").strip()
    if not text:
        return None
    for _name, pattern, min_length in LOCATION_PATTERNS:
        captured = match_location(pattern, text, min_length)
        if captured:
            return normalize_location(captured)
    return None


def normalize_location(text: str) -> str:
    """Collapse whitespace, tighten comma spacing and canonicalise state codes."""
    clean = re.sub(r"\s+", " ", text.strip())
    clean = re.sub(r"\s*,\s*", ",", clean)
    for code, pattern in _STATE_CODES:
        clean = pattern.sub(code, clean)
    return clean
