"""wttr.in weather adapter."""

import json
from urllib.parse import quote

import httpx

from nexuslookup.lookup.errors import SourceError
from nexuslookup.lookup.synthetic import uses_us_units


async def weather_wttr(
    *,
    location: str,
    base_url: str,
    user_agent: str,
    timeout: float = 8.0,
) -> str:
    """Fetch current conditions and today's range from wttr.in."""
    async with httpx.AsyncClient() as client:
        response = await client.get(
            f"{base_url.rstrip('/')}/{quote(location)}",
            params={"format": "j1"},
            headers={
                "Accept": "application/json",
                "User-Agent": user_agent,
            },
            timeout=timeout,
        )
        response.raise_for_status()

    try:
        data = json.loads(response.text)
    except json.JSONDecodeError as e:
        raise SourceError(f"invalid weather data format: {e}") from e

    if data.get("error"):
        raise SourceError(f"weather API error: {data['error']}")

    current = (data.get("current_condition") or [None])[0]
    today = (data.get("weather") or [None])[0]
    if not current or not today:
        raise SourceError(f"no current weather data for {location}")

    condition = ((current.get("weatherDesc") or [{}])[0]).get("value") or "Unknown"
    humidity = current.get("humidity")

    if uses_us_units(location):
        return (
            f"Weather in {location}: {condition}, {current.get('temp_F')}°F "
            f"(feels like {current.get('FeelsLikeF')}°F). "
            f"High: {today.get('maxtempF')}°F, Low: {today.get('mintempF')}°F. "
            f"Humidity: {humidity}%, Wind: {current.get('windspeedMiles')} mph."
        )
    return (
        f"Weather in {location}: {condition}, {current.get('temp_C')}°C "
        f"(feels like {current.get('FeelsLikeC')}°C). "
        f"High: {today.get('maxtempC')}°C, Low: {today.get('mintempC')}°C. "
        f"Humidity: {humidity}%, Wind: {current.get('windspeedKmph')} km/h."
    )
