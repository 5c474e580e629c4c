"""Open-Meteo weather adapter with Nominatim geocoding."""

import httpx

from nexuslookup.lookup.errors import SourceError
from nexuslookup.lookup.synthetic import uses_us_units

WMO_CODES: dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Foggy",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    61: "Light rain",
    63: "Moderate rain",
    65: "Heavy rain",
    71: "Light snow",
    73: "Moderate snow",
    75: "Heavy snow",
    80: "Light rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    95: "Thunderstorm",
    96: "Thunderstorm with light hail",
    99: "Thunderstorm with heavy hail",
}


async def geocode(
    client: httpx.AsyncClient,
    *,
    location: str,
    geocoding_url: str,
    user_agent: str,
    timeout: float,
) -> tuple[float, float]:
    response = await client.get(
        geocoding_url,
        params={"q": location, "format": "json", "limit": 1},
        headers={"User-Agent": user_agent},
        timeout=timeout,
    )
    response.raise_for_status()

    places = response.json()
    if not places:
        raise SourceError(f'location "{location}" not found')
    try:
        return float(places[0]["lat"]), float(places[0]["lon"])
    except (KeyError, TypeError, ValueError) as e:
        raise SourceError(f"invalid coordinates for {location}") from e


async def weather_open_meteo(
    *,
    location: str,
    base_url: str,
    geocoding_url: str,
    user_agent: str,
    timeout: float = 8.0,
) -> str:
    """Geocode the location, then read Open-Meteo's current weather."""
    async with httpx.AsyncClient() as client:
        lat, lon = await geocode(
            client,
            location=location,
            geocoding_url=geocoding_url,
            user_agent=user_agent,
            timeout=timeout,
        )
        response = await client.get(
            base_url,
            params={
                "latitude": lat,
                "longitude": lon,
                "current_weather": "true",
                "temperature_unit": "celsius",
                "windspeed_unit": "kmh",
                "timezone": "auto",
            },
            headers={"User-Agent": user_agent},
            timeout=timeout,
        )
        response.raise_for_status()

    current = response.json().get("current_weather")
    if not current:
        raise SourceError("no weather data available from backup service")

    temp = round(current["temperature"])
    wind = round(current["windspeed"])
    condition = WMO_CODES.get(current.get("weathercode"), "Unknown")

    if uses_us_units(location):
        return (
            f"Weather in {location}: {condition}, {round(temp * 9 / 5 + 32)}°F. "
            f"Wind: {round(wind * 0.621371)} mph."
        )
    return f"Weather in {location}: {condition}, {temp}°C. Wind: {wind} km/h."
