from __future__ import annotations

CLEAR_IMPACT = 0.1
FOG_IMPACT = 0.6
PRECIPITATION_IMPACT = 0.8
UNCLASSIFIED_IMPACT = 0.3


def weather_impact_factor(code: int) -> float:
    """Map a WMO weather code onto the 0-1 impact scale (higher is worse)."""
    if code <= 3:
        return CLEAR_IMPACT
    if 45 <= code <= 48:
        return FOG_IMPACT
    if code >= 51:
        return PRECIPITATION_IMPACT
    return UNCLASSIFIED_IMPACT


def describe_weather(code: int) -> str:
    if code == 0:
        return "Clear sky"
    if code <= 3:
        return "Partly cloudy"
    if 45 <= code <= 48:
        return "Foggy"
    if 51 <= code <= 55:
        return "Drizzle"
    if 61 <= code <= 65:
        return "Rain"
    if 71 <= code <= 77:
        return "Snow"
    # Thunderstorm codes sit inside the showers range.
    if code >= 95:
        return "Thunderstorm"
    if code >= 80:
        return "Rain showers"
    return "Unknown"
