# ABOUTME: Service layer for the weather provider's forecast endpoint and response parsing.
# ABOUTME: Separates provider-reported errors from transport failures and slices hourly windows.

import httpx

from src.deps import DashboardSettings
from src.models import ForecastDay, HourSlot, WeatherSnapshot

FORECAST_DAYS = 3
CITY_NOT_FOUND_MESSAGE = "City not found"


class ProviderError(Exception):
    """The provider answered, but reported that the query could not be served."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @classmethod
    def from_payload(cls, error) -> "ProviderError":
        """Build from the body's `error` member, falling back when it carries no message."""
        message = error.get("message") if isinstance(error, dict) else None
        if message is None or message == "":
            return cls(CITY_NOT_FOUND_MESSAGE)
        return cls(str(message))


async def fetch_forecast(
    client: httpx.AsyncClient,
    base_url: str,
    api_key: str,
    city: str,
    days: int = FORECAST_DAYS,
) -> dict:
    """Fetch the raw forecast body for a city.

    The body is decoded before the status is checked, so a non-2xx reply that
    carries an `error` payload surfaces as ProviderError rather than a transport failure.
    """
    resp = await client.get(f"{base_url}/forecast.json", params={"key": api_key, "q": city, "days": days})
    data = resp.json()

    if isinstance(data, dict) and data.get("error") is not None:
        raise ProviderError.from_payload(data["error"])

    resp.raise_for_status()
    return data


def parse_snapshot(data: dict) -> WeatherSnapshot:
    """Validate a forecast body into a WeatherSnapshot without renaming or converting fields."""
    return WeatherSnapshot.model_validate(data)


async def fetch_snapshot(client: httpx.AsyncClient, settings: DashboardSettings, city: str) -> WeatherSnapshot:
    data = await fetch_forecast(client, settings.base_url, settings.api_key, city)
    return parse_snapshot(data)


def hourly_window(day: ForecastDay, start_hour: int, end_hour: int) -> list[HourSlot]:
    """Return one slot per hour in [start_hour, end_hour], with no reading where the day has no entry."""
    return [
        HourSlot(hour=h, reading=day.hour[h] if 0 <= h < len(day.hour) else None)
        for h in range(start_hour, end_hour + 1)
    ]
