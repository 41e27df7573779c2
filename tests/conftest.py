# ABOUTME: Shared test fixtures for the weather dashboard test suite.
# ABOUTME: Provides provider response bodies and sets a dummy API key for module-level app construction.

import os

import pytest

# src.web builds its app at import time and requires a key
os.environ.setdefault("WEATHERAPI_KEY", "test-key")


def _condition(text: str = "Sunny", icon: str = "//cdn.weatherapi.com/weather/64x64/day/113.png") -> dict:
    return {"text": text, "icon": icon}


def make_forecast_body(
    name: str = "Tokyo",
    country: str = "Japan",
    dates: tuple[str, ...] = ("2025-04-28", "2025-04-29", "2025-04-30"),
    hours: int = 24,
) -> dict:
    """Build a forecast.json success body in the provider's shape."""
    return {
        "location": {"name": name, "country": country, "localtime": "2025-04-28 14:05"},
        "current": {
            "temp_c": 21.3,
            "humidity": 64,
            "wind_mph": 8.1,
            "pressure_mb": 1012.0,
            "vis_km": 10.0,
            "condition": _condition("Partly cloudy", "//cdn.weatherapi.com/weather/64x64/day/116.png"),
        },
        "forecast": {
            "forecastday": [
                {
                    "date": d,
                    "day": {
                        "maxtemp_c": 24.0 + i,
                        "mintemp_c": 15.0 + i,
                        "totalprecip_mm": 0.4 * i,
                        "condition": _condition(),
                    },
                    "hour": [
                        {"time": f"{d} {h:02d}:00", "temp_c": 15.0 + h / 2, "condition": _condition()}
                        for h in range(hours)
                    ],
                }
                for i, d in enumerate(dates)
            ]
        },
    }


@pytest.fixture
def forecast_body() -> dict:
    return make_forecast_body()


@pytest.fixture
def make_body():
    """Factory fixture for forecast bodies with custom location, dates, or hour counts."""
    return make_forecast_body
