# ABOUTME: Pydantic BaseModels for the weather provider's forecast.json response.
# ABOUTME: Field names mirror the provider's JSON verbatim; snapshots are immutable.

from pydantic import BaseModel, ConfigDict


class _ProviderModel(BaseModel):
    """Frozen model that keeps provider fields outside the consumed subset."""

    model_config = ConfigDict(frozen=True, extra="allow")


class Condition(_ProviderModel):
    """Condition descriptor: display text and a protocol-relative icon reference."""

    text: str
    icon: str


class Location(_ProviderModel):
    name: str
    country: str
    localtime: str


class CurrentConditions(_ProviderModel):
    """Current observation for the resolved location."""

    temp_c: float
    humidity: int
    wind_mph: float
    pressure_mb: float
    vis_km: float
    condition: Condition


class DaySummary(_ProviderModel):
    """Aggregated values for one forecast day."""

    maxtemp_c: float
    mintemp_c: float
    totalprecip_mm: float
    condition: Condition


class HourReading(_ProviderModel):
    """One hourly sub-reading of a forecast day."""

    time: str
    temp_c: float
    condition: Condition


class ForecastDay(_ProviderModel):
    date: str
    day: DaySummary
    hour: list[HourReading] = []


class Forecast(_ProviderModel):
    forecastday: list[ForecastDay] = []


class WeatherSnapshot(_ProviderModel):
    """Result of one successful forecast query."""

    location: Location
    current: CurrentConditions
    forecast: Forecast

    @property
    def forecast_days(self) -> list[ForecastDay]:
        """Forecast days in the order the provider returned them."""
        return self.forecast.forecastday


class HourSlot(BaseModel):
    """One hour of the hourly display window; reading is None when the provider had no entry."""

    model_config = ConfigDict(frozen=True)

    hour: int
    reading: HourReading | None = None
