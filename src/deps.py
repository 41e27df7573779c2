# ABOUTME: Settings and dependency container for the weather dashboard.
# ABOUTME: Loads configuration from the environment (.env supported) and builds the shared httpx.AsyncClient.

import os

import httpx
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.state import ResponsePolicy

DEFAULT_BASE_URL = "https://api.weatherapi.com/v1"


class DashboardSettings(BaseModel):
    """Validated runtime configuration."""

    api_key: str = Field(min_length=1)
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float | None = 10.0
    hourly_window_start: int = Field(default=15, ge=0, le=23)
    hourly_window_end: int = Field(default=19, ge=0, le=23)
    response_policy: ResponsePolicy = ResponsePolicy.LATEST_SUBMISSION
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("request_timeout", mode="before")
    @classmethod
    def _parse_timeout(cls, v):
        if isinstance(v, str) and v.strip().lower() in ("", "none"):
            return None
        return v

    @model_validator(mode="after")
    def _check_window(self) -> "DashboardSettings":
        if self.hourly_window_start > self.hourly_window_end:
            raise ValueError("hourly_window_start must not be after hourly_window_end")
        return self


def load_settings() -> DashboardSettings:
    """Build settings from environment variables, reading a .env file first if present."""
    load_dotenv()
    return DashboardSettings(
        api_key=os.environ.get("WEATHERAPI_KEY", ""),
        base_url=os.environ.get("WEATHERAPI_BASE_URL", DEFAULT_BASE_URL),
        request_timeout=os.environ.get("WEATHER_REQUEST_TIMEOUT", "10"),
        hourly_window_start=os.environ.get("WEATHER_HOURLY_START", "15"),
        hourly_window_end=os.environ.get("WEATHER_HOURLY_END", "19"),
        response_policy=os.environ.get("WEATHER_RESPONSE_POLICY", ResponsePolicy.LATEST_SUBMISSION),
        host=os.environ.get("WEATHER_HOST", "127.0.0.1"),
        port=os.environ.get("WEATHER_PORT", "8000"),
    )


class DashboardDeps(BaseModel):
    """Dependencies injected into the query controller."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    settings: DashboardSettings


def create_http_client(settings: DashboardSettings) -> httpx.AsyncClient:
    """Create the shared httpx client.

    No retry transport: a failed request is terminal and the user resubmits.
    The timeout is the only bound on a hung request.
    """
    return httpx.AsyncClient(timeout=settings.request_timeout)
