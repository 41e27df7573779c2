# ABOUTME: Jinja2 templating for the dashboard page.
# ABOUTME: Exposes the shared Jinja2Templates instance and renders a DashboardState to HTML.

from pathlib import Path

from starlette.templating import Jinja2Templates

from src.state import DashboardState
from src.weather_service import FORECAST_DAYS, hourly_window

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
PAGE_TEMPLATE = "index.html"


def icon_url(ref: str) -> str:
    """Make a provider icon reference usable as an absolute URL."""
    if ref.startswith("//"):
        return f"https:{ref}"
    return ref


templates = Jinja2Templates(directory=TEMPLATES_DIR)
templates.env.filters["icon_url"] = icon_url
templates.env.globals["hourly_window"] = hourly_window


def page_context(state: DashboardState, start_hour: int, end_hour: int) -> dict:
    """Template variables for the dashboard page."""
    return {
        "state": state,
        "query": state.query,
        "start_hour": start_hour,
        "end_hour": end_hour,
        "forecast_days": FORECAST_DAYS,
    }


def render_page(state: DashboardState, start_hour: int, end_hour: int) -> str:
    return templates.get_template(PAGE_TEMPLATE).render(page_context(state, start_hour, end_hour))
