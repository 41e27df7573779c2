# ABOUTME: ASGI web entry point for the weather dashboard.
# ABOUTME: Starlette app serving the rendered page and a JSON API over the WeatherQueryController.

import json
import logging
from contextlib import asynccontextmanager

import uvicorn
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse
from starlette.routing import Route

from src.controller import WeatherQueryController
from src.deps import DashboardDeps, create_http_client, load_settings
from src.render import PAGE_TEMPLATE, page_context, templates

logger = logging.getLogger(__name__)


async def _read_json(request: Request) -> dict | None:
    """Parse a JSON object request body, returning None when it is not one."""
    try:
        data = json.loads(await request.body() or b"{}")
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=400)


def create_app(controller: WeatherQueryController) -> Starlette:
    """Build the dashboard app around a controller. The controller's HTTP client is closed on shutdown."""
    settings = controller.deps.settings

    def state_response() -> JSONResponse:
        return JSONResponse(controller.state.model_dump(mode="json"))

    async def index(request: Request) -> HTMLResponse:
        context = page_context(controller.state, settings.hourly_window_start, settings.hourly_window_end)
        return templates.TemplateResponse(request, PAGE_TEMPLATE, context)

    async def get_state(request: Request) -> JSONResponse:
        return state_response()

    async def set_input(request: Request) -> JSONResponse:
        data = await _read_json(request)
        if data is None or not isinstance(data.get("text"), str):
            return _bad_request("Expected a JSON object with a string 'text' field")
        controller.on_input_change(data["text"])
        return state_response()

    async def search(request: Request) -> JSONResponse:
        data = await _read_json(request)
        if data is None:
            return _bad_request("Expected a JSON object")
        city = data.get("city")
        if city is not None:
            if not isinstance(city, str):
                return _bad_request("'city' must be a string")
            controller.on_input_change(city)

        task = controller.on_submit()
        if task is not None:
            await task
        return state_response()

    @asynccontextmanager
    async def lifespan(app: Starlette):
        yield
        logger.info("Closing weather provider HTTP client")
        await controller.deps.http_client.aclose()

    return Starlette(
        routes=[
            Route("/", index, methods=["GET"]),
            Route("/api/state", get_state, methods=["GET"]),
            Route("/api/input", set_input, methods=["POST"]),
            Route("/api/search", search, methods=["POST"]),
        ],
        lifespan=lifespan,
    )


def build_controller() -> WeatherQueryController:
    """Controller wired from environment settings."""
    settings = load_settings()
    return WeatherQueryController(DashboardDeps(http_client=create_http_client(settings), settings=settings))


app = create_app(build_controller())


def main() -> None:
    """Serve the dashboard with uvicorn on the configured host and port."""
    settings = load_settings()
    uvicorn.run("src.web:app", host=settings.host, port=settings.port)
