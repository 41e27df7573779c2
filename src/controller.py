# ABOUTME: WeatherQueryController: turns a submitted city name into a Loaded or Errored dashboard state.
# ABOUTME: Owns the DashboardState, tags each request with an id, and notifies presentation listeners.

import asyncio
import itertools
import logging
from collections.abc import Callable

import httpx

from src.deps import DashboardDeps
from src.state import (
    DashboardState,
    Event,
    ForecastReceived,
    InputChanged,
    ProviderRejected,
    QueryState,
    QuerySubmitted,
    RequestFailed,
    RequestSettled,
    ResponsePolicy,
    is_stale,
    transition,
)
from src.weather_service import ProviderError, fetch_snapshot

logger = logging.getLogger(__name__)

Listener = Callable[[DashboardState], None]


class WeatherQueryController:
    """Request lifecycle for the dashboard.

    Requests are never cancelled. Which resolution is shown when requests
    overlap is decided by the response policy: with LATEST_SUBMISSION, results
    of superseded requests are dropped; with LAST_RESPONSE, whichever response
    arrives last is shown.
    """

    def __init__(self, deps: DashboardDeps, policy: ResponsePolicy | None = None):
        self._deps = deps
        self._policy = policy if policy is not None else deps.settings.response_policy
        self._state = DashboardState()
        self._request_ids = itertools.count(1)
        self._listeners: list[Listener] = []
        self._tasks: set[asyncio.Task] = set()

    @property
    def deps(self) -> DashboardDeps:
        return self._deps

    @property
    def policy(self) -> ResponsePolicy:
        return self._policy

    @property
    def state(self) -> DashboardState:
        return self._state

    @property
    def query_state(self) -> QueryState:
        return self._state.query

    @property
    def search_input(self) -> str:
        return self._state.search_input

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener` with every new state. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, event: Event) -> DashboardState:
        """Apply an event and notify listeners if the state changed."""
        new_state = transition(self._state, event, self._policy)
        if new_state is self._state:
            return new_state
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)
        return new_state

    def on_input_change(self, text: str) -> None:
        self.dispatch(InputChanged(text=text))

    def on_submit(self) -> asyncio.Task | None:
        """Submit the current input without waiting for the response.

        The state is Loading and the input is cleared by the time this returns.
        Must be called from a running event loop.
        """
        started = self._begin(self._state.search_input)
        if started is None:
            return None
        request_id, city = started
        self.on_input_change("")

        task = asyncio.create_task(self._resolve(request_id, city))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def submit(self, raw_city: str) -> None:
        """Query the provider for `raw_city` and resolve the request into a terminal state.

        A blank city is a no-op.
        """
        started = self._begin(raw_city)
        if started is None:
            return
        await self._resolve(*started)

    def _begin(self, raw_city: str) -> tuple[int, str] | None:
        city = raw_city.strip()
        if not city:
            return None
        request_id = next(self._request_ids)
        logger.debug("Submitting forecast request %d for %r", request_id, city)
        self.dispatch(QuerySubmitted(request_id=request_id))
        return request_id, city

    async def _resolve(self, request_id: int, city: str) -> None:
        try:
            snapshot = await fetch_snapshot(self._deps.http_client, self._deps.settings, city)
        except ProviderError as e:
            self._apply(ProviderRejected(request_id=request_id, message=e.message))
        except (httpx.HTTPError, ValueError):
            logger.exception("Forecast request %d for %r failed", request_id, city)
            self._apply(RequestFailed(request_id=request_id))
        else:
            self._apply(ForecastReceived(request_id=request_id, snapshot=snapshot))
        finally:
            self.dispatch(RequestSettled(request_id=request_id))

    def _apply(self, event: ForecastReceived | ProviderRejected | RequestFailed) -> None:
        if is_stale(self._state, event, self._policy):
            logger.debug("Discarding stale response for request %d", event.request_id)
        self.dispatch(event)
