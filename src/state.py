# ABOUTME: Dashboard state container: query states, events, and the pure transition function.
# ABOUTME: The controller feeds events through transition(); nothing here performs I/O.

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from src.models import WeatherSnapshot

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


class ResponsePolicy(StrEnum):
    """Which response decides the displayed state when requests overlap."""

    LATEST_SUBMISSION = "latest_submission"
    LAST_RESPONSE = "last_response"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Idle(_Frozen):
    status: Literal["idle"] = "idle"


class Loading(_Frozen):
    status: Literal["loading"] = "loading"
    request_id: int


class Loaded(_Frozen):
    status: Literal["loaded"] = "loaded"
    snapshot: WeatherSnapshot


class Errored(_Frozen):
    status: Literal["errored"] = "errored"
    message: str


QueryState = Annotated[Idle | Loading | Loaded | Errored, Field(discriminator="status")]


class DashboardState(_Frozen):
    """Everything the presentation layer renders. Replaced wholesale on every event."""

    search_input: str = ""
    query: QueryState = Idle()
    latest_request_id: int = 0

    @property
    def is_loading(self) -> bool:
        return isinstance(self.query, Loading)


class InputChanged(_Frozen):
    text: str


class QuerySubmitted(_Frozen):
    request_id: int


class ForecastReceived(_Frozen):
    request_id: int
    snapshot: WeatherSnapshot


class ProviderRejected(_Frozen):
    request_id: int
    message: str


class RequestFailed(_Frozen):
    request_id: int


class RequestSettled(_Frozen):
    """Emitted when a request's coroutine exits, whatever the outcome."""

    request_id: int


Resolution = ForecastReceived | ProviderRejected | RequestFailed
Event = InputChanged | QuerySubmitted | Resolution | RequestSettled


def transition(
    state: DashboardState,
    event: Event,
    policy: ResponsePolicy = ResponsePolicy.LATEST_SUBMISSION,
) -> DashboardState:
    """Return the state that follows `event`. Never mutates `state`."""
    if isinstance(event, InputChanged):
        return state.model_copy(update={"search_input": event.text})

    if isinstance(event, QuerySubmitted):
        return state.model_copy(
            update={
                "query": Loading(request_id=event.request_id),
                "latest_request_id": max(state.latest_request_id, event.request_id),
            }
        )

    if isinstance(event, RequestSettled):
        if isinstance(state.query, Loading) and state.query.request_id == event.request_id:
            return state.model_copy(update={"query": Errored(message=GENERIC_ERROR_MESSAGE)})
        return state

    if is_stale(state, event, policy):
        return state

    if isinstance(event, ForecastReceived):
        query = Loaded(snapshot=event.snapshot)
    elif isinstance(event, ProviderRejected):
        query = Errored(message=event.message)
    elif isinstance(event, RequestFailed):
        query = Errored(message=GENERIC_ERROR_MESSAGE)
    else:
        raise TypeError(f"Unknown event: {event!r}")
    return state.model_copy(update={"query": query})


def is_stale(state: DashboardState, event: Resolution, policy: ResponsePolicy) -> bool:
    """True when `transition` would drop `event` because a newer query was submitted."""
    return policy is ResponsePolicy.LATEST_SUBMISSION and event.request_id != state.latest_request_id
