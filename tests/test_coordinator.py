"""Tests for the bounded retry loop in coordinator."""

from __future__ import annotations

import json
import logging

import pytest

from config import PipelineConfig
from coordinator import attempt_once, resolve, try_resolve
from errors import ParseError, TransportError
from fallback import synthesize
from models import Provenance, RequestDescriptor, ResolveState, RetryState, ValidationFailure
from schemas import EVENT_SCHEMA, PICTURE_OF_THE_DAY_SCHEMA, SPACE_WEATHER_SCHEMA

_CONFIG = PipelineConfig(openai_api_key="test-key")
_SPACE_WEATHER = RequestDescriptor(kind="space_weather", prompt="space weather please")
_EVENTS = RequestDescriptor(kind="event", prompt="events please")

_FENCED_TITLE_ONLY = "```json\n{\"title\":\"X\"}\n```"
_VALID_SPACE_WEATHER = json.dumps({
    "solarWind": {"speed": 420.5, "timestamp": "2025-01-01T00:00:00Z"},
    "geomagneticData": {"kpIndex": 3, "timestamp": "2025-01-01T00:00:00Z"},
})


class ScriptedFetcher:
    """Returns (or raises) scripted responses in order; repeats the last one."""

    def __init__(self, *responses: object) -> None:
        self.responses = list(responses)
        self.calls: list[RequestDescriptor] = []

    def __call__(self, descriptor: RequestDescriptor, config: PipelineConfig) -> str:
        self.calls.append(descriptor)
        response = self.responses[min(len(self.calls), len(self.responses)) - 1]
        if isinstance(response, Exception):
            raise response
        return response


# ---------------------------------------------------------------------------
# Exhaustion
# ---------------------------------------------------------------------------

def test_resolve_falls_back_after_exactly_max_attempts() -> None:
    fetcher = ScriptedFetcher(TransportError("connection refused"))

    record = resolve(_SPACE_WEATHER, SPACE_WEATHER_SCHEMA, _CONFIG, fetcher=fetcher, max_attempts=3)

    assert len(fetcher.calls) == 3
    assert record.provenance is Provenance.FALLBACK
    assert record.attempts == 3
    assert set(record.data) == {"solarWind", "geomagneticData", "additionalData"}


def test_resolve_never_raises_on_unexpected_exceptions() -> None:
    fetcher = ScriptedFetcher(RuntimeError("SDK exploded"))

    record = resolve(_SPACE_WEATHER, SPACE_WEATHER_SCHEMA, _CONFIG, fetcher=fetcher)

    assert len(fetcher.calls) == _CONFIG.max_attempts
    assert record.is_fallback


def test_try_resolve_returns_none_when_exhausted() -> None:
    fetcher = ScriptedFetcher("not json")

    assert try_resolve(_SPACE_WEATHER, SPACE_WEATHER_SCHEMA, _CONFIG, fetcher=fetcher, max_attempts=2) is None
    assert len(fetcher.calls) == 2


def test_max_attempts_defaults_to_config() -> None:
    fetcher = ScriptedFetcher(TransportError("timeout"))
    config = PipelineConfig(openai_api_key="test-key", max_attempts=2)

    resolve(_SPACE_WEATHER, SPACE_WEATHER_SCHEMA, config, fetcher=fetcher)

    assert len(fetcher.calls) == 2


def test_fenced_partial_event_exhausts_to_static_table() -> None:
    fetcher = ScriptedFetcher(_FENCED_TITLE_ONLY)

    record = resolve(_EVENTS, EVENT_SCHEMA, _CONFIG, fetcher=fetcher)

    assert len(fetcher.calls) == 3
    assert record.provenance is Provenance.FALLBACK
    assert [event["title"] for event in record.data] == [event["title"] for event in synthesize("event")]


def test_failed_attempts_log_missing_fields(caplog: pytest.LogCaptureFixture) -> None:
    fetcher = ScriptedFetcher(_FENCED_TITLE_ONLY)

    with caplog.at_level(logging.WARNING, logger="coordinator"):
        resolve(_EVENTS, EVENT_SCHEMA, _CONFIG, fetcher=fetcher)

    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 3
    assert "missing fields: date, type, description, location" in warnings[0]
    assert "attempt 3/3" in warnings[-1]


# ---------------------------------------------------------------------------
# Success
# ---------------------------------------------------------------------------

def test_resolve_stops_after_second_attempt_succeeds() -> None:
    fetcher = ScriptedFetcher('{"solarWind": {}}', _VALID_SPACE_WEATHER, _VALID_SPACE_WEATHER)

    record = resolve(_SPACE_WEATHER, SPACE_WEATHER_SCHEMA, _CONFIG, fetcher=fetcher)

    assert len(fetcher.calls) == 2
    assert record.provenance is Provenance.VALIDATED
    assert record.attempts == 2
    assert record["solarWind"]["speed"] == 420.5


def test_parse_error_consumes_an_attempt() -> None:
    fetcher = ScriptedFetcher("Sorry, I cannot help with that.", f"```json\n{_VALID_SPACE_WEATHER}\n```")

    record = resolve(_SPACE_WEATHER, SPACE_WEATHER_SCHEMA, _CONFIG, fetcher=fetcher)

    assert len(fetcher.calls) == 2
    assert record.provenance is Provenance.VALIDATED


def test_first_attempt_success_makes_one_call() -> None:
    fetcher = ScriptedFetcher(_VALID_SPACE_WEATHER)

    record = resolve(_SPACE_WEATHER, SPACE_WEATHER_SCHEMA, _CONFIG, fetcher=fetcher)

    assert len(fetcher.calls) == 1
    assert record.attempts == 1


# ---------------------------------------------------------------------------
# Single attempt
# ---------------------------------------------------------------------------

def test_attempt_once_returns_validation_failure() -> None:
    result = attempt_once(_EVENTS, EVENT_SCHEMA, _CONFIG, ScriptedFetcher(_FENCED_TITLE_ONLY))

    assert isinstance(result, ValidationFailure)
    assert result.missing == ("date", "type", "description", "location")


def test_attempt_once_raises_parse_error_for_prose() -> None:
    with pytest.raises(ParseError):
        attempt_once(_EVENTS, EVENT_SCHEMA, _CONFIG, ScriptedFetcher("no json here"))


def test_feed_payloads_are_not_cleaned() -> None:
    payload = json.dumps({
        "date": "2025-03-01",
        "title": "Nébuleuse",
        "explanation": "Café-colored dust.",
        "url": "https://apod.nasa.gov/image.jpg",
    }, ensure_ascii=False)
    descriptor = RequestDescriptor(kind="picture_of_the_day", feed_url="https://api.nasa.gov/planetary/apod")

    result = attempt_once(descriptor, PICTURE_OF_THE_DAY_SCHEMA, _CONFIG, ScriptedFetcher(payload))

    assert result["title"] == "Nébuleuse"


def test_adapter_errors_become_parse_errors() -> None:
    def _explode(payload: object) -> object:
        raise ValueError("bad row")

    descriptor = RequestDescriptor(kind="space_weather", feed_url="https://example.test/kp.json", adapt=_explode)

    with pytest.raises(ParseError, match="bad row"):
        attempt_once(descriptor, SPACE_WEATHER_SCHEMA, _CONFIG, ScriptedFetcher("[]"))


def test_retry_state_exhausts_after_max_attempts() -> None:
    state = RetryState(max_attempts=2)
    error = TransportError("down")

    state.record_failure(error)
    assert state.state is ResolveState.ATTEMPTING

    state.record_failure(error)
    assert state.state is ResolveState.EXHAUSTED
    assert state.attempts == 2
    assert state.last_error is error


def test_retry_state_success_stops_the_loop() -> None:
    state = RetryState(max_attempts=3)

    state.record_failure(ValidationFailure(missing=("solarWind.speed",)))
    state.record_success()

    assert state.state is ResolveState.SUCCEEDED
