"""Bounded retry loop around fetch -> clean -> parse -> validate."""

from __future__ import annotations

import logging
from typing import Any

from cleaner import clean, parse_json
from config import PipelineConfig
from errors import ParseError, PipelineError, TransportError
from fallback import fallback_record
from fetcher import Fetcher, fetch
from models import OutputRecord, Provenance, RequestDescriptor, ResolveState, RetryState, ValidationFailure
from schemas import Schema
from validator import validate

LOGGER = logging.getLogger(__name__)


def attempt_once(
    descriptor: RequestDescriptor,
    schema: Schema,
    config: PipelineConfig,
    fetcher: Fetcher = fetch,
) -> Any:
    """Run a single attempt; returns validated data or a ValidationFailure.

    Raises TransportError or ParseError for the other two failure modes.
    """
    raw = fetcher(descriptor, config)
    # Feeds already return JSON; cleaning would only strip their non-ASCII text.
    text = raw if descriptor.is_feed else clean(raw)
    candidate = parse_json(text)

    if descriptor.adapt is not None:
        try:
            candidate = descriptor.adapt(candidate)
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise ParseError(f"Could not shape {descriptor.kind} payload: {exc}") from exc

    return validate(candidate, schema)


def try_resolve(
    descriptor: RequestDescriptor,
    schema: Schema,
    config: PipelineConfig,
    fetcher: Fetcher = fetch,
    max_attempts: int | None = None,
) -> OutputRecord | None:
    """Attempt up to `max_attempts` times; None once the budget is exhausted."""
    state = RetryState(max_attempts=max_attempts or config.max_attempts)

    while state.state is ResolveState.ATTEMPTING:
        try:
            outcome = attempt_once(descriptor, schema, config, fetcher)
        except PipelineError as exc:
            outcome = exc
        except Exception as exc:  # unexpected fetcher errors consume an attempt too
            LOGGER.debug("Unexpected %s fetch failure", descriptor.kind, exc_info=True)
            outcome = TransportError(f"Unexpected fetch failure: {exc}")

        if isinstance(outcome, (PipelineError, ValidationFailure)):
            state.record_failure(outcome)
            LOGGER.warning(
                "%s request failed on attempt %s/%s (%s): %s",
                descriptor.kind,
                state.attempts,
                state.max_attempts,
                type(outcome).__name__,
                outcome,
            )
            continue

        state.record_success()
        LOGGER.info("%s request succeeded on attempt %s/%s", descriptor.kind, state.attempts, state.max_attempts)
        return OutputRecord(data=outcome, provenance=Provenance.VALIDATED, attempts=state.attempts)

    LOGGER.error(
        "%s request exhausted after %s attempts: %s",
        descriptor.kind,
        state.attempts,
        state.last_error,
    )
    return None


def resolve(
    descriptor: RequestDescriptor,
    schema: Schema,
    config: PipelineConfig,
    fetcher: Fetcher = fetch,
    max_attempts: int | None = None,
) -> OutputRecord:
    """Like try_resolve, but degrades to fallback data instead of returning None."""
    record = try_resolve(descriptor, schema, config, fetcher=fetcher, max_attempts=max_attempts)
    if record is not None:
        return record
    return fallback_record(descriptor.kind, descriptor, attempts=max_attempts or config.max_attempts)
