"""Shared typed models for the space data pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable


class Provenance(str, Enum):
    """Where an OutputRecord came from."""

    VALIDATED = "validated"
    FALLBACK = "fallback"


class ResolveState(str, Enum):
    """Progress of one bounded retry loop."""

    ATTEMPTING = "attempting"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True, slots=True)
class RequestDescriptor:
    """One logical request: a prompt for the text model or a public feed URL.

    `adapt` reshapes a parsed feed payload into the target schema's shape
    before validation; it is unused for text-model requests.
    """

    kind: str
    prompt: str = ""
    subject: str | None = None
    title: str | None = None
    date: str | None = None
    feed_url: str | None = None
    params: dict[str, str] = field(default_factory=dict)
    adapt: Callable[[Any], Any] | None = None

    @property
    def is_feed(self) -> bool:
        return bool(self.feed_url)


@dataclass(frozen=True, slots=True)
class ValidationFailure:
    """Every required path that was missing plus every path of the wrong type."""

    missing: tuple[str, ...] = ()
    invalid: tuple[str, ...] = ()

    @property
    def fields(self) -> tuple[str, ...]:
        return self.missing + self.invalid

    def __str__(self) -> str:
        parts = []
        if self.missing:
            parts.append(f"missing fields: {', '.join(self.missing)}")
        if self.invalid:
            parts.append(f"invalid fields: {', '.join(self.invalid)}")
        return "; ".join(parts) or "validation failed"


@dataclass(frozen=True, slots=True)
class OutputRecord:
    """Record handed to page code; `data` is a dict (or list for collections)."""

    data: Any
    provenance: Provenance
    attempts: int = 0

    @property
    def is_fallback(self) -> bool:
        return self.provenance is Provenance.FALLBACK

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def get(self, key: str, default: Any = None) -> Any:
        if isinstance(self.data, dict):
            return self.data.get(key, default)
        return default


@dataclass(slots=True)
class RetryState:
    """Attempt bookkeeping for one `try_resolve` call."""

    max_attempts: int
    attempts: int = 0
    last_error: Exception | ValidationFailure | None = None
    state: ResolveState = ResolveState.ATTEMPTING

    def record_failure(self, error: Exception | ValidationFailure) -> None:
        self.attempts += 1
        self.last_error = error
        if self.attempts >= self.max_attempts:
            self.state = ResolveState.EXHAUSTED

    def record_success(self) -> None:
        self.attempts += 1
        self.last_error = None
        self.state = ResolveState.SUCCEEDED
