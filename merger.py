"""Merge incremental detail into known records and normalize derived fields."""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

from fallback import DEFAULT_EVENT_DETAILS
from schemas import DEFAULT_EVENT_TYPE, canonical_category

LOGGER = logging.getLogger(__name__)

_NASA_PLACEHOLDER_IMAGE = "https://images-assets.nasa.gov/image/PIA23645/PIA23645~orig.jpg"

# Only the category -> asset shape matters to consumers; the URLs are illustrative.
CATEGORY_ASSETS: dict[str, str] = {
    "meteor": _NASA_PLACEHOLDER_IMAGE,
    "eclipse": "https://images-assets.nasa.gov/image/total-solar-eclipse-2017/total-solar-eclipse-2017~orig.jpg",
    "conjunction": _NASA_PLACEHOLDER_IMAGE,
    "transit": _NASA_PLACEHOLDER_IMAGE,
    "occultation": _NASA_PLACEHOLDER_IMAGE,
    "other": _NASA_PLACEHOLDER_IMAGE,
}

_LONGHAND_DATE_FORMATS = ("%B %d, %Y", "%b %d, %Y", "%d %B %Y", "%Y/%m/%d")


def merge(existing: Mapping[str, Any], incoming: Mapping[str, Any]) -> dict[str, Any]:
    """Shallow override: fields in `incoming` win, everything else is kept."""
    merged = dict(existing)
    merged.update(incoming)
    return merged


def normalize_date(value: Any) -> str | None:
    """Return a YYYY-MM-DD string or None when the value is not a date.

    Time of day and UTC offset are discarded; the calendar date is kept as
    written rather than shifted to UTC.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str) or not value.strip():
        return None

    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw).date().isoformat()
    except ValueError:
        pass

    for fmt in _LONGHAND_DATE_FORMATS:
        try:
            return datetime.strptime(raw, fmt).date().isoformat()
        except ValueError:
            continue
    return None


def attach_asset(record: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of `record` with `imageUrl` derived from its category."""
    category = record.get("type") or DEFAULT_EVENT_TYPE
    updated = dict(record)
    updated["imageUrl"] = CATEGORY_ASSETS.get(category, CATEGORY_ASSETS[DEFAULT_EVENT_TYPE])
    return updated


def normalize_event(record: Mapping[str, Any]) -> dict[str, Any] | None:
    """Canonicalize one event; None when its date cannot be parsed."""
    normalized_date = normalize_date(record.get("date"))
    if normalized_date is None:
        return None

    event = dict(record)
    event["date"] = normalized_date
    event["type"] = canonical_category(event.get("type"))

    raw_details = event.get("details") if isinstance(event.get("details"), Mapping) else {}
    details = copy.deepcopy(DEFAULT_EVENT_DETAILS)
    for key, default in DEFAULT_EVENT_DETAILS.items():
        value = raw_details.get(key)
        if isinstance(default, list):
            details[key] = list(value) if isinstance(value, list) else []
        elif isinstance(value, str) and value.strip():
            details[key] = value
    event["details"] = {**raw_details, **details}

    return attach_asset(event)


def normalize_events(records: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Normalize a batch, dropping only the records with unparseable dates."""
    events: list[dict[str, Any]] = []
    dropped = 0
    for record in records:
        event = normalize_event(record)
        if event is None:
            dropped += 1
            LOGGER.warning("Dropping event %r with unparseable date %r", record.get("title"), record.get("date"))
            continue
        events.append(event)

    if dropped:
        LOGGER.info("Event normalization: kept=%s dropped=%s", len(events), dropped)
    return sorted(events, key=lambda event: event["date"])
