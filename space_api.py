"""Operations consumed by page-rendering code. None of them raise."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from config import PipelineConfig
from coordinator import resolve, try_resolve
from fallback import fallback_record, iso_timestamp
from fetcher import Fetcher, fetch
from merger import attach_asset, merge, normalize_date, normalize_events
from models import OutputRecord, Provenance, RequestDescriptor
from prompts import SPACE_WEATHER_PROMPT, event_detail_prompt, events_prompt, weather_insight_prompt
from schemas import (
    EVENT_DETAIL_SCHEMA,
    EVENT_SCHEMA,
    PICTURE_OF_THE_DAY_SCHEMA,
    SPACE_WEATHER_SCHEMA,
    WEATHER_INSIGHT_SCHEMA,
    Schema,
    canonical_category,
)
from space_feeds import NASA_APOD_URL, NOAA_KP_INDEX_URL, shape_kp_index_payload

LOGGER = logging.getLogger(__name__)

EVENT_ID_SEPARATOR = "---"


def get_events(config: PipelineConfig | None = None, fetcher: Fetcher = fetch) -> list[OutputRecord]:
    """Upcoming astronomical events, sorted ascending by date."""
    config = config or PipelineConfig.from_env()
    descriptor = RequestDescriptor(kind="event", prompt=events_prompt(datetime.now(UTC).year))

    record = _resolve_model(descriptor, EVENT_SCHEMA, config, fetcher)
    events = normalize_events(record.data)
    if not events:
        LOGGER.warning("No %s events survived normalization, using fallback data", record.provenance.value)
        record = fallback_record(descriptor.kind, descriptor, attempts=record.attempts)
        events = normalize_events(record.data)

    LOGGER.info("Resolved %s events (provenance=%s)", len(events), record.provenance.value)
    return [OutputRecord(data=event, provenance=record.provenance, attempts=record.attempts) for event in events]


def get_event_detail(
    title: str,
    date: str,
    existing: Mapping[str, Any] | OutputRecord | None = None,
    config: PipelineConfig | None = None,
    fetcher: Fetcher = fetch,
) -> OutputRecord:
    """Base event (`existing` or just title/date) enriched with detail fields."""
    config = config or PipelineConfig.from_env()
    descriptor = RequestDescriptor(
        kind="event_detail",
        prompt=event_detail_prompt(title, date),
        title=title,
        date=date,
    )

    record = _resolve_model(descriptor, EVENT_DETAIL_SCHEMA, config, fetcher)
    if isinstance(existing, OutputRecord):
        existing = existing.data
    base = dict(existing) if existing is not None else {"title": title, "date": date}
    merged = merge(base, record.data)

    normalized_date = normalize_date(merged.get("date"))
    if normalized_date is not None:
        merged["date"] = normalized_date
    merged["type"] = canonical_category(merged.get("type"))
    return OutputRecord(data=attach_asset(merged), provenance=record.provenance, attempts=record.attempts)


def get_event_detail_by_id(
    event_id: str,
    existing: Mapping[str, Any] | OutputRecord | None = None,
    config: PipelineConfig | None = None,
    fetcher: Fetcher = fetch,
) -> OutputRecord:
    """Resolve a compound "<title>---<date>" identifier."""
    title, _, date = event_id.partition(EVENT_ID_SEPARATOR)
    return get_event_detail(title.strip(), date.strip(), existing=existing, config=config, fetcher=fetcher)


def get_weather_insight(
    subject: str,
    config: PipelineConfig | None = None,
    fetcher: Fetcher = fetch,
) -> OutputRecord:
    """Temperature, atmosphere, phenomena, seasons and facts for a body."""
    config = config or PipelineConfig.from_env()
    descriptor = RequestDescriptor(
        kind="weather_insight",
        prompt=weather_insight_prompt(subject, WEATHER_INSIGHT_SCHEMA.required),
        subject=subject,
    )
    return _resolve_model(descriptor, WEATHER_INSIGHT_SCHEMA, config, fetcher)


def get_space_weather_snapshot(config: PipelineConfig | None = None, fetcher: Fetcher = fetch) -> OutputRecord:
    """Solar wind and Kp index: NOAA feed first, then the text model, then fallback."""
    config = config or PipelineConfig.from_env()

    if config.use_noaa_feed:
        feed = RequestDescriptor(kind="space_weather", feed_url=NOAA_KP_INDEX_URL, adapt=shape_kp_index_payload)
        record = try_resolve(feed, SPACE_WEATHER_SCHEMA, config, fetcher=fetcher, max_attempts=1)
        if record is not None:
            return record
        LOGGER.info("NOAA K-index feed unavailable, asking the text model")

    descriptor = RequestDescriptor(kind="space_weather", prompt=SPACE_WEATHER_PROMPT)
    record = _resolve_model(descriptor, SPACE_WEATHER_SCHEMA, config, fetcher)
    if record.provenance is Provenance.VALIDATED:
        # Model timestamps are invented; stamp the reading with the current time.
        now = iso_timestamp(datetime.now(UTC))
        data = dict(record.data)
        data["solarWind"] = {**data["solarWind"], "timestamp": now}
        data["geomagneticData"] = {**data["geomagneticData"], "timestamp": now}
        record = OutputRecord(data=data, provenance=record.provenance, attempts=record.attempts)
    return record


def get_picture_of_the_day(config: PipelineConfig | None = None, fetcher: Fetcher = fetch) -> OutputRecord:
    """NASA Astronomy Picture of the Day, validated like model output."""
    config = config or PipelineConfig.from_env()
    descriptor = RequestDescriptor(
        kind="picture_of_the_day",
        feed_url=NASA_APOD_URL,
        params={"api_key": config.nasa_api_key},
    )
    record = resolve(descriptor, PICTURE_OF_THE_DAY_SCHEMA, config, fetcher=fetcher)
    normalized_date = normalize_date(record.data.get("date"))
    if normalized_date is None or normalized_date == record.data["date"]:
        return record
    data = {**record.data, "date": normalized_date}
    return OutputRecord(data=data, provenance=record.provenance, attempts=record.attempts)


def _resolve_model(
    descriptor: RequestDescriptor,
    schema: Schema,
    config: PipelineConfig,
    fetcher: Fetcher,
) -> OutputRecord:
    # Without credentials the default fetch path is unavailable; skip straight to fallback.
    if fetcher is fetch and not config.provider_configured:
        LOGGER.warning(
            "%s request skipped: no API key configured for provider=%s.",
            descriptor.kind,
            config.provider,
        )
        return fallback_record(descriptor.kind, descriptor, attempts=0)
    return resolve(descriptor, schema, config, fetcher=fetcher)
