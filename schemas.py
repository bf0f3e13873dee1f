"""Declarative record schemas consumed by `validator.validate`."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

EVENT_TYPES: tuple[str, ...] = ("meteor", "eclipse", "conjunction", "transit", "occultation", "other")
DEFAULT_EVENT_TYPE = "other"

_NUMBER = (int, float)
_TEXT_OR_NUMBER = (str, int, float)


@dataclass(frozen=True, slots=True)
class Schema:
    """Required dotted paths, expected types and enumerations for one record kind.

    `types` covers optional paths too; those are checked only when present.
    `enums` maps a path to (allowed values, default) and is applied leniently.
    A schema with `collection_key` validates a list of records.
    """

    kind: str
    required: tuple[str, ...]
    types: dict[str, type | tuple[type, ...]] = field(default_factory=dict)
    enums: dict[str, tuple[tuple[str, ...], str]] = field(default_factory=dict)
    collection_key: str | None = None


def canonical_category(value: Any, allowed: tuple[str, ...] = EVENT_TYPES, default: str = DEFAULT_EVENT_TYPE) -> str:
    """Map free text such as "Partial Solar Eclipse" onto the enumeration.

    Exact (case-insensitive) members win; otherwise the first member named
    inside the text is used; anything else becomes `default`.
    """
    text = str(value or "").strip().lower().replace("_", " ")
    if text in allowed:
        return text
    for member in allowed:
        if member != default and member in text:
            return member
    return default


_EVENT_FIELD_TYPES: dict[str, type | tuple[type, ...]] = {
    "date": str,
    "title": str,
    "description": str,
    "location": str,
    "peakTime": str,
    "duration": str,
    "details": dict,
    "details.phenomenon": str,
    "details.viewingGuide": str,
    "details.significance": str,
    "details.relatedEvents": list,
}

EVENT_SCHEMA = Schema(
    kind="event",
    required=("date", "title", "type", "description", "location"),
    types=_EVENT_FIELD_TYPES,
    enums={"type": (EVENT_TYPES, DEFAULT_EVENT_TYPE)},
    collection_key="events",
)

EVENT_DETAIL_SCHEMA = Schema(
    kind="event_detail",
    required=("details.phenomenon", "details.viewingGuide", "details.significance"),
    types={
        "peakTime": str,
        "duration": str,
        "details": dict,
        "details.phenomenon": str,
        "details.viewingGuide": str,
        "details.significance": str,
        "details.relatedEvents": list,
        "additionalInfo": dict,
        "additionalInfo.equipment": list,
        "additionalInfo.weatherConditions": str,
        "additionalInfo.historicalContext": str,
        "additionalInfo.scientificImportance": str,
    },
)

WEATHER_INSIGHT_SCHEMA = Schema(
    kind="weather_insight",
    required=(
        "temperature.average",
        "temperature.range",
        "atmosphere.composition",
        "atmosphere.pressure",
        "phenomena",
        "seasons",
        "facts",
    ),
    types={
        "temperature": dict,
        "temperature.average": _TEXT_OR_NUMBER,
        "temperature.range": _TEXT_OR_NUMBER,
        "atmosphere": dict,
        "atmosphere.composition": list,
        "atmosphere.pressure": _TEXT_OR_NUMBER,
        "phenomena": list,
        "seasons": (str, list),
        "facts": list,
    },
)

SPACE_WEATHER_SCHEMA = Schema(
    kind="space_weather",
    required=("solarWind.speed", "geomagneticData.kpIndex"),
    types={
        "solarWind": dict,
        "solarWind.speed": _NUMBER,
        "solarWind.timestamp": str,
        "geomagneticData": dict,
        "geomagneticData.kpIndex": _NUMBER,
        "geomagneticData.timestamp": str,
        "additionalData": dict,
        "additionalData.solarFlares": str,
        "additionalData.coronalHoles": str,
        "additionalData.radiationBelts": str,
    },
)

PICTURE_OF_THE_DAY_SCHEMA = Schema(
    kind="picture_of_the_day",
    required=("date", "title", "explanation", "url"),
    types={
        "date": str,
        "title": str,
        "explanation": str,
        "url": str,
        "hdurl": str,
        "media_type": str,
        "copyright": str,
    },
)
