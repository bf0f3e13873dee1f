"""Deterministic, network-free substitutes used when every attempt fails.

Everything here is a pure function of the current time and the static tables
below, so a fallback record is always available.
"""

from __future__ import annotations

import copy
import logging
import math
from datetime import UTC, datetime
from typing import Any, Callable

from models import OutputRecord, Provenance, RequestDescriptor

LOGGER = logging.getLogger(__name__)

# Documented physical ranges the oscillating values are clamped to.
SOLAR_WIND_SPEED_RANGE_KMS = (250.0, 900.0)
KP_INDEX_RANGE = (0.0, 9.0)

_SOLAR_WIND_BASELINE_KMS = 350.0
_SOLAR_WIND_AMPLITUDE_KMS = 50.0
_SOLAR_WIND_PERIOD_DIVISOR_MS = 10_000
_KP_BASELINE = 2.0
_KP_AMPLITUDE = 2.0
_KP_PERIOD_DIVISOR_MS = 20_000
# Zero reads as a missing value downstream, so synthesized Kp stays above it.
_MIN_SYNTHESIZED_KP = 0.01

QUIET_SPACE_WEATHER: dict[str, str] = {
    "solarFlares": "No significant activity",
    "coronalHoles": "Small coronal hole on the southern hemisphere",
    "radiationBelts": "Normal conditions",
}

DEFAULT_EVENT_DETAILS: dict[str, Any] = {
    "phenomenon": "Information not available",
    "viewingGuide": "Standard viewing practices apply",
    "significance": "Significant astronomical event",
    "relatedEvents": [],
}

DEFAULT_ADDITIONAL_INFO: dict[str, Any] = {
    "equipment": ["Naked eye", "Binoculars", "Reclining chair or blanket"],
    "weatherConditions": "Clear, moonless skies away from city lights",
    "historicalContext": "Historical records for this event are not available offline.",
    "scientificImportance": "Observations help refine orbital and atmospheric models.",
}

# (month-day, year offset, record); year offsets are relative to the current year.
_EVENT_TABLE: tuple[tuple[str, int, dict[str, Any]], ...] = (
    (
        "08-12",
        0,
        {
            "title": "Perseid Meteor Shower Peak",
            "type": "meteor",
            "description": "One of the best meteor showers of the year, producing up to 60 meteors per hour at its peak.",
            "location": "Visible worldwide, best from Northern Hemisphere",
            "peakTime": "Pre-dawn hours",
            "duration": "July 17 - August 24",
            "details": {
                "phenomenon": "The Perseid meteor shower occurs when Earth passes through debris left by the Swift-Tuttle comet.",
                "viewingGuide": "Find a dark location away from city lights. Best viewing is after midnight until dawn.",
                "significance": "One of the most popular meteor showers due to its high rate and warm summer viewing.",
                "relatedEvents": ["Geminids Meteor Shower", "Leonids Meteor Shower"],
            },
        },
    ),
    (
        "12-14",
        0,
        {
            "title": "Geminid Meteor Shower Peak",
            "type": "meteor",
            "description": "The king of meteor showers, producing up to 120 multicolored meteors per hour at its peak.",
            "location": "Visible worldwide",
            "peakTime": "Around 2 AM local time",
            "duration": "December 4-17",
            "details": {
                "phenomenon": "The Geminid meteor shower is caused by debris left by asteroid 3200 Phaethon.",
                "viewingGuide": "Find a dark location away from city lights. No special equipment needed.",
                "significance": "Unique for being caused by an asteroid rather than a comet.",
                "relatedEvents": ["Perseid Meteor Shower", "Quadrantids Meteor Shower"],
            },
        },
    ),
    (
        "04-08",
        1,
        {
            "title": "Total Solar Eclipse",
            "type": "eclipse",
            "description": "A total solar eclipse visible along a narrow path of totality.",
            "location": "Along the path of totality; partial phases visible across a wider region",
            "peakTime": "Varies by location",
            "duration": "Up to 4 minutes of totality",
            "details": {
                "phenomenon": "A total solar eclipse occurs when the Moon completely blocks the Sun's disk.",
                "viewingGuide": "Must use certified eclipse glasses. Never look directly at the Sun.",
                "significance": "One of nature's most spectacular events, revealing the Sun's corona.",
                "relatedEvents": ["Partial Solar Eclipse", "Annular Solar Eclipse"],
            },
        },
    ),
)

_PLANET_WEATHER: dict[str, dict[str, Any]] = {
    "mercury": {
        "temperature": {"average": "167°C", "range": "-173°C to 427°C"},
        "atmosphere": {
            "composition": ["Oxygen", "Sodium", "Hydrogen", "Helium", "Potassium"],
            "pressure": "Near vacuum; a thin exosphere only",
        },
        "phenomena": ["Extreme day-night temperature swings", "Sodium tail pushed away by solar radiation"],
        "seasons": "No true seasons; temperatures follow the planet's eccentric orbit",
        "facts": [
            "One solar day on Mercury lasts about 176 Earth days.",
            "Permanently shadowed polar craters are thought to hold water ice.",
            "Despite being closest to the Sun, Mercury is not the hottest planet.",
        ],
    },
    "venus": {
        "temperature": {"average": "464°C", "range": "Roughly uniform, about 440°C to 470°C at the surface"},
        "atmosphere": {
            "composition": ["Carbon dioxide (~96.5%)", "Nitrogen (~3.5%)", "Sulfuric acid clouds"],
            "pressure": "About 92 times Earth's surface pressure",
        },
        "phenomena": ["Runaway greenhouse effect", "Super-rotating cloud tops", "Sulfuric acid cloud decks"],
        "seasons": "Negligible seasons; axial tilt is only about 3 degrees",
        "facts": [
            "Venus is the hottest planet in the Solar System.",
            "Cloud-top winds circle the planet in about four Earth days.",
            "A day on Venus is longer than its year.",
        ],
    },
    "earth": {
        "temperature": {"average": "15°C", "range": "-89°C to 57°C"},
        "atmosphere": {
            "composition": ["Nitrogen (~78%)", "Oxygen (~21%)", "Argon (~0.9%)"],
            "pressure": "1013 hPa at sea level",
        },
        "phenomena": ["Tropical cyclones", "Thunderstorms", "Auroras"],
        "seasons": "Four seasons driven by a 23.4 degree axial tilt",
        "facts": [
            "Earth is the only known planet with liquid surface water.",
            "Auroras are driven by solar wind particles funneled by the magnetic field.",
            "The lowest natural temperature was recorded in Antarctica.",
        ],
    },
    "mars": {
        "temperature": {"average": "-63°C", "range": "-140°C to 20°C"},
        "atmosphere": {
            "composition": ["Carbon dioxide (~95%)", "Nitrogen (~2.8%)", "Argon (~2%)"],
            "pressure": "About 0.6% of Earth's surface pressure",
        },
        "phenomena": ["Global dust storms", "Dust devils", "Carbon dioxide frost at the poles"],
        "seasons": "Seasons similar to Earth's but about twice as long, from a 25 degree tilt",
        "facts": [
            "Dust storms can grow to cover the entire planet.",
            "Polar caps grow and shrink as carbon dioxide freezes and sublimates.",
            "Sunsets on Mars appear blue.",
        ],
    },
    "jupiter": {
        "temperature": {"average": "-110°C", "range": "-145°C at the cloud tops, far hotter below"},
        "atmosphere": {
            "composition": ["Hydrogen (~90%)", "Helium (~10%)", "Methane", "Ammonia"],
            "pressure": "No solid surface; quoted at the 1 bar level",
        },
        "phenomena": ["Great Red Spot", "Banded zones and belts", "Powerful lightning"],
        "seasons": "Very weak seasons; axial tilt is about 3 degrees",
        "facts": [
            "The Great Red Spot is a storm wider than Earth.",
            "Jupiter rotates once in under 10 hours.",
            "Its auroras are the most powerful in the Solar System.",
        ],
    },
    "saturn": {
        "temperature": {"average": "-140°C", "range": "-185°C to -122°C at the cloud tops"},
        "atmosphere": {
            "composition": ["Hydrogen (~96%)", "Helium (~3%)", "Methane", "Ammonia"],
            "pressure": "No solid surface; quoted at the 1 bar level",
        },
        "phenomena": ["Hexagonal jet stream at the north pole", "Periodic Great White Spots", "Equatorial winds near 1,800 km/h"],
        "seasons": "Each season lasts about seven Earth years, from a 27 degree tilt",
        "facts": [
            "The north polar hexagon is wider than two Earths.",
            "Great White Spot storms appear roughly once per Saturn year.",
            "Saturn is less dense than water.",
        ],
    },
    "uranus": {
        "temperature": {"average": "-195°C", "range": "Down to -224°C"},
        "atmosphere": {
            "composition": ["Hydrogen (~83%)", "Helium (~15%)", "Methane (~2%)"],
            "pressure": "No solid surface; quoted at the 1 bar level",
        },
        "phenomena": ["Methane haze giving a blue-green color", "Bright convective storms", "Extreme seasonal lighting"],
        "seasons": "Extreme seasons; a 98 degree tilt gives each pole about 42 years of continuous sunlight",
        "facts": [
            "Uranus has the coldest recorded planetary atmosphere.",
            "It rotates on its side.",
            "A full Uranian year lasts 84 Earth years.",
        ],
    },
    "neptune": {
        "temperature": {"average": "-200°C", "range": "-218°C to -200°C at the cloud tops"},
        "atmosphere": {
            "composition": ["Hydrogen (~80%)", "Helium (~19%)", "Methane (~1.5%)"],
            "pressure": "No solid surface; quoted at the 1 bar level",
        },
        "phenomena": ["Supersonic winds up to about 2,100 km/h", "Great Dark Spots", "Bright methane cirrus clouds"],
        "seasons": "Each season lasts about 40 Earth years, from a 28 degree tilt",
        "facts": [
            "Neptune has the fastest winds measured in the Solar System.",
            "Its dark spots come and go over a few years.",
            "Neptune radiates more heat than it receives from the Sun.",
        ],
    },
}

_PICTURE_OF_THE_DAY: dict[str, str] = {
    "title": "Total Solar Eclipse",
    "explanation": "The solar corona, visible only during totality, streams away from the Moon-covered Sun.",
    "url": "https://images-assets.nasa.gov/image/total-solar-eclipse-2017/total-solar-eclipse-2017~orig.jpg",
    "media_type": "image",
    "copyright": "NASA",
}


def synthesize(kind: str, context: RequestDescriptor | None = None, now: datetime | None = None) -> Any:
    """Return schema-conformant substitute data for `kind`.

    Raises ValueError only for an unknown kind, which is a programming error.
    """
    try:
        builder = _BUILDERS[kind]
    except KeyError:
        raise ValueError(f"No fallback available for record kind {kind!r}") from None
    return builder(context, now or datetime.now(UTC))


def fallback_record(kind: str, context: RequestDescriptor | None = None, attempts: int = 0) -> OutputRecord:
    """Wrap synthesized data in an OutputRecord flagged as fallback."""
    LOGGER.info("Using fallback data for %s after %s attempts", kind, attempts)
    return OutputRecord(data=synthesize(kind, context), provenance=Provenance.FALLBACK, attempts=attempts)


def _space_weather(context: RequestDescriptor | None, now: datetime) -> dict[str, Any]:
    millis = now.timestamp() * 1000
    speed = _SOLAR_WIND_BASELINE_KMS + math.sin(millis / _SOLAR_WIND_PERIOD_DIVISOR_MS) * _SOLAR_WIND_AMPLITUDE_KMS
    kp_index = _KP_BASELINE + math.sin(millis / _KP_PERIOD_DIVISOR_MS) * _KP_AMPLITUDE
    kp_index = max(round(_clamp(kp_index, *KP_INDEX_RANGE), 2), _MIN_SYNTHESIZED_KP)
    timestamp = iso_timestamp(now)
    return {
        "solarWind": {"speed": round(_clamp(speed, *SOLAR_WIND_SPEED_RANGE_KMS), 1), "timestamp": timestamp},
        "geomagneticData": {"kpIndex": kp_index, "timestamp": timestamp},
        "additionalData": dict(QUIET_SPACE_WEATHER),
    }


def _events(context: RequestDescriptor | None, now: datetime) -> list[dict[str, Any]]:
    events = []
    for month_day, year_offset, record in _EVENT_TABLE:
        event = copy.deepcopy(record)
        event["date"] = f"{now.year + year_offset}-{month_day}"
        events.append(event)
    return sorted(events, key=lambda event: event["date"])


def _event_detail(context: RequestDescriptor | None, now: datetime) -> dict[str, Any]:
    title = (context.title if context else None) or ""
    details = copy.deepcopy(DEFAULT_EVENT_DETAILS)
    extra: dict[str, Any] = {}
    for _, _, record in _EVENT_TABLE:
        if record["title"].lower() == title.strip().lower():
            details = copy.deepcopy(record["details"])
            extra = {"peakTime": record["peakTime"], "duration": record["duration"]}
            break
    return {**extra, "details": details, "additionalInfo": copy.deepcopy(DEFAULT_ADDITIONAL_INFO)}


def _weather_insight(context: RequestDescriptor | None, now: datetime) -> dict[str, Any]:
    subject = ((context.subject if context else None) or "this body").strip()
    known = _PLANET_WEATHER.get(subject.lower())
    if known is not None:
        return copy.deepcopy(known)
    return {
        "temperature": {
            "average": f"Average temperature data for {subject} unavailable",
            "range": f"Temperature range for {subject} unavailable",
        },
        "atmosphere": {
            "composition": [f"Main atmospheric components of {subject} unavailable"],
            "pressure": f"Atmospheric pressure data for {subject} unavailable",
        },
        "phenomena": [f"Weather phenomena on {subject} unavailable"],
        "seasons": f"Seasonal changes on {subject} unavailable",
        "facts": [f"Weather facts about {subject} unavailable"],
    }


def _picture_of_the_day(context: RequestDescriptor | None, now: datetime) -> dict[str, str]:
    return {"date": now.date().isoformat(), **_PICTURE_OF_THE_DAY}


def iso_timestamp(moment: datetime) -> str:
    """UTC ISO-8601 timestamp with millisecond precision and a trailing Z."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


_BUILDERS: dict[str, Callable[[RequestDescriptor | None, datetime], Any]] = {
    "space_weather": _space_weather,
    "event": _events,
    "event_detail": _event_detail,
    "weather_insight": _weather_insight,
    "picture_of_the_day": _picture_of_the_day,
}
