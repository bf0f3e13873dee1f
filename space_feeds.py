"""Public read-only feeds (NOAA SWPC, NASA APOD) and their payload shaping."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fallback import iso_timestamp

# Official NOAA Space Weather Prediction Center product; no key required.
NOAA_KP_INDEX_URL = "https://services.swpc.noaa.gov/products/noaa-planetary-k-index.json"
NASA_APOD_URL = "https://api.nasa.gov/planetary/apod"

# The K-index product carries no plasma data; this is a typical quiet-sun speed.
DEFAULT_SOLAR_WIND_SPEED_KMS = 380.0


def shape_kp_index_payload(payload: Any) -> dict[str, Any]:
    """Turn the NOAA planetary K-index product into a space-weather candidate.

    The product has been published both as a header row followed by value
    rows and as a list of objects; the latest row wins in either case.
    Raises ValueError when no usable row is found.
    """
    if not isinstance(payload, list) or not payload:
        raise ValueError("Unexpected K-index payload shape: expected a non-empty list")

    latest = payload[-1]
    if isinstance(latest, dict):
        kp_raw = _first_present(latest, ("Kp", "kp_index", "estimated_kp", "kp"))
        time_raw = latest.get("time_tag")
    elif isinstance(latest, list):
        header = payload[0] if isinstance(payload[0], list) and payload[0] is not latest else []
        kp_column = header.index("Kp") if "Kp" in header else 1
        kp_raw = latest[kp_column] if len(latest) > kp_column else None
        time_raw = latest[0] if latest else None
    else:
        raise ValueError(f"Unexpected K-index row: {latest!r}")

    if kp_raw is None:
        raise ValueError("K-index row has no Kp value")
    kp_index = float(kp_raw)
    now = iso_timestamp(datetime.now(UTC))

    return {
        "solarWind": {"speed": DEFAULT_SOLAR_WIND_SPEED_KMS, "timestamp": now},
        "geomagneticData": {"kpIndex": kp_index, "timestamp": _feed_timestamp(time_raw) or now},
    }


def _first_present(row: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if row.get(key) is not None:
            return row[key]
    return None


def _feed_timestamp(raw: Any) -> str | None:
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        parsed = datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return iso_timestamp(parsed)
