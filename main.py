"""Debug entrypoint: resolve one kind of record and print it as JSON."""

from __future__ import annotations

import argparse
import json
import logging
from typing import Any

from dotenv import load_dotenv

from config import PipelineConfig
from models import OutputRecord
from space_api import (
    get_event_detail,
    get_events,
    get_picture_of_the_day,
    get_space_weather_snapshot,
    get_weather_insight,
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(description="Resolve astronomy records through the fallback pipeline")
    parser.add_argument(
        "kind",
        choices=["events", "detail", "weather", "space-weather", "apod"],
        help="Which record to resolve",
    )
    parser.add_argument("--subject", default="Mars", help="Body for the 'weather' kind")
    parser.add_argument("--title", default="Perseid Meteor Shower Peak", help="Event title for 'detail'")
    parser.add_argument("--date", default=None, help="Event date (YYYY-MM-DD) for 'detail'")
    return parser.parse_args(argv)


def _as_json(record: OutputRecord) -> dict[str, Any]:
    return {"provenance": record.provenance.value, "attempts": record.attempts, "data": record.data}


def run(args: argparse.Namespace, config: PipelineConfig) -> Any:
    """Resolve the requested kind and return a JSON-serializable result."""
    if args.kind == "events":
        return [_as_json(record) for record in get_events(config)]
    if args.kind == "detail":
        date = args.date or ""
        return _as_json(get_event_detail(args.title, date, config=config))
    if args.kind == "weather":
        return _as_json(get_weather_insight(args.subject, config=config))
    if args.kind == "space-weather":
        return _as_json(get_space_weather_snapshot(config))
    return _as_json(get_picture_of_the_day(config))


def main(argv: list[str] | None = None) -> None:
    """Initialize config and print the resolved record."""
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    args = parse_args(argv)
    config = PipelineConfig.from_env()
    print(json.dumps(run(args, config), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
