#!/usr/bin/env python3
"""
cli.py

Command-line interface for the event catalog.

Commands:
  - event-catalog blocks   : Print the catalog's time blocks as JSON
  - event-catalog summary  : Print store counts and integrity warnings

Typical usage:
  event-catalog blocks --period morning
  event-catalog blocks --schedule 12 --describe
  event-catalog --source local --file snapshot.json summary
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from event_catalog.configs.settings import Settings, get_settings
from event_catalog.exceptions import CatalogError
from event_catalog.ingestion.factory import create_adapter
from event_catalog.monitoring.logging import LoggingOptions, setup_logging
from event_catalog.repository.data_manager import CatalogRepository
from event_catalog.scheduling.time_blocks import DayPeriod, describe_time_blocks
from event_catalog.schemas.catalog import EntityId

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="event-catalog", description="Event Catalog CLI")
    p.add_argument(
        "--source", choices=["webhook", "local"], default=None, help="Override DATA_SOURCE"
    )
    p.add_argument("--file", "-f", default=None, help="Catalog JSON file for --source local")
    p.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    p.add_argument("--json-logs", action="store_true", help="Emit JSON logs")
    sub = p.add_subparsers(dest="cmd", required=True)

    # blocks
    pb = sub.add_parser("blocks", help="Print time blocks")
    pb.add_argument(
        "--period",
        choices=[period.value for period in DayPeriod],
        default=None,
        help="Keep only morning or afternoon sessions",
    )
    pb.add_argument("--schedule", "-s", default=None, help="Only events of this schedule id")
    pb.add_argument(
        "--describe", action="store_true", help="Print a diagnostic summary instead"
    )

    # summary
    sub.add_parser("summary", help="Print entity counts and integrity warnings")

    return p.parse_args(argv)


def _resolve_settings(args: argparse.Namespace) -> Settings:
    settings = get_settings()
    update: dict[str, Any] = {}
    if args.source:
        update["DATA_SOURCE"] = args.source
    if args.file:
        update["LOCAL_DATA_PATH"] = Path(args.file)
    if args.log_level:
        update["LOG_LEVEL"] = args.log_level
    return settings.model_copy(update=update) if update else settings


def _parse_id(value: str) -> EntityId:
    """Catalog ids are usually numeric; fall back to the raw string."""
    try:
        return int(value)
    except ValueError:
        return value


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


async def _run(args: argparse.Namespace, settings: Settings) -> int:
    async with CatalogRepository(create_adapter(settings)) as repository:
        await repository.initialize()

        if args.cmd == "summary":
            _print_json(
                {
                    "ok": True,
                    "counts": {
                        "events": len(repository.get_all_events()),
                        "schedules": len(repository.get_all_schedules()),
                        "speakers": len(repository.get_all_speakers()),
                        "categories": len(repository.get_all_categories()),
                        "rooms": len(repository.get_all_rooms()),
                        "streams": len(repository.get_all_streams()),
                        "session_types": len(repository.get_all_session_types()),
                    },
                    "warnings": repository.validate_data_integrity(),
                }
            )
            return 0

        if args.cmd == "blocks":
            if args.schedule is not None:
                events = repository.get_schedule_events(_parse_id(args.schedule))
                if events is None:
                    _print_json({"ok": False, "error": f"Unknown schedule {args.schedule}"})
                    return 2
            else:
                events = repository.get_all_events()

            blocks = repository.scheduler.process_events_into_time_blocks(events, args.period)
            if args.describe:
                _print_json(describe_time_blocks(blocks))
            else:
                _print_json([block.model_dump(mode="json") for block in blocks])
            return 0

    return 1


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = _resolve_settings(args)
    setup_logging(
        LoggingOptions(level=settings.LOG_LEVEL, json_logs=args.json_logs or settings.JSON_LOGS)
    )

    try:
        return asyncio.run(_run(args, settings))
    except (CatalogError, ValueError) as e:
        logger.error(f"Command failed: {e}")
        _print_json({"ok": False, "error": str(e)})
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
