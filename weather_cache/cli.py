"""CLI entry point for the weather cache."""

import argparse
import json
import logging

import httpx
from pydantic import ValidationError

from weather_cache.config.defaults import DEFAULT_CONFIG_PATH
from weather_cache.config.loader import (
    build_client,
    build_pipeline,
    build_store,
    config_hash,
    get_config_value,
    load_config,
)
from weather_cache.ingest.date_list import read_date_lines
from weather_cache.reporting.formatters import (
    format_results_json,
    format_results_text,
    format_summary_text,
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weather-cache",
        description="Daily weather lookup backed by a local cache",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG_PATH, help="Config YAML path"
    )

    sub = parser.add_subparsers(dest="command")

    # fetch
    fetch_p = sub.add_parser("fetch", help="Resolve every date in the dates file")
    fetch_p.add_argument("--dates", help="Dates file (one date per line)")
    fetch_p.add_argument(
        "--format", choices=["text", "json"], default="text", help="Output format"
    )

    # archive
    archive_p = sub.add_parser("archive", help="Query the archive API directly")
    archive_p.add_argument("--start", required=True, help="Start date YYYY-MM-DD")
    archive_p.add_argument("--end", required=True, help="End date YYYY-MM-DD")
    archive_p.add_argument("--lat", type=float, help="Latitude")
    archive_p.add_argument("--lon", type=float, help="Longitude")
    archive_p.add_argument("--daily", help="Comma-separated daily variables")
    archive_p.add_argument("--timezone", help="Timezone (default: auto)")

    # cache list
    cache_p = sub.add_parser("cache", help="Cache operations")
    cache_sub = cache_p.add_subparsers(dest="cache_command")
    cache_sub.add_parser("list", help="List cached dates")

    # config show / config get / config hash
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Display one config value")
    get_p.add_argument("key", help="Dotted key, e.g. archive.latitude")
    config_sub.add_parser("hash", help="Display the config hash")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config)
    except ValidationError as e:
        print(f"Invalid config {args.config}: {e}")
        return 1

    logging.basicConfig(
        level=config.logging.level.value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "fetch":
        return _cmd_fetch(config, args)
    elif args.command == "archive":
        return _cmd_archive(config, args)
    elif args.command == "cache":
        return _cmd_cache(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_fetch(config, args) -> int:
    lines = read_date_lines(args.dates or config.input.dates_file)
    pipeline = build_pipeline(config)
    results = pipeline.run(lines)

    if args.format == "json":
        print(format_results_json(results))
    else:
        print(format_results_text(results))
        print(format_summary_text(pipeline.last_summary))
    return 0 if all(r.ok for r in results) else 1


def _cmd_archive(config, args) -> int:
    client = build_client(config)
    daily = [d.strip() for d in args.daily.split(",")] if args.daily else None
    try:
        result = client.fetch_archive_normalized(
            args.start,
            args.end,
            latitude=args.lat,
            longitude=args.lon,
            daily=daily,
            timezone=args.timezone,
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    except httpx.RequestError as e:
        print(f"Error: upstream API request failed: {e}")
        return 1

    print(json.dumps(result.to_dict(), indent=2))
    return 0 if 200 <= result.status_code < 300 else 1


def _cmd_cache(config, args) -> int:
    if args.cache_command == "list":
        store = build_store(config)
        for date in store.list_dates():
            print(date)
        return 0
    print("Use: cache list")
    return 1


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            print(get_config_value(config, args.key))
            return 0
        except KeyError as e:
            print(f"Error: {e}")
            return 1
    elif args.config_command == "hash":
        print(config_hash(config))
        return 0
    else:
        print("Use: config show | config get key | config hash")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
