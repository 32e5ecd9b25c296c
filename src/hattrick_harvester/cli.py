"""Command-line interface for harvesting profile and listing text."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from hattrick_harvester.config_loader import HarvestSettings
from hattrick_harvester.ingest import ListingParseError, extract_player_profile, parse_listing
from hattrick_harvester.persistence import RecordStore
from hattrick_harvester.pipeline import (
    DirectoryListingSource,
    InteractiveListingSource,
    harvest_directory,
)
from hattrick_harvester.season import current_coordinate


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Harvest player profiles and transfer listings")
    parser.add_argument("--config", type=Path, default=None, help="Settings JSON (skills, currency, calendar)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    profile = commands.add_parser("profile", help="Extract a profile from a copied text block")
    profile.add_argument("text", type=Path, help="File holding the profile text")
    profile.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Save the profile as <PlayerID>.json here instead of printing it",
    )

    listing = commands.add_parser("listing", help="Parse a transfer listing block")
    listing.add_argument("text", type=Path, help="File holding the listing text")

    merge = commands.add_parser("merge", help="Merge stored profiles with their listings")
    merge.add_argument("input_dir", type=Path, help="Directory of stored profile JSON files")
    merge.add_argument("output_dir", type=Path, help="Directory for merged JSON files")
    source = merge.add_mutually_exclusive_group(required=True)
    source.add_argument("--listings-dir", type=Path, help="Directory of <PlayerID>.txt listing files")
    source.add_argument("--interactive", action="store_true", help="Paste each listing on stdin")
    merge.add_argument("--report", type=Path, default=None, help="Optional path to write a summary JSON")

    calendar = commands.add_parser("calendar", help="Show the season and week for a date")
    calendar.add_argument(
        "date", nargs="?", type=date.fromisoformat, default=None, help="ISO date (default: today)"
    )
    return parser


def _run_profile(args: argparse.Namespace, settings: HarvestSettings) -> int:
    record = extract_player_profile(args.text.read_text(encoding="utf-8"), settings.extraction_rules())
    if args.output_dir is None:
        print(json.dumps(record.to_payload(), indent=4, ensure_ascii=False))
        return 0
    path = RecordStore(args.output_dir).save_profile(record)
    print(f"Saved profile to {path}")
    return 0


def _run_listing(args: argparse.Namespace, settings: HarvestSettings) -> int:
    try:
        listing = parse_listing(
            args.text.read_text(encoding="utf-8"),
            currency_marker=settings.currency_marker,
        )
    except ListingParseError as exc:
        print(f"Could not parse listing ({exc})", file=sys.stderr)
        return 1
    print(json.dumps(listing.to_payload(), indent=4))
    return 0


def _run_merge(args: argparse.Namespace, settings: HarvestSettings) -> int:
    if args.interactive:
        listing_source = InteractiveListingSource()
    else:
        listing_source = DirectoryListingSource(args.listings_dir)
    report = harvest_directory(
        RecordStore(args.input_dir),
        RecordStore(args.output_dir),
        listing_source,
        rules=settings.extraction_rules(),
    )
    print(
        f"Merged {len(report.written)}/{report.processed} profiles "
        f"({len(report.skipped)} skipped, {len(report.failed)} failed)"
    )
    if report.failed:
        preview = ", ".join(name for name, _ in report.failed[:5])
        more = len(report.failed) - 5
        suffix = f", +{more} more" if more > 0 else ""
        print(f"Failed files: {preview}{suffix}")
    if args.report:
        args.report.write_text(json.dumps(report.as_dict(), indent=2), encoding="utf-8")
        print(f"Wrote harvest report to {args.report}")
    return 1 if report.failed else 0


def _run_calendar(args: argparse.Namespace, settings: HarvestSettings) -> int:
    day = args.date or date.today()
    coordinate = current_coordinate(day, settings.calendar_rules())
    print(f"{day.isoformat()}: season {coordinate.era}, week {coordinate.week}")
    return 0


_COMMANDS = {
    "profile": _run_profile,
    "listing": _run_listing,
    "merge": _run_merge,
    "calendar": _run_calendar,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    settings = HarvestSettings.from_env(args.config)
    return _COMMANDS[args.command](args, settings)


if __name__ == "__main__":
    sys.exit(main())
