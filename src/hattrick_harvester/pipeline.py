"""Batch merge of stored profiles with listing text, one file at a time."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Mapping, TextIO, Tuple

from hattrick_harvester.config import DEFAULT_EXTRACTION, ExtractionRules
from hattrick_harvester.ingest import (
    MissingIdentityError,
    merge_records,
    parse_listing,
)
from hattrick_harvester.models import PLAYER_ID_KEY
from hattrick_harvester.persistence import RecordStore


logger = logging.getLogger(__name__)

ListingSource = Callable[[Any, Mapping[str, Any]], str]


@dataclass
class HarvestReport:
    processed: int = 0
    written: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "processed": self.processed,
            "written": list(self.written),
            "skipped": list(self.skipped),
            "failed": [{"file": name, "error": error} for name, error in self.failed],
        }


class DirectoryListingSource:
    """Reads listing text from ``<directory>/<PlayerID>.txt``."""

    def __init__(self, directory: Path | str, *, suffix: str = ".txt"):
        self.directory = Path(directory)
        self.suffix = suffix

    def __call__(self, player_id: Any, persisted: Mapping[str, Any]) -> str:
        path = self.directory / f"{player_id}{self.suffix}"
        return path.read_text(encoding="utf-8")


class InteractiveListingSource:
    """Prompts for a pasted listing block terminated by a blank line."""

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def __call__(self, player_id: Any, persisted: Mapping[str, Any]) -> str:
        self.stdout.write(f"\nPaste the listing for player {player_id} (end with blank line):\n")
        self.stdout.flush()
        lines: List[str] = []
        for line in self.stdin:
            line = line.rstrip("\n")
            if not line.strip():
                break
            lines.append(line)
        return "\n".join(lines)


def harvest_directory(
    source: RecordStore,
    target: RecordStore,
    listing_source: ListingSource,
    *,
    rules: ExtractionRules = DEFAULT_EXTRACTION,
) -> HarvestReport:
    """Merge every stored profile in ``source`` with its listing and save to ``target``.

    A failure on one file is logged and recorded; the remaining files are
    still processed.
    """

    report = HarvestReport()
    for path in source.iter_paths():
        report.processed += 1
        logger.info("Processing %s", path)
        try:
            persisted = source.load(path)
            player_id = persisted.get(PLAYER_ID_KEY)
            if player_id is None:
                raise MissingIdentityError(PLAYER_ID_KEY)
            listing = parse_listing(
                listing_source(player_id, persisted),
                currency_marker=rules.currency_marker,
            )
            result = merge_records(persisted, listing, superseded_keys=rules.superseded_keys)
            written = target.save(result.record, result.filename_key)
        except MissingIdentityError:
            logger.warning("Missing %s in %s; skipping", PLAYER_ID_KEY, path)
            report.skipped.append(path.name)
            continue
        except (OSError, ValueError) as exc:
            logger.error("Error processing %s: %s", path, exc)
            report.failed.append((path.name, str(exc)))
            continue
        report.written.append(str(written))
    return report
