import io
import json
from pathlib import Path

from hattrick_harvester.persistence import RecordStore
from hattrick_harvester.pipeline import (
    DirectoryListingSource,
    InteractiveListingSource,
    harvest_directory,
)

from .samples import LISTING_TEXT


def _write(path: Path, payload) -> None:
    path.write_text(json.dumps(payload), encoding="utf-8")


def test_harvest_directory_isolates_failures(tmp_path: Path):
    profiles = tmp_path / "profiles"
    listings = tmp_path / "listings"
    merged = tmp_path / "merged"
    profiles.mkdir()
    listings.mkdir()

    _write(profiles / "7.json", {"PlayerID": 7, "TSI": 100, "AgeYears": 20, "AgeDays": 5, "Speciality": "Head"})
    _write(profiles / "8.json", {"PlayerID": 8, "TSI": 100})
    _write(profiles / "9.json", {"PlayerID": 9})
    _write(profiles / "anon.json", {"TSI": 100})
    (listings / "7.txt").write_text(LISTING_TEXT, encoding="utf-8")
    (listings / "8.txt").write_text("Season 89 without numbers", encoding="utf-8")

    report = harvest_directory(
        RecordStore(profiles),
        RecordStore(merged),
        DirectoryListingSource(listings),
    )

    assert report.processed == 4
    assert report.skipped == ["anon.json"]
    assert [name for name, _ in report.failed] == ["8.json", "9.json"]
    assert "season/week" in report.failed[0][1]
    assert report.written == [str(merged / "7_89_3.json")]

    output = json.loads((merged / "7_89_3.json").read_text(encoding="utf-8"))
    assert output == {
        "PlayerID": 7,
        "Speciality": "Head",
        "Season": 89,
        "SeasonWeek": 3,
        "TSI": 76670,
        "AgeYears": 23,
        "AgeDays": 67,
        "Price": 5000,
    }


def test_harvest_report_as_dict(tmp_path: Path):
    report = harvest_directory(
        RecordStore(tmp_path / "empty"),
        RecordStore(tmp_path / "out"),
        DirectoryListingSource(tmp_path),
    )
    assert report.as_dict() == {"processed": 0, "written": [], "skipped": [], "failed": []}


def test_interactive_source_reads_until_blank_line():
    stdin = io.StringIO("Season 89 (3)\nTSI 76 670\n\nignored 1 (2)\n")
    stdout = io.StringIO()

    text = InteractiveListingSource(stdin=stdin, stdout=stdout)(7, {"PlayerID": 7})

    assert text == "Season 89 (3)\nTSI 76 670"
    assert "player 7" in stdout.getvalue()


def test_harvest_directory_continues_past_undecodable_files(tmp_path: Path):
    profiles = tmp_path / "profiles"
    listings = tmp_path / "listings"
    merged = tmp_path / "merged"
    profiles.mkdir()
    listings.mkdir()

    (profiles / "1.json").write_bytes(b'{"PlayerID": 1, "Speciality": "\xff"}')
    _write(profiles / "2.json", {"PlayerID": 2, "TSI": 10})
    _write(profiles / "3.json", {"PlayerID": 3, "TSI": 10})
    (listings / "2.txt").write_bytes(b"89 (3) 4 500 23 (67) 5 000 \x80")
    (listings / "3.txt").write_text(LISTING_TEXT, encoding="utf-8")

    report = harvest_directory(
        RecordStore(profiles),
        RecordStore(merged),
        DirectoryListingSource(listings),
    )

    assert report.processed == 3
    assert [name for name, _ in report.failed] == ["1.json", "2.json"]
    assert report.written == [str(merged / "3_89_3.json")]
