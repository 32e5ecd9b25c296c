import json
import logging

import pytest

from hattrick_harvester.config import DEFAULT_EXTRACTION, ExtractionRules
from hattrick_harvester.ingest import (
    FieldNotFoundError,
    extract_age,
    extract_all_skills,
    extract_experience,
    extract_leadership,
    extract_player_id,
    extract_player_profile,
    extract_skill,
    extract_speciality,
    extract_tsi,
)

from .samples import PROFILE_PAYLOAD, PROFILE_TEXT


def test_extract_all_skills_returns_six_levels():
    skills = extract_all_skills(PROFILE_TEXT)

    assert list(skills) == list(DEFAULT_EXTRACTION.skills)
    assert skills == {
        "Keeper": 1,
        "Defending": 7,
        "Playmaking": 4,
        "Passing": 5,
        "Scoring": 3,
        "Winger": 5,
    }


def test_extract_all_skills_ignores_surrounding_text():
    noisy = "Transfer compare\n[b]Notes[/b] 12 (4)\n" + PROFILE_TEXT + "\n[hr] last edited 3 (1)"

    assert extract_all_skills(noisy) == extract_all_skills(PROFILE_TEXT)


def test_extract_all_skills_marks_missing_skill_as_none():
    text = PROFILE_TEXT.replace("[th]Winger[/th]", "[th]Wing[/th]")

    skills = extract_all_skills(text)
    assert skills["Winger"] is None
    assert skills["Keeper"] == 1


def test_extract_skill_without_bold_label():
    result = extract_skill("[th]Passing[/th][td]excellent (8)[/td]", "Passing")
    assert result.ok
    assert result.value == 8


def test_extract_skill_escapes_special_characters():
    text = "[th]Setxpieces[/th][td]good (7)[/td][th]Set.pieces[/th][td]weak (3)[/td]"

    assert extract_skill(text, "Set.pieces").value == 3
    assert not extract_skill("[th]Setxpieces[/th][td]good (7)[/td]", "Set.pieces").ok


def test_extract_skill_missing_reports_field():
    result = extract_skill("no table here", "Keeper")
    assert not result.ok
    assert isinstance(result.error, FieldNotFoundError)
    assert result.error.field == "Keeper"


@pytest.mark.parametrize("player_id", [1, 475716864, 99999999999])
def test_extract_player_id(player_id):
    assert extract_player_id(f"see [playerid={player_id}] here") == player_id


def test_extract_player_id_absent_is_none():
    assert extract_player_id("[youthplayerid=12]") is None
    assert extract_player_id("") is None


@pytest.mark.parametrize(
    "text",
    ["TSI: 76 670", "TSI:76670", "TSI: 76\u00a0670", "TSI:  76 670\nWage: 1 000 €"],
)
def test_extract_tsi_ignores_digit_grouping(text):
    assert extract_tsi(text).unwrap() == 76670


def test_extract_tsi_missing_label():
    result = extract_tsi("Form: 76 670")
    assert not result.ok
    with pytest.raises(FieldNotFoundError):
        result.unwrap()


def test_extract_age():
    assert extract_age("23 years and 67 days").unwrap() == (23, 67)
    assert not extract_age("23 years old").ok


def test_extract_speciality_trims_bold_value():
    assert extract_speciality("Speciality: [b] Quick [/b]").unwrap() == "Quick"
    assert not extract_speciality("Specialty: [b]Quick[/b]").ok


def test_extract_experience_and_leadership():
    text = "Has solid experience and passable leadership."

    assert extract_experience(text).unwrap() == "solid"
    assert extract_leadership(text).unwrap() == "passable"


def test_experience_and_leadership_require_sentence_template():
    reworded = "Leadership is passable; experience: solid."

    assert not extract_experience(reworded).ok
    assert not extract_leadership(reworded).ok


def test_extract_player_profile_full_record():
    record = extract_player_profile(PROFILE_TEXT)

    assert record.player_id == 475716864
    assert record.tsi == 76670
    assert (record.age_years, record.age_days) == (23, 67)
    assert record.to_payload() == PROFILE_PAYLOAD


def test_extract_player_profile_defaults_missing_fields(caplog):
    with caplog.at_level(logging.WARNING):
        record = extract_player_profile("nothing useful here")

    payload = record.to_payload()
    assert payload["PlayerID"] is None
    assert payload["TSI"] is None
    assert payload["AgeYears"] is None and payload["AgeDays"] is None
    assert payload["Speciality"] == "None"
    assert payload["Experience"] is None and payload["Leadership"] is None
    assert all(payload[skill] is None for skill in DEFAULT_EXTRACTION.skills)
    assert "Error extracting TSI" in caplog.text
    assert "Error extracting Speciality" in caplog.text


def test_extract_player_profile_keeps_other_fields_when_one_fails():
    text = PROFILE_TEXT.replace("TSI:", "Index:")

    record = extract_player_profile(text)
    assert record.tsi is None
    assert record.speciality == "Head"
    assert record.skills["Defending"] == 7


def test_extract_player_profile_is_repeatable():
    first = extract_player_profile(PROFILE_TEXT)
    second = extract_player_profile(PROFILE_TEXT)

    assert first == second
    assert json.dumps(first.to_payload()) == json.dumps(second.to_payload())


def test_extract_player_profile_uses_configured_skills():
    rules = ExtractionRules(
        skills=("Keeper", "Stamina"),
        currency_marker="€",
        superseded_keys=DEFAULT_EXTRACTION.superseded_keys,
    )
    text = PROFILE_TEXT + "[th]Stamina[/th][td][b]excellent[/b] (8)[/td]"

    record = extract_player_profile(text, rules)
    assert record.skills == {"Keeper": 1, "Stamina": 8}
