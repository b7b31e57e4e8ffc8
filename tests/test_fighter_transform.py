import logging
import math
import re
from datetime import datetime, timedelta, timezone

import pytest

from grit.ingest import (
    build_import_report,
    generate_fighter_id,
    get_mapped_value,
    transform_csv_data_to_fighters,
    transform_csv_to_fighter,
    validate_mappings,
)
from grit.models import FieldMapping, Organization, WeightClass


FIXED_NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def _clock() -> datetime:
    return FIXED_NOW


def _mapping(csv_field, system_field, status="mapped"):
    return FieldMapping(csv_field=csv_field, system_field=system_field, status=status)


BASE_MAPPINGS = [
    _mapping("FN", "first_name"),
    _mapping("LN", "last_name"),
    _mapping("WC", "weight_class"),
    _mapping("Org", "organization"),
]


def _row(**overrides):
    row = {"FN": "Jon", "LN": "Jones", "WC": "Light Heavyweight", "Org": "ufc"}
    row.update(overrides)
    return row


def test_get_mapped_value_trims_and_handles_missing():
    mappings = [_mapping("Name", "first_name")]
    assert get_mapped_value({"Name": "  Israel "}, mappings, "first_name") == "Israel"
    assert get_mapped_value({"Name": "   "}, mappings, "first_name") is None
    assert get_mapped_value({}, mappings, "first_name") is None
    assert get_mapped_value({"Name": "Israel"}, mappings, "last_name") is None


def test_get_mapped_value_resolves_ignored_entries():
    mappings = [_mapping("Nick", "nickname", status="ignored")]
    assert get_mapped_value({"Nick": "Bones"}, mappings, "nickname") == "Bones"


def test_get_mapped_value_uses_first_matching_entry():
    mappings = [_mapping("A", "gym"), _mapping("B", "gym")]
    assert get_mapped_value({"A": "Jackson Wink", "B": "AKA"}, mappings, "gym") == "Jackson Wink"


def test_transform_scenario_jon_jones():
    fighter = transform_csv_to_fighter(_row(), BASE_MAPPINGS, clock=_clock)

    assert fighter is not None
    assert fighter.first_name == "Jon"
    assert fighter.last_name == "Jones"
    assert fighter.weight_class == WeightClass.LIGHT_HEAVYWEIGHT
    assert fighter.organization == Organization.UFC
    match = re.fullmatch(r"jon-jones-([0-9a-z]+)", fighter.id)
    assert match
    assert int(match.group(1), 36) == int(FIXED_NOW.timestamp() * 1000)


def test_transform_applies_defaults():
    fighter = transform_csv_to_fighter(_row(), BASE_MAPPINGS, clock=_clock)

    assert fighter.nationality == "Unknown"
    assert fighter.gym == "Unknown"
    assert fighter.head_coach == "Unknown"
    assert fighter.image_url == "/placeholder.svg"
    assert fighter.nickname is None
    assert fighter.date_of_birth == ""
    assert fighter.gender.value == "Male"
    assert fighter.stance.value == "Orthodox"
    assert fighter.is_active is True
    assert fighter.is_champion is False
    assert fighter.is_verified is False
    assert fighter.history == [] and fighter.notes == [] and fighter.risk_signals == []
    assert fighter.created_at == fighter.last_updated == FIXED_NOW
    assert fighter.physical_stats.height == ""
    assert fighter.physical_stats.age == 0


def test_transform_uses_mapped_id():
    mappings = BASE_MAPPINGS + [_mapping("ID", "id")]
    fighter = transform_csv_to_fighter(_row(ID="jones-001"), mappings, clock=_clock)
    assert fighter.id == "jones-001"


def test_transform_blank_id_is_generated():
    mappings = BASE_MAPPINGS + [_mapping("ID", "id")]
    fighter = transform_csv_to_fighter(_row(ID="  "), mappings, clock=_clock)
    assert fighter.id.startswith("jon-jones-")


def test_generate_fighter_id_slugifies_names():
    fighter_id = generate_fighter_id("José  Aldo", "Jr.", FIXED_NOW)
    assert fighter_id.startswith("jos-aldo-jr-")


@pytest.mark.parametrize("missing", ["FN", "LN", "WC"])
def test_transform_rejects_missing_required(missing):
    assert transform_csv_to_fighter(_row(**{missing: ""}), BASE_MAPPINGS, clock=_clock) is None


def test_transform_logs_warning_on_skip(caplog):
    with caplog.at_level(logging.WARNING, logger="grit.ingest.fighters"):
        transform_csv_to_fighter(_row(WC=" "), BASE_MAPPINGS, clock=_clock)
    assert "missing weight class" in caplog.text


def test_transform_without_organization_mapping_defaults_to_ufc():
    mappings = BASE_MAPPINGS[:3]
    fighter = transform_csv_to_fighter(_row(), mappings, clock=_clock)
    assert fighter.organization == Organization.UFC


def test_transform_weight_class_fallback():
    fighter = transform_csv_to_fighter(_row(WC="205"), BASE_MAPPINGS, clock=_clock)
    assert fighter.weight_class == WeightClass.WELTERWEIGHT


def test_explicit_zero_wins_preserved():
    mappings = BASE_MAPPINGS + [_mapping("W", "wins")]
    fighter = transform_csv_to_fighter(_row(W="0"), mappings, clock=_clock)
    assert fighter.record.wins == 0


def test_zero_ranking_reads_as_absent():
    mappings = BASE_MAPPINGS + [
        _mapping("Rank", "ranking"),
        _mapping("Global", "rank_global"),
        _mapping("Promo", "rank_promotion"),
    ]
    fighter = transform_csv_to_fighter(
        _row(Rank="0", Global="12", Promo=""), mappings, clock=_clock
    )
    assert fighter.ranking is None
    assert fighter.rank_global == 12
    assert fighter.rank_promotion is None


def test_transform_full_row():
    mappings = BASE_MAPPINGS + [
        _mapping("Nick", "nickname"),
        _mapping("Country", "nationality"),
        _mapping("Sex", "gender"),
        _mapping("Stance", "stance"),
        _mapping("Reach", "reach"),
        _mapping("Reach In", "reach_inches"),
        _mapping("Wins", "wins"),
        _mapping("Losses", "losses"),
        _mapping("NC", "no_contests"),
        _mapping("SLpM", "strikes_landed_per_min"),
        _mapping("Avg Time", "avg_fight_time"),
        _mapping("Active", "is_active"),
        _mapping("Champ", "is_champion"),
    ]
    row = _row(
        Nick="Bones",
        Country="USA",
        Sex="m",
        Stance="Orthodox",
        Reach='84.5"',
        **{"Reach In": "84.5"},
        Wins="27",
        Losses="1",
        NC="1",
        SLpM="4.29",
        **{"Avg Time": "14:32"},
        Active="no",
        Champ="yes",
    )

    fighter = transform_csv_to_fighter(row, mappings, clock=_clock)

    assert fighter.nickname == "Bones"
    assert fighter.nationality == "USA"
    assert fighter.physical_stats.reach == '84.5"'
    assert fighter.physical_stats.reach_inches == 845
    assert fighter.record.wins == 27
    assert fighter.record.losses == 1
    assert fighter.record.no_contests == 1
    assert fighter.performance.strikes_landed_per_min == pytest.approx(4.29)
    assert fighter.performance.avg_fight_time_minutes == pytest.approx(1432.0)
    assert fighter.is_active is False
    assert fighter.is_champion is True


def test_numeric_fields_always_finite():
    mappings = BASE_MAPPINGS + [
        _mapping("Wins", "wins"),
        _mapping("Acc", "strike_accuracy"),
        _mapping("KO", "ko_wins"),
    ]
    fighter = transform_csv_to_fighter(_row(Wins="lots", Acc="n/a", KO="--"), mappings, clock=_clock)

    values = list(fighter.record.model_dump().values()) + list(fighter.performance.model_dump().values())
    assert all(isinstance(value, (int, float)) and math.isfinite(value) for value in values)


def test_fighter_serializes_with_camel_case_aliases():
    fighter = transform_csv_to_fighter(_row(), BASE_MAPPINGS, clock=_clock)
    payload = fighter.model_dump(mode="json", by_alias=True)

    assert payload["firstName"] == "Jon"
    assert payload["weightClass"] == "Light Heavyweight"
    assert payload["record"]["noContests"] == 0
    assert payload["physicalStats"]["height_inches"] == 0
    assert payload["riskSignals"] == []


def test_batch_preserves_order_and_drops_invalid_rows():
    rows = [
        _row(FN="Alex"),
        _row(FN=""),
        _row(FN="Islam", LN="Makhachev", WC="Lightweight"),
        _row(WC=""),
        _row(FN="Zhang", LN="Weili", WC="Women's Strawweight"),
    ]

    fighters = transform_csv_data_to_fighters(rows, BASE_MAPPINGS, clock=_clock)

    assert [f.first_name for f in fighters] == ["Alex", "Islam", "Zhang"]


def test_batch_generated_ids_unique_for_duplicate_names():
    fighters = transform_csv_data_to_fighters([_row(), _row()], BASE_MAPPINGS, clock=_clock)

    assert len({f.id for f in fighters}) == 2
    assert all(f.id.startswith("jon-jones-") for f in fighters)


def test_build_import_report_records_skips_and_fallbacks():
    rows = [_row(WC="205", Org="Cage Warriors"), _row(LN="")]

    fighters, report = build_import_report(rows, BASE_MAPPINGS, clock=_clock)

    assert len(fighters) == 1
    assert report.total_rows == 2
    assert report.imported_rows == 1
    assert [(s.row_index, s.reason) for s in report.skipped_rows] == [(1, "missing required name fields")]
    fields = {(f.row_index, f.field): f for f in report.fallbacks}
    assert fields[(0, "weight_class")].raw_value == "205"
    assert fields[(0, "weight_class")].applied_value == WeightClass.WELTERWEIGHT
    assert fields[(0, "organization")].applied_value == Organization.UFC


def test_build_import_report_oversized_integer_cell_falls_back():
    mappings = BASE_MAPPINGS + [_mapping("W", "wins")]

    fighters, report = build_import_report([_row(W="9" * 5000)], mappings, clock=_clock)

    assert fighters[0].record.wins == 0
    assert [(f.row_index, f.field) for f in report.fallbacks] == [(0, "wins")]


def test_build_import_report_uses_clock_per_row():
    ticks = iter([FIXED_NOW, FIXED_NOW + timedelta(seconds=1)])
    fighters, _ = build_import_report([_row(), _row(FN="Jonny")], BASE_MAPPINGS, clock=lambda: next(ticks))
    assert fighters[1].created_at == FIXED_NOW + timedelta(seconds=1)


def test_validate_mappings_all_required_present():
    result = validate_mappings(BASE_MAPPINGS)
    assert result.is_valid
    assert result.missing_fields == []


def test_validate_mappings_reports_missing_fields():
    mappings = [
        _mapping("FN", "first_name"),
        _mapping("LN", "last_name", status="ignored"),
        FieldMapping(csv_field="WC", system_field=None, status="unmapped"),
    ]
    result = validate_mappings(mappings)
    assert not result.is_valid
    assert result.missing_fields == ["last_name", "weight_class", "organization"]
