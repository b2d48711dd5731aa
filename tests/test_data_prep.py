from datetime import date

import pandas as pd
import pytest

from core.exceptions import ValidationError
from core.config import PolicyConfig
from data_prep.loader import load_pay_matrix, table_from_frame
from data_prep.profile import (
    CareerProfile,
    PromotionDraft,
    PromotionEvent,
    build_profile,
    complete_promotions,
)
from data_prep.validators import table_in_force, validate_inputs
from payscale.schedule import RevisionSchedule


def _profile(**overrides):
    fields = dict(
        level=1,
        basic_pay=18000,
        allowance_percent=50,
        increment_month="January",
        start_date=date(2024, 1, 1),
        retirement_date=date(2054, 1, 1),
    )
    fields.update(overrides)
    return CareerProfile(**fields)


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

def test_build_profile_from_form_values():
    profile = build_profile(
        {
            "pay_level": "4",
            "current_basic": "25500",
            "current_da": "53",
            "increment_month": "Jul",
            "date_of_joining": "2020-07-01",
            "retirement_date": "2050-06-30",
            "current_nps_corpus": "",
        }
    )
    assert profile.level == 4
    assert profile.basic_pay == 25500
    assert profile.allowance_percent == 53.0
    assert profile.increment_month == "July"
    assert profile.increment_month_number == 7
    assert profile.start_date == date(2020, 7, 1)
    assert profile.existing_corpus == 0.0


def test_build_profile_reports_every_missing_field():
    with pytest.raises(ValidationError) as exc:
        build_profile({"level": 1, "basic_pay": "", "increment_month": "January"})
    errors = exc.value.errors
    assert len(errors) == 3  # basic_pay, start_date, retirement_date
    assert any("basic_pay" in e for e in errors)


def test_increment_month_must_be_january_or_july():
    with pytest.raises(ValidationError):
        build_profile(
            {
                "level": 1,
                "basic_pay": 18000,
                "increment_month": "March",
                "start_date": "2024-01-01",
                "retirement_date": "2054-01-01",
            }
        )


def test_profile_is_immutable():
    profile = _profile()
    with pytest.raises(Exception):
        profile.level = 2


def test_complete_promotions_filters_drafts_and_sorts():
    events = complete_promotions(
        [
            {"date": "2030-01-01", "new_level": "", "new_basic": 30000},
            {"effective_date": date(2029, 1, 1), "level": 3, "basic_pay": 25000},
            PromotionEvent(effective_date=date(2028, 7, 1), level=2, basic_pay=21112),
            PromotionDraft(effective_date=date(2031, 1, 1)),
        ]
    )
    assert [p.effective_date for p in events] == [date(2028, 7, 1), date(2029, 1, 1)]
    assert all(isinstance(p, PromotionEvent) for p in events)


def test_complete_promotions_rejects_malformed_values():
    with pytest.raises(ValidationError) as exc:
        complete_promotions([{"date": "not a date", "level": 2, "basic_pay": 20497}])
    assert exc.value.errors[0].startswith("promotion[0]")


def test_complete_promotions_rejects_non_mapping_entries():
    with pytest.raises(ValidationError) as exc:
        complete_promotions([None, {"date": "2025-07-01", "level": 2, "basic_pay": 20497}, 5])
    assert exc.value.errors == [
        "promotion[0]: not a mapping (NoneType).",
        "promotion[2]: not a mapping (int).",
    ]


def test_incomplete_draft_cannot_become_event():
    draft = PromotionDraft(level=2)
    assert not draft.is_complete
    with pytest.raises(ValueError):
        draft.to_event()


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def test_retirement_before_start_is_an_error(table):
    result = validate_inputs(
        _profile(start_date=date(2024, 1, 1), retirement_date=date(2020, 1, 1)), [], table
    )
    assert not result.is_valid
    assert "must be after start date" in result.errors[0]
    assert "ERRORS (1)" in result.summary()


def test_clean_inputs_pass(table):
    result = validate_inputs(_profile(), [], table)
    assert result.is_valid
    assert result.warnings == []
    assert result.summary() == "✓ All checks passed."


def test_off_table_basic_warns_by_default_and_fails_when_strict(table):
    loose = validate_inputs(_profile(basic_pay=18100), [], table)
    assert loose.is_valid
    assert "step 1 is assumed" in loose.warnings[0]

    strict = validate_inputs(_profile(basic_pay=18100), [], table, policy=PolicyConfig(step_lookup_policy="strict"))
    assert not strict.is_valid


def test_unknown_level_is_an_error(table):
    result = validate_inputs(_profile(level=19, basic_pay=300000), [], table)
    assert not result.is_valid
    assert "level 19" in result.errors[0].lower()


def test_promotion_checks(table):
    promotions = [
        PromotionEvent(effective_date=date(2023, 6, 1), level=5, basic_pay=12345),   # before start
        PromotionEvent(effective_date=date(2025, 7, 1), level=2, basic_pay=20497),   # fine
        PromotionEvent(effective_date=date(2025, 7, 20), level=3, basic_pay=21700),  # same month
        PromotionEvent(effective_date=date(2027, 1, 1), level=2, basic_pay=21112),   # pre-revision amount
        PromotionEvent(effective_date=date(2060, 1, 1), level=4, basic_pay=25500),   # after retirement
    ]
    result = validate_inputs(_profile(), promotions, table)
    assert len(result.warnings) == 3
    assert len(result.errors) == 1
    assert "2027-01-01" in result.errors[0]


def test_table_in_force_follows_revisions(table):
    schedule = RevisionSchedule(first_year=2026)
    assert table_in_force(table, schedule, 2026, 1).amount(1, 1) == 18000
    assert table_in_force(table, schedule, 2026, 2).amount(1, 1) == 36000
    assert table_in_force(table, schedule, 2037, 1).amount(1, 1) == 72000


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def test_table_from_csv(tmp_path, table):
    path = tmp_path / "pay_matrix.csv"
    table.to_frame().to_csv(path, index=False)
    loaded = table_from_frame(load_pay_matrix(path))
    assert dict(loaded.amounts) == dict(table.amounts)


def test_table_from_excel(tmp_path, table):
    path = tmp_path / "pay_matrix.xlsx"
    table.to_frame().to_excel(path, index=False)
    loaded = table_from_frame(load_pay_matrix(path))
    assert loaded.amount(7, 13) == table.amount(7, 13)


def test_loader_drops_blank_pay_rows(tmp_path, table):
    df = table.to_frame().astype({"Basic_Pay": "float"})
    extra = pd.DataFrame({"Level": [1], "Pay_Position": [41], "Basic_Pay": [None]})
    path = tmp_path / "pay_matrix.csv"
    pd.concat([df, extra]).to_csv(path, index=False)
    assert len(load_pay_matrix(path)) == 18 * 40


def test_table_from_frame_rejects_wrong_shape(table):
    df = table.to_frame()
    with pytest.raises(ValidationError):
        table_from_frame(df.drop(columns=["Basic_Pay"]))
    with pytest.raises(ValidationError) as exc:
        table_from_frame(df[df["Pay_Position"] != 40])
    assert len(exc.value.errors) == 18
