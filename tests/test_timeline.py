from datetime import date

import pytest

from core.config import DEFAULT_POLICY
from core.exceptions import PayProtectionViolation, ValidationError
from core.utils import round_amount
from data_prep.profile import CareerProfile, PromotionEvent
from engine.events import check_month, index_promotions
from engine.timeline import simulate_timeline


@pytest.fixture(scope="module")
def baseline_timeline(baseline_profile, table):
    return simulate_timeline(baseline_profile, [], table)


def test_one_entry_per_month_inclusive(baseline_timeline):
    entries = baseline_timeline.entries
    assert len(entries) == 361
    assert (entries[0].year, entries[0].month) == (2024, 1)
    assert (entries[-1].year, entries[-1].month) == (2054, 1)
    keys = [(e.year, e.month) for e in entries]
    assert keys == sorted(keys)
    assert len(set(keys)) == len(keys)


def test_first_month_applies_increment_and_allowance(baseline_timeline, table):
    first = baseline_timeline.entries[0]
    assert first.step_index == 2
    assert first.basic_pay == table.amount(1, 2) == 18540
    assert first.allowance_percent == 53.0
    assert first.allowance_amount == round_amount(18540 * 0.53)
    assert first.gross_pay == first.basic_pay + first.allowance_amount
    assert first.contribution == pytest.approx(0.24 * first.gross_pay)
    assert first.corpus == pytest.approx(first.contribution * (1 + 0.08 / 12))


def test_corpus_never_decreases(baseline_timeline):
    corpus = [e.corpus for e in baseline_timeline.entries]
    assert all(b >= a for a, b in zip(corpus, corpus[1:]))


def test_allowance_moves_by_three_points_in_january_and_july(baseline_timeline):
    entries = baseline_timeline.entries
    for prev, cur in zip(entries, entries[1:]):
        assert cur.allowance_percent >= 0
        if cur.pay_revision:
            assert cur.allowance_percent == 3.0
        elif cur.month in (1, 7):
            assert cur.allowance_percent == prev.allowance_percent + 3.0
        else:
            assert cur.allowance_percent == prev.allowance_percent


def test_step_index_stays_in_range(baseline_timeline):
    assert all(1 <= e.step_index <= 40 for e in baseline_timeline.entries)


def test_revisions_fire_in_january_on_schedule(baseline_timeline):
    events = baseline_timeline.revision_events
    assert [ev.year for ev in events] == [2026, 2036, 2046]
    for ev in events:
        assert ev.month == 1
        assert ev.year % 10 == 6
        assert ev.post_revision_basic == 2 * ev.pre_revision_basic

    flagged = [(e.year, e.month) for e in baseline_timeline.entries if e.pay_revision]
    assert flagged == [(2026, 1), (2036, 1), (2046, 1)]


def test_increment_after_revision_lands_on_revised_scale(baseline_timeline, table):
    first_rev = baseline_timeline.revision_events[0]
    assert first_rev.pre_revision_basic == 19096
    assert first_rev.post_revision_basic == 38192

    jan_2026 = next(e for e in baseline_timeline.entries if (e.year, e.month) == (2026, 1))
    assert jan_2026.step_index == 4
    assert jan_2026.basic_pay == 2 * table.amount(1, 4)


def test_retirement_not_after_start_raises(table):
    profile = CareerProfile(
        level=1,
        basic_pay=18000,
        start_date=date(2024, 1, 1),
        retirement_date=date(2024, 1, 1),
    )
    with pytest.raises(ValidationError):
        simulate_timeline(profile, [], table)


def test_promotion_applies_and_rederives_step(baseline_profile, table):
    promo = PromotionEvent(effective_date=date(2025, 7, 1), level=2, basic_pay=20497)
    timeline = simulate_timeline(baseline_profile, [promo], table)

    by_month = {(e.year, e.month): e for e in timeline.entries}
    before = by_month[(2025, 6)]
    at = by_month[(2025, 7)]
    assert before.level == 1 and before.basic_pay == 19096
    assert at.promotion
    assert at.level == 2
    assert at.basic_pay == 20497
    assert at.step_index == 2

    jan_2026 = by_month[(2026, 1)]
    assert timeline.revision_events[0].pre_revision_basic == 20497
    assert jan_2026.level == 2
    assert jan_2026.basic_pay == 2 * table.amount(2, 3)


def test_pay_protection_violation_aborts(table):
    profile = CareerProfile(
        level=3,
        basic_pay=21700,
        increment_month="July",
        start_date=date(2024, 1, 1),
        retirement_date=date(2044, 1, 1),
    )
    promo = PromotionEvent(effective_date=date(2024, 3, 1), level=2, basic_pay=21112)
    with pytest.raises(PayProtectionViolation) as exc:
        simulate_timeline(profile, [promo], table)
    assert exc.value.prior_basic == 21700
    assert exc.value.target_basic == 21112
    assert exc.value.minimum_basic == 22351
    assert exc.value.valid_basics[0] == 22397
    assert "Lowest valid basic at the new level is 22397" in str(exc.value)


def test_promotion_before_start_never_fires(baseline_profile, table):
    early = PromotionEvent(effective_date=date(2023, 6, 1), level=5, basic_pay=29200)
    timeline = simulate_timeline(baseline_profile, [early], table)
    assert all(e.level == 1 for e in timeline.entries)
    assert not any(e.promotion for e in timeline.entries)


def test_existing_corpus_seeds_the_accumulator(table):
    profile = CareerProfile(
        level=1,
        basic_pay=18000,
        allowance_percent=50,
        start_date=date(2024, 3, 1),
        retirement_date=date(2036, 3, 1),
        existing_corpus=100000,
    )
    timeline = simulate_timeline(profile, [], table)
    first = timeline.entries[0]
    assert first.step_index == 1
    assert first.corpus == pytest.approx((100000 + first.contribution) * (1 + 0.08 / 12))


def test_off_table_basic_falls_back_to_first_step(table):
    profile = CareerProfile(
        level=1,
        basic_pay=18100,
        start_date=date(2024, 3, 1),
        retirement_date=date(2026, 1, 1),
    )
    timeline = simulate_timeline(profile, [], table)
    assert timeline.entries[0].step_index == 1
    assert timeline.entries[0].basic_pay == 18100
    jan_2025 = next(e for e in timeline.entries if (e.year, e.month) == (2025, 1))
    assert jan_2025.step_index == 2
    assert jan_2025.basic_pay == table.amount(1, 2)


def test_index_promotions_keeps_first_of_month():
    a = PromotionEvent(effective_date=date(2030, 5, 20), level=3, basic_pay=30000)
    b = PromotionEvent(effective_date=date(2030, 5, 2), level=4, basic_pay=31000)
    early = PromotionEvent(effective_date=date(2010, 1, 1), level=2, basic_pay=20000)
    due = index_promotions([a, b, early], date(2024, 1, 1))
    assert due == {(2030, 5): b}


def test_check_month_flags():
    events = check_month(
        2026, 1, promotions_due={}, next_revision_year=2026, increment_month=7, policy=DEFAULT_POLICY
    )
    assert events.pay_revision and events.allowance_revision
    assert not events.increment
    assert events.promotion is None

    events = check_month(2026, 7, promotions_due={}, next_revision_year=2036, increment_month=7)
    assert events.increment and events.allowance_revision and not events.pay_revision
