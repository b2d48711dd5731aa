"""
Career timeline simulator — one calendar month per step, start through retirement.

Per month (order matters):
  1. promotion: level/basic set to the target, step re-derived from the table
     in force, pay protection enforced against the basic held just before
  2. pay-scale revision: basic × fitment factor, allowance reset to 0,
     table in force revised by the same factor, schedule advanced
  3. annual increment: step + 1 (capped at the top step), basic from the table
  4. allowance revision: + allowance_step_percent points
  5. allowance amount and gross pay
  6. contribution = contribution_rate × gross
  7. corpus: contribution credited, then one month of compounding
  8. entry appended

The run is all-or-nothing: any error raised inside the loop leaves no timeline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from core.config import DEFAULT_POLICY, PolicyConfig
from core.exceptions import PayProtectionViolation, ValidationError
from core.utils import ceil_amount, month_periods, period_label, round_amount
from data_prep.profile import CareerProfile, PromotionEvent
from payscale.schedule import RevisionSchedule
from payscale.table import PayScaleTable

from .events import PayRevisionEvent, check_month, index_promotions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimelineEntry:
    """State of one simulated month, after that month's contribution and growth."""
    year: int
    month: int
    level: int
    step_index: int
    basic_pay: int
    allowance_percent: float
    allowance_amount: int
    gross_pay: int
    contribution: float
    corpus: float
    pay_revision: bool = False
    promotion: bool = False

    @property
    def period(self) -> str:
        return period_label(self.year, self.month)

    @property
    def allowance_fraction(self) -> float:
        return self.allowance_percent / 100.0

    @property
    def emoluments(self) -> float:
        """basic × (1 + allowance fraction), unrounded."""
        return self.basic_pay * (1.0 + self.allowance_fraction)


@dataclass(frozen=True)
class SimulatedTimeline:
    entries: Tuple[TimelineEntry, ...]
    revision_events: Tuple[PayRevisionEvent, ...]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[TimelineEntry]:
        return iter(self.entries)

    @property
    def last(self) -> TimelineEntry:
        return self.entries[-1]

    @property
    def final_corpus(self) -> float:
        return self.entries[-1].corpus


def simulate_timeline(
    profile: CareerProfile,
    promotions: Sequence[PromotionEvent],
    table: PayScaleTable,
    *,
    policy: PolicyConfig = DEFAULT_POLICY,
) -> SimulatedTimeline:
    """
    Step through every month from profile.start_date to profile.retirement_date.

    Raises
    ------
    ValidationError
        retirement date not strictly after the start date (nothing is simulated)
    PayProtectionViolation
        a promotion's basic is below pay_protection_ratio × the basic held before it
    """
    if profile.retirement_date <= profile.start_date:
        raise ValidationError(
            f"Retirement date {profile.retirement_date} must be after start date {profile.start_date}."
        )

    lookup = policy.step_lookup_policy
    promotions_due = index_promotions(promotions, profile.start_date)
    schedule = RevisionSchedule.from_start(profile.start_date, policy)
    next_revision_year = schedule.first_year
    increment_month = profile.increment_month_number
    growth = policy.monthly_growth_factor

    in_force = table
    level = profile.level
    basic = int(profile.basic_pay)
    index = in_force.lookup_step_index(level, basic, policy=lookup)
    allowance_pct = float(profile.allowance_percent)
    corpus = float(profile.existing_corpus)

    entries: List[TimelineEntry] = []
    revisions: List[PayRevisionEvent] = []

    for year, month in month_periods(profile.start_date, profile.retirement_date):
        events = check_month(
            year,
            month,
            promotions_due=promotions_due,
            next_revision_year=next_revision_year,
            increment_month=increment_month,
            policy=policy,
        )

        # 1. Promotion
        if events.promotion is not None:
            promo = events.promotion
            prior_basic = basic
            level = promo.level
            basic = int(promo.basic_pay)
            index = in_force.lookup_step_index(level, basic, policy=lookup)
            minimum = ceil_amount(prior_basic * policy.pay_protection_ratio)
            if basic < minimum:
                raise PayProtectionViolation(
                    promotion_date=promo.effective_date,
                    prior_basic=prior_basic,
                    target_basic=basic,
                    minimum_basic=minimum,
                    valid_basics=in_force.valid_promotion_basics(
                        level, prior_basic, ratio=policy.pay_protection_ratio
                    ),
                )
            logger.debug("%s promotion to level %s, basic %s (step %s)", period_label(year, month), level, basic, index)

        # 2. Pay-scale revision
        if events.pay_revision:
            pre_basic = basic
            basic = round_amount(basic * policy.fitment_factor)
            allowance_pct = 0.0
            in_force = in_force.revised(policy.fitment_factor)
            revisions.append(PayRevisionEvent(year=year, pre_revision_basic=pre_basic, post_revision_basic=basic))
            next_revision_year += schedule.interval_years
            logger.debug("%s pay-scale revision: basic %s -> %s", period_label(year, month), pre_basic, basic)

        # 3. Annual increment
        if events.increment:
            index = min(index + 1, in_force.n_steps)
            basic = in_force.next_basic(level, index)

        # 4. Allowance revision
        if events.allowance_revision:
            allowance_pct += policy.allowance_step_percent

        # 5-7. Pay, contribution, corpus
        allowance_amount = round_amount(basic * allowance_pct / 100.0)
        gross = basic + allowance_amount
        contribution = gross * policy.contribution_rate
        corpus = (corpus + contribution) * growth

        entries.append(
            TimelineEntry(
                year=year,
                month=month,
                level=level,
                step_index=index,
                basic_pay=basic,
                allowance_percent=allowance_pct,
                allowance_amount=allowance_amount,
                gross_pay=gross,
                contribution=contribution,
                corpus=corpus,
                pay_revision=events.pay_revision,
                promotion=events.promotion is not None,
            )
        )

    logger.info(
        "Simulated %d months (%s to %s), %d pay-scale revision(s)",
        len(entries),
        entries[0].period,
        entries[-1].period,
        len(revisions),
    )
    return SimulatedTimeline(entries=tuple(entries), revision_events=tuple(revisions))
