"""
Month-level event checks for the career timeline.

Each simulated month may carry up to four events, applied in this order:
  1. promotion          (a promotion's effective month matches)
  2. pay-scale revision (January of a scheduled revision year)
  3. annual increment   (the profile's increment month)
  4. allowance revision (every allowance revision month, January and July)

Promotions are indexed once by (year, month); only the first promotion of a
month takes effect, and promotions dated before the start date never do.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, Optional, Tuple

from core.config import DEFAULT_POLICY, PolicyConfig
from data_prep.profile import PromotionEvent
from payscale.schedule import REVISION_MONTH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayRevisionEvent:
    """Log entry for one pay-scale revision; not part of the timeline."""
    year: int
    pre_revision_basic: int
    post_revision_basic: int
    month: int = REVISION_MONTH


@dataclass(frozen=True)
class MonthEvents:
    """Which events fire in one simulated month."""
    promotion: Optional[PromotionEvent]
    pay_revision: bool
    increment: bool
    allowance_revision: bool


def index_promotions(
    promotions: Iterable[PromotionEvent],
    start_date: date,
) -> Dict[Tuple[int, int], PromotionEvent]:
    """Map (year, month) → promotion, keeping the earliest per month and dropping pre-start ones."""
    due: Dict[Tuple[int, int], PromotionEvent] = {}
    for p in sorted(promotions, key=lambda p: p.effective_date):
        if p.effective_date < start_date:
            logger.debug("Promotion on %s precedes start %s; excluded.", p.effective_date, start_date)
            continue
        due.setdefault((p.year, p.month), p)
    return due


def check_month(
    year: int,
    month: int,
    *,
    promotions_due: Dict[Tuple[int, int], PromotionEvent],
    next_revision_year: int,
    increment_month: int,
    policy: PolicyConfig = DEFAULT_POLICY,
) -> MonthEvents:
    return MonthEvents(
        promotion=promotions_due.get((year, month)),
        pay_revision=month == REVISION_MONTH and year == next_revision_year,
        increment=month == increment_month,
        allowance_revision=month in policy.allowance_revision_months,
    )
