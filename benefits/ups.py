"""
UPS-style benefit — assured pension on trailing emoluments, plus gratuity.

Inputs are the finished timeline, the completed half-years of service, the
eligibility flag and the NPS monthly pension (carried only as the comparison
line of the post-exit projection; it plays no part in the UPS math).

Post-exit projection:
  For each of `comparison_horizon_years` years the allowance is revised twice
  (January, July) by `allowance_step_percent` points, starting from the
  allowance held at retirement. The projected pension at each point is the
  base pension scaled by (1 + cumulative allowance fraction).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence

import numpy as np

from core.config import DEFAULT_POLICY, PolicyConfig
from core.utils import round_amount

from .base import PensionProjectionPoint, UpsBenefit

if TYPE_CHECKING:
    from engine.timeline import TimelineEntry


def project_pension_growth(
    base_pension: int,
    *,
    start_year: int,
    start_allowance_percent: float,
    comparison_pension: int,
    policy: PolicyConfig = DEFAULT_POLICY,
) -> List[PensionProjectionPoint]:
    """Pension at every post-exit allowance revision over the comparison horizon."""
    points = []
    allowance_pct = float(start_allowance_percent)
    for k in range(policy.comparison_horizon_years):
        for month in policy.allowance_revision_months:
            allowance_pct += policy.allowance_step_percent
            points.append(
                PensionProjectionPoint(
                    year=start_year + k,
                    month=month,
                    pension=round_amount(base_pension * (1.0 + allowance_pct / 100.0)),
                    comparison_pension=comparison_pension,
                )
            )
    return points


def calculate_ups_benefit(
    timeline: Sequence["TimelineEntry"],
    completed_half_years: int,
    is_eligible: bool,
    comparison_pension: int,
    *,
    policy: PolicyConfig = DEFAULT_POLICY,
) -> UpsBenefit:
    if len(timeline) == 0:
        raise ValueError("Cannot compute UPS benefit from an empty timeline.")
    if completed_half_years < 0:
        raise ValueError(f"completed_half_years cannot be negative, got {completed_half_years}.")

    window = timeline[-policy.emoluments_window_months:]
    avg_emoluments = float(np.mean([e.emoluments for e in window]))
    monthly_pension = round_amount(avg_emoluments * policy.ups_pension_share) if is_eligible else 0

    last = timeline[-1]
    gratuity = round_amount(last.emoluments * policy.gratuity_rate * completed_half_years)
    gratuity_capped = gratuity > policy.gratuity_cap
    gratuity = min(gratuity, policy.gratuity_cap)

    growth = project_pension_growth(
        monthly_pension,
        start_year=last.year,
        start_allowance_percent=last.allowance_percent,
        comparison_pension=comparison_pension,
        policy=policy,
    )
    avg_with_growth = round_amount(np.mean([p.pension for p in growth]))

    return UpsBenefit(
        avg_emoluments=round_amount(avg_emoluments),
        monthly_pension=monthly_pension,
        gratuity=gratuity,
        gratuity_capped=gratuity_capped,
        avg_pension_with_growth=avg_with_growth,
        pension_growth=tuple(growth),
    )
