"""
Scheme comparison — the headline answer for the member.

  "Which scheme is worth more over the comparison horizon, and by how much?"
  "Am I eligible for the assured pension at all?"
  "Did the gratuity cap bite?"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import pandas as pd

from core.config import DEFAULT_POLICY, PolicyConfig
from engine.runner import SimulationResult


@dataclass
class ComparisonReport:
    """Structured NPS vs UPS comparison."""
    service_years: int
    completed_half_years: int
    is_eligible: bool

    nps_corpus: int
    nps_lump_sum: int
    nps_monthly_pension: int
    ups_monthly_pension: int
    ups_avg_pension_with_growth: int
    ups_gratuity: int

    total_value_nps: int
    total_value_ups: int
    difference_value: int

    flags: List[str] = field(default_factory=list)

    @property
    def better_scheme(self) -> str:
        return "NPS" if self.difference_value >= 0 else "UPS"

    @property
    def verdict(self) -> str:
        return f"{self.better_scheme} is higher by {abs(self.difference_value):,}"

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a display-friendly table."""
        rows = [
            {"Metric": "Service", "Value": f"{self.service_years} years ({self.completed_half_years} half-years)"},
            {"Metric": "NPS Corpus", "Value": f"{self.nps_corpus:,}"},
            {"Metric": "NPS Lump Sum", "Value": f"{self.nps_lump_sum:,}"},
            {"Metric": "NPS Monthly Pension", "Value": f"{self.nps_monthly_pension:,}"},
            {"Metric": "UPS Monthly Pension", "Value": f"{self.ups_monthly_pension:,}"},
            {"Metric": "UPS Avg Pension (with growth)", "Value": f"{self.ups_avg_pension_with_growth:,}"},
            {"Metric": "UPS Gratuity", "Value": f"{self.ups_gratuity:,}"},
            {"Metric": "NPS Total Value", "Value": f"{self.total_value_nps:,}"},
            {"Metric": "UPS Total Value", "Value": f"{self.total_value_ups:,}"},
            {"Metric": "Verdict", "Value": self.verdict},
        ]
        if self.flags:
            rows.append({"Metric": "FLAGS", "Value": " | ".join(self.flags)})
        return pd.DataFrame(rows)


def build_comparison_report(
    result: SimulationResult,
    *,
    policy: PolicyConfig = DEFAULT_POLICY,
) -> ComparisonReport:
    flags = []
    if not result.is_eligible:
        flags.append(
            f"Not eligible for UPS pension: {result.service_years} years of service, "
            f"{policy.min_qualifying_service_years:g} required"
        )
    if result.ups.gratuity_capped:
        flags.append(f"Gratuity capped at {policy.gratuity_cap:,}")
    if result.pay_revision_events:
        years = ", ".join(str(ev.year) for ev in result.pay_revision_events)
        flags.append(f"Pay-scale revisions applied: {years}")

    return ComparisonReport(
        service_years=result.service_years,
        completed_half_years=result.completed_half_years,
        is_eligible=result.is_eligible,
        nps_corpus=result.nps.corpus,
        nps_lump_sum=result.nps.lump_sum,
        nps_monthly_pension=result.nps.monthly_pension,
        ups_monthly_pension=result.ups.monthly_pension,
        ups_avg_pension_with_growth=result.ups.avg_pension_with_growth,
        ups_gratuity=result.ups.gratuity,
        total_value_nps=result.total_value_nps,
        total_value_ups=result.total_value_ups,
        difference_value=result.difference_value,
        flags=flags,
    )


def comparison_table(result: SimulationResult) -> pd.DataFrame:
    """Side-by-side figures: monthly pension, exit payment, total value."""
    return pd.DataFrame(
        [
            {"Measure": "Monthly Pension", "NPS": result.nps.monthly_pension, "UPS": result.ups.monthly_pension},
            {"Measure": "Lump Sum / Gratuity", "NPS": result.nps.lump_sum, "UPS": result.ups.gratuity},
            {"Measure": "Total Value", "NPS": result.total_value_nps, "UPS": result.total_value_ups},
        ]
    )
