"""
DataFrame views of a simulation result for a UI layer.

timeline_to_dataframe:        one row per simulated month
yearly_snapshot:              every 12th month, flagged with that year's revision
revision_events_to_dataframe: pre/post basic per pay-scale revision
pension_growth_to_dataframe:  post-exit UPS projection vs the flat NPS pension
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from benefits.base import UpsBenefit
from core.config import DEFAULT_POLICY, PolicyConfig
from core.schema import TIMELINE_COLUMNS
from engine.events import PayRevisionEvent
from engine.runner import SimulationResult
from engine.timeline import TimelineEntry


def timeline_to_dataframe(timeline: Sequence[TimelineEntry]) -> pd.DataFrame:
    rows = [
        {
            "Period": e.period,
            "Year": e.year,
            "Month": e.month,
            "Level": e.level,
            "Step": e.step_index,
            "Basic Pay": e.basic_pay,
            "Allowance %": e.allowance_percent,
            "Allowance Amount": e.allowance_amount,
            "Gross Pay": e.gross_pay,
            "Contribution": e.contribution,
            "Corpus": e.corpus,
            "Pay Revision": e.pay_revision,
            "Promotion": e.promotion,
        }
        for e in timeline
    ]
    return pd.DataFrame(rows, columns=list(TIMELINE_COLUMNS))


def yearly_snapshot(result: SimulationResult, *, policy: PolicyConfig = DEFAULT_POLICY) -> pd.DataFrame:
    """Every 12th month from the start, with the revision (if any) applied in that year."""
    df = timeline_to_dataframe(result.timeline)
    yearly = df.iloc[::12].reset_index(drop=True)

    revised_years = {ev.year for ev in result.pay_revision_events}
    yearly["Revision Applied"] = yearly["Year"].map(
        lambda y: f"Revision (×{policy.fitment_factor:g})" if y in revised_years else ""
    )
    yearly["Corpus"] = yearly["Corpus"].round(0)
    return yearly[["Year", "Level", "Basic Pay", "Allowance %", "Gross Pay", "Corpus", "Revision Applied"]]


def revision_events_to_dataframe(events: Sequence[PayRevisionEvent]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Year": ev.year,
                "Pre-Revision Basic": ev.pre_revision_basic,
                "Post-Revision Basic": ev.post_revision_basic,
            }
            for ev in events
        ],
        columns=["Year", "Pre-Revision Basic", "Post-Revision Basic"],
    )


def pension_growth_to_dataframe(ups: UpsBenefit) -> pd.DataFrame:
    df = pd.DataFrame(
        [
            {"Year": p.year, "Month": p.month, "UPS Pension": p.pension, "NPS Pension": p.comparison_pension}
            for p in ups.pension_growth
        ],
        columns=["Year", "Month", "UPS Pension", "NPS Pension"],
    )
    df["Period"] = [f"{y:04d}-{m:02d}" for y, m in zip(df["Year"], df["Month"])]
    return df
