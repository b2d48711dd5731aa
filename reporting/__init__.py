"""
Reporting — DataFrame views and the NPS vs UPS comparison report.
"""

from .tables import (
    timeline_to_dataframe,
    yearly_snapshot,
    revision_events_to_dataframe,
    pension_growth_to_dataframe,
)
from .summary import ComparisonReport, build_comparison_report, comparison_table

__all__ = [
    "timeline_to_dataframe",
    "yearly_snapshot",
    "revision_events_to_dataframe",
    "pension_growth_to_dataframe",
    "ComparisonReport",
    "build_comparison_report",
    "comparison_table",
]
