"""
Input validation before a career profile enters the simulator.

Catches problems early:
- Retirement date not after the start date
- Levels that are not in the pay-scale table
- Promotion basics that are not steps of the table in force at their date
- Promotions that can never fire (before start, after retirement, same month)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from core.config import DEFAULT_POLICY, PolicyConfig
from data_prep.profile import CareerProfile, PromotionEvent
from payscale.schedule import RevisionSchedule
from payscale.table import PayScaleTable


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for a simulation request."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def table_in_force(
    table: PayScaleTable,
    schedule: RevisionSchedule,
    year: int,
    month: int,
    *,
    policy: PolicyConfig = DEFAULT_POLICY,
) -> PayScaleTable:
    """The table after every revision that fired strictly before (year, month)."""
    current = table
    for _ in range(schedule.revisions_before(year, month)):
        current = current.revised(policy.fitment_factor)
    return current


def validate_inputs(
    profile: CareerProfile,
    promotions: Sequence[PromotionEvent],
    table: PayScaleTable,
    *,
    policy: PolicyConfig = DEFAULT_POLICY,
) -> ValidationResult:
    """
    Run all checks on a profile and its (complete, sorted) promotions.
    Returns a ValidationResult with errors (blocking) and warnings (informational).
    """
    result = ValidationResult()

    # --- Dates ---
    if profile.retirement_date <= profile.start_date:
        result.errors.append(
            f"Retirement date {profile.retirement_date} must be after start date {profile.start_date}."
        )
        return result  # nothing else is meaningful without a service period

    # --- Starting position ---
    if not table.has_level(profile.level):
        result.errors.append(
            f"Pay level {profile.level} is not in the pay-scale table (levels {table.levels[0]}-{table.levels[-1]})."
        )
    elif not table.contains(profile.level, profile.basic_pay):
        msg = f"Basic pay {profile.basic_pay} is not a step of level {profile.level}"
        if policy.step_lookup_policy == "strict":
            result.errors.append(msg + ".")
        else:
            result.warnings.append(msg + "; step 1 is assumed for increments.")

    # --- Promotions ---
    schedule = RevisionSchedule.from_start(profile.start_date, policy)
    seen_months = set()
    for p in promotions:
        label = f"Promotion on {p.effective_date}"
        if p.effective_date < profile.start_date:
            result.warnings.append(f"{label} is before the start date and is ignored.")
            continue
        if (p.year, p.month) > (profile.retirement_date.year, profile.retirement_date.month):
            result.warnings.append(f"{label} is after retirement and never takes effect.")
            continue
        if (p.year, p.month) in seen_months:
            result.warnings.append(f"{label} shares a month with an earlier promotion and is ignored.")
            continue
        seen_months.add((p.year, p.month))

        if not table.has_level(p.level):
            result.errors.append(f"{label}: level {p.level} is not in the pay-scale table.")
            continue
        in_force = table_in_force(table, schedule, p.year, p.month, policy=policy)
        if not in_force.contains(p.level, p.basic_pay):
            options = in_force.amounts_for(p.level)
            result.errors.append(
                f"{label}: basic pay {p.basic_pay} is not a step of level {p.level} "
                f"(range {options[0]}-{options[-1]})."
            )

    return result
