"""
Policy configuration.
Every rate, cap and schedule constant the engine applies lives here, by name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple


@dataclass(frozen=True)
class PolicyConfig:
    # pay-scale table shape
    n_levels: int = 18
    n_steps: int = 40
    step_growth: float = 1.03

    # promotion must raise basic by at least this ratio (pay protection)
    pay_protection_ratio: float = 1.03

    # pay-scale revision (decennial, January)
    revision_interval_years: int = 10
    revision_offset_years: int = 6
    fitment_factor: float = 2.0

    # allowance (DA) revisions, additive percentage points
    allowance_step_percent: float = 3.0
    allowance_revision_months: Tuple[int, ...] = (1, 7)

    # contribution scheme (NPS-style)
    contribution_rate: float = 0.24
    corpus_return_annual: float = 0.08
    lump_sum_share: float = 0.60
    annuity_share: float = 0.40
    annuity_rate_annual: float = 0.065

    # benefit scheme (UPS-style)
    ups_pension_share: float = 0.50
    emoluments_window_months: int = 10
    gratuity_rate: float = 0.10
    gratuity_cap: int = 2_000_000
    min_qualifying_service_years: float = 10.0

    # post-exit comparison horizon
    comparison_horizon_years: int = 20

    # what to do when a basic pay is not on the table at its level
    step_lookup_policy: Literal["default_first_step", "strict"] = "default_first_step"

    def __post_init__(self) -> None:
        if self.n_levels <= 0 or self.n_steps <= 0:
            raise ValueError("Pay-scale table must have at least one level and one step.")
        if self.revision_interval_years <= 0:
            raise ValueError("revision_interval_years must be positive.")
        if not 0 <= self.revision_offset_years < self.revision_interval_years:
            raise ValueError("revision_offset_years must fall inside one revision interval.")
        if self.fitment_factor <= 0:
            raise ValueError("fitment_factor must be positive.")
        if self.allowance_step_percent < 0:
            raise ValueError("allowance_step_percent cannot be negative.")
        if any(m < 1 or m > 12 for m in self.allowance_revision_months):
            raise ValueError(f"Invalid allowance revision months: {self.allowance_revision_months}")
        for name in ("contribution_rate", "lump_sum_share", "annuity_share", "ups_pension_share", "gratuity_rate"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")
        if self.lump_sum_share + self.annuity_share > 1.0 + 1e-9:
            raise ValueError("lump_sum_share + annuity_share cannot exceed 1.")
        if self.emoluments_window_months <= 0:
            raise ValueError("emoluments_window_months must be positive.")
        if self.comparison_horizon_years <= 0:
            raise ValueError("comparison_horizon_years must be positive.")
        if self.step_lookup_policy not in ("default_first_step", "strict"):
            raise ValueError(f"Unknown step_lookup_policy: {self.step_lookup_policy!r}")

    @property
    def monthly_growth_factor(self) -> float:
        """One month of nominal compounding on the corpus."""
        return 1.0 + self.corpus_return_annual / 12.0

    @property
    def comparison_months(self) -> int:
        return self.comparison_horizon_years * 12


DEFAULT_POLICY = PolicyConfig()
