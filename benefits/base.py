"""
Result records for the two retirement-benefit schemes.
Both are terminal figures reduced from a finished timeline and are never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class NpsBenefit:
    """Contribution-based scheme: corpus split into a lump sum and an annuity."""

    corpus: int
    lump_sum: int
    annuity_corpus: int
    monthly_pension: int
    annuity_rate: float  # percent per annum

    @property
    def exit_value(self) -> int:
        return self.lump_sum


@dataclass(frozen=True)
class PensionProjectionPoint:
    """Projected UPS pension at one post-exit allowance revision."""

    year: int
    month: int
    pension: int
    comparison_pension: int  # NPS monthly pension, constant across the series


@dataclass(frozen=True)
class UpsBenefit:
    """Benefit-based scheme: share of trailing emoluments plus a capped gratuity."""

    avg_emoluments: int
    monthly_pension: int
    gratuity: int
    gratuity_capped: bool
    avg_pension_with_growth: int
    pension_growth: Tuple[PensionProjectionPoint, ...] = field(default=(), repr=False)

    @property
    def exit_value(self) -> int:
        return self.gratuity
