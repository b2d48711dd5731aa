"""
Retirement-benefit calculators.

  calculate_nps_benefit: contribution-based scheme (corpus → lump sum + annuity)
  calculate_ups_benefit: benefit-based scheme (trailing emoluments → pension + gratuity)
"""

from .base import NpsBenefit, UpsBenefit, PensionProjectionPoint
from .nps import calculate_nps_benefit
from .ups import calculate_ups_benefit, project_pension_growth

__all__ = [
    "NpsBenefit",
    "UpsBenefit",
    "PensionProjectionPoint",
    "calculate_nps_benefit",
    "calculate_ups_benefit",
    "project_pension_growth",
]
