"""
Core package — policy configuration, column schemas, errors and shared utilities.
No business logic lives here.
"""

from .schema import PAY_MATRIX_COLUMNS, TIMELINE_COLUMNS, INCREMENT_MONTHS, BASE_PAY_BY_LEVEL
from .config import PolicyConfig, DEFAULT_POLICY
from .exceptions import (
    SimulationError,
    ValidationError,
    StepLookupError,
    PayProtectionViolation,
    ComputationError,
)
from .utils import require_columns, round_amount, months_between, service_months, month_periods

__all__ = [
    "PAY_MATRIX_COLUMNS",
    "TIMELINE_COLUMNS",
    "INCREMENT_MONTHS",
    "BASE_PAY_BY_LEVEL",
    "PolicyConfig",
    "DEFAULT_POLICY",
    "SimulationError",
    "ValidationError",
    "StepLookupError",
    "PayProtectionViolation",
    "ComputationError",
    "require_columns",
    "round_amount",
    "months_between",
    "service_months",
    "month_periods",
]
