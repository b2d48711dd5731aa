"""
Exception types surfaced by the simulation engine.

Every failure the caller can act on derives from SimulationError and carries a
``code`` tag, so an outcome can be reported as a single tagged value.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional, Sequence


class SimulationError(Exception):
    """Base exception for all engine errors."""

    code = "simulation_error"


class ValidationError(SimulationError):
    """Raised when required input is missing, malformed or inconsistent."""

    code = "validation_error"

    def __init__(self, message: str, errors: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.errors: List[str] = list(errors) if errors is not None else [message]


class StepLookupError(ValidationError):
    """Raised under the strict lookup policy when a basic pay is not on the table."""

    def __init__(self, level: int, amount: int):
        super().__init__(f"Basic pay {amount} is not a step of level {level}.")
        self.level = level
        self.amount = amount


class PayProtectionViolation(SimulationError):
    """Raised when a promotion raises basic pay by less than the protected minimum."""

    code = "pay_protection_violation"

    def __init__(
        self,
        *,
        promotion_date: date,
        prior_basic: int,
        target_basic: int,
        minimum_basic: int,
        valid_basics: Sequence[int] = (),
    ):
        message = (
            f"Promotion on {promotion_date:%Y-%m} violates pay protection: "
            f"new basic {target_basic} must be at least {minimum_basic} "
            f"(prior basic {prior_basic})."
        )
        if valid_basics:
            message += f" Lowest valid basic at the new level is {valid_basics[0]}."
        super().__init__(message)
        self.promotion_date = promotion_date
        self.prior_basic = prior_basic
        self.target_basic = target_basic
        self.minimum_basic = minimum_basic
        self.valid_basics = tuple(valid_basics)


class ComputationError(SimulationError):
    """Raised when the engine fails for a reason other than bad input."""

    code = "computation_error"
