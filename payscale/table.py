"""
PayScaleTable — immutable (level, step) → basic pay lookup.

The table is generated once (3% per step from a level base amount) or built
from a loaded pay matrix, and is read-only thereafter. It can be shared by any
number of simulations.

Steps are 1-based: step 1 is the entry amount of a level, step n_steps the top.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from core.config import DEFAULT_POLICY, PolicyConfig
from core.exceptions import StepLookupError
from core.schema import BASE_PAY_BY_LEVEL
from core.utils import ceil_amount, round_amount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayScaleTable:
    """
    amounts[level] is the ordered tuple of step amounts for that level.
    Shape is fixed by the policy (18 levels × 40 steps by default).
    """

    amounts: Mapping[int, Tuple[int, ...]]
    n_steps: int = DEFAULT_POLICY.n_steps

    def __post_init__(self) -> None:
        frozen: Dict[int, Tuple[int, ...]] = {}
        for level, steps in self.amounts.items():
            steps = tuple(int(a) for a in steps)
            if len(steps) != self.n_steps:
                raise ValueError(
                    f"Level {level} has {len(steps)} steps, expected {self.n_steps}."
                )
            frozen[int(level)] = steps
        object.__setattr__(self, "amounts", MappingProxyType(dict(sorted(frozen.items()))))

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def generate(
        cls,
        base_pay: Sequence[int] = BASE_PAY_BY_LEVEL,
        *,
        policy: PolicyConfig = DEFAULT_POLICY,
    ) -> "PayScaleTable":
        """Each level starts at its base amount; step[i+1] = round(step[i] × step_growth)."""
        if len(base_pay) != policy.n_levels:
            raise ValueError(f"Expected {policy.n_levels} base amounts, got {len(base_pay)}.")

        amounts: Dict[int, Tuple[int, ...]] = {}
        for level, base in enumerate(base_pay, start=1):
            steps = [int(base)]
            for _ in range(policy.n_steps - 1):
                steps.append(round_amount(steps[-1] * policy.step_growth))
            amounts[level] = tuple(steps)
        return cls(amounts=amounts, n_steps=policy.n_steps)

    def revised(self, factor: float) -> "PayScaleTable":
        """Wholesale revision: every amount multiplied by the fitment factor and rounded."""
        return PayScaleTable(
            amounts={
                level: tuple(round_amount(a * factor) for a in steps)
                for level, steps in self.amounts.items()
            },
            n_steps=self.n_steps,
        )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    @property
    def levels(self) -> List[int]:
        return list(self.amounts.keys())

    def has_level(self, level: int) -> bool:
        return level in self.amounts

    def _steps(self, level: int) -> Tuple[int, ...]:
        try:
            return self.amounts[level]
        except KeyError:
            raise KeyError(f"Level {level} is not in the pay-scale table.") from None

    def amount(self, level: int, step: int) -> int:
        if not 1 <= step <= self.n_steps:
            raise IndexError(f"Step {step} outside 1..{self.n_steps}.")
        return self._steps(level)[step - 1]

    def amounts_for(self, level: int) -> List[int]:
        """Allowable basic pay values at a level, ascending."""
        return sorted(self._steps(level))

    def contains(self, level: int, amount: int) -> bool:
        return self.has_level(level) and int(amount) in self._steps(level)

    def lookup_step_index(
        self,
        level: int,
        amount: int,
        *,
        policy: str = DEFAULT_POLICY.step_lookup_policy,
    ) -> int:
        """
        Step whose amount equals `amount` exactly (first match, linear scan).

        On a miss:
          - "default_first_step": step 1 is returned and a warning is logged
          - "strict": StepLookupError is raised
        """
        steps = self.amounts.get(level, ())
        for i, value in enumerate(steps, start=1):
            if value == amount:
                return i

        if policy == "strict":
            raise StepLookupError(level, int(amount))
        logger.warning("Basic pay %s not found at level %s; assuming step 1.", amount, level)
        return 1

    def next_basic(self, level: int, index: int) -> int:
        """Amount at `index`, clamped to the table: past the top step pay stays at the top."""
        index = min(max(int(index), 1), self.n_steps)
        return self._steps(level)[index - 1]

    def valid_promotion_basics(
        self,
        level: int,
        current_basic: int,
        *,
        ratio: float = DEFAULT_POLICY.pay_protection_ratio,
    ) -> List[int]:
        """Basics at `level` that satisfy the pay-protection rule against `current_basic`."""
        minimum = ceil_amount(current_basic * ratio)
        return [a for a in self.amounts_for(level) if a >= minimum]

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    def to_frame(self) -> pd.DataFrame:
        """Long format: Level, Pay_Position, Basic_Pay."""
        levels = np.repeat(np.array(self.levels, dtype=int), self.n_steps)
        positions = np.tile(np.arange(1, self.n_steps + 1), len(self.amounts))
        values = np.concatenate([np.array(s, dtype=np.int64) for s in self.amounts.values()])
        return pd.DataFrame({"Level": levels, "Pay_Position": positions, "Basic_Pay": values})


_DEFAULT_TABLE: Optional[PayScaleTable] = None


def default_table() -> PayScaleTable:
    """The generated table for the default policy, built once and shared."""
    global _DEFAULT_TABLE
    if _DEFAULT_TABLE is None:
        _DEFAULT_TABLE = PayScaleTable.generate()
    return _DEFAULT_TABLE
