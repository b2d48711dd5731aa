"""
Simulation runner — validates inputs, drives the timeline simulator, then
reduces the finished timeline through both benefit calculators.

Two entry points:
  1. run_simulation: returns a SimulationResult or raises a SimulationError
  2. simulate:       returns a SimulationOutcome (result XOR error), never raises
                     a SimulationError

Calculation is all-or-nothing: an error never comes with a partial timeline.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from benefits.base import NpsBenefit, UpsBenefit
from benefits.nps import calculate_nps_benefit
from benefits.ups import calculate_ups_benefit
from core.config import DEFAULT_POLICY, PolicyConfig
from core.exceptions import ComputationError, SimulationError, ValidationError
from core.utils import round_amount, service_months
from data_prep.profile import CareerProfile, PromotionInput, build_profile, complete_promotions
from data_prep.validators import validate_inputs
from payscale.table import PayScaleTable, default_table

from .events import PayRevisionEvent
from .timeline import SimulatedTimeline, TimelineEntry, simulate_timeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationResult:
    timeline: Tuple[TimelineEntry, ...]
    nps: NpsBenefit
    ups: UpsBenefit
    service_years: int
    completed_half_years: int
    retirement_basic: int
    final_allowance_percent: float
    difference_value: int
    is_eligible: bool
    pay_revision_events: Tuple[PayRevisionEvent, ...]
    total_value_nps: int
    total_value_ups: int

    @property
    def simulated_months(self) -> int:
        return len(self.timeline)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SimulationOutcome:
    """Tagged outcome: exactly one of result / error is set."""
    result: Optional[SimulationResult] = None
    error: Optional[SimulationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def status(self) -> str:
        return "ok" if self.error is None else self.error.code


def total_value(exit_value: int, monthly_pension: int, *, policy: PolicyConfig = DEFAULT_POLICY) -> int:
    """Exit lump sum (or gratuity) plus the monthly pension over the comparison horizon."""
    return exit_value + monthly_pension * policy.comparison_months


def run_simulation(
    profile: Union[CareerProfile, Mapping[str, Any]],
    promotions: Iterable[PromotionInput] = (),
    table: Optional[PayScaleTable] = None,
    *,
    policy: PolicyConfig = DEFAULT_POLICY,
) -> SimulationResult:
    """
    Run one career simulation end to end.

    Parameters
    ----------
    profile : CareerProfile or mapping of form values
    promotions : promotion events, drafts or mappings; incomplete drafts are dropped
    table : pay-scale table; the generated default table when omitted
    policy : policy constants

    Raises
    ------
    ValidationError, PayProtectionViolation, ComputationError
    """
    try:
        profile = build_profile(profile)
        events = complete_promotions(promotions)
        if table is None:
            table = default_table() if policy == DEFAULT_POLICY else PayScaleTable.generate(policy=policy)

        check = validate_inputs(profile, events, table, policy=policy)
        for w in check.warnings:
            logger.warning(w)
        if not check.is_valid:
            raise ValidationError(check.errors[0] if len(check.errors) == 1 else check.summary(), check.errors)

        logger.info(
            "Running simulation: level %s, basic %s, %s to %s, %d promotion(s)",
            profile.level,
            profile.basic_pay,
            profile.start_date,
            profile.retirement_date,
            len(events),
        )
        simulated = simulate_timeline(profile, events, table, policy=policy)
        result = _assemble(profile, simulated, policy)
    except SimulationError:
        raise
    except Exception as exc:
        logger.exception("Simulation failed unexpectedly")
        raise ComputationError(f"An error occurred during calculation: {exc}") from exc

    logger.info(
        "NPS total %s vs UPS total %s (difference %s)",
        result.total_value_nps,
        result.total_value_ups,
        result.difference_value,
    )
    return result


def simulate(
    profile: Union[CareerProfile, Mapping[str, Any]],
    promotions: Iterable[PromotionInput] = (),
    table: Optional[PayScaleTable] = None,
    *,
    policy: PolicyConfig = DEFAULT_POLICY,
) -> SimulationOutcome:
    """Same as run_simulation, but every engine error comes back inside the outcome."""
    try:
        return SimulationOutcome(result=run_simulation(profile, promotions, table, policy=policy))
    except SimulationError as exc:
        return SimulationOutcome(error=exc)


def _assemble(
    profile: CareerProfile,
    simulated: SimulatedTimeline,
    policy: PolicyConfig,
) -> SimulationResult:
    months = service_months(profile.start_date, profile.retirement_date)
    completed_half_years = months // 6
    is_eligible = months / 12.0 >= policy.min_qualifying_service_years

    nps = calculate_nps_benefit(simulated.final_corpus, policy=policy)
    ups = calculate_ups_benefit(
        simulated.entries,
        completed_half_years,
        is_eligible,
        nps.monthly_pension,
        policy=policy,
    )

    total_nps = total_value(nps.lump_sum, nps.monthly_pension, policy=policy)
    total_ups = total_value(ups.gratuity, ups.avg_pension_with_growth, policy=policy)
    last = simulated.last

    return SimulationResult(
        timeline=simulated.entries,
        nps=nps,
        ups=ups,
        service_years=round_amount(months / 12.0),
        completed_half_years=completed_half_years,
        retirement_basic=last.basic_pay,
        final_allowance_percent=last.allowance_percent,
        difference_value=total_nps - total_ups,
        is_eligible=is_eligible,
        pay_revision_events=simulated.revision_events,
        total_value_nps=total_nps,
        total_value_ups=total_ups,
    )
