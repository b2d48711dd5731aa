"""
Career simulation engine — monthly timeline stepping + benefit orchestration.
"""

from .events import PayRevisionEvent
from .timeline import TimelineEntry, SimulatedTimeline, simulate_timeline
from .runner import SimulationResult, SimulationOutcome, run_simulation, simulate

__all__ = [
    "PayRevisionEvent",
    "TimelineEntry",
    "SimulatedTimeline",
    "simulate_timeline",
    "SimulationResult",
    "SimulationOutcome",
    "run_simulation",
    "simulate",
]
