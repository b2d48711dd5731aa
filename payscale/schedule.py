"""
Decennial pay-scale revision schedule.

Revisions fire in January, every `revision_interval_years`, at years congruent
to `revision_offset_years` modulo the interval (2026, 2036, 2046, ... by
default). The first revision is fixed once, relative to the simulation start.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List

from core.config import DEFAULT_POLICY, PolicyConfig

REVISION_MONTH = 1


@dataclass(frozen=True)
class RevisionSchedule:
    first_year: int
    interval_years: int = DEFAULT_POLICY.revision_interval_years

    @classmethod
    def from_start(cls, start: date, policy: PolicyConfig = DEFAULT_POLICY) -> "RevisionSchedule":
        """
        First revision = January of (decade start of the start year + offset).
        A January that has already passed by the start month moves one interval on.
        """
        interval = policy.revision_interval_years
        first = (start.year // interval) * interval + policy.revision_offset_years
        if (first, REVISION_MONTH) < (start.year, start.month):
            first += interval
        return cls(first_year=first, interval_years=interval)

    def years_through(self, last_year: int) -> List[int]:
        """Revision years from the first one up to and including last_year."""
        return list(range(self.first_year, last_year + 1, self.interval_years))

    def revisions_before(self, year: int, month: int) -> int:
        """Number of revisions that fired strictly before (year, month)."""
        if (year, month) <= (self.first_year, REVISION_MONTH):
            return 0
        last = year if month > REVISION_MONTH else year - 1
        return len(self.years_through(last))
