"""
Pay-scale tables — generation, step lookup, revision schedule.
"""

from .table import PayScaleTable, default_table
from .schedule import RevisionSchedule, REVISION_MONTH

__all__ = ["PayScaleTable", "default_table", "RevisionSchedule", "REVISION_MONTH"]
