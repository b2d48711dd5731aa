import os
import sys
from datetime import date

import pytest

# Ensure project root is on sys.path before imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from data_prep.profile import CareerProfile  # noqa: E402
from engine.runner import run_simulation  # noqa: E402
from payscale.table import PayScaleTable, default_table  # noqa: E402


def pytest_configure(config):
    """
    Register custom markers to avoid pytest warnings.
    """
    config.addinivalue_line("markers", "unit: mark a test as a unit test")
    config.addinivalue_line("markers", "integration: mark a test as an integration test")
    config.addinivalue_line("markers", "scenario: mark a test as a full career scenario")


@pytest.fixture(scope="session")
def table() -> PayScaleTable:
    return default_table()


@pytest.fixture(scope="session")
def baseline_profile() -> CareerProfile:
    """Level 1 entry pay, 50% allowance, January increments, 30 years of service."""
    return CareerProfile(
        level=1,
        basic_pay=18000,
        allowance_percent=50,
        increment_month="January",
        start_date=date(2024, 1, 1),
        retirement_date=date(2054, 1, 1),
    )


@pytest.fixture(scope="session")
def baseline_result(baseline_profile, table):
    return run_simulation(baseline_profile, table=table)
