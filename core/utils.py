from __future__ import annotations

import math
from datetime import date, timedelta
from typing import Iterable, List, Tuple

import numpy as np
import pandas as pd
from dateutil.relativedelta import relativedelta


def require_columns(df: pd.DataFrame, cols: Iterable[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")


def excel_round(x, decimals: int = 2):
    """Excel ROUND: half away from zero (vectorized)."""
    m = 10 ** decimals
    x = np.asarray(x, dtype=float)
    return np.sign(x) * (np.floor(np.abs(x) * m + 0.5) / m)


def round_amount(x: float) -> int:
    """Round a currency amount to a whole unit, halves away from zero."""
    return int(excel_round(x, 0))


def ceil_amount(x: float) -> int:
    """Smallest whole amount >= x, ignoring float noise below 1e-6."""
    return int(math.ceil(round(float(x), 6)))


def months_between(start: date, end: date) -> int:
    """Complete calendar months from start to end (DATEDIF "m")."""
    delta = relativedelta(pd.Timestamp(end).to_pydatetime(), pd.Timestamp(start).to_pydatetime())
    return delta.years * 12 + delta.months


def service_months(start: date, retirement: date) -> int:
    """
    Complete months of service, counting the retirement date as the last day served.
    2024-01-01 to 2033-12-31 is 120 months.
    """
    return months_between(start, pd.Timestamp(retirement) + timedelta(days=1))


def month_periods(start: date, end: date) -> List[Tuple[int, int]]:
    """
    (year, month) for every calendar month from start's month through end's month, inclusive.
    Day-of-month is ignored.
    """
    first = pd.Timestamp(start).to_period("M")
    last = pd.Timestamp(end).to_period("M")
    if last < first:
        return []
    return [(p.year, p.month) for p in pd.period_range(first, last, freq="M")]


def period_label(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"
