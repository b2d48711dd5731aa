from __future__ import annotations

from typing import Dict, Tuple

# Long-format pay matrix, one row per (level, step).
PAY_MATRIX_COLUMNS: Tuple[str, ...] = (
    "Level",
    "Pay_Position",
    "Basic_Pay",
)

# Monthly timeline frame handed to the UI layer.
TIMELINE_COLUMNS: Tuple[str, ...] = (
    "Period",
    "Year",
    "Month",
    "Level",
    "Step",
    "Basic Pay",
    "Allowance %",
    "Allowance Amount",
    "Gross Pay",
    "Contribution",
    "Corpus",
    "Pay Revision",
    "Promotion",
)

# Accepted spellings of the annual increment month.
INCREMENT_MONTHS: Dict[str, int] = {
    "January": 1,
    "Jan": 1,
    "July": 7,
    "Jul": 7,
}

# Level base amounts (step 1) used when the table is generated.
BASE_PAY_BY_LEVEL: Tuple[int, ...] = (
    18000, 19900, 21700, 25500, 29200, 35400,
    44900, 47600, 53100, 56100, 67700, 78800,
    118500, 123100, 131100, 144200, 182200, 205400,
)
