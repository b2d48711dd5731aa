from __future__ import annotations

from pathlib import Path
from typing import Union

import pandas as pd

from core.config import DEFAULT_POLICY, PolicyConfig
from core.exceptions import ValidationError
from core.schema import PAY_MATRIX_COLUMNS
from core.utils import require_columns
from payscale.table import PayScaleTable


def load_pay_matrix(path: Union[str, Path]) -> pd.DataFrame:
    """
    Load a long-format pay matrix (Level, Pay_Position, Basic_Pay) from CSV or Excel.
    Rows without a Basic_Pay are dropped.
    """
    path = Path(path)
    if path.suffix.lower() in (".xlsx", ".xls"):
        df = pd.read_excel(path)
    else:
        df = pd.read_csv(path)

    for col in PAY_MATRIX_COLUMNS:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
    if "Basic_Pay" in df.columns:
        df = df.dropna(subset=["Basic_Pay"])
    return df


def table_from_frame(df: pd.DataFrame, *, policy: PolicyConfig = DEFAULT_POLICY) -> PayScaleTable:
    """Build a PayScaleTable from a long-format pay matrix; the shape must match the policy."""
    try:
        require_columns(df, PAY_MATRIX_COLUMNS)
    except ValueError as exc:
        raise ValidationError(f"Pay matrix: {exc}") from exc

    clean = df.dropna(subset=list(PAY_MATRIX_COLUMNS)).astype(
        {"Level": int, "Pay_Position": int, "Basic_Pay": float}
    )
    errors = []
    n_dup = int(clean.duplicated(subset=["Level", "Pay_Position"]).sum())
    if n_dup > 0:
        errors.append(f"{n_dup} duplicate (Level, Pay_Position) rows.")

    levels = sorted(clean["Level"].unique())
    if len(levels) != policy.n_levels:
        errors.append(f"Pay matrix has {len(levels)} levels, expected {policy.n_levels}.")

    amounts = {}
    for level, grp in clean.groupby("Level"):
        grp = grp.sort_values("Pay_Position")
        positions = grp["Pay_Position"].tolist()
        if positions != list(range(1, policy.n_steps + 1)):
            errors.append(f"Level {level} does not have positions 1..{policy.n_steps}.")
            continue
        amounts[int(level)] = tuple(int(round(v)) for v in grp["Basic_Pay"])

    if errors:
        raise ValidationError(f"Pay matrix has the wrong shape ({len(errors)} problem(s)).", errors)
    return PayScaleTable(amounts=amounts, n_steps=policy.n_steps)
