"""Flat table helpers for tidy rows."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

import numpy as np
import pandas as pd
from statsmodels.stats.multitest import multipletests

MISSING = np.nan
"""Marker for cells a model kind does not define."""


def to_frame(
    rows: Iterable[Any], *, columns: Sequence[str] | None = None
) -> pd.DataFrame:
    """Convert TermRow/SummaryRow/AugmentedRow sequences to a DataFrame.

    Rows may carry different fields (e.g. summaries of different model
    kinds); absent cells are filled with ``MISSING``. ``columns`` fixes the
    column set and order, which also shapes the frame when ``rows`` is
    empty.
    """
    records = [row.as_dict() for row in rows]
    if not records:
        return pd.DataFrame(columns=list(columns or ()))
    frame = pd.DataFrame.from_records(records)
    if columns is not None:
        frame = frame.reindex(columns=list(columns), fill_value=MISSING)
    return frame


def adjust_pvalues(
    frame: pd.DataFrame,
    *,
    method: str = "fdr_bh",
    by: str | Sequence[str] | None = None,
    column: str = "p_value",
) -> pd.DataFrame:
    """Return a copy of ``frame`` with a ``<column>_adjusted`` column.

    Uses ``statsmodels.stats.multitest.multipletests``. With ``by``, the
    correction is applied within each group (e.g. per term across many
    models). Missing p-values stay missing and are not counted.

    Parameters
    ----------
    frame : pd.DataFrame
        Table with a p-value column, typically from ``to_frame(tidy(...))``
        or a grouped run.
    method : str, default="fdr_bh"
        Any method accepted by multipletests ("bonferroni", "holm",
        "fdr_bh", "fdr_by", ...).
    by : str or sequence of str, optional
        Column(s) to adjust within.
    column : str, default="p_value"
        Name of the p-value column.
    """
    if column not in frame.columns:
        raise ValueError(f"Column {column!r} not found in frame.")
    result = frame.copy()
    target = f"{column}_adjusted"
    result[target] = MISSING
    if by is None:
        groups: Iterable[pd.Index] = [result.index]
    else:
        keys = [by] if isinstance(by, str) else list(by)
        groups = result.groupby(keys, sort=False, dropna=False).groups.values()
    for index in groups:
        p_values = result.loc[index, column].astype(float)
        present = p_values.notna()
        if not present.any():
            continue
        _, adjusted, _, _ = multipletests(p_values[present].to_numpy(), method=method)
        result.loc[p_values[present].index, target] = adjusted
    return result
