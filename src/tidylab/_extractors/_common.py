"""Helpers shared by the built-in extractors."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any

import numpy as np
import pandas as pd

from tidylab._results import AugmentedRow, TermRow
from tidylab.exceptions import DimensionMismatch


def as_float(value: Any) -> float:
    """Coerce a backend scalar to a plain float, mapping None to NaN."""
    if value is None:
        return math.nan
    return float(value)


def term_rows_from_arrays(
    names: Sequence[str],
    estimate: Any,
    std_error: Any,
    statistic: Any,
    p_value: Any,
    conf: Any | None = None,
) -> list[TermRow]:
    """Zip per-term arrays into TermRows, keeping the given order.

    ``conf`` is an (n_terms, 2) array of lower/upper bounds, or None.
    """
    estimate = np.asarray(estimate, dtype=float)
    std_error = np.asarray(std_error, dtype=float)
    statistic = np.asarray(statistic, dtype=float)
    p_value = np.asarray(p_value, dtype=float)
    bounds = None if conf is None else np.asarray(conf, dtype=float)
    rows = []
    for i, name in enumerate(names):
        rows.append(
            TermRow(
                term=str(name),
                estimate=float(estimate[i]),
                std_error=float(std_error[i]),
                statistic=float(statistic[i]),
                p_value=float(p_value[i]),
                conf_low=None if bounds is None else float(bounds[i, 0]),
                conf_high=None if bounds is None else float(bounds[i, 1]),
            )
        )
    return rows


def align_rows(
    data: pd.DataFrame,
    fitted: Any,
    residual: Any,
    extras: Mapping[str, Any] | None = None,
) -> list[AugmentedRow]:
    """Pair each observation of ``data`` with its fitted output, by position.

    Raises:
        DimensionMismatch: If the per-observation arrays and ``data`` differ
            in length.
    """
    fitted = np.asarray(fitted, dtype=float)
    residual = np.asarray(residual, dtype=float)
    columns = {name: np.asarray(values) for name, values in (extras or {}).items()}
    n_obs = len(data)
    for values in (fitted, residual, *columns.values()):
        if len(values) != n_obs:
            raise DimensionMismatch(expected=n_obs, actual=len(values))
    records = data.to_dict(orient="records")
    return [
        AugmentedRow(
            observation=record,
            fitted_value=float(fitted[i]),
            residual=float(residual[i]),
            extras={name: values[i].item() for name, values in columns.items()},
        )
        for i, record in enumerate(records)
    ]
