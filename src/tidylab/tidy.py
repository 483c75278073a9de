"""Term, summary and augmentation builders."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

import numpy as np

from tidylab._results import AugmentedRow, FittedModel, SummaryRow, TermRow
from tidylab.exceptions import DimensionMismatch
from tidylab.registry import AdapterRegistry, get_extractor

if TYPE_CHECKING:
    import pandas as pd


def tidy(
    model: FittedModel,
    *,
    conf_int: bool = False,
    conf_level: float = 0.95,
    exponentiate: bool = False,
    registry: AdapterRegistry | None = None,
) -> list[TermRow]:
    """Build the per-term table for a fitted model.

    Rows keep the order the backend reports terms in.

    Parameters
    ----------
    model : FittedModel
        Kind-tagged backend result.
    conf_int : bool, default=False
        Include ``conf_low``/``conf_high``.
    conf_level : float, default=0.95
        Confidence level for the bounds.
    exponentiate : bool, default=False
        Report ``exp(estimate)`` and exponentiated bounds, e.g. odds ratios
        for logit models. Standard errors, statistics and p-values are left
        on the linear-predictor scale.
    registry : AdapterRegistry, optional
        Registry to resolve ``model.kind`` on. Defaults to the built-in one.
    """
    if not 0 < conf_level < 1:
        raise ValueError(f"conf_level must be in (0, 1), got {conf_level!r}.")
    extractor = get_extractor(model.kind, registry)
    rows = list(
        extractor.term_rows(model.result, conf_level=conf_level if conf_int else None)
    )
    if exponentiate:
        rows = [_exponentiate(row) for row in rows]
    return rows


def glance(
    model: FittedModel, *, registry: AdapterRegistry | None = None
) -> SummaryRow:
    """Build the one-row summary of model-level statistics."""
    extractor = get_extractor(model.kind, registry)
    row = extractor.summary_row(model.result)
    return replace(row, kind=str(model.kind))


def augment(
    model: FittedModel,
    data: pd.DataFrame,
    *,
    registry: AdapterRegistry | None = None,
) -> list[AugmentedRow]:
    """Build the per-observation table, aligned 1:1 with ``data``.

    Raises:
        DimensionMismatch: If the model did not produce exactly one output
            per row of ``data`` (typically because rows with missing values
            were dropped at fit time).
        UnsupportedTable: If the model kind has no per-observation view.
    """
    extractor = get_extractor(model.kind, registry)
    rows = list(extractor.augmented_rows(model.result, data))
    if len(rows) != len(data):
        raise DimensionMismatch(expected=len(data), actual=len(rows))
    return rows


def _exponentiate(row: TermRow) -> TermRow:
    return replace(
        row,
        estimate=float(np.exp(row.estimate)),
        conf_low=None if row.conf_low is None else float(np.exp(row.conf_low)),
        conf_high=None if row.conf_high is None else float(np.exp(row.conf_high)),
    )
