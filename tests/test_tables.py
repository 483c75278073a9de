"""Tests for table helpers."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from tidylab import GroupedRunner, TermRow, adjust_pvalues, to_frame
from tidylab._results import TERM_COLUMNS
from tidylab.fitting import ols


def test_to_frame_empty_uses_columns() -> None:
    frame = to_frame([], columns=TERM_COLUMNS)

    assert frame.empty
    assert tuple(frame.columns) == TERM_COLUMNS


def test_to_frame_reindexes_to_columns() -> None:
    rows = [TermRow("x", 1.0, 0.5, 2.0, 0.05)]

    frame = to_frame(rows, columns=[*TERM_COLUMNS, "conf_low"])

    assert pd.isna(frame.loc[0, "conf_low"])


class TestAdjustPvalues:
    def test_bonferroni(self) -> None:
        frame = pd.DataFrame({"p_value": [0.01, 0.02, 0.5]})

        adjusted = adjust_pvalues(frame, method="bonferroni")

        assert list(adjusted["p_value_adjusted"]) == pytest.approx([0.03, 0.06, 1.0])
        assert "p_value_adjusted" not in frame.columns

    def test_within_groups(self) -> None:
        frame = pd.DataFrame(
            {"term": ["a", "a", "b", "b"], "p_value": [0.01, 0.02, 0.01, 0.02]}
        )

        adjusted = adjust_pvalues(frame, method="bonferroni", by="term")

        assert list(adjusted["p_value_adjusted"]) == pytest.approx(
            [0.02, 0.04, 0.02, 0.04]
        )

    def test_missing_stay_missing(self) -> None:
        frame = pd.DataFrame({"p_value": [0.01, np.nan, 0.02]})

        adjusted = adjust_pvalues(frame, method="bonferroni")

        assert adjusted.loc[0, "p_value_adjusted"] == pytest.approx(0.02)
        assert pd.isna(adjusted.loc[1, "p_value_adjusted"])

    def test_missing_column_raises(self) -> None:
        with pytest.raises(ValueError, match="p_value"):
            adjust_pvalues(pd.DataFrame({"estimate": [1.0]}))

    def test_grouped_term_table(self, data) -> None:
        result = GroupedRunner(
            by="cyl", fit=lambda frame: ols("mpg ~ wt + hp", frame)
        ).run(data)

        adjusted = adjust_pvalues(result.table, by="term")

        assert (adjusted["p_value_adjusted"] >= adjusted["p_value"]).all()
