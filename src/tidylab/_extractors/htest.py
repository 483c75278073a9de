"""Extractor for hypothesis tests built by tidylab.fitting."""

from __future__ import annotations

from typing import Any

import pandas as pd

from tidylab._results import HypothesisTest, SummaryRow, TermRow
from tidylab.exceptions import UnsupportedTable


class HypothesisTestExtractor:
    """Tidies a ``HypothesisTest`` into one term and one summary row."""

    kind = "htest"

    def term_rows(
        self, result: HypothesisTest, *, conf_level: float | None = None
    ) -> list[TermRow]:
        # Bounds were computed at test time; conf_level only toggles them.
        with_conf = conf_level is not None
        return [
            TermRow(
                term=result.term,
                estimate=result.estimate,
                std_error=result.std_error,
                statistic=result.statistic,
                p_value=result.p_value,
                conf_low=result.conf_low if with_conf else None,
                conf_high=result.conf_high if with_conf else None,
            )
        ]

    def summary_row(self, result: HypothesisTest) -> SummaryRow:
        return SummaryRow(
            kind=self.kind,
            values={
                "estimate": result.estimate,
                "statistic": result.statistic,
                "p_value": result.p_value,
                "parameter": result.parameter,
                "conf_low": result.conf_low,
                "conf_high": result.conf_high,
                "method": result.method,
                "alternative": result.alternative,
                "nobs": result.nobs,
            },
        )

    def augmented_rows(self, result: Any, data: pd.DataFrame) -> list[Any]:
        raise UnsupportedTable(self.kind, "augment")
