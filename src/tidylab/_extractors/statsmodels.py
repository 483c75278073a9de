"""Extractors for statsmodels results.

Term names come from ``model.exog_names`` so array-API and formula-API fits
tidy the same way. Confidence bounds use ``conf_int(alpha=1 - conf_level)``.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np
import pandas as pd

from tidylab._extractors._common import align_rows, as_float, term_rows_from_arrays
from tidylab._results import AugmentedRow, SummaryRow, TermRow


def _term_rows(result: Any, conf_level: float | None) -> list[TermRow]:
    conf = None
    if conf_level is not None:
        conf = result.conf_int(alpha=1 - conf_level)
    return term_rows_from_arrays(
        result.model.exog_names,
        result.params,
        result.bse,
        result.tvalues,
        result.pvalues,
        conf,
    )


class RegressionExtractor:
    """OLS/WLS (``RegressionResults``)."""

    kind = "regression"

    def term_rows(
        self, result: Any, *, conf_level: float | None = None
    ) -> list[TermRow]:
        return _term_rows(result, conf_level)

    def summary_row(self, result: Any) -> SummaryRow:
        return SummaryRow(
            kind=self.kind,
            values={
                "r_squared": as_float(result.rsquared),
                "adj_r_squared": as_float(result.rsquared_adj),
                "sigma": math.sqrt(as_float(result.scale)),
                "statistic": as_float(result.fvalue),
                "p_value": as_float(result.f_pvalue),
                "df": as_float(result.df_model),
                "log_lik": as_float(result.llf),
                "aic": as_float(result.aic),
                "bic": as_float(result.bic),
                "deviance": as_float(result.ssr),
                "df_residual": as_float(result.df_resid),
                "nobs": int(result.nobs),
            },
        )

    def augmented_rows(self, result: Any, data: pd.DataFrame) -> list[AugmentedRow]:
        fitted = np.asarray(result.fittedvalues)
        if len(fitted) != len(data):
            # Influence measures are meaningless on misaligned rows.
            return align_rows(data, fitted, result.resid)
        influence = result.get_influence()
        return align_rows(
            data,
            fitted,
            result.resid,
            {
                "hat": influence.hat_matrix_diag,
                "cooksd": influence.cooks_distance[0],
                "std_resid": influence.resid_studentized_internal,
            },
        )


class GLMExtractor:
    """Generalized linear models (``GLMResults``).

    Fitted values and response residuals are on the response scale.
    """

    kind = "glm"

    def term_rows(
        self, result: Any, *, conf_level: float | None = None
    ) -> list[TermRow]:
        return _term_rows(result, conf_level)

    def summary_row(self, result: Any) -> SummaryRow:
        return SummaryRow(
            kind=self.kind,
            values={
                "null_deviance": as_float(result.null_deviance),
                "df_null": as_float(result.df_model + result.df_resid),
                "log_lik": as_float(result.llf),
                "aic": as_float(result.aic),
                "bic": as_float(result.bic_llf),
                "deviance": as_float(result.deviance),
                "df_residual": as_float(result.df_resid),
                "nobs": int(result.nobs),
            },
        )

    def augmented_rows(self, result: Any, data: pd.DataFrame) -> list[AugmentedRow]:
        fitted = np.asarray(result.fittedvalues)
        if len(fitted) != len(data):
            return align_rows(data, fitted, result.resid_response)
        influence = result.get_influence()
        return align_rows(
            data,
            fitted,
            result.resid_response,
            {
                "resid_deviance": result.resid_deviance,
                "resid_pearson": result.resid_pearson,
                "hat": influence.hat_matrix_diag,
                "cooksd": influence.cooks_distance[0],
            },
        )


class DiscreteExtractor:
    """Binary-response models (``Logit``/``Probit`` results)."""

    kind = "discrete"

    def term_rows(
        self, result: Any, *, conf_level: float | None = None
    ) -> list[TermRow]:
        return _term_rows(result, conf_level)

    def summary_row(self, result: Any) -> SummaryRow:
        return SummaryRow(
            kind=self.kind,
            values={
                "pseudo_r_squared": as_float(result.prsquared),
                "statistic": as_float(result.llr),
                "p_value": as_float(result.llr_pvalue),
                "df": as_float(result.df_model),
                "log_lik": as_float(result.llf),
                "null_log_lik": as_float(result.llnull),
                "aic": as_float(result.aic),
                "bic": as_float(result.bic),
                "df_residual": as_float(result.df_resid),
                "nobs": int(result.nobs),
            },
        )

    def augmented_rows(self, result: Any, data: pd.DataFrame) -> list[AugmentedRow]:
        # fittedvalues is the linear predictor; predict() gives probabilities.
        return align_rows(
            data,
            result.predict(),
            result.resid_response,
            {
                "resid_deviance": result.resid_dev,
                "resid_pearson": result.resid_pearson,
            },
        )
