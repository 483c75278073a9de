"""Fitting helpers that return kind-tagged results.

Each helper delegates estimation to its backend (statsmodels, scipy.stats,
scikit-learn) and wraps the native result in a ``FittedModel`` so the
builders can resolve the right extractor without inspecting types.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

import numpy as np
import pandas as pd
import statsmodels.api as sm
import statsmodels.formula.api as smf
from scipy import stats
from sklearn.cluster import KMeans

from tidylab._results import ClusterFit, FittedModel, HypothesisTest
from tidylab.type_aliases import (
    Alternative,
    CorrelationMethod,
    ModelKind,
    coerce_choice,
)


def ols(formula: str, data: pd.DataFrame, **fit_kwargs: Any) -> FittedModel:
    """Ordinary least squares via the statsmodels formula API.

    Rows with missing values in model variables are dropped, so pass
    ``data.dropna(subset=...)`` to ``augment``.
    """
    result = smf.ols(formula, data=data).fit(**fit_kwargs)
    return FittedModel(kind=ModelKind.OLS, result=result)


def wls(
    formula: str,
    data: pd.DataFrame,
    weights: str | Sequence[float],
    **fit_kwargs: Any,
) -> FittedModel:
    """Weighted least squares; ``weights`` is a column name or an array."""
    if isinstance(weights, str):
        weights = data[weights]
    result = smf.wls(formula, data=data, weights=weights).fit(**fit_kwargs)
    return FittedModel(kind=ModelKind.WLS, result=result)


def glm(
    formula: str,
    data: pd.DataFrame,
    family: Any | None = None,
    **fit_kwargs: Any,
) -> FittedModel:
    """Generalized linear model; ``family`` defaults to Gaussian."""
    if family is None:
        family = sm.families.Gaussian()
    result = smf.glm(formula, data=data, family=family).fit(**fit_kwargs)
    return FittedModel(kind=ModelKind.GLM, result=result)


def logit(formula: str, data: pd.DataFrame, **fit_kwargs: Any) -> FittedModel:
    fit_kwargs.setdefault("disp", 0)
    result = smf.logit(formula, data=data).fit(**fit_kwargs)
    return FittedModel(kind=ModelKind.LOGIT, result=result)


def probit(formula: str, data: pd.DataFrame, **fit_kwargs: Any) -> FittedModel:
    fit_kwargs.setdefault("disp", 0)
    result = smf.probit(formula, data=data).fit(**fit_kwargs)
    return FittedModel(kind=ModelKind.PROBIT, result=result)


def cor_test(
    data: pd.DataFrame,
    x: str,
    y: str,
    *,
    method: CorrelationMethod | str = CorrelationMethod.PEARSON,
    alternative: Alternative | str = Alternative.TWO_SIDED,
    conf_level: float = 0.95,
) -> FittedModel:
    """Test for association between two columns, using complete pairs.

    Pearson reports the t statistic on ``n - 2`` degrees of freedom and a
    Fisher-z confidence interval. Spearman reports the S statistic and
    Kendall the normal-approximation z statistic; neither has a standard
    error or interval, so those are NaN.
    """
    method = coerce_choice(CorrelationMethod, method, "method")
    alternative = coerce_choice(Alternative, alternative, "alternative")
    _check_conf_level(conf_level)
    pairs = data[[x, y]].dropna()
    a = pairs[x].to_numpy(dtype=float)
    b = pairs[y].to_numpy(dtype=float)
    n = len(pairs)

    if method == CorrelationMethod.PEARSON:
        res = stats.pearsonr(a, b, alternative=alternative.value)
        r = float(res.statistic)
        df = n - 2
        std_error = math.sqrt((1 - r**2) / df) if df > 0 else math.nan
        statistic = r / std_error if std_error else math.copysign(math.inf, r)
        conf_low, conf_high = math.nan, math.nan
        if n > 3:
            ci = res.confidence_interval(confidence_level=conf_level)
            conf_low, conf_high = float(ci.low), float(ci.high)
        test = HypothesisTest(
            term="cor",
            estimate=r,
            statistic=statistic,
            p_value=float(res.pvalue),
            std_error=std_error,
            conf_low=conf_low,
            conf_high=conf_high,
            conf_level=conf_level,
            parameter=float(df),
            method="Pearson's product-moment correlation",
            alternative=alternative.value,
            nobs=n,
        )
    elif method == CorrelationMethod.SPEARMAN:
        res = stats.spearmanr(a, b, alternative=alternative.value)
        rho = float(res.statistic)
        test = HypothesisTest(
            term="rho",
            estimate=rho,
            statistic=(n**3 - n) * (1 - rho) / 6,
            p_value=float(res.pvalue),
            std_error=math.nan,
            conf_low=math.nan,
            conf_high=math.nan,
            conf_level=conf_level,
            parameter=math.nan,
            method="Spearman's rank correlation rho",
            alternative=alternative.value,
            nobs=n,
        )
    else:
        res = stats.kendalltau(a, b, alternative=alternative.value)
        tau = float(res.statistic)
        z = _kendall_z(a, b, tau)
        test = HypothesisTest(
            term="tau",
            estimate=tau,
            statistic=z,
            p_value=float(res.pvalue),
            std_error=math.nan,
            conf_low=math.nan,
            conf_high=math.nan,
            conf_level=conf_level,
            parameter=math.nan,
            method="Kendall's rank correlation tau",
            alternative=alternative.value,
            nobs=n,
        )
    return FittedModel(kind=ModelKind.HTEST, result=test)


def t_test(
    data: pd.DataFrame,
    x: str,
    y: str | None = None,
    *,
    group: str | None = None,
    mu: float = 0.0,
    paired: bool = False,
    equal_var: bool = False,
    alternative: Alternative | str = Alternative.TWO_SIDED,
    conf_level: float = 0.95,
) -> FittedModel:
    """Student/Welch t-test on DataFrame columns.

    - ``x`` alone: one-sample test of mean(x) against ``mu``.
    - ``x`` and ``y``: two-sample (or paired, with ``paired=True``) test of
      x minus y against ``mu``.
    - ``x`` and ``group``: two-sample test of ``x`` between the two levels
      of ``group`` (first level minus second, in sorted order).
    """
    alternative = coerce_choice(Alternative, alternative, "alternative")
    _check_conf_level(conf_level)
    if y is not None and group is not None:
        raise ValueError("Pass either y or group, not both.")
    if group is not None:
        if paired:
            raise ValueError("paired=True requires y, not group.")
        a, b = _split_by_group(data, x, group)
    elif y is None:
        a, b = data[x].dropna().to_numpy(dtype=float), None
    elif paired:
        pairs = data[[x, y]].dropna()
        a, b = pairs[x].to_numpy(dtype=float), pairs[y].to_numpy(dtype=float)
    else:
        a = data[x].dropna().to_numpy(dtype=float)
        b = data[y].dropna().to_numpy(dtype=float)

    if b is None or paired:
        values = a if b is None else a - b
        res = stats.ttest_1samp(values, mu, alternative=alternative.value)
        ci = res.confidence_interval(confidence_level=conf_level)
        test = HypothesisTest(
            term="mean" if b is None else "mean_difference",
            estimate=float(values.mean()),
            statistic=float(res.statistic),
            p_value=float(res.pvalue),
            std_error=float(values.std(ddof=1) / math.sqrt(len(values))),
            conf_low=float(ci.low),
            conf_high=float(ci.high),
            conf_level=conf_level,
            parameter=float(res.df),
            method="One Sample t-test" if b is None else "Paired t-test",
            alternative=alternative.value,
            nobs=len(values),
        )
        return FittedModel(kind=ModelKind.HTEST, result=test)

    res = stats.ttest_ind(
        a - mu, b, equal_var=equal_var, alternative=alternative.value
    )
    ci = res.confidence_interval(confidence_level=conf_level)
    var_a, var_b = a.var(ddof=1), b.var(ddof=1)
    n_a, n_b = len(a), len(b)
    if equal_var:
        pooled = ((n_a - 1) * var_a + (n_b - 1) * var_b) / (n_a + n_b - 2)
        std_error = math.sqrt(pooled * (1 / n_a + 1 / n_b))
    else:
        std_error = math.sqrt(var_a / n_a + var_b / n_b)
    test = HypothesisTest(
        term="mean_difference",
        estimate=float(a.mean() - b.mean()),
        statistic=float(res.statistic),
        p_value=float(res.pvalue),
        std_error=float(std_error),
        conf_low=float(ci.low) + mu,
        conf_high=float(ci.high) + mu,
        conf_level=conf_level,
        parameter=float(res.df),
        method="Two Sample t-test" if equal_var else "Welch Two Sample t-test",
        alternative=alternative.value,
        nobs=n_a + n_b,
    )
    return FittedModel(kind=ModelKind.HTEST, result=test)


def kmeans(
    data: pd.DataFrame,
    columns: Sequence[str],
    n_clusters: int,
    *,
    random_state: int | None = None,
    **kmeans_kwargs: Any,
) -> FittedModel:
    """k-means on ``columns``, dropping rows with missing values.

    Pass ``data.dropna(subset=columns)`` to ``augment``.
    """
    columns = list(columns)
    X = data[columns].dropna().to_numpy(dtype=float)
    kmeans_kwargs.setdefault("n_init", 10)
    estimator = KMeans(
        n_clusters=n_clusters, random_state=random_state, **kmeans_kwargs
    ).fit(X)
    return FittedModel(
        kind=ModelKind.KMEANS,
        result=ClusterFit(estimator=estimator, X=X, feature_names=columns),
    )


def _split_by_group(
    data: pd.DataFrame, x: str, group: str
) -> tuple[np.ndarray, np.ndarray]:
    subset = data[[x, group]].dropna()
    levels = sorted(subset[group].unique())
    if len(levels) != 2:
        raise ValueError(
            f"group column {group!r} must have exactly 2 levels, got {len(levels)}."
        )
    first = subset.loc[subset[group] == levels[0], x].to_numpy(dtype=float)
    second = subset.loc[subset[group] == levels[1], x].to_numpy(dtype=float)
    return first, second


def _kendall_z(a: np.ndarray, b: np.ndarray, tau: float) -> float:
    """Normal score of Kendall's S with the variance corrected for ties."""
    n = len(a)
    t = np.unique(a, return_counts=True)[1].astype(float)
    u = np.unique(b, return_counts=True)[1].astype(float)
    pairs = n * (n - 1) / 2
    ties_a = (t * (t - 1)).sum() / 2
    ties_b = (u * (u - 1)).sum() / 2
    s = tau * math.sqrt((pairs - ties_a) * (pairs - ties_b))
    var = (
        n * (n - 1) * (2 * n + 5)
        - (t * (t - 1) * (2 * t + 5)).sum()
        - (u * (u - 1) * (2 * u + 5)).sum()
    ) / 18
    var += 2 * ties_a * ties_b / (n * (n - 1))
    var += (
        (t * (t - 1) * (t - 2)).sum()
        * (u * (u - 1) * (u - 2)).sum()
        / (9 * n * (n - 1) * (n - 2))
    )
    return float(s / math.sqrt(var))


def _check_conf_level(conf_level: float) -> None:
    if not 0 < conf_level < 1:
        raise ValueError(f"conf_level must be in (0, 1), got {conf_level!r}.")
