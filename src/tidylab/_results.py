"""Row and result dataclasses returned by the tidy builders."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from tidylab.type_aliases import GroupKey, SummaryValue

if TYPE_CHECKING:
    import numpy as np
    import pandas as pd

    from tidylab.exceptions import TidyError

TERM_COLUMNS: tuple[str, ...] = (
    "term",
    "estimate",
    "std_error",
    "statistic",
    "p_value",
)
CONF_COLUMNS: tuple[str, ...] = ("conf_low", "conf_high")
AUGMENT_COLUMNS: tuple[str, ...] = ("fitted_value", "residual")


@dataclass(frozen=True, slots=True)
class FittedModel:
    """A backend result tagged with the model kind used to tidy it.

    Attributes:
        kind: Registry key, e.g. "ols" or a custom kind string.
        result: The backend's native result object (statsmodels results,
            HypothesisTest, ClusterFit, ...). Never mutated by extractors.
    """

    kind: str
    result: Any


@dataclass(frozen=True, slots=True)
class TermRow:
    """One estimated term of a model.

    Field names are the same for every model kind. Values a kind cannot
    define are NaN. ``conf_low``/``conf_high`` are None unless confidence
    intervals were requested.
    """

    term: str
    estimate: float
    std_error: float
    statistic: float
    p_value: float
    conf_low: float | None = None
    conf_high: float | None = None

    def as_dict(self) -> dict[str, Any]:
        row: dict[str, Any] = {
            "term": self.term,
            "estimate": self.estimate,
            "std_error": self.std_error,
            "statistic": self.statistic,
            "p_value": self.p_value,
        }
        if self.conf_low is not None or self.conf_high is not None:
            row["conf_low"] = self.conf_low
            row["conf_high"] = self.conf_high
        return row


@dataclass(frozen=True, slots=True)
class SummaryRow(Mapping[str, SummaryValue]):
    """One row of model-level statistics.

    Behaves as a read-only mapping of metric name to value. Metrics a model
    kind does not define are absent, not zero.
    """

    kind: str
    values: Mapping[str, SummaryValue]

    def __getitem__(self, key: str) -> SummaryValue:
        return self.values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def as_dict(self) -> dict[str, SummaryValue]:
        return dict(self.values)

    def numeric(self) -> dict[str, float]:
        """Numeric metrics only, as floats (for tracker logging)."""
        return {
            name: float(value)
            for name, value in self.values.items()
            if isinstance(value, (int, float)) and not isinstance(value, bool)
        }


@dataclass(frozen=True, slots=True)
class AugmentedRow:
    """One input observation with the model's per-observation output.

    Attributes:
        observation: The observation's original columns.
        fitted_value: Fitted value on the response scale (NaN if undefined).
        residual: Response residual (NaN if undefined).
        extras: Kind-specific diagnostics such as ``hat`` or ``cluster``.
    """

    observation: Mapping[str, Any]
    fitted_value: float
    residual: float
    extras: Mapping[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        # Model output wins over observation columns of the same name.
        return {
            **self.observation,
            "fitted_value": self.fitted_value,
            "residual": self.residual,
            **self.extras,
        }


@dataclass(frozen=True, slots=True)
class HypothesisTest:
    """Outcome of a single hypothesis test, as produced by tidylab.fitting.

    Attributes:
        term: Name of the estimated quantity ("cor", "rho", "tau", "mean",
            "mean_difference").
        estimate: Point estimate.
        statistic: Test statistic.
        p_value: p-value under the stated alternative.
        std_error: Standard error of the estimate, NaN where undefined.
        conf_low: Lower confidence bound, NaN where undefined.
        conf_high: Upper confidence bound, NaN where undefined.
        conf_level: Confidence level used for the bounds.
        parameter: Degrees of freedom of the reference distribution, NaN
            for normal approximations.
        method: Human-readable test name.
        alternative: Alternative hypothesis.
        nobs: Number of observations used.
    """

    term: str
    estimate: float
    statistic: float
    p_value: float
    std_error: float
    conf_low: float
    conf_high: float
    conf_level: float
    parameter: float
    method: str
    alternative: str
    nobs: int


@dataclass(frozen=True, slots=True)
class ClusterFit:
    """A fitted scikit-learn clusterer with the matrix it was fit on.

    Attributes:
        estimator: Fitted estimator exposing ``cluster_centers_``,
            ``labels_``, ``inertia_`` and ``n_iter_``.
        X: Feature matrix used for fitting, shape (n_samples, n_features).
        feature_names: Column name for each feature.
    """

    estimator: Any
    X: np.ndarray
    feature_names: list[str]


@dataclass(frozen=True, slots=True)
class PartitionError:
    """Marker for a partition that failed during a best-effort grouped run."""

    group_key: GroupKey
    error: TidyError


@dataclass(slots=True)
class GroupedResult:
    """Result of a grouped run.

    Attributes:
        table: Combined table, group key column(s) first.
        models: Fitted model per successful group key.
        errors: Failed partitions (only populated in best-effort mode).
    """

    table: pd.DataFrame
    models: Mapping[GroupKey, FittedModel]
    errors: list[PartitionError]

    @property
    def failed_keys(self) -> list[GroupKey]:
        return [error.group_key for error in self.errors]

    @property
    def ok(self) -> bool:
        return not self.errors
