"""Type aliases."""

from collections.abc import Callable, Hashable
from enum import StrEnum
from typing import Any, TypeAlias


class ModelKind(StrEnum):
    """Model kind tags understood by the default registry.

    Custom kinds can be registered under any string; these are the built-ins.
    """

    OLS = "ols"
    WLS = "wls"
    GLM = "glm"
    LOGIT = "logit"
    PROBIT = "probit"
    HTEST = "htest"
    KMEANS = "kmeans"


class TableKind(StrEnum):
    """Which tidy view to build."""

    TERMS = "terms"
    SUMMARY = "summary"
    AUGMENT = "augment"


class FailurePolicy(StrEnum):
    """What the grouped runner does when a partition fails."""

    FAIL_FAST = "fail_fast"
    BEST_EFFORT = "best_effort"


class CorrelationMethod(StrEnum):
    """Correlation coefficient for cor_test."""

    PEARSON = "pearson"
    SPEARMAN = "spearman"
    KENDALL = "kendall"


class Alternative(StrEnum):
    """Alternative hypothesis, using scipy.stats naming."""

    TWO_SIDED = "two-sided"
    LESS = "less"
    GREATER = "greater"


# Value of a single grouping column, or a tuple for multi-column keys
GroupKey: TypeAlias = Hashable

# fit(data) -> FittedModel, as accepted by GroupedRunner
FitFunc: TypeAlias = Callable[[Any], Any]

# Single summary cell: numbers for statistics, strings for labels like method
SummaryValue: TypeAlias = float | int | str


def coerce_choice(enum: Any, value: Any, name: str) -> Any:
    """Convert ``value`` to a member of ``enum``, listing valid options on error."""
    try:
        return enum(value)
    except ValueError as exc:
        valid = [member.value for member in enum]
        raise ValueError(f"Unknown {name} {value!r}. Valid options: {valid}") from exc
