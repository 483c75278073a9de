"""tidylab: uniform tables for fitted statistical models."""

from tidylab._results import (
    AugmentedRow,
    ClusterFit,
    FittedModel,
    GroupedResult,
    HypothesisTest,
    PartitionError,
    SummaryRow,
    TermRow,
)
from tidylab.exceptions import (
    DimensionMismatch,
    PartitionBuildFailure,
    PartitionFittingFailure,
    TidyError,
    UnsupportedModelKind,
    UnsupportedTable,
)
from tidylab.grouped import GroupedRunner, tidy_grouped
from tidylab.registry import AdapterRegistry, default_registry, register
from tidylab.tables import adjust_pvalues, to_frame
from tidylab.tidy import augment, glance, tidy
from tidylab.type_aliases import FailurePolicy, ModelKind, TableKind

__all__ = [
    "tidy",
    "glance",
    "augment",
    "GroupedRunner",
    "tidy_grouped",
    "to_frame",
    "adjust_pvalues",
    "AdapterRegistry",
    "default_registry",
    "register",
    "FittedModel",
    "TermRow",
    "SummaryRow",
    "AugmentedRow",
    "HypothesisTest",
    "ClusterFit",
    "GroupedResult",
    "PartitionError",
    "ModelKind",
    "TableKind",
    "FailurePolicy",
    "TidyError",
    "UnsupportedModelKind",
    "UnsupportedTable",
    "DimensionMismatch",
    "PartitionFittingFailure",
    "PartitionBuildFailure",
]
