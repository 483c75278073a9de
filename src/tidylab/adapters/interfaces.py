"""Protocol to add new model kinds that are not supported by tidylab."""

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

import pandas as pd

from tidylab._results import AugmentedRow, SummaryRow, TermRow


@runtime_checkable
class ExtractorProtocol(Protocol):
    """Capability set every registered model kind implements.

    All three functions are pure: they read the backend result and return
    new rows, never mutating the result or the data.
    """

    def term_rows(
        self, result: Any, *, conf_level: float | None = None
    ) -> Sequence[TermRow]:
        """One row per term, in the order the backend reports them."""
        ...

    def summary_row(self, result: Any) -> SummaryRow:
        """Exactly one row of model-level statistics."""
        ...

    def augmented_rows(
        self, result: Any, data: pd.DataFrame
    ) -> Sequence[AugmentedRow]:
        """One row per observation of ``data``, in input order."""
        ...
