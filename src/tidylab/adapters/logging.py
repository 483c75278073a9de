"""Logger protocol used by grouped runs."""

from collections.abc import Mapping
from contextlib import AbstractContextManager
from typing import Any, Protocol, Self, runtime_checkable

import pandas as pd

Metrics = Mapping[str, float]
Params = Mapping[str, Any]
Tags = Mapping[str, str]


@runtime_checkable
class LoggerProtocol(Protocol):
    """Context-managed logger for experiment tracking.

    The logger itself provides logging methods. `start_run()` is a context
    manager that yields `self`, so usage is:

        with logger.start_run(name="mpg-by-cyl/4") as run:
            run.log_params({"group": 4, "kind": "ols"})
            run.log_metrics({"r_squared": 0.51})
            run.log_table("terms", frame)
    """

    def start_run(
        self,
        name: str | None = None,
        config: Params | None = None,
        tags: Tags | None = None,
        nested: bool = False,
    ) -> AbstractContextManager[Self]:
        """Start a run and return a context manager for logging."""
        ...

    def log_params(self, params: Params) -> None:
        """Log parameters for the current run."""
        ...

    def log_metrics(self, metrics: Metrics, step: int | None = None) -> None:
        """Log metrics for the current run."""
        ...

    def set_tags(self, tags: Tags) -> None:
        """Set tags for the current run."""
        ...

    def log_table(self, name: str, frame: pd.DataFrame) -> None:
        """Log a tidy table for the current run."""
        ...
