"""Fit and tidy one model per partition of a DataFrame."""

from __future__ import annotations

import warnings
from collections.abc import Iterator, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from contextlib import closing
from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from tidylab._logging.noop import NoOpLogger
from tidylab._results import (
    CONF_COLUMNS,
    TERM_COLUMNS,
    FittedModel,
    GroupedResult,
    PartitionError,
    SummaryRow,
)
from tidylab.adapters.logging import LoggerProtocol
from tidylab.exceptions import (
    PartitionBuildFailure,
    PartitionFittingFailure,
    TidyError,
)
from tidylab.registry import AdapterRegistry
from tidylab.tables import to_frame
from tidylab.tidy import augment, glance, tidy
from tidylab.type_aliases import (
    FailurePolicy,
    FitFunc,
    GroupKey,
    TableKind,
    coerce_choice,
)


@dataclass(slots=True)
class _Outcome:
    key: GroupKey
    model: FittedModel
    rows: list[Any]
    summary: SummaryRow | None = None


@dataclass(slots=True)
class GroupedRunner:
    """Fit one model per group and combine the chosen tidy table.

    Partitions are processed independently: ``fit`` receives the group's
    rows and must return a ``FittedModel``. The combined table has the group
    key column(s) first and keeps group order (first appearance, or sorted
    with ``sort=True``) and, within a group, the builder's row order.

    Failure policy, applied the same way to every partition:

    - ``"fail_fast"``: the first failing group (in group order) raises.
      A failed fit raises ``PartitionFittingFailure`` chained to the backend
      error; builder errors (``DimensionMismatch``, ``UnsupportedModelKind``,
      ``UnsupportedTable``) are re-raised with ``group_key`` set, and any
      other builder error raises ``PartitionBuildFailure`` chained to it.
    - ``"best_effort"``: failing groups are recorded in
      ``GroupedResult.errors``, the other groups complete, and one
      ``UserWarning`` lists the failed keys.

    Every successful group is reported to ``logger`` as its own run: the
    group key and model kind as params, numeric summary statistics as
    metrics, and the group's table.
    """

    by: str | Sequence[str]
    fit: FitFunc
    table: TableKind | str = TableKind.TERMS
    on_error: FailurePolicy | str = FailurePolicy.FAIL_FAST
    n_jobs: int | None = None
    sort: bool = False
    conf_int: bool = False
    conf_level: float = 0.95
    exponentiate: bool = False
    registry: AdapterRegistry | None = None
    logger: LoggerProtocol = field(default_factory=NoOpLogger)
    name: str | None = None
    tags: Mapping[str, str] | None = None

    def run(self, data: pd.DataFrame) -> GroupedResult:
        """Partition ``data`` by ``self.by``, fit, tidy and combine."""
        table = coerce_choice(TableKind, self.table, "table")
        policy = coerce_choice(FailurePolicy, self.on_error, "on_error")
        keys = [self.by] if isinstance(self.by, str) else list(self.by)
        if not keys:
            raise ValueError("by must name at least one column.")
        missing = [key for key in keys if key not in data.columns]
        if missing:
            raise ValueError(f"Grouping columns not found in data: {missing}")

        partitions = [
            (key[0] if len(keys) == 1 else key, frame)
            for key, frame in data.groupby(keys, sort=self.sort, dropna=False)
        ]
        models: dict[GroupKey, FittedModel] = {}
        errors: list[PartitionError] = []
        frames: list[pd.DataFrame] = []
        with closing(self._outcomes(partitions, table)) as outcomes:
            for outcome in outcomes:
                if isinstance(outcome, TidyError):
                    if policy == FailurePolicy.FAIL_FAST:
                        raise outcome
                    errors.append(PartitionError(outcome.group_key, outcome))
                    continue
                models[outcome.key] = outcome.model
                frame = self._keyed_frame(keys, outcome.key, outcome.rows, table)
                frames.append(frame)
                self._log(outcome, frame, table)

        if errors:
            warnings.warn(
                f"{len(errors)} of {len(partitions)} groups failed and were "
                f"skipped: {[error.group_key for error in errors]}",
                UserWarning,
                stacklevel=2,
            )
        if frames:
            combined = pd.concat(frames, ignore_index=True)
        else:
            combined = pd.DataFrame(columns=keys + self._table_columns(table))
        return GroupedResult(table=combined, models=models, errors=errors)

    def _outcomes(
        self, partitions: list[tuple[GroupKey, pd.DataFrame]], table: TableKind
    ) -> Iterator[_Outcome | TidyError]:
        """Yield per-group outcomes, or the group's error, in group order."""
        if self.n_jobs is None or self.n_jobs == 1:
            for key, frame in partitions:
                yield self._process(key, frame, table)
            return
        max_workers = None if self.n_jobs < 0 else self.n_jobs
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [
                executor.submit(self._process, key, frame, table)
                for key, frame in partitions
            ]
            try:
                for future in futures:
                    yield future.result()
            finally:
                for future in futures:
                    future.cancel()

    def _process(
        self, key: GroupKey, frame: pd.DataFrame, table: TableKind
    ) -> _Outcome | TidyError:
        try:
            model = self.fit(frame)
            if not isinstance(model, FittedModel):
                raise TypeError(
                    f"fit must return a FittedModel, got {type(model).__name__}."
                )
        except Exception as exc:
            failure = PartitionFittingFailure(key, exc)
            failure.__cause__ = exc
            return failure
        try:
            summary = None
            if table == TableKind.SUMMARY or self._tracking:
                summary = glance(model, registry=self.registry)
            if table == TableKind.TERMS:
                rows: list[Any] = tidy(
                    model,
                    conf_int=self.conf_int,
                    conf_level=self.conf_level,
                    exponentiate=self.exponentiate,
                    registry=self.registry,
                )
            elif table == TableKind.SUMMARY:
                rows = [summary]
            else:
                rows = augment(model, frame, registry=self.registry)
        except TidyError as exc:
            exc.group_key = key
            return exc
        except Exception as exc:
            failure = PartitionBuildFailure(key, table.value, exc)
            failure.__cause__ = exc
            return failure
        return _Outcome(key, model=model, rows=rows, summary=summary)

    @property
    def _tracking(self) -> bool:
        return not isinstance(self.logger, NoOpLogger)

    def _table_columns(self, table: TableKind) -> list[str]:
        if table != TableKind.TERMS:
            return []
        columns = list(TERM_COLUMNS)
        if self.conf_int:
            columns.extend(CONF_COLUMNS)
        return columns

    def _keyed_frame(
        self,
        keys: list[str],
        key: GroupKey,
        rows: list[Any],
        table: TableKind,
    ) -> pd.DataFrame:
        columns = self._table_columns(table) or None
        frame = to_frame(rows, columns=columns)
        values = key if len(keys) > 1 else (key,)
        for column in keys:
            if column not in frame.columns:
                continue
            if table != TableKind.AUGMENT:
                raise ValueError(
                    f"Grouping column {column!r} clashes with a {table.value} "
                    "table column."
                )
            # Augmented rows carry the key already; move it to the front.
            frame = frame.drop(columns=column)
        for position, (column, value) in enumerate(zip(keys, values)):
            frame.insert(position, column, [value] * len(frame))
        return frame

    def _log(self, outcome: _Outcome, frame: pd.DataFrame, table: TableKind) -> None:
        label = str(outcome.key)
        with self.logger.start_run(
            name=f"{self.name}/{label}" if self.name else label,
            config={"group": label, "kind": str(outcome.model.kind)},
            tags=self.tags,
        ) as run:
            if outcome.summary is not None:
                run.log_metrics(outcome.summary.numeric())
            run.log_table(table.value, frame)


def tidy_grouped(
    data: pd.DataFrame,
    by: str | Sequence[str],
    fit: FitFunc,
    **options: Any,
) -> GroupedResult:
    """Functional form of ``GroupedRunner(by, fit, **options).run(data)``."""
    return GroupedRunner(by=by, fit=fit, **options).run(data)
