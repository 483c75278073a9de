"""Shared test fixtures and helpers."""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def data() -> pd.DataFrame:
    """Car-like dataset fixture."""
    return make_data()


@pytest.fixture
def grouped_data() -> pd.DataFrame:
    """Two groups: A with 10 rows, B with 3 rows."""
    return make_grouped_data()


@pytest.fixture
def logger() -> InMemoryLogger:
    """Logger fixture for grouped runs."""
    return InMemoryLogger()


@dataclass
class RunRecord:
    """Record of a single start_run context."""

    name: str | None
    config: Mapping[str, Any] | None
    tags: Mapping[str, str] | None
    params_calls: list[Mapping[str, Any]] = field(default_factory=list)
    metrics_calls: list[tuple[Mapping[str, float], int | None]] = field(
        default_factory=list
    )
    table_calls: list[tuple[str, pd.DataFrame]] = field(default_factory=list)


@dataclass
class InMemoryLogger:
    """Logger that records all calls for testing."""

    runs: list[RunRecord] = field(default_factory=list)
    _current_run: RunRecord | None = None

    @contextmanager
    def start_run(self, name=None, config=None, tags=None, nested=False):
        record = RunRecord(
            name=name,
            config=dict(config) if config else None,
            tags=dict(tags) if tags else None,
        )
        self.runs.append(record)
        self._current_run = record
        try:
            yield self
        finally:
            self._current_run = None

    def log_params(self, params) -> None:
        assert self._current_run is not None
        self._current_run.params_calls.append(dict(params))

    def log_metrics(self, metrics, step=None) -> None:
        assert self._current_run is not None
        self._current_run.metrics_calls.append((dict(metrics), step))

    def set_tags(self, tags) -> None:
        pass

    def log_table(self, name, frame) -> None:
        assert self._current_run is not None
        self._current_run.table_calls.append((name, frame))


def make_data(n: int = 90, seed: int = 0) -> pd.DataFrame:
    """Fuel economy style data with continuous, binary and count outcomes."""
    rng = np.random.default_rng(seed)
    wt = rng.uniform(1.5, 5.5, n)
    hp = rng.uniform(50, 300, n)
    cyl = np.tile([4, 6, 8], n // 3)
    mpg = 40 - 3 * wt - 0.03 * hp + rng.normal(0, 2, n)
    am = rng.binomial(1, 1 / (1 + np.exp(-(3 - 1.0 * wt))))
    carb = rng.poisson(np.exp(0.2 + 0.2 * wt))
    return pd.DataFrame(
        {"mpg": mpg, "wt": wt, "hp": hp, "cyl": cyl, "am": am, "carb": carb}
    )


def make_grouped_data(seed: int = 1) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    x = np.concatenate([np.arange(10.0), np.arange(3.0)])
    y = 1 + 2 * x + rng.normal(0, 0.5, len(x))
    return pd.DataFrame({"group": ["A"] * 10 + ["B"] * 3, "x": x, "y": y})
