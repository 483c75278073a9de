"""Tests for the augmentation builder."""

from __future__ import annotations

import numpy as np
import pytest
import statsmodels.api as sm

from tidylab import (
    AdapterRegistry,
    AugmentedRow,
    DimensionMismatch,
    FittedModel,
    SummaryRow,
    UnsupportedTable,
    augment,
    to_frame,
)
from tidylab.fitting import cor_test, glm, kmeans, logit, ols


class TestAlignment:
    def test_one_row_per_observation_in_order(self, data) -> None:
        rows = augment(ols("mpg ~ wt + hp", data), data)

        assert len(rows) == len(data)
        assert [row.observation["wt"] for row in rows] == list(data["wt"])

    def test_fitted_plus_residual_is_response(self, data) -> None:
        rows = augment(ols("mpg ~ wt + hp", data), data)

        for row in rows:
            assert row.fitted_value + row.residual == pytest.approx(
                row.observation["mpg"]
            )

    def test_dropped_rows_raise_dimension_mismatch(self, data) -> None:
        data.loc[[3, 7], "mpg"] = np.nan
        model = ols("mpg ~ wt", data)

        with pytest.raises(DimensionMismatch) as excinfo:
            augment(model, data)

        assert excinfo.value.expected == len(data)
        assert excinfo.value.actual == len(data) - 2
        assert excinfo.value.group_key is None

    def test_rows_used_for_fitting_align(self, data) -> None:
        data.loc[[3, 7], "mpg"] = np.nan
        complete = data.dropna(subset=["mpg"])

        rows = augment(ols("mpg ~ wt", data), complete)

        assert len(rows) == len(complete)

    def test_builder_checks_custom_extractors(self, data) -> None:
        class ShortExtractor:
            def term_rows(self, result, *, conf_level=None):
                return []

            def summary_row(self, result):
                return SummaryRow(kind="short", values={})

            def augmented_rows(self, result, data):
                return [AugmentedRow(observation={}, fitted_value=0.0, residual=0.0)]

        registry = AdapterRegistry()
        registry.register("short", ShortExtractor())

        with pytest.raises(DimensionMismatch):
            augment(FittedModel("short", None), data, registry=registry)


class TestDiagnostics:
    def test_regression_extras(self, data) -> None:
        rows = augment(ols("mpg ~ wt + hp", data), data)
        frame = to_frame(rows)

        assert {"fitted_value", "residual", "hat", "cooksd", "std_resid"} <= set(
            frame.columns
        )
        # Trace of the hat matrix equals the number of parameters.
        assert frame["hat"].sum() == pytest.approx(3)

    def test_observation_columns_come_first(self, data) -> None:
        frame = to_frame(augment(ols("mpg ~ wt", data), data))

        assert list(frame.columns[: len(data.columns)]) == list(data.columns)

    def test_glm_response_scale(self, data) -> None:
        model = glm("carb ~ wt", data, family=sm.families.Poisson())

        frame = to_frame(augment(model, data))

        assert (frame["fitted_value"] > 0).all()
        assert frame["residual"].to_numpy() == pytest.approx(
            (data["carb"] - frame["fitted_value"]).to_numpy()
        )
        assert "resid_deviance" in frame.columns

    def test_logit_fitted_are_probabilities(self, data) -> None:
        frame = to_frame(augment(logit("am ~ wt", data), data))

        assert frame["fitted_value"].between(0, 1).all()

    def test_kmeans_assigns_clusters(self, data) -> None:
        model = kmeans(data, ["wt", "hp"], n_clusters=3, random_state=0)

        frame = to_frame(augment(model, data))

        assert set(frame["cluster"]) <= {0, 1, 2}
        assert (frame["residual"] >= 0).all()
        assert frame["fitted_value"].isna().all()

    def test_htest_has_no_observation_view(self, data) -> None:
        with pytest.raises(UnsupportedTable, match="augment"):
            augment(cor_test(data, "wt", "mpg"), data)
