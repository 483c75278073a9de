"""Extractor for scikit-learn k-means clusterings."""

from __future__ import annotations

import math

import numpy as np
import pandas as pd

from tidylab._extractors._common import align_rows
from tidylab._results import AugmentedRow, ClusterFit, SummaryRow, TermRow


class KMeansExtractor:
    """Tidies a ``ClusterFit`` wrapping a fitted ``KMeans``.

    Terms are cluster centers, one per (cluster, feature) pair, named
    ``"<cluster>:<feature>"``. ``std_error`` is the standard error of the
    cluster mean; there is no test statistic, so ``statistic`` and
    ``p_value`` are NaN.
    """

    kind = "kmeans"

    def term_rows(
        self, result: ClusterFit, *, conf_level: float | None = None
    ) -> list[TermRow]:
        centers = result.estimator.cluster_centers_
        labels = result.estimator.labels_
        rows = []
        for cluster, center in enumerate(centers):
            members = result.X[labels == cluster]
            for j, feature in enumerate(result.feature_names):
                rows.append(
                    TermRow(
                        term=f"{cluster}:{feature}",
                        estimate=float(center[j]),
                        std_error=_mean_std_error(members[:, j]),
                        statistic=math.nan,
                        p_value=math.nan,
                        conf_low=math.nan if conf_level is not None else None,
                        conf_high=math.nan if conf_level is not None else None,
                    )
                )
        return rows

    def summary_row(self, result: ClusterFit) -> SummaryRow:
        X = result.X
        labels = result.estimator.labels_
        centers = result.estimator.cluster_centers_
        totss = float(((X - X.mean(axis=0)) ** 2).sum())
        withinss = float(((X - centers[labels]) ** 2).sum())
        return SummaryRow(
            kind=self.kind,
            values={
                "totss": totss,
                "tot_withinss": withinss,
                "betweenss": totss - withinss,
                "n_clusters": int(len(centers)),
                "n_iter": int(result.estimator.n_iter_),
                "nobs": int(X.shape[0]),
            },
        )

    def augmented_rows(
        self, result: ClusterFit, data: pd.DataFrame
    ) -> list[AugmentedRow]:
        labels = np.asarray(result.estimator.labels_)
        distances = result.estimator.transform(result.X)
        own = distances[np.arange(len(labels)), labels]
        return align_rows(
            data,
            np.full(len(labels), np.nan),
            own,
            {"cluster": labels},
        )


def _mean_std_error(values: np.ndarray) -> float:
    if len(values) < 2:
        return math.nan
    return float(np.std(values, ddof=1) / math.sqrt(len(values)))
