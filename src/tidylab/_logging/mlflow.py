"""MLflow logger adapter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from tidylab._lazy import LazyModule

mlflow = LazyModule("mlflow", install_hint="Install with: pip install tidylab[mlflow]")


@dataclass
class MLflowRunAdapter:
    """Run adapter that forwards logging calls to MLflow."""

    run: Any

    def __enter__(self) -> MLflowRunAdapter:
        self.run.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool | None:
        return self.run.__exit__(exc_type, exc, tb)

    def log_params(self, params) -> None:
        mlflow.log_params({key: str(value) for key, value in params.items()})

    def log_metrics(self, metrics, step: int | None = None) -> None:
        mlflow.log_metrics(dict(metrics), step=step)

    def set_tags(self, tags) -> None:
        mlflow.set_tags(dict(tags))

    def log_table(self, name: str, frame) -> None:
        mlflow.log_table(data=frame, artifact_file=f"{name}.json")


@dataclass
class MLflowLogger:
    """Logger adapter that creates MLflow runs."""

    experiment_name: str | None = None

    def start_run(
        self, name=None, config=None, tags=None, nested=False
    ) -> MLflowRunAdapter:
        if self.experiment_name:
            mlflow.set_experiment(self.experiment_name)
        active = mlflow.start_run(run_name=name, nested=nested)
        run = MLflowRunAdapter(active)
        if config:
            run.log_params(config)
        if tags:
            run.set_tags(tags)
        return run
