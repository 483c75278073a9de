"""Weights and Biases logger adapter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from tidylab._lazy import LazyModule

wandb = LazyModule("wandb", install_hint="Install with: pip install tidylab[wandb]")


@dataclass
class WandbRunAdapter:
    """Run adapter that forwards logging calls to W&B."""

    run: Any

    def __enter__(self) -> WandbRunAdapter:
        self.run.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool | None:
        return self.run.__exit__(exc_type, exc, tb)

    def log_params(self, params) -> None:
        self.run.config.update(dict(params), allow_val_change=True)

    def log_metrics(self, metrics, step: int | None = None) -> None:
        if step is None:
            self.run.log(dict(metrics))
        else:
            self.run.log(dict(metrics), step=step)

    def set_tags(self, tags) -> None:
        existing = set(self.run.tags or [])
        self.run.tags = sorted(existing | set(tags.values()))

    def log_table(self, name: str, frame) -> None:
        self.run.log({name: wandb.Table(dataframe=frame)})


@dataclass
class WandbLogger:
    """Logger adapter that creates W&B runs."""

    project: str | None = None
    entity: str | None = None

    def start_run(
        self, name=None, config=None, tags=None, nested=False
    ) -> WandbRunAdapter:
        run = wandb.init(
            project=self.project,
            entity=self.entity,
            name=name,
            config=dict(config) if config else {},
            tags=list(tags.values()) if tags else None,
            reinit=nested,
        )
        return WandbRunAdapter(run)
