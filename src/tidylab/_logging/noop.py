from __future__ import annotations

from dataclasses import dataclass


@dataclass
class NoOpRun:
    """Run adapter that drops logging calls.

    Used as the default run when no tracking backend is configured.
    """

    def __enter__(self) -> NoOpRun:
        return self

    def __exit__(self, exc_type, exc, tb) -> bool | None:
        return None

    def log_params(self, params) -> None:
        return None

    def log_metrics(self, metrics, step: int | None = None) -> None:
        return None

    def set_tags(self, tags) -> None:
        return None

    def log_table(self, name: str, frame) -> None:
        return None


@dataclass
class NoOpLogger:
    """Logger adapter that produces no-op runs."""

    def start_run(self, name=None, config=None, tags=None, nested=False) -> NoOpRun:
        return NoOpRun()
