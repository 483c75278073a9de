"""Lazy module loading for optional tracker backends."""

from __future__ import annotations

from importlib import import_module
from types import ModuleType
from typing import Any


class LazyModule:
    """Deferred module import - loads on first attribute access.

    Usage:
        mlflow = LazyModule("mlflow", install_hint="pip install tidylab[mlflow]")

        # Later, in any method:
        mlflow.log_table(...)  # Import happens here, on first access
    """

    def __init__(self, name: str, *, install_hint: str) -> None:
        self._name = name
        self._install_hint = install_hint
        self._module: ModuleType | None = None

    def load(self) -> ModuleType:
        if self._module is None:
            try:
                self._module = import_module(self._name)
            except ModuleNotFoundError as exc:
                raise ModuleNotFoundError(
                    f"{self._name} is not installed. {self._install_hint}"
                ) from exc
        return self._module

    def __getattr__(self, attr: str) -> Any:
        return getattr(self.load(), attr)

    def __repr__(self) -> str:
        status = "loaded" if self._module else "not loaded"
        return f"<LazyModule {self._name!r} ({status})>"
