"""Errors raised while tidying model results."""

from __future__ import annotations

from typing import Any


class TidyError(Exception):
    """Base class for tidylab errors.

    Attributes:
        group_key: Partition the error belongs to when raised from a grouped
            run, else None.
    """

    def __init__(self, message: str, *, group_key: Any | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.group_key = group_key

    def __str__(self) -> str:
        if self.group_key is None:
            return self.message
        return f"[group {self.group_key!r}] {self.message}"


class UnsupportedModelKind(TidyError, LookupError):
    """No extractor is registered for the requested model kind."""

    def __init__(
        self,
        kind: str,
        available: list[str] | None = None,
        *,
        group_key: Any | None = None,
    ) -> None:
        options = ", ".join(available) if available else "(none registered)"
        super().__init__(
            f"No extractor registered for model kind {kind!r}. "
            f"Registered kinds: {options}",
            group_key=group_key,
        )
        self.kind = kind


class UnsupportedTable(TidyError, NotImplementedError):
    """The model kind has no such tidy view (e.g. augment for a t-test)."""

    def __init__(self, kind: str, table: str, *, group_key: Any | None = None):
        super().__init__(
            f"Model kind {kind!r} does not provide a {table!r} table.",
            group_key=group_key,
        )
        self.kind = kind
        self.table = table


class DimensionMismatch(TidyError, ValueError):
    """Fitted values do not line up 1:1 with the observations passed in."""

    def __init__(
        self, expected: int, actual: int, *, group_key: Any | None = None
    ) -> None:
        super().__init__(
            f"Model has {actual} fitted values but {expected} observations "
            "were passed. Rows were likely dropped during fitting (missing "
            "values); pass the rows the model was fit on.",
            group_key=group_key,
        )
        self.expected = expected
        self.actual = actual


class PartitionFittingFailure(TidyError, RuntimeError):
    """Fitting the model for one partition raised.

    The backend exception is chained as ``__cause__``.
    """

    def __init__(self, group_key: Any, cause: BaseException) -> None:
        super().__init__(
            f"Model fit failed: {type(cause).__name__}: {cause}",
            group_key=group_key,
        )


class PartitionBuildFailure(TidyError, RuntimeError):
    """Building a table for one partition raised an untyped error.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, group_key: Any, table: str, cause: BaseException) -> None:
        super().__init__(
            f"Building the {table!r} table failed: {type(cause).__name__}: {cause}",
            group_key=group_key,
        )
        self.table = table
