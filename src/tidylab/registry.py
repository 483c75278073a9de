"""Registry mapping model kind tags to extractors."""

from __future__ import annotations

from tidylab.adapters.interfaces import ExtractorProtocol
from tidylab.exceptions import UnsupportedModelKind


class AdapterRegistry:
    """Maps a model kind tag to the extractor that tidies it.

    Lookups are by explicit tag only; the registry never inspects result
    types to guess a kind.
    """

    def __init__(self) -> None:
        self._extractors: dict[str, ExtractorProtocol] = {}

    def register(
        self, kind: str, extractor: ExtractorProtocol, *, replace: bool = False
    ) -> None:
        """Register ``extractor`` under ``kind``.

        Raises:
            TypeError: If ``extractor`` lacks term_rows, summary_row or
                augmented_rows.
            ValueError: If ``kind`` is taken and ``replace`` is False.
        """
        if not isinstance(extractor, ExtractorProtocol):
            raise TypeError(
                f"{type(extractor).__name__} must provide term_rows(...), "
                "summary_row(...) and augmented_rows(...)."
            )
        key = str(kind)
        if key in self._extractors and not replace:
            raise ValueError(
                f"Model kind {key!r} is already registered. "
                "Pass replace=True to override it."
            )
        self._extractors[key] = extractor

    def get(self, kind: str) -> ExtractorProtocol:
        try:
            return self._extractors[str(kind)]
        except KeyError:
            raise UnsupportedModelKind(str(kind), self.kinds()) from None

    def kinds(self) -> list[str]:
        return sorted(self._extractors)

    def __contains__(self, kind: object) -> bool:
        return str(kind) in self._extractors

    def __repr__(self) -> str:
        return f"<AdapterRegistry kinds={self.kinds()}>"


def _build_default_registry() -> AdapterRegistry:
    from tidylab._extractors.htest import HypothesisTestExtractor
    from tidylab._extractors.sklearn import KMeansExtractor
    from tidylab._extractors.statsmodels import (
        DiscreteExtractor,
        GLMExtractor,
        RegressionExtractor,
    )
    from tidylab.type_aliases import ModelKind

    registry = AdapterRegistry()
    registry.register(ModelKind.OLS, RegressionExtractor())
    registry.register(ModelKind.WLS, RegressionExtractor())
    registry.register(ModelKind.GLM, GLMExtractor())
    registry.register(ModelKind.LOGIT, DiscreteExtractor())
    registry.register(ModelKind.PROBIT, DiscreteExtractor())
    registry.register(ModelKind.HTEST, HypothesisTestExtractor())
    registry.register(ModelKind.KMEANS, KMeansExtractor())
    return registry


default_registry = _build_default_registry()


def register(
    kind: str, extractor: ExtractorProtocol, *, replace: bool = False
) -> None:
    """Register an extractor on the default registry."""
    default_registry.register(kind, extractor, replace=replace)


def get_extractor(kind: str, registry: AdapterRegistry | None = None):
    """Look up ``kind`` on ``registry`` (the default registry if None)."""
    if registry is None:
        registry = default_registry
    return registry.get(kind)
