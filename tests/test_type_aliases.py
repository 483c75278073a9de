"""Tests for string enums."""

import pytest

from tidylab.type_aliases import (
    Alternative,
    FailurePolicy,
    ModelKind,
    TableKind,
    coerce_choice,
)


def test_alternatives_are_scipy_names():
    """Alternative values are passed straight to scipy.stats."""
    assert {a.value for a in Alternative} == {"two-sided", "less", "greater"}


def test_enums_compare_as_strings():
    assert ModelKind.OLS == "ols"
    assert TableKind.SUMMARY == "summary"
    assert FailurePolicy.BEST_EFFORT == "best_effort"
    assert str(ModelKind.KMEANS) == "kmeans"


def test_coerce_choice_accepts_values_and_members():
    assert coerce_choice(TableKind, "terms", "table") is TableKind.TERMS
    assert coerce_choice(TableKind, TableKind.AUGMENT, "table") is TableKind.AUGMENT


def test_coerce_choice_lists_valid_options():
    with pytest.raises(ValueError, match="Unknown table 'tidy'"):
        coerce_choice(TableKind, "tidy", "table")
