"""Tests for multiple-comparison correction."""

import numpy as np
import pytest

from src.chisq_post_hoc import UnresolvedCorrectionMethodError, adjust_pvalues, resolve_correction_method

RAW = np.array([0.01, 0.02, 0.03, 0.04, 0.05])
UNSORTED = np.array([0.04, 0.001, 0.03, 0.2, 0.012, 0.6])
MONOTONIC_METHODS = ["fdr", "BH", "BY", "bonferroni", "holm", "hochberg", "hommel"]


@pytest.mark.parametrize(
    "control, expected",
    [
        ("bonferroni", [0.05, 0.10, 0.15, 0.20, 0.25]),
        ("holm", [0.05, 0.08, 0.09, 0.09, 0.09]),
        ("hochberg", [0.05, 0.05, 0.05, 0.05, 0.05]),
        ("fdr", [0.05, 0.05, 0.05, 0.05, 0.05]),
        ("BH", [0.05, 0.05, 0.05, 0.05, 0.05]),
        ("BY", [0.05 * (1 + 1 / 2 + 1 / 3 + 1 / 4 + 1 / 5)] * 5),
    ],
)
def test_known_adjustments(control, expected):
    np.testing.assert_allclose(adjust_pvalues(RAW, control), expected)


def test_bonferroni_caps_at_one():
    np.testing.assert_allclose(adjust_pvalues([0.3, 0.5, 0.01], "bonferroni"), [0.9, 1.0, 0.03])


def test_output_keeps_input_order():
    np.testing.assert_allclose(adjust_pvalues([0.04, 0.01, 0.03], "bonferroni"), [0.12, 0.03, 0.09])


@pytest.mark.parametrize("control", MONOTONIC_METHODS)
def test_adjusted_never_below_raw(control):
    adjusted = adjust_pvalues(UNSORTED, control)

    assert adjusted.shape == UNSORTED.shape
    assert np.all(adjusted >= UNSORTED - 1e-12)
    assert np.all(adjusted <= 1.0)


@pytest.mark.parametrize("control", ["fdr", "BY", "bonferroni", "holm", "hochberg"])
def test_adjustment_preserves_rank_order(control):
    adjusted = adjust_pvalues(UNSORTED, control)
    order = np.argsort(UNSORTED)

    assert np.all(np.diff(adjusted[order]) >= -1e-12)


def test_bh_not_more_conservative_than_by():
    assert np.all(adjust_pvalues(UNSORTED, "fdr") <= adjust_pvalues(UNSORTED, "BY"))


def test_hommel_between_raw_and_hochberg():
    hommel = adjust_pvalues(UNSORTED, "hommel")

    assert np.all(hommel <= adjust_pvalues(UNSORTED, "hochberg") + 1e-12)
    assert np.all(hommel >= UNSORTED - 1e-12)


def test_single_p_value_is_unchanged():
    for control in MONOTONIC_METHODS:
        np.testing.assert_allclose(adjust_pvalues([0.037], control), [0.037])


def test_empty_vector():
    assert adjust_pvalues([], "holm").size == 0


@pytest.mark.parametrize(
    "name, method",
    [("fdr", "fdr_bh"), ("bh", "fdr_bh"), ("BY", "fdr_by"), ("Hochberg", "simes-hochberg"), ("hommel", "hommel")],
)
def test_resolve_names(name, method):
    assert resolve_correction_method(name) == method


def test_unknown_method_raises():
    with pytest.raises(UnresolvedCorrectionMethodError, match="Unknown correction method"):
        adjust_pvalues(RAW, "sidak")
