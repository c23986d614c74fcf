"""
Chi-square post-hoc testing package.

This package runs pairwise tests (chi-square or Fisher's exact) between all
populations of a contingency table, reports Cramer's V for each pair and
adjusts the p-values for multiple comparisons (FDR, Bonferroni, Holm,
Hochberg, Hommel).
"""

from .chisq_post_hoc_core import run_chisq_post_hoc, format_post_hoc_results_for_knime
from .comparisons import Comparison, enumerate_comparisons
from .correction import adjust_pvalues, resolve_correction_method, CORRECTION_METHODS
from .effect_size import cramers_v
from .exceptions import UnresolvedStrategyError, UnresolvedCorrectionMethodError
from .strategies import (
    StrategyResult,
    TestStrategy,
    ChiSquareStrategy,
    FisherExactStrategy,
    CallableStrategy,
    register_strategy,
    resolve_strategy,
)
from .utils import (
    validate_contingency_table,
    validate_count_columns,
    PairwiseTestType,
    CorrectionMethodType,
    STRATEGY_NAMES,
    CORRECTION_NAMES,
    pairwise_test_param,
    correction_method_param,
    label_column_param,
    pops_in_rows_param,
    digits_param,
    alpha_param,
)

__all__ = [
    'run_chisq_post_hoc',
    'format_post_hoc_results_for_knime',
    'Comparison',
    'enumerate_comparisons',
    'adjust_pvalues',
    'resolve_correction_method',
    'CORRECTION_METHODS',
    'cramers_v',
    'UnresolvedStrategyError',
    'UnresolvedCorrectionMethodError',
    'StrategyResult',
    'TestStrategy',
    'ChiSquareStrategy',
    'FisherExactStrategy',
    'CallableStrategy',
    'register_strategy',
    'resolve_strategy',
    'validate_contingency_table',
    'validate_count_columns',
    'PairwiseTestType',
    'CorrectionMethodType',
    'STRATEGY_NAMES',
    'CORRECTION_NAMES',
    'pairwise_test_param',
    'correction_method_param',
    'label_column_param',
    'pops_in_rows_param',
    'digits_param',
    'alpha_param',
]
