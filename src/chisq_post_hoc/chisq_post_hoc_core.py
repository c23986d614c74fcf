"""
Chi-square post-hoc pairwise comparisons with multiple-comparison correction.

After an overall test on a contingency table shows that populations differ,
every pair of populations is tested on its own two-row sub-table. The raw
p-values are then adjusted together so the chosen error rate holds across the
whole family of comparisons, and Cramer's V is reported for each pair.
"""

import logging

import numpy as np
import pandas as pd

from .comparisons import enumerate_comparisons
from .correction import adjust_pvalues, resolve_correction_method
from .effect_size import cramers_v
from .strategies import resolve_strategy
from .utils import validate_contingency_table

LOGGER = logging.getLogger(__name__)

REPORT_COLUMNS = ["Comparison", "Raw P-Value", "Adjusted P-Value", "Cramer's V"]


def run_chisq_post_hoc(
    table,
    test="chisq.test",
    pops_in_rows: bool = True,
    control: str = "fdr",
    digits: int = 4,
    options=None,
    notify=None,
) -> pd.DataFrame:
    """
    Test every pair of populations in a contingency table.

    Parameters:
    -----------
    table : pd.DataFrame or array-like
        Non-negative integer counts. A DataFrame's index and columns name the
        populations and categories; plain arrays are labelled "1", "2", ...
    test : str, TestStrategy or callable, default="chisq.test"
        Pairwise test. Names: "chisq.test" / "chi-square", "fisher.test" /
        "Fisher's exact". Any callable taking (table, **options) and returning
        a p-value bearing result is accepted.
    pops_in_rows : bool, default=True
        If False the table is transposed so its columns become populations
    control : str, default="fdr"
        Correction method: fdr, BH, BY, bonferroni, holm, hochberg, hommel
    digits : int, default=4
        Decimal digits kept in every numeric column
    options : mapping, optional
        Keyword arguments forwarded verbatim to the pairwise test
    notify : callable, optional
        Receives the notice naming the correction method. Defaults to the
        module logger at INFO level, which is only shown once logging is
        configured (e.g. logging.basicConfig(level=logging.INFO)). Pass
        ``print`` to always see it.

    Returns:
    --------
    pd.DataFrame
        One row per comparison in lexicographic pair order with columns
        Comparison, Raw P-Value, Adjusted P-Value and Cramer's V
    """
    resolve_correction_method(control)
    strategy = resolve_strategy(test)

    tbl = validate_contingency_table(table)
    if not pops_in_rows:
        tbl = tbl.T

    if tbl.shape[0] >= 2 and tbl.shape[1] < 2:
        raise ValueError(
            f"Found only {tbl.shape[1]} categories. Pairwise tests need at least 2 categories per population."
        )

    comparisons = enumerate_comparisons(tbl.index)

    raw_pvalues = []
    effect_sizes = []
    for comparison in comparisons:
        subtable = comparison.subtable(tbl)
        raw_pvalues.append(strategy.run(subtable, options).p_value)
        effect_sizes.append(cramers_v(subtable))

    # Corrections need the complete vector of raw p-values
    adjusted_pvalues = adjust_pvalues(raw_pvalues, control)

    (notify or LOGGER.info)(f"Adjusted p-values used the {control} method.")

    return pd.DataFrame(
        {
            "Comparison": [comparison.label for comparison in comparisons],
            "Raw P-Value": np.round(np.asarray(raw_pvalues, dtype=float), digits),
            "Adjusted P-Value": np.round(np.asarray(adjusted_pvalues, dtype=float), digits),
            "Cramer's V": np.round(np.asarray(effect_sizes, dtype=float), digits),
        },
        columns=REPORT_COLUMNS,
    )


def format_post_hoc_results_for_knime(results_df, test_method, correction_method, alpha=0.05):
    """
    Format post-hoc results for the KNIME output table.

    Parameters:
    -----------
    results_df : pd.DataFrame
        Output from run_chisq_post_hoc
    test_method : str
        Display name of the pairwise test
    correction_method : str
        Display name of the correction method
    alpha : float, default=0.05
        Significance level applied to the adjusted p-values

    Returns:
    --------
    pd.DataFrame
        Results with test, correction and significance columns added
    """
    pairwise_df = results_df.copy()

    pairwise_df["Test Method"] = [test_method] * len(pairwise_df)
    pairwise_df["Correction Method"] = [correction_method] * len(pairwise_df)
    pairwise_df["Difference is Significant?"] = [
        "Yes" if p <= alpha else "No" for p in pairwise_df["Adjusted P-Value"]
    ]

    # Ensure proper data types for KNIME
    pairwise_df["Comparison"] = pairwise_df["Comparison"].astype(str)
    pairwise_df["Raw P-Value"] = pairwise_df["Raw P-Value"].astype(float)
    pairwise_df["Adjusted P-Value"] = pairwise_df["Adjusted P-Value"].astype(float)
    pairwise_df["Cramer's V"] = pairwise_df["Cramer's V"].astype(float)

    return pairwise_df[
        [
            "Comparison",
            "Test Method",
            "Correction Method",
            "Raw P-Value",
            "Adjusted P-Value",
            "Cramer's V",
            "Difference is Significant?",
        ]
    ]
