"""
Multiple-comparison correction of pairwise p-values.

Adjustment is delegated to statsmodels.stats.multitest.multipletests, applied
once over the full vector of raw p-values and returned in input order.
"""

import numpy as np
from statsmodels.stats.multitest import multipletests

from .exceptions import UnresolvedCorrectionMethodError

# Accepted names mapped to statsmodels method identifiers
CORRECTION_METHODS = {
    "fdr": "fdr_bh",
    "bh": "fdr_bh",
    "fdr_bh": "fdr_bh",
    "by": "fdr_by",
    "fdr_by": "fdr_by",
    "bonferroni": "bonferroni",
    "holm": "holm",
    "hochberg": "simes-hochberg",
    "simes-hochberg": "simes-hochberg",
    "hommel": "hommel",
}


def resolve_correction_method(control: str) -> str:
    """Return the statsmodels method for a correction name, ignoring case."""
    try:
        return CORRECTION_METHODS[str(control).lower()]
    except KeyError:
        raise UnresolvedCorrectionMethodError(
            f"Unknown correction method '{control}'. "
            f"Choose one of: fdr, BH, BY, bonferroni, holm, hochberg, hommel."
        ) from None


def adjust_pvalues(p_values, control: str = "fdr") -> np.ndarray:
    """
    Adjust raw p-values for multiple comparisons.

    Parameters:
    -----------
    p_values : array-like
        Raw p-values, one per comparison
    control : str, default="fdr"
        Correction method name

    Returns:
    --------
    np.ndarray
        Adjusted p-values, same length and order as the input
    """
    method = resolve_correction_method(control)
    p_values = np.asarray(p_values, dtype=float)
    if p_values.size == 0:
        return p_values

    _, adjusted, _, _ = multipletests(p_values, method=method)
    return adjusted
