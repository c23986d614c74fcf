"""
Cramer's V effect size for contingency sub-tables.
"""

import numpy as np
from scipy import stats


def cramers_v(table) -> float:
    # High-level: chi-square statistic from scipy (default continuity
    # correction, so 2x2 tables are Yates-corrected), normalised by N and
    # the smaller table dimension.
    observed = np.asarray(table, dtype=float)
    observed = observed[:, observed.sum(axis=0) > 0]
    observed = observed[observed.sum(axis=1) > 0, :]

    k = min(observed.shape)
    if k < 2:
        return float("nan")

    chi2 = stats.chi2_contingency(observed)[0]
    n = observed.sum()
    return float(np.sqrt(chi2 / (n * (k - 1))))
