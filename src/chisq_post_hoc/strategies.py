"""
Pluggable hypothesis tests for pairwise contingency sub-tables.

Each strategy takes a two-row sub-table plus a mapping of options that are
forwarded untouched to the underlying scipy routine, and returns a
StrategyResult carrying the test statistic and p-value. Strategies are looked
up by name at call time; callers may also hand in their own TestStrategy or a
plain callable.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

import numpy as np
from scipy import stats
from scipy.special import gammaln

from .exceptions import UnresolvedStrategyError

# Relative tolerance when comparing table probabilities against the observed one
FISHER_REL_TOL = 1 + 1e-7
# Largest number of partial tables held while enumerating a 2 x k table
FISHER_MAX_STATES = 5_000_000


@dataclass(frozen=True)
class StrategyResult:
    statistic: float
    p_value: float


class TestStrategy:
    """Base class for a test run on one pairwise sub-table."""

    __test__ = False
    name = "custom"

    def run(self, table, options: Optional[Mapping[str, Any]] = None) -> StrategyResult:
        raise NotImplementedError


class ChiSquareStrategy(TestStrategy):
    """Pearson's chi-square test of independence (scipy.stats.chi2_contingency)."""

    name = "Chi-Square"

    def run(self, table, options=None):
        result = stats.chi2_contingency(np.asarray(table), **dict(options or {}))
        return StrategyResult(statistic=float(result[0]), p_value=_checked_p_value(result[1]))


class FisherExactStrategy(TestStrategy):
    """
    Fisher's exact test.

    2x2 tables and any call carrying options go through
    scipy.stats.fisher_exact, which receives the options verbatim (e.g.
    ``alternative`` or ``method``). Wider 2 x k tables without options are
    evaluated by exact enumeration, falling back to scipy's resampling test
    once the enumeration would exceed FISHER_MAX_STATES tables.
    """

    name = "Fisher's Exact"

    def run(self, table, options=None):
        observed = np.asarray(table)
        options = dict(options or {})

        if observed.shape == (2, 2) or options:
            statistic, p_value = _scipy_fisher_exact(observed, options)
            return StrategyResult(statistic=float(statistic), p_value=_checked_p_value(p_value))

        return StrategyResult(statistic=float("nan"), p_value=_checked_p_value(fisher_exact_2xk(observed)))


def _scipy_fisher_exact(observed, options):
    if observed.shape != (2, 2) and "method" not in options:
        # Tables wider than 2x2 are evaluated by resampling
        options = dict(options, method=stats.PermutationMethod())
    return stats.fisher_exact(observed, **options)


class CallableStrategy(TestStrategy):
    """Adapter turning any test function into a TestStrategy."""

    def __init__(self, func: Callable, name: Optional[str] = None):
        self.func = func
        self.name = name or getattr(func, "__name__", "custom")

    def run(self, table, options=None):
        result = self.func(table, **dict(options or {}))
        statistic, p_value = _unpack_result(result)
        return StrategyResult(statistic=statistic, p_value=_checked_p_value(p_value))


def _unpack_result(result):
    # Accept scipy-style result objects, dicts and (statistic, p) tuples
    for attr in ("p_value", "pvalue"):
        if hasattr(result, attr):
            return float(getattr(result, "statistic", np.nan)), getattr(result, attr)
    if isinstance(result, Mapping) and "p_value" in result:
        return float(result.get("statistic", np.nan)), result["p_value"]
    if isinstance(result, (tuple, list)) and len(result) >= 2:
        return float(result[0]), result[1]
    raise ValueError(f"Test result of type {type(result).__name__} does not expose a p-value.")


def _checked_p_value(p_value) -> float:
    p_value = float(p_value)
    if not 0.0 <= p_value <= 1.0:
        raise ValueError(f"Test returned p-value {p_value}, which is outside [0, 1].")
    return p_value


def _log_choose(n, k):
    return gammaln(n + 1) - gammaln(k + 1) - gammaln(n - k + 1)


def fisher_exact_2xk(table) -> float:
    """
    Two-sided Fisher's exact test for a 2 x k table.

    Enumerates every first row compatible with the observed margins and sums
    the hypergeometric probabilities of tables no more likely than the
    observed one. Tables whose enumeration would exceed FISHER_MAX_STATES
    partial tables are handed to scipy.stats.fisher_exact instead.

    Parameters:
    -----------
    table : array-like
        Non-negative integer counts with exactly two rows

    Returns:
    --------
    float
        Two-sided p-value
    """
    observed = np.asarray(table, dtype=np.int64)
    if observed.ndim != 2 or observed.shape[0] != 2:
        raise ValueError(f"Expected a table with two rows, got shape {observed.shape}.")

    col_totals = observed.sum(axis=0)
    observed = observed[:, col_totals > 0]
    col_totals = col_totals[col_totals > 0]
    row_total = int(observed[0].sum())
    n = int(col_totals.sum())

    # No room for the table to vary
    if observed.shape[1] < 2 or row_total in (0, n):
        return 1.0

    log_denominator = _log_choose(n, row_total)
    log_p_observed = _log_choose(col_totals, observed[0]).sum() - log_denominator

    # Grow partial first rows column by column, pruning sums that can no longer
    # reach the observed row total.
    sums = np.zeros(1, dtype=np.int64)
    log_p = np.zeros(1)
    remaining = int(col_totals.sum())
    for col_total in col_totals[:-1]:
        if sums.size * (int(col_total) + 1) > FISHER_MAX_STATES:
            return float(_scipy_fisher_exact(observed, {})[1])
        remaining -= int(col_total)
        cells = np.arange(col_total + 1)
        sums = (sums[:, None] + cells[None, :]).ravel()
        log_p = (log_p[:, None] + _log_choose(col_total, cells)[None, :]).ravel()
        feasible = (sums <= row_total) & (sums + remaining >= row_total)
        sums, log_p = sums[feasible], log_p[feasible]

    log_p = log_p + _log_choose(col_totals[-1], row_total - sums) - log_denominator

    extreme = log_p <= log_p_observed + np.log(FISHER_REL_TOL)
    return float(min(1.0, np.exp(log_p[extreme]).sum()))


STRATEGIES: Dict[str, TestStrategy] = {}


def register_strategy(name: str, strategy) -> None:
    """Register a TestStrategy (or plain callable) under a case-insensitive name."""
    if not isinstance(strategy, TestStrategy):
        if not callable(strategy):
            raise TypeError(f"Strategy for '{name}' must be a TestStrategy or callable.")
        strategy = CallableStrategy(strategy, name=name)
    STRATEGIES[name.lower()] = strategy


for _name in ("chisq.test", "chi-square", "chisq"):
    register_strategy(_name, ChiSquareStrategy())
for _name in ("fisher.test", "fisher's exact", "fisher"):
    register_strategy(_name, FisherExactStrategy())


def resolve_strategy(test) -> TestStrategy:
    """
    Resolve a test selector into a TestStrategy.

    Parameters:
    -----------
    test : str, TestStrategy or callable
        A registered name (case-insensitive), a strategy instance, or any
        callable invoked as ``test(table, **options)``

    Returns:
    --------
    TestStrategy

    Raises:
    -------
    UnresolvedStrategyError
        If a name is not registered or the selector is not callable
    """
    if isinstance(test, TestStrategy):
        return test
    if isinstance(test, str):
        try:
            return STRATEGIES[test.lower()]
        except KeyError:
            raise UnresolvedStrategyError(
                f"Unknown test strategy '{test}'. Available: {sorted(STRATEGIES)}"
            ) from None
    if callable(test):
        return CallableStrategy(test)
    raise UnresolvedStrategyError(f"Test strategy {test!r} is neither a known name nor callable.")
