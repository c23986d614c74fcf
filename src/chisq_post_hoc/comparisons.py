"""
Enumeration of pairwise population comparisons.
"""

import itertools
from dataclasses import dataclass


@dataclass(frozen=True)
class Comparison:
    """An unordered pair of population row indices with its display label."""

    first: int
    second: int
    label: str

    def subtable(self, table):
        # Both rows, every category column
        return table.iloc[[self.first, self.second], :]


def enumerate_comparisons(names):
    """
    Build every pairwise comparison between populations.

    Parameters:
    -----------
    names : sequence
        Population names in row order

    Returns:
    --------
    list of Comparison
        Pairs (0,1), (0,2), ..., (1,2), ... in lexicographic order. Fewer than
        two names gives an empty list.
    """
    names = [str(name) for name in names]
    return [
        Comparison(first=i, second=j, label=f"{names[i]} vs. {names[j]}")
        for i, j in itertools.combinations(range(len(names)), 2)
    ]
