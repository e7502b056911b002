"""
Fisher's exact test scoring of enrichment nodes.

Each node's accumulated counts form the 2x2 table

                ref        alt
    unaffected  u_ref      u_alt
    affected    a_ref      a_alt

which is tested with a two-sided Fisher's exact test (exact hypergeometric
enumeration over all tables with the same margins). Tables with a zero row
or column margin carry no information and score 1.0.
"""

import logging
from typing import Dict, Sequence

from scipy.stats import fisher_exact

from .dag import EnrichmentNode

logger = logging.getLogger("goburden")


def has_zero_margin(table: Sequence[Sequence[int]]) -> bool:
    """Return True if any row or column of a 2x2 table sums to zero."""
    a, b = table[0]
    c, d = table[1]
    return (a + b == 0) or (c + d == 0) or (a + c == 0) or (b + d == 0)


def fisher_exact_p(table: Sequence[Sequence[int]]) -> float:
    """
    Two-sided Fisher's exact test p-value of a 2x2 table.

    Parameters
    ----------
    table : sequence of sequences of int
        2x2 contingency table, e.g. [[a, b], [c, d]].

    Returns
    -------
    float
        The p-value, 1.0 for degenerate tables.
    """
    if has_zero_margin(table):
        logger.debug(f"Zero margin in table {table}, p-value set to 1.0")
        return 1.0
    _, pval = fisher_exact(table, alternative="two-sided")
    # scipy can return values a few ulps above 1 after summing probabilities
    return min(float(pval), 1.0)


class EnrichmentScorer:
    """Memoized Fisher's exact test p-value per DAG node."""

    def __init__(self) -> None:
        self._cache: Dict[int, float] = {}

    def score(self, node: EnrichmentNode) -> float:
        cached = self._cache.get(node.handle)
        if cached is None:
            cached = fisher_exact_p(node.table)
            self._cache[node.handle] = cached
        return cached

    def clear(self) -> None:
        """Forget cached scores, e.g. after more counts were propagated."""
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
