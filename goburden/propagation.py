"""
Propagation of per-variant counts up the enrichment DAG.

A variant's counts are added to every node annotated by one of its genes and
to every ancestor of those nodes. Each node receives the counts at most once
per variant, however many paths lead to it and however many of its
descendants were hit. The visited set lives only for the duration of one
:meth:`PropagationEngine.propagate` call.
"""

import logging
from typing import Iterable

from .classifier import CaseControlCounts
from .dag import EnrichmentDag

logger = logging.getLogger("goburden")


class PropagationEngine:
    """Adds variant counts to hit nodes and their ancestor closure."""

    def __init__(self, dag: EnrichmentDag):
        self.dag = dag
        self.n_propagations = 0

    def propagate(self, handles: Iterable[int], counts: CaseControlCounts) -> int:
        """
        Add ``counts`` once to every node reachable from ``handles``.

        Parameters
        ----------
        handles : iterable of int
            Handles of the nodes directly hit by the variant.
        counts : CaseControlCounts
            The variant's four counts.

        Returns
        -------
        int
            Number of nodes updated.
        """
        visited: set[int] = set()
        for start in handles:
            # Depth-first walk; a node already visited is skipped with its parents
            stack = [start]
            while stack:
                handle = stack.pop()
                if handle in visited:
                    continue
                visited.add(handle)

                node = self.dag.node(handle)
                node.unaffected_ref += counts.unaffected_ref
                node.unaffected_alt += counts.unaffected_alt
                node.affected_ref += counts.affected_ref
                node.affected_alt += counts.affected_alt

                stack.extend(p for p in node.parents if p not in visited)

        self.n_propagations += 1
        return len(visited)
