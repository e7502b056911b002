"""
Enrichment DAG built from ontology terms.

All nodes live in one arena (:class:`EnrichmentDag`) and refer to their
parents by integer handle, the node's position in the arena. Handles are
assigned in resolution order, so a parent always has a smaller handle than
its children.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

from .errors import MissingNodeError, OntologySourceError, UnresolvableReferenceError
from .ontology import Term

logger = logging.getLogger("goburden")


@dataclass
class EnrichmentNode:
    """One ontology term with its case/control accumulators."""

    handle: int
    term: Term
    parents: tuple[int, ...] = ()
    unaffected_ref: int = 0
    unaffected_alt: int = 0
    affected_ref: int = 0
    affected_alt: int = 0

    @property
    def total(self) -> int:
        return self.unaffected_ref + self.unaffected_alt + self.affected_ref + self.affected_alt

    @property
    def table(self) -> list[list[int]]:
        """2x2 contingency table, rows unaffected/affected, columns ref/alt."""
        return [
            [self.unaffected_ref, self.unaffected_alt],
            [self.affected_ref, self.affected_alt],
        ]


class EnrichmentDag:
    """Arena of enrichment nodes, addressable by handle, term or term identifier."""

    def __init__(self) -> None:
        self._nodes: list[EnrichmentNode] = []
        self._handles: dict[str, int] = {}

    def add(self, term: Term, parents: Iterable[int] = ()) -> EnrichmentNode:
        if term.id in self._handles:
            raise OntologySourceError(f"Duplicate term identifier '{term.id}'")
        # dict.fromkeys keeps first-seen order while dropping duplicate parents
        node = EnrichmentNode(
            handle=len(self._nodes), term=term, parents=tuple(dict.fromkeys(parents))
        )
        self._nodes.append(node)
        self._handles[term.id] = node.handle
        return node

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[EnrichmentNode]:
        return iter(self._nodes)

    def __contains__(self, key: Term | str) -> bool:
        term_id = key.id if isinstance(key, Term) else key
        return term_id in self._handles

    def __getitem__(self, key: Term | str) -> EnrichmentNode:
        """Return the node of a term or term identifier, raising MissingNodeError."""
        term_id = key.id if isinstance(key, Term) else key
        handle = self._handles.get(term_id)
        if handle is None:
            raise MissingNodeError(term_id)
        return self._nodes[handle]

    def handle_of(self, key: Term | str) -> int:
        return self[key].handle

    def node(self, handle: int) -> EnrichmentNode:
        return self._nodes[handle]


def build_dag(terms: Iterable[Term]) -> EnrichmentDag:
    """
    Resolve terms with forward references into an EnrichmentDag.

    Each pass walks the remaining terms in order and resolves every term whose
    relation targets are all resolved already (earlier passes or earlier in
    the same pass). Passes stop when nothing remains or a pass resolves no
    term. Since a node is only created once all its parents exist, the result
    is acyclic; terms on a cycle or pointing at an absent term never resolve.

    Parameters
    ----------
    terms : iterable of Term
        Terms with unique identifiers, in any order.

    Returns
    -------
    EnrichmentDag
        One node per term.

    Raises
    ------
    UnresolvableReferenceError
        If some terms can never be resolved.
    OntologySourceError
        If two terms share an identifier.
    """
    dag = EnrichmentDag()
    worklist = list(terms)
    n_passes = 0

    while worklist:
        n_passes += 1
        remaining = []
        for term in worklist:
            if all(rel.target_id in dag for rel in term.relations):
                dag.add(term, (dag.handle_of(rel.target_id) for rel in term.relations))
            else:
                remaining.append(term)

        if len(remaining) == len(worklist):
            known = {t.id for t in worklist} | {node.term.id for node in dag}
            missing = {
                rel.target_id
                for t in remaining
                for rel in t.relations
                if rel.target_id not in known
            }
            raise UnresolvableReferenceError((t.id for t in remaining), missing)
        worklist = remaining

    logger.debug(f"Resolved {len(dag)} DAG nodes in {n_passes} passes")
    return dag
