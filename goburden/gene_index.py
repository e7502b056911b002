"""
Gene to ontology node index.

Reads a gene association file (tab-delimited: gene, term) and maps every
gene symbol to the DAG nodes of the terms it is annotated to.
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, Iterator, Set, Tuple

from .dag import EnrichmentDag
from .errors import GeneAssociationFormatError
from .ontology import Ontology
from .utils import smart_open

logger = logging.getLogger("goburden")


def read_gene_associations(file_path: str) -> Iterator[Tuple[str, str]]:
    """
    Yield (gene, term) pairs from a gene association file.

    Blank lines and lines starting with '#' or '!' are skipped. Each other
    line is split on its first tab: the gene is on the left, the term
    identifier, name or synonym on the right.

    Parameters
    ----------
    file_path : str
        Path to the association file (plain or gzip).

    Yields
    ------
    tuple of (str, str)
        Gene symbol and term text, both stripped.

    Raises
    ------
    GeneAssociationFormatError
        If a line has no tab, an empty gene or an empty term.
    """
    with smart_open(file_path, "r") as fh:
        for line_number, line in enumerate(fh, start=1):
            line = line.rstrip("\r\n")
            if not line or line.startswith("#") or line.startswith("!"):
                continue
            if "\t" not in line:
                raise GeneAssociationFormatError(file_path, line_number, "Tab missing")
            gene, term_text = line.split("\t", 1)
            gene = gene.strip()
            term_text = term_text.strip()
            if not gene:
                raise GeneAssociationFormatError(file_path, line_number, "Empty gene")
            if not term_text:
                raise GeneAssociationFormatError(file_path, line_number, "Empty term")
            yield gene, term_text


class GeneIndex:
    """Maps gene symbols to the handles of the DAG nodes they annotate."""

    def __init__(self, ontology: Ontology, dag: EnrichmentDag):
        self.ontology = ontology
        self.dag = dag
        self._gene2nodes: Dict[str, Set[int]] = defaultdict(set)

    def add_association(self, gene: str, term_text: str) -> bool:
        """
        Register that ``gene`` is annotated to the term named ``term_text``.

        Returns False (after logging a warning) if the ontology does not know
        the term, which happens with obsolete or renamed terms. Raises
        MissingNodeError if the term is known but has no DAG node.
        """
        term = self.ontology.find(term_text)
        if term is None:
            logger.warning(
                f"Unknown ontology term '{term_text}' for gene {gene}. "
                "Could be obsolete or renamed. Skipping."
            )
            return False
        node = self.dag[term]
        self._gene2nodes[gene].add(node.handle)
        return True

    def __contains__(self, gene: str) -> bool:
        return gene in self._gene2nodes

    def __len__(self) -> int:
        return len(self._gene2nodes)

    def nodes_for_gene(self, gene: str) -> Set[int]:
        return set(self._gene2nodes.get(gene, ()))

    def nodes_for_genes(self, genes: Iterable[str]) -> Set[int]:
        """Union of the node handles of every indexed gene in ``genes``."""
        handles: Set[int] = set()
        for gene in genes:
            nodes = self._gene2nodes.get(gene)
            if nodes:
                handles.update(nodes)
        return handles


def load_gene_index(file_path: str, ontology: Ontology, dag: EnrichmentDag) -> GeneIndex:
    """Build a GeneIndex from an association file."""
    index = GeneIndex(ontology, dag)
    n_added = 0
    n_skipped = 0
    for gene, term_text in read_gene_associations(file_path):
        if index.add_association(gene, term_text):
            n_added += 1
        else:
            n_skipped += 1

    logger.info(
        f"Indexed {len(index)} genes from {file_path}: "
        f"{n_added} associations kept, {n_skipped} skipped (unknown terms)"
    )
    return index
