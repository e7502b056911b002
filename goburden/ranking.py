# File: goburden/ranking.py
# Location: goburden/goburden/ranking.py

"""
Ranking and reporting of scored ontology terms.

Provides:
- rank_nodes: drops never-observed nodes and sorts the rest by p-value.
- write_report: writes the ranked rows as a headerless tab-delimited table.
"""

import logging
import sys
from typing import Iterable, List, NamedTuple, Optional

import pandas as pd

from .config import SORT_ORDERS
from .dag import EnrichmentNode
from .errors import ConfigurationError
from .scoring import EnrichmentScorer
from .utils import is_stdio

logger = logging.getLogger("goburden")

REPORT_COLUMNS = [
    "term_id",
    "score",
    "term_name",
    "unaffected_ref_count",
    "unaffected_alt_count",
    "affected_ref_count",
    "affected_alt_count",
]


class ReportRow(NamedTuple):
    """One output line."""

    term_id: str
    score: float
    term_name: str
    unaffected_ref: int
    unaffected_alt: int
    affected_ref: int
    affected_alt: int


def rank_nodes(
    nodes: Iterable[EnrichmentNode],
    scorer: EnrichmentScorer,
    sort_order: str = "ascending",
) -> List[ReportRow]:
    """
    Rank observed nodes by their Fisher's exact test p-value.

    Parameters
    ----------
    nodes : iterable of EnrichmentNode
        Nodes in DAG order; this order breaks ties.
    scorer : EnrichmentScorer
        Memoized scorer.
    sort_order : str
        "ascending" puts the smallest p-value (strongest association) first,
        "descending" the largest.

    Returns
    -------
    list of ReportRow
        Rows of every node with at least one observation.

    Raises
    ------
    ConfigurationError
        If ``sort_order`` is not a known order.
    """
    if sort_order not in SORT_ORDERS:
        raise ConfigurationError(
            f"Unknown sort order '{sort_order}', expected one of {', '.join(SORT_ORDERS)}"
        )

    observed = [node for node in nodes if node.total > 0]
    # sorted() is stable, also with reverse=True, so ties keep DAG order
    ranked = sorted(observed, key=scorer.score, reverse=(sort_order == "descending"))
    logger.debug(f"Ranked {len(ranked)} observed nodes ({sort_order} p-value)")

    return [
        ReportRow(
            term_id=node.term.id,
            score=scorer.score(node),
            term_name=node.term.name,
            unaffected_ref=node.unaffected_ref,
            unaffected_alt=node.unaffected_alt,
            affected_ref=node.affected_ref,
            affected_alt=node.affected_alt,
        )
        for node in ranked
    ]


def report_dataframe(rows: Iterable[ReportRow]) -> pd.DataFrame:
    """Convert report rows to a DataFrame with the report column names."""
    return pd.DataFrame([tuple(r) for r in rows], columns=REPORT_COLUMNS)


def write_report(rows: Iterable[ReportRow], output: Optional[str] = None) -> None:
    """
    Write report rows tab-delimited without a header.

    Parameters
    ----------
    rows : iterable of ReportRow
        Ranked rows.
    output : str, optional
        Destination path (gzip-compressed if it ends in .gz), or None,
        '-' or 'stdout' for standard output.
    """
    df = report_dataframe(rows)
    if is_stdio(output):
        df.to_csv(sys.stdout, sep="\t", header=False, index=False)
        sys.stdout.flush()
    else:
        df.to_csv(output, sep="\t", header=False, index=False, compression="infer")
        logger.info(f"Wrote {len(df)} terms to {output}")
