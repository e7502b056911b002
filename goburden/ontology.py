"""Ontology terms loaded from OBO files with goatools.

goatools' :class:`~goatools.obo_parser.OBOReader` parses the ``[Term]``
stanzas; each record is turned into an immutable :class:`Term` whose
relations still name their targets by identifier. Resolving those targets
into nodes is left to :func:`goburden.dag.build_dag`.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from goatools.obo_parser import OBOReader

from .errors import OntologySourceError
from .utils import smart_open

logger = logging.getLogger("goburden")

DEFAULT_RELATION_KINDS = ("is_a", "part_of")
OPTIONAL_ATTRS = {"relationship", "synonym"}


@dataclass(frozen=True)
class Relation:
    """An outgoing edge from a term to one of its parents."""

    target_id: str
    kind: str


@dataclass(frozen=True)
class Term:
    """An immutable ontology term."""

    id: str
    name: str
    synonyms: frozenset[str] = field(default_factory=frozenset)
    relations: tuple[Relation, ...] = ()
    alt_ids: frozenset[str] = field(default_factory=frozenset)


@contextmanager
def _plain_obo(file_path: str) -> Iterator[str]:
    """Yield a path goatools can open, decompressing ``.gz`` input to a temporary file."""
    if not file_path.endswith(".gz"):
        yield file_path
        return

    fd, tmp_path = tempfile.mkstemp(suffix=".obo")
    try:
        with smart_open(file_path, "r") as src, os.fdopen(fd, "w", encoding="utf-8") as dst:
            shutil.copyfileobj(src, dst)
        yield tmp_path
    finally:
        os.unlink(tmp_path)


def _record_to_term(rec, kinds: set[str]) -> tuple[Term, int]:
    """Convert a goatools record, keeping relations of the requested kinds."""
    relations = []
    n_dropped = 0
    for target in sorted(rec._parents):
        if "is_a" in kinds:
            relations.append(Relation(target_id=target, kind="is_a"))
        else:
            n_dropped += 1

    # Before GODag populates them, relationship targets are plain identifiers
    for kind, targets in sorted((getattr(rec, "relationship", None) or {}).items()):
        if kind not in kinds:
            n_dropped += len(targets)
            continue
        relations.extend(Relation(target_id=t, kind=kind) for t in sorted(targets))

    synonyms = frozenset(s.text for s in (getattr(rec, "synonym", None) or ()))
    term = Term(
        id=rec.item_id,
        name=rec.name or rec.item_id,
        synonyms=synonyms,
        relations=tuple(relations),
        alt_ids=frozenset(rec.alt_ids),
    )
    return term, n_dropped


def load_obo(
    file_path: str,
    relation_kinds: Iterable[str] = DEFAULT_RELATION_KINDS,
    skip_obsolete: bool = True,
) -> list[Term]:
    """Load the terms of an OBO file.

    Parameters
    ----------
    file_path : str
        Path to an OBO file, optionally gzip-compressed.
    relation_kinds : iterable of str
        Relation kinds to keep (``is_a`` plus any ``relationship`` type).
        Relations of other kinds are dropped.
    skip_obsolete : bool
        Drop terms flagged ``is_obsolete: true``.

    Returns
    -------
    list[Term]
        Terms in file order.

    Raises
    ------
    OntologySourceError
        If goatools cannot parse the file, a term has no identifier, or the
        same identifier is defined twice.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Ontology file '{file_path}' not found.")

    with _plain_obo(file_path) as obo_path:
        try:
            records = list(OBOReader(obo_path, optional_attrs=OPTIONAL_ATTRS))
        except Exception as e:
            raise OntologySourceError(f"Failed to parse OBO file: {e}", file_path) from e

    kinds = set(relation_kinds)
    terms: list[Term] = []
    seen: set[str] = set()
    n_obsolete = 0
    n_dropped_relations = 0

    for rec in records:
        if rec.is_obsolete and skip_obsolete:
            n_obsolete += 1
            continue
        if not rec.item_id:
            raise OntologySourceError("Term stanza without an id", file_path)
        if rec.item_id in seen:
            raise OntologySourceError(f"Duplicate term identifier '{rec.item_id}'", file_path)
        seen.add(rec.item_id)

        term, n_dropped = _record_to_term(rec, kinds)
        n_dropped_relations += n_dropped
        terms.append(term)

    if not terms:
        raise OntologySourceError("No terms found", file_path)

    logger.info(
        f"Loaded {len(terms)} ontology terms from {file_path} "
        f"({n_obsolete} obsolete skipped, {n_dropped_relations} relations of other kinds dropped)"
    )
    return terms


class Ontology:
    """
    Lookup of terms by identifier, alternate identifier, display name or synonym.

    Lookups are tried in that order. When two terms share a name or synonym,
    the first one registered wins.
    """

    def __init__(self, terms: Iterable[Term]):
        self.terms: list[Term] = list(terms)
        self._by_id: dict[str, Term] = {}
        self._by_alt_id: dict[str, Term] = {}
        self._by_name: dict[str, Term] = {}
        self._by_synonym: dict[str, Term] = {}
        for term in self.terms:
            self._by_id.setdefault(term.id, term)
            for alt_id in term.alt_ids:
                self._by_alt_id.setdefault(alt_id, term)
            self._by_name.setdefault(term.name, term)
            for synonym in term.synonyms:
                self._by_synonym.setdefault(synonym, term)

    def __len__(self) -> int:
        return len(self.terms)

    def __contains__(self, term_id: str) -> bool:
        return term_id in self._by_id

    def find(self, text: str) -> Term | None:
        """Return the term matching ``text``; secondary identifiers map to their primary term."""
        return (
            self._by_id.get(text)
            or self._by_alt_id.get(text)
            or self._by_name.get(text)
            or self._by_synonym.get(text)
        )
