# File: goburden/enrichment.py
# Location: goburden/goburden/enrichment.py

"""
Ontology burden enrichment run.

Ties the pieces together:

1. Load the ontology and resolve it into an enrichment DAG.
2. Index gene to term associations.
3. Define the case/control cohort against the VCF samples.
4. Scan the VCF: for every variant whose predicted genes are indexed,
   count case/control ref/alt genotypes and propagate the counts up the DAG.
5. Score every observed term with Fisher's exact test, rank and write.

Configuration keys
------------------
- "ontology_file", "gene_association_file", "vcf_file": inputs (required)
- "ped_file" or "case_samples_file" / "control_samples_file": cohort,
  falling back to pedigree lines of the VCF header
- "output_file": destination, None or '-' for stdout
- "relation_kinds", "skip_obsolete_terms": ontology loading
- "vep_gene_columns": CSQ sub-fields taken as genes
- "sort_order": "ascending" or "descending" p-value
- "progress_interval": log progress every N records (0 disables)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .classifier import classify_variant
from .config import SORT_ORDERS
from .dag import EnrichmentDag, build_dag
from .effects import DEFAULT_VEP_GENE_COLUMNS, EffectAnnotationParser
from .errors import ConfigurationError
from .gene_index import GeneIndex, load_gene_index
from .ontology import DEFAULT_RELATION_KINDS, Ontology, load_obo
from .ped_reader import (
    Person,
    cohort_from_pedigree,
    cohort_from_sample_lists,
    read_header_pedigree,
    read_pedigree,
    read_sample_list,
    require_cases_and_controls,
)
from .propagation import PropagationEngine
from .ranking import ReportRow, rank_nodes, write_report
from .scoring import EnrichmentScorer
from .vcf_reader import VcfReader

logger = logging.getLogger("goburden")


@dataclass
class ScanStats:
    """Counters collected while scanning the VCF."""

    records: int = 0
    records_with_genes: int = 0
    records_propagated: int = 0
    node_updates: int = 0


@dataclass
class EnrichmentResult:
    """Outcome of an enrichment run."""

    rows: List[ReportRow]
    dag: EnrichmentDag
    stats: ScanStats = field(default_factory=ScanStats)


def build_cohort(
    cfg: Dict[str, Any], vcf_samples: Sequence[str], meta_lines: Sequence[str] = ()
) -> List[Person]:
    """
    Determine the case/control cohort from the configuration.

    A PED file takes precedence over sample list files; without either, the
    pedigree lines of the VCF header (``meta_lines``) are used. The cohort
    must contain at least one case and one control.

    Raises
    ------
    ConfigurationError
        If no cohort source is available.
    CohortError
        If a role is empty.
    """
    ped_file = cfg.get("ped_file")
    case_file = cfg.get("case_samples_file")
    control_file = cfg.get("control_samples_file")

    if ped_file:
        if case_file or control_file:
            logger.warning("PED file given; ignoring case/control sample files")
        cohort = cohort_from_pedigree(read_pedigree(ped_file), vcf_samples)
    elif case_file or control_file:
        cohort = cohort_from_sample_lists(
            vcf_samples,
            read_sample_list(case_file) if case_file else None,
            read_sample_list(control_file) if control_file else None,
        )
    else:
        header_pedigree = read_header_pedigree(meta_lines)
        if not header_pedigree:
            raise ConfigurationError(
                "A PED file, case/control sample files or pedigree lines "
                "(##Sample=<ID=...,Status=...>) in the VCF header are required"
            )
        logger.info("Taking case/control status from the VCF header")
        cohort = cohort_from_pedigree(header_pedigree, vcf_samples)

    require_cases_and_controls(cohort)
    return cohort


def scan_variants(
    reader,
    effect_parser: EffectAnnotationParser,
    gene_index: GeneIndex,
    cohort: Sequence[Person],
    engine: PropagationEngine,
    progress_interval: int = 0,
) -> ScanStats:
    """
    Propagate the counts of every relevant variant into the DAG.

    Variants without any indexed gene are skipped before their genotypes
    are looked at.
    """
    stats = ScanStats()
    for record in reader:
        stats.records += 1
        if progress_interval and stats.records % progress_interval == 0:
            logger.info(
                f"Processed {stats.records} variants (at {record.locus}), "
                f"{stats.records_propagated} propagated"
            )

        genes = effect_parser.genes(record)
        if not genes:
            continue
        stats.records_with_genes += 1
        handles = gene_index.nodes_for_genes(genes)
        if not handles:
            continue

        counts = classify_variant(record.genotypes, cohort)
        stats.node_updates += engine.propagate(handles, counts)
        stats.records_propagated += 1

    logger.info(
        f"Scanned {stats.records} variants: {stats.records_propagated} hit indexed genes, "
        f"{stats.node_updates} node updates"
    )
    return stats


def _require(cfg: Dict[str, Any], key: str) -> str:
    value: Optional[str] = cfg.get(key)
    if not value:
        raise ConfigurationError(f"Missing required input '{key}'")
    return value


def run_enrichment(cfg: Dict[str, Any], write: bool = True) -> EnrichmentResult:
    """
    Run the whole enrichment analysis.

    Parameters
    ----------
    cfg : dict
        Configuration, see the module docstring for keys.
    write : bool
        Write the report to cfg["output_file"] (stdout if unset).

    Returns
    -------
    EnrichmentResult
        Ranked rows, the populated DAG and scan statistics.
    """
    ontology_file = _require(cfg, "ontology_file")
    association_file = _require(cfg, "gene_association_file")
    vcf_file = _require(cfg, "vcf_file")
    sort_order = cfg.get("sort_order", "ascending")
    if sort_order not in SORT_ORDERS:
        raise ConfigurationError(f"Unknown sort order '{sort_order}'")

    terms = load_obo(
        ontology_file,
        relation_kinds=cfg.get("relation_kinds") or DEFAULT_RELATION_KINDS,
        skip_obsolete=cfg.get("skip_obsolete_terms", True),
    )
    dag = build_dag(terms)
    ontology = Ontology(terms)
    gene_index = load_gene_index(association_file, ontology, dag)

    with VcfReader(vcf_file) as reader:
        cohort = build_cohort(cfg, reader.samples, reader.meta_lines)
        effect_parser = EffectAnnotationParser.from_header(
            reader.meta_lines, cfg.get("vep_gene_columns") or DEFAULT_VEP_GENE_COLUMNS
        )
        engine = PropagationEngine(dag)
        stats = scan_variants(
            reader,
            effect_parser,
            gene_index,
            cohort,
            engine,
            progress_interval=int(cfg.get("progress_interval", 0) or 0),
        )

    rows = rank_nodes(dag, EnrichmentScorer(), sort_order)
    if write:
        write_report(rows, cfg.get("output_file"))
    return EnrichmentResult(rows=rows, dag=dag, stats=stats)
