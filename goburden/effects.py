"""Gene extraction from transcript-effect predictions.

Supports the three INFO annotations commonly found in annotated VCFs:

* ``CSQ`` written by Ensembl VEP (``Format: Allele|Consequence|...``)
* ``ANN`` written by snpEff / SnpSift (``'Allele | Annotation | ...'``)
* ``EFF`` written by older snpEff releases (``Effect(Impact|...|Gene_Name|...)``)

Sub-field layouts are read from the ``##INFO`` declarations so that
reordered VEP columns are handled.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Sequence

from .vcf_reader import VcfRecord

logger = logging.getLogger("goburden")

# Regex for standard VCF meta-information lines (INFO / FORMAT).
# Handles optional extra attributes (Source=, Version=) after Description.
HEADER_RE = re.compile(
    r"##(?P<source>INFO|FORMAT)=<"
    r"ID=(?P<id>[^,]+),"
    r"Number=(?P<number>[^,]+),"
    r"Type=(?P<type>[^,]+),"
    r'Description="(?P<desc>[^"]*)"'
)

DEFAULT_VEP_GENE_COLUMNS = ("CCDS", "Feature", "ENSP", "Gene", "HGNC", "HGNC_ID", "SYMBOL", "RefSeq")

ANN_GENE_NAME_INDEX = 3
EFF_GENE_NAME_INDEX = 5
EFF_RE = re.compile(r"^[^(]*\((?P<fields>.*)\)$")


@dataclass
class AnnotationField:
    """A single annotation field parsed from a VCF header."""

    id: str
    number: str
    type: str
    description: str
    source: str  # "INFO" or "FORMAT"


def parse_header_fields(meta_lines: Iterable[str]) -> dict[str, AnnotationField]:
    """Parse ``##INFO`` declarations into a dict keyed by field ID."""
    fields: dict[str, AnnotationField] = {}
    for line in meta_lines:
        m = HEADER_RE.match(line)
        if m and m.group("source") == "INFO":
            fields[m.group("id")] = AnnotationField(
                id=m.group("id"),
                number=m.group("number"),
                type=m.group("type"),
                description=m.group("desc"),
                source=m.group("source"),
            )
    return fields


def _split_layout(text: str) -> list[str]:
    return [token.strip() for token in re.split(r"[|(]", text.strip(" '()"))]


def vep_layout(description: str) -> list[str]:
    """Sub-field names from a VEP CSQ description (``... Format: A|B|C``)."""
    if "Format:" not in description:
        return []
    return [c.strip() for c in description.split("Format:", 1)[1].strip().split("|")]


def ann_layout(description: str) -> list[str]:
    """Sub-field names from a snpEff ANN description (``... 'A | B | C'``)."""
    m = re.search(r"'([^']*)'", description)
    return _split_layout(m.group(1)) if m else []


class EffectAnnotationParser:
    """Extracts the gene symbols implicated by a record's effect predictions."""

    def __init__(
        self,
        csq_columns: dict[str, int] | None = None,
        ann_gene_index: int | None = None,
        eff_gene_index: int | None = None,
    ):
        self.csq_columns = csq_columns or {}
        self.ann_gene_index = ann_gene_index
        self.eff_gene_index = eff_gene_index

    @classmethod
    def from_header(
        cls,
        meta_lines: Iterable[str],
        vep_gene_columns: Sequence[str] = DEFAULT_VEP_GENE_COLUMNS,
    ) -> "EffectAnnotationParser":
        """
        Configure the parser from VCF ``##`` lines.

        Parameters
        ----------
        meta_lines : iterable of str
            The VCF meta-information lines.
        vep_gene_columns : sequence of str
            CSQ sub-fields whose values are taken as gene identifiers.

        Returns
        -------
        EffectAnnotationParser
            A parser for every annotation declared in the header.
        """
        fields = parse_header_fields(meta_lines)
        csq_columns: dict[str, int] = {}
        ann_gene_index = None
        eff_gene_index = None

        if "CSQ" in fields:
            layout = vep_layout(fields["CSQ"].description)
            csq_columns = {name: i for i, name in enumerate(layout) if name in vep_gene_columns}
            if not csq_columns:
                logger.warning("CSQ declared but none of the VEP gene columns were found in its format")
            else:
                logger.debug(f"Using VEP CSQ columns {sorted(csq_columns)}")

        if "ANN" in fields:
            layout = ann_layout(fields["ANN"].description)
            ann_gene_index = layout.index("Gene_Name") if "Gene_Name" in layout else ANN_GENE_NAME_INDEX

        if "EFF" in fields:
            layout = ann_layout(fields["EFF"].description)
            eff_gene_index = (
                layout.index("Gene_Name") - 1 if "Gene_Name" in layout else EFF_GENE_NAME_INDEX
            )

        if not csq_columns and ann_gene_index is None and eff_gene_index is None:
            logger.warning("VCF header declares no CSQ, ANN or EFF annotation; no genes will be found")

        return cls(csq_columns, ann_gene_index, eff_gene_index)

    def genes(self, record: VcfRecord) -> set[str]:
        """Return every non-empty gene identifier predicted for ``record``."""
        genes: set[str] = set()

        if self.csq_columns:
            for prediction in record.info_values("CSQ"):
                values = prediction.split("|")
                for index in self.csq_columns.values():
                    if index < len(values) and values[index].strip():
                        genes.add(values[index].strip())

        if self.ann_gene_index is not None:
            for prediction in record.info_values("ANN"):
                values = prediction.split("|")
                if self.ann_gene_index < len(values) and values[self.ann_gene_index].strip():
                    genes.add(values[self.ann_gene_index].strip())

        if self.eff_gene_index is not None:
            for prediction in record.info_values("EFF"):
                m = EFF_RE.match(prediction)
                if not m:
                    continue
                values = m.group("fields").split("|")
                if self.eff_gene_index < len(values) and values[self.eff_gene_index].strip():
                    genes.add(values[self.eff_gene_index].strip())

        return genes
