"""Builders for test ontologies and VCF text."""

from goburden.ontology import Relation, Term

ANN_HEADER = (
    '##INFO=<ID=ANN,Number=.,Type=String,Description="Functional annotations: '
    "'Allele | Annotation | Annotation_Impact | Gene_Name | Gene_ID | Feature_Type | "
    "Feature_ID | Transcript_BioType | Rank | HGVS.c | HGVS.p | cDNA.pos / cDNA.length | "
    "CDS.pos / CDS.length | AA.pos / AA.length | Distance | ERRORS / WARNINGS / INFO'\">"
)

CSQ_HEADER = (
    '##INFO=<ID=CSQ,Number=.,Type=String,Description="Consequence annotations from '
    'Ensembl VEP. Format: Allele|Consequence|IMPACT|SYMBOL|Gene|Feature_type|Feature|HGNC_ID">'
)

EFF_HEADER = (
    '##INFO=<ID=EFF,Number=.,Type=String,Description="Predicted effects for this variant.'
    "Format: 'Effect ( Effect_Impact | Functional_Class | Codon_Change | Amino_Acid_Change| "
    "Amino_Acid_Length | Gene_Name | Transcript_BioType | Gene_Coding | Transcript_ID | "
    "Exon_Rank  | Genotype_Number [ | ERRORS | WARNINGS ] )' \">"
)


def ann(gene: str) -> str:
    """A single snpEff ANN prediction for ``gene``."""
    return f"G|missense_variant|MODERATE|{gene}|ENSG_{gene}|transcript|ENST_{gene}|protein_coding|1/2|c.1A>G|p.M1V|1/10|1/9|1/3||"


def vcf_text(samples, records, meta_lines=(ANN_HEADER,)) -> str:
    """Build VCF text; each record is (chrom, pos, info, [gt, ...])."""
    lines = ["##fileformat=VCFv4.2", *meta_lines]
    lines.append('##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">')
    lines.append("\t".join(["#CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO", "FORMAT", *samples]))
    for chrom, pos, info, gts in records:
        lines.append("\t".join([chrom, str(pos), ".", "A", "G", "50", "PASS", info, "GT", *gts]))
    return "\n".join(lines) + "\n"


def make_term(
    term_id: str, *parents: str, name: str = None, synonyms=(), alt_ids=(), kind: str = "is_a"
) -> Term:
    """Build a Term whose relations point at ``parents``."""
    return Term(
        id=term_id,
        name=name or term_id,
        synonyms=frozenset(synonyms),
        relations=tuple(Relation(target_id=p, kind=kind) for p in parents),
        alt_ids=frozenset(alt_ids),
    )

