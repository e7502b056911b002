"""
Genotype utility functions.

This module parses VCF GT strings and reduces them to the binary
reference / non-reference split used by the enrichment counts.
"""

import logging

logger = logging.getLogger("goburden")

GT_REF = "ref"
GT_ALT = "alt"
GT_MISSING = "missing"


def parse_genotype(gt: str) -> tuple[int | None, ...]:
    """
    Parse a genotype string into allele indices.

    Parameters
    ----------
    gt : str
        Genotype string of any ploidy (e.g., "0/1", "1|1", "./.", "1", "0/1/2")

    Returns
    -------
    tuple of int or None
        One entry per allele, None indicating a missing call. An empty tuple
        means the string is empty or unparsable.
    """
    if not gt or gt == ".":
        return (None,) if gt == "." else ()

    # Handle both / and | separators, including mixed phasing
    parts = gt.replace("|", "/").split("/")

    try:
        return tuple(None if p == "." else int(p) for p in parts)
    except ValueError:
        logger.debug(f"Unparsable genotype '{gt}'")
        return ()


def classify_genotype(gt: str) -> str:
    """
    Reduce a genotype to 'ref', 'alt' or 'missing'.

    Parameters
    ----------
    gt : str
        Genotype string

    Returns
    -------
    str
        'missing' if no allele is called, 'ref' if every allele is the
        reference allele, otherwise 'alt' (het and hom-alt alike, any ALT
        index). A no-call allele next to a called one is not a reference
        allele, so partially called genotypes ("0/.", "./1") are 'alt'.
    """
    alleles = parse_genotype(gt)
    if all(a is None for a in alleles):
        return GT_MISSING
    if all(a == 0 for a in alleles):
        return GT_REF
    return GT_ALT
