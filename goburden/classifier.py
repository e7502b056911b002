"""Per-variant case/control ref/alt counting."""

from typing import Mapping, NamedTuple, Sequence

from .genotype_utils import GT_ALT, GT_REF, classify_genotype
from .ped_reader import Person


class CaseControlCounts(NamedTuple):
    """Number of called samples per role carrying only REF or at least one ALT allele."""

    unaffected_ref: int = 0
    unaffected_alt: int = 0
    affected_ref: int = 0
    affected_alt: int = 0

    @property
    def total(self) -> int:
        return sum(self)


def classify_variant(genotypes: Mapping[str, str], cohort: Sequence[Person]) -> CaseControlCounts:
    """
    Count ref-only and alt-carrying genotypes of cases and controls.

    Parameters
    ----------
    genotypes : mapping of str to str
        Sample ID to GT string for one variant. Samples absent from the
        mapping are treated as not called.
    cohort : sequence of Person
        The case/control samples.

    Returns
    -------
    CaseControlCounts
        The four counts; not-called genotypes are excluded.
    """
    unaffected_ref = unaffected_alt = affected_ref = affected_alt = 0
    for person in cohort:
        status = classify_genotype(genotypes.get(person.sample_id, ""))
        if status == GT_REF:
            if person.affected:
                affected_ref += 1
            else:
                unaffected_ref += 1
        elif status == GT_ALT:
            if person.affected:
                affected_alt += 1
            else:
                unaffected_alt += 1

    return CaseControlCounts(unaffected_ref, unaffected_alt, affected_ref, affected_alt)
