"""
Cohort definition from PED files or sample lists.

This module parses standard 6-column PED files, or pedigree lines of a VCF
header, and turns the affection status, or explicit case/control sample
lists, into the case/control cohort used for counting.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

import pandas as pd

from .errors import CohortError

logger = logging.getLogger("goburden")

PED_COLUMNS = ["family_id", "sample_id", "father_id", "mother_id", "sex", "affected_status"]


@dataclass(frozen=True)
class Person:
    """A sample with its case (affected) or control (unaffected) role."""

    sample_id: str
    affected: bool


def read_pedigree(file_path: str) -> Dict[str, Dict[str, Any]]:
    """
    Parses a PED file into a dictionary keyed by sample ID.

    Args:
        file_path: Path to the PED file

    Returns:
        Dictionary mapping sample IDs to their pedigree information

    Raises:
        CohortError: If the PED file is invalid or cannot be parsed
    """
    try:
        try:
            ped_df = pd.read_csv(file_path, sep=r"\s+", header=None, dtype=str, comment="#")
        except pd.errors.EmptyDataError:
            raise ValueError("PED file is empty")

        if ped_df.empty:
            raise ValueError("PED file is empty")

        if ped_df.shape[1] != 6:
            raise ValueError(f"PED file must have exactly 6 columns, found {ped_df.shape[1]}")
        ped_df.columns = PED_COLUMNS

        pedigree_data = {}
        for _, row in ped_df.iterrows():
            sample_id = row["sample_id"]
            if pd.isna(sample_id) or sample_id == "":
                logger.warning("Skipping row with empty sample ID")
                continue

            pedigree_data[sample_id] = {
                column: (
                    row[column] if not pd.isna(row[column]) and row[column] != "." else "0"
                )
                for column in PED_COLUMNS
            }

        logger.info(f"Successfully parsed PED file with {len(pedigree_data)} individuals")
        return pedigree_data

    except Exception as e:
        raise CohortError(f"Failed to parse PED file: {e}")


def is_affected(sample_id: str, pedigree_data: Dict[str, Dict[str, Any]]) -> bool:
    """
    Check if a sample is affected according to the pedigree.

    Args:
        sample_id: The sample ID to check
        pedigree_data: The pedigree data dictionary

    Returns:
        True if affected (status = 2), False otherwise
    """
    if sample_id not in pedigree_data:
        return False
    return pedigree_data[sample_id].get("affected_status", "0") == "2"


def is_unaffected(sample_id: str, pedigree_data: Dict[str, Dict[str, Any]]) -> bool:
    """Check if a sample is unaffected (status = 1)."""
    if sample_id not in pedigree_data:
        return False
    return pedigree_data[sample_id].get("affected_status", "0") == "1"


# Pedigree meta lines carried in a VCF header, e.g.
# ##Sample=<Family=F1,ID=S1,Father=0,Mother=0,Sex=1,Status=2>
SAMPLE_META_RE = re.compile(r"^##(?:Sample|SAMPLE|PEDIGREE)=<(?P<fields>.*)>\s*$")
SAMPLE_FIELD_RE = re.compile(r'(?P<key>[^=,]+)=(?P<value>"[^"]*"|[^,]*)')
HEADER_FIELD_TO_COLUMN = {
    "family": "family_id",
    "id": "sample_id",
    "father": "father_id",
    "mother": "mother_id",
    "sex": "sex",
    "status": "affected_status",
    "phenotype": "affected_status",
}
STATUS_WORDS = {
    "affected": "2",
    "case": "2",
    "unaffected": "1",
    "control": "1",
}


def read_header_pedigree(meta_lines: Iterable[str]) -> Dict[str, Dict[str, Any]]:
    """
    Parse pedigree lines of a VCF header into the read_pedigree() layout.

    Lines look like ``##Sample=<Family=F1,ID=S1,Father=0,Mother=0,Sex=1,Status=2>``.
    Status may be numeric (1 unaffected, 2 affected) or one of
    case/affected/control/unaffected. Missing columns default to "0".
    """
    pedigree_data = {}
    for line in meta_lines:
        m = SAMPLE_META_RE.match(line)
        if not m:
            continue

        record = {column: "0" for column in PED_COLUMNS}
        for field in SAMPLE_FIELD_RE.finditer(m.group("fields")):
            column = HEADER_FIELD_TO_COLUMN.get(field.group("key").strip().lower())
            if column:
                value = field.group("value").strip().strip('"')
                record[column] = value or "0"

        record["affected_status"] = STATUS_WORDS.get(
            record["affected_status"].lower(), record["affected_status"]
        )
        sample_id = record["sample_id"]
        if sample_id == "0":
            logger.warning(f"Skipping VCF header pedigree line without ID: {line}")
            continue
        pedigree_data[sample_id] = record

    logger.debug(f"Found {len(pedigree_data)} pedigree entries in the VCF header")
    return pedigree_data


def cohort_from_pedigree(
    pedigree_data: Dict[str, Dict[str, Any]], vcf_samples: Sequence[str]
) -> List[Person]:
    """
    Build the cohort from PED affection status.

    Only samples present in the VCF are kept, in VCF order. Samples with an
    unknown status (anything but 1 or 2) are left out of both roles.
    """
    cohort = []
    for sample_id in vcf_samples:
        if is_affected(sample_id, pedigree_data):
            cohort.append(Person(sample_id, affected=True))
        elif is_unaffected(sample_id, pedigree_data):
            cohort.append(Person(sample_id, affected=False))

    n_not_in_vcf = len(set(pedigree_data) - set(vcf_samples))
    if n_not_in_vcf:
        logger.debug(f"{n_not_in_vcf} pedigree samples are not in the VCF")
    return cohort


def read_sample_list(file_path: str) -> List[str]:
    """Read sample IDs, one per line, ignoring blank lines and '#' comments."""
    with open(file_path, "r", encoding="utf-8") as f:
        return [s.strip() for s in f if s.strip() and not s.startswith("#")]


def cohort_from_sample_lists(
    vcf_samples: Sequence[str],
    case_samples: Optional[Iterable[str]] = None,
    control_samples: Optional[Iterable[str]] = None,
) -> List[Person]:
    """
    Build the cohort from explicit case and/or control sample lists.

    Logic:
    - If both lists are provided, use them directly.
    - If only one is provided, every other VCF sample takes the other role.

    A sample listed as both case and control is an error.
    """
    cases = set(case_samples or ())
    controls = set(control_samples or ())
    if not cases and not controls:
        raise CohortError("No case or control samples were given")

    both = cases & controls
    if both:
        raise CohortError(f"Samples listed as both case and control: {', '.join(sorted(both))}")

    if cases and not controls:
        controls = set(vcf_samples) - cases
    elif controls and not cases:
        cases = set(vcf_samples) - controls

    cohort = []
    for sample_id in vcf_samples:
        if sample_id in cases:
            cohort.append(Person(sample_id, affected=True))
        elif sample_id in controls:
            cohort.append(Person(sample_id, affected=False))

    missing = (cases | controls) - set(vcf_samples)
    if missing:
        logger.warning(f"{len(missing)} listed samples are not in the VCF and are ignored")
    return cohort


def require_cases_and_controls(cohort: Sequence[Person]) -> None:
    """
    Abort unless the cohort holds at least one case and one control.

    Raises
    ------
    CohortError
        If no affected or no unaffected sample is present.
    """
    n_cases = sum(1 for p in cohort if p.affected)
    n_controls = len(cohort) - n_cases
    if n_cases == 0:
        raise CohortError("No affected individual")
    if n_controls == 0:
        raise CohortError("No unaffected individual")
    logger.info(f"Cohort: {n_cases} cases, {n_controls} controls")
