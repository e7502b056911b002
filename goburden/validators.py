# File: goburden/validators.py
# Location: goburden/goburden/validators.py

"""
Validation module for goburden.

This module checks that input files exist and are non-empty before any
processing starts.
"""

import logging
import os
from typing import Any, Dict, Optional

from .errors import ConfigurationError
from .utils import is_stdio

logger = logging.getLogger("goburden")

INPUT_KEYS = {
    "ontology_file": "Ontology file",
    "gene_association_file": "Gene association file",
    "vcf_file": "VCF file",
    "ped_file": "PED file",
    "case_samples_file": "Case samples file",
    "control_samples_file": "Control samples file",
}


def validate_input_file(path: Optional[str], label: str) -> None:
    """
    Validate that an input file exists and is non-empty.

    Parameters
    ----------
    path : str or None
        Path to the file.
    label : str
        Human-readable name used in the error message.

    Raises
    ------
    ConfigurationError
        If the file is missing or empty.
    """
    if not path or not os.path.exists(path):
        raise ConfigurationError(f"{label} not found: {path}")
    if os.path.getsize(path) == 0:
        raise ConfigurationError(f"{label} {path} is empty.")
    logger.debug("%s OK: %s", label, path)


def validate_inputs(cfg: Dict[str, Any]) -> None:
    """
    Validate every configured input file.

    The VCF may be read from standard input ('-'). Cohort files are
    optional here: without them the VCF header must carry pedigree lines,
    which is checked once the header is read.
    """
    for key in ("ontology_file", "gene_association_file", "vcf_file"):
        if not cfg.get(key):
            raise ConfigurationError(f"{INPUT_KEYS[key]} is required")

    for key, label in INPUT_KEYS.items():
        value = cfg.get(key)
        if not value:
            continue
        if key == "vcf_file" and is_stdio(value):
            continue
        validate_input_file(value, label)
