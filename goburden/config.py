# File: goburden/config.py
# Location: goburden/goburden/config.py

"""
Configuration loading for goburden.

Defaults live in the packaged ``config.json``; a user file given with
``--config`` replaces it as a whole, and command line options are merged on
top by :func:`goburden.cli.build_config`.

Keys
----
relation_kinds : list of str
    Ontology relation kinds followed upwards (``is_a``, ``part_of``, ...).
skip_obsolete_terms : bool
    Drop terms flagged ``is_obsolete: true`` while loading the ontology.
sort_order : str
    One of :data:`SORT_ORDERS`; "ascending" lists the smallest p-value first.
progress_interval : int
    Log scan progress every N VCF records, 0 to disable.
vep_gene_columns : list of str
    VEP CSQ sub-fields whose values are taken as gene identifiers.
"""

import json
import os
from typing import Any, Dict, Optional

SORT_ORDERS = ("ascending", "descending")
DEFAULT_CONFIG_FILE = os.path.join(os.path.dirname(__file__), "config.json")


def load_config(config_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the goburden configuration.

    Parameters
    ----------
    config_file : str, optional
        JSON file with the keys listed in the module docstring. Defaults to
        the packaged ``config.json``.

    Returns
    -------
    dict
        The configuration.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist.
    ValueError
        If the file is not valid JSON or does not hold a JSON object.
    """
    config_file = config_file or DEFAULT_CONFIG_FILE
    if not os.path.exists(config_file):
        raise FileNotFoundError(f"Configuration file '{config_file}' not found.")

    with open(config_file, "r", encoding="utf-8") as f:
        try:
            config = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Error parsing JSON configuration: {e}")

    if not isinstance(config, dict):
        raise ValueError("Configuration file must contain a JSON object.")

    return config
