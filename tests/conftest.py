"""Shared pytest fixtures for all test modules."""

from pathlib import Path
from typing import Dict

import pytest

from helpers import ann, vcf_text


@pytest.fixture
def write_file(tmp_path):
    """Write text to a file under tmp_path and return its path as a string."""

    def _write(name: str, content: str) -> str:
        path = tmp_path / name
        path.write_text(content)
        return str(path)

    return _write


@pytest.fixture
def example_obo_text() -> str:
    """Two-term ontology; the child is listed before its parent."""
    return """format-version: 1.2
ontology: test

[Term]
id: T:0000002
name: child
synonym: "kid" EXACT []
is_a: T:0000001 ! root

[Term]
id: T:0000001
name: root

[Typedef]
id: part_of
name: part of
"""


@pytest.fixture
def example_inputs(write_file, example_obo_text) -> Dict[str, str]:
    """
    Files for the two-term example.

    Gene G1 is annotated to 'child'; one variant hits G1 with both cases
    heterozygous and both controls homozygous reference.
    """
    samples = ["case1", "case2", "ctrl1", "ctrl2"]
    vcf = vcf_text(samples, [("1", 100, f"ANN={ann('G1')}", ["0/1", "0/1", "0/0", "0/0"])])
    ped = "F1 case1 0 0 1 2\nF2 case2 0 0 2 2\nF3 ctrl1 0 0 1 1\nF4 ctrl2 0 0 2 1\n"
    return {
        "ontology_file": write_file("test.obo", example_obo_text),
        "gene_association_file": write_file("genes.tsv", "G1\tchild\n"),
        "vcf_file": write_file("input.vcf", vcf),
        "ped_file": write_file("cohort.ped", ped),
    }


@pytest.fixture
def example_config(example_inputs, tmp_path) -> Dict:
    """Configuration for the two-term example writing to tmp_path."""
    cfg = {
        "relation_kinds": ["is_a", "part_of"],
        "skip_obsolete_terms": True,
        "sort_order": "ascending",
        "progress_interval": 0,
        "output_file": str(Path(tmp_path) / "out.tsv"),
    }
    cfg.update(example_inputs)
    return cfg
