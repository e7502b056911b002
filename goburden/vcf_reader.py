"""
Minimal streaming VCF reader.

Reads plain, gzip-compressed or standard-input VCF text and yields one
:class:`VcfRecord` per data line with the GT call of every sample. Only the
columns needed for enrichment are interpreted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator

from .errors import FileFormatError
from .utils import close_input, is_stdio, open_input

logger = logging.getLogger("goburden")

# VCF columns: CHROM (0), POS (1), ID (2), REF (3), ALT (4),
#              QUAL (5), FILTER (6), INFO (7), FORMAT (8), samples (9..)
INFO_FIELD_NUM = 7
FORMAT_FIELD_NUM = 8
MISSING_GT = "./."


@dataclass
class VcfRecord:
    """One VCF data line."""

    chrom: str
    pos: int
    id: str
    ref: str
    alts: tuple[str, ...]
    info: str
    genotypes: dict[str, str] = field(default_factory=dict)

    def info_values(self, key: str) -> list[str]:
        """Return the comma-separated values of an INFO key (empty if absent or a flag)."""
        if not self.info or self.info == ".":
            return []
        prefix = key + "="
        for part in self.info.split(";"):
            if part.startswith(prefix):
                return [v for v in part[len(prefix):].split(",") if v]
        return []

    @property
    def locus(self) -> str:
        return f"{self.chrom}:{self.pos}"


class VcfReader:
    """
    Iterate over the records of a VCF file.

    The header is read on construction; ``meta_lines`` holds the ``##`` lines
    and ``samples`` the sample columns of the ``#CHROM`` line.

    Examples
    --------
    >>> with VcfReader("input.vcf.gz") as reader:  # doctest: +SKIP
    ...     for record in reader:
    ...         print(record.locus, record.genotypes)
    """

    def __init__(self, file_path: str | None):
        self.file_path = "<stdin>" if is_stdio(file_path) else file_path
        self._fh = open_input(file_path)
        self.meta_lines: list[str] = []
        self.samples: list[str] = []
        self._line_number = 0
        try:
            self._read_header()
        except Exception:
            self.close()
            raise

    def _read_header(self) -> None:
        for line in self._fh:
            self._line_number += 1
            line = line.rstrip("\r\n")
            if line.startswith("##"):
                self.meta_lines.append(line)
            elif line.startswith("#CHROM"):
                columns = line.split("\t")
                self.samples = columns[FORMAT_FIELD_NUM + 1:]
                logger.debug(f"VCF {self.file_path} has {len(self.samples)} samples")
                return
            elif line:
                break
        raise FileFormatError(self.file_path, "VCF", "no #CHROM header line")

    def _parse_line(self, line: str) -> VcfRecord:
        columns = line.split("\t")
        if len(columns) <= INFO_FIELD_NUM:
            raise FileFormatError(
                self.file_path,
                "VCF",
                f"line {self._line_number} has {len(columns)} columns, expected at least 8",
            )
        try:
            pos = int(columns[1])
        except ValueError:
            raise FileFormatError(
                self.file_path, "VCF", f"line {self._line_number} has non-integer POS '{columns[1]}'"
            )

        genotypes: dict[str, str] = {}
        if self.samples and len(columns) > FORMAT_FIELD_NUM:
            format_keys = columns[FORMAT_FIELD_NUM].split(":")
            gt_index = format_keys.index("GT") if "GT" in format_keys else None
            for sample, sample_field in zip(self.samples, columns[FORMAT_FIELD_NUM + 1:]):
                if gt_index is None:
                    genotypes[sample] = MISSING_GT
                    continue
                values = sample_field.split(":")
                genotypes[sample] = values[gt_index] if gt_index < len(values) else MISSING_GT

        alts = tuple(a for a in columns[4].split(",") if a and a != ".")
        return VcfRecord(
            chrom=columns[0],
            pos=pos,
            id=columns[2],
            ref=columns[3],
            alts=alts,
            info=columns[INFO_FIELD_NUM],
            genotypes=genotypes,
        )

    def __iter__(self) -> Iterator[VcfRecord]:
        for line in self._fh:
            self._line_number += 1
            line = line.rstrip("\r\n")
            if not line or line.startswith("#"):
                continue
            yield self._parse_line(line)

    def close(self) -> None:
        if self._fh is not None:
            close_input(self._fh)
            self._fh = None

    def __enter__(self) -> "VcfReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
