"""Tests for the streaming VCF reader."""

import gzip
import io

import pytest

from goburden.errors import FileFormatError
from goburden.vcf_reader import VcfReader
from helpers import vcf_text


@pytest.fixture
def simple_vcf(write_file):
    text = vcf_text(
        ["s1", "s2"],
        [
            ("1", 100, "ANN=x;DP=10", ["0/1", "0/0"]),
            ("2", 200, ".", ["./.", "1|1"]),
        ],
    )
    return write_file("simple.vcf", text)


class TestVcfReader:

    def test_header(self, simple_vcf):
        with VcfReader(simple_vcf) as reader:
            assert reader.samples == ["s1", "s2"]
            assert reader.meta_lines[0] == "##fileformat=VCFv4.2"
            assert any(line.startswith("##INFO=<ID=ANN") for line in reader.meta_lines)

    def test_records(self, simple_vcf):
        with VcfReader(simple_vcf) as reader:
            records = list(reader)

        assert len(records) == 2
        first = records[0]
        assert first.locus == "1:100"
        assert first.ref == "A"
        assert first.alts == ("G",)
        assert first.genotypes == {"s1": "0/1", "s2": "0/0"}
        assert first.info_values("ANN") == ["x"]
        assert first.info_values("DP") == ["10"]
        assert first.info_values("CSQ") == []
        assert records[1].genotypes == {"s1": "./.", "s2": "1|1"}
        assert records[1].info_values("ANN") == []

    def test_gzip_input(self, tmp_path):
        path = tmp_path / "in.vcf.gz"
        with gzip.open(path, "wt") as f:
            f.write(vcf_text(["s1"], [("1", 5, ".", ["1/1"])]))
        with VcfReader(str(path)) as reader:
            assert [r.genotypes for r in reader] == [{"s1": "1/1"}]

    def test_stdin_input(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO(vcf_text(["s1"], [("1", 5, ".", ["0/1"])])))
        with VcfReader("-") as reader:
            assert reader.file_path == "<stdin>"
            assert len(list(reader)) == 1

    def test_gt_taken_from_format_position(self, write_file):
        text = (
            "##fileformat=VCFv4.2\n"
            "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\ts1\ts2\ts3\n"
            "1\t10\t.\tA\tC,T\t.\t.\t.\tDP:GT\t12:0/2\t7\t.:1/1\n"
        )
        with VcfReader(write_file("fmt.vcf", text)) as reader:
            (record,) = list(reader)
        assert record.alts == ("C", "T")
        assert record.genotypes == {"s1": "0/2", "s2": "./.", "s3": "1/1"}

    def test_no_gt_in_format(self, write_file):
        text = (
            "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\ts1\n"
            "1\t10\t.\tA\tC\t.\t.\t.\tDP\t12\n"
        )
        with VcfReader(write_file("nogt.vcf", text)) as reader:
            assert list(reader)[0].genotypes == {"s1": "./."}

    def test_sites_only(self, write_file):
        text = "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n1\t10\t.\tA\tC\t.\t.\tANN=x\n"
        with VcfReader(write_file("sites.vcf", text)) as reader:
            assert reader.samples == []
            assert list(reader)[0].genotypes == {}

    def test_missing_header(self, write_file):
        with pytest.raises(FileFormatError, match="no #CHROM header line"):
            VcfReader(write_file("bad.vcf", "##fileformat=VCFv4.2\n1\t10\t.\tA\tC\t.\t.\t.\n"))

    def test_truncated_line(self, write_file):
        text = "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n1\t10\t.\tA\n"
        with VcfReader(write_file("short.vcf", text)) as reader:
            with pytest.raises(FileFormatError, match="line 2 has 4 columns"):
                list(reader)

    def test_non_integer_pos(self, write_file):
        text = "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n1\tten\t.\tA\tC\t.\t.\t.\n"
        with VcfReader(write_file("pos.vcf", text)) as reader:
            with pytest.raises(FileFormatError, match="non-integer POS"):
                list(reader)
