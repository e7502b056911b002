"""Tests for PED file reading and cohort definition."""

import pytest

from goburden.errors import CohortError
from goburden.ped_reader import (
    Person,
    cohort_from_pedigree,
    cohort_from_sample_lists,
    is_affected,
    is_unaffected,
    read_header_pedigree,
    read_pedigree,
    read_sample_list,
    require_cases_and_controls,
)


class TestPedReader:

    @pytest.fixture
    def valid_ped_content(self):
        """Standard trio PED file content plus an unknown-status sample."""
        return """# family sample father mother sex status
FAM1 father 0 0 1 1
FAM1 mother 0 0 2 1
FAM1 child father mother 1 2
FAM2 unknown 0 0 2 0
"""

    def test_read_valid_ped_file(self, write_file, valid_ped_content):
        pedigree = read_pedigree(write_file("trio.ped", valid_ped_content))

        assert len(pedigree) == 4
        assert pedigree["father"]["family_id"] == "FAM1"
        assert pedigree["father"]["affected_status"] == "1"
        assert pedigree["child"]["father_id"] == "father"
        assert pedigree["child"]["affected_status"] == "2"

    def test_tab_delimited(self, write_file):
        pedigree = read_pedigree(write_file("tab.ped", "F1\ts1\t0\t0\t1\t2\n"))
        assert is_affected("s1", pedigree)

    def test_invalid_column_count(self, write_file):
        path = write_file("bad.ped", "FAM1 father 0 0 1\nFAM1 mother 0 0 2\n")
        with pytest.raises(CohortError, match="exactly 6 columns"):
            read_pedigree(path)

    def test_empty_file(self, write_file):
        with pytest.raises(CohortError, match="empty"):
            read_pedigree(write_file("empty.ped", ""))

    def test_missing_file(self, tmp_path):
        with pytest.raises(CohortError):
            read_pedigree(str(tmp_path / "nope.ped"))

    def test_status_checks(self, write_file, valid_ped_content):
        pedigree = read_pedigree(write_file("trio.ped", valid_ped_content))
        assert is_affected("child", pedigree)
        assert not is_unaffected("child", pedigree)
        assert is_unaffected("father", pedigree)
        assert not is_affected("unknown", pedigree)
        assert not is_unaffected("unknown", pedigree)
        assert not is_affected("stranger", pedigree)


class TestCohortFromPedigree:

    @pytest.fixture
    def pedigree(self, write_file):
        content = "F s1 0 0 1 2\nF s2 0 0 1 1\nF s3 0 0 1 0\nF s4 0 0 1 2\nF notinvcf 0 0 1 1\n"
        return read_pedigree(write_file("c.ped", content))

    def test_vcf_order_and_unknown_status(self, pedigree):
        cohort = cohort_from_pedigree(pedigree, ["s4", "s3", "s2", "s1", "extra"])
        assert cohort == [
            Person("s4", affected=True),
            Person("s2", affected=False),
            Person("s1", affected=True),
        ]


class TestHeaderPedigree:

    @pytest.fixture
    def meta_lines(self):
        return [
            "##fileformat=VCFv4.2",
            "##Sample=<Family=F1,ID=case1,Father=0,Mother=0,Sex=1,Status=2>",
            '##Sample=<ID=ctrl1,Status="control">',
            "##SAMPLE=<ID=case2,Family=F2,Status=affected>",
            "##Sample=<ID=unknown,Status=0>",
            "##Sample=<Family=F9,Status=2>",
            '##INFO=<ID=DP,Number=1,Type=Integer,Description="Depth">',
        ]

    def test_read_header_pedigree(self, meta_lines):
        pedigree = read_header_pedigree(meta_lines)

        assert set(pedigree) == {"case1", "ctrl1", "case2", "unknown"}
        assert pedigree["case1"]["family_id"] == "F1"
        assert pedigree["case1"]["affected_status"] == "2"
        assert pedigree["ctrl1"]["affected_status"] == "1"
        assert pedigree["ctrl1"]["father_id"] == "0"
        assert pedigree["case2"]["affected_status"] == "2"

    def test_cohort_from_header(self, meta_lines):
        cohort = cohort_from_pedigree(
            read_header_pedigree(meta_lines), ["ctrl1", "unknown", "case2", "case1"]
        )
        assert cohort == [
            Person("ctrl1", affected=False),
            Person("case2", affected=True),
            Person("case1", affected=True),
        ]

    def test_no_pedigree_lines(self):
        assert read_header_pedigree(["##fileformat=VCFv4.2"]) == {}


class TestSampleLists:

    def test_read_sample_list(self, write_file):
        path = write_file("cases.txt", "# cases\ns1\n\n  s2  \n")
        assert read_sample_list(path) == ["s1", "s2"]

    def test_both_lists(self):
        cohort = cohort_from_sample_lists(["a", "b", "c"], ["a"], ["c"])
        assert cohort == [Person("a", True), Person("c", False)]

    def test_only_cases_given(self):
        cohort = cohort_from_sample_lists(["a", "b", "c"], case_samples=["b"])
        assert cohort == [Person("a", False), Person("b", True), Person("c", False)]

    def test_only_controls_given(self):
        cohort = cohort_from_sample_lists(["a", "b"], control_samples=["a"])
        assert cohort == [Person("a", False), Person("b", True)]

    def test_sample_in_both_lists(self):
        with pytest.raises(CohortError, match="both case and control"):
            cohort_from_sample_lists(["a", "b"], ["a"], ["a", "b"])

    def test_no_lists(self):
        with pytest.raises(CohortError):
            cohort_from_sample_lists(["a", "b"])

    def test_listed_samples_absent_from_vcf(self, caplog):
        cohort = cohort_from_sample_lists(["a", "b"], ["a", "ghost"], ["b"])
        assert cohort == [Person("a", True), Person("b", False)]
        assert "not in the VCF" in caplog.text


class TestRequireCasesAndControls:

    def test_ok(self):
        require_cases_and_controls([Person("a", True), Person("b", False)])

    def test_no_cases(self):
        with pytest.raises(CohortError, match="No affected individual"):
            require_cases_and_controls([Person("b", False)])

    def test_no_controls(self):
        with pytest.raises(CohortError, match="No unaffected individual"):
            require_cases_and_controls([Person("a", True)])

    def test_empty(self):
        with pytest.raises(CohortError):
            require_cases_and_controls([])
