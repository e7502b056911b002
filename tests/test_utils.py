"""Tests for file handling helpers."""

import gzip
import io
import sys

import pytest

from goburden.utils import close_input, is_stdio, open_input, smart_open


@pytest.mark.parametrize("name", [None, "-", "stdin", "stdout"])
def test_is_stdio(name):
    assert is_stdio(name)


def test_is_not_stdio():
    assert not is_stdio("input.vcf")


def test_smart_open_gzip(tmp_path):
    path = tmp_path / "x.txt.gz"
    with smart_open(str(path), "w") as f:
        f.write("hello\n")
    with gzip.open(path, "rt") as f:
        assert f.read() == "hello\n"
    with smart_open(str(path)) as f:
        assert f.read() == "hello\n"


def test_smart_open_plain(tmp_path):
    path = tmp_path / "x.txt"
    path.write_text("plain\n")
    with smart_open(str(path)) as f:
        assert f.read() == "plain\n"


def test_open_input_stdin_is_not_closed(monkeypatch):
    fake = io.StringIO("data\n")
    monkeypatch.setattr(sys, "stdin", fake)
    handle = open_input("-")
    assert handle is fake
    close_input(handle)
    assert not fake.closed


def test_close_input_closes_files(tmp_path):
    path = tmp_path / "x.txt"
    path.write_text("a\n")
    handle = open_input(str(path))
    close_input(handle)
    assert handle.closed
