"""Tests for depsort.parse."""

from __future__ import annotations

from pathlib import Path

import pytest

from depsort.errors import InputMissingError, MalformedRecordError
from depsort.parse import parse_lines, read_records


class TestParseLines:
    def test_owner_and_deps(self) -> None:
        [record] = parse_lines(["solver.o mesh.o linalg.o"])
        assert record.owner == "solver.o"
        assert record.deps == ["mesh.o", "linalg.o"]
        assert record.line_no == 1

    def test_skips_blank_lines_but_counts_them(self) -> None:
        records = parse_lines(["a b", "", "   ", "c d"])
        assert [r.owner for r in records] == ["a", "c"]
        assert [r.line_no for r in records] == [1, 4]

    def test_any_whitespace_separates_tokens(self) -> None:
        [record] = parse_lines(["a\t b   c"])
        assert record.deps == ["b", "c"]

    def test_keeps_repeated_deps(self) -> None:
        [record] = parse_lines(["a b b"])
        assert record.deps == ["b", "b"]

    def test_single_token_is_malformed(self) -> None:
        with pytest.raises(MalformedRecordError) as excinfo:
            parse_lines(["a b", "lonely.o"])
        assert excinfo.value.line_no == 2
        assert excinfo.value.line == "lonely.o"
        assert "lonely.o" in str(excinfo.value)

    def test_empty_stripped_name_is_malformed(self) -> None:
        with pytest.raises(MalformedRecordError, match="empty unit name"):
            parse_lines(["a .o"])

    def test_custom_delimiter(self) -> None:
        with pytest.raises(MalformedRecordError):
            parse_lines(["a :x"], delimiter=":")
        # "." is an ordinary character with another delimiter
        assert parse_lines(["a .o"], delimiter=":")[0].deps == [".o"]


class TestReadRecords:
    def test_reads_file(self, depend_file: Path) -> None:
        records = read_records(depend_file)
        assert [(r.owner, r.deps) for r in records] == [
            ("A.o", ["B.o"]),
            ("B.o", ["C.o"]),
            ("D.o", ["C.o"]),
        ]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InputMissingError, match="unable to open"):
            read_records(tmp_path / "depend")

    def test_not_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "depend"
        path.write_bytes(b"a \xff\xfe\n")
        with pytest.raises(InputMissingError, match="UTF-8"):
            read_records(path)
