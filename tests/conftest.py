"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from depsort.config import Settings


@pytest.fixture
def depend_file(tmp_path: Path) -> Path:
    """A small dependency file: A needs B, B and D both need C."""
    content = """\
A.o B.o
B.o C.o

D.o C.o
"""
    path = tmp_path / "depend"
    path.write_text(content)
    return path


@pytest.fixture
def settings(tmp_path: Path, depend_file: Path) -> Settings:
    """Settings pointing every file into tmp_path."""
    return Settings(
        input=depend_file,
        output=tmp_path / "file_list.txt",
        dot=tmp_path / "depend.dot",
    )


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from inside tmp_path, where no pyproject.toml exists."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
