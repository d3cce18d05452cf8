"""Reading the dependency file.

Each non-blank line is "<owner> <dep1> [dep2 ...]", whitespace-separated.
Tokens are returned as written; suffix stripping is left to the interner.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from .errors import InputMissingError, MalformedRecordError
from .models import DependencyRecord
from .names import DEFAULT_DELIMITER, strip_suffix


def parse_lines(
    lines: Iterable[str], delimiter: str = DEFAULT_DELIMITER
) -> list[DependencyRecord]:
    """Turn raw lines into dependency records.

    Blank and whitespace-only lines are skipped. Line numbers count every
    line, including skipped ones, so errors point at the right place.

    Raises:
        MalformedRecordError: If a line has fewer than two tokens, or a token
            is empty once its suffix is stripped (e.g. ".o").
    """
    records: list[DependencyRecord] = []
    for line_no, line in enumerate(lines, start=1):
        tokens = line.split()
        if not tokens:
            continue
        if len(tokens) < 2:
            raise MalformedRecordError(
                line_no, line.rstrip("\n"), "expected an owner and at least one dependency"
            )
        for token in tokens:
            if not strip_suffix(token, delimiter):
                raise MalformedRecordError(
                    line_no, line.rstrip("\n"), f"empty unit name in token {token!r}"
                )
        owner, *deps = tokens
        records.append(DependencyRecord(line_no=line_no, owner=owner, deps=deps))
    return records


def read_records(path: Path, delimiter: str = DEFAULT_DELIMITER) -> list[DependencyRecord]:
    """Read and parse the dependency file at path.

    Raises:
        InputMissingError: If the file cannot be opened or is not UTF-8 text.
        MalformedRecordError: If a line is malformed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InputMissingError(str(path), exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise InputMissingError(str(path), f"not valid UTF-8 text ({exc.reason})") from exc
    return parse_lines(text.splitlines(), delimiter)
