"""Name interning.

Maps unit names to dense integer keys so the graph can be stored in plain
lists. Names are suffix-stripped on the way in ("solver.o" → "solver"), so
every lookup and every emitted name uses the same identity.
"""

from __future__ import annotations

DEFAULT_DELIMITER = "."


def strip_suffix(name: str, delimiter: str = DEFAULT_DELIMITER) -> str:
    """Remove everything from the first delimiter onward.

    Examples:
        "solver.o" → "solver"
        "mod.tar.gz" → "mod"
        "plain" → "plain"
    """
    return name.split(delimiter, 1)[0]


class NameInterner:
    """Bidirectional map between stripped unit names and keys in [0, N).

    Keys are handed out in first-seen order and never change for the
    lifetime of the interner.
    """

    def __init__(self, delimiter: str = DEFAULT_DELIMITER) -> None:
        self.delimiter = delimiter
        self._keys: dict[str, int] = {}
        self._names: list[str] = []

    def strip(self, name: str) -> str:
        return strip_suffix(name, self.delimiter)

    def get_or_create(self, name: str) -> int:
        """Return the key for name, assigning the next key if it is new."""
        stripped = self.strip(name)
        key = self._keys.get(stripped)
        if key is None:
            key = len(self._names)
            self._keys[stripped] = key
            self._names.append(stripped)
        return key

    def find(self, name: str) -> int | None:
        """Look up a key without inserting. Returns None for unknown names."""
        return self._keys.get(self.strip(name))

    def name_of(self, key: int) -> str:
        """Reverse lookup.

        Raises:
            KeyError: If no name was interned under key.
        """
        if not 0 <= key < len(self._names):
            raise KeyError(key)
        return self._names[key]

    @property
    def names(self) -> tuple[str, ...]:
        """All stripped names, indexed by key."""
        return tuple(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.strip(name) in self._keys
