"""Exclusion rules that match on the final path component only."""

import os
from pathlib import PurePosixPath
from typing import FrozenSet, Iterable, Optional

from .base_rules import BaseExclusionRules

# Folders skipped when no exclusion set is supplied
DEFAULT_EXCLUDED_NAMES: FrozenSet[str] = frozenset({"node_modules", ".next", ".pnpm-store"})


class NameExclusionRules(BaseExclusionRules):
    """Exclude entries whose base name is in a fixed set of names.

    Names are compared against the last component of the path only, so excluding
    "build" removes every file or directory called "build" at any depth, but never a
    file called "build.log". Comparison uses ``os.path.normcase``, which makes it case
    insensitive on Windows and case sensitive elsewhere.

    Attributes:
        names (FrozenSet[str]): The names as given.

    Example:
        >>> rules = NameExclusionRules(["dist", ".cache"])
        >>> rules.exclude("packages/app/dist/")
        True
        >>> rules.exclude("packages/app/dist.txt")
        False
        >>> NameExclusionRules([]).has_rules()
        False
    """

    def __init__(self, names: Optional[Iterable[str]] = None) -> None:
        self.names: FrozenSet[str] = frozenset()
        self._normalized: FrozenSet[str] = frozenset()
        for name in names or ():
            self.add_rule(name)

    def exclude(self, path: str) -> bool:
        name = PurePosixPath(path).name
        return bool(name) and os.path.normcase(name) in self._normalized

    def add_rule(self, rule: str) -> None:
        """Add one more name to the exclusion set. Surrounding whitespace is ignored."""
        name = rule.strip()
        if not name:
            return
        self.names = self.names | {name}
        self._normalized = self._normalized | {os.path.normcase(name)}

    def has_rules(self) -> bool:
        return bool(self.names)

    def __repr__(self) -> str:
        return f"NameExclusionRules({sorted(self.names)!r})"
