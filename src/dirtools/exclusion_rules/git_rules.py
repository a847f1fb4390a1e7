"""Implementation of exclusion rules using .gitignore pattern syntax."""

from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pathspec import PathSpec

from dirtools.types import PathType

from .base_rules import BaseExclusionRules


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Exclusion rules using .gitignore pattern syntax.

    Patterns are matched against walk-relative paths with the pathspec library, the same
    way Git matches them. All standard syntax is supported: globs, directory-only patterns
    ending in "/", negations starting with "!", "**" and comment lines.

    Because the walker presents directories with a trailing slash, "build/" matches the
    directory itself and prunes it, while a file named "build" is left alone.

    Rules from several files and individual patterns can be combined; they are applied in
    the order they were added, so a later negation can re-include an earlier match.

    Attributes:
        spec (PathSpec): Compiled pattern matcher.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("*.log")
        >>> rules.add_rule("!keep.log")
        >>> rules.exclude("logs/app.log")
        True
        >>> rules.exclude("logs/keep.log")
        False
        >>> rules.add_rule("build/")
        >>> rules.exclude("build/")
        True
        >>> rules.exclude("build")
        False
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Initialize with patterns from the given files, if any.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self._lines: List[str] = []
        self.spec = PathSpec.from_lines("gitwildmatch", self._lines)

        if rules_files is not None:
            self.load_rules(rules_files)

    def exclude(self, path: str) -> bool:
        return self.spec.match_file(path)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Append the patterns from one or more .gitignore-style files.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")

            with open(path, "r") as f:
                self._lines.extend(f.read().splitlines())

        self._compile()

    def add_rule(self, rule: str) -> None:
        """Append a single pattern, e.g. "*.pyc", "dist/" or "!important.txt"."""
        self._lines.append(rule)
        self._compile()

    def has_rules(self) -> bool:
        return len(self.spec.patterns) > 0

    def _compile(self) -> None:
        self.spec = PathSpec.from_lines("gitwildmatch", self._lines)
