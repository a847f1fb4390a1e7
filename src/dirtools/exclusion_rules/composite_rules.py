"""Composite exclusion rules for combining multiple rule types."""

from typing import List, Sequence

from .base_rules import BaseExclusionRules


class CompositeExclusionRules(BaseExclusionRules):
    """Combine several exclusion rules with a logical OR.

    A path is excluded if ANY of the constituent rules excludes it. The CLI uses this to
    apply the folder-name set together with gitignore-style patterns.

    Attributes:
        rules (List[BaseExclusionRules]): The constituent rules, in evaluation order.

    Example:
        >>> from dirtools.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> from dirtools.exclusion_rules.name_rules import NameExclusionRules
        >>> patterns = GitIgnoreExclusionRules()
        >>> patterns.add_rule("*.tmp")
        >>> composite = CompositeExclusionRules([NameExclusionRules({"node_modules"}), patterns])
        >>> composite.exclude("node_modules/")
        True
        >>> composite.exclude("scratch.tmp")
        True
        >>> composite.exclude("src/")
        False
    """

    def __init__(self, rules: Sequence[BaseExclusionRules]):
        """Initialize composite exclusion rules.

        Raises:
            ValueError: If no rules are given.
            TypeError: If any rule doesn't implement BaseExclusionRules.
        """
        if not rules:
            raise ValueError("At least one exclusion rule must be provided")

        for i, rule in enumerate(rules):
            if not isinstance(rule, BaseExclusionRules):
                raise TypeError(f"Rule at index {i} must implement BaseExclusionRules, got {type(rule)}")

        self.rules: List[BaseExclusionRules] = list(rules)

    def exclude(self, path: str) -> bool:
        return any(rule.exclude(path) for rule in self.rules)

    def has_rules(self) -> bool:
        return any(rule.has_rules() for rule in self.rules)
