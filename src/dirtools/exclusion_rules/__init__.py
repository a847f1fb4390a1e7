"""Exclusion rules for filtering files and directories during a walk."""

from .base_rules import BaseExclusionRules
from .composite_rules import CompositeExclusionRules
from .git_rules import GitIgnoreExclusionRules
from .name_rules import DEFAULT_EXCLUDED_NAMES, NameExclusionRules

__all__ = [
    "BaseExclusionRules",
    "CompositeExclusionRules",
    "DEFAULT_EXCLUDED_NAMES",
    "GitIgnoreExclusionRules",
    "NameExclusionRules",
]
