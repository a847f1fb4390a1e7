from abc import ABC, abstractmethod
from typing import Sequence, Union

from dirtools.types import PathType


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for walk exclusion rules.

    The walker asks its rules about every child it encounters, passing the path relative
    to the walk root with forward slashes. Directory paths carry a trailing slash so that
    rules can tell files and directories apart without touching the filesystem. A
    directory that is excluded is pruned together with everything beneath it.

    Loading rules from files and adding individual rules are optional capabilities that
    depend on the rule type.

    Example:
        >>> from dirtools.exclusion_rules.name_rules import NameExclusionRules
        >>> rules = NameExclusionRules({"node_modules"})
        >>> rules.exclude("web/node_modules/")
        True
        >>> rules.exclude("web/src/")
        False
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if a given path should be excluded.

        Args:
            path (str): The root-relative path to check, using "/" separators. Directories
                end with "/".

        Returns:
            bool: True if the path should be excluded, False if it should be included.
        """
        pass

    def has_rules(self) -> bool:
        """Report whether any rules are configured. Rule types without state are never empty."""
        return True

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load exclusion rules from one or more files.

        Rule types that don't support file-based loading use this default implementation.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    def add_rule(self, rule: str) -> None:
        """
        Add a single exclusion rule directly.

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")
