import posixpath
from abc import ABC, abstractmethod
from typing import Optional, Sequence, Union

from templatize.types import PathType


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for file/directory exclusion rules.

    Exclusion rules decide which entries of a project are left out of a template. Every
    implementation answers one question for a node: given its path relative to the
    traversal root and its base name, should the node (and, for a directory, its whole
    subtree) be skipped? File loading and individual rule addition are optional
    capabilities that depend on the rule type.

    Example:
        >>> from templatize.exclusion_rules.pattern_rules import PatternExclusionRules
        >>> rules = PatternExclusionRules(["node_modules", "test-*"])
        >>> rules.exclude("node_modules")
        True
        >>> rules.exclude("src/test-utils.ts")
        True
        >>> rules.exclude("src/app.tsx")
        False
        >>> # rules.load_rules('file.txt')  # Would raise NotImplementedError
    """

    @abstractmethod
    def exclude(self, path: str, name: Optional[str] = None, is_dir: bool = False) -> bool:
        """
        Determine if a given node should be excluded.

        Args:
            path (str): The node's path relative to the traversal root, using forward
                slashes as separators.
            name (Optional[str]): The node's base name. When omitted it is taken from the
                last component of ``path``.
            is_dir (bool): Whether the node is a directory. Rule types with directory-only
                patterns (such as ``build/`` in .gitignore syntax) use this flag.

        Returns:
            bool: True if the node should be excluded, False if it should be included.
        """
        pass

    @staticmethod
    def base_name(path: str, name: Optional[str] = None) -> str:
        """Return ``name`` if given, otherwise the last component of ``path``."""
        if name is not None:
            return name
        return posixpath.basename(path.rstrip("/"))

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load and parse exclusion rules from one or more files.

        Rule types that don't support file operations use this default implementation.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    def add_rule(self, rule: str) -> None:
        """
        Add a single exclusion rule directly.

        Rule types that don't support individual rule addition use this default implementation.

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")

    def has_rules(self) -> bool:
        """Return True if at least one rule is configured."""
        return True
