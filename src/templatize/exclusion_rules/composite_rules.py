"""Composite exclusion rules for combining multiple rule types."""

from typing import List, Optional, Sequence

from .base_rules import BaseExclusionRules


class CompositeExclusionRules(BaseExclusionRules):
    """Composite exclusion rules that combine multiple rule types.

    A node is excluded if ANY of the constituent rules excludes it. Rules are evaluated in
    the order given and evaluation stops at the first rule that excludes the node.

    The packager uses this to combine its built-in pattern rules with any gitignore-style
    rules supplied on the command line.

    Attributes:
        rules (List[BaseExclusionRules]): List of constituent exclusion rules.

    Example:
        >>> from templatize.exclusion_rules.pattern_rules import PatternExclusionRules
        >>> from templatize.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> extra = GitIgnoreExclusionRules()
        >>> extra.add_rule("*.log")
        >>> composite = CompositeExclusionRules([PatternExclusionRules(["dist"]), extra])
        >>> composite.exclude("dist/index.js")
        True
        >>> composite.exclude("debug.log")
        True
        >>> composite.exclude("src/app.tsx")
        False
    """

    def __init__(self, rules: Sequence[BaseExclusionRules]):
        """Initialize composite exclusion rules.

        Args:
            rules: Sequence of exclusion rules to combine.

        Raises:
            ValueError: If rules list is empty.
            TypeError: If any rule doesn't implement BaseExclusionRules.
        """
        if not rules:
            raise ValueError("At least one exclusion rule must be provided")

        for i, rule in enumerate(rules):
            if not isinstance(rule, BaseExclusionRules):
                raise TypeError(f"Rule at index {i} must implement BaseExclusionRules, " f"got {type(rule)}")

        self.rules: List[BaseExclusionRules] = list(rules)

    def exclude(self, path: str, name: Optional[str] = None, is_dir: bool = False) -> bool:
        return any(rule.exclude(path, name, is_dir=is_dir) for rule in self.rules)

    def has_rules(self) -> bool:
        """Return True if ANY constituent rule has rules configured."""
        return any(rule.has_rules() for rule in self.rules)
