"""Loose name/substring/wildcard exclusion rules used when packaging a template."""

import re
from typing import Iterable, List, Optional, Pattern, Tuple

from .base_rules import BaseExclusionRules


def compile_wildcard(pattern: str) -> Pattern[str]:
    """Compile a pattern containing ``*`` into an unanchored regular expression.

    Only the first ``*`` becomes a wildcard; any later ``*`` keeps its regular expression
    meaning (repeat the preceding character). The rest of the pattern is used as-is, so
    ``.`` also matches any character. The result is used with ``search`` rather than
    ``fullmatch``, which means the pattern may match anywhere in the name.

    Args:
        pattern: The rule text, e.g. ``"test-*"``.

    Returns:
        The compiled expression.

    Example:
        >>> compile_wildcard("test-*").pattern
        'test-.*'
        >>> bool(compile_wildcard("test-*").search("my-test-data"))
        True
    """
    return re.compile(pattern.replace("*", ".*", 1))


class PatternExclusionRules(BaseExclusionRules):
    """Exclusion rules matched by literal name, path substring, or single-wildcard pattern.

    A node is excluded when any rule satisfies one of these tests:

    - rules containing ``*``: the wildcard expression (see :func:`compile_wildcard`) is
      found anywhere in the node's base name;
    - other rules: the base name equals the rule exactly, or the rule occurs anywhere
      in the node's relative path.

    The substring test is loose. A rule such as ``dist`` also excludes
    ``src/distance.ts`` and a rule such as ``.git`` also excludes ``.gitignore``; callers
    that must keep such files have to decide about them before consulting these rules.

    Attributes:
        patterns (Tuple[str, ...]): The configured rules in evaluation order.

    Example:
        >>> rules = PatternExclusionRules(["dist", "test-*", "package-lock.json"])
        >>> rules.exclude("dist/index.js")
        True
        >>> rules.exclude("src/distance.ts")  # substring over-match
        True
        >>> rules.exclude("e2e/test-login.ts")
        True
        >>> rules.exclude("package.json")
        False
    """

    def __init__(self, patterns: Optional[Iterable[str]] = None) -> None:
        """Initialize the rules.

        Args:
            patterns: Initial rules. Empty strings are ignored.
        """
        # (rule text, compiled wildcard or None for literal rules)
        self._rules: List[Tuple[str, Optional[Pattern[str]]]] = []
        for pattern in patterns or ():
            self.add_rule(pattern)

    @property
    def patterns(self) -> Tuple[str, ...]:
        return tuple(rule for rule, _ in self._rules)

    def add_rule(self, rule: str) -> None:
        """Add one rule.

        Args:
            rule: Literal name, path fragment, or pattern containing ``*``.
        """
        if not rule:
            return
        self._rules.append((rule, compile_wildcard(rule) if "*" in rule else None))

    def match(self, path: str, name: Optional[str] = None) -> Optional[str]:
        """Return the first rule that excludes the node, or None.

        Rules are tested in the order they were added.
        """
        name = self.base_name(path, name)
        for rule, expression in self._rules:
            if expression is not None:
                if expression.search(name):
                    return rule
            elif name == rule or rule in path:
                return rule
        return None

    def exclude(self, path: str, name: Optional[str] = None, is_dir: bool = False) -> bool:
        # Directories and files are matched the same way.
        return self.match(path, name) is not None

    def has_rules(self) -> bool:
        return bool(self._rules)
