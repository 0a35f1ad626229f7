"""Implementation of exclusion rules using .gitignore pattern syntax."""

from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pathspec import GitIgnoreSpec

from templatize.types import PathType

from .base_rules import BaseExclusionRules


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Extra exclusion rules written in .gitignore pattern syntax.

    These rules let a user leave additional files out of a template from the command line
    without editing the built-in rule set. Matching is done by the pathspec library the same
    way Git does it: globs, directory-only patterns ending in ``/``, negations with ``!``,
    ``**`` and comments are all supported.

    Rules from files and individually added rules share one ordered list, so a later
    negation can re-include something an earlier rule excluded.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("*.log")
        >>> rules.add_rule("scratch/")
        >>> rules.exclude("logs/app.log")
        True
        >>> rules.exclude("scratch", is_dir=True)
        True
        >>> rules.exclude("scratch")  # a file named scratch is kept
        False

    Note:
        Paths passed to exclude() should use forward slashes as separators.
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Initialize the rules, optionally loading patterns from files.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self._lines: List[str] = []
        self.spec = GitIgnoreSpec.from_lines(self._lines)

        if rules_files is not None:
            self.load_rules(rules_files)

    def exclude(self, path: str, name: Optional[str] = None, is_dir: bool = False) -> bool:
        """Check a path against the loaded patterns.

        Directories are matched with a trailing slash so that directory-only patterns apply
        to them and not to files of the same name.
        """
        if is_dir and not path.endswith("/"):
            path = path + "/"
        return self.spec.match_file(path)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Append the patterns of one or more .gitignore-style files.

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

        self.spec = GitIgnoreSpec.from_lines(self._lines)

    def add_rule(self, rule: str) -> None:
        """Append a single .gitignore pattern (e.g. ``"*.pyc"``, ``"build/"``, ``"!keep.txt"``)."""
        self._lines.append(rule)
        self.spec = GitIgnoreSpec.from_lines(self._lines)

    def has_rules(self) -> bool:
        return any(line.strip() and not line.lstrip().startswith("#") for line in self._lines)
