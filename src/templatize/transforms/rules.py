"""Transform rules keyed by base name, and the decision functions built from them."""

from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Optional, Sequence

from templatize.exclusion_rules.base_rules import BaseExclusionRules
from templatize.transforms.manifest import MANIFEST_NAME, ManifestEdit, rewrite_manifest
from templatize.tree_copier.decisions import CopyAs, Decision, Skip, Transform

IGNORE_FILE_NAME = ".gitignore"
DISGUISED_IGNORE_FILE_NAME = "gitignore"


class TransformKind(str, Enum):
    """Kind of content transform.

    Values:
        RENAME: Copy under a different name, content unchanged
        REWRITE_JSON: Parse as JSON, apply a manifest edit, write under a given name
    """

    RENAME = "rename"
    REWRITE_JSON = "rewrite-json"


@dataclass(frozen=True)
class TransformRule:
    """A transform applied to files with a given base name.

    Attributes:
        source_name: Base name the rule applies to.
        kind: The transform to perform.
        dest_name: Name written in the destination.
        edit: Manifest edit for REWRITE_JSON rules.
        root_only: Apply only to the file directly under the traversal root.
        overrides_exclusion: Consult this rule before exclusion rules, so that a matching
            file is kept even if an exclusion rule would also match it.
    """

    source_name: str
    kind: TransformKind
    dest_name: str
    edit: Optional[ManifestEdit] = None
    root_only: bool = False
    overrides_exclusion: bool = False

    def __post_init__(self) -> None:
        if self.kind is TransformKind.REWRITE_JSON and self.edit is None:
            raise ValueError(f"Rewrite rule for {self.source_name} requires a manifest edit")

    def applies_to(self, relative_path: str, name: str) -> bool:
        if name != self.source_name:
            return False
        return not self.root_only or relative_path == name

    def decision(self) -> Decision:
        if self.kind is TransformKind.RENAME:
            return CopyAs(self.dest_name)
        assert self.edit is not None
        return Transform(self.dest_name, partial(rewrite_manifest, edit=self.edit))


def disguise_ignore_file_rule() -> TransformRule:
    """``.gitignore`` is written as ``gitignore`` so that publishing the template keeps it."""
    return TransformRule(
        IGNORE_FILE_NAME,
        TransformKind.RENAME,
        DISGUISED_IGNORE_FILE_NAME,
        overrides_exclusion=True,
    )


def restore_ignore_file_rule(root_only: bool = False) -> TransformRule:
    """``gitignore`` is written back as ``.gitignore`` in a new project."""
    return TransformRule(DISGUISED_IGNORE_FILE_NAME, TransformKind.RENAME, IGNORE_FILE_NAME, root_only=root_only)


def manifest_rule(edit: ManifestEdit, root_only: bool = False) -> TransformRule:
    return TransformRule(MANIFEST_NAME, TransformKind.REWRITE_JSON, MANIFEST_NAME, edit=edit, root_only=root_only)


class RuleDecider:
    """Decision function combining transform rules with optional exclusion rules.

    For each node the first matching rule wins, in this order:

    1. transform rules flagged ``overrides_exclusion`` (files only);
    2. exclusion rules, which may skip files and whole directories;
    3. the remaining transform rules (files only);
    4. otherwise the node is copied under its own name.

    Example:
        >>> from templatize.exclusion_rules.pattern_rules import PatternExclusionRules
        >>> decide = RuleDecider([disguise_ignore_file_rule()], PatternExclusionRules([".git"]))
        >>> decide(".gitignore", ".gitignore", False)
        CopyAs(dest_name='gitignore')
        >>> decide(".git", ".git", True)
        Skip(reason='excluded')
        >>> decide("src", "src", True)
        CopyAs(dest_name='src')
    """

    def __init__(
        self,
        transform_rules: Sequence[TransformRule] = (),
        exclusion_rules: Optional[BaseExclusionRules] = None,
    ) -> None:
        self.transform_rules = tuple(transform_rules)
        self.exclusion_rules = exclusion_rules

    def _match(self, relative_path: str, name: str, overriding: bool) -> Optional[TransformRule]:
        for rule in self.transform_rules:
            if rule.overrides_exclusion == overriding and rule.applies_to(relative_path, name):
                return rule
        return None

    def __call__(self, relative_path: str, name: str, is_dir: bool) -> Decision:
        if not is_dir:
            rule = self._match(relative_path, name, overriding=True)
            if rule is not None:
                return rule.decision()

        if self.exclusion_rules is not None and self.exclusion_rules.exclude(relative_path, name, is_dir=is_dir):
            return Skip("excluded")

        if not is_dir:
            rule = self._match(relative_path, name, overriding=False)
            if rule is not None:
                return rule.decision()

        return CopyAs(name)
