"""Run configuration for the packager and the instantiator.

Rule tables live in these configuration objects and are handed to the tree copier at call
time, so different rule sets can be used side by side.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Tuple

from templatize.exclusion_rules.base_rules import BaseExclusionRules
from templatize.exclusion_rules.composite_rules import CompositeExclusionRules
from templatize.exclusion_rules.pattern_rules import PatternExclusionRules
from templatize.transforms.manifest import instantiation_edit, packaging_edit
from templatize.transforms.rules import (
    RuleDecider,
    disguise_ignore_file_rule,
    manifest_rule,
    restore_ignore_file_rule,
)

PLACEHOLDER_PROJECT_NAME = "my-preact-app"
BASELINE_VERSION = "0.1.0"
TEMPLATE_DIR_NAME = "template"
README_NAME = "README.md"

# Environment variable naming the template used by create-project.
TEMPLATE_DIR_ENV = "TEMPLATIZE_TEMPLATE_DIR"

DEFAULT_EXCLUDE_PATTERNS: Tuple[str, ...] = (
    "node_modules",
    "dist",
    "storybook-static",
    "public/docs",
    ".git",
    ".github",
    "template",
    "bin",
    "debug-test",
    "test-*",
    ".npmignore",
    "package-lock.json",
    "coverage",
)


@dataclass(frozen=True)
class PackagingConfig:
    """Settings for building a template from a project.

    Attributes:
        project_root: Project to snapshot.
        template_root: Directory the template is written to. It is deleted and recreated on
            every build.
        exclude_patterns: Built-in name/substring/wildcard exclusion rules.
        extra_exclusion_rules: Additional rules (e.g. gitignore-style patterns from the
            command line) combined with the built-in ones.
        placeholder_name: ``name`` written into the template's manifest.
        baseline_version: ``version`` written into the template's manifest.
    """

    project_root: Path
    template_root: Path
    exclude_patterns: Tuple[str, ...] = DEFAULT_EXCLUDE_PATTERNS
    extra_exclusion_rules: Optional[BaseExclusionRules] = None
    placeholder_name: str = PLACEHOLDER_PROJECT_NAME
    baseline_version: str = BASELINE_VERSION

    @classmethod
    def for_root(cls, project_root: Path, **kwargs: Any) -> "PackagingConfig":
        """Configuration with the template written to ``<project_root>/template``."""
        return cls(project_root=project_root, template_root=project_root / TEMPLATE_DIR_NAME, **kwargs)

    def exclusion_rules(self) -> BaseExclusionRules:
        rules: BaseExclusionRules = PatternExclusionRules(self.exclude_patterns)
        if self.extra_exclusion_rules is not None and self.extra_exclusion_rules.has_rules():
            rules = CompositeExclusionRules([rules, self.extra_exclusion_rules])
        return rules

    def decider(self) -> RuleDecider:
        return RuleDecider(
            [
                disguise_ignore_file_rule(),
                manifest_rule(packaging_edit(self.placeholder_name, self.baseline_version)),
            ],
            self.exclusion_rules(),
        )


@dataclass(frozen=True)
class InstantiationConfig:
    """Settings for creating a project from a template.

    Attributes:
        project_name: Name written into the new project's manifest.
        template_root: Template to copy from.
        project_dir: Directory to create, defaulting to the project name relative to the
            current directory. Must not exist yet.
    """

    project_name: str
    template_root: Path
    project_dir: Optional[Path] = None

    @property
    def target_dir(self) -> Path:
        """Directory to create: ``project_dir`` if given, otherwise the project name."""
        if self.project_dir is not None:
            return self.project_dir
        return Path(self.project_name)

    @property
    def manifest_name(self) -> str:
        """Name stored in the manifest: the last component of the project name."""
        return Path(self.project_name).name

    def decider(self) -> RuleDecider:
        # The template is already curated, so nothing is excluded.
        return RuleDecider(
            [
                restore_ignore_file_rule(root_only=True),
                manifest_rule(instantiation_edit(self.manifest_name), root_only=True),
            ]
        )


def default_template_root() -> Path:
    """Template location used by create-project when none is given on the command line."""
    configured = os.environ.get(TEMPLATE_DIR_ENV)
    if configured:
        return Path(configured)
    return Path.cwd() / TEMPLATE_DIR_NAME
