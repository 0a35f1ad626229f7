"""Build a distributable template tree from a working project.

The packager wipes the template root, copies the project into it through the exclusion
and transform rules of a :class:`PackagingConfig`, and writes a generated README.
"""

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path

from templatize.config import README_NAME, PackagingConfig
from templatize.exceptions import FilesystemError, PreconditionError
from templatize.readme import render_readme
from templatize.transforms.manifest import MANIFEST_NAME, read_scripts
from templatize.tree_copier.decisions import Decider, Decision, Skip
from templatize.tree_copier.tree_copier import TreeCopier

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Outcome of a template build.

    Attributes:
        template_root: Directory the template was written to.
        copier: The finished copier, giving access to the run report and its counts.
    """

    template_root: Path
    copier: TreeCopier


def _is_relative_to(path: Path, other: Path) -> bool:
    try:
        path.relative_to(other)
    except ValueError:
        return False
    return True


def _check_roots(project_root: Path, template_root: Path) -> None:
    if not project_root.is_dir():
        raise PreconditionError(str(project_root), "project directory does not exist")
    if _is_relative_to(project_root, template_root):
        raise PreconditionError(str(template_root), "template directory must not contain the project directory")


def _skip_template_root(decide: Decider, template_relative_path: str) -> Decider:
    """Wrap ``decide`` so that the template root is never copied into itself."""

    def decide_outside_template(relative_path: str, name: str, is_dir: bool) -> Decision:
        if relative_path == template_relative_path:
            return Skip("template directory")
        return decide(relative_path, name, is_dir)

    return decide_outside_template


def clean_template(template_root: Path) -> None:
    """Delete an existing template root recursively.

    Raises:
        FilesystemError: If the directory cannot be removed.
    """
    if not os.path.lexists(template_root):
        return
    logger.info("Cleaning existing template...")
    try:
        if template_root.is_dir() and not template_root.is_symlink():
            shutil.rmtree(template_root)
        else:
            template_root.unlink()
    except OSError as e:
        raise FilesystemError(str(template_root), "remove", e)


def build_template(config: PackagingConfig) -> BuildResult:
    """Build the template described by ``config``.

    Running the build twice against an unchanged project produces identical template trees,
    because the template root is always deleted first.

    Raises:
        PreconditionError: If the project root is missing or lies inside the template root.
        FilesystemError: If any filesystem operation fails.
        ManifestParseError: If a package manifest in the project is malformed.
    """
    project_root = config.project_root.resolve()
    template_root = config.template_root.resolve()
    _check_roots(project_root, template_root)

    logger.info("Building template folder...")
    clean_template(template_root)

    decide: Decider = config.decider()
    if _is_relative_to(template_root, project_root):
        decide = _skip_template_root(decide, template_root.relative_to(project_root).as_posix())

    logger.info("Creating template from current project...")
    copier = TreeCopier(project_root, template_root, decide)
    copier.copy()

    write_readme(config, copier)

    logger.info(
        "Template build completed! %d files (%d transformed), %d directories, %d skipped.",
        copier.get_file_count(),
        copier.get_transformed_count(),
        copier.get_directory_count(),
        copier.get_skipped_count(),
    )
    logger.info("Template available at: %s", template_root)
    return BuildResult(template_root=template_root, copier=copier)


def write_readme(config: PackagingConfig, copier: TreeCopier) -> Path:
    """Write the generated README into the template root of a finished copy.

    Raises:
        FilesystemError: If the README cannot be written.
        ManifestParseError: If the template manifest is malformed.
    """
    template_root = copier.dest_root
    scripts = read_scripts(template_root / MANIFEST_NAME)
    tree = list(copier.stream_tree_representation(directories_only=True))
    structure = [f"{config.placeholder_name}/"] + tree[1:] if len(tree) > 1 else []

    readme_path = template_root / README_NAME
    try:
        readme_path.write_text(render_readme(config.placeholder_name, scripts, structure), encoding="utf-8")
    except OSError as e:
        raise FilesystemError(str(readme_path), "write", e)
    logger.info("  Writing file: %s", README_NAME)
    return readme_path
