"""Create a new project directory from a template tree."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping

from templatize.config import InstantiationConfig
from templatize.exceptions import FilesystemError, PreconditionError
from templatize.transforms.manifest import MANIFEST_NAME, read_scripts
from templatize.tree_copier.tree_copier import TreeCopier

logger = logging.getLogger(__name__)


@dataclass
class CreateResult:
    """Outcome of a project creation.

    Attributes:
        project_dir: The directory that was created.
        copier: The finished copier, giving access to the run report and its counts.
    """

    project_dir: Path
    copier: TreeCopier


def _is_inside(path: Path, directory: Path) -> bool:
    try:
        path.resolve().relative_to(directory.resolve())
    except ValueError:
        return False
    return True


def create_project(config: InstantiationConfig) -> CreateResult:
    """Create the project described by ``config``.

    Every template entry is copied; ``gitignore`` files are written back as ``.gitignore``
    and the root manifest gets the project's name and ``private: true``.

    Raises:
        PreconditionError: If the target directory already exists or lies inside the
            template root, or the template root is missing. Nothing is written.
        FilesystemError: If any filesystem operation fails.
        ManifestParseError: If the template manifest is malformed.
    """
    project_dir = config.target_dir
    if os.path.lexists(project_dir):
        raise PreconditionError(str(project_dir), "directory already exists")
    if not config.template_root.is_dir():
        raise PreconditionError(str(config.template_root), "template directory does not exist")
    if _is_inside(project_dir, config.template_root):
        raise PreconditionError(str(project_dir), "project directory must not be inside the template directory")

    logger.info("Creating a new project: %s", config.project_name)
    try:
        project_dir.mkdir(parents=True)
    except OSError as e:
        raise FilesystemError(str(project_dir), "create directory", e)

    copier = TreeCopier(config.template_root, project_dir, config.decider())
    copier.copy()

    logger.info("Created %s", project_dir)
    return CreateResult(project_dir=project_dir, copier=copier)


def next_steps(project_dir: Path, scripts: Mapping[str, str]) -> List[str]:
    """Return the guidance printed after a project has been created."""
    lines = [
        "Next steps:",
        f"  cd {project_dir}",
        "  npm install",
        "  npm run dev",
    ]
    if scripts:
        width = max(len(name) for name in scripts)
        lines += ["", "Available commands:"]
        lines += [f"  npm run {name.ljust(width)}  - {command}" for name, command in scripts.items()]
    return lines


def project_next_steps(result: CreateResult) -> List[str]:
    """Guidance for a created project, listing the scripts of its manifest."""
    return next_steps(result.project_dir, read_scripts(result.project_dir / MANIFEST_NAME))
