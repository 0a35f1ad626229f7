"""Command-line argument parsing for build-template and create-project.

This module defines both command-line interfaces, handling argument parsing and
validation.
"""

import argparse
import os
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from templatize import __version__
from templatize.config import PLACEHOLDER_PROJECT_NAME, TEMPLATE_DIR_ENV, TEMPLATE_DIR_NAME
from templatize.exclusion_rules.base_rules import BaseExclusionRules


def create_exclusion_action(exclusion_rules: BaseExclusionRules) -> Type[argparse.Action]:
    """Create a custom action class for handling extra exclusion rules.

    The returned action updates the provided exclusion rules object as arguments are
    processed, which preserves the exact order of -e/--exclude and -i/--ignore options as
    they appear on the command line.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        A custom action class for use with argparse.
    """

    class ExclusionRulesAction(argparse.Action):
        """Action adding rules to the exclusion rules object in command-line order."""

        def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
            super().__init__(option_strings, dest, **kwargs)

        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return

            if option_string in ("-e", "--exclude"):
                if isinstance(values, (str, os.PathLike)):
                    path = Path(values)
                else:
                    path = Path(str(values))
                try:
                    exclusion_rules.load_rules(path)
                except FileNotFoundError as e:
                    parser.error(str(e))
            else:  # -i/--ignore
                exclusion_rules.add_rule(str(values))

            existing = getattr(namespace, self.dest, None) or []
            setattr(namespace, self.dest, existing + [values])

    return ExclusionRulesAction


def _add_common_arguments(parser: argparse.ArgumentParser, prog: str) -> None:
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"{prog} (templatize) {__version__}",
        help="Show the version and exit",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report warnings and errors; do not list every copied or skipped entry.",
    )
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Also print debug messages.",
    )


def create_build_parser(exclusion_rules: BaseExclusionRules) -> argparse.ArgumentParser:
    """Create the argument parser for build-template.

    Args:
        exclusion_rules: The exclusion rules object that -e/--exclude and -i/--ignore update.
    """
    description = """
    build-template: snapshot a working project into a distributable template.

    The project is copied into the template directory, which is deleted first so that
    repeated builds produce the same tree. Dependency caches, build output, version control
    metadata, CI configuration, lockfiles and coverage output are left out. The .gitignore
    file is stored as 'gitignore' so that publishing the template does not drop it, and
    package.json gets a placeholder name, a baseline version, 'private: true', and loses its
    publish-only fields. A README describing the template is generated last.
    """

    epilog = f"""
    Examples:
      # Build ./{TEMPLATE_DIR_NAME} from the current directory
      build-template

      # Build from another project into a custom location
      build-template -r ~/work/my-app -o ~/work/my-app-template

      # Leave additional files out using gitignore-style patterns
      build-template -i "*.log" -i "scratch/"
      build-template -e .templateignore
    """

    parser = argparse.ArgumentParser(
        prog="build-template",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _add_common_arguments(parser, "build-template")

    ExclusionAction = create_exclusion_action(exclusion_rules)

    parser.add_argument(
        "-r",
        "--root",
        type=Path,
        default=Path("."),
        metavar="DIR",
        help="Project directory to snapshot (default: current directory).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="DIR",
        help=f"Template directory to (re)create (default: <root>/{TEMPLATE_DIR_NAME}).",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        type=Path,
        metavar="FILE",
        action=ExclusionAction,
        help="File of additional gitignore-style exclusion patterns (can be specified multiple times).",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        type=str,
        metavar="PATTERN",
        action=ExclusionAction,
        help=(
            "Additional gitignore-style pattern to exclude (can be specified multiple times). "
            "Patterns are applied in the order they appear, mixed with -e/--exclude options."
        ),
    )

    return parser


def create_create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for create-project."""
    description = """
    create-project: create a new project from a template.

    Every file of the template is copied into a new directory named after the project.
    'gitignore' is restored to '.gitignore' and the project's package.json gets the new
    project name. An existing directory is never overwritten.
    """

    epilog = f"""
    Examples:
      # Create ./my-app from ./{TEMPLATE_DIR_NAME}
      create-project my-app

      # Use a template from another location
      create-project my-app -t ~/templates/preact
      {TEMPLATE_DIR_ENV}=~/templates/preact create-project my-app
    """

    parser = argparse.ArgumentParser(
        prog="create-project",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _add_common_arguments(parser, "create-project")

    parser.add_argument(
        "name",
        nargs="?",
        default=PLACEHOLDER_PROJECT_NAME,
        help=f"Name of the new project and of the directory to create (default: {PLACEHOLDER_PROJECT_NAME}).",
    )
    parser.add_argument(
        "-t",
        "--template",
        type=Path,
        metavar="DIR",
        help=f"Template directory (default: ${TEMPLATE_DIR_ENV}, else ./{TEMPLATE_DIR_NAME}).",
    )

    return parser


def validate_create_args(args: argparse.Namespace) -> None:
    """Validate create-project arguments beyond what argparse handles.

    Surrounding whitespace is removed from the project name.

    Raises:
        ValueError: If the project name is empty or names the current/parent directory.
    """
    name = args.name.strip()
    if not name or Path(name).name in ("", ".", ".."):
        raise ValueError(f"Invalid project name: {args.name!r}")
    args.name = name
