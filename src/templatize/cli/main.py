"""Command-line entry points for templatize.

This module provides the two console scripts:

- ``build-template`` snapshots a project into a template directory;
- ``create-project`` creates a new project directory from a template.

Both print one line per copy decision on stdout, report failures as a single
``Error: ...`` line on stderr, and exit with a non-zero status on failure.

Exit Codes:
    0: Successful completion
    1: Precondition, filesystem, or manifest error
    2: Command-line syntax error
    130: Interrupted by SIGINT (Ctrl+C)

Example:
    # Build ./template from the current project
    $ build-template

    # Create ./my-app from ./template
    $ create-project my-app
"""

import logging
import sys
from typing import Callable, List, Optional

from templatize.cli.argparser import create_build_parser, create_create_parser, validate_create_args
from templatize.config import InstantiationConfig, PackagingConfig, default_template_root
from templatize.exceptions import TemplatizeError
from templatize.exclusion_rules.git_rules import GitIgnoreExclusionRules
from templatize.instantiator import create_project, project_next_steps
from templatize.packager import build_template


def configure_logging(quiet: bool = False, verbose: bool = False) -> None:
    """Send log records to stdout as bare messages.

    Args:
        quiet: Only show warnings and errors.
        verbose: Also show debug messages.
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stdout, force=True)


def _run(command: Callable[[], None]) -> None:
    """Run ``command``, translating failures into an error line and an exit code."""
    try:
        command()
    except (TemplatizeError, ValueError) as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        sys.exit(130)


def build_main(argv: Optional[List[str]] = None) -> None:
    """Entry point for build-template."""
    extra_rules = GitIgnoreExclusionRules()
    parser = create_build_parser(extra_rules)
    args = parser.parse_args(argv)
    configure_logging(args.quiet, args.verbose)

    def build() -> None:
        if args.output is not None:
            config = PackagingConfig(
                project_root=args.root,
                template_root=args.output,
                extra_exclusion_rules=extra_rules,
            )
        else:
            config = PackagingConfig.for_root(args.root, extra_exclusion_rules=extra_rules)
        build_template(config)

    _run(build)


def create_main(argv: Optional[List[str]] = None) -> None:
    """Entry point for create-project."""
    parser = create_create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.quiet, args.verbose)

    def create() -> None:
        validate_create_args(args)
        template_root = args.template if args.template is not None else default_template_root()
        result = create_project(InstantiationConfig(project_name=args.name, template_root=template_root))
        if not args.quiet:
            print()
            print("\n".join(project_next_steps(result)))

    _run(create)

