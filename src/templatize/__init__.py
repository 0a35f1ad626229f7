"""Project template packaging and scaffolding utilities.

This package snapshots a working project into a distributable template tree
and instantiates new projects from that template, applying exclusion rules
and per-file content transforms in both directions.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("templatize")
except PackageNotFoundError:
    __version__ = "unknown"
