"""Content transforms applied while copying: ignore-file renames and manifest rewrites."""

from .manifest import ManifestEdit, instantiation_edit, packaging_edit, rewrite_manifest
from .rules import RuleDecider, TransformKind, TransformRule

__all__ = [
    "ManifestEdit",
    "RuleDecider",
    "TransformKind",
    "TransformRule",
    "instantiation_edit",
    "packaging_edit",
    "rewrite_manifest",
]
