"""Recursive tree copying driven by per-node decisions.

This package provides the copier shared by the template packager and the project
instantiator, the decision types it understands, and the node class used to record what
happened to every visited entry.
"""

from .decisions import Action, CopyAs, Decider, Decision, Skip, Transform, copy_verbatim
from .file_system_node import FileSystemNode
from .tree_copier import TreeCopier, copy_tree

__all__ = [
    "Action",
    "CopyAs",
    "Decider",
    "Decision",
    "FileSystemNode",
    "Skip",
    "Transform",
    "TreeCopier",
    "copy_tree",
    "copy_verbatim",
]
