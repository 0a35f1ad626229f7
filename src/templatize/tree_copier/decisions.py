"""Per-node decisions returned by a tree copier's decision function."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Union


class Action(str, Enum):
    """Action recorded for a node in the copy report.

    Values:
        SKIP: The node was not copied (excluded, collided with an earlier node, or looped)
        COPY: The node was copied verbatim, possibly under a different name
        TRANSFORM: The node's content was rewritten on the way to its destination
    """

    SKIP = "skip"
    COPY = "copy"
    TRANSFORM = "transform"


# Writes the transformed content of the first path to the second path.
TransformFn = Callable[[Path, Path], None]


@dataclass(frozen=True)
class Skip:
    """Leave the node (and, for a directory, its whole subtree) out of the destination."""

    reason: str = "excluded"


@dataclass(frozen=True)
class CopyAs:
    """Copy the node unchanged under ``dest_name``."""

    dest_name: str


@dataclass(frozen=True)
class Transform:
    """Write the node to ``dest_name`` by calling ``transform(source_path, dest_path)``.

    Only valid for files.
    """

    dest_name: str
    transform: TransformFn


Decision = Union[Skip, CopyAs, Transform]

# decide(relative_path, base_name, is_dir) -> Decision
Decider = Callable[[str, str, bool], Decision]


def copy_verbatim(relative_path: str, name: str, is_dir: bool) -> Decision:
    """Decision function that copies every node under its own name."""
    return CopyAs(name)
