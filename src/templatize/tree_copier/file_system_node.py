"""Node representation for entries visited while copying a tree."""

import posixpath
from pathlib import Path
from typing import Any, Optional

from anytree import Node

from templatize.tree_copier.decisions import Action
from templatize.types import FileType


class FileSystemNode(Node):  # type: ignore
    """Node recording one visited file or directory and what was done with it.

    Extends anytree.Node so that the nodes created during a copy form a tree mirroring the
    source. That tree is the run report: it can be walked in traversal order, counted, and
    rendered.

    Attributes:
        name (str): The base name of the source entry.
        kind (FileType): Whether the entry is a file or a directory.
        source_path (Optional[Path]): Absolute path of the source entry.
        relative_path (str): Path relative to the traversal root, with forward slashes.
            Empty for the root node.
        action (Action): What the copier did with the entry.
        dest_name (Optional[str]): Base name written in the destination, None if skipped.
        reason (Optional[str]): Why the entry was skipped, if it was.

    Example:
        >>> root = FileSystemNode("project", kind=FileType.DIRECTORY, dest_name="template")
        >>> child = FileSystemNode(".gitignore", parent=root, relative_path=".gitignore", dest_name="gitignore")
        >>> child.is_dir
        False
        >>> child.dest_relative_path
        'gitignore'
    """

    def __init__(
        self,
        name: str,
        parent: Optional["FileSystemNode"] = None,
        kind: FileType = FileType.FILE,
        source_path: Optional[Path] = None,
        relative_path: str = "",
        action: Action = Action.COPY,
        dest_name: Optional[str] = None,
        reason: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.kind = kind
        self.source_path = source_path
        self.relative_path = relative_path
        self.action = action
        self.dest_name = dest_name
        self.reason = reason

    @property
    def is_dir(self) -> bool:
        return self.kind is FileType.DIRECTORY

    @property
    def dest_relative_path(self) -> Optional[str]:
        """Destination path relative to the destination root, or None if the node was skipped.

        The root node maps to the empty string.
        """
        if self.action is Action.SKIP:
            return None
        if self.is_root:
            return ""
        parent_path = self.parent.dest_relative_path
        if parent_path is None:
            return None
        return posixpath.join(parent_path, self.dest_name) if parent_path else self.dest_name
