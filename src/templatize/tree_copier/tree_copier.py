"""Recursive directory copier driven by a per-node decision function.

This module provides the TreeCopier class shared by the template packager and the
project instantiator. The copier walks a source directory, asks a decision function what
to do with each entry, performs the corresponding filesystem action, and records every
decision in a tree of FileSystemNode objects.
"""

import logging
import os
import posixpath
import shutil
from pathlib import Path
from typing import Iterator, Optional, Set

from anytree import PreOrderIter

from templatize.exceptions import FilesystemError, PreconditionError
from templatize.tree_copier.decisions import Action, Decider, Skip, Transform, copy_verbatim
from templatize.tree_copier.file_identifier import FileIdentifier
from templatize.tree_copier.file_system_node import FileSystemNode
from templatize.types import FileType, PathType

logger = logging.getLogger(__name__)


class TreeCopier:
    """Copy a directory tree, deciding per entry whether to skip, copy, or transform it.

    For every entry under ``source_root`` (visited once, in sorted name order) the decision
    function is called as ``decide(relative_path, base_name, is_dir)`` and must return one of
    :class:`Skip`, :class:`CopyAs` or :class:`Transform`:

    - Directories: ``Skip`` prunes the whole subtree before descent; ``CopyAs`` creates the
      destination directory and recurses into it. ``Transform`` is not allowed.
    - Files: ``Skip`` leaves the file out; ``CopyAs`` copies the bytes unchanged under the
      given name; ``Transform`` delegates writing to the transform function.

    Destination directories are always created before anything inside them is written, and
    the destination root is created if it does not exist. When two entries map to the same
    destination path the first one wins and the later one is skipped with a warning.
    Symbolic links are followed and copied as plain files or directories; a link that leads
    back to one of its own ancestors is skipped with a warning.

    Any failing filesystem operation aborts the copy with :class:`FilesystemError`. Output
    written up to that point is left in place.

    Attributes:
        source_root (Path): Directory being copied.
        dest_root (Path): Directory receiving the copy.
        decide (Decider): The decision function.

    Example:
        >>> copier = TreeCopier("my-project", "template")  # doctest: +SKIP
        >>> report = copier.copy()  # doctest: +SKIP
        >>> copier.get_file_count()  # doctest: +SKIP
        12
    """

    def __init__(self, source_root: PathType, dest_root: PathType, decide: Decider = copy_verbatim) -> None:
        self.source_root = Path(source_root)
        self.dest_root = Path(dest_root)
        self.decide = decide
        self._report: Optional[FileSystemNode] = None
        self._written: Set[Path] = set()

    def copy(self) -> FileSystemNode:
        """Run the copy and return the root of the report tree.

        Raises:
            PreconditionError: If the source root is missing or is not a directory.
            FilesystemError: If any filesystem operation fails.
            ValueError: If the decision function returns Transform for a directory.
        """
        if not self.source_root.exists():
            raise PreconditionError(str(self.source_root), "source directory does not exist")
        if not self.source_root.is_dir():
            raise PreconditionError(str(self.source_root), "source path is not a directory")

        self._written = set()
        root = FileSystemNode(
            self.source_root.resolve().name,
            kind=FileType.DIRECTORY,
            source_path=self.source_root,
            dest_name=self.dest_root.name,
        )
        self._make_dir(self.dest_root)

        visited: Set[FileIdentifier] = set()
        root_id = FileIdentifier.from_path(self.source_root)
        if root_id is not None:
            visited.add(root_id)

        self._copy_children(self.source_root, "", self.dest_root, root, visited)
        self._report = root
        return root

    def get_report(self) -> FileSystemNode:
        """Return the report tree, running the copy first if it hasn't run yet."""
        if self._report is None:
            return self.copy()
        return self._report

    def _make_dir(self, path: Path) -> None:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(str(path), "create directory", e)

    def _list_dir(self, path: Path) -> list:
        try:
            return sorted(os.listdir(path))
        except OSError as e:
            raise FilesystemError(str(path), "read directory", e)

    def _copy_children(
        self,
        source: Path,
        relative_path: str,
        dest: Path,
        parent: FileSystemNode,
        visited: Set[FileIdentifier],
    ) -> None:
        """Recursively apply decisions to the entries of one directory."""
        for child in self._list_dir(source):
            child_path = source / child
            child_relative_path = posixpath.join(relative_path, child) if relative_path else child
            is_dir = child_path.is_dir()
            label = child_relative_path + "/" if is_dir else child_relative_path

            node = FileSystemNode(
                child,
                parent=parent,
                kind=FileType.DIRECTORY if is_dir else FileType.FILE,
                source_path=child_path,
                relative_path=child_relative_path,
            )

            decision = self.decide(child_relative_path, child, is_dir)

            if isinstance(decision, Skip):
                self._mark_skipped(node, decision.reason)
                logger.info("  Skipping: %s", label)
                continue

            dest_path = dest / decision.dest_name
            if dest_path in self._written:
                self._mark_skipped(node, "destination already written")
                logger.warning("  Skipping: %s (%s was already written)", label, dest_path)
                continue
            node.dest_name = decision.dest_name

            if is_dir:
                if isinstance(decision, Transform):
                    raise ValueError(f"Cannot transform directory: {child_relative_path}")

                file_id = FileIdentifier.from_path(child_path)
                if file_id is not None and file_id in visited:
                    self._mark_skipped(node, "symlink loop")
                    logger.warning("  Skipping: %s (symlink loop)", label)
                    continue

                logger.info("  Copying dir: %s", label)
                self._make_dir(dest_path)
                self._written.add(dest_path)

                if file_id is not None:
                    visited.add(file_id)
                self._copy_children(child_path, child_relative_path, dest_path, node, visited)
                if file_id is not None:
                    visited.discard(file_id)

            elif isinstance(decision, Transform):
                node.action = Action.TRANSFORM
                logger.info("  Transforming file: %s -> %s", child_relative_path, node.dest_relative_path)
                try:
                    decision.transform(child_path, dest_path)
                except OSError as e:
                    raise FilesystemError(str(child_path), "transform", e)
                self._written.add(dest_path)

            else:
                if decision.dest_name != child:
                    logger.info("  Copying file: %s -> %s", child_relative_path, node.dest_relative_path)
                else:
                    logger.info("  Copying file: %s", child_relative_path)
                try:
                    shutil.copyfile(child_path, dest_path)
                except OSError as e:
                    raise FilesystemError(str(child_path), "copy", e)
                self._written.add(dest_path)

    @staticmethod
    def _mark_skipped(node: FileSystemNode, reason: str) -> None:
        node.action = Action.SKIP
        node.reason = reason
        node.dest_name = None

    def iterate_nodes(self) -> Iterator[FileSystemNode]:
        """Iterate over every visited node (excluding the root) in traversal order."""
        return PreOrderIter(self.get_report(), filter_=lambda node: not node.is_root)

    def _count(self, action: Action, kind: FileType) -> int:
        return sum(1 for node in self.iterate_nodes() if node.action is action and node.kind is kind)

    def get_file_count(self) -> int:
        """Number of files written to the destination (copied or transformed)."""
        return self._count(Action.COPY, FileType.FILE) + self._count(Action.TRANSFORM, FileType.FILE)

    def get_transformed_count(self) -> int:
        """Number of files whose content was rewritten."""
        return self._count(Action.TRANSFORM, FileType.FILE)

    def get_directory_count(self) -> int:
        """Number of directories created below the destination root."""
        return self._count(Action.COPY, FileType.DIRECTORY)

    def get_skipped_count(self) -> int:
        """Number of entries skipped. Contents of skipped directories are not visited or counted."""
        return sum(1 for node in self.iterate_nodes() if node.action is Action.SKIP)

    def stream_tree_representation(self, directories_only: bool = False) -> Iterator[str]:
        """Generate the destination tree one line at a time, like the Unix 'tree' command.

        Skipped entries are left out and destination names are shown.

        Args:
            directories_only: Show only directories.

        Example:
            >>> for line in copier.stream_tree_representation():  # doctest: +SKIP
            ...     print(line)
            template/
            ├── src/
            │   └── app.tsx
            ├── gitignore
            └── package.json
        """
        root = self.get_report()

        def visible(node: FileSystemNode) -> bool:
            return node.action is not Action.SKIP and (node.is_dir or not directories_only)

        def write_node(node: FileSystemNode, prefix: str = "") -> Iterator[str]:
            children = sorted(
                (child for child in node.children if visible(child)),
                key=lambda n: (not n.is_dir, n.dest_name.lower()),
            )
            for i, child in enumerate(children):
                is_last_child = i == len(children) - 1
                connector = "└── " if is_last_child else "├── "
                suffix = "/" if child.is_dir else ""
                yield f"{prefix}{connector}{child.dest_name}{suffix}"
                if child.is_dir:
                    yield from write_node(child, prefix + ("    " if is_last_child else "│   "))

        yield f"{root.dest_name}/"
        yield from write_node(root)


def copy_tree(source_root: PathType, dest_root: PathType, decide: Decider = copy_verbatim) -> TreeCopier:
    """Copy ``source_root`` into ``dest_root`` using ``decide`` and return the finished copier.

    The returned copier gives access to the report tree and its counts.
    """
    copier = TreeCopier(source_root, dest_root, decide)
    copier.copy()
    return copier
