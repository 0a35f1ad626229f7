"""Identity of a directory by device and inode, used to detect symlink loops."""

import os
from typing import NamedTuple, Optional

from templatize.types import PathType


class FileIdentifier(NamedTuple):
    """Device ID and inode number of a filesystem entry.

    Two paths with the same identifier are the same directory, so seeing an identifier again
    while descending means a symbolic link has led back to an ancestor.

    Attributes:
        device_id (int): The device ID from stat information.
        inode_number (int): The inode number from stat information.
    """

    device_id: int
    inode_number: int

    @classmethod
    def from_path(cls, path: PathType) -> Optional["FileIdentifier"]:
        """Stat ``path`` (following symlinks) and return its identifier.

        Returns:
            The identifier, or None if the path cannot be stat'ed. A missing identifier
            disables loop detection for that entry; the copy itself reports the error.
        """
        try:
            stat_info = os.stat(path)
        except OSError:
            return None
        return cls(stat_info.st_dev, stat_info.st_ino)
