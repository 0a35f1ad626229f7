from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class FileType(Enum):
    """Enumeration of node kinds encountered while copying a tree.

    Attributes:
        FILE: Regular file (symlinks to files are copied as plain files)
        DIRECTORY: Directory (symlinks to directories are descended into)
    """

    FILE = "file"
    DIRECTORY = "directory"
