"""Identify directories by device and inode for symlink loop detection."""

import os
from typing import NamedTuple


class FileIdentifier(NamedTuple):
    """The (device, inode) pair that uniquely names a file or directory.

    Example:
        >>> FileIdentifier(1, 42) == FileIdentifier(1, 42)
        True
    """

    device_id: int
    inode_number: int

    @classmethod
    def from_stat(cls, stat_result: os.stat_result) -> "FileIdentifier":
        return cls(stat_result.st_dev, stat_result.st_ino)
