"""Exclusion-aware directory traversal.

This package provides the depth-first directory walker, the entries it yields, and a
tree renderer built on top of a walk.
"""

from .directory_walker import DirectoryWalker, walk
from .file_entry import FileEntry, WalkError, WalkItem
from .file_tree import FileTree
from .permission_action import PermissionAction

__all__ = [
    "DirectoryWalker",
    "FileEntry",
    "FileTree",
    "PermissionAction",
    "WalkError",
    "WalkItem",
    "walk",
]
