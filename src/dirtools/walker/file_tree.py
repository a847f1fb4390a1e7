"""Tree rendering of a directory walk."""

import os
from typing import Dict, Iterable, Iterator, List, Optional

from anytree import ContStyle, RenderTree

from dirtools.walker.directory_walker import DirectoryWalker
from dirtools.walker.file_entry import FileEntry, WalkError
from dirtools.walker.tree_node import TreeNode


def _sort_children(children: Iterable[TreeNode]) -> List[TreeNode]:
    # Directories first, then files, both case-insensitively by name
    return sorted(children, key=lambda n: (not n.is_dir, str(n.name).lower()))


class FileTree:
    """A tree built from one walk, with counts and a `tree`-style rendering.

    The tree honours the walker's exclusion rules and symlink policy. It is built on first
    access; subtrees the walker could not read are recorded in ``errors`` and appear as
    empty directories.

    Attributes:
        walker (DirectoryWalker): The walker that supplies the entries.
        errors (List[WalkError]): Unreadable subtrees reported during the build.

    Example:
        >>> tree = FileTree(DirectoryWalker("/srv/project", exclude=set()))  # doctest: +SKIP
        >>> print("\\n".join(tree.stream_tree_representation()))  # doctest: +SKIP
        project/
        ├── src/
        │   └── main.py
        └── README.md
    """

    def __init__(self, walker: DirectoryWalker) -> None:
        self.walker = walker
        self.errors: List[WalkError] = []
        self._root: Optional[TreeNode] = None
        self._file_count = 0
        self._directory_count = 0
        self._symlink_count = 0
        self._total_size = 0

    def get_tree(self) -> TreeNode:
        """Return the root node, building the tree on first access.

        Raises:
            NotFoundError: If the walk root does not exist or is not a directory.
        """
        if self._root is None:
            self._root = self._build_tree()
        return self._root

    def _build_tree(self) -> TreeNode:
        root_path = self.walker.root_path
        root = TreeNode(root_path.name or str(root_path), is_dir=True)
        directories: Dict[str, TreeNode] = {"": root}

        for item in self.walker:
            if isinstance(item, WalkError):
                self.errors.append(item)
                continue

            parent = directories[item.relative_path.rpartition("/")[0]]
            node = TreeNode(
                item.name,
                parent=parent,
                entry=item,
                is_dir=item.is_directory,
                symlink_target=self._read_link(item),
            )
            if item.is_directory:
                directories[item.relative_path] = node
            self._count(item)

        return root

    def _count(self, entry: FileEntry) -> None:
        if entry.is_symlink:
            self._symlink_count += 1
        if entry.is_directory:
            self._directory_count += 1
        elif not entry.is_symlink or self.walker.follow_symlinks:
            self._file_count += 1
            self._total_size += entry.size_in_bytes

    @staticmethod
    def _read_link(entry: FileEntry) -> Optional[str]:
        if not entry.is_symlink:
            return None
        try:
            return os.readlink(entry.path)
        except OSError:
            return None

    @property
    def file_count(self) -> int:
        self.get_tree()
        return self._file_count

    @property
    def directory_count(self) -> int:
        """Number of directories in the tree, not counting the root."""
        self.get_tree()
        return self._directory_count

    @property
    def symlink_count(self) -> int:
        self.get_tree()
        return self._symlink_count

    @property
    def total_size(self) -> int:
        """Sum of the sizes of the files in the tree (exclusions applied)."""
        self.get_tree()
        return self._total_size

    def stream_tree_representation(self) -> Iterator[str]:
        """Yield the tree one line at a time, like the Unix ``tree`` command."""
        root = self.get_tree()
        for prefix, _, node in RenderTree(root, style=ContStyle(), childiter=_sort_children):
            yield f"{prefix}{node.label}"
