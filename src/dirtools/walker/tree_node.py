"""Node representation for walked entries in a rendered tree."""

from typing import Any, Optional

from anytree import Node

from dirtools.walker.file_entry import FileEntry


class TreeNode(Node):  # type: ignore
    """Node class representing one walked entry in the tree.

    Extends anytree.Node with the FileEntry it was built from and the target of the link
    when the entry is a symlink. The root node has no entry.

    Attributes:
        name (str): The base name shown in the tree.
        entry (Optional[FileEntry]): The walked entry, None for the root.
        is_dir (bool): True if this node represents a directory.
        symlink_target (Optional[str]): Target of the link, if this is a symlink.

    Example:
        >>> root = TreeNode("project", is_dir=True)
        >>> child = TreeNode("main.py", parent=root)
        >>> child.label
        'main.py'
        >>> root.label
        'project/'
    """

    def __init__(
        self,
        name: str,
        parent: Optional["TreeNode"] = None,
        entry: Optional[FileEntry] = None,
        is_dir: bool = False,
        symlink_target: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.entry = entry
        self.is_dir = is_dir
        self.symlink_target = symlink_target

    @property
    def is_symlink(self) -> bool:
        return self.entry is not None and self.entry.is_symlink

    @property
    def label(self) -> str:
        """The text shown for this node: directories end in "/", symlinks show their target."""
        if self.is_symlink:
            if self.symlink_target:
                return f"{self.name} → {self.symlink_target} [symlink]"
            return f"{self.name} [symlink]"
        if self.is_dir:
            return f"{self.name}/"
        return str(self.name)
