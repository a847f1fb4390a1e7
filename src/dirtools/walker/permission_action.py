"""Permission action enum for handling unreadable directories during a walk."""

from enum import Enum


class PermissionAction(str, Enum):
    """Action to take when a directory's contents cannot be listed.

    Values:
        REPORT: Yield a WalkError for the subtree and continue with its siblings (default)
        IGNORE: Skip the subtree silently
        RAISE: Raise PermissionDeniedError and stop the walk
    """

    REPORT = "report"
    IGNORE = "ignore"
    RAISE = "raise"
