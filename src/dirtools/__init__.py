"""Directory walking and filesystem helper utilities.

This package provides an exclusion-aware directory walker, size reporting, a
tree renderer and a handful of thin filesystem helpers, all usable from Python
or through the ``dirtools`` command-line tool.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("dirtools")
except PackageNotFoundError:
    __version__ = "unknown"
