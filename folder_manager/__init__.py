"""Folder manager service package.

Maps client identifiers to their Unrestricted/Restricted folder pair in the
document-management backend.
"""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("folder-manager")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
