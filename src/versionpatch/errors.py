"""Exceptions raised by versionpatch."""

from pathlib import Path
from typing import Optional


class VersionError(Exception):
    """Base error for all version patching failures."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.message} ({self.path})"
        return self.message


class ParseError(VersionError):
    """The version string does not follow SemVer 2.0."""


class IncrementError(VersionError):
    """The selected prerelease/build component has no numeric suffix."""


class VersionFileError(VersionError):
    """A version file could not be read, decoded or written."""


class StateError(VersionError):
    """A result was requested before any run produced one."""
