"""versionpatch - bump the SemVer version field of package.json files."""

__version__ = "0.1.0"

from versionpatch.core.incrementer import VersionIncrementer, increment
from versionpatch.core.patcher import PatchResult, VersionPatcher
from versionpatch.errors import (
    IncrementError,
    ParseError,
    StateError,
    VersionError,
    VersionFileError,
)
from versionpatch.models import IncrementTarget, PatchConfig, SemVer

__all__ = [
    "IncrementError",
    "IncrementTarget",
    "ParseError",
    "PatchConfig",
    "PatchResult",
    "SemVer",
    "StateError",
    "VersionError",
    "VersionFileError",
    "VersionIncrementer",
    "VersionPatcher",
    "increment",
]
