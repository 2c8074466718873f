"""Pydantic models for versionpatch."""

import re
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from versionpatch.errors import ParseError, VersionError

SEMVER_PATTERN = re.compile(
    r"(?P<major>0|[1-9][0-9]*)\.(?P<minor>0|[1-9][0-9]*)\.(?P<patch>0|[1-9][0-9]*)"
    r"(?:-(?P<prerelease>(?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<build>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?"
)


class IncrementTarget(str, Enum):
    """Version component selected for increment, most significant first."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    PRERELEASE = "prerelease"
    BUILD = "build"

    @classmethod
    def from_value(cls, value: Union["IncrementTarget", str]) -> "IncrementTarget":
        """Resolve a target name case-insensitively."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(t.value for t in cls)
            raise VersionError(
                f"Unknown increment type '{value}'. Use one of: {choices}"
            ) from None


class SemVer(BaseModel):
    """A parsed SemVer 2.0 version."""

    major: int = Field(ge=0)
    minor: int = Field(ge=0)
    patch: int = Field(ge=0)
    prerelease: Optional[str] = None  # e.g. "alpha.1"
    build: Optional[str] = None  # e.g. "exp.sha.5114f85"

    @classmethod
    def parse(cls, text: str) -> "SemVer":
        """Parse a version string, raising ParseError when it is not SemVer."""
        if not isinstance(text, str):
            raise ParseError(f"Version must be a string, got {type(text).__name__}")

        match = SEMVER_PATTERN.fullmatch(text)
        if match is None:
            raise ParseError(f"'{text}' is not a valid semantic version")

        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease=match.group("prerelease"),
            build=match.group("build"),
        )

    @property
    def prerelease_identifiers(self) -> list[str]:
        return self.prerelease.split(".") if self.prerelease else []

    @property
    def build_identifiers(self) -> list[str]:
        return self.build.split(".") if self.build else []

    def __str__(self) -> str:
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            version += f"-{self.prerelease}"
        if self.build:
            version += f"+{self.build}"
        return version


class PatchConfig(BaseModel):
    """Options for a version patching run."""

    files: list[str] = Field(default_factory=lambda: ["package.json"])
    version: Optional[str] = None  # explicit override, written verbatim
    type: IncrementTarget = IncrementTarget.PATCH
    disabled: bool = False
    cooldown: int = Field(default=0, ge=0)  # milliseconds, 0 disables
    base_path: Path = Field(default_factory=Path.cwd)

    @field_validator("files", mode="before")
    @classmethod
    def _single_file(cls, value: object) -> object:
        """Allow a single path in place of a list."""
        if value is None:
            return ["package.json"]
        if isinstance(value, (str, Path)):
            return [str(value)]
        if not isinstance(value, (list, tuple)):
            raise ValueError("files must be a path or a list of paths")
        return [str(v) for v in value]

    @field_validator("type", mode="before")
    @classmethod
    def _target(cls, value: object) -> IncrementTarget:
        return IncrementTarget.from_value(value)  # type: ignore[arg-type]

    @property
    def active_files(self) -> list[str]:
        """Files that will be patched; empty when patching is disabled."""
        return [] if self.disabled else list(self.files)
