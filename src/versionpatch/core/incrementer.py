"""Version increment module - computes the next SemVer version."""

import re
from typing import Optional, Union

from versionpatch.errors import IncrementError
from versionpatch.models import IncrementTarget, SemVer

NUMERIC_SUFFIX = re.compile(r"[0-9]+\Z")


class VersionIncrementer:
    """Increments one component of a SemVer version string.

    Less significant components are reset or dropped:
    - major: minor and patch become 0, prerelease and build are dropped
    - minor: patch becomes 0, prerelease and build are dropped
    - patch: prerelease and build are dropped
    - prerelease: build is dropped
    - build: nothing else changes
    """

    def parse(self, version: str) -> SemVer:
        """Parse a version string into its components."""
        return SemVer.parse(version)

    def increment(
        self,
        current_version: str,
        target: Union[IncrementTarget, str] = IncrementTarget.PATCH,
        explicit_version: Optional[str] = None,
    ) -> str:
        """Return the version following current_version.

        An explicit_version replaces the result verbatim, but current_version
        must still parse.
        """
        semver = self.parse(current_version)
        if explicit_version is not None:
            return explicit_version

        return str(self.bump(semver, target))

    def bump(self, semver: SemVer, target: Union[IncrementTarget, str]) -> SemVer:
        """Return a new SemVer with the target component incremented."""
        target = IncrementTarget.from_value(target)

        if target is IncrementTarget.MAJOR:
            return SemVer(major=semver.major + 1, minor=0, patch=0)
        if target is IncrementTarget.MINOR:
            return SemVer(major=semver.major, minor=semver.minor + 1, patch=0)
        if target is IncrementTarget.PATCH:
            return SemVer(major=semver.major, minor=semver.minor, patch=semver.patch + 1)
        if target is IncrementTarget.PRERELEASE:
            return semver.model_copy(
                update={
                    "prerelease": self._increment_suffix(semver.prerelease, target),
                    "build": None,
                }
            )
        return semver.model_copy(
            update={"build": self._increment_suffix(semver.build, target)}
        )

    def _increment_suffix(self, component: Optional[str], target: IncrementTarget) -> str:
        """Increment the trailing digits of a prerelease/build component.

        The result is not zero-padded: "001" becomes "2".
        """
        if not component:
            raise IncrementError(f"Version has no {target.value} component to increment")

        match = NUMERIC_SUFFIX.search(component)
        if match is None:
            raise IncrementError(
                f"The {target.value} component '{component}' has no numeric suffix to increment"
            )

        return component[: match.start()] + str(int(match.group()) + 1)


def increment(
    current_version: str,
    target: Union[IncrementTarget, str] = IncrementTarget.PATCH,
    explicit_version: Optional[str] = None,
) -> str:
    """Shortcut for VersionIncrementer().increment()."""
    return VersionIncrementer().increment(current_version, target, explicit_version)
