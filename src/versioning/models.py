"""Data models for NuGet versions and package identities."""

from dataclasses import dataclass
from typing import Tuple

import semantic_version


@dataclass(frozen=True)
class NuGetVersion:
    """Parsed NuGet version.

    ``release`` always has four numeric parts (major, minor, patch, revision);
    ``precedence`` carries the prerelease labels as a ``semantic_version``
    value so labels compare with semver precedence rules.
    """
    release: Tuple[int, int, int, int]
    precedence: semantic_version.Version
    original: str

    @property
    def sort_key(self) -> Tuple[Tuple[int, int, int, int], semantic_version.Version]:
        return self.release, self.precedence

    @property
    def normalized(self) -> str:
        """Normalized string form (revision dropped when zero)."""
        major, minor, patch, revision = self.release
        text = f"{major}.{minor}.{patch}"
        if revision:
            text = f"{text}.{revision}"
        if self.precedence.prerelease:
            text = f"{text}-{'.'.join(self.precedence.prerelease)}"
        return text

    def __str__(self) -> str:
        return self.normalized


@dataclass(frozen=True)
class PackageIdentity:
    """A package id paired with one of its published versions."""
    package_id: str
    version: NuGetVersion

    def __str__(self) -> str:
        return f"{self.package_id} version {self.version}"
