"""Parsing utilities for NuGet version strings and comma-separated CLI values."""

import logging
import re
from typing import Iterable, List, Optional

import semantic_version

from .models import NuGetVersion

logger = logging.getLogger(__name__)

_NUGET_VERSION_RE = re.compile(
    r"^\s*(?P<release>\d+(?:\.\d+){0,3})"
    r"(?:-(?P<prerelease>[0-9A-Za-z\-]+(?:\.[0-9A-Za-z\-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z\-]+(?:\.[0-9A-Za-z\-]+)*))?\s*$"
)


def split_csv(value: Optional[str]) -> List[str]:
    """Split a comma-separated CLI value, trimming blanks and dropping empties.

    Order is preserved and duplicates are removed.
    """
    if not value:
        return []
    items = [part.strip() for part in value.split(",")]
    return list(dict.fromkeys(item for item in items if item))


def parse_nuget_version(text: str) -> NuGetVersion:
    """Parse a NuGet version string.

    Accepts one to four numeric release parts, an optional prerelease suffix
    and optional build metadata (ignored for ordering). Prerelease labels are
    compared case-insensitively, as NuGet does.

    Raises:
        ValueError: If ``text`` is not a valid NuGet version.
    """
    m = _NUGET_VERSION_RE.match(text or "")
    if not m:
        raise ValueError(f"Invalid NuGet version: {text!r}")

    parts = [int(p) for p in m.group("release").split(".")]
    parts.extend([0] * (4 - len(parts)))
    prerelease = m.group("prerelease")
    labels = tuple(prerelease.lower().split(".")) if prerelease else ()

    # semantic_version validates prerelease identifiers (e.g. no leading zeros).
    precedence = semantic_version.Version(major=0, minor=0, patch=0, prerelease=labels)
    return NuGetVersion(release=tuple(parts), precedence=precedence, original=text.strip())


def sort_versions_desc(versions: Iterable[str], package_id: str = "") -> List[NuGetVersion]:
    """Parse, de-duplicate and sort version strings, highest first.

    Invalid version strings are skipped with a warning.
    """
    parsed = {}
    for raw in versions:
        try:
            ver = parse_nuget_version(raw)
        except ValueError:
            logger.warning("Skipping unparseable version %r of package %s", raw, package_id)
            continue
        parsed.setdefault(ver.normalized, ver)
    return sorted(parsed.values(), key=lambda v: v.sort_key, reverse=True)
