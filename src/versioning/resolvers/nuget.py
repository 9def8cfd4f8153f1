"""NuGet version resolver using semantic-version ordering over the V3 version listing."""

import logging
from typing import List, Optional, Sequence

from registry.nuget.client import NuGetClient

from ..models import NuGetVersion, PackageIdentity
from ..parser import sort_versions_desc


def pick_latest(candidates: Sequence[NuGetVersion]) -> Optional[NuGetVersion]:
    """Return the highest version in ``candidates``, prereleases included."""
    if not candidates:
        return None
    return max(candidates, key=lambda v: v.sort_key)


class NuGetVersionResolver:
    """Resolver for NuGet packages using semantic versioning.

    Every call reads the registry afresh; nothing is cached.
    """

    def __init__(self, client: NuGetClient, logger: Optional[logging.Logger] = None):
        self.client = client
        self.logger = logger or logging.getLogger(__name__)

    def fetch_candidates(self, package_id: str) -> List[NuGetVersion]:
        """Fetch every published version of a package, sorted highest first."""
        return sort_versions_desc(self.client.fetch_versions(package_id), package_id)

    def get_package_versions(self, package_id: str) -> List[PackageIdentity]:
        """Return every published version of ``package_id``, unfiltered."""
        return [PackageIdentity(package_id, v) for v in self.fetch_candidates(package_id)]

    def get_all_versions_except_latest(self, package_id: str) -> List[str]:
        """Return all versions except the highest one, in descending order.

        An empty list means the package has no versions at all or only one.
        """
        ordered = self.fetch_candidates(package_id)
        latest = pick_latest(ordered)
        if latest is None:
            self.logger.warning("No versions found for package %s", package_id)
            return []

        self.logger.info(
            "Latest version of %s is %s. This version will not be deprecated.", package_id, latest
        )
        return [str(v) for v in ordered if v.sort_key != latest.sort_key]
