"""Unlist command handler."""
from __future__ import annotations

from typing import List

from constants import Constants
from options import UnlistOptions
from registry.nuget import MutationExecutor
from versioning.models import PackageIdentity
from versioning.resolvers import NuGetVersionResolver

from .base import NuGetCommandHandler


class UnlistCommandHandler(NuGetCommandHandler[UnlistOptions]):
    """Unlists every published version of each requested package.

    A failed removal is logged and the remaining versions are still processed.
    """

    command_name = "unlist"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.failed: List[PackageIdentity] = []

    def handle(
        self,
        resolver: NuGetVersionResolver,
        executor: MutationExecutor,
        options: UnlistOptions,
    ) -> None:
        for package_name in options.package_names:
            self.token.raise_if_cancelled(f"unlisting of {package_name}")
            identities = resolver.get_package_versions(package_name)
            if not identities:
                self.logger.warning("No versions found for package %s", package_name)
                continue

            if not options.force:
                for identity in identities:
                    self.logger.info("%s Would unlist package %s", Constants.DRY_RUN, identity)
                continue

            removed = 0
            for identity in identities:
                self.token.raise_if_cancelled(f"unlisting of {identity}")
                if executor.delete_version(identity.package_id, str(identity.version)):
                    removed += 1
                else:
                    self.failed.append(identity)
            self.logger.info(
                "Unlisted %d of %d version(s) of package %s",
                removed, len(identities), package_name,
            )

        if not options.force:
            self.logger.info(
                "%s No changes have been made. To unlist the packages, run again with the --force switch.",
                Constants.DRY_RUN,
            )
        elif self.failed:
            self.logger.warning(
                "%d version(s) could not be unlisted: %s",
                len(self.failed), ", ".join(str(i) for i in self.failed),
            )
