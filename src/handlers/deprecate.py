"""Deprecate command handler."""
from __future__ import annotations

from common.errors import OperationCancelled
from constants import Constants
from options import DeprecationOptions
from registry.nuget import MutationExecutor
from versioning.resolvers import NuGetVersionResolver

from .base import NuGetCommandHandler


class DeprecateCommandHandler(NuGetCommandHandler[DeprecationOptions]):
    """Deprecates versions of one package, optionally all but the latest."""

    command_name = "deprecate"

    def handle(
        self,
        resolver: NuGetVersionResolver,
        executor: MutationExecutor,
        options: DeprecationOptions,
    ) -> None:
        if options.deprecate_all_except_latest:
            if options.versions:
                self.logger.warning(
                    "Versions list provided but deprecateAllExceptLatest flag is set. "
                    "The provided versions will be ignored."
                )
            options = options.with_versions(resolver.get_all_versions_except_latest(options.package_id))
            self.options = options
            if not options.versions:
                self.logger.info(
                    "No versions to deprecate for package %s. "
                    "Either no versions exist or only the latest version exists.",
                    options.package_id,
                )
                return

        if options.what_if:
            self._report_what_if(options)
            return

        versions_string = ",".join(options.versions)
        try:
            executor.deprecate_versions(options.package_id, options.versions, options.message)
        except OperationCancelled:
            raise
        except Exception as exc:
            self.logger.error(
                "Failed to deprecate versions %s of package %s. Reason: %s",
                versions_string, options.package_id, exc,
            )
            raise
        self.logger.info(
            "Deprecated %d version(s) of package %s: %s",
            len(options.versions), options.package_id, versions_string,
        )

    def _report_what_if(self, options: DeprecationOptions) -> None:
        tag = Constants.WHAT_IF
        self.logger.info(
            "%s The following versions of package %s would be deprecated:", tag, options.package_id
        )
        for version in options.versions:
            self.logger.info("%s - Version %s", tag, version)
        self.logger.info('%s Deprecation message would be: "%s"', tag, options.message)
        self.logger.info(
            "%s No changes have been made. To perform the actual deprecation, "
            "run again without the --what-if switch.",
            tag,
        )
