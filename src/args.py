"""Argument parsing functionality for nugetmgr."""

import argparse

from constants import Commands


def _add_common_options(parser):
    """Options accepted by every sub-command."""
    parser.add_argument("--loglevel", "--log-level",
                        dest="LOG_LEVEL",
                        help="Set the logging level (defaults to $NUGETMGR_LOG_LEVEL, then INFO)",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)


def _add_force_option(parser):
    parser.add_argument("--force",
                        dest="FORCE",
                        help=("Calls the underlying NuGet APIs to unlist the packages. Without this "
                              "parameter (default) the command executes in `dry-run` mode."),
                        action="store_true")


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="nugetmgr",
        description="NuGet package manager command-line app",
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="action", metavar="command")
    subparsers.required = True

    unlist = subparsers.add_parser(
        Commands.UNLIST.value,
        help="Unlist all versions of the specified packages",
        description="Unlist all versions of the specified packages",
    )
    unlist.add_argument("--apiKey",
                        dest="API_KEY",
                        help="The API key used for package management",
                        action="store", type=str,
                        required=True)
    unlist.add_argument("--packages",
                        dest="PACKAGES",
                        help="A comma-separated list of package names to unlist",
                        action="store", type=str,
                        required=True)
    _add_force_option(unlist)
    _add_common_options(unlist)

    deprecate = subparsers.add_parser(
        Commands.DEPRECATE.value,
        help="Deprecate specific versions of a specified package",
        description="Deprecate specific versions of a specified package",
    )
    deprecate.add_argument("--apiKeys",
                           dest="API_KEYS",
                           help=("Comma-separated list of API keys for the NuGet API account(s); "
                                 "tried in order until one succeeds"),
                           action="store", type=str,
                           required=True)
    deprecate.add_argument("--packageId",
                           dest="PACKAGE_ID",
                           help="The name of the package to deprecate",
                           action="store", type=str,
                           required=True)
    deprecate.add_argument("--versions",
                           dest="VERSIONS",
                           help=("Comma separated list of package versions to deprecate. "
                                 "Not required if using --deprecateAllExceptLatest."),
                           action="store", type=str)
    deprecate.add_argument("--message",
                           dest="MESSAGE",
                           help=("The deprecation message to show in NuGet.org for each of the "
                                 "versions to be deprecated."),
                           action="store", type=str,
                           required=True)
    deprecate.add_argument("--deprecateAllExceptLatest",
                           dest="DEPRECATE_ALL_EXCEPT_LATEST",
                           help=("When set, all versions except the latest will be deprecated. "
                                 "The --versions parameter is ignored in this case."),
                           action="store_true")
    deprecate.add_argument("--what-if",
                           dest="WHAT_IF",
                           help=("When set, shows which packages and versions would be deprecated "
                                 "without actually performing the operation."),
                           action="store_true")
    _add_common_options(deprecate)

    return parser.parse_args(argv)
