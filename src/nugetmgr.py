"""nugetmgr - unlist and deprecate NuGet.org package versions.

    Returns:
        int: Exit code
"""
import logging
import sys

from args import parse_args
from cli_config import apply_config_file
from common.cancellation import CancellationToken, install_signal_handlers
from common.errors import OperationCancelled
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import Commands, ExitCodes


def run(args, token=None):
    """Dispatch parsed arguments to the selected command and return its exit code."""
    logger = logging.getLogger("nugetmgr")
    token = token or CancellationToken()

    if getattr(args, "CONFIG", None) and not apply_config_file(args.CONFIG):
        return ExitCodes.FILE_ERROR.value

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action)
        )

    try:
        if args.action == Commands.UNLIST.value:
            from cli_unlist import run_unlist  # pylint: disable=import-outside-toplevel
            return run_unlist(args, token=token, log=logger)
        if args.action == Commands.DEPRECATE.value:
            from cli_deprecate import run_deprecate  # pylint: disable=import-outside-toplevel
            return run_deprecate(args, token=token, log=logger)
    except OperationCancelled as e:
        logger.warning("Operation cancelled: %s", e)
        return ExitCodes.CANCELLED.value

    logger.error("Unknown command: %s", args.action)
    return ExitCodes.VALIDATION_ERROR.value


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL, getattr(args, "LOG_FILE", None))

    token = CancellationToken()
    install_signal_handlers(token)
    sys.exit(run(args, token=token))


if __name__ == "__main__":
    main()
