"""Entry point for the ``unlist`` command."""

from __future__ import annotations

import logging
from typing import Any, Optional

from common.cancellation import CancellationToken
from constants import ExitCodes
from handlers import UnlistCommandHandler
from options import UnlistOptions
from versioning.parser import split_csv

logger = logging.getLogger(__name__)


def run_unlist(
    args: Any,
    token: Optional[CancellationToken] = None,
    log: Optional[logging.Logger] = None,
    handler_cls=UnlistCommandHandler,
) -> int:
    """Unlist every version of the given packages (dry-run unless --force).

    Returns:
        int: Process exit code. Individual removal failures do not change it.
    """
    log = log or logger
    api_key = (getattr(args, "API_KEY", None) or "").strip()
    if not api_key:
        log.error("No API key provided. Please provide an API key using the --apiKey option.")
        log.info('Example: --apiKey "your-api-key-here"')
        return ExitCodes.VALIDATION_ERROR.value

    packages = split_csv(getattr(args, "PACKAGES", None))
    if not packages:
        log.error("No packages provided. Please provide at least one package name using the --packages option.")
        return ExitCodes.VALIDATION_ERROR.value

    options = UnlistOptions(api_key=api_key, package_names=tuple(packages), force=bool(getattr(args, "FORCE", False)))
    handler = handler_cls(options, logger=log, token=token or CancellationToken())
    if not handler.try_handle():
        return ExitCodes.OPERATION_FAILED.value
    return ExitCodes.SUCCESS.value
