"""Entry point for the ``deprecate`` command: validation and the API key loop."""

from __future__ import annotations

import logging
from typing import Any, Optional

from common.cancellation import CancellationToken
from common.logging_utils import redact_secret
from constants import ExitCodes
from handlers import DeprecateCommandHandler
from options import DeprecationOptions
from versioning.parser import split_csv

logger = logging.getLogger(__name__)


def run_deprecate(
    args: Any,
    token: Optional[CancellationToken] = None,
    log: Optional[logging.Logger] = None,
    handler_cls=DeprecateCommandHandler,
) -> int:
    """Deprecate package versions, trying each API key until one succeeds.

    Args:
        args: Parsed CLI arguments namespace.
        token: Cancellation signal shared with the handlers.
        log: Logger threaded through every handler.
        handler_cls: Handler class, replaceable in tests.

    Returns:
        int: Process exit code.
    """
    log = log or logger
    token = token or CancellationToken()

    keys = split_csv(getattr(args, "API_KEYS", None))
    if not keys:
        log.error("No valid API keys found. Please provide at least one non-empty API key using the --apiKeys option.")
        log.info('Example: --apiKeys "your-api-key-here"')
        return ExitCodes.VALIDATION_ERROR.value

    package_id = (getattr(args, "PACKAGE_ID", None) or "").strip()
    if not package_id:
        log.error("No package id provided. Please provide one using the --packageId option.")
        return ExitCodes.VALIDATION_ERROR.value

    message = (getattr(args, "MESSAGE", None) or "").strip()
    if not message:
        log.error("No deprecation message provided. Please provide one using the --message option.")
        return ExitCodes.VALIDATION_ERROR.value

    all_except_latest = bool(getattr(args, "DEPRECATE_ALL_EXCEPT_LATEST", False))
    versions = split_csv(getattr(args, "VERSIONS", None))
    if not versions and not all_except_latest:
        log.error("No versions provided. Use --versions or set --deprecateAllExceptLatest.")
        return ExitCodes.VALIDATION_ERROR.value

    for index, key in enumerate(keys, start=1):
        log.info("Using API key %d of %d (%s)", index, len(keys), redact_secret(key))
        options = DeprecationOptions(
            api_key=key,
            package_id=package_id,
            versions=tuple(versions),
            message=message,
            deprecate_all_except_latest=all_except_latest,
            what_if=bool(getattr(args, "WHAT_IF", False)),
        )
        handler = handler_cls(options, logger=log, token=token)
        if handler.try_handle():
            return ExitCodes.SUCCESS.value
        if index < len(keys):
            log.warning("Deprecation with API key %d failed; trying the next key.", index)

    log.error("Deprecation of package %s failed with every provided API key.", package_id)
    return ExitCodes.OPERATION_FAILED.value
