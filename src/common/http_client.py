"""Shared HTTP helpers used by the NuGet client.

Read-only metadata calls go through :func:`safe_get`, which keeps the
consistent timeout/connection error handling (log and exit). State-changing
calls go through :func:`send_request`, which lets ``requests`` exceptions
propagate so the caller's retry loop can classify them.
"""
from __future__ import annotations

import logging
import sys
from typing import Any, Optional

import requests

from constants import Constants, ExitCodes
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


def build_session(api_key: Optional[str] = None) -> requests.Session:
    """Create the single HTTP session a command handler reuses for every call.

    Args:
        api_key: NuGet API key sent as ``X-NuGet-ApiKey`` on every request.

    Returns:
        requests.Session: Configured session.
    """
    session = requests.Session()
    session.headers.update({"User-Agent": Constants.USER_AGENT})
    if api_key:
        session.headers[Constants.API_KEY_HEADER] = api_key
    return session


def safe_get(session: requests.Session, url: str, *, context: str, **kwargs: Any) -> requests.Response:
    """Perform a GET request with consistent error handling and DEBUG traces."""
    safe_target = safe_url(url)
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    context=context
                )
            )
        try:
            res = session.get(url, timeout=Constants.REQUEST_TIMEOUT, **kwargs)
            if is_debug_enabled(logger):
                logger.debug(
                    "HTTP response ok",
                    extra=extra_context(
                        event="http_response",
                        component="http_client",
                        action="GET",
                        outcome="success",
                        status_code=res.status_code,
                        duration_ms=t.duration_ms(),
                        target=safe_target,
                        context=context
                    )
                )
            return res
        except requests.Timeout:
            logger.error(
                "%s request timed out after %s seconds",
                context,
                Constants.REQUEST_TIMEOUT,
            )
            sys.exit(ExitCodes.CONNECTION_ERROR.value)
        except requests.RequestException as exc:  # includes ConnectionError
            logger.error("%s connection error: %s", context, exc)
            sys.exit(ExitCodes.CONNECTION_ERROR.value)


def send_request(
    session: requests.Session,
    method: str,
    url: str,
    *,
    context: str,
    **kwargs: Any,
) -> requests.Response:
    """Perform a state-changing request with DEBUG traces.

    Args:
        session: Session carrying the API key header.
        method: HTTP method, e.g. "DELETE" or "PUT".
        url: Target URL.
        context: Human-readable operation tag for logs.
        **kwargs: Passed through to ``session.request``.

    Returns:
        requests.Response: The HTTP response object.

    Raises:
        requests.RequestException: Transport failures are left to the caller.
    """
    safe_target = safe_url(url)
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action=method,
                    target=safe_target,
                    context=context
                )
            )
        try:
            res = session.request(method, url, timeout=Constants.REQUEST_TIMEOUT, **kwargs)
        except requests.RequestException as exc:
            if is_debug_enabled(logger):
                logger.debug(
                    "HTTP request exception",
                    extra=extra_context(
                        event="http_exception",
                        component="http_client",
                        action=method,
                        outcome=type(exc).__name__,
                        duration_ms=t.duration_ms(),
                        target=safe_target,
                        context=context
                    )
                )
            raise
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action=method,
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    context=context
                )
            )
        return res
