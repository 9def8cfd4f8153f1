"""Retry/backoff loop for rate-limited NuGet gallery calls.

Each HTTP attempt is classified into an :class:`AttemptOutcome`; the loop then
either returns, waits and tries again, or raises. ``RetryPolicy.max_retries``
bounds the total number of attempts, first one included.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

import requests

from constants import Constants
from common.cancellation import CancellationToken
from common.errors import NuGetApiError, OperationCancelled, ThrottlingExceededError
from common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)


class AttemptOutcome(Enum):
    """Classification of a single HTTP attempt."""
    SUCCESS = "success"
    THROTTLED = "throttled"
    TRANSIENT_SERVER_ERROR = "transient_server_error"
    CANCELED = "canceled"
    FATAL_ERROR = "fatal_error"


@dataclass
class RetryPolicy:
    """Attempt limit, backoff bases and the ceiling on any single wait."""
    max_retries: int = 3
    throttle_backoff_base_sec: int = 60
    transient_backoff_base_sec: int = 30
    max_wait_sec: int = 3600

    @classmethod
    def from_constants(cls) -> "RetryPolicy":
        """Build a policy from the (possibly config-overridden) Constants."""
        return cls(
            max_retries=Constants.MAX_RETRIES,
            throttle_backoff_base_sec=Constants.THROTTLE_BACKOFF_BASE_SEC,
            transient_backoff_base_sec=Constants.TRANSIENT_BACKOFF_BASE_SEC,
            max_wait_sec=Constants.MAX_RETRY_WAIT_SEC,
        )

    def _bounded(self, seconds: int) -> int:
        return min(seconds, self.max_wait_sec)

    def throttle_wait(self, attempt: int, retry_after: Optional[str]) -> Tuple[int, bool]:
        """Seconds to wait after a 429 on ``attempt`` (1-based).

        Returns:
            (seconds, hinted) where ``hinted`` tells whether Retry-After was used.
        """
        hinted = parse_retry_after(retry_after)
        if hinted is not None:
            return self._bounded(hinted), True
        return self._bounded(self.throttle_backoff_base_sec * attempt), False

    def transient_wait(self, attempt: int) -> int:
        """Seconds to wait after a transient server error on ``attempt`` (1-based)."""
        return self._bounded(self.transient_backoff_base_sec * attempt)


def parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Parse a Retry-After header given in whole seconds; None if absent or invalid."""
    if value is None:
        return None
    text = str(value).strip()
    if not (text.isascii() and text.isdigit()):
        return None
    return int(text)


def is_transient_error(exc: requests.RequestException) -> bool:
    """Return True for 502/503/504 responses surfaced as ``requests.HTTPError``."""
    if not isinstance(exc, requests.HTTPError):
        return False
    response = getattr(exc, "response", None)
    status = getattr(response, "status_code", None)
    if isinstance(status, int):
        return status in Constants.TRANSIENT_STATUS_CODES
    message = str(exc)
    return any(str(code) in message for code in Constants.TRANSIENT_STATUS_CODES)


def classify_response(response: requests.Response) -> Tuple[AttemptOutcome, Optional[requests.HTTPError]]:
    """Classify a completed response, turning error statuses into ``HTTPError``."""
    if response.status_code == 429:
        return AttemptOutcome.THROTTLED, None
    try:
        response.raise_for_status()
    except requests.HTTPError as exc:
        return classify_exception(exc), exc
    return AttemptOutcome.SUCCESS, None


def classify_exception(exc: requests.RequestException) -> AttemptOutcome:
    if is_transient_error(exc):
        return AttemptOutcome.TRANSIENT_SERVER_ERROR
    return AttemptOutcome.FATAL_ERROR


def _wait(token: CancellationToken, seconds: int, operation: str) -> None:
    if token.wait(seconds):
        raise OperationCancelled(operation)


def execute_with_retry(
    send: Callable[[], requests.Response],
    *,
    operation: str,
    token: CancellationToken,
    policy: Optional[RetryPolicy] = None,
    log: Optional[logging.Logger] = None,
) -> requests.Response:
    """Run ``send`` until it succeeds, is cancelled, or the attempt limit is hit.

    Args:
        send: Performs one HTTP attempt and returns its response.
        operation: Human-readable description used in logs and errors.
        token: Cancellation signal, checked before each attempt, after each
            response and during every wait.
        policy: Attempt limit and backoff bases.
        log: Logger to report progress on.

    Returns:
        The successful response.

    Raises:
        ThrottlingExceededError: Still throttled on the last allowed attempt.
        OperationCancelled: Cancellation was requested.
        requests.RequestException: Transient error on the last attempt, or
            any non-retryable failure.
    """
    policy = policy or RetryPolicy.from_constants()
    log = log or logger
    max_retries = max(1, policy.max_retries)
    attempt = 0

    while True:
        attempt += 1
        error: Optional[requests.RequestException] = None
        response: Optional[requests.Response] = None

        if token.is_cancelled:
            outcome = AttemptOutcome.CANCELED
        else:
            try:
                response = send()
                outcome, error = classify_response(response)
            except requests.RequestException as exc:
                outcome, error = classify_exception(exc), exc
            if token.is_cancelled:
                outcome = AttemptOutcome.CANCELED

        if is_debug_enabled(log):
            log.debug(
                "Attempt classified",
                extra=extra_context(
                    event="retry_attempt",
                    component="retry",
                    action=operation,
                    outcome=outcome.value,
                    attempt=attempt,
                    max_attempts=max_retries,
                    status_code=getattr(response, "status_code", None),
                ),
            )

        if outcome is AttemptOutcome.SUCCESS:
            return response  # type: ignore[return-value]

        if outcome is AttemptOutcome.CANCELED:
            log.warning("The %s was canceled by user.", operation)
            raise OperationCancelled(operation)

        try:
            if outcome is AttemptOutcome.THROTTLED:
                if attempt >= max_retries:
                    log.error(
                        "Maximum retry attempts (%d) reached after being throttled by the NuGet API during %s.",
                        max_retries,
                        operation,
                    )
                    raise ThrottlingExceededError(operation, max_retries)
                retry_after = response.headers.get("Retry-After") if response is not None else None
                seconds, hinted = policy.throttle_wait(attempt, retry_after)
                if hinted:
                    log.warning(
                        "Request throttled by NuGet API during %s. Waiting for %d seconds "
                        "before retry attempt %d of %d.",
                        operation, seconds, attempt + 1, max_retries,
                    )
                else:
                    log.warning(
                        "Request throttled by NuGet API %s Retry-After value during %s. "
                        "Using default wait of %d seconds before retry attempt %d of %d.",
                        "with invalid" if retry_after is not None else "without",
                        operation, seconds, attempt + 1, max_retries,
                    )
                _wait(token, seconds, operation)
                continue

            if outcome is AttemptOutcome.TRANSIENT_SERVER_ERROR and attempt < max_retries:
                seconds = policy.transient_wait(attempt)
                log.warning(
                    "Server error occurred: %s. Retrying in %d seconds. Attempt %d of %d.",
                    error, seconds, attempt + 1, max_retries,
                )
                _wait(token, seconds, operation)
                continue
        except OperationCancelled:
            log.warning("The %s was canceled by user.", operation)
            raise

        log.error(
            "Failed to complete %s after %d attempt(s). Error: %s",
            operation, attempt, error,
        )
        if error is None:
            raise NuGetApiError(f"Failed to complete {operation}")
        raise error
