"""State-changing NuGet gallery calls: unlist (DELETE) and deprecate (PUT)."""
from __future__ import annotations

import json
import logging
import urllib.parse
from typing import Optional, Sequence

import requests

from constants import Constants
from common.cancellation import CancellationToken
from common.http_client import send_request

from .retry import RetryPolicy, execute_with_retry

logger = logging.getLogger(__name__)

HEADERS_JSON = {"Accept": "application/json", "Content-Type": "application/json"}


def build_deprecation_body(versions: Sequence[str], message: str) -> str:
    """Serialize the deprecation payload sent to the gallery."""
    return json.dumps(
        {
            "versions": list(versions),
            "isLegacy": True,
            "hasCriticalBugs": False,
            "isOther": True,
            "message": message,
        }
    )


class MutationExecutor:
    """Issues unlist and deprecate requests against the NuGet gallery.

    Args:
        session: Session carrying the ``X-NuGet-ApiKey`` header.
        token: Cancellation signal honoured by the deprecation retry loop.
        policy: Retry limits; defaults to the values on ``Constants``.
        logger: Logger for this executor; defaults to the module logger.
    """

    def __init__(
        self,
        session: requests.Session,
        token: Optional[CancellationToken] = None,
        policy: Optional[RetryPolicy] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if session is None:
            raise ValueError("session is required")
        self.session = session
        self.token = token or CancellationToken()
        self.policy = policy or RetryPolicy.from_constants()
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def package_url(package_id: str, *segments: str) -> str:
        parts = [urllib.parse.quote(package_id, safe="")]
        parts.extend(urllib.parse.quote(s, safe="") for s in segments)
        return Constants.GALLERY_URL_NUGET_PACKAGE + "/".join(parts)

    def delete_version(self, package_id: str, version: str) -> bool:
        """Unlist one version. Failures are logged and reported, never raised.

        Returns:
            True when the gallery answered 200 or 204.
        """
        package = f"{package_id} version {version}"
        self.logger.info("Deleting package %s", package)
        try:
            res = send_request(
                self.session,
                "DELETE",
                self.package_url(package_id, version),
                context=f"unlist {package}",
            )
        except requests.RequestException as exc:
            self.logger.error("Removal failed for package %s: %s", package, exc)
            return False

        if res.status_code in (200, 204):
            self.logger.info("Package %s was removed successfully", package)
            return True
        self.logger.warning("Removal failed for package %s with code %s", package, res.status_code)
        return False

    def deprecate_versions(self, package_id: str, versions: Sequence[str], message: str) -> None:
        """Deprecate ``versions`` of a package in a single request, retrying as needed.

        Raises:
            ValueError: If ``versions`` is empty.
            ThrottlingExceededError: Throttled on every allowed attempt.
            OperationCancelled: Cancellation was requested.
            requests.RequestException: Any other failure, after logging.
        """
        if not versions:
            raise ValueError("at least one version is required")
        versions_string = ",".join(versions)
        self.logger.info("Deprecating versions %s of package %s", versions_string, package_id)

        body = build_deprecation_body(versions, message)
        url = self.package_url(package_id, "deprecations")
        operation = f"deprecation of {package_id} versions {versions_string}"

        def _send() -> requests.Response:
            return send_request(
                self.session, "PUT", url, context=operation, data=body, headers=HEADERS_JSON
            )

        execute_with_retry(
            _send,
            operation=operation,
            token=self.token,
            policy=self.policy,
            log=self.logger,
        )
        self.logger.info("Successfully deprecated versions %s of package %s", versions_string, package_id)
