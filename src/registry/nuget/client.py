"""NuGet registry client: list published versions via the V3 flat container."""
from __future__ import annotations

import json
import logging
import urllib.parse
from typing import Any, Dict, List, Optional

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

import registry.nuget as nuget_pkg

logger = logging.getLogger(__name__)

# Shared HTTP JSON headers for this module
HEADERS_JSON = {"Accept": "application/json"}


class NuGetClient:
    """Read-only access to the NuGet V3 API.

    Args:
        session: HTTP session shared with the mutation calls of one handler.
        logger: Logger for this client; defaults to the module logger.
    """

    def __init__(self, session: requests.Session, logger: Optional[logging.Logger] = None):
        if session is None:
            raise ValueError("session is required")
        self.session = session
        self.logger = logger or logging.getLogger(__name__)

    def _fetch_service_index(self) -> Optional[Dict[str, Any]]:
        """Fetch and parse the NuGet V3 service index.

        Returns:
            Service index dictionary or None if unavailable
        """
        url = Constants.REGISTRY_URL_NUGET_V3
        res = nuget_pkg.safe_get(self.session, url, context="nuget", headers=HEADERS_JSON)
        if res.status_code != 200:
            self.logger.debug("Service index returned HTTP %s", res.status_code)
            return None
        try:
            return json.loads(res.text)
        except json.JSONDecodeError:
            self.logger.debug("Service index is not valid JSON")
            return None

    def get_package_base_address(self) -> str:
        """Resolve the flat-container base URL, falling back to the well-known one."""
        service_index = self._fetch_service_index()
        if service_index:
            for resource in service_index.get("resources", []):
                if resource.get("@type") == Constants.PACKAGE_BASE_ADDRESS_TYPE:
                    base_url = resource.get("@id")
                    if base_url:
                        return base_url if base_url.endswith("/") else f"{base_url}/"
        return Constants.REGISTRY_URL_NUGET_FLATCONTAINER

    def versions_url(self, package_id: str) -> str:
        """Build the version-listing URL for a package id."""
        encoded_id = urllib.parse.quote(package_id.lower(), safe="")
        return f"{self.get_package_base_address()}{encoded_id}/index.json"

    def fetch_versions(self, package_id: str) -> List[str]:
        """Fetch every published version string of a package.

        Args:
            package_id: Package identifier

        Returns:
            List of version strings in registry order, empty if none were found
        """
        url = self.versions_url(package_id)
        res = nuget_pkg.safe_get(self.session, url, context="nuget", headers=HEADERS_JSON)
        if res.status_code == 404:
            self.logger.warning("Package %s was not found in the NuGet registry", package_id)
            return []
        if res.status_code != 200:
            self.logger.warning(
                "Listing versions of package %s failed with HTTP %s", package_id, res.status_code
            )
            return []
        try:
            data = json.loads(res.text)
        except json.JSONDecodeError:
            self.logger.warning("Version listing for package %s is not valid JSON", package_id)
            return []

        raw_versions = data.get("versions", []) if isinstance(data, dict) else []
        versions = [v for v in raw_versions if isinstance(v, str) and v]
        if is_debug_enabled(self.logger):
            self.logger.debug(
                "NuGet versions fetched",
                extra=extra_context(
                    event="package_found",
                    component="client",
                    action="fetch_versions",
                    outcome="success" if versions else "empty",
                    count=len(versions),
                    package_manager="nuget",
                    target=package_id,
                ),
            )
        return versions
