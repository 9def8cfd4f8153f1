"""Tests for NuGet client functionality."""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from constants import Constants
from registry.nuget.client import NuGetClient

SERVICE_INDEX = {
    "version": "3.0.0",
    "resources": [
        {
            "@id": "https://api.nuget.org/v3/registration5-gz-semver2/",
            "@type": "RegistrationsBaseUrl/3.6.0"
        },
        {
            "@id": "https://api.nuget.org/v3-flatcontainer/",
            "@type": "PackageBaseAddress/3.0.0"
        }
    ]
}


def _response(status_code, payload=None, text=None):
    res = MagicMock()
    res.status_code = status_code
    res.text = text if text is not None else json.dumps(payload or {})
    return res


class TestPackageBaseAddress:
    """Test flat container discovery from the service index."""

    @patch('registry.nuget.client.nuget_pkg.safe_get')
    def test_uses_advertised_base_address(self, mock_safe_get):
        """Test base address taken from the PackageBaseAddress resource."""
        index = {"resources": [{"@id": "https://mirror.example/flat", "@type": "PackageBaseAddress/3.0.0"}]}
        mock_safe_get.return_value = _response(200, index)

        client = NuGetClient(MagicMock())

        assert client.get_package_base_address() == "https://mirror.example/flat/"

    @patch('registry.nuget.client.nuget_pkg.safe_get')
    def test_falls_back_when_index_unavailable(self, mock_safe_get):
        """Test the well-known flat container URL is used when the index fails."""
        mock_safe_get.return_value = _response(503, text="")

        client = NuGetClient(MagicMock())

        assert client.get_package_base_address() == Constants.REGISTRY_URL_NUGET_FLATCONTAINER

    @patch('registry.nuget.client.nuget_pkg.safe_get')
    def test_falls_back_when_resource_missing(self, mock_safe_get):
        """Test fallback when no PackageBaseAddress resource is advertised."""
        mock_safe_get.return_value = _response(200, {"resources": []})

        client = NuGetClient(MagicMock())

        assert client.get_package_base_address() == Constants.REGISTRY_URL_NUGET_FLATCONTAINER

    @patch('registry.nuget.client.nuget_pkg.safe_get')
    def test_versions_url_lowercases_id(self, mock_safe_get):
        """Test package ids are lowercased in the flat container URL."""
        mock_safe_get.return_value = _response(200, SERVICE_INDEX)

        url = NuGetClient(MagicMock()).versions_url("Newtonsoft.Json")

        assert url == "https://api.nuget.org/v3-flatcontainer/newtonsoft.json/index.json"


class TestFetchVersions:
    """Test version listing."""

    @patch('registry.nuget.client.nuget_pkg.safe_get')
    def test_returns_versions(self, mock_safe_get):
        """Test all versions are returned in registry order."""
        mock_safe_get.side_effect = [
            _response(200, SERVICE_INDEX),
            _response(200, {"versions": ["1.0.0", "1.5.0", "2.0.0-beta"]}),
        ]
        session = MagicMock()

        versions = NuGetClient(session).fetch_versions("TestPackage")

        assert versions == ["1.0.0", "1.5.0", "2.0.0-beta"]
        first_call, second_call = mock_safe_get.call_args_list
        assert first_call.args == (session, Constants.REGISTRY_URL_NUGET_V3)
        assert second_call.args[1].endswith("/testpackage/index.json")

    @patch('registry.nuget.client.nuget_pkg.safe_get')
    def test_not_found_returns_empty(self, mock_safe_get, caplog):
        """Test a 404 is reported as no versions."""
        mock_safe_get.side_effect = [_response(200, SERVICE_INDEX), _response(404, text="")]

        versions = NuGetClient(MagicMock()).fetch_versions("Missing.Package")

        assert versions == []
        assert "was not found" in caplog.text

    @patch('registry.nuget.client.nuget_pkg.safe_get')
    def test_server_error_returns_empty(self, mock_safe_get):
        """Test non-200 statuses are reported as no versions."""
        mock_safe_get.side_effect = [_response(200, SERVICE_INDEX), _response(500, text="")]

        assert NuGetClient(MagicMock()).fetch_versions("TestPackage") == []

    @patch('registry.nuget.client.nuget_pkg.safe_get')
    def test_invalid_json_returns_empty(self, mock_safe_get):
        """Test malformed listings are handled."""
        mock_safe_get.side_effect = [_response(200, SERVICE_INDEX), _response(200, text="<html>bad</html>")]

        assert NuGetClient(MagicMock()).fetch_versions("TestPackage") == []

    @patch('registry.nuget.client.nuget_pkg.safe_get')
    def test_ignores_non_string_entries(self, mock_safe_get):
        """Test junk entries in the version array are dropped."""
        mock_safe_get.side_effect = [
            _response(200, SERVICE_INDEX),
            _response(200, {"versions": ["1.0.0", None, 3, ""]}),
        ]

        assert NuGetClient(MagicMock()).fetch_versions("TestPackage") == ["1.0.0"]


class TestSafeGet:
    """Test shared GET error handling."""

    def test_connection_error_exits(self):
        """Test connection failures exit with the connection error code."""
        from common.http_client import safe_get
        from constants import ExitCodes

        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("unreachable")

        with pytest.raises(SystemExit) as excinfo:
            safe_get(session, "https://api.nuget.org/v3/index.json", context="nuget")

        assert excinfo.value.code == ExitCodes.CONNECTION_ERROR.value

    def test_passes_timeout(self):
        """Test the configured timeout is applied."""
        from common.http_client import safe_get

        session = MagicMock()
        safe_get(session, "https://api.nuget.org/v3/index.json", context="nuget")

        assert session.get.call_args.kwargs["timeout"] == Constants.REQUEST_TIMEOUT

    def test_build_session_sets_api_key_header(self):
        """Test the API key travels in the X-NuGet-ApiKey header."""
        from common.http_client import build_session

        session = build_session("secret-key")

        assert session.headers[Constants.API_KEY_HEADER] == "secret-key"
        session.close()
