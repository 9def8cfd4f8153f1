"""Shared fixtures: real ``requests.Response`` objects and a non-sleeping cancellation token."""

import pytest
import requests

from common.cancellation import CancellationToken
from constants import Constants

_REASONS = {
    200: "OK",
    204: "No Content",
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    429: "Too Many Requests",
    500: "Internal Server Error",
    502: "Bad Gateway",
    503: "Service Unavailable",
    504: "Gateway Timeout",
}


class RecordingToken(CancellationToken):
    """Cancellation token that records requested waits instead of sleeping."""

    def __init__(self, cancel_on_wait=False):
        super().__init__()
        self.waits = []
        self.cancel_on_wait = cancel_on_wait

    def wait(self, seconds):
        self.waits.append(seconds)
        if self.cancel_on_wait:
            self.cancel()
        return self.is_cancelled


def _make_response(status_code, headers=None, text="", url=None):
    res = requests.Response()
    res.status_code = status_code
    res.reason = _REASONS.get(status_code, "")
    res.url = url or f"{Constants.GALLERY_URL_NUGET_PACKAGE}TestPackage/deprecations"
    res.encoding = "utf-8"
    res._content = text.encode("utf-8")  # pylint: disable=protected-access
    res.headers.update(headers or {})
    return res


@pytest.fixture
def make_response():
    """Factory building real responses so raise_for_status behaves as in production."""
    return _make_response


@pytest.fixture
def token():
    return RecordingToken()


@pytest.fixture
def cancelling_token():
    return RecordingToken(cancel_on_wait=True)


@pytest.fixture(autouse=True)
def _restore_constants():
    """Config overrides write onto Constants; undo them after each test."""
    saved = {k: v for k, v in vars(Constants).items() if k.isupper()}
    yield
    for key, value in saved.items():
        setattr(Constants, key, value)
