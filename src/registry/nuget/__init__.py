"""NuGet registry package.

This package provides the NuGet.org access used by the commands:
- client.py: version listing through the V3 service index and flat container
- mutations.py: unlist (DELETE) and deprecate (PUT) gallery calls
- retry.py: retry/backoff loop for throttled and transiently failing calls
"""

# Patch points exposed for tests (e.g., monkeypatch in tests)
from common.http_client import safe_get  # noqa: F401

# Public API re-exports
from .client import NuGetClient  # noqa: F401
from .mutations import MutationExecutor, build_deprecation_body  # noqa: F401
from .retry import AttemptOutcome, RetryPolicy, execute_with_retry  # noqa: F401

__all__ = [
    "NuGetClient",
    "MutationExecutor",
    "build_deprecation_body",
    "AttemptOutcome",
    "RetryPolicy",
    "execute_with_retry",
    # Patch points for tests
    "safe_get",
]
