"""Exception types raised by the NuGet client and command handlers."""
from __future__ import annotations


class NuGetApiError(Exception):
    """Base class for failures talking to the NuGet gallery API."""


class ThrottlingExceededError(NuGetApiError):
    """Raised when the gallery keeps answering 429 after every allowed attempt."""

    def __init__(self, operation: str, max_retries: int):
        self.operation = operation
        self.max_retries = max_retries
        super().__init__(
            f"Failed to complete {operation} after {max_retries} retry attempts "
            "due to API throttling."
        )


class OperationCancelled(NuGetApiError):
    """Raised when a cancellation request is observed mid-operation."""

    def __init__(self, operation: str = "operation"):
        self.operation = operation
        super().__init__(f"{operation} was cancelled")
