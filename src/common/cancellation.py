"""Cooperative cancellation shared by the retry loop and the command handlers."""
from __future__ import annotations

import signal
import threading

from common.errors import OperationCancelled


class CancellationToken:
    """Thin wrapper over ``threading.Event`` used as a cancellation signal.

    Waiting goes through :meth:`wait` so a cancellation request cuts a
    backoff sleep short instead of letting it run to completion.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    def wait(self, seconds: float) -> bool:
        """Block for up to ``seconds``; return True if cancelled meanwhile."""
        if seconds <= 0:
            return self.is_cancelled
        return self._event.wait(min(seconds, threading.TIMEOUT_MAX))

    def raise_if_cancelled(self, operation: str = "operation") -> None:
        if self.is_cancelled:
            raise OperationCancelled(operation)


def install_signal_handlers(token: CancellationToken) -> None:
    """Route SIGINT/SIGTERM to ``token.cancel``.

    Only the main thread may install handlers; elsewhere this is a no-op.
    """
    if threading.current_thread() is not threading.main_thread():
        return

    def _handler(signum, _frame):  # pylint: disable=unused-argument
        token.cancel()

    signal.signal(signal.SIGINT, _handler)
    if hasattr(signal, "SIGTERM"):
        signal.signal(signal.SIGTERM, _handler)
