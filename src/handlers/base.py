"""Shared plumbing for the NuGet command handlers."""
from __future__ import annotations

import logging
from typing import Callable, Generic, Optional, TypeVar

import requests

from common.cancellation import CancellationToken
from common.errors import NuGetApiError, OperationCancelled
from common.http_client import build_session
from common.logging_utils import extra_context, is_debug_enabled
from registry.nuget import MutationExecutor, NuGetClient, RetryPolicy
from versioning.resolvers import NuGetVersionResolver

O = TypeVar("O")


class NuGetCommandHandler(Generic[O]):
    """Runs one command for one API key.

    A handler owns a single ``requests.Session`` (carrying the API key) for
    its lifetime; the resolver and the executor share it.

    Args:
        options: Validated options for the command.
        logger: Logger threaded through the resolver and executor.
        token: Cancellation signal.
        policy: Retry policy for the executor.
        session_factory: Builds the session from the API key.
    """

    command_name = "command"

    def __init__(
        self,
        options: O,
        logger: Optional[logging.Logger] = None,
        token: Optional[CancellationToken] = None,
        policy: Optional[RetryPolicy] = None,
        session_factory: Callable[[str], requests.Session] = build_session,
    ):
        if options is None:
            raise ValueError("options are required")
        self.options = options
        self.logger = logger or logging.getLogger(__name__)
        self.token = token or CancellationToken()
        self.policy = policy
        self.session_factory = session_factory

    def handle(self, resolver: NuGetVersionResolver, executor: MutationExecutor, options: O) -> None:
        raise NotImplementedError

    def try_handle(self) -> bool:
        """Run the command; return False if it failed.

        Cancellation is not a failure and propagates to the caller.
        """
        session = self.session_factory(getattr(self.options, "api_key", ""))
        try:
            client = NuGetClient(session, logger=self.logger)
            resolver = NuGetVersionResolver(client, logger=self.logger)
            executor = MutationExecutor(session, token=self.token, policy=self.policy, logger=self.logger)
            self.handle(resolver, executor, self.options)
            return True
        except OperationCancelled:
            raise
        except (NuGetApiError, requests.RequestException, ValueError) as exc:
            if is_debug_enabled(self.logger):
                self.logger.debug(
                    "Handler failed",
                    extra=extra_context(
                        event="function_exit",
                        component="handler",
                        action=self.command_name,
                        outcome="failure",
                        error=type(exc).__name__,
                    ),
                )
            return False
        finally:
            session.close()
