"""Validated option structs handed from the CLI to the command handlers."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Sequence, Tuple


@dataclass(frozen=True)
class UnlistOptions:
    """Options for the ``unlist`` command.

    Without ``force`` the command runs in dry-run mode and changes nothing.
    """
    api_key: str
    package_names: Tuple[str, ...] = field(default_factory=tuple)
    force: bool = False


@dataclass(frozen=True)
class DeprecationOptions:
    """Options for the ``deprecate`` command.

    When ``deprecate_all_except_latest`` is set, ``versions`` is replaced by
    the resolver's output through :meth:`with_versions` before execution.
    """
    api_key: str
    package_id: str
    versions: Tuple[str, ...] = field(default_factory=tuple)
    message: str = ""
    deprecate_all_except_latest: bool = False
    what_if: bool = False

    def with_versions(self, versions: Sequence[str]) -> "DeprecationOptions":
        return replace(self, versions=tuple(versions))
