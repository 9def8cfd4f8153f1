"""Command handlers for the unlist and deprecate commands."""

from .base import NuGetCommandHandler
from .deprecate import DeprecateCommandHandler
from .unlist import UnlistCommandHandler

__all__ = [
    "NuGetCommandHandler",
    "DeprecateCommandHandler",
    "UnlistCommandHandler",
]
