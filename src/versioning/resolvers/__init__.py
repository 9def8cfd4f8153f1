"""Version resolvers."""

from .nuget import NuGetVersionResolver, pick_latest

__all__ = [
    "NuGetVersionResolver",
    "pick_latest",
]
