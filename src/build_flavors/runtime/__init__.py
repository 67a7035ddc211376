"""Runtime module - what application code sees of the selected flavor."""

from build_flavors.runtime.accessor import ResolvedConfig
from build_flavors.runtime.greeting import Greeting, Platform, get_platform

__all__ = [
    "ResolvedConfig",
    "Greeting",
    "Platform",
    "get_platform",
]
