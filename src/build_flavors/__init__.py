"""
Build Flavors - environment-specific build variants for multi-platform apps.

A build declares several named flavors (development, production, ...), selects
exactly one of them from a single input, and exposes only that flavor's
settings and assets to application code.
"""

__version__ = "0.1.0"

from build_flavors.errors import FlavorError, MissingSettingError, UnknownFlavorError
from build_flavors.flavors.base import Flavor, FlavorSettings, FlavorProject
from build_flavors.flavors.registry import FlavorRegistry
from build_flavors.selection.selector import FlavorSelector, resolve_flavor
from build_flavors.runtime.accessor import ResolvedConfig
from build_flavors.engine.build_engine import BuildEngine

__all__ = [
    "Flavor",
    "FlavorSettings",
    "FlavorProject",
    "FlavorRegistry",
    "FlavorSelector",
    "resolve_flavor",
    "ResolvedConfig",
    "BuildEngine",
    "FlavorError",
    "MissingSettingError",
    "UnknownFlavorError",
]
