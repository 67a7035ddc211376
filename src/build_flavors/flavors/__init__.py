"""Flavors module - the Profile Layer.

Flavors are named, immutable environment configurations that specify:
- Display name and identifier suffix for packaging
- Backend endpoints and other environment settings
- Environment-specific assets such as credential files

A build selects exactly one of them.
"""

from build_flavors.flavors.base import (
    Flavor,
    FlavorAsset,
    FlavorBuilder,
    FlavorProject,
    FlavorSettings,
)
from build_flavors.flavors.loader import FlavorLoader, load_project, load_registry
from build_flavors.flavors.registry import FlavorRegistry

__all__ = [
    "Flavor",
    "FlavorAsset",
    "FlavorBuilder",
    "FlavorProject",
    "FlavorSettings",
    "FlavorLoader",
    "FlavorRegistry",
    "load_project",
    "load_registry",
]
