"""Selection module - reads the selection input and resolves it to one flavor."""

from build_flavors.selection.selector import FlavorSelector, SelectionState, resolve_flavor
from build_flavors.selection.settings import SelectionSettings, read_selection

__all__ = [
    "FlavorSelector",
    "SelectionState",
    "SelectionSettings",
    "read_selection",
    "resolve_flavor",
]
