"""Utility functions for build-flavors."""

from build_flavors.utils.helpers import parse_properties, to_constant_name
from build_flavors.utils.log import configure_logging

__all__ = [
    "configure_logging",
    "parse_properties",
    "to_constant_name",
]
