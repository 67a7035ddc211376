"""Flavor Selector - resolves the selection input to exactly one flavor.

At most one flavor is active per build. A selector instance represents one
build invocation and moves through UNRESOLVED -> RESOLVING -> RESOLVED, or
ends in FAILED. Both end states are terminal; a fresh build uses a fresh
selector.
"""

import logging
from enum import Enum

from build_flavors.errors import (
    FlavorError,
    SelectionConflictError,
    SelectionStateError,
    UnknownFlavorError,
)
from build_flavors.flavors.base import Flavor
from build_flavors.flavors.registry import FlavorRegistry
from build_flavors.runtime.accessor import ResolvedConfig

logger = logging.getLogger(__name__)


class SelectionState(str, Enum):
    """Lifecycle of a single build's selection."""

    UNRESOLVED = "unresolved"
    RESOLVING = "resolving"
    RESOLVED = "resolved"
    FAILED = "failed"


class FlavorSelector:
    """Selects the active flavor for one build."""

    def __init__(self, registry: FlavorRegistry):
        self._registry = registry
        self._state = SelectionState.UNRESOLVED
        self._selected_name: str | None = None
        self._flavor: Flavor | None = None
        self._config: ResolvedConfig | None = None
        self._error: FlavorError | None = None

    @property
    def state(self) -> SelectionState:
        return self._state

    def resolve(self, input_name: str | None = None, default: str | None = None) -> Flavor:
        """Resolve the selection input against the registry.

        Args:
            input_name: Externally supplied flavor name, used verbatim
            default: Fallback name when input_name is absent; the registry's
                default is used when this is also None

        Returns:
            The active flavor

        Raises:
            UnknownFlavorError: If the effective name is not registered
            SelectionConflictError: If a different flavor is already active
        """
        name = self._effective_name(input_name, default)

        if self._state == SelectionState.RESOLVED:
            if name != self._selected_name:
                raise SelectionConflictError(self._selected_name, name)
            return self._flavor

        if self._state == SelectionState.FAILED:
            raise self._error

        self._state = SelectionState.RESOLVING
        self._registry.close()
        try:
            if name is None:
                raise UnknownFlavorError(None, self._registry.names())
            flavor = self._registry.lookup(name)
        except FlavorError as e:
            self._state = SelectionState.FAILED
            self._error = e
            logger.debug(f"Flavor selection failed: {e}")
            raise

        self._selected_name = name
        self._flavor = flavor
        self._config = ResolvedConfig.from_flavor(flavor)
        self._state = SelectionState.RESOLVED
        logger.info(
            f"The current build flavor is set to '{flavor.name}' "
            f"with suffix set to '{flavor.settings.identifier_suffix}'."
        )
        return flavor

    @property
    def config(self) -> ResolvedConfig:
        """The resolved configuration to inject into consumers."""
        if self._config is None:
            raise SelectionStateError(
                f"No flavor has been resolved (state: {self._state.value})"
            )
        return self._config

    def _effective_name(self, input_name: str | None, default: str | None) -> str | None:
        if input_name is not None:
            return input_name
        if default is not None:
            return default
        return self._registry.default_name


def resolve_flavor(
    registry: FlavorRegistry,
    input_name: str | None = None,
    default: str | None = None,
) -> Flavor:
    """Resolve a selection in one step, without keeping build state."""
    return FlavorSelector(registry).resolve(input_name, default)
