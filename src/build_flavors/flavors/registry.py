"""Flavor Registry - the closed set of flavors a build may select from."""

import logging
from pathlib import Path
from typing import Iterable, Iterator

from build_flavors.errors import (
    DuplicateFlavorError,
    InconsistentSettingsError,
    RegistryClosedError,
    UnknownFlavorError,
)
from build_flavors.flavors.base import Flavor, FlavorAsset, FlavorSettings

logger = logging.getLogger(__name__)


class FlavorRegistry:
    """Registry of the flavors declared for a build.

    The registry ensures:
    - No duplicate flavor names
    - Every flavor declares the same settings keys
    - No registration once the build configuration is finished
    """

    def __init__(self, default: str | None = None):
        self._flavors: dict[str, Flavor] = {}
        self._default = default
        self._keys: frozenset[str] | None = None
        self._closed = False

    def register(
        self,
        name: str,
        settings: FlavorSettings | dict,
        assets: Iterable[FlavorAsset | Path | str] = (),
    ) -> Flavor:
        """Register a flavor from its parts.

        Args:
            name: The flavor name
            settings: Settings model or mapping keyed by setting name
            assets: Asset models or paths

        Returns:
            The registered flavor
        """
        if not isinstance(settings, FlavorSettings):
            settings = FlavorSettings.model_validate(settings)

        flavor_assets = tuple(
            a if isinstance(a, FlavorAsset) else FlavorAsset(source=Path(a))
            for a in assets
        )
        flavor = Flavor(name=name, settings=settings, assets=flavor_assets)
        self.add(flavor)
        return flavor

    def add(self, flavor: Flavor) -> None:
        """Register a prebuilt flavor.

        Raises:
            RegistryClosedError: If the registry has been closed
            DuplicateFlavorError: If the name is already registered
            InconsistentSettingsError: If the settings keys differ from the
                flavors already registered
        """
        if self._closed:
            raise RegistryClosedError(flavor.name)

        if flavor.name in self._flavors:
            raise DuplicateFlavorError(flavor.name)

        keys = flavor.setting_keys()
        if self._keys is None:
            self._keys = keys
        elif keys != self._keys:
            raise InconsistentSettingsError(
                flavor.name,
                missing=self._keys - keys,
                extra=keys - self._keys,
            )

        self._flavors[flavor.name] = flavor
        logger.debug(f"Registered flavor: {flavor.name}")

    def lookup(self, name: str) -> Flavor:
        """Get a flavor by exact name.

        Raises:
            UnknownFlavorError: If no flavor has that name
        """
        flavor = self._flavors.get(name)
        if flavor is None:
            raise UnknownFlavorError(name, self._flavors.keys())
        return flavor

    def get(self, name: str) -> Flavor | None:
        return self._flavors.get(name)

    def names(self) -> list[str]:
        """List flavor names in declaration order."""
        return list(self._flavors.keys())

    @property
    def default_name(self) -> str | None:
        """The designated default, or the first declared flavor."""
        if self._default is not None:
            return self._default
        return next(iter(self._flavors), None)

    @property
    def setting_keys(self) -> frozenset[str]:
        return self._keys or frozenset()

    def close(self) -> None:
        """Finish build configuration. No flavor can be registered afterwards."""
        if not self._closed:
            self._closed = True
            logger.debug(f"Flavor registry closed with: {', '.join(self._flavors) or 'none'}")

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._flavors)

    def __iter__(self) -> Iterator[Flavor]:
        return iter(list(self._flavors.values()))

    def __contains__(self, name: object) -> bool:
        return name in self._flavors
