"""Read-only settings surface handed to application code.

A ResolvedConfig only knows the active flavor. It never references the
registry or any other flavor, so consumers cannot observe a setting that
belongs to an unselected environment.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from build_flavors.errors import MissingSettingError
from build_flavors.flavors.base import DISPLAY_NAME, IDENTIFIER_SUFFIX, Flavor, FlavorAsset


@dataclass(frozen=True)
class ResolvedConfig:
    """The active flavor's settings."""

    flavor: str
    values: Mapping[str, Any]
    assets: tuple[FlavorAsset, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.values, MappingProxyType):
            object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    @classmethod
    def from_flavor(cls, flavor: Flavor) -> "ResolvedConfig":
        return cls(
            flavor=flavor.name,
            values=flavor.settings.to_dict(),
            assets=flavor.assets,
        )

    def get(self, key: str) -> Any:
        """Read a setting by key.

        Raises:
            MissingSettingError: If the active flavor does not define the key
        """
        try:
            return self.values[key]
        except KeyError:
            raise MissingSettingError(key, self.flavor) from None

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def keys(self) -> list[str]:
        return list(self.values)

    def as_dict(self) -> dict[str, Any]:
        return dict(self.values)

    @property
    def display_name(self) -> str:
        return self.get(DISPLAY_NAME)

    @property
    def identifier_suffix(self) -> str:
        return self.get(IDENTIFIER_SUFFIX)

    def asset_targets(self) -> list[str]:
        return [asset.target_name for asset in self.assets]
