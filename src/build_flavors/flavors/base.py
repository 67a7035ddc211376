"""Base classes for Flavors - the Profile Layer.

A flavor is a named, immutable bundle of environment-specific settings and
assets (e.g. development vs. production). Every flavor in a project shares the
same settings shape so that no key can silently exist in one environment and
not in another.
"""

from pathlib import Path
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

SettingValue = Union[str, int, float, bool]

DISPLAY_NAME = "displayName"
IDENTIFIER_SUFFIX = "identifierSuffix"


class FlavorSettings(BaseModel):
    """Settings declared by a flavor.

    ``displayName`` and ``identifierSuffix`` are required by the packaging
    pipelines. Any other scalar key (backend endpoints, feature switches) may
    be declared alongside them and is kept as an extra field.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    display_name: str = Field(..., alias=DISPLAY_NAME, description="Application display name")
    identifier_suffix: str = Field(
        default="",
        alias=IDENTIFIER_SUFFIX,
        description="Suffix appended to the application identifier",
    )

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("displayName must not be empty")
        return v

    @model_validator(mode="after")
    def validate_extra_values(self) -> "FlavorSettings":
        for key, value in (self.model_extra or {}).items():
            if not isinstance(value, (str, int, float, bool)):
                raise ValueError(
                    f"Setting '{key}' must be a string, number or boolean, got {type(value).__name__}"
                )
        return self

    def extra_values(self) -> dict[str, Any]:
        """Settings declared beyond the required ones."""
        return dict(self.model_extra or {})

    def to_dict(self) -> dict[str, SettingValue]:
        """All settings keyed by their external names."""
        values: dict[str, SettingValue] = {
            DISPLAY_NAME: self.display_name,
            IDENTIFIER_SUFFIX: self.identifier_suffix,
        }
        values.update(self.extra_values())
        return values

    def keys(self) -> frozenset[str]:
        return frozenset(self.to_dict())


class FlavorAsset(BaseModel):
    """An opaque per-flavor resource file, such as a backend credential file."""

    model_config = ConfigDict(frozen=True)

    source: Path = Field(..., description="Path to the asset file")
    target: str = Field(default="", description="File name the asset is staged as")

    @field_validator("target")
    @classmethod
    def validate_target(cls, v: str) -> str:
        if "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError(f"Asset target must be a plain file name: {v}")
        return v

    @property
    def target_name(self) -> str:
        return self.target or self.source.name

    def resolve_source(self, base_dir: Path | None = None) -> Path:
        if base_dir is None or self.source.is_absolute():
            return self.source
        return base_dir / self.source


class Flavor(BaseModel):
    """A named, immutable environment configuration."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Unique flavor name")
    settings: FlavorSettings = Field(..., description="Environment settings")
    assets: tuple[FlavorAsset, ...] = Field(
        default_factory=tuple,
        description="Environment-specific resource files"
    )
    description: str = Field(default="", description="Flavor description")

    def setting_keys(self) -> frozenset[str]:
        return self.settings.keys()

    def asset_targets(self) -> list[str]:
        return [asset.target_name for asset in self.assets]


class FlavorProject(BaseModel):
    """A flavors document: every flavor a build may choose from."""

    application_id: str = Field(default="", description="Base application identifier")
    default: str | None = Field(default=None, description="Designated default flavor")
    flavors: list[Flavor] = Field(default_factory=list, description="Declared flavors")
    base_dir: Path | None = Field(
        default=None,
        description="Directory relative asset paths are resolved against",
        exclude=True,
    )

    def flavor_names(self) -> list[str]:
        return [f.name for f in self.flavors]

    def get_flavor(self, name: str) -> Flavor | None:
        for flavor in self.flavors:
            if flavor.name == name:
                return flavor
        return None

    def build_registry(self) -> "FlavorRegistry":
        """Populate and close a registry from this project's flavors."""
        from build_flavors.flavors.registry import FlavorRegistry

        registry = FlavorRegistry(default=self.default)
        for flavor in self.flavors:
            registry.add(flavor)
        registry.close()
        return registry


class FlavorBuilder:
    """Fluent builder for creating Flavors."""

    def __init__(self, name: str):
        self._name = name
        self._description = ""
        self._display_name = ""
        self._identifier_suffix = ""
        self._values: dict[str, SettingValue] = {}
        self._assets: list[FlavorAsset] = []

    def description(self, description: str) -> "FlavorBuilder":
        self._description = description
        return self

    def display_name(self, display_name: str) -> "FlavorBuilder":
        self._display_name = display_name
        return self

    def identifier_suffix(self, suffix: str) -> "FlavorBuilder":
        self._identifier_suffix = suffix
        return self

    def setting(self, key: str, value: SettingValue) -> "FlavorBuilder":
        self._values[key] = value
        return self

    def asset(self, source: Path | str, target: str = "") -> "FlavorBuilder":
        self._assets.append(FlavorAsset(source=Path(source), target=target))
        return self

    def build(self) -> Flavor:
        settings = FlavorSettings(
            **{
                DISPLAY_NAME: self._display_name,
                IDENTIFIER_SUFFIX: self._identifier_suffix,
                **self._values,
            }
        )
        return Flavor(
            name=self._name,
            description=self._description,
            settings=settings,
            assets=tuple(self._assets),
        )
