"""Error types raised by the flavor selection machinery.

None of these are meant to be recovered from at runtime. They signal either
a bad selection input or a configuration-authoring defect and abort the build.
"""

from typing import Iterable


class FlavorError(Exception):
    """Base class for all flavor errors."""


class UnknownFlavorError(FlavorError, LookupError):
    """The selection names no registered flavor."""

    def __init__(self, name: str | None, available: Iterable[str]):
        self.name = name
        self.available = sorted(available)
        valid = ", ".join(self.available) if self.available else "<none>"
        if name is None:
            message = f"No flavor selected and no default flavor declared. Valid flavors: {valid}"
        else:
            message = f"Unknown flavor '{name}'. Valid flavors: {valid}"
        super().__init__(message)


class MissingSettingError(FlavorError, LookupError):
    """A setting key was read that the active flavor does not define."""

    def __init__(self, key: str, flavor: str):
        self.key = key
        self.flavor = flavor
        super().__init__(f"Setting '{key}' is not defined for flavor '{flavor}'")

    def __str__(self) -> str:
        return self.args[0]


class DuplicateFlavorError(FlavorError, ValueError):
    """A flavor with the same name is already registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Flavor '{name}' already exists")


class InconsistentSettingsError(FlavorError, ValueError):
    """A flavor declares a different key set than the rest of the registry."""

    def __init__(self, name: str, missing: Iterable[str], extra: Iterable[str]):
        self.name = name
        self.missing = sorted(missing)
        self.extra = sorted(extra)
        parts = []
        if self.missing:
            parts.append(f"missing keys: {', '.join(self.missing)}")
        if self.extra:
            parts.append(f"extra keys: {', '.join(self.extra)}")
        super().__init__(
            f"Flavor '{name}' settings differ from the registered flavors ({'; '.join(parts)})"
        )


class RegistryClosedError(FlavorError):
    """Registration was attempted after the registry was closed."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Cannot register flavor '{name}': registry is closed")


class SelectionConflictError(FlavorError):
    """A second, different flavor was selected within one build."""

    def __init__(self, active: str, requested: str | None):
        self.active = active
        self.requested = requested
        super().__init__(
            f"Flavor '{active}' is already active for this build; cannot select '{requested}'"
        )


class SelectionStateError(FlavorError):
    """The resolved configuration was requested before resolution."""


class AssetNotFoundError(FlavorError, FileNotFoundError):
    """A declared flavor asset does not exist on disk."""

    def __init__(self, flavor: str, path: str):
        self.flavor = flavor
        self.path = path
        super().__init__(f"Asset for flavor '{flavor}' not found: {path}")

    def __str__(self) -> str:
        return self.args[0]
