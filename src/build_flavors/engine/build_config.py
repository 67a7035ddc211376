"""Writes the generated settings module for the active flavor."""

import math
from pathlib import Path

from build_flavors import __version__
from build_flavors.runtime.accessor import ResolvedConfig
from build_flavors.utils.helpers import to_constant_name

DEFAULT_MODULE_NAME = "build_config.py"
RESERVED_CONSTANT = "FLAVOR"


class BuildConfigWriter:
    """Renders a ResolvedConfig as a Python module of constants.

    Only the active flavor's values are written, so the generated module is
    the single static accessor application code imports.
    """

    def render(self, config: ResolvedConfig) -> str:
        lines = [
            f'"""Build configuration for the \'{config.flavor}\' flavor.',
            "",
            f"Generated by build-flavors {__version__}. Do not edit.",
            '"""',
            "",
            f"FLAVOR = {config.flavor!r}",
        ]

        names: dict[str, str] = {}
        for key in config.keys():
            name = to_constant_name(key)
            if name == RESERVED_CONSTANT:
                raise ValueError(f"Setting '{key}' maps to the reserved constant {name}")
            if name in names:
                raise ValueError(
                    f"Settings '{names[name]}' and '{key}' both map to constant {name}"
                )
            names[name] = key
            value = config.get(key)
            if isinstance(value, float) and not math.isfinite(value):
                raise ValueError(f"Setting '{key}' has no literal form: {value}")
            lines.append(f"{name} = {value!r}")

        return "\n".join(lines) + "\n"

    def write(self, config: ResolvedConfig, path: Path | str) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(config), encoding="utf-8")
        return path
