"""Sample application code consuming the resolved flavor."""

import platform as _platform
from dataclasses import dataclass

from build_flavors.runtime.accessor import ResolvedConfig


@dataclass(frozen=True)
class Platform:
    """The host platform the application runs on."""

    name: str


def get_platform() -> Platform:
    return Platform(name=f"Python {_platform.python_version()} on {_platform.system() or 'unknown'}")


class Greeting:
    """Greets the user from the host platform, titled by the flavor's display name."""

    def __init__(self, config: ResolvedConfig, platform: Platform | None = None):
        self.config = config
        self.platform = platform or get_platform()

    @property
    def title(self) -> str:
        return self.config.display_name

    def greet(self) -> str:
        return f"Hello, {self.platform.name}!"
