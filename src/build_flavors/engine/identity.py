"""Application identity derived from the resolved flavor.

Packaging pipelines only ever read ``identifierSuffix`` and ``displayName``;
everything here is computed from those two settings and the project's base
application identifier.
"""

from dataclasses import dataclass

from build_flavors.runtime.accessor import ResolvedConfig

DEFAULT_ACTIVITY = "MainActivity"


@dataclass(frozen=True)
class AppIdentity:
    """Identity of the packaged application for the active flavor."""

    base_id: str
    suffix: str
    display_name: str

    @classmethod
    def from_config(cls, base_id: str, config: ResolvedConfig) -> "AppIdentity":
        return cls(
            base_id=base_id,
            suffix=config.identifier_suffix,
            display_name=config.display_name,
        )

    @property
    def application_id(self) -> str:
        return f"{self.base_id}{self.suffix}"

    def launch_command(self, activity: str = DEFAULT_ACTIVITY) -> list[str]:
        """Command that starts the installed app on a connected device.

        The activity class lives in the base package regardless of the
        installed application id.
        """
        if not self.base_id:
            raise ValueError("Cannot build a launch command without an application_id")
        return [
            "adb", "shell", "am", "start", "-n",
            f"{self.application_id}/{self.base_id}.{activity}",
        ]

    def to_dict(self) -> dict[str, str]:
        return {
            "application_id": self.application_id,
            "identifier_suffix": self.suffix,
            "display_name": self.display_name,
        }
