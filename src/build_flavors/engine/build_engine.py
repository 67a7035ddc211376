"""Build Engine - runs one flavor build invocation.

The Build Engine orchestrates a build by:
- Resolving the selection input exactly once
- Checking the active flavor's assets before anything is written
- Writing the generated settings module
- Deriving the application identity for packaging
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from build_flavors.engine.assets import AssetStager
from build_flavors.engine.build_config import DEFAULT_MODULE_NAME, BuildConfigWriter
from build_flavors.engine.identity import AppIdentity
from build_flavors.flavors.base import FlavorProject
from build_flavors.runtime.accessor import ResolvedConfig
from build_flavors.selection.selector import FlavorSelector

logger = logging.getLogger(__name__)

RESOURCES_DIR = "resources"


@dataclass
class BuildResult:
    """Result of a build run."""

    config: ResolvedConfig
    identity: AppIdentity
    output_dir: Path | None = None
    module_path: Path | None = None
    staged_assets: list[Path] = field(default_factory=list)
    start_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    end_time: datetime | None = None

    @property
    def duration_seconds(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()

    def summary(self) -> dict[str, Any]:
        return {
            "flavor": self.config.flavor,
            "settings": self.config.as_dict(),
            "identity": self.identity.to_dict(),
            "output_dir": str(self.output_dir) if self.output_dir else None,
            "module": str(self.module_path) if self.module_path else None,
            "assets": [str(p) for p in self.staged_assets],
            "duration_seconds": self.duration_seconds,
        }


class BuildEngine:
    """Engine for a single build invocation.

    Each engine owns one FlavorSelector, so every consumer created through it
    receives the same resolved configuration.
    """

    def __init__(self, project: FlavorProject):
        self.project = project
        self.registry = project.build_registry()
        self.selector = FlavorSelector(self.registry)

    def resolve(self, input_name: str | None = None) -> ResolvedConfig:
        """Resolve the selection and return the configuration to inject."""
        self.selector.resolve(input_name, self.project.default)
        return self.selector.config

    def identity(self) -> AppIdentity:
        return AppIdentity.from_config(self.project.application_id, self.selector.config)

    def build(
        self,
        input_name: str | None = None,
        output_dir: Path | str | None = None,
        module_name: str = DEFAULT_MODULE_NAME,
    ) -> BuildResult:
        """Resolve the flavor and produce the build outputs.

        Args:
            input_name: Selection input (None to use the default flavor)
            output_dir: Directory for the generated module and resources;
                nothing is written when None
            module_name: File name of the generated settings module

        Returns:
            BuildResult describing the active flavor and written files
        """
        start_time = datetime.now(timezone.utc)
        config = self.resolve(input_name)

        result = BuildResult(
            config=config,
            identity=self.identity(),
            start_time=start_time,
        )

        if output_dir is not None:
            output_dir = Path(output_dir)
            result.output_dir = output_dir

            # Nothing is written until the assets and the module both check out.
            writer = BuildConfigWriter()
            stager = AssetStager(self.project.base_dir)
            stager.check(config)
            writer.render(config)

            result.staged_assets = stager.stage(
                config,
                output_dir / RESOURCES_DIR,
                foreign_targets=self._foreign_targets(),
            )
            result.module_path = writer.write(config, output_dir / module_name)
            logger.info(
                f"Wrote {result.module_path} and {len(result.staged_assets)} asset(s) for '{config.flavor}'"
            )

        result.end_time = datetime.now(timezone.utc)
        return result

    def _foreign_targets(self) -> set[str]:
        active = self.selector.config.flavor
        return {
            target
            for flavor in self.registry
            if flavor.name != active
            for target in flavor.asset_targets()
        }
