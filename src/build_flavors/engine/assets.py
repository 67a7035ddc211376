"""Stages the active flavor's asset files into a build's resource directory."""

import logging
import shutil
from pathlib import Path
from typing import Iterable

from build_flavors.errors import AssetNotFoundError
from build_flavors.runtime.accessor import ResolvedConfig

logger = logging.getLogger(__name__)


class AssetStager:
    """Copies asset files for one flavor.

    Asset contents are opaque; they are copied byte for byte and never parsed.
    """

    def __init__(self, base_dir: Path | str | None = None):
        self.base_dir = Path(base_dir) if base_dir is not None else None

    def check(self, config: ResolvedConfig) -> list[tuple[Path, str]]:
        """Resolve every asset source of the active flavor without copying.

        Returns:
            (source path, target file name) pairs in declaration order

        Raises:
            AssetNotFoundError: If a declared asset is missing
        """
        sources = []
        for asset in config.assets:
            source = asset.resolve_source(self.base_dir)
            if not source.is_file():
                raise AssetNotFoundError(config.flavor, str(source))
            sources.append((source, asset.target_name))
        return sources

    def stage(
        self,
        config: ResolvedConfig,
        destination: Path | str,
        foreign_targets: Iterable[str] = (),
    ) -> list[Path]:
        """Copy the active flavor's assets into ``destination``.

        Args:
            config: The resolved configuration
            destination: Resource directory to stage into
            foreign_targets: Asset file names declared by other flavors; any
                of them left in ``destination`` by an earlier build is removed

        Returns:
            Paths of the staged files

        Raises:
            AssetNotFoundError: If a declared asset is missing
        """
        destination = Path(destination)
        sources = self.check(config)

        destination.mkdir(parents=True, exist_ok=True)
        self._remove_stale(destination, set(foreign_targets) - set(config.asset_targets()))

        staged = []
        for source, target_name in sources:
            target = destination / target_name
            shutil.copyfile(source, target)
            logger.debug(f"Staged {source} -> {target}")
            staged.append(target)

        return staged

    def _remove_stale(self, destination: Path, targets: set[str]) -> None:
        for name in sorted(targets):
            stale = destination / name
            if stale.is_file():
                stale.unlink()
                logger.debug(f"Removed stale asset {stale}")
