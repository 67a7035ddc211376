"""Flavor Loader for loading flavor projects from YAML files."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from build_flavors.flavors.base import Flavor, FlavorAsset, FlavorProject, FlavorSettings
from build_flavors.flavors.registry import FlavorRegistry

logger = logging.getLogger(__name__)

DEFAULT_FLAVORS_FILE = "flavors.yaml"


class FlavorLoader:
    """Loads flavor projects from YAML files.

    Flavors may be declared either as a list of mappings with a ``name`` key
    or as a mapping of name to definition::

        application_id: com.example.app
        default: development
        flavors:
          development:
            settings:
              displayName: App Dev
              identifierSuffix: .dev
            assets:
              - source: config/development/google-services.json
          production:
            settings:
              displayName: App
              identifierSuffix: ""
    """

    def load_file(self, path: Path | str) -> FlavorProject:
        """Load a flavor project from a YAML file.

        Relative asset paths are resolved against the file's directory.

        Args:
            path: Path to the YAML file

        Returns:
            Loaded FlavorProject instance
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Flavors file not found: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
            project = self._parse_project(data, base_dir=path.parent)
        except yaml.YAMLError as e:
            logger.error(f"YAML parse error in {path}: {e}")
            raise
        except ValidationError as e:
            logger.error(f"Validation error in {path}: {e}")
            raise

        logger.debug(f"Loaded flavors {', '.join(project.flavor_names())} from {path}")
        return project

    def load_from_string(self, content: str, base_dir: Path | str | None = None) -> FlavorProject:
        """Load a flavor project from a YAML string.

        Args:
            content: YAML content as string
            base_dir: Optional directory for resolving relative asset paths

        Returns:
            Loaded FlavorProject instance
        """
        data = yaml.safe_load(content)
        return self._parse_project(data, base_dir=Path(base_dir) if base_dir else None)

    def _parse_project(self, data: dict[str, Any] | None, base_dir: Path | None) -> FlavorProject:
        """Parse a project from its YAML structure."""
        if not data:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("Flavors document must be a mapping")

        raw_flavors = data.get("flavors") or []
        if isinstance(raw_flavors, dict):
            items = []
            for name, body in raw_flavors.items():
                if body is not None and not isinstance(body, dict):
                    raise ValueError(f"Flavor '{name}' must be a mapping")
                items.append({"name": name, **(body or {})})
        elif isinstance(raw_flavors, list):
            items = raw_flavors
        else:
            raise ValueError("Flavors must be a mapping or a list")

        return FlavorProject(
            application_id=data.get("application_id", data.get("applicationId", "")),
            default=data.get("default"),
            flavors=[self._parse_flavor(item) for item in items],
            base_dir=base_dir,
        )

    def _parse_flavor(self, data: dict[str, Any]) -> Flavor:
        """Parse a single flavor from a dictionary."""
        if not isinstance(data, dict) or not data.get("name"):
            raise ValueError("Flavor entry must be a mapping with a 'name'")

        assets = []
        for a_data in data.get("assets", []) or []:
            if isinstance(a_data, str):
                assets.append(FlavorAsset(source=Path(a_data)))
            else:
                assets.append(
                    FlavorAsset(
                        source=Path(a_data["source"]),
                        target=a_data.get("target", ""),
                    )
                )

        return Flavor(
            name=data["name"],
            description=data.get("description", ""),
            settings=FlavorSettings.model_validate(data.get("settings", {})),
            assets=tuple(assets),
        )

    def save_file(self, project: FlavorProject, path: Path | str) -> None:
        """Save a flavor project to a YAML file.

        Args:
            project: The project to save
            path: Path for the output file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self._project_to_dict(project)

        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def _project_to_dict(self, project: FlavorProject) -> dict[str, Any]:
        """Convert a FlavorProject to a dictionary for YAML serialization."""
        flavors: dict[str, Any] = {}
        for flavor in project.flavors:
            body: dict[str, Any] = {}
            if flavor.description:
                body["description"] = flavor.description
            body["settings"] = flavor.settings.to_dict()
            if flavor.assets:
                body["assets"] = [
                    {"source": asset.source.as_posix(), "target": asset.target_name}
                    for asset in flavor.assets
                ]
            flavors[flavor.name] = body

        data: dict[str, Any] = {"application_id": project.application_id}
        if project.default is not None:
            data["default"] = project.default
        data["flavors"] = flavors
        return data


def load_project(path: Path | str) -> FlavorProject:
    """Convenience function to load a flavor project from a file."""
    loader = FlavorLoader()
    return loader.load_file(path)


def load_registry(path: Path | str) -> FlavorRegistry:
    """Load a flavors file and return its closed registry."""
    return load_project(path).build_registry()
