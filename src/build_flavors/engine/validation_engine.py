"""Validation Engine - checks flavor documents before a build uses them.

The Validation Engine ensures:
- Flavors documents have the expected shape
- Every flavor declares the same settings keys
- The designated default names a declared flavor
- Declared assets exist on disk
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import jsonschema

from build_flavors.engine.build_config import RESERVED_CONSTANT
from build_flavors.flavors.base import Flavor, FlavorProject
from build_flavors.utils.helpers import to_constant_name

_SCALAR = {"type": ["string", "number", "boolean"]}

FLAVOR_DEFINITION_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "description": {"type": "string"},
        "settings": {
            "type": "object",
            "properties": {
                "displayName": {"type": "string", "minLength": 1},
                "identifierSuffix": {"type": "string"},
            },
            "required": ["displayName"],
            "additionalProperties": _SCALAR,
        },
        "assets": {
            "type": "array",
            "items": {
                "oneOf": [
                    {"type": "string"},
                    {
                        "type": "object",
                        "properties": {
                            "source": {"type": "string"},
                            "target": {"type": "string"},
                        },
                        "required": ["source"],
                        "additionalProperties": False,
                    },
                ]
            },
        },
    },
    "required": ["settings"],
}

FLAVORS_DOCUMENT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "application_id": {"type": "string"},
        "default": {"type": ["string", "null"]},
        "flavors": {
            "oneOf": [
                {
                    "type": "object",
                    "additionalProperties": FLAVOR_DEFINITION_SCHEMA,
                    "minProperties": 1,
                },
                {
                    "type": "array",
                    "items": {
                        "allOf": [
                            FLAVOR_DEFINITION_SCHEMA,
                            {
                                "type": "object",
                                "properties": {"name": {"type": "string", "minLength": 1}},
                                "required": ["name"],
                            },
                        ]
                    },
                    "minItems": 1,
                },
            ]
        },
    },
    "required": ["flavors"],
}


class ValidationSeverity(str, Enum):
    """Severity levels for validation issues."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: ValidationSeverity
    message: str
    path: str = ""
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity.value,
            "message": self.message,
            "path": self.path,
            "context": self.context,
        }


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    valid: bool
    issues: list[ValidationIssue] = field(default_factory=list)
    validated_count: int = 0

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.WARNING)

    def add_issue(
        self,
        severity: ValidationSeverity,
        message: str,
        path: str = "",
        **context: Any,
    ) -> None:
        self.issues.append(
            ValidationIssue(
                severity=severity,
                message=message,
                path=path,
                context=context,
            )
        )
        if severity == ValidationSeverity.ERROR:
            self.valid = False

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another validation result into this one."""
        return ValidationResult(
            valid=self.valid and other.valid,
            issues=self.issues + other.issues,
            validated_count=self.validated_count + other.validated_count,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "validated_count": self.validated_count,
            "issues": [i.to_dict() for i in self.issues],
        }


class ValidationEngine:
    """Engine for validating flavors documents and projects."""

    def validate_document(self, data: Any) -> ValidationResult:
        """Validate the raw YAML structure against the document schema."""
        result = ValidationResult(valid=True, validated_count=1)

        try:
            jsonschema.validate(data, FLAVORS_DOCUMENT_SCHEMA)
        except jsonschema.ValidationError as e:
            result.add_issue(
                ValidationSeverity.ERROR,
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                schema_path=list(e.schema_path),
            )

        return result

    def validate_flavor(self, flavor: Flavor, base_dir: Path | None = None) -> ValidationResult:
        """Validate a single flavor definition.

        Checks:
        - Name is a usable identifier
        - Identifier suffix is well formed
        - Settings map to distinct, importable constants
        - Assets exist and do not collide on target name
        """
        result = ValidationResult(valid=True, validated_count=1)

        if not flavor.name.replace("_", "").replace("-", "").isalnum():
            result.add_issue(
                ValidationSeverity.WARNING,
                "Flavor name should be alphanumeric with underscores/hyphens",
                path="name",
                actual=flavor.name,
            )

        suffix = flavor.settings.identifier_suffix
        if suffix and (not suffix.startswith(".") or suffix.endswith(".") or " " in suffix):
            result.add_issue(
                ValidationSeverity.ERROR,
                f"identifierSuffix must be empty or look like '.dev': {suffix!r}",
                path=f"{flavor.name}.settings.identifierSuffix",
            )

        constants: dict[str, str] = {}
        for key, value in flavor.settings.to_dict().items():
            path = f"{flavor.name}.settings.{key}"
            try:
                name = to_constant_name(key)
            except ValueError as e:
                result.add_issue(ValidationSeverity.ERROR, str(e), path=path)
                continue

            if name == RESERVED_CONSTANT:
                result.add_issue(
                    ValidationSeverity.ERROR,
                    f"Setting '{key}' maps to the reserved constant {name}",
                    path=path,
                )
            elif name in constants:
                result.add_issue(
                    ValidationSeverity.ERROR,
                    f"Settings '{constants[name]}' and '{key}' both map to constant {name}",
                    path=path,
                )
            constants.setdefault(name, key)

            if isinstance(value, float) and not math.isfinite(value):
                result.add_issue(
                    ValidationSeverity.ERROR,
                    f"Setting '{key}' must be a finite number: {value}",
                    path=path,
                )

        targets = set()
        for i, asset in enumerate(flavor.assets):
            if asset.target_name in targets:
                result.add_issue(
                    ValidationSeverity.ERROR,
                    f"Duplicate asset target: {asset.target_name}",
                    path=f"{flavor.name}.assets[{i}]",
                )
            targets.add(asset.target_name)

            source = asset.resolve_source(base_dir)
            if not source.is_file():
                result.add_issue(
                    ValidationSeverity.ERROR,
                    f"Asset not found: {source}",
                    path=f"{flavor.name}.assets[{i}].source",
                )

        return result

    def validate_project(self, project: FlavorProject) -> ValidationResult:
        """Validate a whole flavors project.

        Checks:
        - At least one flavor is declared
        - Flavor names are unique
        - The default names a declared flavor
        - All flavors declare the same settings keys
        """
        result = ValidationResult(valid=True)

        if not project.flavors:
            result.add_issue(
                ValidationSeverity.ERROR,
                "Project declares no flavors",
                path="flavors",
            )
            return result

        if not project.application_id:
            result.add_issue(
                ValidationSeverity.WARNING,
                "Project has no application_id",
                path="application_id",
            )

        names = project.flavor_names()
        for name in sorted({n for n in names if names.count(n) > 1}):
            result.add_issue(
                ValidationSeverity.ERROR,
                f"Duplicate flavor name: {name}",
                path="flavors",
            )

        if project.default is not None and project.default not in names:
            result.add_issue(
                ValidationSeverity.ERROR,
                f"Default flavor '{project.default}' is not declared",
                path="default",
                available=names,
            )

        reference = project.flavors[0]
        reference_keys = reference.setting_keys()
        for flavor in project.flavors[1:]:
            keys = flavor.setting_keys()
            if keys != reference_keys:
                result.add_issue(
                    ValidationSeverity.ERROR,
                    f"Flavor '{flavor.name}' settings keys differ from '{reference.name}'",
                    path=f"{flavor.name}.settings",
                    missing=sorted(reference_keys - keys),
                    extra=sorted(keys - reference_keys),
                )

        suffixes = [f.settings.identifier_suffix for f in project.flavors]
        if len(set(suffixes)) < len(suffixes):
            result.add_issue(
                ValidationSeverity.WARNING,
                "Several flavors share an identifierSuffix and cannot be installed side by side",
                path="settings.identifierSuffix",
            )

        for flavor in project.flavors:
            result = result.merge(self.validate_flavor(flavor, project.base_dir))

        return result
