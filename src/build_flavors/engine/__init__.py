"""Engine module - Build & Tooling layer.

Contains:
- Build Engine: Runs one flavor build invocation
- Validation Engine: Checks flavors documents
"""

from build_flavors.engine.build_engine import BuildEngine, BuildResult
from build_flavors.engine.identity import AppIdentity
from build_flavors.engine.validation_engine import ValidationEngine, ValidationResult

__all__ = [
    "AppIdentity",
    "BuildEngine",
    "BuildResult",
    "ValidationEngine",
    "ValidationResult",
]
