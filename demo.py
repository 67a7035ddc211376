#!/usr/bin/env python3
"""
Demo script showing basic usage of build-flavors.

Run this script after installing the package:
    pip install -e .
    python demo.py
"""

import tempfile
from pathlib import Path

from build_flavors.engine.build_engine import BuildEngine
from build_flavors.errors import MissingSettingError, SelectionConflictError, UnknownFlavorError
from build_flavors.flavors.loader import load_project
from build_flavors.flavors.registry import FlavorRegistry
from build_flavors.runtime.greeting import Greeting
from build_flavors.selection.selector import FlavorSelector

EXAMPLES_DIR = Path(__file__).parent / "examples"


def demo_registry():
    """Demonstrate declaring flavors programmatically."""
    print("=" * 60)
    print("1. DECLARING FLAVORS")
    print("=" * 60)

    registry = FlavorRegistry(default="development")
    registry.register("development", {"displayName": "App Dev", "identifierSuffix": ".dev"})
    registry.register("production", {"displayName": "App", "identifierSuffix": ""})
    registry.close()

    print(f"Declared flavors: {registry.names()}")
    print(f"Default flavor: {registry.default_name}")
    print()

    return registry


def demo_selection(registry):
    """Demonstrate resolving exactly one flavor per build."""
    print("=" * 60)
    print("2. SELECTING A FLAVOR")
    print("=" * 60)

    selector = FlavorSelector(registry)
    selector.resolve("production")
    config = selector.config

    print(f"Active flavor: {config.flavor}")
    print(f"  displayName: {config.display_name!r}")
    print(f"  identifierSuffix: {config.identifier_suffix!r}")

    try:
        selector.resolve("development")
    except SelectionConflictError as e:
        print(f"Second selection rejected: {e}")

    try:
        config.get("nonexistentKey")
    except MissingSettingError as e:
        print(f"Undefined setting: {e}")

    try:
        FlavorSelector(registry).resolve("staging")
    except UnknownFlavorError as e:
        print(f"Unknown selection: {e}")

    print()
    return config


def demo_greeting(config):
    """Demonstrate injecting the resolved configuration into app code."""
    print("=" * 60)
    print("3. APPLICATION CODE")
    print("=" * 60)

    greeting = Greeting(config)
    print(greeting.title)
    print(greeting.greet())
    print()


def demo_build():
    """Demonstrate a full build from the example flavors file."""
    print("=" * 60)
    print("4. BUILDING THE EXAMPLE PROJECT")
    print("=" * 60)

    project = load_project(EXAMPLES_DIR / "flavors.yaml")

    with tempfile.TemporaryDirectory() as tmpdir:
        result = BuildEngine(project).build("development", output_dir=tmpdir)

        print(f"Application id: {result.identity.application_id}")
        print(f"Launch: {' '.join(result.identity.launch_command())}")
        print(f"Generated module: {result.module_path.name}")
        print(result.module_path.read_text())
        print("Staged assets:")
        for path in result.staged_assets:
            print(f"  - {path.name}")
    print()


def main():
    registry = demo_registry()
    config = demo_selection(registry)
    demo_greeting(config)
    demo_build()


if __name__ == "__main__":
    main()
