"""Tests for the Runtime module."""

import dataclasses

import pytest

from build_flavors.errors import MissingSettingError
from build_flavors.flavors.base import FlavorBuilder
from build_flavors.runtime.accessor import ResolvedConfig
from build_flavors.runtime.greeting import Greeting, Platform, get_platform


@pytest.fixture
def config():
    flavor = (
        FlavorBuilder("development")
        .display_name("App Dev")
        .identifier_suffix(".dev")
        .setting("apiBaseUrl", "https://dev.example.com")
        .asset("config/development/google-services.json")
        .build()
    )
    return ResolvedConfig.from_flavor(flavor)


class TestResolvedConfig:
    """Tests for ResolvedConfig."""

    def test_read_by_key(self, config):
        assert config.get("displayName") == "App Dev"
        assert config["apiBaseUrl"] == "https://dev.example.com"

    def test_named_accessors(self, config):
        assert config.display_name == "App Dev"
        assert config.identifier_suffix == ".dev"

    def test_missing_key(self, config):
        with pytest.raises(MissingSettingError) as exc_info:
            config.get("nonexistentKey")

        assert "nonexistentKey" in str(exc_info.value)
        assert "development" in str(exc_info.value)

    def test_missing_key_by_subscript(self, config):
        with pytest.raises(MissingSettingError):
            config["region"]

    def test_missing_setting_is_lookup_error(self, config):
        with pytest.raises(LookupError):
            config.get("region")

    def test_keys_and_contains(self, config):
        assert config.keys() == ["displayName", "identifierSuffix", "apiBaseUrl"]
        assert "apiBaseUrl" in config
        assert "region" not in config

    def test_as_dict_is_a_copy(self, config):
        values = config.as_dict()
        values["displayName"] = "Changed"

        assert config.display_name == "App Dev"

    def test_values_are_read_only(self, config):
        with pytest.raises(TypeError):
            config.values["displayName"] = "Changed"

    def test_attributes_are_read_only(self, config):
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.flavor = "production"

    def test_source_mapping_changes_do_not_leak(self):
        source = {"displayName": "App", "identifierSuffix": ""}
        config = ResolvedConfig(flavor="production", values=source)
        source["displayName"] = "Changed"

        assert config.display_name == "App"

    def test_asset_targets(self, config):
        assert config.asset_targets() == ["google-services.json"]


class TestGreeting:
    """Tests for the sample Greeting."""

    def test_greet(self, config):
        greeting = Greeting(config, platform=Platform(name="Android 34"))
        assert greeting.greet() == "Hello, Android 34!"

    def test_title_from_config(self, config):
        greeting = Greeting(config, platform=Platform(name="iOS 17.2"))
        assert greeting.title == "App Dev"

    def test_default_platform(self, config):
        greeting = Greeting(config)

        assert greeting.platform == get_platform()
        assert greeting.greet().startswith("Hello, Python ")

    def test_different_configs_per_greeting(self, config):
        production = ResolvedConfig.from_flavor(
            FlavorBuilder("production").display_name("App").build()
        )

        assert Greeting(config).title == "App Dev"
        assert Greeting(production).title == "App"
