"""Tests for utility helpers."""

import logging

import pytest

from build_flavors.utils.helpers import parse_properties, to_constant_name
from build_flavors.utils.log import configure_logging


class TestParseProperties:
    """Tests for parse_properties."""

    def test_parse_pairs(self):
        assert parse_properties(["flavor=production", "versionCode=2"]) == {
            "flavor": "production",
            "versionCode": "2",
        }

    def test_later_pair_wins(self):
        assert parse_properties(["flavor=development", "flavor=production"]) == {"flavor": "production"}

    def test_value_may_contain_equals(self):
        assert parse_properties(["apiKey=a=b"]) == {"apiKey": "a=b"}

    def test_empty_value(self):
        assert parse_properties(["flavor="]) == {"flavor": ""}

    @pytest.mark.parametrize("pair", ["flavor", "=production", ""])
    def test_invalid_pair(self, pair):
        with pytest.raises(ValueError):
            parse_properties([pair])


class TestToConstantName:
    """Tests for to_constant_name."""

    @pytest.mark.parametrize(
        "key, expected",
        [
            ("displayName", "DISPLAY_NAME"),
            ("identifierSuffix", "IDENTIFIER_SUFFIX"),
            ("apiBaseURL", "API_BASE_URL"),
            ("HTTPServer", "HTTP_SERVER"),
            ("firebase.project-id", "FIREBASE_PROJECT_ID"),
            ("region", "REGION"),
            ("2faEnabled", "_2FA_ENABLED"),
        ],
    )
    def test_conversion(self, key, expected):
        assert to_constant_name(key) == expected

    def test_unusable_key(self):
        with pytest.raises(ValueError):
            to_constant_name("---")


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_levels(self):
        configure_logging(verbose=True)
        assert logging.getLogger("build_flavors").level == logging.DEBUG

        configure_logging(verbose=False)
        logger = logging.getLogger("build_flavors")
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
