"""Tests for the flavors CLI."""

import json
import shutil
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from build_flavors.cli.main import cli

EXAMPLES_DIR = Path(__file__).parent.parent / "examples"


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Copy the example project into a clean working directory."""
    monkeypatch.delenv("FLAVOR", raising=False)
    shutil.copytree(EXAMPLES_DIR, tmp_path, dirs_exist_ok=True)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def resolve_json(runner, *extra):
    result = runner.invoke(cli, ["resolve", "--json", *extra])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestList:
    """Tests for the list command."""

    def test_list_flavors(self, runner, workspace):
        result = runner.invoke(cli, ["list"])

        assert result.exit_code == 0
        assert "development" in result.output
        assert "production" in result.output
        assert "KMP Flavor Dev" in result.output

    def test_missing_flavors_file(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cli, ["list"])

        assert result.exit_code == 1
        assert "not found" in result.output


class TestResolve:
    """Tests for the resolve command."""

    def test_properties_file_default(self, runner, workspace):
        payload = resolve_json(runner)

        assert payload["flavor"] == "development"
        assert payload["settings"]["displayName"] == "KMP Flavor Dev"
        assert payload["settings"]["identifierSuffix"] == ".dev"
        assert payload["application_id"] == "com.rakangsoftware.flavors.dev"

    def test_project_property(self, runner, workspace):
        result = runner.invoke(cli, ["resolve", "--json", "-P", "flavor=production"])
        payload = json.loads(result.stdout)

        assert payload["flavor"] == "production"
        assert payload["settings"]["displayName"] == "KMP Flavor"
        assert payload["settings"]["identifierSuffix"] == ""
        assert payload["application_id"] == "com.rakangsoftware.flavors"

    def test_flavor_option_wins(self, runner, workspace):
        result = runner.invoke(cli, ["resolve", "--json", "-P", "flavor=development", "--flavor", "production"])
        assert json.loads(result.stdout)["flavor"] == "production"

    def test_environment_variable(self, runner, workspace, monkeypatch):
        monkeypatch.setenv("FLAVOR", "production")
        result = runner.invoke(cli, ["resolve", "--json"])
        assert json.loads(result.stdout)["flavor"] == "production"

    def test_registry_default_without_properties(self, runner, workspace):
        (workspace / "flavor.properties").unlink()
        result = runner.invoke(cli, ["resolve", "--json"])
        assert json.loads(result.stdout)["flavor"] == "development"

    def test_unknown_flavor(self, runner, workspace):
        result = runner.invoke(cli, ["resolve", "-P", "flavor=staging"])

        assert result.exit_code == 1
        assert "staging" in result.output
        assert "development, production" in result.output

    def test_unknown_flavor_reported_once(self, runner, workspace):
        result = runner.invoke(cli, ["resolve", "--flavor", "staging"])

        assert result.exit_code == 1
        assert result.output.count("Unknown flavor 'staging'") == 1

    def test_empty_flavors_key(self, runner, workspace):
        (workspace / "flavors.yaml").write_text("application_id: com.x\nflavors:\n")
        result = runner.invoke(cli, ["resolve"])

        assert result.exit_code == 1
        assert not isinstance(result.exception, TypeError)

    def test_flavor_entry_without_name(self, runner, workspace):
        (workspace / "flavors.yaml").write_text("flavors:\n  - settings:\n      displayName: App\n")
        result = runner.invoke(cli, ["list"])

        assert result.exit_code == 1
        assert "name" in result.output

    def test_malformed_property(self, runner, workspace):
        result = runner.invoke(cli, ["resolve", "-P", "flavor"])
        assert result.exit_code == 1

    def test_table_output(self, runner, workspace):
        result = runner.invoke(cli, ["resolve", "--flavor", "production"])

        assert result.exit_code == 0
        assert "apiBaseUrl" in result.output
        assert "KMP Flavor Dev" not in result.output

    def test_explicit_flavors_file(self, runner, workspace, tmp_path_factory, monkeypatch):
        monkeypatch.chdir(tmp_path_factory.mktemp("elsewhere"))
        result = runner.invoke(
            cli,
            ["-f", str(workspace / "flavors.yaml"), "resolve", "--json", "--flavor", "production"],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["flavor"] == "production"


class TestBuild:
    """Tests for the build command."""

    def test_build_production(self, runner, workspace):
        result = runner.invoke(cli, ["build", "-P", "flavor=production", "-o", "out"])

        assert result.exit_code == 0, result.output
        module = (workspace / "out" / "build_config.py").read_text()
        assert "FLAVOR = 'production'" in module
        assert "DISPLAY_NAME = 'KMP Flavor'" in module
        assert "kmp-flavors-dev" not in module

        services = json.loads((workspace / "out" / "resources" / "google-services.json").read_text())
        assert services["project_info"]["project_id"] == "kmp-flavors"

    def test_build_launch_command(self, runner, workspace):
        result = runner.invoke(cli, ["build", "--flavor", "development", "-o", "out", "--launch"])

        assert result.exit_code == 0, result.output
        assert (
            "adb shell am start -n "
            "com.rakangsoftware.flavors.dev/com.rakangsoftware.flavors.MainActivity"
        ) in result.output

    def test_build_unknown_flavor_writes_nothing(self, runner, workspace):
        result = runner.invoke(cli, ["build", "--flavor", "staging", "-o", "out"])

        assert result.exit_code == 1
        assert not (workspace / "out").exists()

    def test_build_missing_asset(self, runner, workspace):
        result = runner.invoke(cli, ["build", "--flavor", "development", "-o", "out"])
        assert result.exit_code == 0, result.output
        module_path = workspace / "out" / "build_config.py"
        module_before = module_path.read_text()

        (workspace / "config" / "production" / "google-services.json").unlink()
        result = runner.invoke(cli, ["build", "--flavor", "production", "-o", "out"])

        assert result.exit_code == 1
        assert "google-services.json" in result.output
        assert module_path.read_text() == module_before
        assert "FLAVOR = 'development'" in module_before

        services = json.loads((workspace / "out" / "resources" / "google-services.json").read_text())
        assert services["project_info"]["project_id"] == "kmp-flavors-dev"

    def test_build_reserved_setting_writes_nothing(self, runner, workspace):
        data = yaml.safe_load((workspace / "flavors.yaml").read_text())
        for body in data["flavors"].values():
            body["settings"]["flavor"] = "x"
        (workspace / "flavors.yaml").write_text(yaml.dump(data))

        result = runner.invoke(cli, ["build", "--flavor", "production", "-o", "out"])

        assert result.exit_code == 1
        assert "FLAVOR" in result.output
        assert not (workspace / "out").exists()


class TestValidate:
    """Tests for the validate command."""

    def test_validate_example(self, runner, workspace):
        result = runner.invoke(cli, ["validate"])

        assert result.exit_code == 0, result.output
        assert "VALID" in result.output

    def test_validate_inconsistent_file(self, runner, workspace):
        path = workspace / "broken.yaml"
        path.write_text(yaml.dump({
            "application_id": "com.example.app",
            "flavors": {
                "development": {"settings": {"displayName": "App Dev", "apiBaseUrl": "x"}},
                "production": {"settings": {"displayName": "App"}},
            },
        }))

        result = runner.invoke(cli, ["validate", str(path)])

        assert result.exit_code == 1
        assert "INVALID" in result.output

    def test_validate_bad_shape(self, runner, workspace):
        path = workspace / "broken.yaml"
        path.write_text("flavors: []\n")

        result = runner.invoke(cli, ["validate", str(path)])

        assert result.exit_code == 1
        assert "INVALID" in result.output


class TestInit:
    """Tests for the init command."""

    def test_init_creates_valid_file(self, runner, tmp_path, monkeypatch):
        monkeypatch.delenv("FLAVOR", raising=False)
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(cli, ["init", "-a", "com.example.demo", "-n", "Demo"])
        assert result.exit_code == 0, result.output

        data = yaml.safe_load((tmp_path / "flavors.yaml").read_text())
        assert data["application_id"] == "com.example.demo"
        assert data["flavors"]["development"]["settings"]["displayName"] == "Demo Dev"

        result = runner.invoke(cli, ["greet", "--flavor", "production"])
        assert result.exit_code == 0, result.output
        assert "Demo" in result.output

    def test_init_refuses_overwrite(self, runner, workspace):
        result = runner.invoke(cli, ["init"])
        assert result.exit_code == 1


class TestGreet:
    """Tests for the greet command."""

    def test_greet_development(self, runner, workspace):
        result = runner.invoke(cli, ["greet"])

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert "KMP Flavor Dev" in lines
        assert any(line.startswith("Hello, Python ") for line in lines)


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "0.1.0" in result.output
