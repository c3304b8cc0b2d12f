# tests/test_cli_commands.py

import json
import subprocess
import sys

import pytest
import yaml
from conftest import CANONICAL, PKG_A
from typer.testing import CliRunner

from igservices.cli import app


@pytest.fixture
def runner():
    return CliRunner()


class TestCLI:
    def test_info_command(self):
        result = subprocess.run([sys.executable, "-m", "igservices.cli", "info"], capture_output=True, text=True)
        assert result.returncode == 0
        assert "igservices resolution order" in result.stdout
        assert "context store" in result.stdout

    def test_diagnose_command(self, runner):
        result = runner.invoke(app, ["diagnose"])
        assert result.exit_code == 0
        assert "Dependencies" in result.stdout
        assert "Pydantic" in result.stdout

    def test_fetch_authored(self, runner, config_file):
        result = runner.invoke(app, ["fetch", "Patient/p1", "--config", str(config_file)])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"resourceType": "Patient", "id": "p1"}

    def test_fetch_from_context_loaded_out_of_packages(self, runner, config_file):
        result = runner.invoke(app, ["fetch", f"{PKG_A}/ValueSet/colors", "--config", str(config_file)])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["version"] == "1.0.0"

    def test_fetch_with_bundle(self, runner, config_file, tmp_path):
        bundle = tmp_path / "bundle.json"
        bundle.write_text(
            json.dumps({"resourceType": "Bundle", "entry": [{"resource": {"resourceType": "Patient", "id": "inline"}}]})
        )
        result = runner.invoke(app, ["fetch", "Patient/inline", "--config", str(config_file), "--bundle", str(bundle)])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["id"] == "inline"

    def test_fetch_not_found(self, runner, config_file):
        result = runner.invoke(app, ["fetch", "Patient/nope", "--config", str(config_file)])
        assert result.exit_code == 1
        assert "not found: Patient/nope" in result.stdout

    def test_fetch_error(self, runner, config_file, ig_dir):
        (ig_dir / "deps" / "pkg-a" / "package" / "example" / "Patient-broken.json").write_text("[")
        result = runner.invoke(app, ["fetch", f"{PKG_A}/Patient/broken", "--config", str(config_file)])
        assert result.exit_code == 2

    def test_exists(self, runner, config_file):
        result = runner.invoke(app, ["exists", "http://hl7.org/fhirpath/System.String|9.9.9", "--config", str(config_file)])
        assert result.exit_code == 0
        assert result.stdout.strip() == "false"

        result = runner.invoke(
            app,
            ["exists", "http://example.org/mapping/v2", "--config", str(config_file), "--path", "StructureDefinition.mapping.uri"],
        )
        assert result.stdout.strip() == "true"

    def test_exists_canonical(self, runner, config_file):
        result = runner.invoke(
            app,
            ["exists", f"{CANONICAL}/StructureDefinition/my-profile", "--config", str(config_file), "--canonical"],
        )
        assert result.stdout.strip() == "true"

    def test_versions(self, runner, config_file):
        result = runner.invoke(app, ["versions", f"{PKG_A}/ValueSet/colors", "--config", str(config_file)])
        assert result.exit_code == 0
        assert result.stdout.strip() == "1.0.0"

        result = runner.invoke(app, ["versions", "http://nothing.example.com", "--config", str(config_file)])
        assert "no resources" in result.stdout

    def test_policy(self, runner, config_file):
        result = runner.invoke(app, ["policy", "Bundle.entry.resource.subject", "--config", str(config_file)])
        assert result.stdout.strip() == "check-type-if-exists"

        result = runner.invoke(app, ["policy", "Observation.subject", "--config", str(config_file)])
        assert result.stdout.strip() == "check-exists-and-type"

    def test_invalid_config(self, runner, tmp_path):
        config = tmp_path / "bad.yaml"
        config.write_text(yaml.dump({"authored": ["x"]}))
        result = runner.invoke(app, ["fetch", "Patient/p1", "--config", str(config)])
        assert result.exit_code == 1
        assert "'canonical' is required" in result.stdout

    def test_missing_sources(self, runner, tmp_path):
        config = tmp_path / "igservices.yaml"
        config.write_text(yaml.dump({"canonical": CANONICAL, "packages": ["deps/none"]}))
        result = runner.invoke(app, ["fetch", "Patient/p1", "--config", str(config)])
        assert result.exit_code == 1
        assert "Unable to load sources" in result.stdout
