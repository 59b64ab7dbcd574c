"""Tests for the tsdocgen command line."""

import json

import pytest
import yaml
from click.testing import CliRunner

from tsdocgen.cli.main import main

BUTTON = """
    /** A simple button */
    export function Button(props: {
      /** Button label */
      label: string;
      /** @default false */
      disabled?: boolean;
    }) {
      return null;
    }
"""


@pytest.fixture
def runner(tmp_path, monkeypatch):
    """CliRunner working in an empty directory with no configuration."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TSDOCGEN_CONFIG", raising=False)
    return CliRunner()


class TestParseCommand:
    """Tests for `tsdocgen parse`."""

    def test_json_output(self, runner, write_source):
        """Components are printed as JSON."""
        path = write_source("Button.tsx", BUTTON)

        result = runner.invoke(main, ["parse", str(path)])

        assert result.exit_code == 0, result.output
        docs = json.loads(result.output)
        assert docs[0]["displayName"] == "Button"
        assert docs[0]["description"] == "A simple button"
        assert docs[0]["props"]["disabled"]["defaultValue"] == {"value": "false"}
        assert docs[0]["props"]["label"]["defaultValue"] is None

    def test_yaml_output(self, runner, write_source):
        """--format yaml prints YAML."""
        path = write_source("Button.tsx", BUTTON)

        result = runner.invoke(main, ["parse", str(path), "--format", "yaml"])

        assert result.exit_code == 0, result.output
        docs = yaml.safe_load(result.output)
        assert list(docs[0]["props"]) == ["label", "disabled"]

    def test_skip_options(self, runner, write_source):
        """--skip-prop and --skip-undocumented filter props."""
        path = write_source("Button.tsx", BUTTON)

        by_name = runner.invoke(main, ["parse", str(path), "--skip-prop", "label"])
        undocumented = runner.invoke(main, ["parse", str(path), "--skip-undocumented"])

        assert list(json.loads(by_name.output)[0]["props"]) == ["disabled"]
        assert list(json.loads(undocumented.output)[0]["props"]) == ["label"]

    def test_config_file(self, runner, write_source, tmp_path):
        """Filters and the output format come from tsdocgen.yaml."""
        path = write_source("Button.tsx", BUTTON)
        (tmp_path / "tsdocgen.yaml").write_text(
            yaml.safe_dump({"prop_filter": {"skip_props_with_name": "disabled"}, "output_format": "yaml"})
        )

        result = runner.invoke(main, ["parse", str(path)])

        assert result.exit_code == 0, result.output
        docs = yaml.safe_load(result.output)
        assert list(docs[0]["props"]) == ["label"]

    def test_tsconfig(self, runner, write_source, tmp_path):
        """--tsconfig applies the project's compiler options."""
        path = write_source("Button.tsx", BUTTON)
        tsconfig = tmp_path / "tsconfig.json"
        tsconfig.write_text(json.dumps({"compilerOptions": {"strict": True}}))

        result = runner.invoke(main, ["parse", str(path), "--tsconfig", str(tsconfig)])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)[0]["props"]["disabled"]["type"]["name"] == "boolean | undefined"

    def test_output_file(self, runner, write_source, tmp_path):
        """--output writes to a file."""
        path = write_source("Button.tsx", BUTTON)
        output = tmp_path / "docs" / "button.json"

        result = runner.invoke(main, ["parse", str(path), "--output", str(output)])

        assert result.exit_code == 0
        assert json.loads(output.read_text())[0]["displayName"] == "Button"

    def test_several_files(self, runner, write_source):
        """Components of all files are printed together."""
        first = write_source("Button.tsx", BUTTON)
        second = write_source("Icon.tsx", "export const Icon = (props: { name: string }) => null;\n")

        result = runner.invoke(main, ["parse", str(first), str(second)])

        assert [d["displayName"] for d in json.loads(result.output)] == ["Button", "Icon"]

    def test_missing_file(self, runner, tmp_path):
        """Unreadable files exit with status 1."""
        result = runner.invoke(main, ["parse", str(tmp_path / "Missing.tsx")])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_invalid_tsconfig(self, runner, write_source, tmp_path):
        """Invalid compiler options exit with status 1."""
        path = write_source("Button.tsx", BUTTON)
        tsconfig = tmp_path / "tsconfig.json"
        tsconfig.write_text(json.dumps({"compilerOptions": {"target": "es1999"}}))

        result = runner.invoke(main, ["parse", str(path), "--tsconfig", str(tsconfig)])

        assert result.exit_code == 1
        assert "target" in result.output


class TestInitCommand:
    """Tests for `tsdocgen init`."""

    def test_writes_config(self, runner, tmp_path):
        """init writes tsdocgen.yaml pointing at an existing tsconfig."""
        (tmp_path / "tsconfig.json").write_text("{}")

        result = runner.invoke(main, ["init", "--project", str(tmp_path)])

        assert result.exit_code == 0
        data = yaml.safe_load((tmp_path / "tsdocgen.yaml").read_text())
        assert data["tsconfig"] == "tsconfig.json"
        assert data["output_format"] == "json"

    def test_existing_config_kept(self, runner, tmp_path):
        """An existing configuration is not overwritten."""
        (tmp_path / "tsdocgen.yaml").write_text("output_format: yaml\n")

        result = runner.invoke(main, ["init", "--project", str(tmp_path)])

        assert "already exists" in result.output
        assert (tmp_path / "tsdocgen.yaml").read_text() == "output_format: yaml\n"


def test_version(runner):
    """--version prints the package version."""
    result = runner.invoke(main, ["--version"])

    assert result.exit_code == 0
    assert "0.1.0" in result.output
