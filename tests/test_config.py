"""Tests for core/config.py module.

Covers:
- convert_compiler_options_from_json() diagnostics
- load_compiler_options() error handling
- DocgenConfig / load_config() search order
"""

import json
from pathlib import Path

import pytest

from tsdocgen.core.config import (
    DEFAULT_COMPILER_OPTIONS,
    CompilerOptions,
    DocgenConfig,
    JsxEmit,
    ModuleKind,
    ScriptTarget,
    convert_compiler_options_from_json,
    load_compiler_options,
    load_config,
)
from tsdocgen.core.exceptions import CompilerOptionsError, ConfigurationError
from tsdocgen.core.types import StaticPropFilter


class TestCompilerOptions:
    """Tests for CompilerOptions."""

    def test_default_options(self):
        """Defaults are React JSX, CommonJS, latest target."""
        assert DEFAULT_COMPILER_OPTIONS.jsx is JsxEmit.REACT
        assert DEFAULT_COMPILER_OPTIONS.module is ModuleKind.COMMONJS
        assert DEFAULT_COMPILER_OPTIONS.target is ScriptTarget.LATEST
        assert ScriptTarget.LATEST is ScriptTarget.ESNEXT

    def test_optionals_include_undefined_under_strict(self):
        """strict enables strictNullChecks unless overridden."""
        assert not CompilerOptions().includes_undefined_in_optionals
        assert CompilerOptions(strict=True).includes_undefined_in_optionals
        assert not CompilerOptions(strict=True, strict_null_checks=False).includes_undefined_in_optionals
        assert CompilerOptions(strict_null_checks=True).includes_undefined_in_optionals

    def test_with_overrides_returns_copy(self):
        """with_overrides leaves the original untouched."""
        changed = DEFAULT_COMPILER_OPTIONS.with_overrides(strict=True)
        assert changed.strict is True
        assert DEFAULT_COMPILER_OPTIONS.strict is False


class TestConvertCompilerOptions:
    """Tests for convert_compiler_options_from_json."""

    def test_converts_known_options(self, tmp_path):
        """Enum values are case-insensitive and paths resolve against the base."""
        options, errors = convert_compiler_options_from_json(
            {"jsx": "react-jsx", "module": "ESNext", "target": "ES2020", "strict": True, "baseUrl": "src"},
            tmp_path,
        )

        assert errors == []
        assert options.jsx is JsxEmit.REACT_JSX
        assert options.module is ModuleKind.ESNEXT
        assert options.target is ScriptTarget.ES2020
        assert options.strict is True
        assert options.base_url == (tmp_path / "src").resolve()

    def test_none_gives_empty_options(self, tmp_path):
        """A missing compilerOptions block is not an error."""
        options, errors = convert_compiler_options_from_json(None, tmp_path)
        assert options == CompilerOptions()
        assert errors == []

    def test_unmodeled_typescript_options_are_ignored(self, tmp_path):
        """Valid options the resolver does not use produce no diagnostics."""
        _, errors = convert_compiler_options_from_json(
            {"esModuleInterop": True, "skipLibCheck": True, "lib": ["dom"]}, tmp_path
        )
        assert errors == []

    def test_unknown_option(self, tmp_path):
        """Unknown option names are reported."""
        _, errors = convert_compiler_options_from_json({"notAnOption": 1}, tmp_path, "tsconfig.json")

        assert len(errors) == 1
        assert errors[0].code == 5023
        assert "notAnOption" in errors[0].message
        assert errors[0].file == "tsconfig.json"

    def test_invalid_enum_value(self, tmp_path):
        """Invalid enum values list the allowed values."""
        _, errors = convert_compiler_options_from_json({"jsx": "vue"}, tmp_path)

        assert errors[0].code == 6046
        assert "'react'" in errors[0].message

    def test_wrong_value_type(self, tmp_path):
        """Values of the wrong type are reported."""
        _, errors = convert_compiler_options_from_json({"strict": "yes"}, tmp_path)
        assert errors[0].code == 5024

    def test_paths_without_base_url_use_config_directory(self, tmp_path):
        """paths resolve against the config directory when baseUrl is absent."""
        options, errors = convert_compiler_options_from_json({"paths": {"@/*": ["src/*"]}}, tmp_path)

        assert errors == []
        assert options.paths == {"@/*": ["src/*"]}
        assert options.base_url == tmp_path.resolve()


class TestLoadCompilerOptions:
    """Tests for load_compiler_options."""

    def test_loads_tsconfig(self, tmp_path):
        """compilerOptions are read from the file."""
        path = tmp_path / "tsconfig.json"
        path.write_text(json.dumps({"compilerOptions": {"strict": True, "jsx": "preserve"}}))

        options = load_compiler_options(path)

        assert options.strict is True
        assert options.jsx is JsxEmit.PRESERVE

    def test_invalid_json_raises(self, tmp_path):
        """Malformed JSON is a configuration error."""
        path = tmp_path / "tsconfig.json"
        path.write_text("{ not json")

        with pytest.raises(ConfigurationError, match="Failed to parse"):
            load_compiler_options(path)

    def test_missing_file_raises(self, tmp_path):
        """A missing file is a configuration error."""
        with pytest.raises(ConfigurationError, match="Failed to read"):
            load_compiler_options(tmp_path / "missing.json")

    def test_first_diagnostic_raised(self, tmp_path):
        """The first conversion diagnostic is raised."""
        path = tmp_path / "tsconfig.json"
        path.write_text(json.dumps({"compilerOptions": {"bogus": True, "jsx": "nope"}}))

        with pytest.raises(CompilerOptionsError) as exc_info:
            load_compiler_options(path)

        assert exc_info.value.diagnostic.code == 5023
        assert "bogus" in str(exc_info.value)


class TestDocgenConfig:
    """Tests for DocgenConfig and load_config."""

    def test_defaults_when_nothing_found(self, tmp_path, monkeypatch):
        """Without a config file the defaults are used."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("TSDOCGEN_CONFIG", raising=False)

        config = load_config()

        assert config.tsconfig is None
        assert config.prop_filter == StaticPropFilter()
        assert config.output_format == "json"

    def test_save_and_load(self, tmp_path):
        """A saved configuration loads back; tsconfig resolves relative to it."""
        config = DocgenConfig(
            tsconfig=Path("tsconfig.json"),
            prop_filter=StaticPropFilter(skip_props_with_name=["className"], skip_props_without_doc=True),
            output_format="yaml",
        )
        config.save(tmp_path / "tsdocgen.yaml")

        loaded = load_config(tmp_path / "tsdocgen.yaml")

        assert loaded.tsconfig == tmp_path / "tsconfig.json"
        assert loaded.prop_filter.skip_props_with_name == ["className"]
        assert loaded.prop_filter.skip_props_without_doc is True
        assert loaded.output_format == "yaml"

    def test_env_var_location(self, tmp_path, monkeypatch):
        """TSDOCGEN_CONFIG points at the configuration file."""
        path = tmp_path / "custom.yaml"
        path.write_text("output_format: yaml\n")
        monkeypatch.setenv("TSDOCGEN_CONFIG", str(path))

        assert load_config().output_format == "yaml"

    def test_cwd_default_location(self, tmp_path, monkeypatch):
        """./tsdocgen.yml is found in the working directory."""
        (tmp_path / "tsdocgen.yml").write_text("prop_filter:\n  skipPropsWithoutDoc: true\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("TSDOCGEN_CONFIG", raising=False)

        assert load_config().prop_filter.skip_props_without_doc is True

    def test_malformed_yaml_raises(self, tmp_path):
        """Broken YAML is a configuration error."""
        path = tmp_path / "tsdocgen.yaml"
        path.write_text("prop_filter: [unclosed\n")

        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_non_mapping_raises(self, tmp_path):
        """A YAML list is rejected."""
        path = tmp_path / "tsdocgen.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)

    def test_invalid_output_format(self):
        """Only json and yaml are supported."""
        with pytest.raises(ConfigurationError):
            DocgenConfig(output_format="xml")
