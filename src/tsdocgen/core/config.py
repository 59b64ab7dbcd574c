"""Configuration management for tsdocgen.

Two kinds of configuration live here:
- Compiler options, the subset of a tsconfig ``compilerOptions`` block the
  type resolver understands (plus the built-in defaults)
- DocgenConfig, the tool settings loaded from tsdocgen.yaml
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from .exceptions import CompilerOptionsError, ConfigurationError
from .types import StaticPropFilter


class JsxEmit(str, Enum):
    """Values of the ``jsx`` compiler option."""

    PRESERVE = "preserve"
    REACT = "react"
    REACT_NATIVE = "react-native"
    REACT_JSX = "react-jsx"
    REACT_JSXDEV = "react-jsxdev"


class ModuleKind(str, Enum):
    """Values of the ``module`` compiler option."""

    NONE = "none"
    COMMONJS = "commonjs"
    AMD = "amd"
    UMD = "umd"
    SYSTEM = "system"
    ES2015 = "es2015"
    ES6 = "es6"
    ES2020 = "es2020"
    ES2022 = "es2022"
    ESNEXT = "esnext"
    NODE16 = "node16"
    NODENEXT = "nodenext"
    PRESERVE = "preserve"


class ScriptTarget(str, Enum):
    """Values of the ``target`` compiler option."""

    ES3 = "es3"
    ES5 = "es5"
    ES6 = "es6"
    ES2015 = "es2015"
    ES2016 = "es2016"
    ES2017 = "es2017"
    ES2018 = "es2018"
    ES2019 = "es2019"
    ES2020 = "es2020"
    ES2021 = "es2021"
    ES2022 = "es2022"
    ES2023 = "es2023"
    ESNEXT = "esnext"

    LATEST = "esnext"


@dataclass(frozen=True)
class CompilerOptions:
    """Compiler options understood by the type resolver."""

    jsx: JsxEmit | None = None
    module: ModuleKind | None = None
    target: ScriptTarget | None = None
    strict: bool = False
    strict_null_checks: bool | None = None
    allow_js: bool = False
    base_url: Path | None = None
    paths: dict[str, list[str]] = field(default_factory=dict)

    @property
    def includes_undefined_in_optionals(self) -> bool:
        """Whether optional members are typed ``T | undefined``."""
        if self.strict_null_checks is not None:
            return self.strict_null_checks
        return self.strict

    def with_overrides(self, **changes: Any) -> CompilerOptions:
        """Return a copy with some options replaced."""
        return replace(self, **changes)


DEFAULT_COMPILER_OPTIONS = CompilerOptions(
    jsx=JsxEmit.REACT,
    module=ModuleKind.COMMONJS,
    target=ScriptTarget.LATEST,
)


@dataclass(frozen=True)
class Diagnostic:
    """A problem found while converting compiler options."""

    message: str
    code: int
    file: str | None = None

    def __str__(self) -> str:
        return f"error TS{self.code}: {self.message}"


# compilerOptions key -> (field name, converter kind)
_MODELED_OPTIONS: dict[str, tuple[str, Any]] = {
    "jsx": ("jsx", JsxEmit),
    "module": ("module", ModuleKind),
    "target": ("target", ScriptTarget),
    "strict": ("strict", bool),
    "strictNullChecks": ("strict_null_checks", bool),
    "allowJs": ("allow_js", bool),
    "baseUrl": ("base_url", Path),
    "paths": ("paths", dict),
}

# Valid TypeScript options the resolver has no use for
_IGNORED_OPTIONS: frozenset[str] = frozenset({
    "allowArbitraryExtensions", "allowImportingTsExtensions", "allowSyntheticDefaultImports",
    "allowUmdGlobalAccess", "allowUnreachableCode", "allowUnusedLabels", "alwaysStrict",
    "checkJs", "composite", "declaration", "declarationDir", "declarationMap",
    "downlevelIteration", "emitBOM", "emitDeclarationOnly", "emitDecoratorMetadata",
    "esModuleInterop", "exactOptionalPropertyTypes", "experimentalDecorators",
    "forceConsistentCasingInFileNames", "importHelpers", "importsNotUsedAsValues",
    "incremental", "inlineSourceMap", "inlineSources", "isolatedModules",
    "jsxFactory", "jsxFragmentFactory", "jsxImportSource", "lib", "listEmittedFiles",
    "listFiles", "mapRoot", "maxNodeModuleJsDepth", "moduleDetection", "moduleResolution",
    "moduleSuffixes", "newLine", "noEmit", "noEmitHelpers", "noEmitOnError",
    "noErrorTruncation", "noFallthroughCasesInSwitch", "noImplicitAny",
    "noImplicitOverride", "noImplicitReturns", "noImplicitThis", "noLib",
    "noPropertyAccessFromIndexSignature", "noResolve", "noUncheckedIndexedAccess",
    "noUnusedLocals", "noUnusedParameters", "outDir", "outFile", "preserveConstEnums",
    "preserveSymlinks", "preserveValueImports", "pretty", "reactNamespace",
    "removeComments", "resolveJsonModule", "resolvePackageJsonExports",
    "resolvePackageJsonImports", "rootDir", "rootDirs", "skipDefaultLibCheck",
    "skipLibCheck", "sourceMap", "sourceRoot", "strictBindCallApply",
    "strictFunctionTypes", "strictPropertyInitialization", "stripInternal",
    "suppressExcessPropertyErrors", "suppressImplicitAnyIndexErrors", "traceResolution",
    "tsBuildInfoFile", "typeRoots", "types", "useDefineForClassFields",
    "useUnknownInCatchVariables", "verbatimModuleSyntax",
})


def _convert_value(
    key: str,
    kind: Any,
    value: Any,
    base_path: Path,
) -> tuple[Any, Diagnostic | None]:
    if kind is bool:
        if not isinstance(value, bool):
            return None, Diagnostic(
                f"Compiler option '{key}' requires a value of type boolean.", 5024
            )
        return value, None

    if kind is Path:
        if not isinstance(value, str):
            return None, Diagnostic(
                f"Compiler option '{key}' requires a value of type string.", 5024
            )
        return (base_path / value).resolve(), None

    if kind is dict:
        if not isinstance(value, dict) or not all(
            isinstance(v, list) and all(isinstance(p, str) for p in v) for v in value.values()
        ):
            return None, Diagnostic(
                f"Compiler option '{key}' requires a value of type object.", 5024
            )
        return {k: list(v) for k, v in value.items()}, None

    if not isinstance(value, str):
        return None, Diagnostic(
            f"Compiler option '{key}' requires a value of type string.", 5024
        )
    try:
        return kind(value.lower()), None
    except ValueError:
        allowed = ", ".join(f"'{member.value}'" for member in kind)
        return None, Diagnostic(f"Argument for '--{key}' option must be: {allowed}.", 6046)


def convert_compiler_options_from_json(
    json_options: dict[str, Any] | None,
    base_path: Path | str,
    config_file_name: str | None = None,
) -> tuple[CompilerOptions, list[Diagnostic]]:
    """Convert a tsconfig ``compilerOptions`` block.

    Args:
        json_options: The raw ``compilerOptions`` mapping (None = empty)
        base_path: Directory that relative paths are resolved against
        config_file_name: Config file the options came from, for diagnostics

    Returns:
        Tuple of converted options and the diagnostics found. Options with
        errors are left at their defaults.
    """
    base_path = Path(base_path)
    diagnostics: list[Diagnostic] = []
    values: dict[str, Any] = {}

    if json_options is None:
        return CompilerOptions(), diagnostics

    if not isinstance(json_options, dict):
        diagnostics.append(
            Diagnostic("'compilerOptions' should be an object.", 5024, config_file_name)
        )
        return CompilerOptions(), diagnostics

    for key, value in json_options.items():
        if key in _MODELED_OPTIONS:
            field_name, kind = _MODELED_OPTIONS[key]
            converted, diagnostic = _convert_value(key, kind, value, base_path)
            if diagnostic is not None:
                diagnostics.append(replace(diagnostic, file=config_file_name))
            else:
                values[field_name] = converted
        elif key not in _IGNORED_OPTIONS:
            diagnostics.append(
                Diagnostic(f"Unknown compiler option '{key}'.", 5023, config_file_name)
            )

    # paths are resolved against baseUrl, or the config directory without one
    if "paths" in values and "base_url" not in values:
        values["base_url"] = base_path.resolve()

    return CompilerOptions(**values), diagnostics


def load_compiler_options(tsconfig_path: Path | str) -> CompilerOptions:
    """Load compiler options from a tsconfig file.

    Raises:
        ConfigurationError: If the file cannot be read or is not valid JSON
        CompilerOptionsError: For the first conversion diagnostic
    """
    path = Path(tsconfig_path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            config_json = json.load(f)
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read tsconfig file: {path}",
            {"path": str(path), "error": str(e)},
        ) from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Failed to parse tsconfig file: {path}",
            {"path": str(path), "error": str(e)},
        ) from e

    if not isinstance(config_json, dict):
        raise ConfigurationError(
            f"tsconfig file must contain a JSON object: {path}", {"path": str(path)}
        )

    options, errors = convert_compiler_options_from_json(
        config_json.get("compilerOptions"),
        path.parent,
        str(path),
    )
    if errors:
        raise CompilerOptionsError(errors[0], str(path))
    return options


@dataclass
class DocgenConfig:
    """Tool configuration for tsdocgen.

    This configuration can be loaded from:
    - tsdocgen.yaml in the working directory
    - The TSDOCGEN_CONFIG environment variable
    - Programmatic configuration
    """

    tsconfig: Path | None = None
    prop_filter: StaticPropFilter = field(default_factory=StaticPropFilter)
    output_format: str = "json"

    def __post_init__(self) -> None:
        if isinstance(self.tsconfig, str):
            self.tsconfig = Path(self.tsconfig)
        if isinstance(self.prop_filter, dict):
            self.prop_filter = StaticPropFilter.from_dict(self.prop_filter)
        if self.output_format not in ("json", "yaml"):
            raise ConfigurationError(
                f"Unsupported output format: {self.output_format}",
                {"output_format": self.output_format},
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "tsconfig": str(self.tsconfig) if self.tsconfig else None,
            "prop_filter": self.prop_filter.to_dict(),
            "output_format": self.output_format,
        }

    def save(self, path: Path | str) -> None:
        """Save configuration to YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_path: Path | None = None) -> DocgenConfig:
        """Create configuration from dictionary.

        A relative ``tsconfig`` is resolved against base_path when given.
        """
        tsconfig = data.get("tsconfig")
        if tsconfig and base_path is not None:
            tsconfig = base_path / tsconfig
        return cls(
            tsconfig=Path(tsconfig) if tsconfig else None,
            prop_filter=StaticPropFilter.from_dict(data.get("prop_filter") or {}),
            output_format=data.get("output_format", "json"),
        )


def load_config(
    config_path: Path | str | None = None,
    search_paths: list[Path | str] | None = None,
) -> DocgenConfig:
    """Load tsdocgen configuration.

    Search order:
    1. Explicit config_path if provided
    2. TSDOCGEN_CONFIG environment variable
    3. search_paths if provided
    4. Default locations: ./tsdocgen.yaml, ./tsdocgen.yml

    Args:
        config_path: Explicit path to configuration file
        search_paths: Additional paths to search for configuration

    Returns:
        DocgenConfig instance

    Raises:
        ConfigurationError: If configuration file has errors
    """
    paths_to_check: list[Path] = []

    if config_path:
        paths_to_check.append(Path(config_path))

    if env_config := os.environ.get("TSDOCGEN_CONFIG"):
        paths_to_check.append(Path(env_config))

    if search_paths:
        paths_to_check.extend(Path(p) for p in search_paths)

    paths_to_check.extend([
        Path.cwd() / "tsdocgen.yaml",
        Path.cwd() / "tsdocgen.yml",
    ])

    for path in paths_to_check:
        if path.exists():
            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(
                    f"Failed to parse configuration file: {path}",
                    {"path": str(path), "error": str(e)},
                ) from e
            if data is not None and not isinstance(data, dict):
                raise ConfigurationError(
                    f"Configuration file must contain a mapping: {path}",
                    {"path": str(path)},
                )
            return DocgenConfig.from_dict(data or {}, base_path=path.parent)

    return DocgenConfig()
