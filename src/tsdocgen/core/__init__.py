"""Core types and configuration for tsdocgen."""

from .types import (
    Component,
    ComponentDoc,
    DefaultValue,
    JSDoc,
    ParserOptions,
    PropFilter,
    PropItem,
    PropItemType,
    Props,
    StaticPropFilter,
)
from .config import (
    DEFAULT_COMPILER_OPTIONS,
    CompilerOptions,
    Diagnostic,
    DocgenConfig,
    JsxEmit,
    ModuleKind,
    ScriptTarget,
    convert_compiler_options_from_json,
    load_compiler_options,
    load_config,
)
from .exceptions import (
    TsDocgenError,
    ConfigurationError,
    CompilerOptionsError,
    SourceFileNotFoundError,
)

__all__ = [
    # Types
    "Component",
    "ComponentDoc",
    "DefaultValue",
    "JSDoc",
    "ParserOptions",
    "PropFilter",
    "PropItem",
    "PropItemType",
    "Props",
    "StaticPropFilter",
    # Config
    "DEFAULT_COMPILER_OPTIONS",
    "CompilerOptions",
    "Diagnostic",
    "DocgenConfig",
    "JsxEmit",
    "ModuleKind",
    "ScriptTarget",
    "convert_compiler_options_from_json",
    "load_compiler_options",
    "load_config",
    # Exceptions
    "TsDocgenError",
    "ConfigurationError",
    "CompilerOptionsError",
    "SourceFileNotFoundError",
]
