"""Capabilities the documentation extractor needs from a type checker.

The extractor never touches syntax-tree types directly except in
DefaultPropsResolver; everything else goes through these protocols, so any
checker that can answer the same questions can drive it.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence


class JSDocTagProtocol(Protocol):
    """A ``@name text`` documentation tag."""

    name: str
    text: str


class DeclarationProtocol(Protocol):
    """Where a symbol is declared."""

    node: Any


class SymbolProtocol(Protocol):
    """A named entity: export, parameter or property."""

    name: str
    declarations: Sequence[Any]
    value_declaration: Any | None

    @property
    def is_optional(self) -> bool: ...
    def get_name(self) -> str: ...
    def get_documentation_comment(self) -> str: ...
    def get_js_doc_tags(self) -> Sequence[JSDocTagProtocol]: ...


class SignatureProtocol(Protocol):
    """A call or construct signature."""

    def get_parameters(self) -> Sequence[Any]: ...
    def get_return_type(self) -> Any: ...


class TypeProtocol(Protocol):
    """A resolved type."""

    symbol: Any | None

    def get_properties(self) -> Sequence[Any]: ...
    def get_property(self, name: str) -> Any | None: ...
    def get_call_signatures(self) -> Sequence[SignatureProtocol]: ...
    def get_construct_signatures(self) -> Sequence[SignatureProtocol]: ...


class CheckerProtocol(Protocol):
    """Symbol and type queries over one program."""

    def get_symbol_at_location(self, location: Any, source_file: Any = None) -> Any | None: ...
    def get_exports_of_module(self, module_symbol: Any) -> Sequence[Any]: ...
    def get_type_of_symbol_at_location(self, symbol: Any, location: Any) -> Any: ...
    def get_root_symbols(self, symbol: Any) -> Sequence[Any]: ...
    def type_to_string(self, t: Any) -> str: ...


class ProgramProtocol(Protocol):
    """A compilation: its source files and checker."""

    def get_source_file(self, file_name: Any) -> Any | None: ...
    def get_type_checker(self) -> CheckerProtocol: ...
