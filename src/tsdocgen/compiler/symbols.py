"""Symbols and declarations.

A Symbol is a named entity (module, function, class, interface, property,
parameter...). Declared symbols point at their syntax; transient symbols are
produced by the checker for instantiated, mapped or merged members and
remember the symbols they were derived from.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from typing import TYPE_CHECKING, Callable

from tree_sitter import Node

from .jsdoc import JSDocTagInfo, leading_jsdoc
from .source_file import SourceFile

if TYPE_CHECKING:
    from .types import Type


class SymbolFlags(IntFlag):
    """Meaning of a symbol."""

    NONE = 0
    VARIABLE = 1 << 0
    PROPERTY = 1 << 1
    FUNCTION = 1 << 2
    CLASS = 1 << 3
    INTERFACE = 1 << 4
    TYPE_ALIAS = 1 << 5
    ENUM = 1 << 6
    METHOD = 1 << 7
    PARAMETER = 1 << 8
    ALIAS = 1 << 9
    VALUE_MODULE = 1 << 10
    TYPE_PARAMETER = 1 << 11
    OPTIONAL = 1 << 12
    TRANSIENT = 1 << 13

    VALUE = VARIABLE | PROPERTY | FUNCTION | CLASS | ENUM | METHOD | PARAMETER
    TYPE = CLASS | INTERFACE | TYPE_ALIAS | ENUM | TYPE_PARAMETER


class InternalSymbolName:
    """Names the binder and checker give to anonymous entities."""

    DEFAULT = "default"
    FUNCTION = "__function"
    CLASS = "__class"
    TYPE = "__type"


@dataclass(frozen=True, eq=False)
class Declaration:
    """A syntax node declaring a symbol, with the file it lives in."""

    node: Node
    source_file: SourceFile


@dataclass(frozen=True)
class AliasTarget:
    """Where an alias symbol points.

    ``module_specifier`` None means a local name in the declaring file;
    ``name`` "*" means the whole module.
    """

    name: str
    module_specifier: str | None = None


class Symbol:
    """A named entity known to the checker."""

    def __init__(
        self,
        name: str,
        flags: SymbolFlags,
        declarations: list[Declaration] | None = None,
        parent: Symbol | None = None,
    ) -> None:
        self.name = name
        self.flags = flags
        self.declarations: list[Declaration] = []
        self.value_declaration: Declaration | None = None
        self.parent = parent

        self.exports: dict[str, Symbol] = {}
        self.alias_target: AliasTarget | None = None
        self.origins: tuple[Symbol, ...] = ()
        self.target: Symbol | None = None

        self.type_resolver: Callable[[], Type] | None = None
        self.resolved_type: Type | None = None
        self.declared_type: Type | None = None

        for declaration in declarations or []:
            self.add_declaration(declaration, flags)

    def add_declaration(self, declaration: Declaration, flags: SymbolFlags) -> None:
        """Record another declaration, merging its meaning into this symbol."""
        self.flags |= flags
        self.declarations.append(declaration)
        if self.value_declaration is None and flags & SymbolFlags.VALUE:
            self.value_declaration = declaration

    def get_name(self) -> str:
        return self.name

    @property
    def is_optional(self) -> bool:
        return bool(self.flags & SymbolFlags.OPTIONAL)

    @property
    def is_transient(self) -> bool:
        return bool(self.flags & SymbolFlags.TRANSIENT)

    def get_documentation_comment(self) -> str:
        """Plain-text documentation from every declaration's JSDoc.

        Transient symbols carry no documentation of their own.
        """
        if self.is_transient:
            return ""
        parts: list[str] = []
        for declaration in self.declarations:
            for doc in leading_jsdoc(declaration.node, declaration.source_file):
                if doc.comment:
                    parts.append(doc.comment)
        return "\n".join(parts)

    def get_js_doc_tags(self) -> list[JSDocTagInfo]:
        """Tags from every declaration's JSDoc, in declaration order."""
        if self.is_transient:
            return []
        tags: list[JSDocTagInfo] = []
        for declaration in self.declarations:
            for doc in leading_jsdoc(declaration.node, declaration.source_file):
                tags.extend(doc.tags)
        return tags

    def __repr__(self) -> str:
        return f"Symbol({self.name!r}, {self.flags!r})"


def create_transient_symbol(
    name: str,
    flags: SymbolFlags,
    origins: tuple[Symbol, ...] = (),
    target: Symbol | None = None,
    type_resolver: Callable[[], Type] | None = None,
) -> Symbol:
    """Create a checker-made symbol derived from other symbols.

    Declarations are inherited from the first origin (or the target) so that
    the symbol can still be resolved in its declaring context.
    """
    symbol = Symbol(name, flags | SymbolFlags.TRANSIENT)
    symbol.origins = origins
    symbol.target = target
    symbol.type_resolver = type_resolver
    source = target if target is not None else (origins[0] if origins else None)
    if source is not None:
        symbol.declarations = list(source.declarations)
        symbol.value_declaration = source.value_declaration
        symbol.parent = source.parent
    return symbol
