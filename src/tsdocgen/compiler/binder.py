"""Binder: builds the symbol tables of a source file.

Only module-level declarations are bound; members, parameters and
expression symbols are created on demand by the checker.
"""

from __future__ import annotations

import logging

from tree_sitter import Node

from .source_file import SourceFile, named_children, unquote
from .symbols import AliasTarget, Declaration, InternalSymbolName, Symbol, SymbolFlags

logger = logging.getLogger(__name__)

_DECLARATION_FLAGS: dict[str, SymbolFlags] = {
    "function_declaration": SymbolFlags.FUNCTION,
    "generator_function_declaration": SymbolFlags.FUNCTION,
    "function_signature": SymbolFlags.FUNCTION,
    "class_declaration": SymbolFlags.CLASS,
    "abstract_class_declaration": SymbolFlags.CLASS,
    "interface_declaration": SymbolFlags.INTERFACE,
    "type_alias_declaration": SymbolFlags.TYPE_ALIAS,
    "enum_declaration": SymbolFlags.ENUM,
    # Only reachable through ``export default``
    "class": SymbolFlags.CLASS,
    "function_expression": SymbolFlags.FUNCTION,
    "function": SymbolFlags.FUNCTION,
    "generator_function": SymbolFlags.FUNCTION,
}

_DEFAULT_EXPORTABLE_EXPRESSIONS = frozenset({"class", "function_expression", "function", "generator_function"})


class Binder:
    """Binds one source file."""

    def __init__(self, source: SourceFile) -> None:
        self.source = source

    def bind(self) -> None:
        source = self.source
        for statement in source.root.named_children:
            if statement.type == "import_statement":
                source.is_external_module = True
                self._bind_import(statement)
            elif statement.type == "export_statement":
                source.is_external_module = True
                self._bind_export(statement)
            else:
                self._bind_declaration(statement)

        if source.is_external_module:
            module = Symbol(f'"{source.file_name}"', SymbolFlags.VALUE_MODULE)
            module.declarations.append(Declaration(source.root, source))
            module.exports = source.exports
            source.symbol = module
            for symbol in source.exports.values():
                if symbol.parent is None:
                    symbol.parent = module

        logger.debug(
            f"Bound {source.file_name}: {len(source.locals)} locals, "
            f"{len(source.exports)} exports, {len(source.export_stars)} export stars"
        )

    # --- declarations -------------------------------------------------------

    def _declare(self, name: str, node: Node, flags: SymbolFlags, name_node: Node | None) -> Symbol:
        declaration = Declaration(node, self.source)
        symbol = self.source.locals.get(name)
        if symbol is not None and not symbol.flags & SymbolFlags.ALIAS:
            symbol.add_declaration(declaration, flags)
        else:
            symbol = Symbol(name, flags, [declaration])
            self.source.locals[name] = symbol
        if name_node is not None:
            self.source.declared_names[(name_node.start_byte, name_node.end_byte)] = symbol
        return symbol

    def _bind_declaration(self, node: Node, default_export: bool = False) -> list[Symbol]:
        """Bind a module-level declaration; returns the symbols it declares."""
        if node.type == "ambient_declaration":
            inner = next(named_children(node), None)
            return self._bind_declaration(inner, default_export) if inner is not None else []

        if node.type in ("lexical_declaration", "variable_declaration"):
            symbols: list[Symbol] = []
            for declarator in named_children(node):
                if declarator.type != "variable_declarator":
                    continue
                name_node = declarator.child_by_field_name("name")
                if name_node is None or name_node.type != "identifier":
                    continue
                name = self.source.text_of(name_node)
                symbols.append(self._declare(name, declarator, SymbolFlags.VARIABLE, name_node))
            return symbols

        flags = _DECLARATION_FLAGS.get(node.type)
        if flags is None:
            return []

        name_node = node.child_by_field_name("name")
        if name_node is None:
            if not default_export:
                return []
            symbol = Symbol(InternalSymbolName.DEFAULT, flags, [Declaration(node, self.source)])
            return [symbol]

        name = self.source.text_of(name_node)
        symbol = self._declare(name, node, flags, name_node)
        if default_export:
            symbol.name = InternalSymbolName.DEFAULT
        return [symbol]

    # --- imports / exports --------------------------------------------------

    def _module_specifier(self, node: Node) -> str | None:
        source_node = node.child_by_field_name("source")
        if source_node is None:
            return None
        specifier = unquote(source_node, self.source)
        if specifier not in self.source.module_specifiers:
            self.source.module_specifiers.append(specifier)
        return specifier

    def _alias(self, name: str, node: Node, target: AliasTarget) -> Symbol:
        symbol = Symbol(name, SymbolFlags.ALIAS, [Declaration(node, self.source)])
        symbol.alias_target = target
        return symbol

    def _bind_import(self, node: Node) -> None:
        specifier = self._module_specifier(node)
        if specifier is None:
            return
        for clause in named_children(node):
            if clause.type != "import_clause":
                continue
            for child in named_children(clause):
                if child.type == "identifier":
                    name = self.source.text_of(child)
                    self.source.locals[name] = self._alias(
                        name, clause, AliasTarget(InternalSymbolName.DEFAULT, specifier)
                    )
                elif child.type == "namespace_import":
                    ident = next((c for c in named_children(child) if c.type == "identifier"), None)
                    if ident is not None:
                        name = self.source.text_of(ident)
                        self.source.locals[name] = self._alias(name, child, AliasTarget("*", specifier))
                elif child.type == "named_imports":
                    for spec in named_children(child):
                        if spec.type != "import_specifier":
                            continue
                        imported = self.source.text_of(spec.child_by_field_name("name"))
                        alias_node = spec.child_by_field_name("alias")
                        local = self.source.text_of(alias_node) if alias_node is not None else imported
                        self.source.locals[local] = self._alias(local, spec, AliasTarget(imported, specifier))

    def _export(self, name: str, symbol: Symbol) -> None:
        # First position wins; later declarations merge into the same symbol
        if name not in self.source.exports:
            self.source.exports[name] = symbol

    def _bind_export(self, node: Node) -> None:
        is_default = any(child.type == "default" for child in node.children)
        specifier = self._module_specifier(node)

        declaration = node.child_by_field_name("declaration")
        if declaration is not None:
            for symbol in self._bind_declaration(declaration, default_export=is_default):
                self._export(symbol.name, symbol)
            return

        value = node.child_by_field_name("value")
        if value is not None:
            if is_default and value.type in _DEFAULT_EXPORTABLE_EXPRESSIONS:
                for symbol in self._bind_declaration(value, default_export=True):
                    self._export(symbol.name, symbol)
            elif is_default:
                self._bind_default_expression(node, value)
            else:
                logger.debug(f"Ignoring 'export =' in {self.source.file_name}")
            return

        for child in named_children(node):
            if child.type == "export_clause":
                for spec in named_children(child):
                    if spec.type != "export_specifier":
                        continue
                    local = self.source.text_of(spec.child_by_field_name("name"))
                    alias_node = spec.child_by_field_name("alias")
                    exported = self.source.text_of(alias_node) if alias_node is not None else local
                    self._export(exported, self._alias(exported, spec, AliasTarget(local, specifier)))
                return
            if child.type == "namespace_export" and specifier is not None:
                ident = next(named_children(child), None)
                if ident is not None:
                    name = self.source.text_of(ident)
                    self._export(name, self._alias(name, child, AliasTarget("*", specifier)))
                return

        if specifier is not None and any(child.type == "*" for child in node.children):
            self.source.export_stars.append(specifier)

    def _bind_default_expression(self, node: Node, value: Node) -> None:
        if value.type == "identifier":
            local = self.source.text_of(value)
            symbol = self._alias(InternalSymbolName.DEFAULT, node, AliasTarget(local))
        else:
            symbol = Symbol(
                InternalSymbolName.DEFAULT,
                SymbolFlags.PROPERTY,
                [Declaration(value, self.source)],
            )
        self._export(InternalSymbolName.DEFAULT, symbol)


def bind_source_file(source: SourceFile) -> None:
    """Populate a source file's locals, exports and module symbol."""
    Binder(source).bind()
