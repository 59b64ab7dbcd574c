"""Type checker over a Program.

The checker answers the questions the documentation extractor asks: which
symbols a module exports, what type a symbol has, which properties and
signatures that type exposes, and which symbols an alias or instantiated
member was derived from. Types are computed on demand and memoized on the
symbols they belong to.

This is not a full TypeScript checker. It understands declarations and
annotations, infers types from simple initializers, follows imports and
re-exports between loaded files, and knows the handful of React and
utility types component props are usually written with. Anything else
resolves to an unresolved type that renders as written.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING, Callable, Sequence

from tree_sitter import Node

from .source_file import CLASS_DECLARATION_TYPES, SourceFile, has_token, named_children, normalize_whitespace, unquote
from .symbols import Declaration, InternalSymbolName, Symbol, SymbolFlags, create_transient_symbol
from .types import (
    ANY,
    BOOLEAN,
    INTRINSIC_TYPES,
    NULL,
    NUMBER,
    STRING,
    UNDEFINED,
    VOID,
    ArrayType,
    EnumType,
    IntersectionType,
    LiteralType,
    ObjectType,
    Signature,
    TupleType,
    Type,
    TypeFlags,
    TypeParameter,
    UnionType,
    UnresolvedType,
    make_union,
    symbol_type,
    type_to_string,
)

if TYPE_CHECKING:
    from .program import Program

logger = logging.getLogger(__name__)

Mapper = dict[str, Type]

REACT_MODULES = frozenset({"react", "preact/compat"})
REACT_FUNCTION_COMPONENT_TYPES = frozenset({
    "FC",
    "FunctionComponent",
    "SFC",
    "StatelessComponent",
    "VFC",
    "VoidFunctionComponent",
})
REACT_COMPONENT_CLASSES = frozenset({"Component", "PureComponent"})
REACT_WRAPPER_TYPES = {
    "memo": "MemoExoticComponent",
    "forwardRef": "ForwardRefExoticComponent",
}
REACT_ELEMENT = "ReactElement | null"

FUNCTION_NODE_TYPES = frozenset({
    "function_declaration",
    "generator_function_declaration",
    "function_signature",
    "function_expression",
    "function",
    "generator_function",
    "arrow_function",
})

MAPPED_UTILITY_TYPES = frozenset({"Partial", "Required", "Readonly"})
KEYED_UTILITY_TYPES = frozenset({"Pick", "Omit"})

_TYPE_ANNOTATION_NODES = frozenset({"type_annotation", "opting_type_annotation", "omitting_type_annotation"})
# Tuple members kept as written
_TUPLE_MEMBER_NODES = frozenset({
    "optional_type",
    "rest_type",
    "required_parameter",
    "optional_parameter",
    "tuple_parameter",
    "optional_tuple_parameter",
})


class TypeChecker:
    """Resolves symbols and types for the files of a Program."""

    def __init__(self, program: Program) -> None:
        self.program = program
        self.options = program.get_compiler_options()
        self._expression_types: dict[tuple[str, int, int, str], Type] = {}
        self._resolving_aliases: set[int] = set()

    # --- symbols ------------------------------------------------------------

    def get_symbol_at_location(self, location: Node | SourceFile, source_file: SourceFile | None = None) -> Symbol | None:
        """Get the symbol declared at a location.

        Args:
            location: A source file (yields its module symbol) or the name
                node of a module-level declaration
            source_file: File the node belongs to; searched across all files
                when omitted

        Returns:
            The symbol, or None when nothing is declared there
        """
        if isinstance(location, SourceFile):
            return location.symbol
        key = (location.start_byte, location.end_byte)
        files = [source_file] if source_file is not None else self.program.get_source_files()
        for source in files:
            symbol = source.declared_names.get(key)
            if symbol is not None:
                return symbol
        return None

    def get_exports_of_module(self, module_symbol: Symbol) -> list[Symbol]:
        """Exported symbols of a module: own exports first, then ``export *``."""
        source = _source_of(module_symbol)
        if source is None:
            return list(module_symbol.exports.values())
        return list(self._collect_exports(source, set()).values())

    def _collect_exports(self, source: SourceFile, visited: set[str]) -> dict[str, Symbol]:
        visited.add(source.file_name)
        exports = dict(source.exports)
        for specifier in source.export_stars:
            target = self.program.get_source_file_for_module(specifier, source.file_name)
            if target is None:
                logger.debug(f"Skipping unresolved 'export * from \"{specifier}\"' in {source.file_name}")
                continue
            if target.file_name in visited:
                continue
            for name, symbol in self._collect_exports(target, visited).items():
                if name != InternalSymbolName.DEFAULT and name not in exports:
                    exports[name] = symbol
        return exports

    def resolve_alias(self, symbol: Symbol) -> Symbol | None:
        """Follow an alias chain to the symbol it finally names."""
        seen: set[int] = set()
        current: Symbol | None = symbol
        while current is not None and current.flags & SymbolFlags.ALIAS:
            if id(current) in seen:
                logger.debug(f"Circular alias '{symbol.name}'")
                return None
            seen.add(id(current))
            current = self._resolve_alias_once(current)
        return current

    def _resolve_alias_once(self, symbol: Symbol) -> Symbol | None:
        target = symbol.alias_target
        if target is None or not symbol.declarations:
            return None
        declaring = symbol.declarations[0].source_file
        if target.module_specifier is None:
            return declaring.locals.get(target.name)
        module = self.program.get_source_file_for_module(target.module_specifier, declaring.file_name)
        if module is None:
            return None
        if target.name == "*":
            return module.symbol
        return self._collect_exports(module, set()).get(target.name)

    def _react_import_name(self, symbol: Symbol | None) -> str | None:
        """Name a local alias imports from React ("*", "default", "FC"...), if any."""
        if symbol is None or not symbol.flags & SymbolFlags.ALIAS or symbol.alias_target is None:
            return None
        target = symbol.alias_target
        if target.module_specifier in REACT_MODULES:
            return target.name
        return None

    def get_root_symbols(self, symbol: Symbol) -> list[Symbol]:
        """Symbols an alias, instantiated or synthesized symbol derives from."""
        if symbol.origins:
            return list(symbol.origins)
        if symbol.target is not None:
            return [symbol.target]
        if symbol.flags & SymbolFlags.ALIAS:
            resolved = self.resolve_alias(symbol)
            if resolved is not None:
                return [resolved]
        return [symbol]

    # --- types of values ----------------------------------------------------

    def get_type_of_symbol_at_location(self, symbol: Symbol, location: Node | None = None) -> Type:
        """Type of a value symbol.

        The location only matters for narrowing, which this checker does not
        do; it is accepted for interface compatibility.
        """
        return self.get_type_of_symbol(symbol)

    def get_type_of_symbol(self, symbol: Symbol) -> Type:
        if symbol.flags & SymbolFlags.ALIAS:
            target = self.resolve_alias(symbol)
            return self.get_type_of_symbol(target) if target is not None else ANY
        if symbol.type_resolver is not None:
            return symbol_type(symbol)
        if symbol.resolved_type is not None:
            return symbol.resolved_type
        symbol.resolved_type = ANY  # recursion guard
        symbol.resolved_type = self._compute_type_of_symbol(symbol)
        return symbol.resolved_type

    def _compute_type_of_symbol(self, symbol: Symbol) -> Type:
        declaration = symbol.value_declaration
        if declaration is None or symbol.flags & SymbolFlags.VALUE_MODULE:
            return ANY
        node, source = declaration.node, declaration.source_file

        if symbol.flags & SymbolFlags.CLASS and node.type in CLASS_DECLARATION_TYPES:
            return self._class_constructor_type(symbol, declaration)
        if symbol.flags & SymbolFlags.FUNCTION and node.type in FUNCTION_NODE_TYPES:
            return self._function_declaration_type(symbol)
        if node.type == "variable_declarator":
            return self._variable_type(node, source)
        if symbol.flags & SymbolFlags.ENUM:
            return EnumType(symbol)
        # export default <expression>
        return self._type_of_expression(node, source)

    def _function_declaration_type(self, symbol: Symbol) -> Type:
        declarations = [d for d in symbol.declarations if d.node.type in FUNCTION_NODE_TYPES]
        # With overloads, the implementation signature is not callable
        overloads = [d for d in declarations if d.node.child_by_field_name("body") is None]
        signatures = [self._signature_from_node(d.node, d.source_file, {}) for d in overloads or declarations]
        return ObjectType(symbol, "typeof", call_signatures=signatures)

    def _variable_type(self, declarator: Node, source: SourceFile) -> Type:
        annotation = declarator.child_by_field_name("type")
        if annotation is not None:
            return self._type_from_annotation(annotation, source, {})
        value = declarator.child_by_field_name("value")
        if value is not None:
            return self._type_of_expression(value, source)
        return ANY

    def _type_of_expression(self, node: Node, source: SourceFile) -> Type:
        key = (source.file_name, node.start_byte, node.end_byte, node.type)
        cached = self._expression_types.get(key)
        if cached is None:
            cached = self._compute_expression_type(node, source)
            self._expression_types[key] = cached
        return cached

    def _compute_expression_type(self, node: Node, source: SourceFile) -> Type:
        kind = node.type
        if kind in FUNCTION_NODE_TYPES:
            symbol = Symbol(InternalSymbolName.FUNCTION, SymbolFlags.FUNCTION, [Declaration(node, source)])
            t = ObjectType(symbol, call_signatures=[self._signature_from_node(node, source, {})])
            symbol.resolved_type = t
            return t
        if kind == "class":
            name_node = node.child_by_field_name("name")
            name = source.text_of(name_node) if name_node is not None else InternalSymbolName.CLASS
            symbol = Symbol(name, SymbolFlags.CLASS, [Declaration(node, source)])
            t = self._class_constructor_type(symbol, symbol.declarations[0])
            symbol.resolved_type = t
            return t
        if kind == "identifier":
            name = source.text_of(node)
            if name == "undefined":
                return UNDEFINED
            symbol = source.locals.get(name)
            if symbol is not None and symbol.flags & (SymbolFlags.VALUE | SymbolFlags.ALIAS):
                return self.get_type_of_symbol(symbol)
            return ANY
        if kind in ("parenthesized_expression", "satisfies_expression", "non_null_expression"):
            inner = next(named_children(node), None)
            return self._type_of_expression(inner, source) if inner is not None else ANY
        if kind == "as_expression":
            children = list(named_children(node))
            if len(children) >= 2:
                return self._type_from_node(children[-1], source, {})
            return self._type_of_expression(children[0], source) if children else ANY
        if kind == "call_expression":
            return self._call_expression_type(node, source)
        if kind == "string":
            return LiteralType.string(unquote(node, source))
        if kind == "template_string":
            return STRING
        if kind == "number":
            return LiteralType.number(source.text_of(node))
        if kind in ("true", "false"):
            return LiteralType.boolean(kind == "true")
        if kind == "null":
            return NULL
        if kind == "undefined":
            return UNDEFINED
        if kind == "object":
            return self._object_literal_type(node, source)
        if kind == "array":
            return ArrayType(ANY)
        return ANY

    def _widened_expression_type(self, node: Node, source: SourceFile) -> Type:
        t = self._type_of_expression(node, source)
        if t.flags & TypeFlags.STRING_LITERAL:
            return STRING
        if t.flags & TypeFlags.BOOLEAN_LITERAL:
            return BOOLEAN
        if t.flags & TypeFlags.NUMBER_LITERAL:
            return NUMBER
        return t

    def _object_literal_type(self, node: Node, source: SourceFile) -> Type:
        symbol = Symbol("__object", SymbolFlags.NONE, [Declaration(node, source)])

        def resolve() -> tuple[dict[str, Symbol], list[Signature], list[Signature]]:
            props: dict[str, Symbol] = {}
            for member in named_children(node):
                if member.type == "pair":
                    name = _property_name(member.child_by_field_name("key"), source)
                    value = member.child_by_field_name("value")
                    resolver = partial(self._widened_expression_type, value, source) if value is not None else None
                elif member.type == "shorthand_property_identifier":
                    name = source.text_of(member)
                    resolver = partial(self._type_of_expression, member, source)
                elif member.type == "method_definition":
                    name = _property_name(member.child_by_field_name("name"), source)
                    resolver = partial(self._function_value_type, member, source)
                else:
                    continue
                if name is None or name in props:
                    continue
                prop = Symbol(name, SymbolFlags.PROPERTY, [Declaration(member, source)], parent=symbol)
                prop.type_resolver = resolver
                props[name] = prop
            return props, [], []

        return ObjectType(symbol, resolver=resolve)

    def _function_value_type(self, node: Node, source: SourceFile, mapper: Mapper | None = None) -> Type:
        return ObjectType(call_signatures=[self._signature_from_node(node, source, mapper or {})])

    def _call_expression_type(self, node: Node, source: SourceFile) -> Type:
        callee = node.child_by_field_name("function")
        wrapper = self._react_value_name(callee, source) if callee is not None else None
        if wrapper not in REACT_WRAPPER_TYPES:
            return ANY

        arguments = node.child_by_field_name("arguments")
        inner = next(named_children(arguments), None) if arguments is not None else None
        type_arguments = _type_argument_nodes(node)

        # forwardRef<Ref, Props>(...) and memo<Props>(...)
        props_node = None
        if wrapper == "forwardRef" and len(type_arguments) >= 2:
            props_node = type_arguments[1]
        elif wrapper == "memo" and type_arguments:
            props_node = type_arguments[0]

        if props_node is not None:
            props_type = self._type_from_node(props_node, source, {})
            props = Symbol("props", SymbolFlags.PARAMETER, [Declaration(props_node, source)])
            props.type_resolver = _constant(props_type)
        else:
            origin = self._props_parameter_of(self._type_of_expression(inner, source)) if inner is not None else None
            if origin is None:
                logger.debug(f"Cannot determine props of {wrapper}() call in {source.file_name}")
                return ANY
            props = create_transient_symbol(
                "props",
                SymbolFlags.PARAMETER,
                origins=(origin,),
                type_resolver=partial(self.get_type_of_symbol, origin),
            )

        signature = Signature([props], UnresolvedType(REACT_ELEMENT))
        exotic = Symbol(REACT_WRAPPER_TYPES[wrapper], SymbolFlags.INTERFACE)
        return ObjectType(exotic, "interface", call_signatures=[signature])

    def _props_parameter_of(self, t: Type) -> Symbol | None:
        for signature in t.get_call_signatures():
            if signature.parameters:
                return signature.parameters[0]
        for signature in t.get_construct_signatures():
            props = signature.get_return_type().get_property("props")
            if props is not None:
                return props
        return None

    def _react_value_name(self, node: Node, source: SourceFile) -> str | None:
        """React export an expression refers to (``memo``, ``React.Component``...)."""
        if node.type == "identifier":
            name = self._react_import_name(source.locals.get(source.text_of(node)))
            return name if name not in (None, "*", InternalSymbolName.DEFAULT) else None
        if node.type == "member_expression":
            obj = node.child_by_field_name("object")
            prop = node.child_by_field_name("property")
            if obj is None or prop is None or obj.type != "identifier":
                return None
            if self._is_react_namespace(source.text_of(obj), source):
                return source.text_of(prop)
        return None

    def _is_react_namespace(self, name: str, source: SourceFile) -> bool:
        symbol = source.locals.get(name)
        if symbol is None:
            # UMD global
            return name == "React"
        return self._react_import_name(symbol) in ("*", InternalSymbolName.DEFAULT)

    # --- signatures ---------------------------------------------------------

    def _signature_from_node(self, node: Node, source: SourceFile, mapper: Mapper) -> Signature:
        mapper = dict(mapper)
        type_parameters = self._bind_type_parameters(node.child_by_field_name("type_parameters"), source, mapper)

        parameters: list[Symbol] = []
        params_node = node.child_by_field_name("parameters")
        if params_node is not None:
            parameters = self._parameters(params_node, source, mapper)
        else:
            # x => ... has a bare identifier parameter
            single = node.child_by_field_name("parameter")
            if single is not None:
                param = Symbol(source.text_of(single), SymbolFlags.PARAMETER, [Declaration(single, source)])
                param.type_resolver = _constant(ANY)
                parameters = [param]

        return_node = node.child_by_field_name("return_type")
        return_type: Callable[[], Type] | Type = ANY
        if return_node is not None:
            return_type = partial(self._type_from_annotation, return_node, source, mapper)
        return Signature(parameters, return_type, Declaration(node, source), type_parameters)

    def _parameters(self, params_node: Node, source: SourceFile, mapper: Mapper) -> list[Symbol]:
        result: list[Symbol] = []
        for param in named_children(params_node):
            if param.type not in ("required_parameter", "optional_parameter"):
                continue
            pattern = param.child_by_field_name("pattern")
            if pattern is None or pattern.type == "this":
                continue
            if pattern.type == "identifier":
                name = source.text_of(pattern)
            elif pattern.type == "rest_pattern":
                inner = next(named_children(pattern), None)
                name = source.text_of(inner) if inner is not None and inner.type == "identifier" else f"__{len(result)}"
            else:
                # Destructured parameters are named by position
                name = f"__{len(result)}"
            optional = param.type == "optional_parameter" or param.child_by_field_name("value") is not None
            flags = SymbolFlags.PARAMETER | (SymbolFlags.OPTIONAL if optional else SymbolFlags.NONE)
            symbol = Symbol(name, flags, [Declaration(param, source)])
            symbol.type_resolver = partial(self._parameter_type, param, source, mapper)
            result.append(symbol)
        return result

    def _parameter_type(self, param: Node, source: SourceFile, mapper: Mapper) -> Type:
        annotation = param.child_by_field_name("type")
        if annotation is not None:
            return self._type_from_annotation(annotation, source, mapper)
        value = param.child_by_field_name("value")
        if value is not None:
            return self._widened_expression_type(value, source)
        pattern = param.child_by_field_name("pattern")
        if pattern is not None and pattern.type == "rest_pattern":
            return ArrayType(ANY)
        return ANY

    def _bind_type_parameters(
        self,
        node: Node | None,
        source: SourceFile,
        mapper: Mapper,
        arguments: Sequence[Type] | None = None,
    ) -> list[TypeParameter]:
        """Add a declaration's type parameters to ``mapper``.

        With ``arguments`` the parameters are instantiated (missing arguments
        fall back to the parameter's default); otherwise they stay unbound.
        """
        if node is None:
            return []
        bound: list[TypeParameter] = []
        for index, param in enumerate(p for p in named_children(node) if p.type == "type_parameter"):
            name = source.text_of(param.child_by_field_name("name"))
            constraint_node = _wrapped_type(param.child_by_field_name("constraint"))
            default_node = _wrapped_type(param.child_by_field_name("value"))
            type_param = TypeParameter(name)
            mapper[name] = type_param
            if constraint_node is not None:
                type_param.constraint = self._type_from_node(constraint_node, source, mapper)
            bound.append(type_param)
            if arguments is None:
                continue
            if index < len(arguments):
                mapper[name] = arguments[index]
            elif default_node is not None:
                mapper[name] = self._type_from_node(default_node, source, mapper)
        return bound

    # --- types of type nodes ------------------------------------------------

    def _type_from_annotation(self, node: Node, source: SourceFile, mapper: Mapper) -> Type:
        if node.type in _TYPE_ANNOTATION_NODES:
            inner = next(named_children(node), None)
            if inner is None:
                return ANY
            node = inner
        if node.type in ("type_predicate", "type_predicate_annotation"):
            return BOOLEAN
        if node.type in ("asserts", "asserts_annotation"):
            return VOID
        return self._type_from_node(node, source, mapper)

    def _type_from_node(self, node: Node, source: SourceFile, mapper: Mapper) -> Type:
        kind = node.type
        if kind in _TYPE_ANNOTATION_NODES:
            return self._type_from_annotation(node, source, mapper)
        if kind == "predefined_type":
            return INTRINSIC_TYPES.get(source.text_of(node), ANY)
        if kind == "literal_type":
            return self._literal_type(node, source)
        if kind in ("undefined", "null"):
            return UNDEFINED if kind == "undefined" else NULL
        if kind == "type_identifier":
            return self._resolve_type_reference(source.text_of(node), [], node, source, mapper)
        if kind == "nested_type_identifier":
            return self._resolve_qualified_reference(node, [], node, source)
        if kind == "generic_type":
            name_node = node.child_by_field_name("name")
            arguments = [self._type_from_node(a, source, mapper) for a in _type_argument_nodes(node)]
            if name_node is not None and name_node.type == "nested_type_identifier":
                return self._resolve_qualified_reference(name_node, arguments, node, source)
            return self._resolve_type_reference(source.text_of(name_node), arguments, node, source, mapper)
        if kind == "union_type":
            return make_union(self._type_from_node(c, source, mapper) for c in named_children(node))
        if kind == "intersection_type":
            members: list[Type] = []
            for child in named_children(node):
                t = self._type_from_node(child, source, mapper)
                members.extend(t.types if isinstance(t, IntersectionType) and t.alias_name is None else [t])
            return IntersectionType(members)
        if kind == "parenthesized_type":
            inner = next(named_children(node), None)
            return self._type_from_node(inner, source, mapper) if inner is not None else ANY
        if kind == "array_type":
            inner = next(named_children(node), None)
            return ArrayType(self._type_from_node(inner, source, mapper) if inner is not None else ANY)
        if kind == "readonly_type":
            inner = next(named_children(node), None)
            t = self._type_from_node(inner, source, mapper) if inner is not None else ANY
            if isinstance(t, ArrayType):
                return ArrayType(t.element_type, readonly=True)
            if isinstance(t, TupleType):
                return TupleType(t.element_types, readonly=True)
            return t
        if kind == "tuple_type":
            return TupleType([self._tuple_element_type(c, source, mapper) for c in named_children(node)])
        if kind == "object_type":
            return self._type_literal(node, source, mapper)
        if kind == "function_type":
            return self._function_value_type(node, source, mapper)
        if kind == "constructor_type":
            return ObjectType(construct_signatures=[self._signature_from_node(node, source, mapper)])
        if kind == "type_query":
            target = next(named_children(node), None)
            if target is not None and target.type == "identifier":
                symbol = source.locals.get(source.text_of(target))
                if symbol is not None:
                    return self.get_type_of_symbol(symbol)
        return UnresolvedType(normalize_whitespace(source.text_of(node)))

    def _tuple_element_type(self, node: Node, source: SourceFile, mapper: Mapper) -> Type:
        if node.type in _TUPLE_MEMBER_NODES:
            return UnresolvedType(normalize_whitespace(source.text_of(node)))
        return self._type_from_node(node, source, mapper)

    def _literal_type(self, node: Node, source: SourceFile) -> Type:
        inner = next(named_children(node), None)
        if inner is None:
            return UnresolvedType(source.text_of(node))
        if inner.type == "string":
            return LiteralType.string(unquote(inner, source))
        if inner.type == "number":
            return LiteralType.number(source.text_of(inner))
        if inner.type in ("true", "false"):
            return LiteralType.boolean(inner.type == "true")
        if inner.type == "null":
            return NULL
        if inner.type == "undefined":
            return UNDEFINED
        if inner.type == "unary_expression":
            return LiteralType.number(normalize_whitespace(source.text_of(inner)).replace(" ", ""))
        return UnresolvedType(normalize_whitespace(source.text_of(node)))

    def _type_literal(self, node: Node, source: SourceFile, mapper: Mapper) -> ObjectType:
        symbol = Symbol(InternalSymbolName.TYPE, SymbolFlags.NONE, [Declaration(node, source)])

        def resolve() -> tuple[dict[str, Symbol], list[Signature], list[Signature]]:
            props: dict[str, Symbol] = {}
            calls: list[Signature] = []
            constructs: list[Signature] = []
            self._collect_members(node, source, mapper, symbol, props, calls, constructs)
            return props, calls, constructs

        return ObjectType(symbol, resolver=resolve)

    def _resolve_type_reference(
        self,
        name: str,
        arguments: list[Type],
        node: Node,
        source: SourceFile,
        mapper: Mapper,
    ) -> Type:
        if name in mapper and not arguments:
            return mapper[name]
        symbol = source.locals.get(name)
        if symbol is not None:
            if symbol.flags & SymbolFlags.ALIAS:
                react_name = self._react_import_name(symbol)
                if react_name is not None:
                    return self._react_type(react_name, arguments, node, source)
                resolved = self.resolve_alias(symbol)
                if resolved is None:
                    return UnresolvedType(normalize_whitespace(source.text_of(node)))
                symbol = resolved
            declared = self.get_declared_type(symbol, arguments)
            if declared is not None:
                return declared
        builtin = self._builtin_type(name, arguments)
        if builtin is not None:
            return builtin
        return UnresolvedType(normalize_whitespace(source.text_of(node)))

    def _resolve_qualified_reference(self, name_node: Node, arguments: list[Type], node: Node, source: SourceFile) -> Type:
        module_node = name_node.child_by_field_name("module")
        member_node = name_node.child_by_field_name("name")
        unresolved = UnresolvedType(normalize_whitespace(source.text_of(node)))
        if module_node is None or member_node is None or module_node.type != "identifier":
            return unresolved
        namespace = source.text_of(module_node)
        member = source.text_of(member_node)

        if self._is_react_namespace(namespace, source):
            return self._react_type(member, arguments, node, source)

        symbol = source.locals.get(namespace)
        if symbol is None or not symbol.flags & SymbolFlags.ALIAS:
            return unresolved
        module_symbol = self.resolve_alias(symbol)
        module = _source_of(module_symbol) if module_symbol is not None else None
        if module is None or module_symbol is not module.symbol:
            return unresolved
        exported = self._collect_exports(module, set()).get(member)
        if exported is not None and exported.flags & SymbolFlags.ALIAS:
            exported = self.resolve_alias(exported)
        declared = self.get_declared_type(exported, arguments) if exported is not None else None
        return declared if declared is not None else unresolved

    def _react_type(self, name: str, arguments: list[Type], node: Node, source: SourceFile) -> Type:
        if name not in REACT_FUNCTION_COMPONENT_TYPES:
            return UnresolvedType(normalize_whitespace(source.text_of(node)))
        props_type = arguments[0] if arguments else ObjectType()
        argument_nodes = _type_argument_nodes(node)
        props_node = argument_nodes[0] if argument_nodes else node
        props = Symbol("props", SymbolFlags.PARAMETER, [Declaration(props_node, source)])
        props.type_resolver = _constant(props_type)
        signature = Signature([props], UnresolvedType(REACT_ELEMENT))
        return ObjectType(Symbol(name, SymbolFlags.INTERFACE), "interface", call_signatures=[signature], type_arguments=arguments)

    # --- declared types -----------------------------------------------------

    def get_declared_type(self, symbol: Symbol, arguments: Sequence[Type] = ()) -> Type | None:
        """Type a type-meaning symbol declares, instantiated with ``arguments``."""
        arguments = list(arguments)
        if symbol.flags & SymbolFlags.INTERFACE:
            return self._interface_type(symbol, arguments)
        if symbol.flags & SymbolFlags.TYPE_ALIAS:
            return self._type_alias_type(symbol, arguments)
        if symbol.flags & SymbolFlags.CLASS:
            return self._class_instance_type(symbol, arguments)
        if symbol.flags & SymbolFlags.ENUM:
            return EnumType(symbol)
        return None

    def _type_parameter_mapper(self, declaration: Declaration, arguments: Sequence[Type]) -> Mapper:
        mapper: Mapper = {}
        self._bind_type_parameters(
            declaration.node.child_by_field_name("type_parameters"),
            declaration.source_file,
            mapper,
            arguments if arguments else None,
        )
        return mapper

    def _interface_type(self, symbol: Symbol, arguments: list[Type]) -> Type:
        if not arguments and symbol.declared_type is not None:
            return symbol.declared_type
        declarations = [d for d in symbol.declarations if d.node.type == "interface_declaration"]
        if not declarations:
            return ANY
        mapper = self._type_parameter_mapper(declarations[0], arguments)
        t = ObjectType(
            symbol,
            "interface",
            resolver=partial(self._interface_members, symbol, declarations, mapper, bool(arguments)),
            type_arguments=arguments,
        )
        if not arguments:
            symbol.declared_type = t
        return t

    def _interface_members(
        self,
        symbol: Symbol,
        declarations: list[Declaration],
        mapper: Mapper,
        instantiated: bool,
    ) -> tuple[dict[str, Symbol], list[Signature], list[Signature]]:
        props: dict[str, Symbol] = {}
        calls: list[Signature] = []
        constructs: list[Signature] = []
        for declaration in declarations:
            body = declaration.node.child_by_field_name("body")
            if body is not None:
                self._collect_members(body, declaration.source_file, mapper, symbol, props, calls, constructs)

        if instantiated:
            declared = self._interface_type(symbol, [])
            props = {name: _instantiation_of(prop, declared.get_property(name)) for name, prop in props.items()}

        for declaration in declarations:
            for clause in declaration.node.children:
                if clause.type != "extends_type_clause":
                    continue
                for base_node in named_children(clause):
                    base = self._type_from_node(base_node, declaration.source_file, mapper)
                    for prop in base.get_properties():
                        props.setdefault(prop.name, prop)
                    calls.extend(base.get_call_signatures())
                    constructs.extend(base.get_construct_signatures())
        return props, calls, constructs

    def _collect_members(
        self,
        body: Node,
        source: SourceFile,
        mapper: Mapper,
        parent: Symbol,
        props: dict[str, Symbol],
        calls: list[Signature],
        constructs: list[Signature],
    ) -> None:
        """Collect the members of an interface body or type literal."""
        for member in named_children(body):
            if member.type == "call_signature":
                calls.append(self._signature_from_node(member, source, mapper))
                continue
            if member.type == "construct_signature":
                constructs.append(self._signature_from_node(member, source, mapper))
                continue
            if member.type not in ("property_signature", "method_signature"):
                continue

            name = _property_name(member.child_by_field_name("name"), source)
            if name is None:
                continue
            optional = has_token(member, "?")
            optional_flag = SymbolFlags.OPTIONAL if optional else SymbolFlags.NONE
            existing = props.get(name)
            if member.type == "method_signature":
                if existing is not None and existing.flags & SymbolFlags.METHOD:
                    # Overloads share one symbol
                    existing.add_declaration(Declaration(member, source), SymbolFlags.METHOD)
                    continue
                prop = Symbol(name, SymbolFlags.METHOD | optional_flag, [Declaration(member, source)], parent=parent)
                prop.type_resolver = partial(self._method_type, prop, mapper)
            else:
                if existing is not None:
                    continue
                prop = Symbol(name, SymbolFlags.PROPERTY | optional_flag, [Declaration(member, source)], parent=parent)
                prop.type_resolver = partial(
                    self._member_type, member.child_by_field_name("type"), source, mapper, optional
                )
            props[name] = prop

    def _method_type(self, symbol: Symbol, mapper: Mapper) -> Type:
        signatures = [self._signature_from_node(d.node, d.source_file, mapper) for d in symbol.declarations]
        return ObjectType(call_signatures=signatures)

    def _member_type(self, annotation: Node | None, source: SourceFile, mapper: Mapper, optional: bool) -> Type:
        t = self._type_from_annotation(annotation, source, mapper) if annotation is not None else ANY
        if optional and self.options.includes_undefined_in_optionals:
            t = make_union([t, UNDEFINED])
        return t

    def _type_alias_type(self, symbol: Symbol, arguments: list[Type]) -> Type:
        if not arguments and symbol.declared_type is not None:
            return symbol.declared_type
        declaration = next((d for d in symbol.declarations if d.node.type == "type_alias_declaration"), None)
        if declaration is None:
            return ANY
        if id(symbol) in self._resolving_aliases:
            return UnresolvedType(symbol.name)

        self._resolving_aliases.add(id(symbol))
        try:
            mapper = self._type_parameter_mapper(declaration, arguments)
            value = declaration.node.child_by_field_name("value")
            t = self._type_from_node(value, declaration.source_file, mapper) if value is not None else ANY
        finally:
            self._resolving_aliases.discard(id(symbol))

        # Freshly built structural types take the alias' name
        if value is not None and value.type in ("union_type", "intersection_type", "object_type", "function_type"):
            t.alias_name = symbol.name
            t.alias_type_arguments = tuple(arguments)
        if not arguments:
            symbol.declared_type = t
        return t

    # --- classes ------------------------------------------------------------

    def _class_instance_type(self, symbol: Symbol, arguments: list[Type]) -> Type:
        if not arguments and symbol.declared_type is not None:
            return symbol.declared_type
        declaration = _class_declaration_of(symbol)
        if declaration is None:
            return ANY
        mapper = self._type_parameter_mapper(declaration, arguments)
        t = ObjectType(
            symbol,
            "class",
            resolver=partial(self._class_members, symbol, declaration, mapper, bool(arguments)),
            type_arguments=arguments,
        )
        if not arguments:
            symbol.declared_type = t
        return t

    def _class_members(
        self,
        symbol: Symbol,
        declaration: Declaration,
        mapper: Mapper,
        instantiated: bool,
    ) -> tuple[dict[str, Symbol], list[Signature], list[Signature]]:
        source = declaration.source_file
        props: dict[str, Symbol] = {}
        body = declaration.node.child_by_field_name("body")
        for member in named_children(body) if body is not None else ():
            if has_token(member, "static"):
                continue
            if member.type in ("public_field_definition", "property_signature"):
                self._add_field(member, source, mapper, symbol, props)
            elif member.type in ("method_definition", "method_signature", "abstract_method_signature"):
                self._add_method(member, source, mapper, symbol, props)

        if instantiated:
            declared = self._class_instance_type(symbol, [])
            props = {name: _instantiation_of(prop, declared.get_property(name)) for name, prop in props.items()}

        for prop in self._class_base_properties(declaration, mapper):
            props.setdefault(prop.name, prop)
        return props, [], []

    def _add_field(self, member: Node, source: SourceFile, mapper: Mapper, parent: Symbol, props: dict[str, Symbol]) -> None:
        name = _property_name(member.child_by_field_name("name"), source)
        if name is None or name in props:
            return
        optional = has_token(member, "?")
        flags = SymbolFlags.PROPERTY | (SymbolFlags.OPTIONAL if optional else SymbolFlags.NONE)
        prop = Symbol(name, flags, [Declaration(member, source)], parent=parent)
        annotation = member.child_by_field_name("type")
        value = member.child_by_field_name("value")
        if annotation is None and value is not None:
            prop.type_resolver = partial(self._widened_expression_type, value, source)
        else:
            prop.type_resolver = partial(self._member_type, annotation, source, mapper, optional)
        props[name] = prop

    def _add_method(self, member: Node, source: SourceFile, mapper: Mapper, parent: Symbol, props: dict[str, Symbol]) -> None:
        name = _property_name(member.child_by_field_name("name"), source)
        if name is None:
            return
        if name == "constructor":
            self._add_parameter_properties(member, source, mapper, parent, props)
            return
        if name in props:
            return
        if has_token(member, "get"):
            prop = Symbol(name, SymbolFlags.PROPERTY, [Declaration(member, source)], parent=parent)
            return_node = member.child_by_field_name("return_type")
            prop.type_resolver = (
                partial(self._type_from_annotation, return_node, source, mapper) if return_node is not None else _constant(ANY)
            )
        elif has_token(member, "set"):
            return
        else:
            optional = SymbolFlags.OPTIONAL if has_token(member, "?") else SymbolFlags.NONE
            prop = Symbol(name, SymbolFlags.METHOD | optional, [Declaration(member, source)], parent=parent)
            prop.type_resolver = partial(self._function_value_type, member, source, mapper)
        props[name] = prop

    def _add_parameter_properties(
        self, constructor: Node, source: SourceFile, mapper: Mapper, parent: Symbol, props: dict[str, Symbol]
    ) -> None:
        params_node = constructor.child_by_field_name("parameters")
        if params_node is None:
            return
        for param in named_children(params_node):
            is_property = any(c.type == "accessibility_modifier" or c.type == "readonly" for c in param.children)
            pattern = param.child_by_field_name("pattern")
            if not is_property or pattern is None or pattern.type != "identifier":
                continue
            name = source.text_of(pattern)
            if name in props:
                continue
            optional = param.type == "optional_parameter"
            flags = SymbolFlags.PROPERTY | (SymbolFlags.OPTIONAL if optional else SymbolFlags.NONE)
            prop = Symbol(name, flags, [Declaration(param, source)], parent=parent)
            prop.type_resolver = partial(self._parameter_type, param, source, mapper)
            props[name] = prop

    def _class_base_properties(self, declaration: Declaration, mapper: Mapper) -> list[Symbol]:
        source = declaration.source_file
        heritage = next((c for c in declaration.node.children if c.type == "class_heritage"), None)
        if heritage is None:
            return []
        extends = next((c for c in heritage.children if c.type == "extends_clause"), None)
        value = extends.child_by_field_name("value") if extends is not None else None
        if value is None:
            return []
        argument_nodes = _type_argument_nodes(extends)
        if value.type == "instantiation_expression":
            # extends Base<Props> parsed as one expression
            argument_nodes = argument_nodes or _type_argument_nodes(value)
            value = next(named_children(value), value)

        react_name = self._react_value_name(value, source)
        if react_name in REACT_COMPONENT_CLASSES:
            return self._react_component_properties(value, argument_nodes, source, mapper)

        if value.type == "identifier":
            base = source.locals.get(source.text_of(value))
            if base is not None and base.flags & SymbolFlags.ALIAS:
                base = self.resolve_alias(base)
            if base is not None and base.flags & SymbolFlags.CLASS:
                arguments = [self._type_from_node(a, source, mapper) for a in argument_nodes]
                return self._class_instance_type(base, arguments).get_properties()
        logger.debug(f"Unresolved base class '{source.text_of(value)}' in {source.file_name}")
        return []

    def _react_component_properties(
        self, value: Node, argument_nodes: list[Node], source: SourceFile, mapper: Mapper
    ) -> list[Symbol]:
        """``props`` and ``state`` members a React component class inherits."""
        result: list[Symbol] = []
        for index, name in enumerate(("props", "state")):
            if index < len(argument_nodes):
                node = argument_nodes[index]
                resolved = self._type_from_node(node, source, mapper)
            else:
                node = value
                resolved = ObjectType()
            prop = Symbol(name, SymbolFlags.PROPERTY, [Declaration(node, source)])
            prop.type_resolver = _constant(resolved)
            result.append(prop)
        return result

    def _class_constructor_type(self, symbol: Symbol, declaration: Declaration) -> Type:
        source = declaration.source_file
        instance = self._class_instance_type(symbol, [])
        mapper: Mapper = {}
        type_parameters = self._bind_type_parameters(declaration.node.child_by_field_name("type_parameters"), source, mapper)

        parameters: list[Symbol] = []
        body = declaration.node.child_by_field_name("body")
        for member in named_children(body) if body is not None else ():
            if member.type != "method_definition":
                continue
            if _property_name(member.child_by_field_name("name"), source) == "constructor":
                params_node = member.child_by_field_name("parameters")
                if params_node is not None:
                    parameters = self._parameters(params_node, source, mapper)
                break

        signature = Signature(parameters, instance, declaration, type_parameters)
        return ObjectType(symbol, "typeof", construct_signatures=[signature])

    # --- utility types ------------------------------------------------------

    def _builtin_type(self, name: str, arguments: list[Type]) -> Type | None:
        if name in ("Array", "ReadonlyArray") and len(arguments) == 1:
            return ArrayType(arguments[0], readonly=name == "ReadonlyArray")
        if name in MAPPED_UTILITY_TYPES and len(arguments) == 1:
            return self._mapped_type(name, arguments[0], None, arguments)
        if name in KEYED_UTILITY_TYPES and len(arguments) == 2:
            return self._mapped_type(name, arguments[0], _literal_keys(arguments[1]), arguments)
        if name == "Record" and len(arguments) == 2:
            return self._record_type(arguments)
        if name == "NonNullable" and len(arguments) == 1:
            t = arguments[0]
            if isinstance(t, UnionType):
                return make_union(m for m in t.types if m is not NULL and m is not UNDEFINED)
            return t
        return None

    def _mapped_type(self, name: str, source_type: Type, keys: list[str] | None, arguments: list[Type]) -> Type:
        def resolve() -> tuple[dict[str, Symbol], list[Signature], list[Signature]]:
            props: dict[str, Symbol] = {}
            for prop in source_type.get_properties():
                if keys is not None and (prop.name in keys) != (name == "Pick"):
                    continue
                flags = prop.flags & ~SymbolFlags.TRANSIENT
                if name == "Partial":
                    flags |= SymbolFlags.OPTIONAL
                elif name == "Required":
                    flags &= ~SymbolFlags.OPTIONAL
                props[prop.name] = create_transient_symbol(
                    prop.name, flags, origins=(prop,), type_resolver=partial(self.get_type_of_symbol, prop)
                )
            return props, [], []

        t = ObjectType(resolver=resolve)
        t.alias_name = name
        t.alias_type_arguments = tuple(arguments)
        return t

    def _record_type(self, arguments: list[Type]) -> Type:
        keys = _literal_keys(arguments[0])
        value_type = arguments[1]

        def resolve() -> tuple[dict[str, Symbol], list[Signature], list[Signature]]:
            props = {
                key: create_transient_symbol(key, SymbolFlags.PROPERTY, type_resolver=_constant(value_type))
                for key in keys or ()
            }
            return props, [], []

        t = ObjectType(resolver=resolve)
        t.alias_name = "Record"
        t.alias_type_arguments = tuple(arguments)
        return t

    # --- rendering ----------------------------------------------------------

    def type_to_string(self, t: Type) -> str:
        return type_to_string(t)


def _constant(t: Type) -> Callable[[], Type]:
    return lambda: t


def _source_of(symbol: Symbol) -> SourceFile | None:
    return symbol.declarations[0].source_file if symbol.declarations else None


def _class_declaration_of(symbol: Symbol) -> Declaration | None:
    return next((d for d in symbol.declarations if d.node.type in CLASS_DECLARATION_TYPES), None)


def _instantiation_of(prop: Symbol, declared: Symbol | None) -> Symbol:
    """Mark a member of an instantiated generic as derived from the declared member."""
    if declared is None:
        return prop
    prop.flags |= SymbolFlags.TRANSIENT
    prop.target = declared
    return prop


def _wrapped_type(node: Node | None) -> Node | None:
    """The type inside a ``constraint`` / ``default_type`` wrapper node."""
    if node is None:
        return None
    return next(named_children(node), None)


def _type_argument_nodes(node: Node) -> list[Node]:
    arguments = node.child_by_field_name("type_arguments")
    if arguments is None:
        arguments = next((c for c in node.children if c.type == "type_arguments"), None)
    return list(named_children(arguments)) if arguments is not None else []


def _property_name(node: Node | None, source: SourceFile) -> str | None:
    if node is None:
        return None
    if node.type in ("property_identifier", "identifier", "private_property_identifier", "number"):
        return source.text_of(node)
    if node.type == "string":
        return unquote(node, source)
    if node.type == "computed_property_name":
        return source.text_of(node)
    return None


def _literal_keys(t: Type) -> list[str] | None:
    """String literal keys of ``"a" | "b"``, in order; None for anything else."""
    if isinstance(t, LiteralType) and isinstance(t.value, str):
        return [t.value]
    if isinstance(t, UnionType):
        keys: list[str] = []
        for member in t.types:
            member_keys = _literal_keys(member)
            if member_keys is None:
                return None
            keys.extend(k for k in member_keys if k not in keys)
        return keys
    return None
