"""Type model of the checker.

Types are created by the checker. Object types resolve their members lazily
so that recursive declarations (``interface Node { children: Node[] }``)
never recurse at construction time.
"""

from __future__ import annotations

from enum import IntFlag
from typing import Callable, Iterable, Sequence

from .symbols import Declaration, Symbol, SymbolFlags, create_transient_symbol


class TypeFlags(IntFlag):
    """Kind of a type."""

    NONE = 0
    ANY = 1 << 0
    UNKNOWN = 1 << 1
    STRING = 1 << 2
    NUMBER = 1 << 3
    BOOLEAN = 1 << 4
    BIGINT = 1 << 5
    ES_SYMBOL = 1 << 6
    VOID = 1 << 7
    UNDEFINED = 1 << 8
    NULL = 1 << 9
    NEVER = 1 << 10
    NON_PRIMITIVE = 1 << 11
    STRING_LITERAL = 1 << 12
    NUMBER_LITERAL = 1 << 13
    BOOLEAN_LITERAL = 1 << 14
    ENUM = 1 << 15
    UNION = 1 << 16
    INTERSECTION = 1 << 17
    OBJECT = 1 << 18
    TYPE_PARAMETER = 1 << 19
    UNRESOLVED = 1 << 20

    LITERAL = STRING_LITERAL | NUMBER_LITERAL | BOOLEAN_LITERAL


class Type:
    """Base type: no members, no signatures."""

    flags = TypeFlags.NONE

    def __init__(self, symbol: Symbol | None = None) -> None:
        self.symbol = symbol
        self.alias_name: str | None = None
        self.alias_type_arguments: tuple[Type, ...] = ()

    def get_symbol(self) -> Symbol | None:
        return self.symbol

    def get_properties(self) -> list[Symbol]:
        return []

    def get_property(self, name: str) -> Symbol | None:
        for prop in self.get_properties():
            if prop.name == name:
                return prop
        return None

    def get_call_signatures(self) -> list[Signature]:
        return []

    def get_construct_signatures(self) -> list[Signature]:
        return []

    def is_union(self) -> bool:
        return bool(self.flags & TypeFlags.UNION)

    def is_intersection(self) -> bool:
        return bool(self.flags & TypeFlags.INTERSECTION)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({type_to_string(self)!r})"


class IntrinsicType(Type):
    """Built-in primitive types such as ``string`` or ``any``."""

    def __init__(self, name: str, flags: TypeFlags) -> None:
        super().__init__()
        self.name = name
        self.flags = flags


ANY = IntrinsicType("any", TypeFlags.ANY)
UNKNOWN = IntrinsicType("unknown", TypeFlags.UNKNOWN)
STRING = IntrinsicType("string", TypeFlags.STRING)
NUMBER = IntrinsicType("number", TypeFlags.NUMBER)
BOOLEAN = IntrinsicType("boolean", TypeFlags.BOOLEAN)
BIGINT = IntrinsicType("bigint", TypeFlags.BIGINT)
ES_SYMBOL = IntrinsicType("symbol", TypeFlags.ES_SYMBOL)
VOID = IntrinsicType("void", TypeFlags.VOID)
UNDEFINED = IntrinsicType("undefined", TypeFlags.UNDEFINED)
NULL = IntrinsicType("null", TypeFlags.NULL)
NEVER = IntrinsicType("never", TypeFlags.NEVER)
NON_PRIMITIVE = IntrinsicType("object", TypeFlags.NON_PRIMITIVE)

INTRINSIC_TYPES: dict[str, IntrinsicType] = {
    t.name: t
    for t in (ANY, UNKNOWN, STRING, NUMBER, BOOLEAN, BIGINT, ES_SYMBOL, VOID, UNDEFINED, NULL, NEVER, NON_PRIMITIVE)
}


class LiteralType(Type):
    """String, number or boolean literal type."""

    def __init__(self, value: str | float | bool, text: str, flags: TypeFlags) -> None:
        super().__init__()
        self.value = value
        self.text = text
        self.flags = flags

    @classmethod
    def string(cls, value: str) -> LiteralType:
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return cls(value, f'"{escaped}"', TypeFlags.STRING_LITERAL)

    @classmethod
    def number(cls, text: str) -> LiteralType:
        try:
            value: float = float(text)
        except ValueError:
            value = 0.0
        return cls(value, text, TypeFlags.NUMBER_LITERAL)

    @classmethod
    def boolean(cls, value: bool) -> LiteralType:
        return cls(value, "true" if value else "false", TypeFlags.BOOLEAN_LITERAL)


class TypeParameter(Type):
    """An unbound type parameter."""

    flags = TypeFlags.TYPE_PARAMETER

    def __init__(self, name: str, constraint: Type | None = None) -> None:
        super().__init__()
        self.name = name
        self.constraint = constraint

    def get_properties(self) -> list[Symbol]:
        return self.constraint.get_properties() if self.constraint is not None else []


class UnresolvedType(Type):
    """A reference the checker cannot resolve; rendered as written."""

    flags = TypeFlags.UNRESOLVED

    def __init__(self, text: str) -> None:
        super().__init__()
        self.text = text


class EnumType(Type):
    flags = TypeFlags.ENUM


class Signature:
    """A call or construct signature."""

    def __init__(
        self,
        parameters: Sequence[Symbol],
        return_type: Callable[[], Type] | Type,
        declaration: Declaration | None = None,
        type_parameters: Sequence[TypeParameter] = (),
    ) -> None:
        self.parameters = list(parameters)
        self._return_type = return_type
        self.declaration = declaration
        self.type_parameters = list(type_parameters)

    def get_parameters(self) -> list[Symbol]:
        return self.parameters

    def get_return_type(self) -> Type:
        if callable(self._return_type) and not isinstance(self._return_type, Type):
            self._return_type = self._return_type()
        return self._return_type

    def get_declaration(self) -> Declaration | None:
        return self.declaration


MembersResolver = Callable[[], "tuple[dict[str, Symbol], list[Signature], list[Signature]]"]


class ObjectType(Type):
    """Object type: properties plus call and construct signatures.

    ``object_kind`` is one of "anonymous", "interface", "class",
    "typeof" (the value side of a class or function declaration) and decides
    how the type is rendered.
    """

    flags = TypeFlags.OBJECT

    def __init__(
        self,
        symbol: Symbol | None = None,
        object_kind: str = "anonymous",
        resolver: MembersResolver | None = None,
        properties: dict[str, Symbol] | None = None,
        call_signatures: Iterable[Signature] = (),
        construct_signatures: Iterable[Signature] = (),
        type_arguments: Sequence[Type] = (),
    ) -> None:
        super().__init__(symbol)
        self.object_kind = object_kind
        self.type_arguments = tuple(type_arguments)
        self._resolver = resolver
        self._properties = dict(properties or {})
        self._call_signatures = list(call_signatures)
        self._construct_signatures = list(construct_signatures)

    def _resolve(self) -> None:
        if self._resolver is not None:
            resolver, self._resolver = self._resolver, None
            properties, calls, constructs = resolver()
            self._properties.update(properties)
            self._call_signatures.extend(calls)
            self._construct_signatures.extend(constructs)

    def get_properties(self) -> list[Symbol]:
        self._resolve()
        return list(self._properties.values())

    def get_property(self, name: str) -> Symbol | None:
        self._resolve()
        return self._properties.get(name)

    def get_call_signatures(self) -> list[Signature]:
        self._resolve()
        return list(self._call_signatures)

    def get_construct_signatures(self) -> list[Signature]:
        self._resolve()
        return list(self._construct_signatures)


class ArrayType(Type):
    flags = TypeFlags.OBJECT

    def __init__(self, element_type: Type, readonly: bool = False) -> None:
        super().__init__()
        self.element_type = element_type
        self.readonly = readonly


class TupleType(Type):
    flags = TypeFlags.OBJECT

    def __init__(self, element_types: Sequence[Type], readonly: bool = False) -> None:
        super().__init__()
        self.element_types = list(element_types)
        self.readonly = readonly


class UnionOrIntersectionType(Type):
    """Shared member synthesis for unions and intersections."""

    separator = ""

    def __init__(self, types: Sequence[Type]) -> None:
        super().__init__()
        self.types = list(types)
        self._properties: list[Symbol] | None = None

    def get_properties(self) -> list[Symbol]:
        if self._properties is None:
            self._properties = self._combine_properties()
        return list(self._properties)

    def _combine_properties(self) -> list[Symbol]:
        raise NotImplementedError


class UnionType(UnionOrIntersectionType):
    """Union type; only properties common to every member are visible."""

    flags = TypeFlags.UNION
    separator = " | "

    def _combine_properties(self) -> list[Symbol]:
        groups: dict[str, list[Symbol]] = {}
        for index, member in enumerate(self.types):
            names = {prop.name: prop for prop in member.get_properties()}
            if index == 0:
                groups = {name: [prop] for name, prop in names.items()}
                continue
            groups = {name: [*group, names[name]] for name, group in groups.items() if name in names}
        result: list[Symbol] = []
        for name, group in groups.items():
            optional = any(prop.is_optional for prop in group)
            result.append(_synthesize(name, group, optional, UnionType))
        return result


class IntersectionType(UnionOrIntersectionType):
    """Intersection type; properties of every member are merged."""

    flags = TypeFlags.INTERSECTION
    separator = " & "

    def _combine_properties(self) -> list[Symbol]:
        groups: dict[str, list[Symbol]] = {}
        for member in self.types:
            for prop in member.get_properties():
                groups.setdefault(prop.name, []).append(prop)
        result: list[Symbol] = []
        for name, group in groups.items():
            if len(group) == 1:
                result.append(group[0])
                continue
            optional = all(prop.is_optional for prop in group)
            result.append(_synthesize(name, group, optional, IntersectionType))
        return result

    def get_call_signatures(self) -> list[Signature]:
        return [sig for member in self.types for sig in member.get_call_signatures()]

    def get_construct_signatures(self) -> list[Signature]:
        return [sig for member in self.types for sig in member.get_construct_signatures()]


def _synthesize(
    name: str,
    group: list[Symbol],
    optional: bool,
    combine: type[UnionOrIntersectionType],
) -> Symbol:
    flags = SymbolFlags.PROPERTY | (SymbolFlags.OPTIONAL if optional else SymbolFlags.NONE)

    def resolve() -> Type:
        member_types = [symbol_type(prop) for prop in group]
        return member_types[0] if len(member_types) == 1 else combine(member_types)

    symbol = create_transient_symbol(name, flags, origins=tuple(group), type_resolver=resolve)
    symbol.declarations = [decl for prop in group for decl in prop.declarations]
    return symbol


def symbol_type(symbol: Symbol) -> Type:
    """Resolved type of a checker-created member symbol."""
    if symbol.resolved_type is None:
        if symbol.type_resolver is None:
            return ANY
        symbol.resolved_type = ANY  # recursion guard
        symbol.resolved_type = symbol.type_resolver()
    return symbol.resolved_type


def make_union(types: Iterable[Type]) -> Type:
    """Create a union, flattening unaliased unions and dropping duplicates."""
    flat: list[Type] = []
    seen: set[str] = set()
    for t in types:
        members = t.types if isinstance(t, UnionType) and t.alias_name is None else [t]
        for member in members:
            key = type_to_string(member) if not isinstance(member, ObjectType) else f"#{id(member)}"
            if key in seen:
                continue
            seen.add(key)
            flat.append(member)
    if not flat:
        return NEVER
    if len(flat) == 1:
        return flat[0]
    return UnionType(flat)


# --- rendering ---------------------------------------------------------------

_MAX_DEPTH = 4


def type_to_string(t: Type, depth: int = 0) -> str:
    """Render a type the way TypeScript declarations spell it."""
    if t.alias_name is not None:
        return t.alias_name + _render_arguments(t.alias_type_arguments, depth)

    if isinstance(t, IntrinsicType):
        return t.name
    if isinstance(t, LiteralType):
        return t.text
    if isinstance(t, TypeParameter):
        return t.name
    if isinstance(t, UnresolvedType):
        return t.text
    if isinstance(t, EnumType):
        return t.symbol.name if t.symbol is not None else "enum"
    if isinstance(t, UnionType):
        return " | ".join(_render_member(m, depth) for m in _collapse_booleans(t.types))
    if isinstance(t, IntersectionType):
        return " & ".join(_render_member(m, depth) for m in t.types)
    if isinstance(t, ArrayType):
        element = _render_member(t.element_type, depth, wrap_functions=True)
        return f"{'readonly ' if t.readonly else ''}{element}[]"
    if isinstance(t, TupleType):
        elements = ", ".join(type_to_string(e, depth + 1) for e in t.element_types)
        return f"{'readonly ' if t.readonly else ''}[{elements}]"
    if isinstance(t, ObjectType):
        return _render_object(t, depth)
    return "any"


def _render_arguments(arguments: Sequence[Type], depth: int) -> str:
    if not arguments:
        return ""
    return "<" + ", ".join(type_to_string(a, depth + 1) for a in arguments) + ">"


def _collapse_booleans(types: list[Type]) -> list[Type]:
    literals = {m.value for m in types if isinstance(m, LiteralType) and m.flags & TypeFlags.BOOLEAN_LITERAL}
    if literals != {True, False}:
        return types
    result: list[Type] = []
    for member in types:
        if isinstance(member, LiteralType) and member.flags & TypeFlags.BOOLEAN_LITERAL:
            if BOOLEAN not in result:
                result.append(BOOLEAN)
        else:
            result.append(member)
    return result


def _is_function_like(t: Type) -> bool:
    return (
        isinstance(t, ObjectType)
        and t.object_kind == "anonymous"
        and t.alias_name is None
        and not t.get_properties()
        and len(t.get_call_signatures()) + len(t.get_construct_signatures()) == 1
    )


def _render_member(t: Type, depth: int, wrap_functions: bool = True) -> str:
    text = type_to_string(t, depth)
    needs_parens = t.alias_name is None and (
        isinstance(t, UnionOrIntersectionType) or (wrap_functions and _is_function_like(t))
    )
    return f"({text})" if needs_parens else text


def _render_parameters(signature: Signature, depth: int) -> str:
    parts: list[str] = []
    for param in signature.get_parameters():
        rest = param.value_declaration is not None and _is_rest_parameter(param.value_declaration)
        marker = "?" if param.is_optional and not rest else ""
        prefix = "..." if rest else ""
        parts.append(f"{prefix}{param.name}{marker}: {type_to_string(symbol_type(param), depth + 1)}")
    return ", ".join(parts)


def _is_rest_parameter(declaration: Declaration) -> bool:
    pattern = declaration.node.child_by_field_name("pattern")
    return pattern is not None and pattern.type == "rest_pattern"


def render_signature(signature: Signature, depth: int = 0, arrow: bool = True) -> str:
    params = _render_parameters(signature, depth)
    type_params = ""
    if signature.type_parameters:
        type_params = "<" + ", ".join(tp.name for tp in signature.type_parameters) + ">"
    separator = " => " if arrow else ": "
    return f"{type_params}({params}){separator}{type_to_string(signature.get_return_type(), depth + 1)}"


def _render_object(t: ObjectType, depth: int) -> str:
    if t.object_kind in ("interface", "class") and t.symbol is not None:
        return t.symbol.name + _render_arguments(t.type_arguments, depth)
    if t.object_kind == "typeof" and t.symbol is not None:
        return f"typeof {t.symbol.name}"

    properties = t.get_properties()
    calls = t.get_call_signatures()
    constructs = t.get_construct_signatures()
    if not properties and len(calls) == 1 and not constructs:
        return render_signature(calls[0], depth)
    if not properties and len(constructs) == 1 and not calls:
        return "new " + render_signature(constructs[0], depth)
    if not properties and not calls and not constructs:
        return "{}"
    if depth >= _MAX_DEPTH:
        return "{ ...; }"

    members: list[str] = []
    for signature in calls:
        members.append(render_signature(signature, depth, arrow=False))
    for signature in constructs:
        members.append("new " + render_signature(signature, depth, arrow=False))
    for prop in properties:
        marker = "?" if prop.is_optional else ""
        prop_type = symbol_type(prop)
        if prop.flags & SymbolFlags.METHOD and isinstance(prop_type, ObjectType):
            for signature in prop_type.get_call_signatures():
                members.append(f"{prop.name}{marker}{render_signature(signature, depth, arrow=False)}")
            continue
        members.append(f"{prop.name}{marker}: {type_to_string(prop_type, depth + 1)}")
    return "{ " + "; ".join(members) + "; }"
