"""Default prop values declared on class components.

``static defaultProps = { ... }`` is read from the syntax tree: each
property whose value is a simple literal is reported with the literal's
source text.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from tree_sitter import Node

from ..compiler.source_file import SourceFile, named_children, unquote
from .protocol import CheckerProtocol

logger = logging.getLogger(__name__)

DEFAULT_PROPS = "defaultProps"

# Class members that can carry an initializer
_MEMBER_TYPES = frozenset({"public_field_definition", "method_definition", "method_signature", "abstract_method_signature"})

_PREFIX_OPERATORS = frozenset({"-", "+", "!", "~"})

_RADIX_PREFIXES = {"0x": 16, "0o": 8, "0b": 2}


def _format_number(value: float) -> str:
    """Render a number the way JavaScript's ``String(number)`` does."""
    if value != value:
        return "NaN"
    if value in (float("inf"), float("-inf")):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    decimal = Decimal(repr(abs(value)))
    _, digit_tuple, exponent = decimal.as_tuple()
    digits = "".join(str(d) for d in digit_tuple).lstrip("0")
    stripped = digits.rstrip("0")
    exponent += len(digits) - len(stripped)
    digits = stripped
    # value == 0.digits * 10 ** point
    point = len(digits) + exponent

    if len(digits) <= point <= 21:
        return sign + digits + "0" * (point - len(digits))
    if 0 < point <= 21:
        return sign + digits[:point] + "." + digits[point:]
    if -6 < point <= 0:
        return sign + "0." + "0" * -point + digits
    power = point - 1
    mantissa = digits if len(digits) == 1 else f"{digits[0]}.{digits[1:]}"
    return f"{sign}{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"


def numeric_literal_text(text: str) -> str | None:
    """Cooked text of a numeric literal, or None for BigInt literals.

    Hex, octal, binary and legacy octal literals become decimal; literals
    with a fraction or exponent are normalised like JavaScript numbers;
    plain integers keep their digits. Separators are dropped.
    """
    if text.endswith("n"):
        return None
    text = text.replace("_", "")
    radix = _RADIX_PREFIXES.get(text[:2].lower())
    if radix is not None:
        return _format_number(float(int(text[2:], radix)))
    if len(text) > 1 and text[0] == "0" and text.isdigit():
        if all(c in "01234567" for c in text):
            return _format_number(float(int(text, 8)))
        return _format_number(float(text))
    if any(c in text for c in ".eE"):
        return _format_number(float(text))
    return text


def get_property_name(name: Node | None, source: SourceFile) -> str | None:
    """Name of a property or member.

    Identifiers, strings and numbers give their literal text; computed names
    give their source text. Any other name kind is unsupported.
    """
    if name is None:
        return None
    if name.type in ("property_identifier", "identifier"):
        return source.text_of(name)
    if name.type == "number":
        return numeric_literal_text(source.text_of(name))
    if name.type == "string":
        return unquote(name, source)
    if name.type == "computed_property_name":
        return source.text_of(name)
    return None


def get_literal_value_from_property_assignment(value: Node | None, source: SourceFile) -> str | None:
    """Literal source text of a default value, or None when unsupported."""
    if value is None:
        return None
    kind = value.type
    if kind == "false":
        return "false"
    if kind == "true":
        return "true"
    if kind == "string":
        return unquote(value, source).strip()
    if kind == "unary_expression":
        # typeof, void and delete share the node kind but are not prefix operators
        operator = value.child_by_field_name("operator")
        if operator is None or operator.type not in _PREFIX_OPERATORS:
            return None
        return source.text_of(value).strip()
    if kind == "number":
        return numeric_literal_text(source.text_of(value))
    if kind == "null":
        return "null"
    if kind in ("identifier", "undefined"):
        # Other identifiers could be resolved to their values in the future
        return "undefined" if source.text_of(value) == "undefined" else None
    if kind == "object":
        return source.text_of(value)
    return None


class DefaultPropsResolver:
    """Reads ``defaultProps`` of class components."""

    def __init__(self, checker: CheckerProtocol) -> None:
        self.checker = checker

    def _find_class(self, symbol: Any, source: SourceFile) -> Node | None:
        for statement in source.statements:
            name = statement.child_by_field_name("name")
            if name is None:
                continue
            if self.checker.get_symbol_at_location(name, source) is symbol:
                return statement
        return None

    def extract_default_props_from_component(self, symbol: Any, source: SourceFile) -> dict[str, str]:
        """Map prop names to the literal text of their defaults.

        Args:
            symbol: Component symbol
            source: Module the component is exported from

        Returns:
            Prop name to literal text; empty when the component is not a
            class declared in ``source`` or has no object-literal defaultProps
        """
        statement = self._find_class(symbol, source)
        if statement is None:
            return {}
        body = statement.child_by_field_name("body")
        if body is None or body.type != "class_body":
            return {}

        default_props = next(
            (
                member
                for member in named_children(body)
                if member.type in _MEMBER_TYPES
                and get_property_name(member.child_by_field_name("name"), source) == DEFAULT_PROPS
            ),
            None,
        )
        if default_props is None:
            return {}

        initializer = default_props.child_by_field_name("value")
        if initializer is None or initializer.type != "object":
            logger.debug(f"defaultProps of '{symbol.name}' is not an object literal")
            return {}

        result: dict[str, str] = {}
        for prop in named_children(initializer):
            if prop.type != "pair":
                continue
            value = get_literal_value_from_property_assignment(prop.child_by_field_name("value"), source)
            name = get_property_name(prop.child_by_field_name("key"), source)
            if value is not None and name is not None:
                result[name] = value
        return result
