"""Core type definitions for tsdocgen.

This module defines the documentation records produced by the parser
(components, props, default values) and the options that control a parse.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Union


@dataclass
class PropItemType:
    """Rendered type of a prop."""

    name: str
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name}
        if self.value is not None:
            result["value"] = self.value
        return result


@dataclass
class DefaultValue:
    """Default value of a prop, as literal source text."""

    value: str

    def to_dict(self) -> dict[str, Any]:
        return {"value": self.value}


@dataclass
class PropItem:
    """Documentation for a single prop of a component."""

    name: str
    required: bool
    type: PropItemType
    description: str = ""
    default_value: DefaultValue | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "required": self.required,
            "type": self.type.to_dict(),
            "description": self.description,
            "defaultValue": self.default_value.to_dict() if self.default_value else None,
        }


# Props keyed by name, in the enumeration order of the props type
Props = dict[str, PropItem]


@dataclass
class ComponentDoc:
    """Documentation extracted for one component."""

    display_name: str
    description: str
    props: Props = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "displayName": self.display_name,
            "description": self.description,
            "props": {name: prop.to_dict() for name, prop in self.props.items()},
        }


@dataclass(frozen=True)
class Component:
    """Component context handed to prop filters."""

    name: str


@dataclass
class JSDoc:
    """Documentation comment of a symbol.

    Attributes:
        description: Plain text part of the comment
        full_comment: Plain text followed by every tag except ``@default``
        tags: Tag name to trimmed text; repeated tags are newline-joined
    """

    description: str = ""
    full_comment: str = ""
    tags: dict[str, str] = field(default_factory=dict)


PropFilter = Callable[[PropItem, Component], bool]


@dataclass
class StaticPropFilter:
    """Declarative prop filter configuration."""

    skip_props_with_name: str | list[str] | None = None
    skip_props_without_doc: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StaticPropFilter:
        """Create a filter from a mapping with camelCase or snake_case keys."""
        names = data.get("skip_props_with_name", data.get("skipPropsWithName"))
        without_doc = data.get("skip_props_without_doc", data.get("skipPropsWithoutDoc", False))
        return cls(skip_props_with_name=names, skip_props_without_doc=bool(without_doc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "skip_props_with_name": self.skip_props_with_name,
            "skip_props_without_doc": self.skip_props_without_doc,
        }


PropFilterOption = Union[PropFilter, StaticPropFilter, Mapping[str, Any], None]


@dataclass
class ParserOptions:
    """Options controlling how props are reported."""

    prop_filter: PropFilterOption = None

    def __post_init__(self) -> None:
        if isinstance(self.prop_filter, Mapping):
            self.prop_filter = StaticPropFilter.from_dict(self.prop_filter)


DEFAULT_PARSER_OPTIONS = ParserOptions()
