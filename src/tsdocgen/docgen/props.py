"""Props table extraction."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..core.types import Component, DefaultValue, PropFilter, PropItem, PropItemType, Props
from .doc_comment import DEFAULT_TAG, find_doc_comment
from .protocol import CheckerProtocol

logger = logging.getLogger(__name__)


class PropsExtractor:
    """Builds the props table of a component from its props symbol."""

    def __init__(self, checker: CheckerProtocol) -> None:
        self.checker = checker

    def get_props_info(self, props_symbol: Any, default_props: Mapping[str, str] | None = None) -> Props:
        """Describe every property of a props type.

        Types are resolved in the context of the props symbol's declaration.
        A ``defaultProps`` value wins over a ``@default`` tag.

        Args:
            props_symbol: Props parameter or ``props`` property
            default_props: Prop name to default literal text

        Returns:
            Props keyed by name, in property order; empty when the props
            symbol has no declaration
        """
        default_props = default_props or {}
        location = props_symbol.value_declaration
        if location is None:
            logger.debug(f"Props symbol '{props_symbol.name}' has no declaration")
            return {}

        props_type = self.checker.get_type_of_symbol_at_location(props_symbol, location)
        result: Props = {}
        for prop in props_type.get_properties():
            name = prop.get_name()
            prop_type = self.checker.get_type_of_symbol_at_location(prop, location)
            doc = find_doc_comment(prop, self.checker)

            default_value = None
            if name in default_props:
                default_value = DefaultValue(default_props[name])
            elif doc.tags.get(DEFAULT_TAG):
                default_value = DefaultValue(doc.tags[DEFAULT_TAG])

            result[name] = PropItem(
                name=name,
                required=not prop.is_optional,
                type=PropItemType(self.checker.type_to_string(prop_type)),
                description=doc.full_comment,
                default_value=default_value,
            )
        return result


def filter_props(props: Props, prop_filter: PropFilter, component: Component) -> Props:
    """Props accepted by a filter, in their original order."""
    return {name: prop for name, prop in props.items() if prop_filter(prop, component)}
