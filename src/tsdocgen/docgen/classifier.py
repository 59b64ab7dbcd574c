"""Classification of exported symbols as components."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .protocol import CheckerProtocol, TypeProtocol

logger = logging.getLogger(__name__)


class ComponentKind(Enum):
    """Shape of a component."""

    STATELESS = "stateless"  # function component
    STATEFUL = "stateful"  # class component
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class Classification:
    """Result of classifying an exported symbol.

    Attributes:
        kind: Component shape
        symbol: Symbol the component is named and documented after; the
            type's symbol when the export has no value declaration
        props_symbol: Symbol describing the component's props
    """

    kind: ComponentKind
    symbol: Any
    props_symbol: Any = None

    @property
    def is_component(self) -> bool:
        return self.kind is not ComponentKind.UNRECOGNIZED


def extract_props_from_type_if_stateless_component(type_: TypeProtocol) -> Any | None:
    """Props parameter of the first signature taking ``props`` or a single argument."""
    for signature in type_.get_call_signatures():
        params = signature.get_parameters()
        if not params:
            continue
        props_param = params[0]
        if props_param.name == "props" or len(params) == 1:
            return props_param
    return None


def extract_props_from_type_if_stateful_component(type_: TypeProtocol) -> Any | None:
    """``props`` property of the instance a construct signature creates."""
    for signature in type_.get_construct_signatures():
        props = signature.get_return_type().get_property("props")
        if props is not None:
            return props
    return None


class ComponentClassifier:
    """Decides whether exported symbols are components."""

    def __init__(self, checker: CheckerProtocol) -> None:
        self.checker = checker

    def get_type(self, symbol: Any) -> Any:
        location = symbol.value_declaration or symbol.declarations[0]
        return self.checker.get_type_of_symbol_at_location(symbol, location)

    def classify(self, symbol: Any) -> Classification:
        """Classify an exported symbol.

        Args:
            symbol: Exported symbol

        Returns:
            Classification; UNRECOGNIZED when the symbol is not a component
        """
        unrecognized = Classification(ComponentKind.UNRECOGNIZED, symbol)
        if not symbol.declarations:
            return unrecognized

        type_ = self.get_type(symbol)
        if symbol.value_declaration is None:
            # Re-exports and type-only aliases: continue with the type's symbol
            if type_.symbol is None:
                logger.debug(f"Skipping '{symbol.name}': no value declaration and no type symbol")
                return unrecognized
            symbol = type_.symbol

        props = extract_props_from_type_if_stateless_component(type_)
        if props is not None:
            return Classification(ComponentKind.STATELESS, symbol, props)

        props = extract_props_from_type_if_stateful_component(type_)
        if props is not None:
            return Classification(ComponentKind.STATEFUL, symbol, props)

        logger.debug(f"Skipping '{symbol.name}': not a component")
        return Classification(ComponentKind.UNRECOGNIZED, symbol)
