"""tsdocgen - Documentation for TypeScript React components.

tsdocgen reads the components a TypeScript module exports and reports each
component's name, description and props (type, required flag, default value
and doc comment).

Quick Start:
    from tsdocgen import parse, with_custom_config

    # Default compiler options
    docs = parse("src/Button.tsx")

    # Project compiler options, skipping undocumented props
    parser = with_custom_config("tsconfig.json", {"propFilter": {"skipPropsWithoutDoc": True}})
    docs = parser.parse("src/Button.tsx")

    for doc in docs:
        print(doc.display_name, list(doc.props))
"""

__version__ = "0.1.0"

from .core.types import (
    Component,
    ComponentDoc,
    ParserOptions,
    PropItem,
    PropItemType,
    StaticPropFilter,
)
from .docgen.parser import (
    FileParser,
    parse,
    with_compiler_options,
    with_custom_config,
    with_default_config,
)

__all__ = [
    "__version__",
    "Component",
    "ComponentDoc",
    "ParserOptions",
    "PropItem",
    "PropItemType",
    "StaticPropFilter",
    "FileParser",
    "parse",
    "with_compiler_options",
    "with_custom_config",
    "with_default_config",
]
