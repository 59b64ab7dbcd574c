"""Component documentation extraction."""

from .classifier import Classification, ComponentClassifier, ComponentKind
from .default_props import DefaultPropsResolver
from .doc_comment import find_doc_comment, format_tag, get_full_js_doc_comment
from .filters import build_filter
from .parser import (
    FileParser,
    Parser,
    compute_component_name,
    parse,
    with_compiler_options,
    with_custom_config,
    with_default_config,
)
from .props import PropsExtractor, filter_props

__all__ = [
    "Classification",
    "ComponentClassifier",
    "ComponentKind",
    "DefaultPropsResolver",
    "find_doc_comment",
    "format_tag",
    "get_full_js_doc_comment",
    "build_filter",
    "FileParser",
    "Parser",
    "compute_component_name",
    "parse",
    "with_compiler_options",
    "with_custom_config",
    "with_default_config",
    "PropsExtractor",
    "filter_props",
]
