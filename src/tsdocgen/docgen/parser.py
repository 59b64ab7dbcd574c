"""Component documentation parser.

Entry points:

- ``parse(file_path)`` parses one file with the default compiler options.
- ``with_default_config()``, ``with_custom_config(tsconfig_path)`` and
  ``with_compiler_options(options)`` build a FileParser whose ``parse`` can
  be called for any number of files.

Each ``parse`` call creates its own program and checker; nothing is shared
between calls.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Callable, Iterable

from ..compiler.program import create_program
from ..compiler.source_file import SourceFile
from ..compiler.symbols import InternalSymbolName
from ..core.config import DEFAULT_COMPILER_OPTIONS, CompilerOptions, load_compiler_options
from ..core.exceptions import SourceFileNotFoundError
from ..core.types import DEFAULT_PARSER_OPTIONS, Component, ComponentDoc, ParserOptions
from .classifier import ComponentClassifier
from .default_props import DefaultPropsResolver
from .doc_comment import find_doc_comment
from .filters import build_filter
from .props import PropsExtractor, filter_props
from .protocol import ProgramProtocol

logger = logging.getLogger(__name__)

ProgramFactory = Callable[[Iterable[str], CompilerOptions], ProgramProtocol]


def compute_component_name(symbol: Any, source: SourceFile) -> str:
    """Display name of a component.

    Default exports and anonymous functions are named after their file.
    """
    export_name = symbol.get_name()
    if export_name in (InternalSymbolName.DEFAULT, InternalSymbolName.FUNCTION):
        return Path(source.file_name).stem
    return export_name


def _dedupe_by_name(components: list[ComponentDoc]) -> list[ComponentDoc]:
    """Keep the first component of each display name, in export order."""
    # First wins: `export default Button` after `export const Button` reports the named export
    seen: set[str] = set()
    result: list[ComponentDoc] = []
    for component in components:
        if component.display_name in seen:
            logger.debug(f"Dropping duplicate component '{component.display_name}'")
            continue
        seen.add(component.display_name)
        result.append(component)
    return result


class Parser:
    """Extracts component documentation using one program's checker."""

    def __init__(self, program: ProgramProtocol, opts: ParserOptions) -> None:
        self.checker = program.get_type_checker()
        self.prop_filter = build_filter(opts)
        self.classifier = ComponentClassifier(self.checker)
        self.props_extractor = PropsExtractor(self.checker)
        self.default_props_resolver = DefaultPropsResolver(self.checker)

    def get_component_info(self, exp: Any, source: SourceFile) -> ComponentDoc | None:
        """Document an exported symbol.

        Args:
            exp: Exported symbol
            source: Module it is exported from

        Returns:
            The component's documentation, or None if it is not a component
        """
        classification = self.classifier.classify(exp)
        if not classification.is_component:
            return None

        symbol = classification.symbol
        component_name = compute_component_name(symbol, source)
        default_props = self.default_props_resolver.extract_default_props_from_component(symbol, source)
        props = self.props_extractor.get_props_info(classification.props_symbol, default_props)
        props = filter_props(props, self.prop_filter, Component(component_name))

        logger.debug(f"Found {classification.kind.value} component '{component_name}' with {len(props)} props")
        return ComponentDoc(
            display_name=component_name,
            description=find_doc_comment(symbol, self.checker).full_comment,
            props=props,
        )


class FileParser:
    """Parses files with fixed compiler and parser options."""

    def __init__(
        self,
        compiler_options: CompilerOptions = DEFAULT_COMPILER_OPTIONS,
        parser_opts: ParserOptions | None = None,
        program_factory: ProgramFactory | None = None,
    ) -> None:
        self.compiler_options = compiler_options
        self.parser_opts = parser_opts or DEFAULT_PARSER_OPTIONS
        self.program_factory: ProgramFactory = program_factory or create_program

    def parse(self, file_path: str | os.PathLike[str]) -> list[ComponentDoc]:
        """Document every component a file exports.

        Args:
            file_path: TypeScript module to document

        Returns:
            Components in export order, one per display name

        Raises:
            SourceFileNotFoundError: If the file cannot be read
        """
        file_name = str(Path(file_path).resolve())
        program = self.program_factory([file_name], self.compiler_options)
        source = program.get_source_file(file_name)
        if source is None:
            raise SourceFileNotFoundError(str(file_path))

        parser = Parser(program, self.parser_opts)
        checker = parser.checker
        module_symbol = checker.get_symbol_at_location(source)
        if module_symbol is None:
            logger.info(f"{file_path} is not a module; no components")
            return []

        components = []
        for exp in checker.get_exports_of_module(module_symbol):
            component = parser.get_component_info(exp, source)
            if component is not None:
                components.append(component)

        result = _dedupe_by_name(components)
        logger.info(f"Parsed {file_path}: {len(result)} components")
        return result


def _parser_options(parser_opts: ParserOptions | dict[str, Any] | None) -> ParserOptions:
    if parser_opts is None:
        return DEFAULT_PARSER_OPTIONS
    if isinstance(parser_opts, ParserOptions):
        return parser_opts
    prop_filter = parser_opts.get("prop_filter", parser_opts.get("propFilter"))
    return ParserOptions(prop_filter=prop_filter)


def with_compiler_options(
    compiler_options: CompilerOptions,
    parser_opts: ParserOptions | dict[str, Any] | None = None,
) -> FileParser:
    """Construct a parser for a given set of compiler options."""
    return FileParser(compiler_options, _parser_options(parser_opts))


def with_default_config(parser_opts: ParserOptions | dict[str, Any] | None = None) -> FileParser:
    """Construct a parser for the default compiler options."""
    return with_compiler_options(DEFAULT_COMPILER_OPTIONS, parser_opts)


def with_custom_config(
    tsconfig_path: str | os.PathLike[str],
    parser_opts: ParserOptions | dict[str, Any] | None = None,
) -> FileParser:
    """Construct a parser for the compiler options of a tsconfig file.

    Raises:
        ConfigurationError: If the file cannot be read or is not valid JSON
        CompilerOptionsError: If its compilerOptions cannot be converted
    """
    return with_compiler_options(load_compiler_options(tsconfig_path), parser_opts)


def parse(
    file_path: str | os.PathLike[str],
    parser_opts: ParserOptions | dict[str, Any] | None = None,
) -> list[ComponentDoc]:
    """Parse a file with the default compiler options."""
    return with_default_config(parser_opts).parse(file_path)
