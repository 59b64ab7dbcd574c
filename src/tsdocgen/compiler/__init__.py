"""Lightweight TypeScript program and type checker built on tree-sitter."""

from .checker import TypeChecker
from .jsdoc import JSDocTagInfo, ParsedJSDoc, parse_jsdoc
from .program import Program, create_program
from .source_file import SourceFile
from .symbols import Declaration, InternalSymbolName, Symbol, SymbolFlags
from .types import ObjectType, Signature, Type, TypeFlags, type_to_string

__all__ = [
    "TypeChecker",
    "JSDocTagInfo",
    "ParsedJSDoc",
    "parse_jsdoc",
    "Program",
    "create_program",
    "SourceFile",
    "Declaration",
    "InternalSymbolName",
    "Symbol",
    "SymbolFlags",
    "ObjectType",
    "Signature",
    "Type",
    "TypeFlags",
    "type_to_string",
]
