"""Source files parsed with tree-sitter.

A SourceFile owns the raw bytes of a module and its syntax tree. The binder
later attaches the module's symbol tables to it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import TYPE_CHECKING, Iterator

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Node, Parser

if TYPE_CHECKING:
    from .symbols import Symbol

logger = logging.getLogger(__name__)

TSX_EXTENSIONS = (".tsx", ".jsx")

CLASS_DECLARATION_TYPES = frozenset({"class_declaration", "abstract_class_declaration", "class"})


@lru_cache(maxsize=None)
def get_language(variant: str) -> Language:
    """Get the tree-sitter language for a grammar variant (typescript, tsx)."""
    if variant == "typescript":
        return Language(ts_typescript.language_typescript())
    if variant == "tsx":
        return Language(ts_typescript.language_tsx())
    raise ValueError(f"Unsupported language: {variant}")


def language_variant_for(file_name: str) -> str:
    """Pick the grammar for a file name; JSX-capable files use tsx."""
    return "tsx" if file_name.endswith(TSX_EXTENSIONS) else "typescript"


@dataclass(eq=False)
class SourceFile:
    """A parsed module."""

    file_name: str
    content: bytes
    root: Node
    language: str

    # Filled in by the binder
    symbol: Symbol | None = None
    locals: dict[str, Symbol] = field(default_factory=dict)
    exports: dict[str, Symbol] = field(default_factory=dict)
    export_stars: list[str] = field(default_factory=list)
    module_specifiers: list[str] = field(default_factory=list)
    declared_names: dict[tuple[int, int], Symbol] = field(default_factory=dict)
    is_external_module: bool = False

    @classmethod
    def parse(cls, file_name: str, content: bytes, parser: Parser | None = None) -> SourceFile:
        """Parse source content into a SourceFile.

        Args:
            file_name: Path of the module
            content: Raw source bytes
            parser: Parser to reuse; must match the file's grammar
        """
        language = language_variant_for(file_name)
        if parser is None:
            parser = Parser(get_language(language))
        tree = parser.parse(content)
        if tree.root_node.has_error:
            logger.warning(f"Syntax errors in {file_name}; continuing with a partial tree")
        return cls(file_name=file_name, content=content, root=tree.root_node, language=language)

    def text_of(self, node: Node | None) -> str:
        """Source text of a node."""
        if node is None:
            return ""
        return self.content[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    @property
    def statements(self) -> list[Node]:
        """Top-level statements, with ``export`` unwrapped to its declaration."""
        result: list[Node] = []
        for child in self.root.named_children:
            if child.type == "comment":
                continue
            if child.type == "export_statement":
                declaration = child.child_by_field_name("declaration")
                if declaration is None:
                    declaration = child.child_by_field_name("value")
                result.append(declaration if declaration is not None else child)
            else:
                result.append(child)
        return result

    def __repr__(self) -> str:
        return f"SourceFile({self.file_name!r})"


def named_children(node: Node) -> Iterator[Node]:
    """Named children of a node, skipping comments."""
    for child in node.named_children:
        if child.type != "comment":
            yield child


def has_token(node: Node, token: str) -> bool:
    """Whether a direct child is the given anonymous token (``?``, ``static``...)."""
    return any(child.type == token for child in node.children)


def unquote(node: Node, source: SourceFile) -> str:
    """Cooked value of a string literal node."""
    parts: list[str] = []
    for child in node.named_children:
        if child.type == "string_fragment":
            parts.append(source.text_of(child))
        elif child.type == "escape_sequence":
            parts.append(_decode_escape(source.text_of(child)))
    if parts or node.named_child_count:
        return "".join(parts)
    # Grammars without fragment children
    return source.text_of(node)[1:-1]


_SIMPLE_ESCAPES = {
    "n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0",
}


def _decode_escape(text: str) -> str:
    body = text[1:]
    if body in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[body]
    if body.startswith("u{") and body.endswith("}"):
        try:
            return chr(int(body[2:-1], 16))
        except ValueError:
            return text
    if body.startswith(("u", "x")) and len(body) > 1:
        try:
            return chr(int(body[1:], 16))
        except ValueError:
            return text
    if body.startswith(("\n", "\r")):
        return ""
    return body


def normalize_whitespace(text: str) -> str:
    return " ".join(text.split())
