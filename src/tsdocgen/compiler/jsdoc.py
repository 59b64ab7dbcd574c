"""JSDoc comment parsing.

Finds the ``/** ... */`` comments that lead a declaration and splits them
into plain documentation text and ``@tag`` entries.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from tree_sitter import Node

from .source_file import SourceFile

_TAG_LINE = re.compile(r"^@([A-Za-z_$][\w$-]*)(.*)$", re.DOTALL)

# Tags whose text starts with a {type} expression
_TYPED_TAGS = frozenset({"param", "arg", "argument", "returns", "return", "throws", "type"})


@dataclass(frozen=True)
class JSDocTagInfo:
    """A single ``@name text`` entry."""

    name: str
    text: str = ""


@dataclass(frozen=True)
class ParsedJSDoc:
    """A parsed documentation comment."""

    comment: str
    tags: tuple[JSDocTagInfo, ...] = ()


def is_jsdoc_comment(text: str) -> bool:
    return text.startswith("/**") and not text.startswith("/**/") and text.endswith("*/")


def _strip_margin(line: str) -> str:
    stripped = line.strip()
    if stripped.startswith("*"):
        stripped = stripped[1:]
        if stripped.startswith(" "):
            stripped = stripped[1:]
    return stripped.rstrip()


def _strip_type_expression(text: str) -> str:
    if not text.startswith("{"):
        return text
    depth = 0
    for index, char in enumerate(text):
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[index + 1 :].lstrip()
    return text


def parse_jsdoc(raw: str) -> ParsedJSDoc:
    """Parse the text of a ``/** */`` comment.

    Lines before the first tag form the comment; each tag runs until the
    next line that starts with ``@``.
    """
    body = raw[3:-2] if is_jsdoc_comment(raw) else raw
    lines = [_strip_margin(line) for line in body.replace("\r\n", "\n").split("\n")]

    description: list[str] = []
    tags: list[tuple[str, list[str]]] = []
    for line in lines:
        match = _TAG_LINE.match(line)
        if match:
            tags.append((match.group(1), [match.group(2).strip()]))
        elif tags:
            tags[-1][1].append(line)
        else:
            description.append(line)

    tag_infos: list[JSDocTagInfo] = []
    for name, text_lines in tags:
        text = "\n".join(text_lines).strip()
        if name in _TYPED_TAGS:
            text = _strip_type_expression(text)
        tag_infos.append(JSDocTagInfo(name=name, text=text))

    return ParsedJSDoc(comment="\n".join(description).strip(), tags=tuple(tag_infos))


def _jsdoc_host(node: Node) -> Node:
    """The node whose leading comments document ``node``."""
    parent = node.parent
    if node.type in ("arrow_function", "function_expression", "function", "class"):
        # Sole initializer of a variable statement
        if parent is not None and parent.type == "variable_declarator":
            declaration = parent.parent
            if declaration is not None and len(
                [c for c in declaration.named_children if c.type == "variable_declarator"]
            ) == 1:
                return _jsdoc_host(parent)
        return node if parent is None or parent.type != "export_statement" else parent
    if node.type == "variable_declarator" and parent is not None:
        node, parent = parent, parent.parent
    if parent is not None and parent.type in ("export_statement", "ambient_declaration"):
        return _jsdoc_host(parent) if parent.type == "ambient_declaration" else parent
    return node


def leading_jsdoc(node: Node, source: SourceFile) -> list[ParsedJSDoc]:
    """Parsed JSDoc comments directly preceding a declaration, in source order."""
    host = _jsdoc_host(node)
    comments: list[ParsedJSDoc] = []
    sibling = host.prev_sibling
    while sibling is not None and sibling.type == "comment":
        text = source.text_of(sibling)
        if is_jsdoc_comment(text):
            comments.append(parse_jsdoc(text))
        sibling = sibling.prev_sibling
    comments.reverse()
    return comments
