"""Documentation comments of symbols."""

from __future__ import annotations

import logging
from typing import Any

from ..core.types import JSDoc
from .protocol import CheckerProtocol, JSDocTagProtocol

logger = logging.getLogger(__name__)

DEFAULT_TAG = "default"


def format_tag(tag: JSDocTagProtocol) -> str:
    """Render a tag as ``@name text`` (``@name`` when it has no text)."""
    result = f"@{tag.name}"
    if tag.text:
        result += f" {tag.text}"
    return result


def get_full_js_doc_comment(symbol: Any) -> JSDoc:
    """Rebuild a symbol's whole doc comment from its text and tags.

    ``full_comment`` is the plain text followed by every tag except
    ``@default``; ``tags`` maps each tag name to its trimmed text, with
    repeated tags joined by newlines.

    Args:
        symbol: Symbol to document

    Returns:
        The symbol's JSDoc, empty when the symbol cannot supply comments
    """
    get_comment = getattr(symbol, "get_documentation_comment", None)
    if get_comment is None:
        return JSDoc()

    main_comment = get_comment()
    get_tags = getattr(symbol, "get_js_doc_tags", None)
    tags = (get_tags() if get_tags is not None else None) or []

    tag_comments: list[str] = []
    tag_map: dict[str, str] = {}
    for tag in tags:
        trimmed = (tag.text or "").strip()
        current = tag_map.get(tag.name)
        tag_map[tag.name] = f"{current}\n{trimmed}" if current else trimmed
        if tag.name != DEFAULT_TAG:
            tag_comments.append(format_tag(tag))

    return JSDoc(
        description=main_comment,
        full_comment=(main_comment + "\n" + "\n".join(tag_comments)).strip(),
        tags=tag_map,
    )


def find_doc_comment(symbol: Any, checker: CheckerProtocol) -> JSDoc:
    """Find the doc comment of a symbol, falling back to its root symbols.

    Aliases, instantiated generics and mapped types produce symbols with no
    comment of their own; the first root symbol with a comment is used.
    Otherwise the symbol's own JSDoc is returned, keeping tags such as
    ``@default`` that do not count towards the full comment.
    """
    comment = get_full_js_doc_comment(symbol)
    if comment.full_comment:
        return comment

    for root in checker.get_root_symbols(symbol):
        if root is symbol:
            continue
        root_comment = get_full_js_doc_comment(root)
        if root_comment.full_comment:
            logger.debug(f"Using documentation of root symbol for '{getattr(symbol, 'name', symbol)}'")
            return root_comment

    return comment
