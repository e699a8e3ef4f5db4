"""Serializer for Jack parse trees and token streams.

Writes the XML-like element stream compared against reference fixtures:
one element per line, two spaces of indentation per nesting level, and
terminals rendered as ``<tag> text </tag>``.
"""

from __future__ import annotations

import html
from collections.abc import Iterable
from typing import TextIO

from jackanalyzer.syntax.tokens import Token
from jackanalyzer.syntax.tree import Node

DEFAULT_INDENT = "  "


def escape_text(text: str) -> str:
    """Escape ``<``, ``>`` and ``&``; everything else is written verbatim."""
    return html.escape(text, quote=False)


def format_terminal(tag: str, text: str) -> str:
    return f"<{tag}> {escape_text(text)} </{tag}>"


def iter_tree_lines(node: Node, indent: str = DEFAULT_INDENT, depth: int = 0) -> Iterable[str]:
    """Yield the output lines of ``node``, without line endings."""
    prefix = indent * depth
    if node.is_terminal:
        yield prefix + format_terminal(node.name, node.text or "")
        return

    yield f"{prefix}<{node.name}>"
    for child in node.children:
        yield from iter_tree_lines(child, indent, depth + 1)
    yield f"{prefix}</{node.name}>"


def write_tree(node: Node, sink: TextIO, indent: str = DEFAULT_INDENT) -> None:
    """Write ``node`` to ``sink``, one element per line."""
    for line in iter_tree_lines(node, indent):
        sink.write(line + "\n")


def serialize_tree(node: Node, indent: str = DEFAULT_INDENT) -> str:
    """Serialize a parse tree to a string."""
    return "".join(line + "\n" for line in iter_tree_lines(node, indent))


def serialize_tokens(tokens: Iterable[Token]) -> str:
    """Serialize a token stream as a flat ``<tokens>`` element."""
    lines = ["<tokens>"]
    lines.extend(format_terminal(token.kind.value, token.text) for token in tokens)
    lines.append("</tokens>")
    return "\n".join(lines) + "\n"
