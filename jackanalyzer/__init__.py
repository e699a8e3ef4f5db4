"""jackanalyzer: syntax analyzer for the Jack language.

Lexes Jack source text and writes its full parse tree as indented XML.

    from jackanalyzer import analyze_source

    xml = analyze_source(open("Main.jack").read())
"""

from __future__ import annotations

__version__ = "0.1.0"

from jackanalyzer.compiler.serializer import serialize_tree
from jackanalyzer.core.errors import (
    AnalyzerError,
    JackSyntaxError,
    LexicalError,
    SourceReadError,
    SourceResolutionError,
)
from jackanalyzer.syntax.lexer import JackTokenizer
from jackanalyzer.syntax.parser import Parser
from jackanalyzer.syntax.tree import Node


def parse_source(source: str) -> Node:
    """Lex and parse one class, returning its parse tree."""
    return Parser(JackTokenizer(source)).parse_class()


def analyze_source(source: str, indent: str = "  ") -> str:
    """Lex and parse one class, returning its XML parse tree."""
    return serialize_tree(parse_source(source), indent)


__all__ = [
    "AnalyzerError",
    "JackSyntaxError",
    "LexicalError",
    "Node",
    "SourceReadError",
    "SourceResolutionError",
    "__version__",
    "analyze_source",
    "parse_source",
]
