"""Jack syntax: tokens, lexer, and parser.

Usage:
    from jackanalyzer.syntax import JackTokenizer, Parser

    root = Parser(JackTokenizer(source)).parse_class()
"""

from jackanalyzer.syntax.lexer import JackTokenizer, Lexer, TokenCursor, strip_comments
from jackanalyzer.syntax.parser import Parser
from jackanalyzer.syntax.tokens import Token, TokenKind, classify, make_token
from jackanalyzer.syntax.tree import Node

__all__ = [
    "JackTokenizer",
    "Lexer",
    "Node",
    "Parser",
    "Token",
    "TokenCursor",
    "TokenKind",
    "classify",
    "make_token",
    "strip_comments",
]
