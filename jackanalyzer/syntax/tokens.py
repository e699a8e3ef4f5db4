"""Token types for the Jack lexer.

A token is one of five frozen dataclasses, one per token kind, each carrying
its own typed payload. Code that needs the integer value of a token matches
on IntConstToken and reads ``value``; there is no generic accessor that can
be asked for the wrong kind.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar


class TokenKind(str, Enum):
    """Token kinds. The value is the element tag used in XML output."""

    KEYWORD = "keyword"
    SYMBOL = "symbol"
    IDENTIFIER = "identifier"
    INT_CONST = "integerConstant"
    STRING_CONST = "stringConstant"


class Keyword(str, Enum):
    """The closed set of Jack keywords."""

    CLASS = "class"
    CONSTRUCTOR = "constructor"
    FUNCTION = "function"
    METHOD = "method"
    FIELD = "field"
    STATIC = "static"
    VAR = "var"
    INT = "int"
    CHAR = "char"
    BOOLEAN = "boolean"
    VOID = "void"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"
    THIS = "this"
    LET = "let"
    DO = "do"
    IF = "if"
    ELSE = "else"
    WHILE = "while"
    RETURN = "return"


KEYWORDS: dict[str, Keyword] = {kw.value: kw for kw in Keyword}

SYMBOLS: frozenset[str] = frozenset("{}()[].,;+-*/&|<>=~")

_INT_RE = re.compile(r"[0-9]+")


# ---------------------------------------------------------------------------
# Token variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KeywordToken:
    """A reserved word such as ``class`` or ``while``."""

    keyword: Keyword
    line: int = 0

    kind: ClassVar[TokenKind] = TokenKind.KEYWORD

    @property
    def lexeme(self) -> str:
        return self.keyword.value

    @property
    def text(self) -> str:
        return self.keyword.value


@dataclass(frozen=True)
class SymbolToken:
    """A single punctuation or operator character."""

    symbol: str
    line: int = 0

    kind: ClassVar[TokenKind] = TokenKind.SYMBOL

    @property
    def lexeme(self) -> str:
        return self.symbol

    @property
    def text(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class IdentifierToken:
    """A class, subroutine, or variable name."""

    name: str
    line: int = 0

    kind: ClassVar[TokenKind] = TokenKind.IDENTIFIER

    @property
    def lexeme(self) -> str:
        return self.name

    @property
    def text(self) -> str:
        return self.name


@dataclass(frozen=True)
class IntConstToken:
    """A decimal integer literal."""

    value: int
    line: int = 0
    # Source spelling, so "007" is written back as "007".
    digits: str = field(default="", compare=False)

    kind: ClassVar[TokenKind] = TokenKind.INT_CONST

    @property
    def lexeme(self) -> str:
        return self.digits or str(self.value)

    @property
    def text(self) -> str:
        return self.lexeme


@dataclass(frozen=True)
class StringConstToken:
    """A double-quoted string literal. ``value`` excludes the quotes."""

    value: str
    line: int = 0

    kind: ClassVar[TokenKind] = TokenKind.STRING_CONST

    @property
    def lexeme(self) -> str:
        return f'"{self.value}"'

    @property
    def text(self) -> str:
        return self.value


# Union of all token types
Token = KeywordToken | SymbolToken | IdentifierToken | IntConstToken | StringConstToken


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def classify(lexeme: str) -> TokenKind:
    """Return the kind of a lexeme. Depends only on the lexeme's content."""
    if lexeme in KEYWORDS:
        return TokenKind.KEYWORD
    if len(lexeme) == 1 and lexeme in SYMBOLS:
        return TokenKind.SYMBOL
    if _INT_RE.fullmatch(lexeme):
        return TokenKind.INT_CONST
    if len(lexeme) >= 2 and lexeme.startswith('"') and lexeme.endswith('"'):
        return TokenKind.STRING_CONST
    return TokenKind.IDENTIFIER


def make_token(lexeme: str, line: int = 0) -> Token:
    """Build the token variant matching ``classify(lexeme)``."""
    kind = classify(lexeme)
    if kind is TokenKind.KEYWORD:
        return KeywordToken(KEYWORDS[lexeme], line)
    if kind is TokenKind.SYMBOL:
        return SymbolToken(lexeme, line)
    if kind is TokenKind.INT_CONST:
        return IntConstToken(int(lexeme), line, lexeme)
    if kind is TokenKind.STRING_CONST:
        return StringConstToken(lexeme[1:-1], line)
    return IdentifierToken(lexeme, line)
