"""Hand-written lexer for the Jack language.

Tokenizes .jack source text into an immutable stream of Token objects.
Comments are stripped line by line before tokenizing; a block comment that
starts on one line may end on a later one.

Usage:
    tokens = Lexer(source).tokenize()

    tokenizer = JackTokenizer(source)
    while tokenizer.has_more_tokens():
        token = tokenizer.advance()
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from jackanalyzer.core.errors import LexicalError
from jackanalyzer.syntax.tokens import SYMBOLS, Token, make_token

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Comment stripping
# ---------------------------------------------------------------------------


def strip_comments(source: str) -> list[str]:
    """Remove ``//`` and ``/* ... */`` comments from every line of ``source``.

    Returns one entry per physical line, so list index + 1 is the line
    number. Lines made up only of comments come back empty.

    Raises:
        LexicalError: if a block comment is still open at end of input.
    """
    stripped: list[str] = []
    inside_block = False
    block_start = 0

    for lineno, line in enumerate(source.splitlines(), start=1):
        was_inside = inside_block
        if inside_block:
            line, inside_block = _strip_block_line(line)
        else:
            line, inside_block = _strip_normal_line(line)
        if inside_block and not was_inside:
            block_start = lineno
        stripped.append(line)

    if inside_block:
        raise LexicalError("Unterminated block comment", block_start)
    return stripped


def _strip_normal_line(line: str) -> tuple[str, bool]:
    """Strip comments from a line that starts outside any block comment.

    Returns the remaining text and whether a block comment is left open.
    """
    block = line.find("/*")
    slash = line.find("//")

    if block != -1 and (slash == -1 or block < slash):
        close = line.find("*/", block + 2)
        if close == -1:
            return line[:block], True
        rest, inside_block = _strip_normal_line(line[close + 2 :])
        return line[:block] + rest, inside_block

    if slash != -1:
        return line[:slash], False
    return line, False


def _strip_block_line(line: str) -> tuple[str, bool]:
    """Strip a line that starts inside an open block comment."""
    close = line.find("*/")
    if close == -1:
        return "", True
    return _strip_normal_line(line[close + 2 :])


# ---------------------------------------------------------------------------
# Lexer
# ---------------------------------------------------------------------------


class Lexer:
    """Tokenize Jack source text.

    Usage:
        lexer = Lexer(source_text)
        tokens = lexer.tokenize()
    """

    def __init__(self, source: str) -> None:
        self._source = source

    def tokenize(self) -> tuple[Token, ...]:
        """Strip comments and scan every line, returning all tokens in order."""
        tokens: list[Token] = []
        lines = strip_comments(self._source)

        for lineno, line in enumerate(lines, start=1):
            if line.strip():
                tokens.extend(self._scan_line(line, lineno))

        logger.debug("Tokenized %d lines into %d tokens", len(lines), len(tokens))
        return tuple(tokens)

    @staticmethod
    def _scan_line(line: str, lineno: int) -> list[Token]:
        """Split one comment-free line into tokens."""
        tokens: list[Token] = []
        pending: list[str] = []

        def flush() -> None:
            if pending:
                tokens.append(make_token("".join(pending), lineno))
                pending.clear()

        i = 0
        while i < len(line):
            ch = line[i]
            if ch.isspace():
                flush()
            elif ch in SYMBOLS:
                flush()
                tokens.append(make_token(ch, lineno))
            elif ch == '"':
                flush()
                end = line.find('"', i + 1)
                if end == -1:
                    raise LexicalError(
                        f"Unterminated string literal: {line[i:].rstrip()!r}", lineno
                    )
                tokens.append(make_token(line[i : end + 1], lineno))
                i = end
            else:
                pending.append(ch)
            i += 1

        flush()
        return tokens


# ---------------------------------------------------------------------------
# Cursor
# ---------------------------------------------------------------------------


class TokenCursor:
    """Forward-only read position over a fully built token stream.

    ``current`` is the token at the cursor (None once exhausted); the first
    token is current right after construction.
    """

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens: tuple[Token, ...] = tuple(tokens)
        self._pos = 0

    def __len__(self) -> int:
        return len(self._tokens)

    @property
    def tokens(self) -> tuple[Token, ...]:
        return self._tokens

    @property
    def position(self) -> int:
        return self._pos

    @property
    def current(self) -> Token | None:
        if self._pos >= len(self._tokens):
            return None
        return self._tokens[self._pos]

    def peek(self, offset: int = 1) -> Token | None:
        """Look ``offset`` tokens past the current one without consuming."""
        index = self._pos + offset
        if index >= len(self._tokens):
            return None
        return self._tokens[index]

    def has_more_tokens(self) -> bool:
        return self._pos < len(self._tokens)

    def advance(self) -> Token | None:
        """Consume the current token and return it (None when exhausted)."""
        token = self.current
        if self.has_more_tokens():
            self._pos += 1
        return token


class JackTokenizer(TokenCursor):
    """Lex a whole source unit up front and expose it through the cursor API."""

    def __init__(self, source: str) -> None:
        super().__init__(Lexer(source).tokenize())
