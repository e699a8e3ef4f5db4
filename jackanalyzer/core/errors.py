"""Exception types shared by the lexer, parser, and driver.

Every error raised while analyzing a source unit derives from AnalyzerError,
so the driver can catch one type per unit and report it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from jackanalyzer.syntax.tokens import Token


class AnalyzerError(Exception):
    """Base class for all errors that abort the analysis of a source unit."""


class LexicalError(AnalyzerError):
    """Raised when the source text cannot be split into tokens."""

    def __init__(self, message: str, line: int) -> None:
        self.message = message
        self.line = line
        super().__init__(f"Lexical error at L{line}: {message}")


class JackSyntaxError(AnalyzerError):
    """Raised when the current token cannot start what the active production needs.

    Attributes:
        production: Name of the grammar rule being parsed (e.g. ``letStatement``).
        expected: Human readable description of what would have been accepted.
        token: The offending token, or None at end of input.
        index: Position of the offending token in the token stream.
    """

    def __init__(
        self,
        production: str,
        expected: str,
        token: Token | None,
        index: int,
    ) -> None:
        self.production = production
        self.expected = expected
        self.token = token
        self.index = index

        if token is None:
            found = "end of input"
            location = f"token #{index}"
        else:
            found = f"{token.kind.value} {token.lexeme!r}"
            location = f"L{token.line}, token #{index}"
        self.found = found
        super().__init__(
            f"Syntax error at {location} in {production}: expected {expected}, found {found}"
        )


class SourceResolutionError(AnalyzerError):
    """Raised when an input path does not name a source file or a directory of them."""


class SourceReadError(AnalyzerError):
    """Raised when a source file cannot be read or decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")
