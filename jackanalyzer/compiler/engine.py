"""Compilation engine: parses one Jack class and writes its parse tree.

Takes a tokenizer (the token source) and a text sink. The whole class is
parsed into a tree before anything is written, so a syntax error leaves the
sink untouched.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import TextIO

from jackanalyzer.compiler.serializer import DEFAULT_INDENT, write_tree
from jackanalyzer.syntax.lexer import TokenCursor
from jackanalyzer.syntax.parser import Parser
from jackanalyzer.syntax.tree import Node

logger = logging.getLogger(__name__)


class CompilationEngine:
    """Drive the parser over one token source and write to one sink.

    Usage:
        with CompilationEngine(JackTokenizer(source), sink) as engine:
            engine.compile_class()
    """

    def __init__(
        self,
        tokenizer: TokenCursor,
        sink: TextIO,
        indent: str = DEFAULT_INDENT,
    ) -> None:
        self._parser = Parser(tokenizer)
        self._sink = sink
        self._indent = indent
        self._closed = False

    def compile_class(self) -> Node:
        """Parse exactly one class, write it to the sink, and return its tree."""
        if self._closed:
            raise ValueError("compile_class() called on a closed CompilationEngine")
        root = self._parser.parse_class()
        write_tree(root, self._sink, self._indent)
        logger.debug("Wrote parse tree with %d elements", sum(1 for _ in root.walk()))
        return root

    def close(self) -> None:
        """Flush and close the sink. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._sink.close()

    def __enter__(self) -> CompilationEngine:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
