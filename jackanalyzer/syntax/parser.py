"""Hand-written recursive descent parser for the Jack language.

Consumes tokens from a TokenCursor and builds the concrete parse tree of
exactly one class. There is one routine per grammar nonterminal; each one
expects the cursor on the first token of its nonterminal and leaves it on
the first token past it.

The only lookahead in the grammar is in ``term``: after an identifier, the
next token decides between array access (``[``), subroutine call (``(`` or
``.``) and a plain variable.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from jackanalyzer.core.errors import JackSyntaxError
from jackanalyzer.syntax import tree
from jackanalyzer.syntax.lexer import TokenCursor
from jackanalyzer.syntax.tokens import (
    IdentifierToken,
    IntConstToken,
    Keyword,
    KeywordToken,
    StringConstToken,
    SymbolToken,
    Token,
)
from jackanalyzer.syntax.tree import Node

logger = logging.getLogger(__name__)


_CLASS_VAR_KINDS = (Keyword.STATIC, Keyword.FIELD)
_SUBROUTINE_KINDS = (Keyword.CONSTRUCTOR, Keyword.FUNCTION, Keyword.METHOD)
_PRIMITIVE_TYPES = (Keyword.INT, Keyword.CHAR, Keyword.BOOLEAN)
_KEYWORD_CONSTANTS = (Keyword.TRUE, Keyword.FALSE, Keyword.NULL, Keyword.THIS)
_UNARY_OPS = "-~"
OPERATORS = "+-*/&|<>="


class Parser:
    """Parse a Jack token stream into a parse tree rooted at ``class``.

    Usage:
        parser = Parser(JackTokenizer(source))
        root = parser.parse_class()
    """

    def __init__(self, cursor: TokenCursor) -> None:
        self._cursor = cursor
        self._statements: dict[Keyword, Callable[[], Node]] = {
            Keyword.LET: self._compile_let,
            Keyword.IF: self._compile_if,
            Keyword.WHILE: self._compile_while,
            Keyword.DO: self._compile_do,
            Keyword.RETURN: self._compile_return,
        }

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    def parse_class(self) -> Node:
        """Parse ``'class' identifier '{' classVarDec* subroutineDec* '}'``.

        The class must be the whole token stream; anything after its closing
        brace is a syntax error.
        """
        node = Node(tree.CLASS)
        self._expect_keyword(node, tree.CLASS, Keyword.CLASS)
        name = self._expect_identifier(node, tree.CLASS)
        self._expect_symbol(node, tree.CLASS, "{")

        while self._check_keyword(*_CLASS_VAR_KINDS):
            node.add(self._compile_class_var_dec())
        while self._check_keyword(*_SUBROUTINE_KINDS):
            node.add(self._compile_subroutine())

        self._expect_symbol(node, tree.CLASS, "}")

        if self._cursor.has_more_tokens():
            raise self._error(tree.CLASS, "end of input")

        logger.debug("Parsed class %s (%d tokens)", name, len(self._cursor))
        return node

    # ------------------------------------------------------------------
    # Program structure
    # ------------------------------------------------------------------

    def _compile_class_var_dec(self) -> Node:
        node = Node(tree.CLASS_VAR_DEC)
        self._expect_keyword(node, tree.CLASS_VAR_DEC, *_CLASS_VAR_KINDS)
        self._compile_type(node, tree.CLASS_VAR_DEC)
        self._compile_name_list(node, tree.CLASS_VAR_DEC)
        return node

    def _compile_subroutine(self) -> Node:
        node = Node(tree.SUBROUTINE_DEC)
        self._expect_keyword(node, tree.SUBROUTINE_DEC, *_SUBROUTINE_KINDS)
        if self._check_keyword(Keyword.VOID):
            node.add(Node.terminal(self._cursor.advance()))
        else:
            self._compile_type(node, tree.SUBROUTINE_DEC)
        self._expect_identifier(node, tree.SUBROUTINE_DEC)
        self._expect_symbol(node, tree.SUBROUTINE_DEC, "(")
        node.add(self._compile_parameter_list())
        self._expect_symbol(node, tree.SUBROUTINE_DEC, ")")
        node.add(self._compile_subroutine_body())
        return node

    def _compile_parameter_list(self) -> Node:
        """Parse a possibly empty parameter list, without its parentheses."""
        node = Node(tree.PARAMETER_LIST)
        if self._check_symbol(")"):
            return node

        self._compile_type(node, tree.PARAMETER_LIST)
        self._expect_identifier(node, tree.PARAMETER_LIST)
        while self._check_symbol(","):
            node.add(Node.terminal(self._cursor.advance()))
            self._compile_type(node, tree.PARAMETER_LIST)
            self._expect_identifier(node, tree.PARAMETER_LIST)
        return node

    def _compile_subroutine_body(self) -> Node:
        node = Node(tree.SUBROUTINE_BODY)
        self._expect_symbol(node, tree.SUBROUTINE_BODY, "{")
        while self._check_keyword(Keyword.VAR):
            node.add(self._compile_var_dec())
        node.add(self._compile_statements())
        self._expect_symbol(node, tree.SUBROUTINE_BODY, "}")
        return node

    def _compile_var_dec(self) -> Node:
        node = Node(tree.VAR_DEC)
        self._expect_keyword(node, tree.VAR_DEC, Keyword.VAR)
        self._compile_type(node, tree.VAR_DEC)
        self._compile_name_list(node, tree.VAR_DEC)
        return node

    def _compile_type(self, parent: Node, production: str) -> None:
        """Add ``'int' | 'char' | 'boolean' | identifier`` to ``parent``."""
        token = self._cursor.current
        if isinstance(token, IdentifierToken) or (
            isinstance(token, KeywordToken) and token.keyword in _PRIMITIVE_TYPES
        ):
            parent.add(Node.terminal(self._cursor.advance()))
            return
        raise self._error(production, "a type (int, char, boolean or a class name)")

    def _compile_name_list(self, parent: Node, production: str) -> None:
        """Add ``identifier (',' identifier)* ';'`` to ``parent``."""
        self._expect_identifier(parent, production)
        while self._check_symbol(","):
            parent.add(Node.terminal(self._cursor.advance()))
            self._expect_identifier(parent, production)
        self._expect_symbol(parent, production, ";")

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _compile_statements(self) -> Node:
        """Parse ``statement*``, dispatching on the leading keyword."""
        node = Node(tree.STATEMENTS)
        while True:
            token = self._cursor.current
            if not isinstance(token, KeywordToken) or token.keyword not in self._statements:
                return node
            node.add(self._statements[token.keyword]())

    def _compile_let(self) -> Node:
        node = Node(tree.LET_STATEMENT)
        self._expect_keyword(node, tree.LET_STATEMENT, Keyword.LET)
        self._expect_identifier(node, tree.LET_STATEMENT)
        if self._check_symbol("["):
            node.add(Node.terminal(self._cursor.advance()))
            node.add(self._compile_expression())
            self._expect_symbol(node, tree.LET_STATEMENT, "]")
        self._expect_symbol(node, tree.LET_STATEMENT, "=")
        node.add(self._compile_expression())
        self._expect_symbol(node, tree.LET_STATEMENT, ";")
        return node

    def _compile_if(self) -> Node:
        node = Node(tree.IF_STATEMENT)
        self._expect_keyword(node, tree.IF_STATEMENT, Keyword.IF)
        self._compile_condition(node, tree.IF_STATEMENT)
        self._compile_block(node, tree.IF_STATEMENT)
        if self._check_keyword(Keyword.ELSE):
            node.add(Node.terminal(self._cursor.advance()))
            self._compile_block(node, tree.IF_STATEMENT)
        return node

    def _compile_while(self) -> Node:
        node = Node(tree.WHILE_STATEMENT)
        self._expect_keyword(node, tree.WHILE_STATEMENT, Keyword.WHILE)
        self._compile_condition(node, tree.WHILE_STATEMENT)
        self._compile_block(node, tree.WHILE_STATEMENT)
        return node

    def _compile_do(self) -> Node:
        node = Node(tree.DO_STATEMENT)
        self._expect_keyword(node, tree.DO_STATEMENT, Keyword.DO)
        self._expect_identifier(node, tree.DO_STATEMENT)
        self._compile_call_rest(node, tree.DO_STATEMENT)
        self._expect_symbol(node, tree.DO_STATEMENT, ";")
        return node

    def _compile_return(self) -> Node:
        node = Node(tree.RETURN_STATEMENT)
        self._expect_keyword(node, tree.RETURN_STATEMENT, Keyword.RETURN)
        if not self._check_symbol(";"):
            node.add(self._compile_expression())
        self._expect_symbol(node, tree.RETURN_STATEMENT, ";")
        return node

    def _compile_condition(self, parent: Node, production: str) -> None:
        """Add ``'(' expression ')'`` to ``parent``."""
        self._expect_symbol(parent, production, "(")
        parent.add(self._compile_expression())
        self._expect_symbol(parent, production, ")")

    def _compile_block(self, parent: Node, production: str) -> None:
        """Add ``'{' statements '}'`` to ``parent``."""
        self._expect_symbol(parent, production, "{")
        parent.add(self._compile_statements())
        self._expect_symbol(parent, production, "}")

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _compile_expression(self) -> Node:
        """Parse ``term (op term)*``."""
        node = Node(tree.EXPRESSION)
        node.add(self._compile_term())
        while self._check_symbol(*OPERATORS):
            node.add(Node.terminal(self._cursor.advance()))
            node.add(self._compile_term())
        return node

    def _compile_term(self) -> Node:
        node = Node(tree.TERM)
        token = self._cursor.current

        if isinstance(token, (IntConstToken, StringConstToken)):
            node.add(Node.terminal(self._cursor.advance()))
        elif isinstance(token, KeywordToken) and token.keyword in _KEYWORD_CONSTANTS:
            node.add(Node.terminal(self._cursor.advance()))
        elif isinstance(token, SymbolToken) and token.symbol == "(":
            node.add(Node.terminal(self._cursor.advance()))
            node.add(self._compile_expression())
            self._expect_symbol(node, tree.TERM, ")")
        elif isinstance(token, SymbolToken) and token.symbol in _UNARY_OPS:
            node.add(Node.terminal(self._cursor.advance()))
            node.add(self._compile_term())
        elif isinstance(token, IdentifierToken):
            # One token of lookahead, nothing consumed yet
            lookahead = self._cursor.peek()
            node.add(Node.terminal(self._cursor.advance()))
            if _is_symbol(lookahead, "["):
                node.add(Node.terminal(self._cursor.advance()))
                node.add(self._compile_expression())
                self._expect_symbol(node, tree.TERM, "]")
            elif _is_symbol(lookahead, "(", "."):
                self._compile_call_rest(node, tree.TERM)
        else:
            raise self._error(
                tree.TERM,
                "a constant, variable, subroutine call, '(' expression ')' or unary operator",
            )
        return node

    def _compile_call_rest(self, parent: Node, production: str) -> None:
        """Add the part of a subroutine call after its first identifier.

        Handles ``'(' expressionList ')'`` and
        ``'.' identifier '(' expressionList ')'``.
        """
        if self._check_symbol("."):
            parent.add(Node.terminal(self._cursor.advance()))
            self._expect_identifier(parent, production)
        self._expect_symbol(parent, production, "(")
        parent.add(self._compile_expression_list())
        self._expect_symbol(parent, production, ")")

    def _compile_expression_list(self) -> Node:
        """Parse a possibly empty, comma separated list of expressions."""
        node = Node(tree.EXPRESSION_LIST)
        if self._check_symbol(")"):
            return node

        node.add(self._compile_expression())
        while self._check_symbol(","):
            node.add(Node.terminal(self._cursor.advance()))
            node.add(self._compile_expression())
        return node

    # ------------------------------------------------------------------
    # Token stream helpers
    # ------------------------------------------------------------------

    def _check_symbol(self, *symbols: str) -> bool:
        return _is_symbol(self._cursor.current, *symbols)

    def _check_keyword(self, *keywords: Keyword) -> bool:
        token = self._cursor.current
        return isinstance(token, KeywordToken) and token.keyword in keywords

    def _expect_symbol(self, parent: Node, production: str, symbol: str) -> None:
        if not self._check_symbol(symbol):
            raise self._error(production, f"'{symbol}'")
        parent.add(Node.terminal(self._cursor.advance()))

    def _expect_keyword(self, parent: Node, production: str, *keywords: Keyword) -> None:
        if not self._check_keyword(*keywords):
            expected = " or ".join(f"'{kw.value}'" for kw in keywords)
            raise self._error(production, expected)
        parent.add(Node.terminal(self._cursor.advance()))

    def _expect_identifier(self, parent: Node, production: str) -> str:
        token = self._cursor.current
        if not isinstance(token, IdentifierToken):
            raise self._error(production, "an identifier")
        parent.add(Node.terminal(self._cursor.advance()))
        return token.name

    def _error(self, production: str, expected: str) -> JackSyntaxError:
        return JackSyntaxError(
            production=production,
            expected=expected,
            token=self._cursor.current,
            index=self._cursor.position,
        )


def _is_symbol(token: Token | None, *symbols: str) -> bool:
    return isinstance(token, SymbolToken) and token.symbol in symbols
