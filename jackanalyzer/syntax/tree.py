"""Parse tree produced by the Jack parser.

The tree is concrete: every terminal the parser matched is kept as a leaf,
and every nonterminal that has its own element in the output is an inner
node. Children are in source order, so a pre-order walk of the leaves yields
the token stream back.

    class
      -> keyword, identifier, symbol
      -> classVarDec*
      -> subroutineDec*
          -> parameterList
          -> subroutineBody
              -> varDec*
              -> statements
                  -> letStatement | ifStatement | whileStatement | doStatement | returnStatement
                      -> expression
                          -> term ...
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from jackanalyzer.syntax.tokens import Token


# Element names of the nonterminals that appear in the output
CLASS = "class"
CLASS_VAR_DEC = "classVarDec"
SUBROUTINE_DEC = "subroutineDec"
PARAMETER_LIST = "parameterList"
SUBROUTINE_BODY = "subroutineBody"
VAR_DEC = "varDec"
STATEMENTS = "statements"
LET_STATEMENT = "letStatement"
IF_STATEMENT = "ifStatement"
WHILE_STATEMENT = "whileStatement"
DO_STATEMENT = "doStatement"
RETURN_STATEMENT = "returnStatement"
EXPRESSION = "expression"
TERM = "term"
EXPRESSION_LIST = "expressionList"


@dataclass
class Node:
    """A single element of the parse tree.

    Terminals have ``text`` set and no children; nonterminals have
    ``text`` None.
    """

    name: str
    children: list[Node] = field(default_factory=list)
    text: str | None = None

    @classmethod
    def terminal(cls, token: Token) -> Node:
        return cls(name=token.kind.value, text=token.text)

    @property
    def is_terminal(self) -> bool:
        return self.text is not None

    def add(self, child: Node) -> Node:
        """Append ``child`` and return it."""
        self.children.append(child)
        return child

    def find(self, name: str) -> Node | None:
        """First direct child called ``name``."""
        for child in self.children:
            if child.name == name:
                return child
        return None

    def find_all(self, name: str) -> list[Node]:
        return [child for child in self.children if child.name == name]

    def walk(self) -> Iterator[Node]:
        """Pre-order traversal including this node."""
        yield self
        for child in self.children:
            yield from child.walk()

    def leaves(self) -> list[str]:
        return [node.text for node in self.walk() if node.text is not None]
