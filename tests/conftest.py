from __future__ import annotations

from collections.abc import Callable

import pytest

from jackanalyzer import parse_source
from jackanalyzer.core.config import AnalyzerConfig, set_config
from jackanalyzer.syntax.tree import Node


MAIN_SOURCE = """\
// This is a comment
class Main {
    function void main() {
        var int x;
        let x = 42;
        do Output.printString("Hello, World!");
        return;
    }
}
"""

SQUARE_SOURCE = """\
/** Implements a graphical square. */
class Square {

   field int x, y; // screen location of the square's top-left corner
   field int size; /* length of this square, in pixels */
   static Array cache;

   /** Constructs a new square with a given location and size. */
   constructor Square new(int Ax, int Ay, int Asize) {
      let x = Ax;
      let y = Ay;
      let size = Asize;
      do draw();
      return this;
   }

   /* Disposes this square.
      Spans several lines. */
   method void dispose() {
      do Memory.deAlloc(this);
      return;
   }

   method boolean fits(Square other, char c) {
      var boolean ok;
      var Array a;
      let a = Array.new(3);
      let a[1] = (x + size) & (y < 511);
      if (~(x > 0) | (size = 0)) {
         let ok = false;
      } else {
         let ok = -a[1] * 2 / size;
      }
      while (ok) {
         let ok = null;
      }
      do Output.printString("x < y & z");
      return ok;
   }
}
"""

MINIMAL_SOURCE = """\
class Main {
  function void main() {
    return;
  }
}
"""

MINIMAL_XML = """\
<class>
  <keyword> class </keyword>
  <identifier> Main </identifier>
  <symbol> { </symbol>
  <subroutineDec>
    <keyword> function </keyword>
    <keyword> void </keyword>
    <identifier> main </identifier>
    <symbol> ( </symbol>
    <parameterList>
    </parameterList>
    <symbol> ) </symbol>
    <subroutineBody>
      <symbol> { </symbol>
      <statements>
        <returnStatement>
          <keyword> return </keyword>
          <symbol> ; </symbol>
        </returnStatement>
      </statements>
      <symbol> } </symbol>
    </subroutineBody>
  </subroutineDec>
  <symbol> } </symbol>
</class>
"""


@pytest.fixture(autouse=True)
def default_config():
    """Give every test a fresh config, unaffected by the environment."""
    set_config(AnalyzerConfig())
    yield
    set_config(None)


@pytest.fixture
def parse_statements() -> Callable[[str], Node]:
    """Parse statement source inside a wrapper class; return the statements node."""

    def parse(body: str) -> Node:
        root = parse_source(
            "class T {\n  function void f() {\n" + body + "\n  }\n}\n"
        )
        statements = root.find("subroutineDec").find("subroutineBody").find("statements")
        assert statements is not None
        return statements

    return parse


@pytest.fixture
def parse_expression(parse_statements) -> Callable[[str], Node]:
    """Parse ``let v = <source>;`` and return the right-hand expression node."""

    def parse(source: str) -> Node:
        let = parse_statements(f"let v = {source};").children[0]
        return let.find_all("expression")[-1]

    return parse
