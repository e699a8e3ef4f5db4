import io

import pytest

from conftest import MINIMAL_SOURCE, MINIMAL_XML
from jackanalyzer.compiler.engine import CompilationEngine
from jackanalyzer.core.errors import JackSyntaxError
from jackanalyzer.syntax.lexer import JackTokenizer


def test_compile_class_writes_tree_and_close_releases_sink():
    sink = io.StringIO()
    engine = CompilationEngine(JackTokenizer(MINIMAL_SOURCE), sink)

    root = engine.compile_class()
    assert root.name == "class"
    assert sink.getvalue() == MINIMAL_XML

    engine.close()
    engine.close()
    assert sink.closed


def test_syntax_error_writes_nothing():
    sink = io.StringIO()
    engine = CompilationEngine(JackTokenizer("class A { function void f() { let = 1; } }"), sink)

    with pytest.raises(JackSyntaxError):
        engine.compile_class()
    assert sink.getvalue() == ""


def test_context_manager_closes_sink_even_on_error():
    sink = io.StringIO()

    with pytest.raises(JackSyntaxError):
        with CompilationEngine(JackTokenizer("class"), sink) as engine:
            engine.compile_class()

    assert sink.closed


def test_compile_after_close_is_rejected():
    engine = CompilationEngine(JackTokenizer(MINIMAL_SOURCE), io.StringIO())
    engine.close()

    with pytest.raises(ValueError):
        engine.compile_class()
