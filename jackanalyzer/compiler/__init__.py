"""Output stage: turn parse trees and token streams into XML text.

Usage:
    from jackanalyzer.compiler import CompilationEngine
    from jackanalyzer.compiler.serializer import serialize_tree

    with CompilationEngine(JackTokenizer(source), sink) as engine:
        root = engine.compile_class()
"""

from jackanalyzer.compiler.engine import CompilationEngine
from jackanalyzer.compiler.serializer import (
    escape_text,
    serialize_tokens,
    serialize_tree,
    write_tree,
)

__all__ = [
    "CompilationEngine",
    "escape_text",
    "serialize_tokens",
    "serialize_tree",
    "write_tree",
]
