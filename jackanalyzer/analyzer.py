"""Driver that runs the analyzer over .jack files on disk.

Resolves a path into source units, runs lexer + compilation engine on each
one, and writes ``Foo.xml`` (and optionally ``FooT.xml``) next to
``Foo.jack`` or into a configured output directory.

Each unit is independent: a unit that fails to lex or parse is reported and
leaves no output file behind, and the remaining units are still processed.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from jackanalyzer.compiler.engine import CompilationEngine
from jackanalyzer.compiler.serializer import serialize_tokens
from jackanalyzer.core.config import AnalyzerConfig, get_config
from jackanalyzer.core.errors import AnalyzerError, SourceReadError, SourceResolutionError
from jackanalyzer.syntax.lexer import JackTokenizer

logger = logging.getLogger(__name__)


@dataclass
class UnitResult:
    """Outcome of analyzing one source file."""

    source: Path
    output: Path | None = None
    tokens_output: Path | None = None
    error: AnalyzerError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class AnalysisReport:
    """Outcome of analyzing every unit a path resolved to."""

    results: list[UnitResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(result.ok for result in self.results)

    @property
    def failures(self) -> list[UnitResult]:
        return [result for result in self.results if not result.ok]


def resolve_sources(path: Path, suffix: str = ".jack") -> list[Path]:
    """Return the source files named by ``path``.

    A file must carry ``suffix``. A directory yields its direct children
    with ``suffix``, sorted by name; subdirectories are not searched.

    Raises:
        SourceResolutionError: if the path does not exist, is a file with the
            wrong suffix, or is a directory without any source files.
    """
    if not path.exists():
        raise SourceResolutionError(f"Path does not exist: {path}")

    if path.is_file():
        if path.suffix != suffix:
            raise SourceResolutionError(f"Not a {suffix} file: {path}")
        return [path]

    sources = sorted(p for p in path.iterdir() if p.is_file() and p.suffix == suffix)
    if not sources:
        raise SourceResolutionError(f"No {suffix} files found in {path}")
    return sources


def read_source(path: Path, encoding: str = "utf-8") -> str:
    """Read a source file, raising SourceReadError if it cannot be read or decoded."""
    try:
        return path.read_text(encoding=encoding)
    except UnicodeDecodeError as exc:
        raise SourceReadError(path, f"not valid {exc.encoding}: {exc.reason}") from exc
    except OSError as exc:
        raise SourceReadError(path, exc.strerror or str(exc)) from exc


class JackAnalyzer:
    """Analyze .jack files and write their parse trees as XML.

    Usage:
        analyzer = JackAnalyzer()
        report = analyzer.analyze_path(Path("Square"))
    """

    def __init__(self, config: AnalyzerConfig | None = None) -> None:
        self._config = config or get_config()

    @property
    def config(self) -> AnalyzerConfig:
        return self._config

    def output_path_for(self, source: Path, suffix: str | None = None) -> Path:
        """Destination for ``source`` with ``suffix`` (defaults to the XML suffix)."""
        name = source.stem + (suffix or self._config.output_suffix)
        directory = self._config.output_dir or source.parent
        return directory / name

    def analyze_path(self, path: Path) -> AnalysisReport:
        """Analyze a single file or every source file in a directory."""
        sources = resolve_sources(path, self._config.source_suffix)
        logger.info("Analyzing %d source file(s) from %s", len(sources), path)

        report = AnalysisReport()
        for source in sources:
            report.results.append(self.analyze_file(source))

        if report.failures:
            logger.warning("%d of %d unit(s) failed", len(report.failures), len(sources))
        return report

    def analyze_file(self, source: Path) -> UnitResult:
        """Lex and parse one file, writing its outputs only if both succeed."""
        logger.info("Processing: %s", source.name)
        result = UnitResult(source=source)

        try:
            text = read_source(source, self._config.encoding)
            tokenizer = JackTokenizer(text)
        except AnalyzerError as exc:
            logger.error("%s: %s", source, exc)
            result.error = exc
            return result

        if self._config.output_dir is not None:
            self._config.output_dir.mkdir(parents=True, exist_ok=True)

        def compile_into(sink: TextIO) -> None:
            with CompilationEngine(tokenizer, sink, self._config.indent) as engine:
                engine.compile_class()

        output_path = self.output_path_for(source)
        try:
            self._write_atomic(output_path, compile_into)
        except AnalyzerError as exc:
            logger.error("%s: %s", source, exc)
            result.error = exc
            return result

        result.output = output_path
        logger.info("Output written to: %s", output_path)

        if self._config.emit_tokens:
            tokens_path = self.output_path_for(source, self._config.token_suffix)
            self._write_atomic(
                tokens_path, lambda sink: sink.write(serialize_tokens(tokenizer.tokens))
            )
            result.tokens_output = tokens_path
        return result

    def _write_atomic(self, dest: Path, write: Callable[[TextIO], object]) -> None:
        """Write to a temporary sibling of ``dest`` and rename it into place.

        If ``write`` raises, the temporary file is removed and ``dest`` is
        left as it was.
        """
        fd, tmp_name = tempfile.mkstemp(
            dir=dest.parent, prefix=f".{dest.name}.", suffix=".tmp"
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding=self._config.encoding, newline="\n") as sink:
                write(sink)
            os.replace(tmp_path, dest)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
