"""jackanalyzer CLI: syntax analyzer for the Jack language.

Usage:
    jackanalyzer analyze <path> [--output-dir <dir>] [--tokens] [-v]
    jackanalyzer tokens <file.jack>
    jackanalyzer parse <file.jack>
    jackanalyzer compare <actual.xml> <expected.xml>
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from jackanalyzer import __version__
from jackanalyzer.core.config import AnalyzerConfig, get_config
from jackanalyzer.core.errors import AnalyzerError, SourceReadError

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jackanalyzer",
        description="jackanalyzer: lex and parse Jack programs into XML parse trees",
    )
    parser.add_argument("--version", action="version", version=f"jackanalyzer {__version__}")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="More logging (-v info, -vv debug)"
    )

    # Accepted after the subcommand too; SUPPRESS keeps a top-level count intact
    verbosity = argparse.ArgumentParser(add_help=False)
    verbosity.add_argument(
        "-v", "--verbose", action="count", default=argparse.SUPPRESS, help="More logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- analyze ---
    analyze_parser = subparsers.add_parser(
        "analyze",
        parents=[verbosity],
        help="Analyze a .jack file or a directory of .jack files",
    )
    analyze_parser.add_argument("path", type=str, help="Path to a .jack file or directory")
    analyze_parser.add_argument(
        "--output-dir", "-o", type=str, default=None, help="Write outputs here instead of next to sources"
    )
    analyze_parser.add_argument(
        "--tokens", action="store_true", help="Also write the token listing (FooT.xml)"
    )

    # --- tokens ---
    tokens_parser = subparsers.add_parser(
        "tokens", parents=[verbosity], help="Print the token listing of a file"
    )
    tokens_parser.add_argument("file", type=str, help="Path to a .jack file")

    # --- parse ---
    parse_parser = subparsers.add_parser(
        "parse", parents=[verbosity], help="Print the parse tree of a file"
    )
    parse_parser.add_argument("file", type=str, help="Path to a .jack file")

    # --- compare ---
    compare_parser = subparsers.add_parser(
        "compare", parents=[verbosity], help="Compare an output file with a reference file"
    )
    compare_parser.add_argument("actual", type=str, help="Output produced by the analyzer")
    compare_parser.add_argument("expected", type=str, help="Reference output")

    return parser


def configure_logging(level: str, verbose: int = 0) -> None:
    """Send log records to stderr through rich."""
    if verbose >= 2:
        level = "DEBUG"
    elif verbose == 1:
        level = "INFO"

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def cmd_analyze(args: argparse.Namespace, config: AnalyzerConfig) -> int:
    """Analyze a file or directory and write XML outputs."""
    from jackanalyzer.analyzer import JackAnalyzer

    config = config.with_overrides(
        output_dir=Path(args.output_dir) if args.output_dir else None,
        emit_tokens=True if args.tokens else None,
    )
    analyzer = JackAnalyzer(config)

    try:
        report = analyzer.analyze_path(Path(args.path))
    except AnalyzerError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        return 1

    for result in report.results:
        if result.ok:
            console.print(
                f"[green]ok[/green]   {escape(result.source.name)} -> {escape(str(result.output))}"
            )
        else:
            err_console.print(
                f"[red]FAIL[/red] {escape(result.source.name)}: {escape(str(result.error))}"
            )

    total = len(report.results)
    failed = len(report.failures)
    console.print(f"{total - failed}/{total} unit(s) analyzed successfully.")
    return 0 if report.ok else 1


def cmd_tokens(args: argparse.Namespace, config: AnalyzerConfig) -> int:
    """Print the token listing of a single file."""
    from jackanalyzer.compiler.serializer import serialize_tokens
    from jackanalyzer.syntax.lexer import Lexer

    source = _read_source(Path(args.file), config)
    if source is None:
        return 1

    try:
        tokens = Lexer(source).tokenize()
    except AnalyzerError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        return 1

    sys.stdout.write(serialize_tokens(tokens))
    return 0


def cmd_parse(args: argparse.Namespace, config: AnalyzerConfig) -> int:
    """Print the parse tree of a single file."""
    from jackanalyzer.compiler.serializer import serialize_tree
    from jackanalyzer.syntax.lexer import JackTokenizer
    from jackanalyzer.syntax.parser import Parser

    source = _read_source(Path(args.file), config)
    if source is None:
        return 1

    try:
        root = Parser(JackTokenizer(source)).parse_class()
    except AnalyzerError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        return 1

    sys.stdout.write(serialize_tree(root, config.indent))
    return 0


def cmd_compare(args: argparse.Namespace, config: AnalyzerConfig) -> int:
    """Compare two XML files, ignoring indentation and blank lines."""
    from jackanalyzer.compare import compare_files

    actual = Path(args.actual)
    expected = Path(args.expected)
    for path in (actual, expected):
        if not path.exists():
            err_console.print(f"[red]Error:[/red] File not found: {escape(str(path))}")
            return 1

    differences = compare_files(actual, expected, encoding=config.encoding)
    if not differences:
        console.print(f"[green]Match:[/green] {escape(actual.name)} == {escape(expected.name)}")
        return 0

    console.print(f"[red]Mismatch:[/red] {escape(actual.name)} != {escape(expected.name)}")
    for difference in differences:
        console.print(f"  {escape(difference)}")
    return 1


def _read_source(path: Path, config: AnalyzerConfig) -> str | None:
    from jackanalyzer.analyzer import read_source

    if not path.is_file():
        err_console.print(f"[red]Error:[/red] File not found: {escape(str(path))}")
        return None
    try:
        return read_source(path, config.encoding)
    except SourceReadError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        return None


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    config = get_config()
    configure_logging(config.log_level, args.verbose)

    dispatch = {
        "analyze": cmd_analyze,
        "tokens": cmd_tokens,
        "parse": cmd_parse,
        "compare": cmd_compare,
    }
    return dispatch[args.command](args, config)


if __name__ == "__main__":
    sys.exit(main())
