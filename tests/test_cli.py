import pytest

from conftest import MINIMAL_SOURCE, MINIMAL_XML
from jackanalyzer import __version__
from jackanalyzer.cli import create_parser, main


@pytest.fixture
def project(tmp_path):
    (tmp_path / "Main.jack").write_text(MINIMAL_SOURCE, encoding="utf-8")
    return tmp_path


def test_analyze_directory(project, capsys):
    assert main(["analyze", str(project)]) == 0

    assert (project / "Main.xml").read_text(encoding="utf-8") == MINIMAL_XML
    out = capsys.readouterr().out
    assert "Main.jack" in out
    assert "1/1 unit(s) analyzed successfully." in out


def test_analyze_with_tokens_and_output_dir(project):
    out_dir = project / "out"

    assert main(["analyze", str(project / "Main.jack"), "--tokens", "-o", str(out_dir)]) == 0

    assert (out_dir / "Main.xml").exists()
    assert (out_dir / "MainT.xml").exists()


def test_analyze_failure_exits_nonzero(project, capsys):
    (project / "Bad.jack").write_text("class Bad { field int; }", encoding="utf-8")

    assert main(["analyze", str(project)]) == 1

    captured = capsys.readouterr()
    assert "FAIL" in captured.err
    assert "classVarDec" in captured.err
    assert "1/2 unit(s) analyzed successfully." in captured.out


def test_verbose_flag_after_subcommand(project):
    assert main(["analyze", str(project), "-v"]) == 0
    assert main(["-v", "parse", str(project / "Main.jack"), "-vv"]) == 0

    args = create_parser().parse_args(["-vv", "tokens", "x.jack"])
    assert args.verbose == 2
    assert create_parser().parse_args(["tokens", "x.jack", "-v"]).verbose == 1
    assert create_parser().parse_args(["tokens", "x.jack"]).verbose == 0


def test_analyze_missing_path(tmp_path, capsys):
    assert main(["analyze", str(tmp_path / "nope")]) == 1
    assert "does not exist" in capsys.readouterr().err


def test_parse_undecodable_file(tmp_path, capsys):
    bad = tmp_path / "Bad.jack"
    bad.write_bytes(b"class Bad { \xff }")

    assert main(["parse", str(bad)]) == 1
    assert "Cannot read" in capsys.readouterr().err


def test_tokens_command(project, capsys):
    assert main(["tokens", str(project / "Main.jack")]) == 0

    out = capsys.readouterr().out
    assert out.startswith("<tokens>\n<keyword> class </keyword>\n<identifier> Main </identifier>\n")
    assert out.endswith("</tokens>\n")


def test_parse_command(project, capsys):
    assert main(["parse", str(project / "Main.jack")]) == 0
    assert capsys.readouterr().out == MINIMAL_XML


def test_parse_command_reports_errors(tmp_path, capsys):
    bad = tmp_path / "Bad.jack"
    bad.write_text('class Bad { "open', encoding="utf-8")

    assert main(["parse", str(bad)]) == 1
    assert "Unterminated string" in capsys.readouterr().err


def test_compare_command(project, capsys):
    main(["analyze", str(project)])
    reference = project / "Main.cmp"
    reference.write_text(MINIMAL_XML.replace("  ", "\t"), encoding="utf-8")
    capsys.readouterr()

    assert main(["compare", str(project / "Main.xml"), str(reference)]) == 0
    assert "Match" in capsys.readouterr().out

    reference.write_text(MINIMAL_XML.replace("main", "run"), encoding="utf-8")
    assert main(["compare", str(project / "Main.xml"), str(reference)]) == 1
    assert "line 8" in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage: jackanalyzer" in capsys.readouterr().out


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])

    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out
