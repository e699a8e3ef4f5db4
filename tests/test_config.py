from pathlib import Path

from jackanalyzer.core.config import AnalyzerConfig, get_config, set_config


def test_defaults():
    config = AnalyzerConfig()

    assert config.source_suffix == ".jack"
    assert config.output_suffix == ".xml"
    assert config.token_suffix == "T.xml"
    assert config.indent == "  "
    assert config.emit_tokens is False
    assert config.output_dir is None
    assert config.log_level == "WARNING"


def test_from_env(monkeypatch):
    monkeypatch.setenv("JACKANALYZER_OUTPUT_SUFFIX", ".out.xml")
    monkeypatch.setenv("JACKANALYZER_INDENT", "4")
    monkeypatch.setenv("JACKANALYZER_EMIT_TOKENS", "true")
    monkeypatch.setenv("JACKANALYZER_OUTPUT_DIR", "/tmp/jack-out")
    monkeypatch.setenv("JACKANALYZER_LOG_LEVEL", "debug")

    config = AnalyzerConfig.from_env()

    assert config.output_suffix == ".out.xml"
    assert config.indent == "    "
    assert config.emit_tokens is True
    assert config.output_dir == Path("/tmp/jack-out")
    assert config.log_level == "DEBUG"
    assert config.source_suffix == ".jack"


def test_with_overrides_skips_none():
    config = AnalyzerConfig(emit_tokens=True)

    updated = config.with_overrides(emit_tokens=None, output_dir=Path("out"))

    assert updated.emit_tokens is True
    assert updated.output_dir == Path("out")
    assert config.output_dir is None


def test_get_config_is_lazy_and_overridable(monkeypatch):
    set_config(None)
    monkeypatch.setenv("JACKANALYZER_TOKEN_SUFFIX", ".tokens.xml")

    first = get_config()
    assert first.token_suffix == ".tokens.xml"
    assert get_config() is first

    custom = AnalyzerConfig(encoding="latin-1")
    set_config(custom)
    assert get_config() is custom
