"""Global configuration for jackanalyzer.

Holds file naming conventions and output formatting defaults used by the
driver and the CLI. Settings can be overridden via environment variables or
explicit configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any


@dataclass
class AnalyzerConfig:
    """Top-level configuration for jackanalyzer."""

    # File naming
    source_suffix: str = ".jack"
    output_suffix: str = ".xml"
    token_suffix: str = "T.xml"
    encoding: str = "utf-8"

    # Output
    indent: str = "  "
    emit_tokens: bool = False
    output_dir: Path | None = None

    # Logging
    log_level: str = "WARNING"

    def with_overrides(self, **overrides: Any) -> AnalyzerConfig:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @classmethod
    def from_env(cls) -> AnalyzerConfig:
        """Build config from environment variables, falling back to defaults."""
        config = cls()

        if val := os.environ.get("JACKANALYZER_SOURCE_SUFFIX"):
            config.source_suffix = val
        if val := os.environ.get("JACKANALYZER_OUTPUT_SUFFIX"):
            config.output_suffix = val
        if val := os.environ.get("JACKANALYZER_TOKEN_SUFFIX"):
            config.token_suffix = val
        if val := os.environ.get("JACKANALYZER_ENCODING"):
            config.encoding = val
        if val := os.environ.get("JACKANALYZER_INDENT"):
            config.indent = " " * int(val)
        if val := os.environ.get("JACKANALYZER_EMIT_TOKENS"):
            config.emit_tokens = val.lower() in ("1", "true", "yes", "on")
        if val := os.environ.get("JACKANALYZER_OUTPUT_DIR"):
            config.output_dir = Path(val)
        if val := os.environ.get("JACKANALYZER_LOG_LEVEL"):
            config.log_level = val.upper()

        return config


# Module-level singleton
_config: AnalyzerConfig | None = None


def get_config() -> AnalyzerConfig:
    """Return the global config, lazily initialized from env."""
    global _config
    if _config is None:
        _config = AnalyzerConfig.from_env()
    return _config


def set_config(config: AnalyzerConfig | None) -> None:
    """Override the global config (useful in tests). None resets to lazy init."""
    global _config
    _config = config
