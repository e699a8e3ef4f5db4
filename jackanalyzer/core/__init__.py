"""jackanalyzer core: configuration and shared error types.

    from jackanalyzer.core import AnalyzerConfig, AnalyzerError, get_config
"""

from jackanalyzer.core.config import AnalyzerConfig, get_config, set_config
from jackanalyzer.core.errors import (
    AnalyzerError,
    JackSyntaxError,
    LexicalError,
    SourceReadError,
    SourceResolutionError,
)

__all__ = [
    "AnalyzerConfig",
    "AnalyzerError",
    "JackSyntaxError",
    "LexicalError",
    "SourceReadError",
    "SourceResolutionError",
    "get_config",
    "set_config",
]
