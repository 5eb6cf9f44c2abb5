"""Diary Analyzer

日記テキストを解析し、キーワード・心情スコア・活動・要約を抽出して
タイムラインと統計を生成するライブラリです。

Example:
    >>> from src.diary_analyzer import Config
    >>> from src.journal import ContentAnalyzer, DiaryParser
    >>> config = Config.load()
    >>> analyzer = ContentAnalyzer.from_config(config)
"""

from .config import (
    AnalysisConfig,
    AnalyzeRange,
    BackendConfig,
    Config,
    ExportConfig,
)
from .exceptions import (
    BackendError,
    BackendUnavailableError,
    ConfigurationError,
    DiaryAnalyzerError,
    LengthMismatchError,
)

__all__ = [
    "AnalysisConfig",
    "AnalyzeRange",
    "BackendConfig",
    "Config",
    "ExportConfig",
    "BackendError",
    "BackendUnavailableError",
    "ConfigurationError",
    "DiaryAnalyzerError",
    "LengthMismatchError",
]
