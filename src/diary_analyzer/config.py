"""
設定管理モジュール

関連クラス:
  - backends.factory.create_backend: バックエンド設定を使用
  - journal.analyzer.ContentAnalyzer: 解析設定を使用
  - journal.cli: CLIから設定を読み込み

注意: 設定値はすべてイミュータブル。変更時は with_overrides() で新しい
インスタンスを作り、各コンポーネントも作り直すこと。
"""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .exceptions import ConfigurationError

BACKEND_KINDS = ("none", "remote", "local")

# プロジェクトルートのconfig/app_config.yaml（カレントディレクトリに依存しない）
PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "app_config.yaml"


@dataclass(frozen=True)
class AnalyzeRange:
    """解析対象の日付範囲（YYYY-MM-DD、空文字は上限・下限なし）"""

    start: str = ""
    end: str = ""


@dataclass(frozen=True)
class BackendConfig:
    """テキスト解析バックエンド設定"""

    kind: str = "none"  # none | remote | local
    api_key: str = ""
    remote_model: str = "gpt-3.5-turbo"
    base_url: Optional[str] = None
    ollama_host: str = "http://localhost:11434"
    ollama_model: str = "llama2"
    temperature: float = 0.7
    max_tokens: int = 150
    timeout: float = 60.0


@dataclass(frozen=True)
class AnalysisConfig:
    """解析パラメータ"""

    max_keywords: int = 5
    mood_score_range: Tuple[int, int] = (1, 5)
    # 参考値のみ。現状どの抽出器もこの語彙を強制しない
    custom_tags: Tuple[str, ...] = ()
    max_concurrency: int = 4
    top_limit: int = 10


@dataclass(frozen=True)
class ExportConfig:
    """エクスポート先ファイル名"""

    timeline_filename: str = "时间线.md"
    report_filename: str = "分析报告.md"


@dataclass(frozen=True)
class Config:
    """アプリケーション設定クラス"""

    diary_folder: str = "diary"
    date_format: str = "YYYY-MM-DD"
    analyze_range: AnalyzeRange = field(default_factory=AnalyzeRange)
    backend: BackendConfig = field(default_factory=BackendConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    export: ExportConfig = field(default_factory=ExportConfig)

    # ログ設定
    log_level: str = "INFO"
    log_file: str = "logs/diary_analyzer.log"

    def __post_init__(self):
        """設定値の検証"""
        if self.backend.kind not in BACKEND_KINDS:
            raise ConfigurationError(
                f"不正なバックエンド種別: {self.backend.kind!r} "
                f"({' | '.join(BACKEND_KINDS)} のいずれかを指定してください)"
            )
        if self.analysis.max_keywords < 1:
            raise ConfigurationError("max_keywords は1以上である必要があります")
        if self.analysis.max_concurrency < 1:
            raise ConfigurationError("max_concurrency は1以上である必要があります")
        low, high = self.analysis.mood_score_range
        if not 1 <= low <= high <= 5:
            raise ConfigurationError(
                f"mood_score_range は 1〜5 の範囲で下限≦上限にしてください: ({low}, {high})"
            )

    def with_overrides(self, **changes: Any) -> "Config":
        """一部の値を差し替えた新しい設定を返す"""
        return replace(self, **changes)

    def with_backend(self, kind: str) -> "Config":
        """バックエンド種別だけを差し替えた新しい設定を返す"""
        return replace(self, backend=replace(self.backend, kind=kind))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """YAML相当の辞書から設定を構築する"""
        data = data or {}
        range_data = data.get("analyze_range", {}) or {}
        backend_data = data.get("backend", {}) or {}
        analysis_data = data.get("analysis", {}) or {}
        export_data = data.get("export", {}) or {}
        log_data = data.get("log", {}) or {}

        defaults = AnalysisConfig()
        mood_range = analysis_data.get("mood_score_range", defaults.mood_score_range)
        try:
            low, high = (int(v) for v in mood_range)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"mood_score_range が不正です: {mood_range!r}") from e

        return cls(
            diary_folder=data.get("diary_folder", "diary"),
            date_format=data.get("date_format", "YYYY-MM-DD"),
            analyze_range=AnalyzeRange(
                start=str(range_data.get("start", "") or ""),
                end=str(range_data.get("end", "") or ""),
            ),
            backend=BackendConfig(
                kind=backend_data.get("kind", "none"),
                api_key=backend_data.get("api_key", "") or "",
                remote_model=backend_data.get("remote_model", "gpt-3.5-turbo"),
                base_url=backend_data.get("base_url"),
                ollama_host=backend_data.get("ollama_host", "http://localhost:11434"),
                ollama_model=backend_data.get("ollama_model", "llama2"),
                temperature=float(backend_data.get("temperature", 0.7)),
                max_tokens=int(backend_data.get("max_tokens", 150)),
                timeout=float(backend_data.get("timeout", 60.0)),
            ),
            analysis=AnalysisConfig(
                max_keywords=int(analysis_data.get("max_keywords", defaults.max_keywords)),
                mood_score_range=(low, high),
                custom_tags=tuple(analysis_data.get("custom_tags", []) or []),
                max_concurrency=int(
                    analysis_data.get("max_concurrency", defaults.max_concurrency)
                ),
                top_limit=int(analysis_data.get("top_limit", defaults.top_limit)),
            ),
            export=ExportConfig(
                timeline_filename=export_data.get("timeline_filename", "时间线.md"),
                report_filename=export_data.get("report_filename", "分析报告.md"),
            ),
            log_level=log_data.get("level", "INFO"),
            log_file=log_data.get("file", "logs/diary_analyzer.log"),
        )

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "Config":
        """YAMLファイルから設定を読み込む

        Args:
            config_path: 設定ファイルパス（省略時はプロジェクトルートのconfig/app_config.yamlを使用）

        Returns:
            Config: 設定インスタンス

        Raises:
            FileNotFoundError: 設定ファイルが見つからない場合
            ConfigurationError: YAMLの内容が不正な場合
        """
        path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        if not path.exists():
            raise FileNotFoundError(f"設定ファイルが見つかりません: {path}")

        with open(path, "r", encoding="utf-8") as f:
            try:
                yaml_data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"YAMLの読み込みに失敗しました: {e}") from e

        if not isinstance(yaml_data, dict):
            raise ConfigurationError(f"設定ファイルの形式が不正です: {path}")

        return cls.from_dict(yaml_data)

    @classmethod
    def from_env(cls) -> "Config":
        """環境変数から設定を読み込む"""
        return cls(
            diary_folder=os.getenv("DIARY_FOLDER", "diary"),
            date_format=os.getenv("DIARY_DATE_FORMAT", "YYYY-MM-DD"),
            backend=BackendConfig(
                kind=os.getenv("DIARY_BACKEND", "none"),
                api_key=os.getenv("OPENAI_API_KEY", ""),
                remote_model=os.getenv("DIARY_REMOTE_MODEL", "gpt-3.5-turbo"),
                base_url=os.getenv("OPENAI_BASE_URL"),
                ollama_host=os.getenv("OLLAMA_HOST", "http://localhost:11434"),
                ollama_model=os.getenv("OLLAMA_MODEL", "llama2"),
            ),
            analysis=AnalysisConfig(
                max_keywords=int(os.getenv("DIARY_MAX_KEYWORDS", "5")),
                max_concurrency=int(os.getenv("DIARY_MAX_CONCURRENCY", "4")),
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", "logs/diary_analyzer.log"),
        )

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """設定ファイルがあればYAMLから、なければデフォルト値で構築する"""
        path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        if path.exists():
            return cls.from_yaml(path)
        return cls()
