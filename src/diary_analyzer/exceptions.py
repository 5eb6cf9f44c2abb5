"""Diary Analyzerのカスタム例外定義

このモジュールは、日記解析パイプライン全体で使用される
カスタム例外クラスを定義します。
"""


class DiaryAnalyzerError(Exception):
    """Diary Analyzer基底例外"""

    pass


class ConfigurationError(DiaryAnalyzerError):
    """設定エラー"""

    pass


class BackendError(DiaryAnalyzerError):
    """テキスト解析バックエンドが失敗応答を返した"""

    pass


class BackendUnavailableError(BackendError):
    """バックエンドへの接続・呼び出し自体が完了しなかった"""

    pass


class LengthMismatchError(DiaryAnalyzerError):
    """日記レコードと解析結果の件数が一致しない（呼び出し側のバグ）"""

    def __init__(self, record_count: int, result_count: int):
        self.record_count = record_count
        self.result_count = result_count
        super().__init__(
            f"records and results must have the same length "
            f"({record_count} != {result_count})"
        )
