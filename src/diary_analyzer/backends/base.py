"""
テキスト解析バックエンドの基底クラス

バックエンドは complete(prompt) -> str だけを提供する。
日記固有のプロンプトはすべて journal.extractors 側に置く。
"""

from abc import ABC, abstractmethod


class TextAnalysisBackend(ABC):
    """テキスト補完バックエンドの抽象基底クラス"""

    #: ログ・表示用の種別名（remote / local）
    kind: str = ""

    @abstractmethod
    def complete(self, prompt: str) -> str:
        """
        プロンプトに対する補完テキストを返す

        Args:
            prompt: 入力プロンプト

        Returns:
            モデルの応答テキスト

        Raises:
            BackendUnavailableError: 通信・プロセス呼び出しが完了しなかった場合
            BackendError: 失敗応答が返った場合
        """
        pass
