"""
ローカルモデル（Ollama）バックエンド

関連クラス:
  - config.BackendConfig: Ollama接続設定を提供
  - journal.extractors: このバックエンドにプロンプトを渡す
"""

import logging
from typing import List

import httpx
import ollama

from ..exceptions import BackendError, BackendUnavailableError
from .base import TextAnalysisBackend


class LocalModelBackend(TextAnalysisBackend):
    """ローカルのOllamaサーバーでテキスト補完を行うバックエンド"""

    kind = "local"

    def __init__(
        self,
        host: str = "http://localhost:11434",
        model: str = "llama2",
        temperature: float = 0.7,
        max_tokens: int = 150,
        timeout: float = 60.0,
    ):
        """
        初期化

        Args:
            host: OllamaサーバーのURL
            model: 使用するモデル名
            temperature: 生成温度（0.0-1.0）
            max_tokens: 最大トークン数
            timeout: HTTPタイムアウト（秒）
        """
        self.host = host
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.logger = logging.getLogger(__name__)

        self.client = ollama.Client(host=host, timeout=timeout)

    def complete(self, prompt: str) -> str:
        """プロンプトから生成（ストリーミングなし、テキストで返す）"""
        try:
            response = self.client.generate(
                model=self.model,
                prompt=prompt,
                stream=False,
                options={
                    "temperature": self.temperature,
                    "num_predict": self.max_tokens,
                },
            )
        except ollama.ResponseError as e:
            self.logger.error(f"Ollama generate error: {e}")
            raise BackendError(f"Ollamaがエラーを返しました: {e}") from e
        except (ConnectionError, httpx.TransportError) as e:
            self.logger.error(f"Ollama connection error: {e}")
            raise BackendUnavailableError(f"Ollamaサーバーに接続できません: {self.host}") from e

        return response["response"] or ""

    def is_available(self) -> bool:
        """Ollamaサーバーが応答するか確認する"""
        try:
            self.client.list()
            return True
        except (ollama.ResponseError, ConnectionError, httpx.HTTPError) as e:
            self.logger.warning(f"Ollama is not available: {e}")
            return False

    def list_models(self) -> List[str]:
        """
        利用可能なモデルのリストを取得

        Returns:
            モデル名のリスト（取得失敗時は空リスト）
        """
        try:
            models = self.client.list()
            return [model["model"] for model in models["models"]]
        except (ollama.ResponseError, ConnectionError, httpx.HTTPError) as e:
            self.logger.error(f"Failed to list models: {e}")
            return []
