"""
リモートモデル（OpenAI互換API）バックエンド

APIキーで認証するチャット補完サービスを使う。
"""

import logging
from typing import Optional

import openai

from ..exceptions import BackendError, BackendUnavailableError
from .base import TextAnalysisBackend

SYSTEM_PROMPT = (
    "你是一个专业的日记分析助手，擅长提取文本中的关键信息、分析情感倾向，并生成简洁的摘要。"
)


class RemoteModelBackend(TextAnalysisBackend):
    """APIキー認証のリモートサービスでテキスト補完を行うバックエンド"""

    kind = "remote"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-3.5-turbo",
        base_url: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: int = 150,
        timeout: float = 60.0,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.logger = logging.getLogger(__name__)

        self.client = openai.OpenAI(api_key=api_key, base_url=base_url, timeout=timeout)

    def complete(self, prompt: str) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except openai.APIConnectionError as e:
            self.logger.error(f"Remote API connection error: {e}")
            raise BackendUnavailableError(f"リモートAPIに接続できません: {e}") from e
        except openai.OpenAIError as e:
            self.logger.error(f"Remote API error: {e}")
            raise BackendError(f"リモートAPIがエラーを返しました: {e}") from e

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
