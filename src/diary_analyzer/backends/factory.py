"""設定からテキスト解析バックエンドを生成するファクトリー"""

import logging
from typing import Optional

from ..config import BackendConfig
from ..exceptions import ConfigurationError
from .base import TextAnalysisBackend

logger = logging.getLogger(__name__)


def create_backend(config: BackendConfig) -> Optional[TextAnalysisBackend]:
    """
    バックエンド設定に対応するバックエンドを作成するファクトリー関数

    Args:
        config: バックエンド設定

    Returns:
        バックエンドインスタンス（kind="none" の場合はNone = ヒューリスティック解析）

    Raises:
        ConfigurationError: 種別が不明、またはremoteでAPIキー未設定の場合
    """
    if config.kind == "none":
        logger.info("No text analysis backend configured, using heuristics")
        return None

    if config.kind == "remote":
        if not config.api_key:
            raise ConfigurationError("remoteバックエンドにはAPIキーが必要です")
        from .openai_backend import RemoteModelBackend

        logger.info(f"Using remote backend (model={config.remote_model})")
        return RemoteModelBackend(
            api_key=config.api_key,
            model=config.remote_model,
            base_url=config.base_url,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            timeout=config.timeout,
        )

    if config.kind == "local":
        from .ollama_backend import LocalModelBackend

        logger.info(f"Using local backend (host={config.ollama_host}, model={config.ollama_model})")
        return LocalModelBackend(
            host=config.ollama_host,
            model=config.ollama_model,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            timeout=config.timeout,
        )

    raise ConfigurationError(f"不明なバックエンド種別: {config.kind!r}")
