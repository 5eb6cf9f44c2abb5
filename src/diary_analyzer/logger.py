"""
ロギング設定モジュール
"""

import logging
from pathlib import Path
from typing import Iterable

# バックエンドSDKのHTTPログ（リクエスト毎のINFO）は抑える
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "ollama")


def setup_logger(
    log_level: str = "INFO",
    log_file: str = "logs/diary_analyzer.log",
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> logging.Logger:
    """
    ロガーのセットアップ

    Args:
        log_level: ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: ログファイルのパス
        quiet: WARNING未満を出さない外部ライブラリのロガー名

    Returns:
        パッケージのルートロガー（src）
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.FileHandler(log_path, encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )

    for name in quiet:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return logging.getLogger("src")
