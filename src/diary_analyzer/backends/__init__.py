"""テキスト解析バックエンドモジュール"""

from .base import TextAnalysisBackend
from .factory import create_backend

__all__ = [
    "TextAnalysisBackend",
    "create_backend",
]
