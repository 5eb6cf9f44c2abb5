"""
日記テキストの抽出器（キーワード・心情スコア・活動・要約）

設計方針:
- 各抽出器はバックエンド版とヒューリスティック版を持つ
- どちらを使うかはコンストラクタで一度だけ決める（呼び出しごとに切り替えない）
- バックエンドの応答形式の崩れは寛容に扱う（心情は3、リストは切り詰めのみ）
- バックエンドの通信エラーはそのまま呼び出し元へ伝播させる

関連:
- src/diary_analyzer/backends/: complete(prompt) を提供
- src/journal/analyzer.py: 4つの抽出器を組み合わせる
"""

import logging
import re
from typing import Callable, List, Optional, Tuple

from src.diary_analyzer.backends import TextAnalysisBackend

from .models import DiaryRecord

logger = logging.getLogger(__name__)

NEUTRAL_MOOD = 3

POSITIVE_WORDS = ("开心", "快乐", "高兴", "幸福", "满意", "成功", "喜欢")
NEGATIVE_WORDS = ("难过", "伤心", "失望", "焦虑", "痛苦", "生气", "讨厌")

ACTIVITY_MARKERS = ("去", "做", "完成", "参加", "开始", "结束")

SUMMARY_MAX_LENGTH = 100
ELLIPSIS = "..."

_NON_WORD_PATTERN = re.compile(r"[^一-龥a-zA-Z0-9]")
_SENTENCE_SPLIT_PATTERN = re.compile(r"[。！？]")
_PARAGRAPH_SPLIT_PATTERN = re.compile(r"\r?\n[ \t]*\r?\n")
_LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")
_ACTIVITY_PATTERNS = {
    marker: re.compile(re.escape(marker) + r"([^，。！？]+)") for marker in ACTIVITY_MARKERS
}


def split_list_response(response: str) -> List[str]:
    """カンマ区切りの応答を分割・トリムする（中身は検証しない。空の応答だけは空リスト）"""
    if not (response or "").strip():
        return []
    return [item.strip() for item in response.split(",")]


def parse_leading_int(response: str) -> Optional[int]:
    """応答先頭の整数を読み取る（読めなければNone）"""
    match = _LEADING_INT_PATTERN.match(response or "")
    if not match:
        return None
    return int(match.group(1))


class KeywordExtractor:
    """キーワード抽出器"""

    def __init__(self, backend: Optional[TextAnalysisBackend] = None, max_keywords: int = 5):
        self.backend = backend
        self.max_keywords = max_keywords
        self._extract: Callable[[str], List[str]] = (
            self._extract_with_backend if backend else self._extract_with_frequency
        )

    def extract(self, text: str) -> List[str]:
        return self._extract(text)

    def _extract_with_backend(self, text: str) -> List[str]:
        prompt = f"请从以下文本中提取{self.max_keywords}个最重要的关键词，以逗号分隔：\n\n{text}"
        response = self.backend.complete(prompt)
        return split_list_response(response)[: self.max_keywords]

    def _extract_with_frequency(self, text: str) -> List[str]:
        """
        単純な語頻度でキーワードを抽出

        CJK・英数字以外を空白に置き換えて分割し、1文字以下の語は無視する。
        同数の場合は先に出現した語を優先する（安定ソート）。
        """
        words = _NON_WORD_PATTERN.sub(" ", text or "").split()

        # dictは挿入順を保つので、初出順がそのまま同点時の順序になる
        frequency = {}
        for word in words:
            if len(word) > 1:
                frequency[word] = frequency.get(word, 0) + 1

        ranked = sorted(frequency.items(), key=lambda item: item[1], reverse=True)
        return [word for word, _ in ranked[: self.max_keywords]]


class MoodScorer:
    """心情スコア（1〜5）の算出"""

    def __init__(
        self,
        backend: Optional[TextAnalysisBackend] = None,
        score_range: Tuple[int, int] = (1, 5),
    ):
        self.backend = backend
        self.min_score, self.max_score = score_range
        self._score_text: Callable[[str], int] = (
            self._score_with_backend if backend else self._score_with_dictionary
        )

    def score(self, record: DiaryRecord) -> int:
        """
        心情スコアを算出

        1. パース時に抽出した明示値（心情：N）が範囲内ならそのまま採用
        2. バックエンドがあれば問い合わせ
        3. なければ感情辞書で採点
        """
        override = record.metadata.mood_override
        if override is not None:
            if self._in_range(override):
                return override
            logger.debug(f"Ignoring out-of-range mood override: {override}")
        return self._score_text(record.text)

    def _in_range(self, score: int) -> bool:
        return self.min_score <= score <= self.max_score

    def _score_with_backend(self, text: str) -> int:
        prompt = f"请分析以下日记文本的情感倾向，给出1-5的分数（1最消极，5最积极）：\n\n{text}"
        response = self.backend.complete(prompt)
        score = parse_leading_int(response)
        if score is None or not 1 <= score <= 5:
            logger.debug(f"Unparseable mood response, defaulting to {NEUTRAL_MOOD}: {response!r}")
            return NEUTRAL_MOOD
        return score

    def _score_with_dictionary(self, text: str) -> int:
        text = text or ""
        positive_count = sum(text.count(word) for word in POSITIVE_WORDS)
        negative_count = sum(text.count(word) for word in NEGATIVE_WORDS)

        score = NEUTRAL_MOOD
        if positive_count > negative_count:
            score += min(2, positive_count - negative_count)
        elif negative_count > positive_count:
            score -= min(2, negative_count - positive_count)
        return score


class ActivityExtractor:
    """活動抽出器"""

    def __init__(self, backend: Optional[TextAnalysisBackend] = None):
        self.backend = backend
        self._extract: Callable[[str], List[str]] = (
            self._extract_with_backend if backend else self._extract_with_rules
        )

    def extract(self, text: str) -> List[str]:
        return self._extract(text)

    def _extract_with_backend(self, text: str) -> List[str]:
        prompt = f"请从以下日记文本中提取主要活动，以逗号分隔：\n\n{text}"
        return split_list_response(self.backend.complete(prompt))

    def _extract_with_rules(self, text: str) -> List[str]:
        """文ごとに活動マーカー語の直後（次の区切り記号まで）を拾う"""
        activities: List[str] = []
        for sentence in _SENTENCE_SPLIT_PATTERN.split(text or ""):
            for marker in ACTIVITY_MARKERS:
                if marker not in sentence:
                    continue
                match = _ACTIVITY_PATTERNS[marker].search(sentence)
                if match:
                    activity = match.group(1).strip()
                    if activity:
                        activities.append(activity)

        return list(dict.fromkeys(activities))


class SummaryGenerator:
    """要約生成器"""

    def __init__(self, backend: Optional[TextAnalysisBackend] = None):
        self.backend = backend
        self._generate: Callable[[str], str] = (
            self._generate_with_backend if backend else self._generate_simple
        )

    def generate(self, text: str) -> str:
        return self._generate(text)

    def _generate_with_backend(self, text: str) -> str:
        prompt = f"请用一到两句话总结以下日记内容：\n\n{text}"
        return self.backend.complete(prompt)

    def _generate_simple(self, text: str) -> str:
        # 最初の段落を要約とする
        first_paragraph = _PARAGRAPH_SPLIT_PATTERN.split(text or "", maxsplit=1)[0]
        if len(first_paragraph) <= SUMMARY_MAX_LENGTH:
            return first_paragraph
        return first_paragraph[:SUMMARY_MAX_LENGTH] + ELLIPSIS
