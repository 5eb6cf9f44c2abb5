"""
ContentAnalyzer: 日記レコードの解析オーケストレーター

設計方針:
- キーワード・心情・活動の3抽出は互いに独立なので並行実行し、その後に要約を生成
- バックエンドの失敗は analyze() 全体の失敗とする（途中でヒューリスティックに切り替えない）
- 一括解析は同時実行数を制限し（FIFOで受付）、失敗したレコードはエラー付きで結果に残す

関連:
- src/journal/extractors.py: 各抽出器
- src/diary_analyzer/backends/factory.py: 設定からバックエンド生成
"""

import asyncio
import logging
from typing import Iterable, List, Optional

from src.diary_analyzer.backends import TextAnalysisBackend, create_backend
from src.diary_analyzer.config import Config

from .extractors import ActivityExtractor, KeywordExtractor, MoodScorer, SummaryGenerator
from .models import AnalysisOutcome, AnalysisResult, DiaryRecord

logger = logging.getLogger(__name__)


class ContentAnalyzer:
    """日記内容の解析器"""

    def __init__(
        self,
        backend: Optional[TextAnalysisBackend] = None,
        max_keywords: int = 5,
        mood_score_range=(1, 5),
        max_concurrency: int = 4,
    ):
        """
        初期化

        Args:
            backend: テキスト解析バックエンド（Noneならヒューリスティック解析）
            max_keywords: 1件あたりの最大キーワード数
            mood_score_range: 明示された心情値として受け付ける範囲
            max_concurrency: 一括解析時の同時実行数の上限
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")

        self.backend = backend
        self.max_concurrency = max_concurrency
        self.keyword_extractor = KeywordExtractor(backend, max_keywords)
        self.mood_scorer = MoodScorer(backend, mood_score_range)
        self.activity_extractor = ActivityExtractor(backend)
        self.summary_generator = SummaryGenerator(backend)

    @classmethod
    def from_config(cls, config: Config) -> "ContentAnalyzer":
        """設定からバックエンドを含めて構築する"""
        return cls(
            backend=create_backend(config.backend),
            max_keywords=config.analysis.max_keywords,
            mood_score_range=config.analysis.mood_score_range,
            max_concurrency=config.analysis.max_concurrency,
        )

    @property
    def mode(self) -> str:
        """解析モード名（heuristic / remote / local）"""
        return self.backend.kind if self.backend else "heuristic"

    async def analyze(self, record: DiaryRecord) -> AnalysisResult:
        """
        日記1件を解析

        Raises:
            BackendError: バックエンド呼び出しが失敗した場合（部分結果は返さない）
        """
        keywords, mood_score, activities = await asyncio.gather(
            asyncio.to_thread(self.keyword_extractor.extract, record.text),
            asyncio.to_thread(self.mood_scorer.score, record),
            asyncio.to_thread(self.activity_extractor.extract, record.text),
        )

        summary = await asyncio.to_thread(self.summary_generator.generate, record.text)

        return AnalysisResult(
            keywords=keywords,
            mood_score=mood_score,
            summary=summary,
            activities=activities,
        )

    def analyze_sync(self, record: DiaryRecord) -> AnalysisResult:
        """analyze() の同期版（CLI向け）"""
        return asyncio.run(self.analyze(record))

    async def analyze_many(self, records: Iterable[DiaryRecord]) -> List[AnalysisOutcome]:
        """
        複数の日記を同時実行数を制限して解析

        入力順を保ったまま、成功したものは result、失敗したものは error を持つ
        AnalysisOutcome のリストを返す。1件の失敗で他の解析は止めない。
        """
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _analyze_one(record: DiaryRecord) -> AnalysisOutcome:
            async with semaphore:
                try:
                    result = await self.analyze(record)
                except Exception as e:
                    logger.error(f"Analysis failed for {record.source or record.date}: {e}")
                    return AnalysisOutcome(record=record, error=str(e) or type(e).__name__)
            return AnalysisOutcome(record=record, result=result)

        outcomes = await asyncio.gather(*(_analyze_one(record) for record in records))

        failed = sum(1 for outcome in outcomes if not outcome.ok)
        logger.info(f"Analyzed {len(outcomes)} diaries ({failed} failed, mode={self.mode})")
        return list(outcomes)

    def analyze_many_sync(self, records: Iterable[DiaryRecord]) -> List[AnalysisOutcome]:
        """analyze_many() の同期版"""
        return asyncio.run(self.analyze_many(records))
