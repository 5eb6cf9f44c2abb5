"""
DiaryPipeline: 設定から各コンポーネントを組み立て、読み込み〜タイムライン生成を通して実行する

設定はイミュータブル。設定を変えたいときは新しい Config で from_config() し直す。
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union

from src.diary_analyzer.config import Config

from .analyzer import ContentAnalyzer
from .models import AnalysisOutcome, DiaryRecord, TimelineEntry, TimelineStats
from .parser import DiaryParser, filter_records_by_date
from .stats import compute_stats
from .store import DiaryFileStore
from .timeline import TimelineGenerator, sort_by_date

logger = logging.getLogger(__name__)


@dataclass
class TimelineRun:
    """タイムライン生成1回分の結果"""

    entries: List[TimelineEntry]
    outcomes: List[AnalysisOutcome] = field(default_factory=list)

    @property
    def failures(self) -> List[AnalysisOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]


class DiaryPipeline:
    """日記解析パイプライン"""

    def __init__(
        self,
        config: Config,
        parser: DiaryParser,
        analyzer: ContentAnalyzer,
        timeline: Optional[TimelineGenerator] = None,
    ):
        self.config = config
        self.parser = parser
        self.analyzer = analyzer
        self.timeline = timeline or TimelineGenerator()

    @classmethod
    def from_config(cls, config: Config, root: Union[str, Path] = ".") -> "DiaryPipeline":
        store = DiaryFileStore(
            root,
            config.diary_folder,
            exclude=(config.export.timeline_filename, config.export.report_filename),
        )
        return cls(
            config=config,
            parser=DiaryParser(store, config.date_format),
            analyzer=ContentAnalyzer.from_config(config),
        )

    def load_records(self, start: Optional[str] = None, end: Optional[str] = None) -> List[DiaryRecord]:
        """
        日記フォルダを読み込み、日付範囲で絞り込む

        start/end を省略した場合は設定の analyze_range を使う。
        """
        start = start if start is not None else self.config.analyze_range.start
        end = end if end is not None else self.config.analyze_range.end

        identifiers = self.parser.scan()
        records = self.parser.parse_multiple(identifiers)
        filtered = filter_records_by_date(records, start, end)
        logger.info(
            f"Loaded {len(records)} of {len(identifiers)} diaries, {len(filtered)} in range"
        )
        return filtered

    def build_timeline(self, records: Sequence[DiaryRecord]) -> TimelineRun:
        """レコードを一括解析し、成功したものから日付順のタイムラインを作る"""
        outcomes = self.analyzer.analyze_many_sync(records)
        entries = sort_by_date(self.timeline.build_from_outcomes(outcomes))
        return TimelineRun(entries=entries, outcomes=outcomes)

    def stats(self, entries: Sequence[TimelineEntry]) -> TimelineStats:
        return compute_stats(entries, self.config.analysis.top_limit)
