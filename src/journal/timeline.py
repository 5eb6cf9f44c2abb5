"""
TimelineGenerator: 日記レコードと解析結果からタイムラインを生成する

関連:
- src/journal/stats.py: タイムライン統計
- src/journal/exporter.py: JSON / Markdown 出力
"""

import logging
import uuid
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional, Sequence, Union

from src.diary_analyzer.exceptions import LengthMismatchError

from .models import AnalysisOutcome, AnalysisResult, DiaryRecord, TimelineEntry

logger = logging.getLogger(__name__)

DEFAULT_TITLE_SUFFIX = " 的日记"

DateBound = Union[date, datetime, None]


def generate_title(day: datetime) -> str:
    """日付から既定のタイトル（例: 2024年1月15日 的日记）を生成"""
    return f"{day.year}年{day.month}月{day.day}日{DEFAULT_TITLE_SUFFIX}"


def new_entry_id() -> str:
    return str(uuid.uuid4())


class TimelineGenerator:
    """タイムラインの生成"""

    def build(
        self, records: Sequence[DiaryRecord], results: Sequence[AnalysisResult]
    ) -> List[TimelineEntry]:
        """
        レコードと解析結果（同じ添字同士が対応）からタイムライン項目を生成

        Raises:
            LengthMismatchError: 件数が一致しない場合
        """
        if len(records) != len(results):
            raise LengthMismatchError(len(records), len(results))

        return [
            TimelineEntry(
                id=new_entry_id(),
                date=record.date,
                title=record.metadata.title or generate_title(record.date),
                summary=result.summary,
                keywords=list(result.keywords),
                mood_score=result.mood_score,
                activities=list(result.activities),
            )
            for record, result in zip(records, results)
        ]

    def build_from_outcomes(self, outcomes: Iterable[AnalysisOutcome]) -> List[TimelineEntry]:
        """一括解析の結果のうち成功したものだけでタイムラインを生成"""
        succeeded = [outcome for outcome in outcomes if outcome.ok]
        return self.build(
            [outcome.record for outcome in succeeded],
            [outcome.result for outcome in succeeded],
        )


def to_utc(value: datetime) -> datetime:
    """UTCのaware日時にそろえる。naiveな日時はUTCの壁時計時刻として扱う"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _in_range(value: datetime, start: DateBound, end: DateBound) -> bool:
    # dateのみの境界はUTCの暦日で比較、datetimeの境界は時刻まで比較
    value = to_utc(value)
    if start is not None:
        if isinstance(start, datetime):
            if value < to_utc(start):
                return False
        elif value.date() < start:
            return False
    if end is not None:
        if isinstance(end, datetime):
            if value > to_utc(end):
                return False
        elif value.date() > end:
            return False
    return True


def filter_by_date_range(
    entries: Iterable[TimelineEntry], start: DateBound = None, end: DateBound = None
) -> List[TimelineEntry]:
    """日付範囲（両端を含む）で絞り込む。省略した境界は無制限"""
    return [entry for entry in entries if _in_range(entry.date, start, end)]


def filter_by_mood_range(
    entries: Iterable[TimelineEntry], min_score: float, max_score: float
) -> List[TimelineEntry]:
    """心情スコアの範囲（両端を含む）で絞り込む"""
    return [entry for entry in entries if min_score <= entry.mood_score <= max_score]


def search(entries: Iterable[TimelineEntry], term: str) -> List[TimelineEntry]:
    """キーワード・要約・活動のいずれかに部分一致（大文字小文字無視）する項目を返す"""
    needle = (term or "").lower()
    return [
        entry
        for entry in entries
        if any(needle in keyword.lower() for keyword in entry.keywords)
        or needle in entry.summary.lower()
        or any(needle in activity.lower() for activity in entry.activities)
    ]


def sort_by_date(entries: Iterable[TimelineEntry], reverse: bool = False) -> List[TimelineEntry]:
    """日付順に並べ替える（同日は元の順序を保つ）"""
    return sorted(entries, key=lambda entry: to_utc(entry.date), reverse=reverse)


def apply_filters(
    entries: Iterable[TimelineEntry],
    start: DateBound = None,
    end: DateBound = None,
    term: Optional[str] = None,
    min_mood: Optional[float] = None,
    max_mood: Optional[float] = None,
) -> List[TimelineEntry]:
    """日付・心情・検索語の絞り込みをまとめて適用"""
    filtered = filter_by_date_range(entries, start, end)
    if min_mood is not None or max_mood is not None:
        filtered = filter_by_mood_range(
            filtered,
            min_mood if min_mood is not None else float("-inf"),
            max_mood if max_mood is not None else float("inf"),
        )
    if term:
        filtered = search(filtered, term)
    return filtered
