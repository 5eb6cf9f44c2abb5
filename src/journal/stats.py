"""
タイムライン統計

統計は永続化せず、毎回タイムライン項目から計算し直す。
"""

import math
from datetime import datetime
from typing import Dict, Iterable, List, Sequence, Tuple

from .models import TimelineEntry, TimelineStats
from .timeline import to_utc

DEFAULT_TOP_LIMIT = 10
MOOD_BUCKETS = (1, 2, 3, 4, 5)


def round_half_up(value: float, digits: int = 0) -> float:
    """四捨五入（Pythonのround()は偶数丸めなので使わない）"""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def average_mood(entries: Sequence[TimelineEntry]) -> float:
    """平均心情スコア（小数第1位に丸める、0件なら0）"""
    if not entries:
        return 0
    total = sum(entry.mood_score for entry in entries)
    return round_half_up(total / len(entries), 1)


def mood_distribution(entries: Iterable[TimelineEntry]) -> Dict[int, int]:
    """心情スコアの分布（1〜5の各バケットを必ず含む）"""
    distribution = {bucket: 0 for bucket in MOOD_BUCKETS}
    for entry in entries:
        bucket = int(round_half_up(entry.mood_score))
        distribution[bucket] = distribution.get(bucket, 0) + 1
    return distribution


def rank_by_frequency(items: Iterable[str], limit: int = DEFAULT_TOP_LIMIT) -> List[Tuple[str, int]]:
    """出現回数の多い順に並べる（同数なら先に現れたものが先）"""
    counts: Dict[str, int] = {}
    for item in items:
        counts[item] = counts.get(item, 0) + 1
    ranked = sorted(counts.items(), key=lambda pair: pair[1], reverse=True)
    return ranked[:limit]


def month_key(value: datetime) -> str:
    """YYYY-MM（UTC基準）。naiveな日時はUTCの壁時計時刻として扱う"""
    return to_utc(value).strftime("%Y-%m")


def entries_per_month(entries: Iterable[TimelineEntry]) -> Dict[str, int]:
    monthly: Dict[str, int] = {}
    for entry in entries:
        key = month_key(entry.date)
        monthly[key] = monthly.get(key, 0) + 1
    return monthly


def compute_stats(entries: Sequence[TimelineEntry], limit: int = DEFAULT_TOP_LIMIT) -> TimelineStats:
    """
    タイムライン統計を計算

    Args:
        entries: タイムライン項目
        limit: 上位キーワード・活動の件数

    Returns:
        TimelineStats
    """
    entries = list(entries)
    return TimelineStats(
        total_entries=len(entries),
        average_mood=average_mood(entries),
        mood_distribution=mood_distribution(entries),
        top_keywords=rank_by_frequency(
            (keyword for entry in entries for keyword in entry.keywords), limit
        ),
        top_activities=rank_by_frequency(
            (activity for entry in entries for activity in entry.activities), limit
        ),
        entries_per_month=entries_per_month(entries),
    )
