"""
タイムラインのエクスポート（JSON / Markdown）

関連:
- src/journal/timeline.py: TimelineEntry の生成
- src/journal/cli.py: ファイルへの書き出し
"""

import json
import math
from datetime import datetime
from typing import List, Sequence

from pydantic import TypeAdapter

from .models import TimelineEntry

MOOD_EMOJIS = ("😢", "😔", "😐", "😊", "😄")
LIST_SEPARATOR = "、"

_entries_adapter = TypeAdapter(List[TimelineEntry])


def mood_emoji(score: float) -> str:
    """心情スコアに対応する絵文字（範囲外は両端に丸める）"""
    index = min(max(math.floor(score) - 1, 0), len(MOOD_EMOJIS) - 1)
    return MOOD_EMOJIS[index]


def format_local_date(value: datetime) -> str:
    """zh-CN形式の短い日付（例: 2024/1/15）"""
    return f"{value.year}/{value.month}/{value.day}"


def export_json(entries: Sequence[TimelineEntry]) -> str:
    """タイムライン項目をJSON配列の文字列にする"""
    payload = [entry.model_dump(mode="json") for entry in entries]
    return json.dumps(payload, ensure_ascii=False, indent=2)


def load_json(text: str) -> List[TimelineEntry]:
    """export_json() の出力を TimelineEntry のリストに戻す"""
    return _entries_adapter.validate_json(text)


def render_entry_markdown(entry: TimelineEntry) -> str:
    return (
        f"## {format_local_date(entry.date)} {entry.title} {mood_emoji(entry.mood_score)}\n\n"
        f"{entry.summary}\n\n"
        f"**关键词**：{LIST_SEPARATOR.join(entry.keywords)}\n\n"
        f"**活动**：{LIST_SEPARATOR.join(entry.activities)}\n\n"
        f"---\n"
    )


def export_markdown(entries: Sequence[TimelineEntry]) -> str:
    """タイムラインをMarkdownにする（1項目1セクション）"""
    return "\n".join(render_entry_markdown(entry) for entry in entries)
