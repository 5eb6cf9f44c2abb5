"""
日記分析レポート（Markdown）

統計値を人が読める形に整形する。グラフは含めない。
"""

from datetime import datetime
from typing import List, Optional

from .models import TimelineStats


def render_report(stats: TimelineStats, generated_at: Optional[datetime] = None) -> str:
    """
    統計からMarkdownのレポートを生成

    Args:
        stats: タイムライン統計
        generated_at: 生成日時（Noneなら現在時刻）

    Returns:
        Markdown文字列
    """
    generated_at = generated_at or datetime.now()

    lines: List[str] = ["# 日记分析报告", ""]
    lines.append(f"生成时间：{generated_at.strftime('%Y-%m-%d %H:%M')}")
    lines.append("")

    lines.append("## 基本统计")
    lines.append("")
    lines.append(f"- 总日记数：{stats.total_entries}")
    lines.append(f"- 平均心情指数：{stats.average_mood}")
    lines.append("")

    lines.append("## 心情分布")
    lines.append("")
    for score, count in sorted(stats.mood_distribution.items()):
        lines.append(f"- {score}分：{count}篇")
    lines.append("")

    lines.append("## 热门关键词")
    lines.append("")
    for keyword, count in stats.top_keywords:
        lines.append(f"- {keyword}：{count}次")
    lines.append("")

    lines.append("## 常见活动")
    lines.append("")
    for activity, count in stats.top_activities:
        lines.append(f"- {activity}：{count}次")

    if stats.entries_per_month:
        lines.append("")
        lines.append("## 每月日记数")
        lines.append("")
        for month, count in sorted(stats.entries_per_month.items()):
            lines.append(f"- {month}：{count}篇")

    return "\n".join(lines) + "\n"
