#!/usr/bin/env python3
"""
日記解析CLI

Usage:
    python -m src.journal analyze FILE [--format json|text]
    python -m src.journal timeline [--start YYYY-MM-DD] [--end YYYY-MM-DD]
    python -m src.journal export-json [--output PATH]
    python -m src.journal report
    python -m src.journal stats [--format json|text]
    python -m src.journal search TERM [--min-mood N] [--max-mood N]

共通オプション: --config PATH, --root DIR, --backend none|remote|local
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from src.diary_analyzer.config import BACKEND_KINDS, Config
from src.diary_analyzer.exceptions import BackendError, DiaryAnalyzerError
from src.diary_analyzer.logger import setup_logger

from .exporter import export_json, export_markdown
from .models import AnalysisResult, DiaryRecord, TimelineEntry, TimelineStats
from .pipeline import DiaryPipeline, TimelineRun
from .report import render_report
from .timeline import apply_filters

logger = logging.getLogger(__name__)


def format_analysis_text(record: DiaryRecord, result: AnalysisResult) -> str:
    """解析結果をテキスト形式で整形"""
    title = record.metadata.title or "（无标题）"
    lines = [
        f"日期: {record.date.strftime('%Y-%m-%d')}",
        f"标题: {title}",
        f"标签: {', '.join(record.metadata.tags) or '-'}",
        f"摘要: {result.summary}",
        f"关键词: {'、'.join(result.keywords) or '-'}",
        f"心情指数: {result.mood_score}分",
        f"活动: {'、'.join(result.activities) or '-'}",
    ]
    return "\n".join(lines)


def format_analysis_json(record: DiaryRecord, result: AnalysisResult) -> Dict[str, Any]:
    """解析結果を辞書形式に変換"""
    return {
        "record": record.model_dump(mode="json", exclude={"text"}),
        "analysis": result.model_dump(mode="json"),
    }


def format_entry_text(entry: TimelineEntry) -> str:
    return (
        f"{entry.date.strftime('%Y-%m-%d')} | {entry.title} | 心情 {entry.mood_score} | "
        f"{'、'.join(entry.keywords)}"
    )


def format_stats_text(stats: TimelineStats) -> str:
    lines = [
        f"总日记数: {stats.total_entries}",
        f"平均心情指数: {stats.average_mood}",
        "心情分布: "
        + ", ".join(f"{score}={count}" for score, count in sorted(stats.mood_distribution.items())),
        "热门关键词: " + ", ".join(f"{k}({c})" for k, c in stats.top_keywords),
        "常见活动: " + ", ".join(f"{a}({c})" for a, c in stats.top_activities),
        "每月日记数: "
        + ", ".join(f"{m}={c}" for m, c in sorted(stats.entries_per_month.items())),
    ]
    return "\n".join(lines)


def report_failures(run: TimelineRun) -> None:
    """解析に失敗した日記を標準エラーに出す"""
    for outcome in run.failures:
        source = outcome.record.source or outcome.record.date.strftime("%Y-%m-%d")
        print(f"Warning: 解析に失敗しました: {source}: {outcome.error}", file=sys.stderr)


def _run(pipeline: DiaryPipeline, start: Optional[str], end: Optional[str]) -> TimelineRun:
    records = pipeline.load_records(start, end)
    run = pipeline.build_timeline(records)
    report_failures(run)
    return run


def cmd_analyze(pipeline: DiaryPipeline, path: str, output_format: str) -> int:
    """日記1件を解析して表示"""
    try:
        record = pipeline.parser.parse_file(path)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: 日記を読み込めませんでした: {exc}", file=sys.stderr)
        return 1

    try:
        result = pipeline.analyzer.analyze_sync(record)
    except BackendError as exc:
        print(f"Error: 分析日记时出错: {exc}", file=sys.stderr)
        return 1

    if output_format == "json":
        print(json.dumps(format_analysis_json(record, result), ensure_ascii=False, indent=2))
    else:
        print(format_analysis_text(record, result))
    return 0


def cmd_timeline(
    pipeline: DiaryPipeline, start: Optional[str], end: Optional[str], output: Optional[str]
) -> int:
    """タイムラインをMarkdownで日記フォルダに書き出す"""
    run = _run(pipeline, start, end)
    if not run.entries:
        print("未找到可分析的日记", file=sys.stderr)
        return 1

    target = output or f"{pipeline.config.diary_folder}/{pipeline.config.export.timeline_filename}"
    written = pipeline.parser.store.write_text(target, export_markdown(run.entries))
    print(f"时间线已生成: {written} ({len(run.entries)}篇)")
    return 0


def cmd_export_json(
    pipeline: DiaryPipeline, start: Optional[str], end: Optional[str], output: Optional[str]
) -> int:
    """タイムラインをJSONで出力"""
    run = _run(pipeline, start, end)
    content = export_json(run.entries)
    if output:
        written = pipeline.parser.store.write_text(output, content)
        print(f"已导出: {written}")
    else:
        print(content)
    return 0


def cmd_report(
    pipeline: DiaryPipeline, start: Optional[str], end: Optional[str], output: Optional[str]
) -> int:
    """分析レポートをMarkdownで日記フォルダに書き出す"""
    run = _run(pipeline, start, end)
    stats = pipeline.stats(run.entries)
    target = output or f"{pipeline.config.diary_folder}/{pipeline.config.export.report_filename}"
    written = pipeline.parser.store.write_text(target, render_report(stats))
    print(f"分析报告已导出: {written}")
    return 0


def cmd_stats(
    pipeline: DiaryPipeline, start: Optional[str], end: Optional[str], output_format: str
) -> int:
    """統計を表示"""
    run = _run(pipeline, start, end)
    stats = pipeline.stats(run.entries)
    if output_format == "json":
        print(json.dumps(stats.model_dump(mode="json"), ensure_ascii=False, indent=2))
    else:
        print(format_stats_text(stats))
    return 0


def cmd_search(
    pipeline: DiaryPipeline,
    term: str,
    start: Optional[str],
    end: Optional[str],
    min_mood: Optional[float],
    max_mood: Optional[float],
    output_format: str,
) -> int:
    """タイムラインを検索"""
    run = _run(pipeline, start, end)
    matched: List[TimelineEntry] = apply_filters(
        run.entries, term=term, min_mood=min_mood, max_mood=max_mood
    )
    if output_format == "json":
        print(export_json(matched))
    elif not matched:
        print(f"「{term}」に一致する日記はありません。")
    else:
        for entry in matched:
            print(format_entry_text(entry))
    return 0


def _add_range_arguments(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument("--start", help="開始日（YYYY-MM-DD、省略時は設定値）")
    subparser.add_argument("--end", help="終了日（YYYY-MM-DD、省略時は設定値）")


def _add_format_argument(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        "--format",
        choices=["json", "text"],
        default="text",
        help="出力フォーマット（デフォルト: text）",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="日記解析CLI - キーワード・心情・活動を抽出してタイムラインを生成",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config", type=str, help="設定ファイル（デフォルト: プロジェクトルートのconfig/app_config.yaml）"
    )
    parser.add_argument("--root", type=str, default=".", help="日記フォルダの親ディレクトリ")
    parser.add_argument("--backend", choices=BACKEND_KINDS, help="設定のバックエンド種別を上書き")

    subparsers = parser.add_subparsers(dest="command", help="実行するコマンド", required=True)

    # analyze コマンド
    parser_analyze = subparsers.add_parser("analyze", help="日記1件を解析")
    parser_analyze.add_argument("path", help="日記ファイル（--root からの相対パス）")
    _add_format_argument(parser_analyze)

    # timeline コマンド
    parser_timeline = subparsers.add_parser("timeline", help="タイムラインMarkdownを生成")
    _add_range_arguments(parser_timeline)
    parser_timeline.add_argument("--output", help="出力先（--root からの相対パス）")

    # export-json コマンド
    parser_export = subparsers.add_parser("export-json", help="タイムラインをJSONで出力")
    _add_range_arguments(parser_export)
    parser_export.add_argument("--output", help="出力先（省略時は標準出力）")

    # report コマンド
    parser_report = subparsers.add_parser("report", help="分析レポートを生成")
    _add_range_arguments(parser_report)
    parser_report.add_argument("--output", help="出力先（--root からの相対パス）")

    # stats コマンド
    parser_stats = subparsers.add_parser("stats", help="統計を表示")
    _add_range_arguments(parser_stats)
    _add_format_argument(parser_stats)

    # search コマンド
    parser_search = subparsers.add_parser("search", help="キーワード・要約・活動を検索")
    parser_search.add_argument("term", help="検索語")
    _add_range_arguments(parser_search)
    parser_search.add_argument("--min-mood", type=float, help="心情スコアの下限")
    parser_search.add_argument("--max-mood", type=float, help="心情スコアの上限")
    _add_format_argument(parser_search)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLIエントリポイント"""
    args = build_parser().parse_args(argv)

    try:
        config = Config.load(Path(args.config) if args.config else None)
        if args.backend:
            config = config.with_backend(args.backend)
    except (OSError, DiaryAnalyzerError) as exc:
        print(f"Error: 設定の読み込みに失敗しました: {exc}", file=sys.stderr)
        return 1

    setup_logger(log_level=config.log_level, log_file=config.log_file)

    try:
        pipeline = DiaryPipeline.from_config(config, root=args.root)
    except DiaryAnalyzerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    start = getattr(args, "start", None)
    end = getattr(args, "end", None)

    # コマンド実行
    if args.command == "analyze":
        return cmd_analyze(pipeline, args.path, args.format)
    elif args.command == "timeline":
        return cmd_timeline(pipeline, start, end, args.output)
    elif args.command == "export-json":
        return cmd_export_json(pipeline, start, end, args.output)
    elif args.command == "report":
        return cmd_report(pipeline, start, end, args.output)
    elif args.command == "stats":
        return cmd_stats(pipeline, start, end, args.format)
    elif args.command == "search":
        return cmd_search(
            pipeline, args.term, start, end, args.min_mood, args.max_mood, args.format
        )
    else:
        print(f"Error: 不明なコマンド: {args.command}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
