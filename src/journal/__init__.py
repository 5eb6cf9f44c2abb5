"""
Journal module for diary parsing, analysis and timelines.

This module provides functionality for:
- Date / metadata extraction from diary text
- Keyword, mood, activity and summary extraction (backend or heuristic)
- Timeline generation, filtering, search and statistics
- JSON / Markdown export and analysis reports
"""

from src.journal.analyzer import ContentAnalyzer
from src.journal.models import (
    AnalysisOutcome,
    AnalysisResult,
    DiaryMetadata,
    DiaryRecord,
    TimelineEntry,
    TimelineStats,
)
from src.journal.parser import DateResolver, DiaryParser, MetadataExtractor, resolve_date
from src.journal.pipeline import DiaryPipeline
from src.journal.stats import compute_stats
from src.journal.store import DiaryFileStore
from src.journal.timeline import (
    TimelineGenerator,
    filter_by_date_range,
    filter_by_mood_range,
    search,
)

__all__ = [
    "ContentAnalyzer",
    "AnalysisOutcome",
    "AnalysisResult",
    "DiaryMetadata",
    "DiaryRecord",
    "TimelineEntry",
    "TimelineStats",
    "DateResolver",
    "DiaryParser",
    "MetadataExtractor",
    "resolve_date",
    "DiaryPipeline",
    "compute_stats",
    "DiaryFileStore",
    "TimelineGenerator",
    "filter_by_date_range",
    "filter_by_mood_range",
    "search",
]
