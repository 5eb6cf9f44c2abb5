"""Dependency helpers shared across FastAPI routes."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from src.diary_analyzer.config import Config
from src.diary_analyzer.logger import setup_logger
from src.journal.pipeline import DiaryPipeline


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Load configuration once (path from DIARY_ANALYZER_CONFIG, else defaults)."""
    config_path = os.getenv("DIARY_ANALYZER_CONFIG")
    config = Config.load(Path(config_path) if config_path else None)
    setup_logger(log_level=config.log_level, log_file=config.log_file)
    return config


@lru_cache(maxsize=1)
def get_pipeline() -> DiaryPipeline:
    """Singleton DiaryPipeline rooted at DIARY_ANALYZER_ROOT (default: cwd)."""
    root = os.getenv("DIARY_ANALYZER_ROOT", ".")
    return DiaryPipeline.from_config(get_config(), root=root)
