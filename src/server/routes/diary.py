"""Diary analysis endpoints."""

from __future__ import annotations

import asyncio
import logging

from fastapi import FastAPI, HTTPException

from src.diary_analyzer.exceptions import BackendError, BackendUnavailableError
from src.journal.timeline import apply_filters

from ..dependencies import get_pipeline
from ..schemas import (
    AnalysisFailure,
    AnalyzeRequest,
    AnalyzeResponse,
    HealthResponse,
    TimelineRequest,
    TimelineResponse,
)

logger = logging.getLogger(__name__)


def register_diary_routes(app: FastAPI) -> None:
    """Register diary analysis endpoints."""

    @app.get("/api/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """Health check."""
        pipeline = get_pipeline()
        return HealthResponse(status="ok", mode=pipeline.analyzer.mode)

    @app.post("/api/diary/analyze", response_model=AnalyzeResponse)
    async def analyze_diary(request: AnalyzeRequest) -> AnalyzeResponse:
        """Parse and analyze one diary text."""
        pipeline = get_pipeline()
        record = pipeline.parser.parse_text(request.identifier, request.text)
        try:
            result = await pipeline.analyzer.analyze(record)
        except BackendUnavailableError as exc:
            logger.exception("Analysis backend unavailable: %s", exc)
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        except BackendError as exc:
            logger.exception("Analysis backend failed: %s", exc)
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        return AnalyzeResponse(
            date=record.date.strftime("%Y-%m-%d"),
            metadata=record.metadata,
            analysis=result,
        )

    @app.post("/api/diary/timeline", response_model=TimelineResponse)
    async def build_timeline(request: TimelineRequest) -> TimelineResponse:
        """Analyze several diary texts and return the filtered timeline with stats."""
        pipeline = get_pipeline()
        records = [
            pipeline.parser.parse_text(item.identifier, item.text) for item in request.entries
        ]
        try:
            run = await asyncio.to_thread(pipeline.build_timeline, records)
        except Exception as exc:
            logger.exception("Failed to build timeline: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to build timeline") from exc

        entries = apply_filters(
            run.entries,
            start=request.start,
            end=request.end,
            term=request.term,
            min_mood=request.min_mood,
            max_mood=request.max_mood,
        )
        return TimelineResponse(
            entries=entries,
            stats=pipeline.stats(entries),
            failures=[
                AnalysisFailure(identifier=outcome.record.source, error=outcome.error or "")
                for outcome in run.failures
            ],
        )
