"""Pydantic schemas for the FastAPI server."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from src.journal.models import AnalysisResult, DiaryMetadata, TimelineEntry, TimelineStats


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str
    mode: str = Field(..., description="Analysis mode: heuristic, remote or local")


class DiaryText(BaseModel):
    """One raw diary text."""

    identifier: str = Field(
        default="",
        description="File-name-like identifier used for date resolution (e.g. 2024-01-15.md)",
    )
    text: str = Field(..., description="Raw diary text")


class AnalyzeRequest(DiaryText):
    """Request body for single diary analysis."""


class AnalyzeResponse(BaseModel):
    """Response body for single diary analysis."""

    date: str
    metadata: DiaryMetadata
    analysis: AnalysisResult


class TimelineRequest(BaseModel):
    """Request body for timeline generation."""

    entries: List[DiaryText] = Field(default_factory=list)
    start: Optional[date] = Field(default=None, description="Inclusive start date")
    end: Optional[date] = Field(default=None, description="Inclusive end date")
    term: Optional[str] = Field(default=None, description="Search term")
    min_mood: Optional[int] = Field(default=None, ge=1, le=5)
    max_mood: Optional[int] = Field(default=None, ge=1, le=5)


class AnalysisFailure(BaseModel):
    """A diary whose analysis failed."""

    identifier: Optional[str] = None
    error: str


class TimelineResponse(BaseModel):
    """Response body for timeline generation."""

    entries: List[TimelineEntry]
    stats: TimelineStats
    failures: List[AnalysisFailure] = Field(default_factory=list)
