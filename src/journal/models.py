"""
日記解析機能のデータモデル定義

関連モジュール:
- src/journal/parser.py - DiaryRecord の生成
- src/journal/analyzer.py - AnalysisResult の生成
- src/journal/timeline.py - TimelineEntry の生成
- src/journal/stats.py - TimelineStats の算出
"""

from datetime import datetime
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class DiaryMetadata(BaseModel):
    """日記本文から抽出したメタデータ"""

    model_config = ConfigDict(frozen=True)

    title: Optional[str] = Field(None, description="最初の見出し行（# タイトル）")
    tags: List[str] = Field(
        default_factory=list, description="#タグ（出現順、重複あり）"
    )
    mood_override: Optional[int] = Field(None, description="本文中の「心情：N」で明示された値")


class DiaryRecord(BaseModel):
    """1件の日記をパースした結果"""

    model_config = ConfigDict(frozen=True)

    date: datetime = Field(..., description="日記の日付")
    text: str = Field(..., description="日記の生テキスト")
    metadata: DiaryMetadata = Field(default_factory=DiaryMetadata)
    source: Optional[str] = Field(None, description="読み込み元の識別子（ファイルパス等）")


class AnalysisResult(BaseModel):
    """1件の日記に対する解析結果"""

    model_config = ConfigDict(frozen=True)

    keywords: List[str] = Field(default_factory=list, description="重要度順のキーワード")
    mood_score: int = Field(..., ge=1, le=5, description="心情スコア（1最消極〜5最積極）")
    summary: str = Field("", description="要約")
    activities: List[str] = Field(default_factory=list, description="活動（重複なし、出現順）")


class TimelineEntry(BaseModel):
    """タイムラインの1項目（DiaryRecord + AnalysisResult）"""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="一意なID")
    date: datetime
    title: str
    summary: str = ""
    keywords: List[str] = Field(default_factory=list)
    mood_score: int = Field(..., ge=1, le=5)
    activities: List[str] = Field(default_factory=list)


class TimelineStats(BaseModel):
    """タイムライン統計（永続化しない派生値）"""

    model_config = ConfigDict(frozen=True)

    total_entries: int = 0
    average_mood: float = 0.0
    mood_distribution: Dict[int, int] = Field(default_factory=dict)
    top_keywords: List[Tuple[str, int]] = Field(default_factory=list)
    top_activities: List[Tuple[str, int]] = Field(default_factory=list)
    entries_per_month: Dict[str, int] = Field(default_factory=dict)


class AnalysisOutcome(BaseModel):
    """一括解析の1件分の結果（成功時はresult、失敗時はerror）"""

    model_config = ConfigDict(frozen=True)

    record: DiaryRecord
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.result is not None
