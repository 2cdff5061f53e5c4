"""
Pydantic schemas for analysis responses.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ReportModel(BaseModel):
    """Immutable, camelCase-serialized base."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class AnalyzerScore(ReportModel):
    """Summary sub-score of one analyzer."""
    name: str
    exists: bool
    score: int = Field(..., ge=0, le=100)
    details: Dict[str, Any] = Field(default_factory=dict)


class CategoryScore(ReportModel):
    """One weighted category."""
    key: str
    label: str
    score: int = Field(..., ge=0, le=100)
    weight: int = Field(..., ge=0, le=100)
    description: str = ""


class ImprovementTipModel(ReportModel):
    """Actionable recommendation."""
    id: str
    category: str
    title: str
    description: str
    priority: Literal["high", "medium", "low"]
    impact: int = Field(..., ge=1, le=5)
    difficulty: Literal["easy", "medium", "hard"]
    code: Optional[str] = None


class AnalysisReport(ReportModel):
    """Complete analysis response."""
    # Request info
    url: str
    final_url: str
    timestamp: datetime
    
    # Scores
    overall_score: int = Field(..., ge=0, le=100)
    grade: Literal["excellent", "good", "poor"]
    scoring_version: str
    
    # Performance values are estimates, never browser measurements
    metrics_estimated: bool = True
    fetch_latency_ms: float = 0
    
    per_analyzer: List[AnalyzerScore] = Field(default_factory=list)
    categories: List[CategoryScore] = Field(default_factory=list)
    improvements: List[ImprovementTipModel] = Field(default_factory=list)
    
    # Per-analyzer structured sub-reports
    metadata: Dict[str, Any] = Field(default_factory=dict)
    headings: Dict[str, Any] = Field(default_factory=dict)
    images: Dict[str, Any] = Field(default_factory=dict)
    technical: Dict[str, Any] = Field(default_factory=dict)
    social: Dict[str, Any] = Field(default_factory=dict)
    analytics: Dict[str, Any] = Field(default_factory=dict)
    performance: Dict[str, Any] = Field(default_factory=dict)
    mobile: Dict[str, Any] = Field(default_factory=dict)
    content_quality: Dict[str, Any] = Field(default_factory=dict)
    regional_optimization: Dict[str, Any] = Field(default_factory=dict)
    structured_data: Dict[str, Any] = Field(default_factory=dict)
    security: Dict[str, Any] = Field(default_factory=dict)
    accessibility: Dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Error body."""
    error: str
    status: Optional[int] = None
