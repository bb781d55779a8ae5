import math
from enum import Enum
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator


class ClaimStatus(str, Enum):
    verified = "verified"
    questionable = "questionable"
    false = "false"


class CitationStatus(str, Enum):
    valid = "valid"
    broken = "broken"
    fake = "fake"


class HallucinationRisk(str, Enum):
    Low = "Low"
    Medium = "Medium"
    High = "High"
    Unknown = "Unknown"


class ResultSource(str, Enum):
    backend_ai = "backend+ai"
    ai_only_fallback = "ai-only-fallback"


class Claim(BaseModel):
    text: str
    status: ClaimStatus
    note: str = ""
    suggestedSources: List[str] = Field(default_factory=list)


class Citation(BaseModel):
    source: str = ""
    url: str = "unknown"
    status: CitationStatus
    reason: str = ""

    # Populated by citation re-verification only
    verified: Optional[bool] = None
    httpStatus: Optional[int] = None
    pageTitle: Optional[str] = None
    contentPreview: Optional[str] = None


class VerificationResult(BaseModel):
    trustScore: int = Field(ge=0, le=100)
    claims: List[Claim] = Field(default_factory=list)
    citations: List[Citation] = Field(default_factory=list)
    hallucinationRisk: Optional[HallucinationRisk] = None
    hallucinationRiskReason: Optional[str] = None
    analysisSummary: Optional[str] = None
    source: ResultSource
    error: Optional[str] = None


class AiIndicator(BaseModel):
    type: Literal["ai", "human"]
    description: str = ""
    example: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _lower_type(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value


class AiDetection(BaseModel):
    isAiGenerated: bool = False
    confidence: int = 50
    indicators: List[AiIndicator] = Field(default_factory=list)
    analysis: str = ""
    error: Optional[str] = None

    @field_validator("indicators", mode="before")
    @classmethod
    def _drop_invalid_indicators(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return []
        indicators = []
        for item in value:
            try:
                indicators.append(AiIndicator.model_validate(item))
            except ValidationError:
                continue
        return indicators

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp_confidence(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
            return max(0, min(100, int(round(value))))
        return value


class CompareResult(BaseModel):
    a: VerificationResult
    b: VerificationResult
    scoreDiff: int


class ScrapeResponse(BaseModel):
    content: str
    title: Optional[str] = None
    sourceUrl: str


class HistoryRecord(BaseModel):
    id: str
    text_preview: str
    full_text: str
    trust_score: int
    source: str
    claims: List[Claim] = Field(default_factory=list)
    citations: List[Citation] = Field(default_factory=list)
    created_at: str
