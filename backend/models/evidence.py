"""Evidence records produced by upstream retrieval."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from utils.parsing import parse_score, parse_timestamp
from utils.validation import InputValidator
from .verdicts import Verdict


class SourceType(str, Enum):
    """Trust categories, in decreasing order of default trust."""

    OFFICIAL = "official"
    MAJOR_NEWS = "major_news"
    FACT_CHECK_ORG = "fact_check_org"
    SOCIAL_MEDIA = "social_media"
    UNKNOWN = "unknown"


SOURCE_TYPE_LABELS: Dict[SourceType, str] = {
    SourceType.OFFICIAL: "official",
    SourceType.MAJOR_NEWS: "major news",
    SourceType.FACT_CHECK_ORG: "fact-check organization",
    SourceType.SOCIAL_MEDIA: "social media",
    SourceType.UNKNOWN: "unknown",
}

SOURCE_TYPE_ORDER: Dict[SourceType, int] = {s: i for i, s in enumerate(SourceType)}


def _coerce_tag(value: Any) -> Any:
    if isinstance(value, Enum):
        return value
    if isinstance(value, str):
        return InputValidator.normalize_tag(value)
    return value


class Evidence(BaseModel):
    """A single sourced, timestamped, verdict-bearing observation about a claim.

    ``confidence_score`` is not range-checked here: out-of-range values are a
    data-quality fault that the normalizer clamps.
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "source": "Mumbai Fire Brigade",
                "source_type": "official",
                "timestamp": "2024-03-02T09:00:00Z",
                "verdict": "false",
                "confidence_score": 0.9,
                "title": "Official casualty update",
                "summary": "Three fatalities confirmed, two injured.",
            }
        },
    )

    source: str = Field(..., description="Display name of the source")
    source_type: SourceType = Field(..., description="Trust category of the source")
    timestamp: datetime = Field(..., description="When the source reported, in UTC")
    verdict: Verdict = Field(..., description="The source's own verdict on the claim")
    confidence_score: float = Field(..., description="The source's confidence in its verdict")
    title: Optional[str] = None
    summary: Optional[str] = None
    url: Optional[str] = None

    @field_validator("source", mode="before")
    @classmethod
    def _sanitize_source(cls, v):
        return InputValidator.sanitize_required(v, "source")

    @field_validator("title", "summary", "url", mode="before")
    @classmethod
    def _sanitize_optional(cls, v):
        return InputValidator.sanitize_text(v) or None

    @field_validator("source_type", "verdict", mode="before")
    @classmethod
    def _normalize_tags(cls, v):
        return _coerce_tag(v)

    @field_validator("timestamp", mode="before")
    @classmethod
    def _parse_timestamp(cls, v):
        return parse_timestamp(v)

    @field_validator("confidence_score", mode="before")
    @classmethod
    def _parse_score(cls, v):
        score = parse_score(v)
        if score is None:
            raise ValueError(f"confidence_score is not a finite number: {v!r}")
        return score
