from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from .confidence import ConfidenceBreakdown
from .evidence import Evidence
from .verdicts import Verdict


class SkippedEvidence(BaseModel):
    """An input record rejected as malformed."""
    model_config = ConfigDict(frozen=True)

    index: int
    reason: str


class Report(BaseModel):
    """Exportable verification report for one claim."""
    model_config = ConfigDict(frozen=True)

    claim_id: str
    claim_text: str
    entity_type: str = "unknown"
    final_verdict: Verdict
    confidence_score: float
    confidence_tier: str
    conflict_detected: bool = False
    evidence: List[Evidence] = Field(default_factory=list)
    confidence_breakdown: List[ConfidenceBreakdown] = Field(default_factory=list)
    verdict_scores: Dict[Verdict, float] = Field(default_factory=dict)
    timeline: List[Evidence] = Field(default_factory=list)
    explanation: str
    skipped_evidence: List[SkippedEvidence] = Field(default_factory=list)


class BatchSummary(BaseModel):
    total_claims: int
    total_evidence: int
    average_confidence: float
    verdict_counts: Dict[Verdict, int] = Field(default_factory=dict)


class BatchAggregateResponse(BaseModel):
    reports: List[Report]
    summary: BatchSummary
