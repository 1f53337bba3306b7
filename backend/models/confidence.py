from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from .evidence import SourceType
from .verdicts import Verdict


class ConfidenceBreakdown(BaseModel):
    """Contribution of one source type to the final confidence score."""
    model_config = ConfigDict(frozen=True)

    source_type: SourceType
    weight: float
    score: float
    contribution: float


@dataclass(frozen=True)
class AggregationResult:
    verdict: Verdict
    confidence_score: float
    breakdown: List[ConfidenceBreakdown] = field(default_factory=list)
    conflict_detected: bool = False
    verdict_scores: Dict[Verdict, float] = field(default_factory=dict)
    leading_verdict: Optional[Verdict] = None
    rival_verdict: Optional[Verdict] = None
    has_majority: bool = False

    def as_tuple(self):
        """(verdict, score, breakdown, conflict_detected)"""
        return self.verdict, self.confidence_score, self.breakdown, self.conflict_detected
