from dataclasses import dataclass
from typing import Dict, List, Tuple

from config import AGGREGATION_CONFIG, AggregationConfig
from models import Verdict

_VERDICT_ORDER = {v: i for i, v in enumerate(Verdict)}


@dataclass(frozen=True)
class ConflictAssessment:
    detected: bool = False
    ratio: float = 0.0
    penalty_factor: float = 1.0


class ConflictDetector:
    """Detects a substantial rival verdict among the evidence buckets."""
    
    def __init__(self, config: AggregationConfig = None):
        self.config = config or AGGREGATION_CONFIG
    
    @staticmethod
    def rank(scores: Dict[Verdict, float]) -> List[Tuple[Verdict, float]]:
        """Non-UNVERIFIABLE buckets with positive score, strongest first."""
        ranked = [
            (verdict, score) for verdict, score in scores.items()
            if verdict is not Verdict.UNVERIFIABLE and score > 0
        ]
        ranked.sort(key=lambda vs: (-vs[1], _VERDICT_ORDER[vs[0]]))
        return ranked
    
    def detect(self, support: Dict[Verdict, float]) -> ConflictAssessment:
        """
        Compare the two strongest verdicts by trust-weighted support.

        Support is ``Σ weight * confidence_score`` per verdict, without the
        recency factor: a verdict that has since been corrected still counts
        as disagreement on record.

        Args:
            support: Trust-weighted support per verdict bucket
        Returns:
            ConflictAssessment with the penalty factor to apply to every bucket
        """
        ranked = self.rank(support)
        if len(ranked) < 2:
            return ConflictAssessment()
        
        top1 = ranked[0][1]
        top2 = ranked[1][1]
        ratio = top2 / top1
        
        if ratio < self.config.CONFLICT_RATIO:
            return ConflictAssessment(detected=False, ratio=ratio)
        
        penalty_factor = 1.0 - self.config.CONFLICT_PENALTY * min(1.0, ratio)
        return ConflictAssessment(detected=True, ratio=ratio, penalty_factor=penalty_factor)
