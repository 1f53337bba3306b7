from datetime import timedelta
from typing import List, Optional, Sequence

from config import SOURCE_WEIGHTS, SourceTrustWeights
from models import Evidence, Verdict


class TimelineBuilder:
    """Chronological view of a claim's evidence."""
    
    def __init__(self, weights: SourceTrustWeights = None):
        self.weights = weights or SOURCE_WEIGHTS
    
    @staticmethod
    def build_timeline(evidence: Sequence[Evidence]) -> List[Evidence]:
        """Stable ascending sort by timestamp; idempotent."""
        return sorted(evidence, key=lambda e: e.timestamp)
    
    @staticmethod
    def span(timeline: Sequence[Evidence]) -> timedelta:
        if not timeline:
            return timedelta(0)
        return max(e.timestamp for e in timeline) - min(e.timestamp for e in timeline)
    
    def find_decisive(
        self,
        timeline: Sequence[Evidence],
        verdict: Optional[Verdict] = None
    ) -> Optional[Evidence]:
        """
        Pick the highest-trust item, latest first among equals.

        Only items reporting ``verdict`` are considered when any exist, so the
        decisive item is the one the final verdict rests on.
        """
        if not timeline:
            return None
        
        candidates = [e for e in timeline if verdict is not None and e.verdict == verdict]
        if not candidates:
            candidates = list(timeline)
        
        return max(
            candidates,
            key=lambda e: (self.weights.weight_of(e.source_type), e.timestamp, e.confidence_score),
        )
