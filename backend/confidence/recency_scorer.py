from collections import Counter
from datetime import datetime
from typing import FrozenSet, List, Sequence

from config import AGGREGATION_CONFIG, AggregationConfig
from models import Evidence, SourceType, Verdict


class RecencyScorer:
    """Calculates the relative recency factor of each evidence item."""
    
    BOOSTABLE_TYPES = frozenset({SourceType.OFFICIAL, SourceType.FACT_CHECK_ORG})
    
    def __init__(self, config: AggregationConfig = None):
        self.config = config or AGGREGATION_CONFIG
    
    def score(self, evidence: Sequence[Evidence]) -> List[float]:
        """
        Calculate recency factors aligned with ``evidence``.

        Age is measured against the newest item and scaled by the span of the
        set, so the newest item always scores 1.0 and the oldest
        ``1 / (1 + DECAY_RATE)``. A newest official or fact-check item that
        disagrees with the majority of strictly older evidence is boosted by
        OVERRIDE_BOOST, never beyond MAX_BOOSTED_RECENCY.

        Args:
            evidence: Normalized evidence for one claim
        Returns:
            One recency factor per item
        """
        if not evidence:
            return []
        
        latest = max(e.timestamp for e in evidence)
        earliest = min(e.timestamp for e in evidence)
        span = (latest - earliest).total_seconds()
        older_majority = self._older_majority(evidence, latest)
        
        factors = []
        for item in evidence:
            factor = self._recency(item, latest, span)
            if self.is_override(item, latest, older_majority):
                factor = min(factor * self.config.OVERRIDE_BOOST, self.config.MAX_BOOSTED_RECENCY)
            factors.append(factor)
        return factors
    
    def _recency(self, item: Evidence, latest: datetime, span: float) -> float:
        if span <= 0:
            return 1.0
        normalized_age = (latest - item.timestamp).total_seconds() / span
        return 1.0 / (1.0 + self.config.DECAY_RATE * normalized_age)
    
    @staticmethod
    def _older_majority(evidence: Sequence[Evidence], latest: datetime) -> FrozenSet[Verdict]:
        # every verdict tied for the most votes counts as the majority
        counts = Counter(e.verdict for e in evidence if e.timestamp < latest)
        if not counts:
            return frozenset()
        top = max(counts.values())
        return frozenset(v for v, c in counts.items() if c == top)
    
    def is_override(self, item: Evidence, latest: datetime, older_majority: FrozenSet[Verdict]) -> bool:
        return (
            item.source_type in self.BOOSTABLE_TYPES
            and item.timestamp == latest
            and bool(older_majority)
            and item.verdict not in older_majority
        )
