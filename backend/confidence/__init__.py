from .aggregator import ConfidenceAggregator
from .recency_scorer import RecencyScorer
from .conflict_detector import ConflictDetector, ConflictAssessment

__all__ = [
    "ConfidenceAggregator",
    "RecencyScorer",
    "ConflictDetector",
    "ConflictAssessment",
]
