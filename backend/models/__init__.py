from .verdicts import Verdict, VERDICT_LABELS
from .evidence import (
    SourceType,
    SOURCE_TYPE_LABELS,
    SOURCE_TYPE_ORDER,
    Evidence,
)
from .confidence import ConfidenceBreakdown, AggregationResult
from .claims import (
    Claim,
    AggregateRequest,
    BatchAggregateRequest,
)
from .reports import (
    SkippedEvidence,
    Report,
    BatchSummary,
    BatchAggregateResponse,
)

__all__ = [
    "Verdict",
    "VERDICT_LABELS",

    "SourceType",
    "SOURCE_TYPE_LABELS",
    "SOURCE_TYPE_ORDER",
    "Evidence",

    "ConfidenceBreakdown",
    "AggregationResult",

    "Claim",
    "AggregateRequest",
    "BatchAggregateRequest",

    "SkippedEvidence",
    "Report",
    "BatchSummary",
    "BatchAggregateResponse",
]
