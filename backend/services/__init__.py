from .normalizer import EvidenceNormalizer, NormalizationResult
from .timeline import TimelineBuilder
from .explanation import ExplanationBuilder
from .report import ReportAssembler, EXPORT_FORMATS
from .verification_service import VerificationService

__all__ = [
    "EvidenceNormalizer",
    "NormalizationResult",
    "TimelineBuilder",
    "ExplanationBuilder",
    "ReportAssembler",
    "EXPORT_FORMATS",
    "VerificationService",
]
