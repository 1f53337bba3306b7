import logging

from .settings import Settings, settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

from .constants import (
    SourceTrustWeights,
    AggregationConfig,
    NormalizerConfig,
    ConfidenceConfig,
    BatchConfig,
)

SOURCE_WEIGHTS = SourceTrustWeights()
AGGREGATION_CONFIG = AggregationConfig(
    DECAY_RATE=settings.DECAY_RATE,
    OVERRIDE_BOOST=settings.OVERRIDE_BOOST,
    MAX_BOOSTED_RECENCY=settings.MAX_BOOSTED_RECENCY,
    CONFLICT_RATIO=settings.CONFLICT_RATIO,
    CONFLICT_PENALTY=settings.CONFLICT_PENALTY,
    MAJORITY_THRESHOLD=settings.MAJORITY_THRESHOLD,
)
NORMALIZER_CONFIG = NormalizerConfig(DEDUP_WINDOW_SECONDS=settings.DEDUP_WINDOW_SECONDS)
CONFIDENCE_CONFIG = ConfidenceConfig()
BATCH_CONFIG = BatchConfig(
    MAX_CONCURRENCY=settings.BATCH_MAX_CONCURRENCY,
    STRICT_INVARIANTS=settings.STRICT_INVARIANTS,
)

__all__ = [
    "logger",
    "Settings",
    "settings",
    "SourceTrustWeights",
    "AggregationConfig",
    "NormalizerConfig",
    "ConfidenceConfig",
    "BatchConfig",
    "SOURCE_WEIGHTS",
    "AGGREGATION_CONFIG",
    "NORMALIZER_CONFIG",
    "CONFIDENCE_CONFIG",
    "BATCH_CONFIG",
]
