from dataclasses import dataclass, fields, replace
from typing import Dict

from exceptions import ValidationException
from models.evidence import SourceType


@dataclass(frozen=True)
class SourceTrustWeights:
    OFFICIAL: float = 1.0
    MAJOR_NEWS: float = 0.8
    FACT_CHECK_ORG: float = 0.85
    SOCIAL_MEDIA: float = 0.4
    UNKNOWN: float = 0.3

    def __post_init__(self):
        names = {f.name for f in fields(self)}
        missing = [s.name for s in SourceType if s.name not in names]
        if missing:
            raise ValidationException("trust_weights", f"no weight for {', '.join(missing)}")

        for name in names:
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValidationException("trust_weights", f"{name}={value} is outside [0, 1]")

        mid_high = max(self.MAJOR_NEWS, self.FACT_CHECK_ORG)
        mid_low = min(self.MAJOR_NEWS, self.FACT_CHECK_ORG)
        if not (self.OFFICIAL >= mid_high and mid_low >= self.SOCIAL_MEDIA >= self.UNKNOWN):
            raise ValidationException(
                "trust_weights",
                "weights must decrease from OFFICIAL through news/fact-check to SOCIAL_MEDIA and UNKNOWN",
            )

    def weight_of(self, source_type: SourceType) -> float:
        return getattr(self, source_type.name)

    @property
    def max_weight(self) -> float:
        return max(self.weight_of(s) for s in SourceType)

    def as_dict(self) -> Dict[SourceType, float]:
        return {s: self.weight_of(s) for s in SourceType}

    def with_overrides(self, **weights: float) -> "SourceTrustWeights":
        """Return a new validated table with some weights replaced.

        Keys may be field names (``OFFICIAL``) or source type values (``official``).
        """
        updates = {}
        for key, value in weights.items():
            name = key.upper()
            if name not in SourceType.__members__:
                raise ValidationException("trust_weights", f"unknown source type {key!r}")
            updates[name] = float(value)
        return replace(self, **updates)


@dataclass(frozen=True)
class AggregationConfig:
    DECAY_RATE: float = 1.0
    OVERRIDE_BOOST: float = 1.25
    MAX_BOOSTED_RECENCY: float = 1.5
    CONFLICT_RATIO: float = 0.25
    CONFLICT_PENALTY: float = 0.3
    MAJORITY_THRESHOLD: float = 0.5
    INVARIANT_TOLERANCE: float = 1e-6


@dataclass(frozen=True)
class NormalizerConfig:
    DEDUP_WINDOW_SECONDS: float = 60.0


@dataclass(frozen=True)
class ConfidenceConfig:
    HIGH_THRESHOLD: float = 0.75
    MEDIUM_THRESHOLD: float = 0.5
    MULTI_DAY_SECONDS: float = 86400.0


@dataclass(frozen=True)
class BatchConfig:
    MAX_CONCURRENCY: int = 8
    STRICT_INVARIANTS: bool = True
