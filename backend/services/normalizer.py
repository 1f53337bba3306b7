from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from pydantic import ValidationError

from config import NORMALIZER_CONFIG, NormalizerConfig, logger
from exceptions import MalformedEvidence
from models import Evidence, SkippedEvidence
from utils.parsing import clamp


@dataclass(frozen=True)
class NormalizationResult:
    evidence: List[Evidence] = field(default_factory=list)
    received: List[Evidence] = field(default_factory=list)
    skipped: List[SkippedEvidence] = field(default_factory=list)
    clamped: int = 0
    duplicates_removed: int = 0


class EvidenceNormalizer:
    """Validates, clamps and deduplicates a claim's evidence.

    Output keeps input order; the aggregator and the timeline builder sort
    for their own purposes.
    """
    
    def __init__(self, config: NormalizerConfig = None):
        self.config = config or NORMALIZER_CONFIG
        self.window = timedelta(seconds=self.config.DEDUP_WINDOW_SECONDS)
    
    def normalize(self, evidence: Sequence[Any]) -> List[Evidence]:
        return self.normalize_with_report(evidence).evidence
    
    def normalize_with_report(self, evidence: Sequence[Any]) -> NormalizationResult:
        received, skipped = self.parse(evidence)
        clamped_items, clamped = self._clamp_scores(received)
        kept = self._deduplicate(clamped_items)
        
        if clamped or len(kept) < len(clamped_items):
            logger.info(
                f"Normalized {len(received)} evidence items: {clamped} clamped, "
                f"{len(clamped_items) - len(kept)} duplicates removed, {len(skipped)} skipped."
            )
        
        return NormalizationResult(
            evidence=kept,
            received=received,
            skipped=skipped,
            clamped=clamped,
            duplicates_removed=len(clamped_items) - len(kept),
        )
    
    def parse(self, records: Sequence[Any]) -> Tuple[List[Evidence], List[SkippedEvidence]]:
        """Turn raw records into Evidence, collecting the malformed ones."""
        parsed: List[Evidence] = []
        skipped: List[SkippedEvidence] = []
        
        for index, record in enumerate(records or []):
            try:
                parsed.append(self.parse_record(index, record))
            except MalformedEvidence as e:
                logger.warning("Skipping malformed evidence: %s", e.message)
                skipped.append(SkippedEvidence(index=e.index, reason=e.reason))
        
        return parsed, skipped
    
    def parse_record(self, index: int, record: Any) -> Evidence:
        if isinstance(record, Evidence):
            return record
        if not isinstance(record, Mapping):
            raise MalformedEvidence(index, f"expected a mapping, got {type(record).__name__}")
        try:
            return Evidence.model_validate(dict(record))
        except ValidationError as e:
            raise MalformedEvidence(index, self._describe(e))
    
    @staticmethod
    def _describe(error: ValidationError) -> str:
        parts = []
        for err in error.errors():
            location = ".".join(str(p) for p in err.get("loc", ())) or "record"
            parts.append(f"{location}: {err.get('msg', 'invalid')}")
        return "; ".join(parts)
    
    def _clamp_scores(self, evidence: List[Evidence]) -> Tuple[List[Evidence], int]:
        result = []
        clamped = 0
        for item in evidence:
            if not 0.0 <= item.confidence_score <= 1.0:
                logger.warning(
                    f"Clamping out-of-range confidence_score {item.confidence_score} from '{item.source}'"
                )
                item = item.model_copy(update={"confidence_score": clamp(item.confidence_score)})
                clamped += 1
            result.append(item)
        return result, clamped
    
    def _deduplicate(self, evidence: List[Evidence]) -> List[Evidence]:
        """Collapse same source/type/verdict items reported within the window.

        The higher confidence_score wins; on a tie the earlier item is kept.
        """
        order = sorted(
            range(len(evidence)),
            key=lambda i: (self._dedup_key(evidence[i]), evidence[i].timestamp, i),
        )
        
        kept: Dict[int, Evidence] = {}
        representative: Dict[Tuple[str, str, str], int] = {}
        
        for i in order:
            item = evidence[i]
            key = self._dedup_key(item)
            rep = representative.get(key)
            
            if rep is not None and abs(item.timestamp - kept[rep].timestamp) <= self.window:
                if item.confidence_score > kept[rep].confidence_score:
                    del kept[rep]
                    kept[i] = item
                    representative[key] = i
                logger.debug(f"Dropped duplicate evidence from '{item.source}'")
                continue
            
            kept[i] = item
            representative[key] = i
        
        return [kept[i] for i in sorted(kept)]
    
    @staticmethod
    def _dedup_key(item: Evidence) -> Tuple[str, str, str]:
        return item.source.casefold(), item.source_type.value, item.verdict.value
