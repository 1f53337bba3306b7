from typing import Callable, Dict, Hashable, List, Optional, Sequence, Tuple

from config import (
    AGGREGATION_CONFIG,
    CONFIDENCE_CONFIG,
    SOURCE_WEIGHTS,
    AggregationConfig,
    SourceTrustWeights,
    logger,
)
from exceptions import InvariantViolation
from models import (
    AggregationResult,
    Claim,
    ConfidenceBreakdown,
    Evidence,
    SOURCE_TYPE_ORDER,
    SourceType,
    Verdict,
)
from utils.parsing import clamp
from .conflict_detector import ConflictDetector
from .recency_scorer import RecencyScorer

_VERDICT_ORDER = {v: i for i, v in enumerate(Verdict)}


class ConfidenceAggregator:
    def __init__(
        self,
        weights: SourceTrustWeights = None,
        config: AggregationConfig = None,
        recency_scorer: RecencyScorer = None,
        conflict_detector: ConflictDetector = None
    ):
        self.weights = weights or SOURCE_WEIGHTS
        self.config = config or AGGREGATION_CONFIG
        self.recency_scorer = recency_scorer or RecencyScorer(self.config)
        self.conflict_detector = conflict_detector or ConflictDetector(self.config)
    
    def aggregate(self, claim: Optional[Claim], evidence: Sequence[Evidence]) -> AggregationResult:
        """
        Weigh normalized evidence into a verdict, a confidence score and a
        per-source-type breakdown.

        Args:
            claim: The claim being judged, used for logging only
            evidence: Normalized evidence for the claim
        Returns:
            AggregationResult
        """
        claim_id = claim.id if claim else "<anonymous>"
        
        if not evidence:
            logger.info(f"No evidence for claim '{claim_id}'; resolving to unverifiable.")
            return AggregationResult(verdict=Verdict.UNVERIFIABLE, confidence_score=0.0)
        
        # fixed accumulation order keeps sums stable regardless of input order
        items = sorted(evidence, key=self._accumulation_key)
        recency = self.recency_scorer.score(items)
        raw = [
            self.weights.weight_of(e.source_type) * e.confidence_score * r
            for e, r in zip(items, recency)
        ]
        support = [self.weights.weight_of(e.source_type) * e.confidence_score for e in items]
        
        buckets = self._sum_by(items, raw, lambda e: e.verdict)
        conflict = self.conflict_detector.detect(self._sum_by(items, support, lambda e: e.verdict))
        penalized = {v: s * conflict.penalty_factor for v, s in buckets.items()}
        
        winner = self._select_winner(penalized)
        # denominator is N x highest trust weight, not the sum of item weights;
        # with the default table a lone item scores weight * confidence_score
        max_mass = len(items) * self.weights.max_weight
        
        if winner is None or max_mass <= 0:
            verdict = Verdict.UNVERIFIABLE
            unclamped = 0.0
        else:
            verdict = winner
            unclamped = penalized[winner] / max_mass
        score = clamp(unclamped)
        
        breakdown = self._build_breakdown(
            items, raw, winner, conflict.penalty_factor, max_mass,
            scale=(score / unclamped) if unclamped > 1.0 else 1.0
        )
        self._check_invariant(breakdown, score)
        
        ranked = self.conflict_detector.rank(penalized)
        verdict_scores = {
            v: (s / max_mass if max_mass > 0 else 0.0)
            for v, s in sorted(penalized.items(), key=lambda vs: _VERDICT_ORDER[vs[0]])
        }
        
        logger.info(
            f"Aggregated {len(items)} evidence items for claim '{claim_id}': "
            f"verdict={verdict.value}, confidence={score:.3f}, conflict={conflict.detected}"
        )
        
        return AggregationResult(
            verdict=verdict,
            confidence_score=score,
            breakdown=breakdown,
            conflict_detected=conflict.detected,
            verdict_scores=verdict_scores,
            leading_verdict=ranked[0][0] if ranked else None,
            rival_verdict=ranked[1][0] if len(ranked) > 1 else None,
            has_majority=winner is not None,
        )
    
    def verdict_breakdown(self, evidence: Sequence[Evidence]) -> Dict[Verdict, float]:
        """Normalized post-penalty score of every verdict bucket."""
        return self.aggregate(None, evidence).verdict_scores
    
    @staticmethod
    def get_confidence_tier(confidence: float) -> str:
        if confidence > CONFIDENCE_CONFIG.HIGH_THRESHOLD:
            return "High"
        elif confidence > CONFIDENCE_CONFIG.MEDIUM_THRESHOLD:
            return "Medium"
        else:
            return "Low"
    
    @staticmethod
    def _accumulation_key(e: Evidence):
        return (
            SOURCE_TYPE_ORDER[e.source_type],
            e.timestamp,
            e.source,
            _VERDICT_ORDER[e.verdict],
            e.confidence_score,
        )
    
    @staticmethod
    def _sum_by(
        items: Sequence[Evidence],
        values: Sequence[float],
        key: Callable[[Evidence], Hashable]
    ) -> Dict:
        totals: Dict = {}
        for item, value in zip(items, values):
            k = key(item)
            totals[k] = totals.get(k, 0.0) + value
        return totals
    
    def _select_winner(self, scores: Dict[Verdict, float]) -> Optional[Verdict]:
        """The strongest bucket, if it holds more than MAJORITY_THRESHOLD of the mass."""
        total = sum(scores[v] for v in sorted(scores, key=_VERDICT_ORDER.get))
        if total <= 0:
            return None
        
        leader, leader_score = min(
            scores.items(), key=lambda vs: (-vs[1], _VERDICT_ORDER[vs[0]])
        )
        if leader_score / total > self.config.MAJORITY_THRESHOLD:
            return leader
        return None
    
    def _build_breakdown(
        self,
        items: Sequence[Evidence],
        raw: Sequence[float],
        winner: Optional[Verdict],
        penalty_factor: float,
        max_mass: float,
        scale: float = 1.0
    ) -> List[ConfidenceBreakdown]:
        by_type: Dict[SourceType, List[Tuple[Evidence, float]]] = {}
        for item, value in zip(items, raw):
            by_type.setdefault(item.source_type, []).append((item, value))
        
        breakdown = []
        for source_type, entries in by_type.items():
            mean_score = sum(e.confidence_score for e, _ in entries) / len(entries)
            winning_mass = sum(v for e, v in entries if e.verdict == winner) if winner else 0.0
            contribution = (winning_mass * penalty_factor / max_mass) * scale if max_mass > 0 else 0.0
            breakdown.append(ConfidenceBreakdown(
                source_type=source_type,
                weight=self.weights.weight_of(source_type),
                score=mean_score,
                contribution=contribution,
            ))
        
        breakdown.sort(key=lambda b: (-b.contribution, SOURCE_TYPE_ORDER[b.source_type]))
        return breakdown
    
    def _check_invariant(self, breakdown: List[ConfidenceBreakdown], score: float) -> None:
        total = sum(b.contribution for b in breakdown)
        if abs(total - score) > self.config.INVARIANT_TOLERANCE:
            logger.error(f"Confidence breakdown sums to {total}, final score is {score}")
            raise InvariantViolation(expected=score, actual=total)
