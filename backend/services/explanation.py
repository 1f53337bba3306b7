from typing import List, Optional, Sequence

from config import CONFIDENCE_CONFIG, ConfidenceConfig
from confidence import ConfidenceAggregator
from models import (
    AggregationResult,
    Claim,
    Evidence,
    SOURCE_TYPE_LABELS,
    SourceType,
    VERDICT_LABELS,
    Verdict,
)
from utils.parsing import format_span
from .timeline import TimelineBuilder


class ExplanationBuilder:
    """Renders the templated, deterministic explanation for a claim.

    Same inputs always produce the same text; spans are reported in whole
    days and hours, never as locale-formatted dates.
    """
    
    def __init__(
        self,
        timeline_builder: TimelineBuilder = None,
        config: ConfidenceConfig = None
    ):
        self.timeline_builder = timeline_builder or TimelineBuilder()
        self.config = config or CONFIDENCE_CONFIG
    
    def explain(
        self,
        claim: Claim,
        result: AggregationResult,
        timeline: Sequence[Evidence],
        rejected: int = 0
    ) -> str:
        parts: List[str] = [self._verdict_statement(claim, result)]
        
        if timeline:
            parts.append(self._source_summary(timeline))
        elif rejected:
            parts.append(
                f"All {rejected} evidence item{'s were' if rejected != 1 else ' was'} "
                f"rejected as malformed, so no verdict could be reached."
            )
        else:
            parts.append("No evidence was available for this claim.")
        
        if timeline and rejected:
            parts.append(
                f"{rejected} further evidence item{'s were' if rejected != 1 else ' was'} "
                f"rejected as malformed."
            )
        
        spread = self._temporal_note(result, timeline)
        if spread:
            parts.append(spread)
        
        if result.conflict_detected:
            parts.append(self._conflict_clause(result))
        elif timeline and result.verdict is Verdict.UNVERIFIABLE and not result.has_majority:
            parts.append("No verdict carried a majority of the weighted evidence.")
        
        return " ".join(parts)
    
    def explain_failure(self, claim: Claim, error: Exception) -> str:
        return (
            f'Claim "{claim.text}" is assessed as {VERDICT_LABELS[Verdict.UNVERIFIABLE]} '
            f"with 0.0% confidence (Low). Aggregation failed with "
            f"{error.__class__.__name__}, so no verdict could be reached."
        )
    
    def _verdict_statement(self, claim: Claim, result: AggregationResult) -> str:
        tier = ConfidenceAggregator.get_confidence_tier(result.confidence_score)
        return (
            f'Claim "{claim.text}" is assessed as {VERDICT_LABELS[result.verdict]} '
            f"with {result.confidence_score * 100:.1f}% confidence ({tier})."
        )
    
    @staticmethod
    def _source_summary(timeline: Sequence[Evidence]) -> str:
        counts = {s: 0 for s in SourceType}
        for item in timeline:
            counts[item.source_type] += 1
        
        described = [
            f"{count} {SOURCE_TYPE_LABELS[s]} source{'s' if count != 1 else ''}"
            for s, count in counts.items() if count
        ]
        return f"Evidence considered: {', '.join(described)}."
    
    def _temporal_note(self, result: AggregationResult, timeline: Sequence[Evidence]) -> Optional[str]:
        span = self.timeline_builder.span(timeline)
        if span.total_seconds() <= self.config.MULTI_DAY_SECONDS:
            return None
        
        ordered = self.timeline_builder.build_timeline(timeline)
        earliest = ordered[0]
        latest = ordered[-1]
        decisive = self.timeline_builder.find_decisive(ordered, result.verdict)
        return (
            f"The evidence spans {format_span(span)}, from {self._describe(earliest)} "
            f"to {self._describe(latest)}; the decisive item is {self._describe(decisive)}, "
            f"which reports {VERDICT_LABELS[decisive.verdict]}."
        )
    
    @staticmethod
    def _describe(item: Evidence) -> str:
        return f"{item.source} ({SOURCE_TYPE_LABELS[item.source_type]})"
    
    @staticmethod
    def _conflict_clause(result: AggregationResult) -> str:
        leading = VERDICT_LABELS[result.leading_verdict] if result.leading_verdict else "none"
        rival = VERDICT_LABELS[result.rival_verdict] if result.rival_verdict else "none"
        
        if result.has_majority and result.verdict is not Verdict.UNVERIFIABLE:
            return (
                f"Conflicting evidence: {rival} was also reported, but {leading} "
                f"dominates once source trust and recency are weighed."
            )
        if result.has_majority:
            return (
                f"Conflicting evidence: {leading} and {rival} were both reported, but "
                f"{VERDICT_LABELS[Verdict.UNVERIFIABLE]} dominates once source trust "
                f"and recency are weighed."
            )
        return (
            f"Conflicting evidence: {leading} and {rival} carry comparable weighted "
            f"support, so neither holds a majority."
        )
