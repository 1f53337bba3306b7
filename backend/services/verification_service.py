import asyncio
import time
from typing import Any, List, Sequence, Tuple

from config import BATCH_CONFIG, BatchConfig, logger
from confidence import ConfidenceAggregator
from exceptions import InvariantViolation
from models import AggregationResult, Claim, Report, Verdict
from .explanation import ExplanationBuilder
from .normalizer import EvidenceNormalizer
from .report import ReportAssembler
from .timeline import TimelineBuilder

ClaimEvidence = Tuple[Claim, Sequence[Any]]


class VerificationService:
    
    def __init__(
        self,
        normalizer: EvidenceNormalizer = None,
        aggregator: ConfidenceAggregator = None,
        timeline_builder: TimelineBuilder = None,
        explanation_builder: ExplanationBuilder = None,
        assembler: ReportAssembler = None,
        batch_config: BatchConfig = None
    ):
        self.normalizer = normalizer or EvidenceNormalizer()
        self.aggregator = aggregator or ConfidenceAggregator()
        self.timeline_builder = timeline_builder or TimelineBuilder(self.aggregator.weights)
        self.explanation_builder = explanation_builder or ExplanationBuilder(self.timeline_builder)
        self.assembler = assembler or ReportAssembler()
        self.batch_config = batch_config or BATCH_CONFIG
    
    def verify_claim(self, claim: Claim, evidence: Sequence[Any]) -> Report:
        """
        Run one claim through normalize → aggregate → timeline → explain → assemble.

        Malformed evidence items are skipped and listed on the report; if every
        item is malformed the claim resolves to UNVERIFIABLE with confidence 0.
        """
        start_time = time.perf_counter()
        
        normalization = self.normalizer.normalize_with_report(evidence)
        if normalization.skipped and not normalization.evidence:
            logger.warning(
                f"All {len(normalization.skipped)} evidence items for claim '{claim.id}' were malformed."
            )
        
        result = self.aggregator.aggregate(claim, normalization.evidence)
        timeline = self.timeline_builder.build_timeline(normalization.evidence)
        explanation = self.explanation_builder.explain(
            claim, result, timeline, rejected=len(normalization.skipped)
        )
        
        report = self.assembler.assemble(
            claim=claim,
            evidence=normalization.received,
            result=result,
            timeline=timeline,
            explanation=explanation,
            skipped=normalization.skipped,
        )
        
        duration = round(time.perf_counter() - start_time, 4)
        logger.info(f"Verification completed for claim '{claim.id}' in {duration} seconds.")
        return report
    
    async def verify_batch(self, items: Sequence[ClaimEvidence]) -> List[Report]:
        """
        Verify many claims concurrently; reports come back in input order.

        A failure in one claim degrades that claim to an UNVERIFIABLE report
        without touching its siblings. InvariantViolation is re-raised when
        STRICT_INVARIANTS is on.
        """
        semaphore = asyncio.Semaphore(max(1, self.batch_config.MAX_CONCURRENCY))
        
        async def run(claim: Claim, evidence: Sequence[Any]) -> Report:
            async with semaphore:
                return await asyncio.to_thread(self.verify_claim, claim, evidence)
        
        results = await asyncio.gather(
            *(run(claim, evidence) for claim, evidence in items),
            return_exceptions=True
        )
        
        reports = []
        for (claim, _), res in zip(items, results):
            if isinstance(res, InvariantViolation) and self.batch_config.STRICT_INVARIANTS:
                raise res
            if isinstance(res, Exception):
                logger.error(f"Verification failed for claim '{claim.id}': {res}", exc_info=res)
                reports.append(self._build_error_report(claim, res))
            elif isinstance(res, BaseException):
                raise res
            else:
                reports.append(res)
        
        logger.info(f"Batch verification completed for {len(reports)} claims.")
        return reports
    
    def verify_batch_sync(self, items: Sequence[ClaimEvidence]) -> List[Report]:
        return asyncio.run(self.verify_batch(items))
    
    def _build_error_report(self, claim: Claim, error: Exception) -> Report:
        """Build degraded report for a claim whose aggregation failed."""
        result = AggregationResult(verdict=Verdict.UNVERIFIABLE, confidence_score=0.0)
        return self.assembler.assemble(
            claim=claim,
            evidence=[],
            result=result,
            timeline=[],
            explanation=self.explanation_builder.explain_failure(claim, error),
        )
