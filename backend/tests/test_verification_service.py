import pytest
from datetime import timedelta

from config import BatchConfig
from confidence import ConfidenceAggregator
from exceptions import InvariantViolation
from models import Claim, Verdict
from services import VerificationService


class FailingAggregator(ConfidenceAggregator):
    """Raises for one claim id, aggregates normally otherwise."""
    
    def __init__(self, failing_id, error):
        super().__init__()
        self.failing_id = failing_id
        self.error = error
    
    def aggregate(self, claim, evidence):
        if claim is not None and claim.id == self.failing_id:
            raise self.error
        return super().aggregate(claim, evidence)


@pytest.fixture
def claims():
    return [Claim(id=f"claim-{n}", text=f"Claim number {n}.") for n in range(5)]


class TestVerifyClaim:
    
    def test_raw_records(self, claim, raw_evidence):
        report = VerificationService().verify_claim(claim, raw_evidence)
        
        assert report.final_verdict == Verdict.FALSE
        assert report.conflict_detected
        assert report.skipped_evidence == []
        assert len(report.timeline) == 3
        total = sum(b.contribution for b in report.confidence_breakdown)
        assert total == pytest.approx(report.confidence_score, abs=1e-6)
    
    def test_malformed_items_skipped(self, claim, raw_evidence):
        records = raw_evidence + [{"source": "Blog", "verdict": "true"}, 42]
        report = VerificationService().verify_claim(claim, records)
        
        assert [s.index for s in report.skipped_evidence] == [3, 4]
        assert len(report.evidence) == 3
        assert report.final_verdict == Verdict.FALSE
        assert "2 further evidence items were rejected as malformed." in report.explanation
    
    def test_all_malformed(self, claim):
        report = VerificationService().verify_claim(claim, [{}, "junk"])
        
        assert report.final_verdict == Verdict.UNVERIFIABLE
        assert report.confidence_score == 0.0
        assert report.confidence_breakdown == []
        assert len(report.skipped_evidence) == 2
        assert "All 2 evidence items were rejected as malformed" in report.explanation
    
    def test_no_evidence(self, claim):
        report = VerificationService().verify_claim(claim, [])
        
        assert report.final_verdict == Verdict.UNVERIFIABLE
        assert report.confidence_score == 0.0
        assert not report.conflict_detected
    
    def test_duplicates_collapsed_before_aggregation(self, claim, make_evidence):
        single = VerificationService().verify_claim(
            claim, [make_evidence("official", "true", 0.9, source="Ministry")]
        )
        doubled = VerificationService().verify_claim(claim, [
            make_evidence("official", "true", 0.9, source="Ministry"),
            make_evidence("official", "true", 0.5, offset=timedelta(seconds=10), source="Ministry"),
        ])
        
        assert doubled.confidence_score == single.confidence_score
        assert len(doubled.evidence) == 2
        assert len(doubled.timeline) == 1


@pytest.mark.asyncio
class TestVerifyBatch:
    
    async def test_order_preserved(self, claims, make_evidence):
        items = [
            (c, [make_evidence("major_news", "true", 0.1 * (n + 1))])
            for n, c in enumerate(claims)
        ]
        reports = await VerificationService().verify_batch(items)
        
        assert [r.claim_id for r in reports] == [c.id for c in claims]
    
    async def test_matches_sequential(self, claims, make_evidence):
        items = [
            (c, [make_evidence("official", "false", 0.5), make_evidence("social_media", "true", 0.9)])
            for c in claims
        ]
        service = VerificationService()
        reports = await service.verify_batch(items)
        
        assert reports == [service.verify_claim(c, e) for c, e in items]
    
    async def test_failure_isolated(self, claims, make_evidence):
        service = VerificationService(aggregator=FailingAggregator("claim-2", RuntimeError("boom")))
        items = [(c, [make_evidence("official", "true", 0.9)]) for c in claims]
        
        reports = await service.verify_batch(items)
        
        assert len(reports) == 5
        assert reports[2].final_verdict == Verdict.UNVERIFIABLE
        assert reports[2].confidence_score == 0.0
        assert "RuntimeError" in reports[2].explanation
        assert all(r.final_verdict == Verdict.TRUE for i, r in enumerate(reports) if i != 2)
    
    async def test_invariant_violation_raised_when_strict(self, claims, make_evidence):
        service = VerificationService(
            aggregator=FailingAggregator("claim-1", InvariantViolation(0.5, 0.4)),
            batch_config=BatchConfig(STRICT_INVARIANTS=True),
        )
        items = [(c, [make_evidence()]) for c in claims]
        
        with pytest.raises(InvariantViolation):
            await service.verify_batch(items)
    
    async def test_invariant_violation_degraded_when_lenient(self, claims, make_evidence):
        service = VerificationService(
            aggregator=FailingAggregator("claim-1", InvariantViolation(0.5, 0.4)),
            batch_config=BatchConfig(STRICT_INVARIANTS=False),
        )
        items = [(c, [make_evidence()]) for c in claims]
        
        reports = await service.verify_batch(items)
        assert reports[1].final_verdict == Verdict.UNVERIFIABLE
    
    async def test_empty_batch(self):
        assert await VerificationService().verify_batch([]) == []


class TestVerifyBatchSync:
    
    def test_sync_wrapper(self, claims, make_evidence):
        items = [(c, [make_evidence()]) for c in claims[:2]]
        reports = VerificationService(batch_config=BatchConfig(MAX_CONCURRENCY=1)).verify_batch_sync(items)
        assert [r.claim_id for r in reports] == ["claim-0", "claim-1"]
