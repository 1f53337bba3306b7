from typing import Dict, List, Sequence, Union

from pydantic import TypeAdapter

from confidence import ConfidenceAggregator
from exceptions import UnsupportedFormat
from models import (
    AggregationResult,
    BatchSummary,
    Claim,
    Evidence,
    Report,
    SOURCE_TYPE_LABELS,
    SkippedEvidence,
    VERDICT_LABELS,
    Verdict,
)

_REPORT_LIST = TypeAdapter(List[Report])

EXPORT_FORMATS = ("json", "text", "both")


class ReportAssembler:
    """Packages aggregation output into a Report and serializes it.

    Serialization is a projection only: nothing here recomputes a score.
    """
    
    def assemble(
        self,
        claim: Claim,
        evidence: Sequence[Evidence],
        result: AggregationResult,
        timeline: Sequence[Evidence],
        explanation: str,
        skipped: Sequence[SkippedEvidence] = ()
    ) -> Report:
        return Report(
            claim_id=claim.id,
            claim_text=claim.text,
            entity_type=claim.entity_type,
            final_verdict=result.verdict,
            confidence_score=result.confidence_score,
            confidence_tier=ConfidenceAggregator.get_confidence_tier(result.confidence_score),
            conflict_detected=result.conflict_detected,
            evidence=list(evidence),
            confidence_breakdown=list(result.breakdown),
            verdict_scores=dict(result.verdict_scores),
            timeline=list(timeline),
            explanation=explanation,
            skipped_evidence=list(skipped),
        )
    
    @staticmethod
    def to_json(report: Report) -> str:
        return report.model_dump_json(indent=2)
    
    @staticmethod
    def from_json(payload: Union[str, bytes]) -> Report:
        return Report.model_validate_json(payload)
    
    @staticmethod
    def to_text(report: Report) -> str:
        lines = [
            "=" * 80,
            "CLAIM VERIFICATION REPORT",
            "=" * 80,
            f"Claim: {report.claim_text}",
            f"Claim ID: {report.claim_id} ({report.entity_type})",
            f"Verdict: {VERDICT_LABELS[report.final_verdict]}",
            f"Confidence: {report.confidence_score * 100:.1f}% ({report.confidence_tier})",
            f"Conflict detected: {'yes' if report.conflict_detected else 'no'}",
            "",
            f"Evidence ({len(report.timeline)}):",
        ]
        
        for index, item in enumerate(report.timeline, start=1):
            lines.append(
                f"  {index}. [{item.timestamp.isoformat()}] {item.source} "
                f"({SOURCE_TYPE_LABELS[item.source_type]}) - "
                f"{VERDICT_LABELS[item.verdict]}, {item.confidence_score * 100:.1f}%"
            )
            if item.title:
                lines.append(f"     Title: {item.title}")
            if item.summary:
                lines.append(f"     Summary: {item.summary}")
        
        if report.skipped_evidence:
            lines.append("")
            lines.append(f"Skipped evidence ({len(report.skipped_evidence)}):")
            for skipped in report.skipped_evidence:
                lines.append(f"  #{skipped.index}: {skipped.reason}")
        
        if report.confidence_breakdown:
            lines.append("")
            lines.append("Confidence breakdown:")
            for entry in report.confidence_breakdown:
                lines.append(
                    f"  {SOURCE_TYPE_LABELS[entry.source_type]}: weight {entry.weight:.2f}, "
                    f"mean score {entry.score * 100:.1f}%, "
                    f"contribution {entry.contribution * 100:.1f}%"
                )
        
        lines.extend(["", "Explanation:", report.explanation, "-" * 80])
        return "\n".join(lines)
    
    def export(self, report: Report, fmt: str = "json") -> Union[str, Dict[str, str]]:
        if fmt == "json":
            return self.to_json(report)
        elif fmt == "text":
            return self.to_text(report)
        elif fmt == "both":
            return {"json": self.to_json(report), "text": self.to_text(report)}
        raise UnsupportedFormat(fmt)
    
    def export_batch(self, reports: Sequence[Report], fmt: str = "json") -> Union[str, Dict[str, str]]:
        if fmt not in EXPORT_FORMATS:
            raise UnsupportedFormat(fmt)
        
        as_json = _REPORT_LIST.dump_json(list(reports), indent=2).decode("utf-8")
        as_text = "\n\n".join(self.to_text(r) for r in reports)
        
        if fmt == "json":
            return as_json
        elif fmt == "text":
            return as_text
        return {"json": as_json, "text": as_text}
    
    @staticmethod
    def reports_from_json(payload: Union[str, bytes]) -> List[Report]:
        return _REPORT_LIST.validate_json(payload)
    
    @staticmethod
    def summarize_batch(reports: Sequence[Report]) -> BatchSummary:
        if not reports:
            return BatchSummary(total_claims=0, total_evidence=0, average_confidence=0.0)
        
        counts = {v: 0 for v in Verdict}
        for report in reports:
            counts[report.final_verdict] += 1
        
        return BatchSummary(
            total_claims=len(reports),
            total_evidence=sum(len(r.evidence) for r in reports),
            average_confidence=sum(r.confidence_score for r in reports) / len(reports),
            verdict_counts={v: c for v, c in counts.items() if c},
        )
