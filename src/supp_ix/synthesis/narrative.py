"""
Narrative synthesis.

Renders classified evidence as a short, ordered explanation:

    header -> severity -> FAERS count -> CYP mechanism -> research -> recommendation

Clauses with no contributing data are left out.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass

from supp_ix.schemas import ConfidenceTier, Severity
from supp_ix.synthesis.collect import CollectedEvidence, ResolutionFailure
from supp_ix.synthesis.pathways import PathwayConflict
from supp_ix.synthesis.severity import confidence_tier


@dataclass
class InteractionExplanation:
    """Human-readable explanation of a supplement/drug interaction."""
    supplement: str
    drug: str
    explanation: str
    severity: Severity
    confidence: ConfidenceTier
    resolved_compound: str | None = None
    compound_name: str | None = None
    evidence_count: int | None = None
    faers_report_count: int | None = None
    has_cyp_conflict: bool | None = None

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict, omitting fields the branch does not set."""
        result = {
            "supplement": self.supplement,
            "drug": self.drug,
            "resolved_compound": self.resolved_compound,
            "compound_name": self.compound_name,
            "severity": self.severity.value,
            "explanation": self.explanation,
            "confidence": self.confidence.value,
            "evidence_count": self.evidence_count,
            "faers_report_count": self.faers_report_count,
            "has_cyp_conflict": self.has_cyp_conflict,
        }
        return {k: v for k, v in result.items() if v is not None}

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=2)


def _distinct(texts: Iterable[str | None]) -> list[str]:
    """Non-empty strings, de-duplicated, first occurrence wins."""
    return list(dict.fromkeys(t for t in texts if t))


def _no_interaction_text(compound_name: str, drug: str) -> str:
    return (
        f"No known interactions found between {compound_name} and {drug}. "
        "This does not guarantee safety."
    )


def build_clauses(
    collected: CollectedEvidence,
    severity: Severity,
    conflict: PathwayConflict | None,
) -> list[str]:
    """Ordered narrative clauses for a resolved pair with some evidence."""
    name, drug = collected.compound_name, collected.drug
    clauses = [
        f"Interaction between {name} and {drug}:",
        f"Severity: {severity.value}",
    ]

    reports = collected.total_report_count
    if reports > 0:
        clauses.append(f"FDA Adverse Event Reports: {reports} serious report(s) in FAERS.")

    if conflict is not None:
        clauses.append(
            f"Mechanism: Shared CYP450 pathway(s): {conflict.label()}. "
            f"{name} may alter how {drug} is metabolized."
        )

    findings = _distinct(r.mechanism or r.description for r in collected.research)
    if findings:
        clauses.append(f"Research: {'. '.join(findings)}")

    recommendations = _distinct(r.recommendation for r in collected.interactions)
    if recommendations:
        clauses.append(f"Recommendation: {'. '.join(recommendations)}")

    return clauses


def synthesize_narrative(
    collected: CollectedEvidence | ResolutionFailure,
    severity: Severity,
    conflict: PathwayConflict | None,
) -> InteractionExplanation:
    """
    Render collected evidence as an explanation.

    Args:
        collected: Output of collect_evidence
        severity: Output of classify_severity over collected.interactions
        conflict: Output of detect_conflict

    Returns:
        InteractionExplanation (always well-formed, even with no evidence)
    """
    if isinstance(collected, ResolutionFailure):
        return InteractionExplanation(
            supplement=collected.query,
            drug=collected.drug,
            explanation=collected.message,
            severity=Severity.UNKNOWN,
            confidence=ConfidenceTier.LOW,
        )

    if not collected.interactions and conflict is None:
        return InteractionExplanation(
            supplement=collected.supplement,
            drug=collected.drug,
            resolved_compound=collected.compound_id,
            explanation=_no_interaction_text(collected.compound_name, collected.drug),
            severity=Severity.LOW,
            confidence=ConfidenceTier.LOW,
            evidence_count=0,
        )

    reports = collected.total_report_count
    return InteractionExplanation(
        supplement=collected.supplement,
        drug=collected.drug,
        resolved_compound=collected.compound_id,
        compound_name=collected.compound_name,
        severity=severity,
        explanation="\n\n".join(build_clauses(collected, severity, conflict)),
        confidence=confidence_tier(reports),
        evidence_count=len(collected.interactions),
        faers_report_count=reports,
        has_cyp_conflict=conflict is not None,
    )
