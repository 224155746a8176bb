"""
Evidence bundling.

Structured, source-attributed view of the same evidence the narrative
uses: one item per FAERS record, one per research record, and at most one
CYP450 pathway conflict.
"""

import json
from dataclasses import dataclass, field
from enum import Enum

from supp_ix.schemas import InteractionRecord
from supp_ix.synthesis.collect import CollectedEvidence, ResolutionFailure
from supp_ix.synthesis.pathways import PathwayConflict

FAERS_SOURCE = "FDA FAERS"
FAERS_CAVEAT = "FAERS reports are voluntary and do not prove causation."
RESEARCH_SOURCE = "Research"
RESEARCH_FALLBACK = "Interaction documented"
NOT_GRADED = "not_graded"
CYP_SOURCE = "FDA drug label + compound data"
CYP_SIGNIFICANCE = "Shared CYP pathways may alter drug metabolism."


class EvidenceType(str, Enum):
    FAERS_SIGNAL = "FAERS_SIGNAL"
    RESEARCH_FINDING = "RESEARCH_FINDING"
    CYP_PATHWAY_CONFLICT = "CYP_PATHWAY_CONFLICT"


@dataclass
class FAERSSignalItem:
    """Adverse event report count from FAERS."""
    severity: str | None
    report_count: int
    signal_score: float | None = None
    source: str = FAERS_SOURCE
    caveat: str = FAERS_CAVEAT
    type: EvidenceType = EvidenceType.FAERS_SIGNAL

    @property
    def description(self) -> str:
        return f"{self.report_count} serious adverse event reports"

    def to_dict(self) -> dict:
        """
        JSON-serializable item. signal_score is left out when the record has
        no combined_confidence, whether the provider omitted it or sent null.
        """
        item = {
            "type": self.type.value,
            "source": self.source,
            "description": self.description,
            "severity": self.severity,
            "report_count": self.report_count,
            "signal_score": self.signal_score,
            "caveat": self.caveat,
        }
        if self.signal_score is None:
            del item["signal_score"]
        return item


@dataclass
class ResearchFindingItem:
    """Literature or mechanistic finding."""
    source: str
    description: str
    severity: str | None
    evidence_grade: str = NOT_GRADED
    recommendation: str | None = None
    type: EvidenceType = EvidenceType.RESEARCH_FINDING

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "source": self.source,
            "description": self.description,
            "severity": self.severity,
            "evidence_grade": self.evidence_grade,
            "recommendation": self.recommendation,
        }


@dataclass
class PathwayConflictItem:
    """Shared CYP450 pathways between drug and compound."""
    shared_pathways: list[str]
    source: str = CYP_SOURCE
    clinical_significance: str = CYP_SIGNIFICANCE
    type: EvidenceType = EvidenceType.CYP_PATHWAY_CONFLICT

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "source": self.source,
            "shared_pathways": list(self.shared_pathways),
            "clinical_significance": self.clinical_significance,
        }


EvidenceItem = FAERSSignalItem | ResearchFindingItem | PathwayConflictItem


@dataclass
class EvidenceBundle:
    """Evidence items for a supplement/drug pair."""
    supplement: str
    drug: str
    resolved_compound: str | None = None
    compound_name: str | None = None
    evidence_items: list[EvidenceItem] = field(default_factory=list)
    error: str | None = None

    @property
    def total_evidence_count(self) -> int:
        return len(self.evidence_items)

    @property
    def evidence_types(self) -> list[str]:
        """Distinct item types in first-appearance order."""
        return list(dict.fromkeys(item.type.value for item in self.evidence_items))

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        items = [item.to_dict() for item in self.evidence_items]
        if self.error is not None:
            return {
                "supplement": self.supplement,
                "drug": self.drug,
                "evidence_items": items,
                "error": self.error,
            }
        return {
            "supplement": self.supplement,
            "drug": self.drug,
            "resolved_compound": self.resolved_compound,
            "compound_name": self.compound_name,
            "evidence_items": items,
            "total_evidence_count": self.total_evidence_count,
            "evidence_types": self.evidence_types,
        }

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=2)


def faers_item(record: InteractionRecord) -> FAERSSignalItem:
    return FAERSSignalItem(
        severity=record.severity,
        report_count=record.report_count,
        signal_score=record.combined_confidence,
    )


def research_item(record: InteractionRecord) -> ResearchFindingItem:
    return ResearchFindingItem(
        source=record.source_origin or RESEARCH_SOURCE,
        description=record.mechanism or record.description or RESEARCH_FALLBACK,
        severity=record.severity,
        evidence_grade=record.evidence_grade or NOT_GRADED,
        recommendation=record.recommendation or None,
    )


def bundle_evidence(
    collected: CollectedEvidence | ResolutionFailure,
    conflict: PathwayConflict | None,
) -> EvidenceBundle:
    """
    Build the structured evidence bundle.

    Args:
        collected: Output of collect_evidence
        conflict: Output of detect_conflict

    Returns:
        EvidenceBundle; on resolution failure it carries an error and no items
    """
    if isinstance(collected, ResolutionFailure):
        return EvidenceBundle(
            supplement=collected.query,
            drug=collected.drug,
            error=collected.message,
        )

    items: list[EvidenceItem] = [faers_item(r) for r in collected.regulatory]
    items.extend(research_item(r) for r in collected.research)
    if conflict is not None:
        items.append(PathwayConflictItem(shared_pathways=list(conflict.shared_pathways)))

    return EvidenceBundle(
        supplement=collected.supplement,
        drug=collected.drug,
        resolved_compound=collected.compound_id,
        compound_name=collected.compound_name,
        evidence_items=items,
    )
