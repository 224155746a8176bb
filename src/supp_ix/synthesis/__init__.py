"""
Evidence synthesis for supplement/drug pairs.

collect_evidence gathers records once; classify_severity and
detect_conflict derive the verdicts; synthesize_narrative and
bundle_evidence render them.
"""

from supp_ix.synthesis.bundle import (
    EvidenceBundle,
    EvidenceType,
    FAERSSignalItem,
    PathwayConflictItem,
    ResearchFindingItem,
    bundle_evidence,
)
from supp_ix.synthesis.collect import (
    CollectedEvidence,
    ResolutionFailure,
    collect_evidence,
    fetch_compound_detail,
    fetch_drug_profile,
    filter_interactions,
    normalize_drug_key,
)
from supp_ix.synthesis.narrative import (
    InteractionExplanation,
    build_clauses,
    synthesize_narrative,
)
from supp_ix.synthesis.pathways import (
    PathwayConflict,
    detect_conflict,
    find_shared_pathways,
)
from supp_ix.synthesis.severity import (
    classify_severity,
    confidence_tier,
    parse_severity,
)

__all__ = [
    # Collect
    "collect_evidence",
    "filter_interactions",
    "normalize_drug_key",
    "fetch_drug_profile",
    "fetch_compound_detail",
    "CollectedEvidence",
    "ResolutionFailure",
    # Severity
    "classify_severity",
    "confidence_tier",
    "parse_severity",
    # Pathways
    "detect_conflict",
    "find_shared_pathways",
    "PathwayConflict",
    # Narrative
    "synthesize_narrative",
    "build_clauses",
    "InteractionExplanation",
    # Bundle
    "bundle_evidence",
    "EvidenceBundle",
    "EvidenceType",
    "FAERSSignalItem",
    "ResearchFindingItem",
    "PathwayConflictItem",
]
