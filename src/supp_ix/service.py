"""
Synthesis operations exposed to callers.

Both operations run the same collect -> classify -> detect sequence and
differ only in rendering, so severity and CYP verdicts always agree.
"""

from supp_ix.client import VaultClient
from supp_ix.schemas import Severity
from supp_ix.synthesis import (
    CollectedEvidence,
    PathwayConflict,
    ResolutionFailure,
    bundle_evidence,
    classify_severity,
    collect_evidence,
    detect_conflict,
    synthesize_narrative,
)


async def _gather(
    client: VaultClient,
    supplement: str,
    drug: str,
) -> tuple[CollectedEvidence | ResolutionFailure, Severity, PathwayConflict | None]:
    collected = await collect_evidence(client, supplement, drug)
    if isinstance(collected, ResolutionFailure):
        return collected, Severity.UNKNOWN, None

    severity = classify_severity(collected.interactions)
    conflict = await detect_conflict(client, collected.drug_profile, collected.compound_id)
    return collected, severity, conflict


async def explain_interaction(client: VaultClient, supplement: str, drug: str) -> dict:
    """
    Explain why a supplement/drug pair is (or is not) risky.

    Returns:
        Dict with severity, confidence, explanation and evidence counts
    """
    collected, severity, conflict = await _gather(client, supplement, drug)
    return synthesize_narrative(collected, severity, conflict).to_dict()


async def get_evidence(client: VaultClient, supplement: str, drug: str) -> dict:
    """
    Source-attributed evidence bundle for a supplement/drug pair.

    Returns:
        Dict with evidence_items, total_evidence_count and evidence_types
    """
    collected, _, conflict = await _gather(client, supplement, drug)
    return bundle_evidence(collected, conflict).to_dict()
