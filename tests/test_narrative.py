"""Tests for narrative synthesis."""

from supp_ix.schemas import CompoundSummary, DrugProfile, InteractionRecord, Severity
from supp_ix.synthesis import (
    CollectedEvidence,
    PathwayConflict,
    ResolutionFailure,
    build_clauses,
    classify_severity,
    synthesize_narrative,
)

COMPOUND = CompoundSummary(compound_id="ginkgo", name="Ginkgo Biloba")


def _collected(*records, profile=None) -> CollectedEvidence:
    return CollectedEvidence(
        supplement="ginkgo",
        drug="warfarin",
        compound=COMPOUND,
        interactions=[InteractionRecord.model_validate(r) for r in records],
        drug_profile=profile,
    )


FAERS = {
    "target_id": "warfarin",
    "severity": "MODERATE",
    "source_origin": "OPENFDA",
    "metadata": {"report_count": 15},
}
RESEARCH = {
    "target_id": "warfarin",
    "severity": "CRITICAL",
    "source_origin": "PUBMED",
    "mechanism": "Inhibits platelet-activating factor",
    "recommendation": "Avoid combination",
}


class TestResolutionFailure:
    """Unresolved supplement names."""

    def test_explanation_names_query(self):
        result = synthesize_narrative(
            ResolutionFailure(query="gingko bilboa", drug="warfarin"), Severity.UNKNOWN, None
        ).to_dict()
        assert result == {
            "supplement": "gingko bilboa",
            "drug": "warfarin",
            "severity": "UNKNOWN",
            "explanation": 'Could not resolve "gingko bilboa".',
            "confidence": "low",
        }


class TestNoEvidence:
    """Resolved compound with nothing matched."""

    def test_no_known_interactions(self):
        result = synthesize_narrative(_collected(), Severity.LOW, None).to_dict()
        assert result["severity"] == "LOW"
        assert result["confidence"] == "low"
        assert result["evidence_count"] == 0
        assert result["resolved_compound"] == "ginkgo"
        assert "No known interactions found between Ginkgo Biloba and warfarin" in (
            result["explanation"]
        )
        assert "does not guarantee safety" in result["explanation"]
        assert "has_cyp_conflict" not in result

    def test_profile_without_conflict_is_still_no_evidence(self):
        profile = DrugProfile.model_validate({"profile": {"cyp_pathways": {"induces": ["CYP2D6"]}}})
        result = synthesize_narrative(_collected(profile=profile), Severity.LOW, None)
        assert result.evidence_count == 0
        assert result.explanation.startswith("No known interactions")


class TestFullNarrative:
    """Resolved compound with evidence."""

    def test_scenario_critical_high_confidence(self):
        collected = _collected(FAERS, RESEARCH)
        severity = classify_severity(collected.interactions)
        result = synthesize_narrative(collected, severity, None).to_dict()
        assert result["severity"] == "CRITICAL"
        assert result["confidence"] == "high"
        assert result["evidence_count"] == 2
        assert result["faers_report_count"] == 15
        assert result["has_cyp_conflict"] is False
        assert result["compound_name"] == "Ginkgo Biloba"

    def test_clause_order(self):
        collected = _collected(FAERS, RESEARCH)
        conflict = PathwayConflict(shared_pathways=("CYP2C9", "CYP3A4"))
        clauses = build_clauses(collected, Severity.CRITICAL, conflict)
        assert clauses == [
            "Interaction between Ginkgo Biloba and warfarin:",
            "Severity: CRITICAL",
            "FDA Adverse Event Reports: 15 serious report(s) in FAERS.",
            "Mechanism: Shared CYP450 pathway(s): CYP2C9, CYP3A4. "
            "Ginkgo Biloba may alter how warfarin is metabolized.",
            "Research: Inhibits platelet-activating factor",
            "Recommendation: Avoid combination",
        ]

    def test_explanation_joined_by_blank_lines(self):
        result = synthesize_narrative(_collected(RESEARCH), Severity.CRITICAL, None)
        assert result.explanation.split("\n\n") == [
            "Interaction between Ginkgo Biloba and warfarin:",
            "Severity: CRITICAL",
            "Research: Inhibits platelet-activating factor",
            "Recommendation: Avoid combination",
        ]

    def test_empty_clauses_omitted(self):
        record = {"target_id": "warfarin", "severity": "LOW", "source_origin": "OPENFDA"}
        clauses = build_clauses(_collected(record), Severity.LOW, None)
        assert clauses == ["Interaction between Ginkgo Biloba and warfarin:", "Severity: LOW"]

    def test_research_and_recommendations_deduplicated(self):
        duplicate = dict(RESEARCH, source_origin="NATMED")
        described = {
            "target_id": "warfarin",
            "description": "Case reports of bleeding",
            "recommendation": "Monitor INR",
        }
        clauses = build_clauses(
            _collected(RESEARCH, duplicate, described), Severity.CRITICAL, None
        )
        assert clauses[-2] == (
            "Research: Inhibits platelet-activating factor. Case reports of bleeding"
        )
        assert clauses[-1] == "Recommendation: Avoid combination. Monitor INR"

    def test_conflict_only(self):
        conflict = PathwayConflict(shared_pathways=("CYP3A4",))
        result = synthesize_narrative(_collected(), Severity.LOW, conflict).to_dict()
        assert result["has_cyp_conflict"] is True
        assert result["evidence_count"] == 0
        assert result["confidence"] == "low"
        assert "Shared CYP450 pathway(s): CYP3A4" in result["explanation"]

    def test_idempotent(self):
        collected = _collected(FAERS, RESEARCH)
        conflict = PathwayConflict(shared_pathways=("CYP3A4",))
        first = synthesize_narrative(collected, Severity.CRITICAL, conflict).to_json()
        second = synthesize_narrative(collected, Severity.CRITICAL, conflict).to_json()
        assert first == second
