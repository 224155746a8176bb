"""
supp_ix: Supplement-Drug Interaction Evidence Synthesis

Merges interaction evidence about a supplement/drug pair from a remote
compound data provider into two views over the same verdict:

    explain_interaction → human-readable narrative + severity + confidence
    get_evidence        → structured, source-attributed evidence bundle

Core constraints:
- Each synthesis is a pure function of the fetched records (no caching, no state)
- Drug profile and compound detail lookups are best-effort (absence is valid)
- Severity and CYP450 conflict verdicts never diverge between the two views
"""

__version__ = "0.1.0"
