"""
Severity and confidence classification.

Both are order-independent reductions over the matched records.
"""

from collections.abc import Iterable

from supp_ix.schemas import ConfidenceTier, InteractionRecord, Severity

# Raw provider labels -> verdict. MAJOR is the provider's alias for HIGH.
SEVERITY_ALIASES: dict[str, Severity] = {
    "LOW": Severity.LOW,
    "MODERATE": Severity.MODERATE,
    "HIGH": Severity.HIGH,
    "MAJOR": Severity.HIGH,
    "CRITICAL": Severity.CRITICAL,
}

SEVERITY_RANK: dict[Severity, int] = {
    Severity.UNKNOWN: 0,
    Severity.LOW: 1,
    Severity.MODERATE: 2,
    Severity.HIGH: 3,
    Severity.CRITICAL: 4,
}

HIGH_CONFIDENCE_REPORTS = 10


def parse_severity(label: str | None) -> Severity:
    """Map a raw severity label to a verdict; unknown labels count as LOW."""
    if not label:
        return Severity.LOW
    return SEVERITY_ALIASES.get(label.strip().upper(), Severity.LOW)


def classify_severity(records: Iterable[InteractionRecord]) -> Severity:
    """
    Highest severity across records.

    CRITICAL > HIGH (= MAJOR) > MODERATE > LOW. Empty input is LOW.
    """
    return max(
        (parse_severity(r.severity) for r in records),
        key=SEVERITY_RANK.__getitem__,
        default=Severity.LOW,
    )


def confidence_tier(report_count: int) -> ConfidenceTier:
    """Confidence from summed FAERS report count: >10 high, >0 medium, else low."""
    if report_count > HIGH_CONFIDENCE_REPORTS:
        return ConfidenceTier.HIGH
    if report_count > 0:
        return ConfidenceTier.MEDIUM
    return ConfidenceTier.LOW
