"""
CYP450 pathway conflict detection.

A drug and a compound that share a CYP450 enzyme (the drug is metabolized
by, inhibits, or induces it, and the compound acts on it) have a plausible
metabolic interaction mechanism.
"""

from dataclasses import dataclass

from supp_ix.client import VaultClient
from supp_ix.schemas import CompoundDetail, DrugProfile
from supp_ix.synthesis.collect import fetch_compound_detail


@dataclass(frozen=True)
class PathwayConflict:
    """Shared CYP450 pathways, sorted and de-duplicated."""
    shared_pathways: tuple[str, ...]

    def __post_init__(self):
        if not self.shared_pathways:
            raise ValueError("PathwayConflict requires at least one shared pathway")

    def label(self) -> str:
        return ", ".join(self.shared_pathways)


def find_shared_pathways(
    profile: DrugProfile | None,
    detail: CompoundDetail | None,
) -> PathwayConflict | None:
    """
    Intersect the drug's pathways (metabolized_by | inhibits | induces)
    with the compound's pathways.

    Returns:
        PathwayConflict, or None if either side is missing or nothing is shared
    """
    if profile is None or detail is None:
        return None
    cyps = profile.cyp_pathways
    if cyps is None:
        return None

    shared = cyps.all_pathways() & detail.cyp_pathways
    if not shared:
        return None
    return PathwayConflict(shared_pathways=tuple(sorted(shared)))


async def detect_conflict(
    client: VaultClient,
    profile: DrugProfile | None,
    compound_id: str,
) -> PathwayConflict | None:
    """
    Detect a CYP450 conflict between a drug profile and a compound.

    No request is made when the drug profile is unknown. The compound
    detail lookup is best-effort.
    """
    if profile is None or profile.cyp_pathways is None:
        return None
    detail = await fetch_compound_detail(client, compound_id)
    return find_shared_pathways(profile, detail)
