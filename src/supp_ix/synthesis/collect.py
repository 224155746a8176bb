"""
Evidence collection.

Resolve a supplement to a compound, gather its interactions against one
drug, and fetch the drug's metabolic profile. Shared by the narrative and
bundle views so both see the same records.
"""

import logging
import re
from dataclasses import dataclass, field

from supp_ix.client import VaultClient, gather_or_cancel
from supp_ix.errors import NotFoundError, VaultError
from supp_ix.schemas import CompoundDetail, CompoundSummary, DrugProfile, InteractionRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionFailure:
    """Supplement name did not match any compound."""
    query: str
    drug: str

    @property
    def message(self) -> str:
        return f'Could not resolve "{self.query}".'


@dataclass(frozen=True)
class CollectedEvidence:
    """Everything fetched for one supplement/drug pair."""
    supplement: str
    drug: str
    compound: CompoundSummary
    interactions: list[InteractionRecord] = field(default_factory=list)
    drug_profile: DrugProfile | None = None

    @property
    def compound_id(self) -> str:
        return self.compound.compound_id

    @property
    def compound_name(self) -> str:
        return self.compound.name

    @property
    def regulatory(self) -> list[InteractionRecord]:
        """FAERS-origin records."""
        return [r for r in self.interactions if r.is_regulatory]

    @property
    def research(self) -> list[InteractionRecord]:
        """Literature/mechanistic records (everything not FAERS)."""
        return [r for r in self.interactions if not r.is_regulatory]

    @property
    def total_report_count(self) -> int:
        return sum(r.report_count for r in self.regulatory)


def normalize_drug_key(drug: str) -> str:
    """Drug profile key: lower-cased, whitespace runs collapsed to underscores."""
    return re.sub(r"\s+", "_", drug.lower())


def filter_interactions(records: list[InteractionRecord], drug: str) -> list[InteractionRecord]:
    """
    Keep records whose target id or name contains the drug name.

    Substring matching tolerates brand/generic naming variance but can
    over-match short names ("statin" matches "rosuvastatin").
    """
    return [r for r in records if r.matches_drug(drug)]


async def fetch_drug_profile(client: VaultClient, drug: str) -> DrugProfile | None:
    """Best-effort drug profile lookup; None when unknown or unreachable."""
    key = normalize_drug_key(drug)
    try:
        return await client.get_drug_profile(key)
    except NotFoundError:
        logger.debug("No drug profile for %r", key)
    except VaultError as e:
        logger.warning("Drug profile lookup failed for %r: %s", key, e)
    return None


async def fetch_compound_detail(client: VaultClient, compound_id: str) -> CompoundDetail | None:
    """Best-effort compound detail lookup; None when unknown or unreachable."""
    try:
        return await client.get_compound_detail(compound_id)
    except NotFoundError:
        logger.debug("No compound detail for %r", compound_id)
    except VaultError as e:
        logger.warning("Compound detail lookup failed for %r: %s", compound_id, e)
    return None


async def collect_evidence(
    client: VaultClient,
    supplement: str,
    drug: str,
) -> CollectedEvidence | ResolutionFailure:
    """
    Gather interaction evidence for a supplement/drug pair.

    Args:
        client: Provider client
        supplement: Supplement name as typed by the user
        drug: Drug name (generic or brand)

    Returns:
        CollectedEvidence, or ResolutionFailure if the supplement is unknown

    Raises:
        VaultError: compound search or interaction lookup failed
    """
    search = await client.search_compounds(supplement, limit=1)
    if not search.results:
        logger.info("Could not resolve supplement %r", supplement)
        return ResolutionFailure(query=supplement, drug=drug)

    compound = search.results[0]
    # Independent fetches: interactions are required, the profile is optional.
    # A failed interaction lookup cancels the pending profile lookup.
    interactions, profile = await gather_or_cancel(
        client.get_compound_interactions(compound.compound_id),
        fetch_drug_profile(client, drug),
    )
    matched = filter_interactions(interactions.interactions, drug)
    logger.debug(
        "%s: %d/%d interactions match %r",
        compound.compound_id,
        len(matched),
        len(interactions.interactions),
        drug,
    )

    return CollectedEvidence(
        supplement=supplement,
        drug=drug,
        compound=compound,
        interactions=matched,
        drug_profile=profile,
    )
