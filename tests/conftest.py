"""Pytest configuration and fixtures."""

import pytest

from supp_ix.errors import NotFoundError, VaultError
from supp_ix.schemas import (
    CompoundDetail,
    CompoundSearchResponse,
    DrugProfile,
    InteractionsResponse,
)


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-live",
        action="store_true",
        default=False,
        help="Run tests that call the live compound data API",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "live: mark test as requiring the live API")


def pytest_collection_modifyitems(config, items):
    """Skip live tests unless --run-live is provided."""
    if config.getoption("--run-live"):
        return

    skip_live = pytest.mark.skip(reason="Need --run-live option to run live API tests")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


class FakeVaultClient:
    """In-memory stand-in for VaultClient.

    Args:
        compounds: search query (lower-cased) -> compound summary dict
        interactions: compound_id -> list of raw interaction dicts
        profiles: normalized drug key -> raw drug profile dict
        details: compound_id -> raw compound detail dict
        failures: operation name -> exception to raise
    """

    def __init__(
        self,
        compounds: dict | None = None,
        interactions: dict | None = None,
        profiles: dict | None = None,
        details: dict | None = None,
        failures: dict[str, VaultError] | None = None,
    ):
        self.compounds = compounds or {}
        self.interactions = interactions or {}
        self.profiles = profiles or {}
        self.details = details or {}
        self.failures = failures or {}
        self.calls: list[tuple[str, tuple]] = []

    def _record(self, op: str, *args) -> None:
        self.calls.append((op, args))
        if op in self.failures:
            raise self.failures[op]

    def called(self, op: str) -> list[str]:
        """First argument of each call to op."""
        return [args[0] for name, args in self.calls if name == op]

    def call_args(self, op: str) -> list[tuple]:
        """Full argument tuples of each call to op."""
        return [args for name, args in self.calls if name == op]

    async def search_compounds(self, query: str, limit: int = 10) -> CompoundSearchResponse:
        self._record("search_compounds", query, limit)
        hit = self.compounds.get(query.lower())
        return CompoundSearchResponse.model_validate({"results": [hit] if hit else []})

    async def get_compound_interactions(self, compound_id: str) -> InteractionsResponse:
        self._record("get_compound_interactions", compound_id)
        return InteractionsResponse.model_validate(
            {"interactions": self.interactions.get(compound_id, [])}
        )

    async def get_drug_profile(self, drug_key: str) -> DrugProfile:
        self._record("get_drug_profile", drug_key)
        if drug_key not in self.profiles:
            raise NotFoundError(404, f"Drug {drug_key} not found")
        return DrugProfile.model_validate(self.profiles[drug_key])

    async def get_compound_detail(self, compound_id: str) -> CompoundDetail:
        self._record("get_compound_detail", compound_id)
        if compound_id not in self.details:
            raise NotFoundError(404, f"Compound {compound_id} not found")
        return CompoundDetail.model_validate(self.details[compound_id])


def drug_profile(metabolized_by=(), inhibits=(), induces=()) -> dict:
    """Raw drug profile payload."""
    return {
        "profile": {
            "cyp_pathways": {
                "metabolized_by": list(metabolized_by),
                "inhibits": list(inhibits),
                "induces": list(induces),
            }
        }
    }


def compound_detail(*pathways: str) -> dict:
    """Raw compound detail payload."""
    return {"compound": {"data": {"cyp_pathways": list(pathways)}}}


ST_JOHNS_WORT = {"compound_id": "st_johns_wort", "name": "St. John's Wort"}

SJW_INTERACTIONS = [
    {
        "target_id": "sertraline",
        "target_name": "Sertraline",
        "severity": "MODERATE",
        "source_origin": "OPENFDA",
        "metadata": {"report_count": 15},
        "combined_confidence": 0.72,
    },
    {
        "target_id": "sertraline",
        "target_name": "Sertraline (Zoloft)",
        "severity": "CRITICAL",
        "source_origin": "PUBMED",
        "mechanism": "Additive serotonergic activity may cause serotonin syndrome",
        "recommendation": "Avoid combination",
        "evidence_grade": "B",
    },
    {
        "target_id": "warfarin",
        "target_name": "Warfarin",
        "severity": "HIGH",
        "source_origin": "NATMED",
        "description": "Induces CYP2C9, lowering INR",
        "recommendation": "Monitor INR",
    },
]


@pytest.fixture
def sjw_client() -> FakeVaultClient:
    """St. John's Wort with FAERS + research records against sertraline."""
    return FakeVaultClient(
        compounds={"st johns wort": ST_JOHNS_WORT, "sjw": ST_JOHNS_WORT},
        interactions={"st_johns_wort": SJW_INTERACTIONS},
        profiles={"sertraline": drug_profile(metabolized_by=["CYP3A4", "CYP2C19"])},
        details={"st_johns_wort": compound_detail("CYP3A4", "CYP2C9", "CYP1A2")},
    )
