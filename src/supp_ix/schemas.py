"""
Pydantic schemas for compound data provider payloads.

Provider JSON is validated here once; synthesis code only ever sees these
models, never raw dicts.
"""

from enum import Enum
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

# source_origin value that marks a passive adverse-event report (FAERS via openFDA)
REGULATORY_ORIGIN = "OPENFDA"


class Severity(str, Enum):
    """Ordinal interaction severity."""
    UNKNOWN = "UNKNOWN"
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ConfidenceTier(str, Enum):
    """Confidence in a verdict, driven by regulatory report volume."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def _none_to_list(value: Any) -> Any:
    return [] if value is None else value


# Provider sends null for empty lists
PathwayList = Annotated[list[str], BeforeValidator(_none_to_list)]


class _ProviderModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class InteractionMetadata(_ProviderModel):
    """Per-record metadata block."""
    report_count: int | None = Field(None, ge=0, description="FAERS report count")


class InteractionRecord(_ProviderModel):
    """One interaction between a compound and a target (usually a drug)."""
    target_id: str | None = None
    target_name: str | None = None
    severity: str | None = Field(None, description="LOW, MODERATE, HIGH, MAJOR or CRITICAL")
    source_origin: str | None = None
    mechanism: str | None = None
    description: str | None = None
    recommendation: str | None = None
    evidence_grade: str | None = None
    metadata: InteractionMetadata = Field(default_factory=InteractionMetadata)
    combined_confidence: float | None = None

    @field_validator("metadata", mode="before")
    @classmethod
    def _empty_metadata(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def is_regulatory(self) -> bool:
        return self.source_origin == REGULATORY_ORIGIN

    @property
    def report_count(self) -> int:
        return self.metadata.report_count or 0

    def matches_drug(self, drug: str) -> bool:
        """Case-insensitive substring match on target id or name."""
        needle = drug.lower()
        return any(
            value is not None and needle in value.lower()
            for value in (self.target_id, self.target_name)
        )


class CompoundSummary(_ProviderModel):
    """Compound search hit."""
    model_config = ConfigDict(extra="allow")

    compound_id: str
    name: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def _null_name(cls, value: Any) -> Any:
        return "" if value is None else value

    @model_validator(mode="after")
    def _default_name(self) -> "CompoundSummary":
        if not self.name:
            self.name = self.compound_id
        return self


class CompoundSearchResponse(_ProviderModel):
    results: Annotated[list[CompoundSummary], BeforeValidator(_none_to_list)] = Field(
        default_factory=list
    )


class InteractionsResponse(_ProviderModel):
    interactions: Annotated[list[InteractionRecord], BeforeValidator(_none_to_list)] = Field(
        default_factory=list
    )


class DrugCypPathways(_ProviderModel):
    """CYP450 involvement of a drug."""
    metabolized_by: PathwayList = Field(default_factory=list)
    inhibits: PathwayList = Field(default_factory=list)
    induces: PathwayList = Field(default_factory=list)

    def all_pathways(self) -> set[str]:
        return set(self.metabolized_by) | set(self.inhibits) | set(self.induces)


class DrugProfileBody(_ProviderModel):
    cyp_pathways: DrugCypPathways | None = None


class DrugProfile(_ProviderModel):
    """Drug metabolic profile, keyed by normalized drug name."""
    profile: DrugProfileBody | None = None

    @property
    def cyp_pathways(self) -> DrugCypPathways | None:
        return self.profile.cyp_pathways if self.profile else None


class CompoundData(_ProviderModel):
    cyp_pathways: PathwayList = Field(default_factory=list)


class CompoundBody(_ProviderModel):
    model_config = ConfigDict(extra="allow")

    data: CompoundData = Field(default_factory=CompoundData)

    @field_validator("data", mode="before")
    @classmethod
    def _empty_data(cls, value: Any) -> Any:
        return {} if value is None else value


class CompoundDetail(_ProviderModel):
    """Full compound record; only CYP pathways are used by synthesis."""
    compound: CompoundBody | None = None

    @property
    def cyp_pathways(self) -> set[str]:
        return set(self.compound.data.cyp_pathways) if self.compound else set()
