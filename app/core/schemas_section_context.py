"""Pydantic schemas for section context aggregation and prompt composition."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class AssistantMode(str, Enum):
    """Generation strategy for a document field."""

    DOCUMENT_COMPLETION = "document_completion"
    INDUSTRY_RESEARCH = "industry_research"
    REGULATORY_GUIDANCE = "regulatory_guidance"
    AGENT_MODE = "agent_mode"


class MemorySubtype(str, Enum):
    """Which memory sub-query produced a match."""

    SECTION_MEMORY = "section_memory"
    ENTITY_FACT = "entity_fact"
    TONE_REFERENCE = "tone_reference"


class RequiredAttribute(BaseModel):
    """A business-record attribute a field needs, with its human label."""

    column: str
    label: str


class FieldDescriptor(BaseModel):
    """Registry entry for one document field."""

    field_key: str
    section_label: str
    mode: AssistantMode
    required_business_attributes: list[RequiredAttribute] = Field(default_factory=list)


class ConflictRecord(BaseModel):
    """Disagreement between two sources for one field (not yet produced)."""

    field: str
    value_a: Any = None
    value_b: Any = None
    source: str


class MemoryMetadata(BaseModel):
    """Metadata stored alongside a memory entry."""

    entity_id: str | None = None
    document_id: str | None = None
    section_key: str | None = None
    type: str | None = None
    scope: str | None = None
    created_at: str | None = None


class MemoryEntry(BaseModel):
    """A stored long-term memory fact."""

    id: str | None = None
    content: str
    metadata: MemoryMetadata = Field(default_factory=MemoryMetadata)


class MemoryMatch(MemoryEntry):
    """A ranked memory match returned by search."""

    score: float | None = None
    subtype: MemorySubtype | None = None


class UploadMatch(BaseModel):
    """A knowledge-vault document judged relevant to a field."""

    id: str | None = None
    name: str = ""
    category: str | None = None
    type: str | None = None
    description: str | None = None


class DirectorRecord(BaseModel):
    """One board member taken from the numbered director slots of a business record."""

    position: int = Field(..., ge=1)
    name: str
    title: str | None = None
    nationality: str | None = None
    date_of_birth: str | None = None
    shareholding: str | None = None
    other_directorships: str | None = None


class StructuredData(BaseModel):
    """Three-tier structured snapshot, highest priority first."""

    issuer: dict[str, Any] | None = None
    listing: dict[str, Any] | None = None
    document_fields: dict[str, Any] = Field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.issuer and not self.listing and not self.document_fields


class SectionContext(BaseModel):
    """Everything gathered for one field before prompt composition."""

    field_key: str
    section_label: str
    structured_data: StructuredData = Field(default_factory=StructuredData)
    upload_matches: list[UploadMatch] = Field(default_factory=list)
    memory_results: list[MemoryMatch] = Field(default_factory=list)
    mode: AssistantMode = AssistantMode.AGENT_MODE
    source_trace: list[str] = Field(default_factory=list)
    missing_flags: list[str] = Field(default_factory=list)
    conflicts: list[ConflictRecord] = Field(default_factory=list)


class PromptComposition(BaseModel):
    """Rendered prompt plus diagnostics."""

    prompt: str
    mode: AssistantMode
    context_summary: str
    missing_data_notice: str | None = None
    upload_recommendation: str | None = None
