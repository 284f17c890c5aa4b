"""Pydantic schemas for the three-stage document generation pipeline."""

from pydantic import BaseModel, Field


class GeneratedSection(BaseModel):
    """One section flowing through the pipeline.

    template_name is the identity across stages; content is replaced by each stage.
    """

    template_name: str
    title: str
    content: str
    instructions: str | None = None


class GenerationParams(BaseModel):
    """Input to a pipeline run."""

    document_id: str = Field(..., description="Listing document id (instrumentid)")
    entity_id: str = Field(..., description="Business record id (issuer id)")
    sections: list[str] = Field(..., min_length=1, description='Section types, e.g. ["sec1prompt"]')
    selected_documents: list[str] = Field(default_factory=list, description="Knowledge-vault document ids")


class StageOutput(BaseModel):
    """Output handed from one pipeline stage to the next."""

    document_id: str
    entity_id: str
    sections: list[GeneratedSection] = Field(default_factory=list)
    skipped_templates: list[str] = Field(default_factory=list)


class PipelineOutput(BaseModel):
    """Final result of a pipeline run."""

    document_id: str
    entity_id: str
    sections: list[GeneratedSection] = Field(default_factory=list)
    skipped_templates: list[str] = Field(default_factory=list)


class TemplateValidation(BaseModel):
    """Which template names map onto live document columns."""

    valid_templates: list[str] = Field(default_factory=list)
    invalid_templates: list[str] = Field(default_factory=list)
    column_mapping: dict[str, str] = Field(default_factory=dict)


class SaveResult(BaseModel):
    """Outcome of persisting generated sections."""

    success: bool
    sections_processed: int = 0
    columns_updated: list[str] = Field(default_factory=list)
    skipped_sections: list[str] = Field(default_factory=list)
    error: str | None = None
