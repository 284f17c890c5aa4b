"""API endpoints for listing document generation."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from app.api.dependencies import get_orchestrator, get_output_handler
from app.api.errors import to_http_exception
from app.core.errors import DocumentEngineError
from app.core.logging import get_logger
from app.core.schemas_document_generation import (
    GeneratedSection,
    GenerationParams,
    SaveResult,
    TemplateValidation,
)
from app.graphs.document_generation_graph import DocumentGenerationOrchestrator
from app.services.document_output import DocumentOutputHandler, sort_sections

logger = get_logger(__name__)

router = APIRouter()


class GenerateDocumentResponse(BaseModel):
    """Response for a document generation run."""

    document_id: str
    entity_id: str
    sections: list[GeneratedSection] = Field(default_factory=list)
    skipped_templates: list[str] = Field(default_factory=list)
    save_result: SaveResult


class ValidateTemplatesRequest(BaseModel):
    template_names: list[str] = Field(..., min_length=1, description="Template names to check")


@router.post("/generate", response_model=GenerateDocumentResponse)
async def generate_document_api(
    request: GenerationParams,
    orchestrator: DocumentGenerationOrchestrator = Depends(get_orchestrator),
    output_handler: DocumentOutputHandler = Depends(get_output_handler),
) -> GenerateDocumentResponse:
    """
    Generate document sections and save them to the listing document.

    This endpoint:
    1. Extracts the templates for the requested section types
    2. Rewrites them for compliance
    3. Completes them with issuer and listing data
    4. Saves them to the document row in canonical order

    Raises:
        HTTPException 404: If the listing or issuer does not exist
        HTTPException 500: If generation fails or the sections cannot be saved
    """
    try:
        output = await orchestrator.generate(request)
        save_result = await output_handler.persist(output)
    except DocumentEngineError as e:
        logger.error(f"Document generation failed: {e}", extra={"document_id": request.document_id})
        raise to_http_exception(e) from e

    if not save_result.success:
        logger.error(f"Saving generated sections failed: {save_result.error}", extra={"document_id": request.document_id})
        raise HTTPException(status_code=500, detail=f"Failed to save generated sections: {save_result.error}")

    return GenerateDocumentResponse(
        document_id=output.document_id,
        entity_id=output.entity_id,
        sections=sort_sections(output.sections),
        skipped_templates=output.skipped_templates,
        save_result=save_result,
    )


@router.post("/validate-templates", response_model=TemplateValidation)
async def validate_templates_api(
    request: ValidateTemplatesRequest,
    output_handler: DocumentOutputHandler = Depends(get_output_handler),
) -> TemplateValidation:
    """Report which templates map onto existing document columns."""
    try:
        return await output_handler.validate_templates(request.template_names)
    except DocumentEngineError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception("Template validation failed")
        raise HTTPException(status_code=500, detail="Template validation failed") from e
