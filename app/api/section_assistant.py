"""API endpoints for the section assistant and its memory."""

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, model_validator

from app.api.dependencies import get_memory_service, get_section_assistant
from app.api.errors import to_http_exception
from app.chains.section_assistant import AssistantResponse, SectionAssistant
from app.context.prompt_composer import compose_prompt
from app.core.errors import DocumentEngineError
from app.core.logging import get_logger
from app.core.memory_service import MemoryService
from app.core.schemas_section_context import PromptComposition, SectionContext

logger = get_logger(__name__)

router = APIRouter()


class SectionRequest(BaseModel):
    """A user request about one listing document field."""

    user_prompt: str = Field(..., min_length=1)
    document_id: str = Field(..., min_length=1, description="Listing instrument id")
    field_key: str | None = Field(None, description="Document field; inferred or general when omitted")


class SectionContextResponse(BaseModel):
    context: SectionContext
    composition: PromptComposition


class StoreMemoryRequest(BaseModel):
    kind: Literal["section_completion", "entity_fact", "tone_reference"]
    entity_id: str
    content: str = Field(..., min_length=1)
    document_id: str | None = None
    section_key: str | None = None

    @model_validator(mode="after")
    def _section_fields(self) -> "StoreMemoryRequest":
        if self.kind == "section_completion" and not (self.document_id and self.section_key):
            raise ValueError("section_completion requires document_id and section_key")
        return self


class StoreMemoryResponse(BaseModel):
    stored: bool
    memory_id: str | None = None


@router.post("/section-context", response_model=SectionContextResponse)
async def section_context_api(
    request: SectionRequest,
    assistant: SectionAssistant = Depends(get_section_assistant),
) -> SectionContextResponse:
    """Aggregated context and composed prompt for a field, without calling the model."""
    try:
        context = await assistant.aggregator.aggregate(request.user_prompt, request.document_id, request.field_key)
    except DocumentEngineError as e:
        raise to_http_exception(e) from e
    return SectionContextResponse(context=context, composition=compose_prompt(request.user_prompt, context))


@router.post("/canvas-chat", response_model=AssistantResponse)
async def canvas_chat_api(
    request: SectionRequest,
    assistant: SectionAssistant = Depends(get_section_assistant),
) -> AssistantResponse:
    """
    Answer a request about a document field using its aggregated context.

    Raises:
        HTTPException 500: If context aggregation or the model call fails
    """
    try:
        return await assistant.respond(request.user_prompt, request.document_id, request.field_key)
    except DocumentEngineError as e:
        logger.error(f"Section assistant failed: {e}", extra={"document_id": request.document_id})
        raise to_http_exception(e) from e


@router.post("/memories", response_model=StoreMemoryResponse)
async def store_memory_api(
    request: StoreMemoryRequest,
    memory: MemoryService = Depends(get_memory_service),
) -> StoreMemoryResponse:
    """Store a section completion, entity fact or tone reference."""
    if not memory.is_configured:
        raise HTTPException(status_code=503, detail="Memory service not configured")

    if request.kind == "section_completion":
        memory_id = await memory.store_section_completion(
            request.entity_id, request.document_id, request.section_key, request.content
        )
    elif request.kind == "entity_fact":
        memory_id = await memory.store_entity_fact(request.entity_id, request.content)
    else:
        memory_id = await memory.store_tone_reference(request.entity_id, request.content)

    return StoreMemoryResponse(stored=memory_id is not None, memory_id=memory_id)
