"""Section assistant: answer a user request about one document field.

aggregate context -> compose mode prompt -> one LLM call
"""

from pydantic import BaseModel, Field

from app.context.prompt_composer import compose_prompt, create_system_message
from app.context.section_context import ContextAggregator
from app.core.config import Settings, get_settings
from app.core.errors import TransientCallError
from app.core.field_registry import GENERAL_INQUIRY_KEY
from app.core.llm import LLMService
from app.core.logging import get_logger
from app.core.schemas_section_context import AssistantMode, SectionContext

logger = get_logger(__name__)


class AssistantContextInfo(BaseModel):
    """Context metadata returned alongside an assistant answer."""

    mode: AssistantMode
    field_key: str
    section_label: str
    sources: list[str] = Field(default_factory=list)
    missing_data: list[str] = Field(default_factory=list)
    upload_recommendation: str | None = None
    has_structured_data: bool = False
    has_uploads: bool = False


class AssistantResponse(BaseModel):
    message: str
    context: AssistantContextInfo


class SectionAssistant:
    """Context-aware assistant for a single listing document field."""

    def __init__(
        self,
        aggregator: ContextAggregator | None = None,
        llm: LLMService | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.aggregator = aggregator or ContextAggregator(settings=self.settings)
        self.llm = llm or LLMService(self.settings)

    async def respond(self, user_prompt: str, document_id: str, field_key: str | None = None) -> AssistantResponse:
        """
        Answer a request about a document field.

        Args:
            user_prompt: The user's request
            document_id: Listing instrument id
            field_key: Field being edited; general inquiry when omitted

        Returns:
            AssistantResponse with the model's message and context metadata

        Raises:
            ContextAggregationError: If context cannot be gathered
            TransientCallError: If the model call fails or returns nothing
        """
        context = await self.aggregator.aggregate(user_prompt, document_id, field_key or GENERAL_INQUIRY_KEY)
        composition = compose_prompt(user_prompt, context)

        message = await self.llm.complete(
            create_system_message(context.mode),
            composition.prompt,
            model=self.settings.ASSISTANT_MODEL,
            temperature=self.settings.ASSISTANT_TEMPERATURE,
            max_tokens=self.settings.ASSISTANT_MAX_TOKENS,
        )
        if not message:
            raise TransientCallError("No response generated by the model")

        logger.info(
            f"Answered {context.field_key} in {context.mode.value}",
            extra={"document_id": document_id, "field_key": context.field_key},
        )
        return AssistantResponse(message=message, context=self._context_info(context, composition.upload_recommendation))

    @staticmethod
    def _context_info(context: SectionContext, upload_recommendation: str | None) -> AssistantContextInfo:
        return AssistantContextInfo(
            mode=context.mode,
            field_key=context.field_key,
            section_label=context.section_label,
            sources=context.source_trace,
            missing_data=context.missing_flags,
            upload_recommendation=upload_recommendation,
            has_structured_data=not context.structured_data.is_empty(),
            has_uploads=bool(context.upload_matches),
        )
