"""Stage 3: data completion.

Resolves {{public.*}} placeholders against fresh issuer and listing records,
then asks the model to weave the substituted text into final prose. A section
whose call fails keeps the cleaned substituted text.
"""

import asyncio

from supabase import Client

from app.agents.document_generation.field_mappings import resolve_placeholders
from app.agents.document_generation.prompts import CompanyContext, build_company_context, completion_messages
from app.core.config import Settings, get_settings
from app.core.content_sanitizer import clean_generated_content
from app.core.errors import NotFoundError, TransientCallError
from app.core.fanout import gather_with_fallback
from app.core.llm import LLMService
from app.core.logging import get_logger
from app.core.schemas_document_generation import GeneratedSection, StageOutput
from app.db.issuers import get_issuer
from app.db.listings import get_listing
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)


class DataCompletionAgent:
    """Fills sections with live record data."""

    name = "data_completion"

    def __init__(
        self,
        llm: LLMService | None = None,
        supabase: Client | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.llm = llm or LLMService(self.settings)
        self.supabase = supabase or get_supabase()

    async def _load_records(self, document_id: str, entity_id: str) -> tuple[dict, dict]:
        try:
            listing, issuer = await asyncio.gather(
                asyncio.to_thread(get_listing, document_id, self.supabase),
                asyncio.to_thread(get_issuer, entity_id, self.supabase),
            )
        except Exception as e:
            raise TransientCallError(f"Failed to fetch records for {document_id}: {e}") from e

        if not listing:
            raise NotFoundError("listing", document_id)
        if not issuer:
            raise NotFoundError("issuer", entity_id)
        return listing, issuer

    async def complete_section(
        self,
        section: GeneratedSection,
        substituted: str,
        company: CompanyContext,
    ) -> GeneratedSection:
        """One LLM pass over the substituted text; raises on call failure."""
        system, user = completion_messages(company, section.title, substituted)
        response = await self.llm.complete(
            system,
            user,
            model=self.settings.COMPLETION_MODEL,
            temperature=self.settings.COMPLETION_TEMPERATURE,
            max_tokens=self.settings.COMPLETION_MAX_TOKENS,
        )
        return section.model_copy(update={"content": clean_generated_content(response or substituted)})

    async def execute(self, stage_input: StageOutput) -> StageOutput:
        """
        Complete all sections concurrently.

        Args:
            stage_input: Output of the compliance stage

        Returns:
            StageOutput with final sections in input order

        Raises:
            NotFoundError: If the listing or issuer record does not exist
            TransientCallError: If the records cannot be fetched
        """
        listing, issuer = await self._load_records(stage_input.document_id, stage_input.entity_id)
        company = build_company_context(issuer, listing)

        # Paired by position so each section keeps its own substituted text
        substituted = [
            (section, resolve_placeholders(section.content, listing, issuer)) for section in stage_input.sections
        ]

        def _substituted_only(item: tuple[GeneratedSection, str], _error: BaseException) -> GeneratedSection:
            section, text = item
            return section.model_copy(update={"content": clean_generated_content(text)})

        sections = await gather_with_fallback(
            substituted,
            lambda item: self.complete_section(item[0], item[1], company),
            _substituted_only,
            label=self.name,
        )

        logger.info(
            f"Data completion finished for {len(sections)} sections",
            extra={"stage": self.name, "document_id": stage_input.document_id, "section_count": len(sections)},
        )
        return stage_input.model_copy(update={"sections": sections})
