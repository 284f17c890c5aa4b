"""Stage 2: compliance rewriting.

Rewrites every extracted section into formal, third-person listing-document
prose while keeping {{...}} placeholders verbatim. Sections are processed
concurrently; a section whose call fails keeps its template content.
"""

import asyncio

from supabase import Client

from app.agents.document_generation.prompts import CompanyContext, build_company_context, compliance_messages
from app.core.config import Settings, get_settings
from app.core.content_sanitizer import clean_generated_content
from app.core.fanout import gather_with_fallback
from app.core.llm import LLMService
from app.core.logging import get_logger
from app.core.schemas_document_generation import GeneratedSection, StageOutput
from app.db.issuers import get_issuer
from app.db.listings import get_listing
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)


class ComplianceAgent:
    """Rewrites template sections for compliance and voice."""

    name = "compliance"

    def __init__(
        self,
        llm: LLMService | None = None,
        supabase: Client | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.llm = llm or LLMService(self.settings)
        self.supabase = supabase or get_supabase()

    async def _company_context(self, document_id: str, entity_id: str) -> CompanyContext:
        # Best effort: generic wording when the records cannot be read
        try:
            listing, issuer = await asyncio.gather(
                asyncio.to_thread(get_listing, document_id, self.supabase),
                asyncio.to_thread(get_issuer, entity_id, self.supabase),
            )
        except Exception as e:
            logger.warning(
                f"Company context unavailable, using generic wording: {e}",
                extra={"stage": self.name, "document_id": document_id},
            )
            listing, issuer = None, None
        return build_company_context(issuer, listing)

    async def enhance_section(self, section: GeneratedSection, company: CompanyContext) -> GeneratedSection:
        """One LLM rewrite of a section; raises on call failure."""
        system, user = compliance_messages(company, section.title, section.content, section.instructions)
        response = await self.llm.complete(
            system,
            user,
            model=self.settings.COMPLIANCE_MODEL,
            temperature=self.settings.COMPLIANCE_TEMPERATURE,
            max_tokens=self.settings.COMPLIANCE_MAX_TOKENS,
        )
        content = clean_generated_content(response or section.content)
        logger.debug(
            f"Enhanced {section.template_name} ({len(content)} chars)",
            extra={"stage": self.name, "template_name": section.template_name},
        )
        return section.model_copy(update={"content": content})

    async def execute(self, stage_input: StageOutput) -> StageOutput:
        """
        Rewrite all sections concurrently.

        Args:
            stage_input: Output of template extraction

        Returns:
            StageOutput with rewritten sections in input order
        """
        company = await self._company_context(stage_input.document_id, stage_input.entity_id)

        def _keep_input(section: GeneratedSection, _error: BaseException) -> GeneratedSection:
            return section

        sections = await gather_with_fallback(
            stage_input.sections,
            lambda section: self.enhance_section(section, company),
            _keep_input,
            label=self.name,
        )

        logger.info(
            f"Compliance pass complete for {len(sections)} sections",
            extra={"stage": self.name, "document_id": stage_input.document_id, "section_count": len(sections)},
        )
        return stage_input.model_copy(update={"sections": sections})
