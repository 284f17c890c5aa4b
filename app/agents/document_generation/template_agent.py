"""Stage 1: template extraction.

Reads every prompt template for the requested section types from the
template catalog and turns each into a GeneratedSection with a parsed title,
optional AI instructions and a cleaned body.
"""

import asyncio
import re

from supabase import Client

from app.agents.document_generation.placeholder_templates import placeholder_body
from app.core.errors import TemplateStoreError
from app.core.logging import get_logger
from app.core.schemas_document_generation import GeneratedSection, GenerationParams, StageOutput
from app.db.listing_prompts import get_template, list_template_names
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)

MIN_BODY_CHARS = 20

# Ordered title patterns; first non-empty capture wins
TITLE_PATTERNS = [
    re.compile(r'"title":\s*"([^"]+)"', re.IGNORECASE),
    re.compile(r"title:\s*([^\n]+)", re.IGNORECASE),
    re.compile(r"^([A-Z][^:\n]{10,60})", re.MULTILINE),
]
INSTRUCTIONS_RE = re.compile(r'"ai_instructions":\s*"([^"]+)"')
METADATA_RE = re.compile(r'"(title|ai_instructions)":\s*"[^"]*"')
BRACE_WRAPPER_RE = re.compile(r"^[{}\s,]+|[{}\s,]+$")
SECTION_TYPE_PREFIX_RE = re.compile(r"^sec\d+prompt_")
WORD_START_RE = re.compile(r"\b\w")


def template_suffix(template_name: str) -> str:
    """Section-type suffix of a template name ("sec1prompt_warning" -> "warning")."""
    return SECTION_TYPE_PREFIX_RE.sub("", template_name)


def extract_title(template_name: str, body: str) -> str:
    for pattern in TITLE_PATTERNS:
        match = pattern.search(body)
        if match and match.group(1).strip():
            return match.group(1).strip()
    # Capitalize word starts only; "1styearfees" stays lower-case after the digit
    return WORD_START_RE.sub(lambda m: m.group(0).upper(), template_suffix(template_name).replace("_", " "))


def extract_instructions(body: str) -> str | None:
    match = INSTRUCTIONS_RE.search(body)
    return match.group(1) if match else None


def _unescape(text: str) -> str:
    return text.replace("\\n", "\n").replace('\\"', '"').replace("\\\\", "\\")


def clean_template_body(body: str) -> str:
    """
    Strip metadata keys and JSON wrapping from a stored template body.

    Returns:
        Cleaned body, or "" when fewer than MIN_BODY_CHARS + 1 characters remain
    """
    if not body or not body.strip():
        return ""

    content = METADATA_RE.sub("", body).strip()
    content = BRACE_WRAPPER_RE.sub("", content).strip()
    if len(content) >= 2 and content.startswith('"') and content.endswith('"'):
        content = content[1:-1]
    content = _unescape(content).strip()

    return content if len(content) > MIN_BODY_CHARS else ""


def build_section(template_name: str, body: str) -> GeneratedSection:
    """Turn one stored template into a section, substituting a canned body if needed."""
    title = extract_title(template_name, body)
    content = clean_template_body(body)
    if not content:
        content = placeholder_body(template_name, template_suffix(template_name), title)
    return GeneratedSection(
        template_name=template_name,
        title=title,
        content=content,
        instructions=extract_instructions(body),
    )


class TemplateExtractionAgent:
    """Loads and parses prompt templates for the requested section types."""

    name = "template_extraction"

    def __init__(self, supabase: Client | None = None):
        self.supabase = supabase or get_supabase()

    async def execute(self, params: GenerationParams) -> StageOutput:
        """
        Extract all templates for the requested section types.

        Args:
            params: Generation parameters naming section types like "sec1prompt"

        Returns:
            StageOutput with one section per readable template

        Raises:
            TemplateStoreError: If template names cannot be listed
        """
        template_names: list[str] = []
        for section_type in params.sections:
            try:
                names = await asyncio.to_thread(list_template_names, section_type, self.supabase)
            except Exception as e:
                raise TemplateStoreError(f"Failed to list templates for {section_type}: {e}") from e
            logger.info(f"Found {len(names)} templates for {section_type}", extra={"stage": self.name})
            template_names.extend(names)

        # Repeated section types or overlapping prefixes list a template more than once
        template_names = list(dict.fromkeys(template_names))

        sections: list[GeneratedSection] = []
        skipped: list[str] = []
        for template_name in template_names:
            try:
                body = await asyncio.to_thread(get_template, template_name, self.supabase)
            except Exception as e:
                logger.warning(
                    f"Failed to read template {template_name}: {e}",
                    extra={"stage": self.name, "template_name": template_name},
                )
                skipped.append(template_name)
                continue

            if body is None:
                logger.warning(
                    f"Template {template_name} not found",
                    extra={"stage": self.name, "template_name": template_name},
                )
                skipped.append(template_name)
                continue

            sections.append(build_section(template_name, body))

        logger.info(
            f"Extracted {len(sections)} templates ({len(skipped)} skipped)",
            extra={"stage": self.name, "document_id": params.document_id, "section_count": len(sections)},
        )
        return StageOutput(
            document_id=params.document_id,
            entity_id=params.entity_id,
            sections=sections,
            skipped_templates=skipped,
        )
