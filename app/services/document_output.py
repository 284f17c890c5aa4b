"""Persistence of generated sections into the listing document row.

Maps template names onto live document columns, orders sections canonically,
formats their content and writes everything in one batched update.
"""

import asyncio
import re

from supabase import Client

from app.core.errors import SchemaIntrospectionError
from app.core.logging import get_logger
from app.core.schemas_document_generation import (
    GeneratedSection,
    PipelineOutput,
    SaveResult,
    TemplateValidation,
)
from app.db.listing_documents import get_document_columns, update_listing_document
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)

UNKNOWN_SECTION_NUMBER = 999

COLUMN_TO_TITLE: dict[str, str] = {
    "sec1_warning": "Warning",
    "sec1_listingparticulars": "Listing Particulars",
    "sec1_generalinfo": "General Information",
    "sec1_corporateadvisors": "Corporate Advisors",
    "sec1_forwardlooking_statements": "Forward Looking Statements",
    "sec1_boardofdirectors": "Board of Directors",
    "sec1_salientpoints": "Salient Points",
    "sec1_purposeoflisting": "Purpose of Listing",
    "sec1_plansafterlisting": "Plans After Listing",
    "sec1_documentname": "Document Name",
    "sec2_tableofcontents": "Table of Contents",
    "sec2_importantdatestimes": "Important Dates & Times",
    "sec2_generalrequirements": "General Requirements",
    "sec2_responsibleperson": "Responsible Person",
    "sec2_securitiesparticulars": "Securities Particulars",
    "sec2_securitiestowhichthisrelates": "Securities to Which This Relates",
}

# Canonical column order within each section
SECTION_ORDER: dict[str, list[str]] = {
    "sec1": [
        "sec1_documentname",
        "sec1_warning",
        "sec1_listingparticulars",
        "sec1_generalinfo",
        "sec1_corporateadvisors",
        "sec1_forwardlooking_statements",
        "sec1_boardofdirectors",
        "sec1_salientpoints",
        "sec1_purposeoflisting",
        "sec1_plansafterlisting",
        "sec1_issuer_name",
    ],
    "sec2": [
        "sec2_title",
        "sec2_tableofcontents",
        "sec2_importantdatestimes",
        "sec2_generalrequirements",
        "sec2_responsibleperson",
        "sec2_securitiesparticulars",
        "sec2_securitiestowhichthisrelates",
    ],
    "sec3": [
        "sec3_title",
        "sec3_generalinfoissuer",
        "sec3_issuerprinpactivities",
        "sec3_issuerfinanposition",
        "sec3_issuersadministration_and_man",
        "sec3_recentdevelopments",
        "sec3_financialstatements",
    ],
    "sec4": ["sec4_title", *(f"sec4_risks{n}" for n in range(1, 17))],
    "sec5": [
        "sec5_title",
        *(f"sec5_informaboutsecurts{n}" for n in range(1, 7)),
        "sec5_costs",
    ],
    "sec6": [
        "sec6_title",
        "sec6_exchange",
        "sec6_sponsoradvisorfees",
        "sec6_accountingandlegalfees",
        "sec6_merjlistingapplication1styearfees",
        "sec6_marketingcosts",
        "sec6_annualfees",
        "sec6_commissionforsubscription",
        "sec6_payingagent",
        "sec6_listingdocuments",
        "sec6_complianceapproved",
    ],
}

_PROMPT_INFIX_RE = re.compile(r"^sec(\d+)prompt_")
_SECTION_NUMBER_RE = re.compile(r"^sec(\d+)")
_LEAKED_PREFIX_RE = re.compile(r"^sec\d+prompt_\w+\s*:\s*", re.IGNORECASE)
_DUPLICATE_HEADING_RE = re.compile(r"^([A-Z\s]+)\n\n\1", re.IGNORECASE)
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")
_SENTENCE_BREAK_RE = re.compile(r"([.!?])\s+([A-Z])")


def column_for_template(template_name: str) -> str:
    """
    Document column a template writes to.

    "secNprompt_x" -> "secN_x"; title templates go to "sec1_documentname" for
    section 1 and "secN_title" otherwise.
    """
    if template_name.endswith("_title"):
        match = _SECTION_NUMBER_RE.match(template_name)
        section_number = match.group(1) if match else None
        if section_number == "1":
            return "sec1_documentname"
        return f"sec{section_number}_title"
    return _PROMPT_INFIX_RE.sub(r"sec\1_", template_name)


def _section_number(template_name: str) -> int:
    match = _SECTION_NUMBER_RE.match(template_name)
    return int(match.group(1)) if match else UNKNOWN_SECTION_NUMBER


def _sort_key(section: GeneratedSection) -> tuple[int, int, int, str]:
    number = _section_number(section.template_name)
    column = column_for_template(section.template_name)
    order = SECTION_ORDER.get(f"sec{number}", [])
    if column in order:
        return (number, 0, order.index(column), column)
    # Unknown columns after known ones, alphabetically
    return (number, 1, 0, column)


def sort_sections(sections: list[GeneratedSection]) -> list[GeneratedSection]:
    """Order sections by section number, then the canonical per-section order."""
    return sorted(sections, key=_sort_key)


def format_section_content(section: GeneratedSection, column: str) -> str:
    """Heading, paragraph and whitespace normalization for a stored section."""
    title = COLUMN_TO_TITLE.get(column) or section.title
    content = _LEAKED_PREFIX_RE.sub("", section.content or "", count=1)

    if not content.upper().startswith(title.upper()):
        content = f"{title.upper()}\n\n{content}"

    content = _DUPLICATE_HEADING_RE.sub(r"\1", content, count=1)
    content = _EXCESS_NEWLINES_RE.sub("\n\n", content)
    content = _SENTENCE_BREAK_RE.sub(r"\1\n\n\2", content)
    return content.strip()


class DocumentOutputHandler:
    """Writes pipeline output to the listing document table.

    The live column set is introspected once per handler and cached; concurrent
    first callers share a single introspection.
    """

    def __init__(self, supabase: Client | None = None):
        self.supabase = supabase or get_supabase()
        self._columns: frozenset[str] | None = None
        self._columns_lock = asyncio.Lock()

    async def available_columns(self) -> frozenset[str]:
        """
        Column names of the document table.

        Raises:
            SchemaIntrospectionError: If the table cannot be read
        """
        if self._columns is not None:
            return self._columns

        async with self._columns_lock:
            if self._columns is not None:
                return self._columns
            try:
                columns = await asyncio.to_thread(get_document_columns, self.supabase)
            except Exception as e:
                raise SchemaIntrospectionError(f"Failed to introspect document columns: {e}") from e

            if not columns:
                # Empty table: nothing to learn from, try again next call
                logger.warning("Document table has no rows; column set unknown")
                return frozenset()

            self._columns = frozenset(columns)
            logger.info(f"Detected {len(self._columns)} document columns")
            return self._columns

    async def column_mapping(self, template_names: list[str]) -> dict[str, str]:
        """Template name -> live column, for templates whose column exists."""
        columns = await self.available_columns()
        mapping: dict[str, str] = {}
        for template_name in template_names:
            column = column_for_template(template_name)
            if column in columns:
                mapping[template_name] = column
            else:
                logger.warning(
                    f"Column {column} not found for {template_name}, skipping",
                    extra={"template_name": template_name},
                )
        return mapping

    async def validate_templates(self, template_names: list[str]) -> TemplateValidation:
        """Report which templates can be stored, ahead of generation."""
        mapping = await self.column_mapping(template_names)
        valid = [name for name in template_names if name in mapping]
        invalid = [name for name in template_names if name not in mapping]
        logger.info(f"Template validation: {len(valid)} valid, {len(invalid)} invalid")
        return TemplateValidation(valid_templates=valid, invalid_templates=invalid, column_mapping=mapping)

    async def persist(self, output: PipelineOutput) -> SaveResult:
        """
        Write generated sections to the document row.

        Args:
            output: Final pipeline output

        Returns:
            SaveResult; success=False (with no write) when nothing is mappable

        Raises:
            SchemaIntrospectionError: If the document table cannot be introspected
        """
        if not output.sections:
            return SaveResult(success=False, error="No sections provided for database save")

        sections = sort_sections(output.sections)
        mapping = await self.column_mapping([s.template_name for s in sections])

        updates: dict[str, str] = {}
        columns_updated: list[str] = []
        skipped: list[str] = []
        for section in sections:
            column = mapping.get(section.template_name)
            if column is None or column in updates:
                skipped.append(section.template_name)
                continue
            updates[column] = format_section_content(section, column)
            columns_updated.append(column)

        if not updates:
            logger.error(
                "No valid document columns found for generated content",
                extra={"document_id": output.document_id},
            )
            return SaveResult(
                success=False,
                sections_processed=len(sections),
                skipped_sections=skipped,
                error="No valid database columns found for generated content",
            )

        try:
            await asyncio.to_thread(update_listing_document, output.document_id, updates, self.supabase)
        except Exception as e:
            logger.error(f"Failed to save document {output.document_id}: {e}", extra={"document_id": output.document_id})
            return SaveResult(success=False, sections_processed=len(sections), skipped_sections=skipped, error=str(e))

        logger.info(
            f"Updated {len(columns_updated)} columns ({len(skipped)} sections skipped)",
            extra={"document_id": output.document_id, "section_count": len(sections)},
        )
        return SaveResult(
            success=True,
            sections_processed=len(sections),
            columns_updated=columns_updated,
            skipped_sections=skipped,
        )
