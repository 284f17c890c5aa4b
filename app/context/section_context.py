"""Section context aggregation.

Gathers everything known about one listing document field before a prompt is
composed for it:

1. Structured records, in priority order: issuer record, listing record,
   in-progress document row
2. Uploaded reference documents of the sponsoring organization
3. Long-term memory (prior section completions, entity facts, tone references)

and classifies the field into a generation mode, flagging data the field
cannot be written without.
"""

import asyncio
from typing import Any

from supabase import Client

from app.core.config import Settings, get_settings
from app.core.directors import extract_board
from app.core.errors import ContextAggregationError
from app.core.field_registry import (
    BOARD_FIELD_KEY,
    UPLOAD_NEEDED_FIELDS,
    get_field_label,
    get_field_mode,
    get_required_attributes,
    infer_field_from_prompt,
)
from app.core.logging import get_logger
from app.core.memory_service import MemoryService
from app.core.placeholders import has_value, is_blank_or_placeholder
from app.core.schemas_section_context import (
    MemoryMatch,
    SectionContext,
    StructuredData,
    UploadMatch,
)
from app.db.issuers import get_issuer
from app.db.knowledge_vault import list_org_documents
from app.db.listing_documents import get_listing_document
from app.db.listings import get_listing, resolve_entity_id
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)

NO_SOURCES = "none"


def filter_upload_matches(documents: list[dict[str, Any]], field_key: str) -> list[UploadMatch]:
    """
    Keep reference documents relevant to a field.

    A document is kept when it has no category, when its category contains the
    field's section token ("sec1"), or when its name contains the field's
    second token ("boardofdirectors").
    """
    parts = field_key.split("_")
    section_token = parts[0].lower()
    name_token = parts[1].lower() if len(parts) > 1 else ""

    matches = []
    for doc in documents:
        category = doc.get("category")
        name = doc.get("name") or ""
        if not category or section_token in category.lower() or name_token in name.lower():
            matches.append(
                UploadMatch(
                    id=str(doc["id"]) if doc.get("id") is not None else None,
                    name=name,
                    category=category,
                    type=doc.get("type"),
                    description=doc.get("description"),
                )
            )
    return matches


def _attribute_value(structured: StructuredData, column: str) -> Any:
    if column.startswith("listing."):
        return (structured.listing or {}).get(column.split(".", 1)[1])
    return (structured.issuer or {}).get(column)


def missing_business_attributes(structured: StructuredData, field_key: str) -> list[str]:
    """Labels of required business attributes with no real value."""
    return [
        attribute.label
        for attribute in get_required_attributes(field_key)
        if not has_value(_attribute_value(structured, attribute.column))
    ]


def detect_missing_data(
    structured: StructuredData,
    field_key: str,
    upload_matches: list[UploadMatch],
) -> list[str]:
    """Human-readable flags for data the field cannot be written without."""
    flags: list[str] = []
    label = get_field_label(field_key)

    field_empty = is_blank_or_placeholder(structured.document_fields.get(field_key))
    attributes_missing = missing_business_attributes(structured, field_key)

    if field_empty and attributes_missing:
        flags.append(f"{label} requires: {', '.join(attributes_missing)}")
    elif field_empty:
        flags.append(f"{label} not populated in document")

    if field_key == BOARD_FIELD_KEY and structured.issuer:
        roster = extract_board(structured.issuer)
        if not roster.is_complete:
            flags.append(
                f"Director details provided for {len(roster.directors)} of "
                f"{roster.declared_total} declared directors"
            )

    if field_key in UPLOAD_NEEDED_FIELDS and not upload_matches:
        flags.append("No supporting documents uploaded")

    return flags


class ContextAggregator:
    """Builds a SectionContext for a field of a listing document."""

    def __init__(
        self,
        supabase: Client | None = None,
        memory_service: MemoryService | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.supabase = supabase or get_supabase()
        self.memory_service = memory_service or MemoryService(self.settings)

    async def aggregate(
        self,
        prompt: str,
        document_id: str,
        field_key: str | None = None,
    ) -> SectionContext:
        """
        Gather context for one field.

        Args:
            prompt: Free-text user request (used for field inference and memory search)
            document_id: Listing instrument id
            field_key: Target document field; inferred from the prompt when omitted

        Returns:
            SectionContext with a non-empty source trace and a mode

        Raises:
            ContextAggregationError: If a record store fails
        """
        field_key = field_key or infer_field_from_prompt(prompt)
        section_label = get_field_label(field_key)

        try:
            structured, organization_id = await self._load_structured(document_id)
            upload_matches = await self._load_uploads(organization_id, field_key)
        except Exception as e:
            logger.error(
                f"Context aggregation failed for {document_id}: {e}",
                extra={"document_id": document_id, "field_key": field_key},
            )
            raise ContextAggregationError(f"Failed to aggregate context for {document_id}: {e}") from e

        source_trace: list[str] = []
        if structured.issuer:
            source_trace.append("issuer_record")
        if structured.listing:
            source_trace.append("listing_record")
        if structured.document_fields:
            source_trace.append("document_fields")
        if not source_trace:
            source_trace.append(NO_SOURCES)
        if upload_matches:
            source_trace.append("uploaded_documents")

        entity_id = str(structured.issuer["id"]) if structured.issuer and structured.issuer.get("id") else None
        memory_results = await self._load_memory(entity_id, field_key, prompt or section_label)
        if memory_results:
            source_trace.append("memory")

        context = SectionContext(
            field_key=field_key,
            section_label=section_label,
            structured_data=structured,
            upload_matches=upload_matches,
            memory_results=memory_results,
            mode=get_field_mode(field_key),
            source_trace=source_trace,
            missing_flags=detect_missing_data(structured, field_key, upload_matches),
            conflicts=[],
        )

        logger.info(
            f"Aggregated context for {field_key}: sources={', '.join(source_trace)}",
            extra={"document_id": document_id, "field_key": field_key},
        )
        return context

    async def _load_structured(self, document_id: str) -> tuple[StructuredData, str | None]:
        # Listing first: it names the owning issuer and the sponsoring organization
        listing, document = await asyncio.gather(
            asyncio.to_thread(get_listing, document_id, self.supabase),
            asyncio.to_thread(get_listing_document, document_id, self.supabase),
        )

        issuer = None
        entity_id = resolve_entity_id(listing)
        if entity_id:
            issuer = await asyncio.to_thread(get_issuer, entity_id, self.supabase)

        organization_id = (listing or {}).get("instrumentsponsorid")
        structured = StructuredData(issuer=issuer, listing=listing, document_fields=document or {})
        return structured, str(organization_id) if organization_id else None

    async def _load_uploads(self, organization_id: str | None, field_key: str) -> list[UploadMatch]:
        if not organization_id:
            return []
        documents = await asyncio.to_thread(list_org_documents, organization_id, self.supabase)
        return filter_upload_matches(documents, field_key)

    async def _load_memory(self, entity_id: str | None, field_key: str, query: str) -> list[MemoryMatch]:
        if not entity_id or not self.memory_service.is_configured:
            return []

        try:
            section, facts, tone = await asyncio.gather(
                self.memory_service.search_section_memories(entity_id, field_key, query),
                self.memory_service.search_entity_facts(entity_id, query),
                self.memory_service.get_tone_references(entity_id),
            )
        except Exception as e:
            logger.warning(f"Memory lookup failed for {field_key}, continuing without memory: {e}")
            return []

        logger.debug(
            f"Memory results: {len(section)} section, {len(facts)} facts, {len(tone)} tone",
            extra={"entity_id": entity_id, "field_key": field_key},
        )
        return [*section, *facts, *tone]
