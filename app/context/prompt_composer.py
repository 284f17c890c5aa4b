"""Mode-specific prompt composition from a section context.

Pure and deterministic: the same context and user prompt always yield the
same composition, with no I/O.
"""

import json
import re
from typing import Any

from app.context.prompt_templates import (
    FIELD_UPLOAD_RECOMMENDATIONS,
    GENERIC_UPLOAD_RECOMMENDATION,
    PROMPT_TEMPLATES,
    SECTION_UPLOAD_RECOMMENDATIONS,
    SYSTEM_MESSAGES,
)
from app.core.directors import extract_board, format_director
from app.core.field_registry import BOARD_FIELD_KEY, UPLOAD_NEEDED_FIELDS, get_field_label, section_prefix
from app.core.placeholders import has_value, is_blank_or_placeholder
from app.core.schemas_section_context import (
    AssistantMode,
    MemoryMatch,
    MemorySubtype,
    PromptComposition,
    SectionContext,
    StructuredData,
    UploadMatch,
)

MAX_VALUE_CHARS = 500
PLACEHOLDER_MARKER = "[PLACEHOLDER - needs completion]"

_TOKEN_RE = re.compile(r"\{\{(\w+)\}\}")

# (column, label) pairs shown from the issuer record, in display order
BUSINESS_DATA_FIELDS: list[tuple[str, str]] = [
    ("issuer_name", "Company Name"),
    ("business_overview", "Business Overview"),
    ("registered_address", "Registered Address"),
    ("incorporation_date", "Incorporation Date"),
    ("country", "Country"),
    ("legal_structure", "Legal Structure"),
    ("chief_executiveofficer", "CEO"),
    ("ceo_title", "CEO Title"),
    ("ceo_nationality", "CEO Nationality"),
    ("financial_director", "Financial Director"),
    ("how_many_directors_total", "Total Directors"),
    ("company_prospects", "Company Prospects"),
    ("purpose_of_listing", "Purpose of Listing"),
    ("plans_after_listing", "Plans After Listing"),
    ("use_of_proceeds", "Use of Proceeds"),
    ("shares_in_issue", "Shares in Issue"),
    ("nominal_share_price", "Nominal Share Price"),
    ("recent_performance", "Recent Performance"),
    ("legal_advisors_name", "Legal Advisors"),
    ("auditors_name", "Auditors"),
]

LISTING_DATA_FIELDS: list[tuple[str, str]] = [
    ("instrumentname", "Instrument Name"),
    ("instrumentticker", "Ticker"),
    ("instrumentcategory", "Category"),
    ("instrumentsubcategory", "Subcategory"),
    ("instrumentexchange", "Exchange"),
    ("instrumentlistingdate", "Listing Date"),
    ("instrumentsponsor", "Sponsor"),
]

MEMORY_GROUPS: list[tuple[MemorySubtype, str]] = [
    (MemorySubtype.SECTION_MEMORY, "**Prior Section Completions:**"),
    (MemorySubtype.ENTITY_FACT, "**Entity Facts:**"),
    (MemorySubtype.TONE_REFERENCE, "**Tone References:**"),
]


def render_template(template_id: AssistantMode | str, substitutions: dict[str, str]) -> str:
    """
    Fill {{token}} markers of a template in a single pass.

    Substituted values are inserted verbatim and never re-scanned, so a value
    that itself contains "{{...}}" stays literal. Unknown tokens are left as-is.
    """
    template = PROMPT_TEMPLATES[AssistantMode(template_id)]
    return _TOKEN_RE.sub(lambda m: substitutions.get(m.group(1), m.group(0)), template)


def _format_value(value: Any) -> str:
    text = str(value)
    if len(text) > MAX_VALUE_CHARS:
        return text[:MAX_VALUE_CHARS] + "... [truncated]"
    return text


def _format_record(record: dict[str, Any], fields: list[tuple[str, str]]) -> str:
    return "\n".join(
        f"{label}: {_format_value(record[column])}" for column, label in fields if has_value(record.get(column))
    )


def _is_internal_column(key: str) -> bool:
    return "_status" in key or "_id" in key or key in ("listing", "instrumentid")


def format_document_fields(document_fields: dict[str, Any]) -> str:
    """Split document columns into completed and needing-completion blocks."""
    completed: list[str] = []
    needing: list[str] = []

    for key, value in document_fields.items():
        if _is_internal_column(key) or value is None or value == "":
            continue
        label = get_field_label(key)
        if is_blank_or_placeholder(value):
            needing.append(f"{label}: {PLACEHOLDER_MARKER}")
        else:
            completed.append(f"{label}: {_format_value(value)}")

    blocks = []
    if completed:
        blocks.append("DOCUMENT FIELDS (already completed):\n" + "\n".join(completed))
    if needing:
        blocks.append("DOCUMENT FIELDS (needing completion):\n" + "\n".join(needing))
    return "\n\n".join(blocks)


def format_structured_data(data: StructuredData) -> str:
    """Business data, then listing data, then document fields."""
    if data.is_empty():
        return "No structured data available."

    blocks = []
    if data.issuer:
        business = _format_record(data.issuer, BUSINESS_DATA_FIELDS)
        if business:
            blocks.append("BUSINESS DATA (from issuer database):\n" + business)
    if data.listing:
        listing = _format_record(data.listing, LISTING_DATA_FIELDS)
        if listing:
            blocks.append("LISTING DATA (from listing database):\n" + listing)
    if data.document_fields:
        document = format_document_fields(data.document_fields)
        if document:
            blocks.append(document)

    return "\n\n".join(blocks) or "No relevant structured data found."


def format_board_roster(issuer: dict[str, Any] | None) -> str:
    """Numbered director lines read from the issuer record, with the declared total."""
    roster = extract_board(issuer)
    if not roster.directors:
        return ""

    header = "BOARD OF DIRECTORS (from issuer database"
    if roster.declared_total is not None:
        header += f", {len(roster.directors)} of {roster.declared_total} declared"
    lines = [format_director(director) for director in roster.directors]
    return f"{header}):\n" + "\n".join(lines)


def _structured_block(context: SectionContext) -> str:
    block = format_structured_data(context.structured_data)
    if context.field_key == BOARD_FIELD_KEY:
        roster = format_board_roster(context.structured_data.issuer)
        if roster:
            block += f"\n\n{roster}"
    return block


def format_upload_matches(uploads: list[UploadMatch]) -> str:
    if not uploads:
        return "No uploaded documents found."
    return "\n".join(
        f"- {doc.name} ({doc.type or 'Unknown type'}) - {doc.description or 'No description'}" for doc in uploads
    )


def format_memory_results(memories: list[MemoryMatch]) -> str:
    """Memories grouped by sub-query, numbered, with their scores."""
    if not memories:
        return "No memory context available."

    lines: list[str] = []
    for subtype, header in MEMORY_GROUPS:
        group = [m for m in memories if m.subtype == subtype]
        if not group:
            continue
        lines.append(f"\n{header}" if lines else header)
        for index, memory in enumerate(group, start=1):
            score = f"{memory.score:.2f}" if memory.score is not None else "N/A"
            lines.append(f"{index}. {memory.content} (Score: {score})")
    return "\n".join(lines)


def _context_summary(context: SectionContext) -> str:
    return f"Field: {context.section_label} | Mode: {context.mode.value} | Sources: {', '.join(context.source_trace)}"


def should_recommend_upload(context: SectionContext) -> bool:
    if context.upload_matches:
        return False
    return context.field_key in UPLOAD_NEEDED_FIELDS or bool(context.missing_flags)


def upload_recommendation(context: SectionContext) -> str:
    """Per-field advice, else per-section, else generic; names the missing data."""
    message = FIELD_UPLOAD_RECOMMENDATIONS.get(context.field_key) or SECTION_UPLOAD_RECOMMENDATIONS.get(
        section_prefix(context.field_key), GENERIC_UPLOAD_RECOMMENDATION
    )
    if context.missing_flags:
        message += f" This will help provide the missing: {', '.join(context.missing_flags)}."
    return message


def compose_prompt(user_prompt: str, context: SectionContext) -> PromptComposition:
    """
    Render the mode template for a section context.

    Args:
        user_prompt: Raw user request, appended verbatim
        context: Aggregated section context

    Returns:
        PromptComposition with prompt text and diagnostics
    """
    substitutions = {
        "field_key": context.field_key,
        "section_label": context.section_label,
        "structured_data": _structured_block(context),
        "upload_matches": format_upload_matches(context.upload_matches),
        "memory_results": format_memory_results(context.memory_results),
        "source_trace": ", ".join(context.source_trace),
        "missing_flags": ", ".join(context.missing_flags),
        "section_context": json.dumps(context.model_dump(mode="json"), indent=2, sort_keys=True),
    }

    prompt = render_template(context.mode, substitutions)
    prompt += f'\n\nUser Request: "{user_prompt}"'

    return PromptComposition(
        prompt=prompt,
        mode=context.mode,
        context_summary=_context_summary(context),
        missing_data_notice=(
            f"Missing data detected: {', '.join(context.missing_flags)}" if context.missing_flags else None
        ),
        upload_recommendation=upload_recommendation(context) if should_recommend_upload(context) else None,
    )


def create_system_message(mode: AssistantMode | str) -> str:
    """System message for a mode; unknown modes use agent mode."""
    try:
        return SYSTEM_MESSAGES[AssistantMode(mode)]
    except ValueError:
        return SYSTEM_MESSAGES[AssistantMode.AGENT_MODE]
