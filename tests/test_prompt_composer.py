"""Tests for mode-specific prompt composition."""

from app.context.prompt_composer import (
    PLACEHOLDER_MARKER,
    compose_prompt,
    create_system_message,
    format_board_roster,
    format_document_fields,
    format_memory_results,
    format_structured_data,
    render_template,
)
from app.context.prompt_templates import SYSTEM_MESSAGES
from app.core.schemas_section_context import (
    AssistantMode,
    MemoryMatch,
    MemorySubtype,
    SectionContext,
    StructuredData,
    UploadMatch,
)


def _board_context(**overrides) -> SectionContext:
    values = {
        "field_key": "sec1_boardofdirectors",
        "section_label": "Board of Directors",
        "structured_data": StructuredData(
            issuer={"issuer_name": "Acme Mining Ltd", "chief_executiveofficer": "Jane Banda"},
            document_fields={"sec1_boardofdirectors": "***", "sec1_warning": "# #", "sec1_status": "draft"},
        ),
        "mode": AssistantMode.DOCUMENT_COMPLETION,
        "source_trace": ["issuer_record", "document_fields"],
    }
    values.update(overrides)
    return SectionContext(**values)


class TestRenderTemplate:
    def test_substituted_values_are_not_rescanned(self):
        rendered = render_template(
            AssistantMode.INDUSTRY_RESEARCH,
            {"field_key": "{{section_label}}", "section_label": "Recent Developments", "structured_data": "-"},
        )

        assert "Field: {{section_label}} (Recent Developments)" in rendered

    def test_unknown_tokens_left_in_place(self):
        rendered = render_template(AssistantMode.REGULATORY_GUIDANCE, {})
        assert "{{field_key}}" in rendered


class TestFormatting:
    def test_placeholder_fields_marked(self):
        text = format_document_fields({"sec1_boardofdirectors": "***", "sec1_warning": "# #", "sec1_generalinfo": "Acme"})

        assert f"Board of Directors: {PLACEHOLDER_MARKER}" in text
        assert f"Warning Statement: {PLACEHOLDER_MARKER}" in text
        assert "DOCUMENT FIELDS (already completed):\nGeneral Information: Acme" in text

    def test_internal_and_empty_columns_skipped(self):
        text = format_document_fields({"sec1_status": "draft", "instrumentid": "x", "sec1_generalinfo": ""})
        assert text == ""

    def test_empty_structured_data(self):
        assert format_structured_data(StructuredData()) == "No structured data available."

    def test_long_values_truncated(self):
        text = format_structured_data(StructuredData(issuer={"business_overview": "a" * 600}))
        assert text.endswith("a" * 500 + "... [truncated]")

    def test_memory_grouped_with_scores(self):
        memories = [
            MemoryMatch(content="Formal tone", subtype=MemorySubtype.TONE_REFERENCE),
            MemoryMatch(content="Board approved", score=0.876, subtype=MemorySubtype.SECTION_MEMORY),
        ]

        text = format_memory_results(memories)

        assert text == (
            "**Prior Section Completions:**\n"
            "1. Board approved (Score: 0.88)\n"
            "\n**Tone References:**\n"
            "1. Formal tone (Score: N/A)"
        )

    def test_no_memory(self):
        assert format_memory_results([]) == "No memory context available."


class TestComposePrompt:
    def test_equal_contexts_compose_identically(self):
        first = _board_context(upload_matches=[UploadMatch(id="1", name="cvs.pdf")])
        second = _board_context(upload_matches=[UploadMatch(id="1", name="cvs.pdf")])
        assert first is not second

        assert compose_prompt("Draft it", first) == compose_prompt("Draft it", second)

    def test_board_prompt_lists_directors(self):
        issuer = {
            "issuer_name": "Acme Mining Ltd",
            "how_many_directors_total": "3",
            "director_1": "Jane Banda",
            "d1_title": "CEO",
            "director_2": "Peter Phiri",
            "d2_shares_in_the_co": "5%",
        }
        context = _board_context(structured_data=StructuredData(issuer=issuer))

        prompt = compose_prompt("Draft the board section", context).prompt

        assert "BOARD OF DIRECTORS (from issuer database, 2 of 3 declared):" in prompt
        assert "Director 1: Jane Banda (CEO)" in prompt
        assert "Director 2: Peter Phiri (shares: 5%)" in prompt

    def test_other_fields_omit_director_roster(self):
        issuer = {"issuer_name": "Acme Mining Ltd", "director_1": "Jane Banda"}
        context = _board_context(
            field_key="sec1_generalinfo",
            section_label="General Information",
            structured_data=StructuredData(issuer=issuer),
        )
        assert "Director 1:" not in compose_prompt("Draft", context).prompt

    def test_document_completion_prompt(self):
        composition = compose_prompt("Write the board section", _board_context())

        assert composition.mode == AssistantMode.DOCUMENT_COMPLETION
        assert "Company Name: Acme Mining Ltd" in composition.prompt
        assert f"Board of Directors: {PLACEHOLDER_MARKER}" in composition.prompt
        assert composition.prompt.endswith('\n\nUser Request: "Write the board section"')
        assert composition.context_summary == (
            "Field: Board of Directors | Mode: document_completion | Sources: issuer_record, document_fields"
        )

    def test_board_without_uploads_recommends_cvs(self):
        context = _board_context(missing_flags=["No supporting documents uploaded"])

        composition = compose_prompt("Draft", context)

        assert composition.upload_recommendation.startswith("Upload director CVs")
        assert composition.upload_recommendation.endswith("This will help provide the missing: No supporting documents uploaded.")
        assert composition.missing_data_notice == "Missing data detected: No supporting documents uploaded"

    def test_no_recommendation_when_uploads_present(self):
        context = _board_context(upload_matches=[UploadMatch(id="1", name="cvs.pdf")])
        assert compose_prompt("Draft", context).upload_recommendation is None

    def test_section_level_recommendation(self):
        context = _board_context(
            field_key="sec6_annualfees",
            section_label="Annual Fees",
            missing_flags=["Annual Fees not populated in document"],
        )
        recommendation = compose_prompt("Draft", context).upload_recommendation
        assert recommendation.startswith("Upload fee schedules")

    def test_agent_mode_embeds_serialized_context(self):
        context = _board_context(mode=AssistantMode.AGENT_MODE, field_key="general_inquiry")
        composition = compose_prompt("Help me", context)

        assert '"field_key": "general_inquiry"' in composition.prompt
        assert composition.missing_data_notice is None


class TestSystemMessage:
    def test_known_mode(self):
        assert create_system_message(AssistantMode.REGULATORY_GUIDANCE) == SYSTEM_MESSAGES[AssistantMode.REGULATORY_GUIDANCE]

    def test_unknown_mode_falls_back(self):
        assert create_system_message("poetry") == SYSTEM_MESSAGES[AssistantMode.AGENT_MODE]


def test_board_roster_empty_without_directors():
    assert format_board_roster({"issuer_name": "Acme"}) == ""
    assert format_board_roster(None) == ""
