"""Tests for template extraction (stage 1)."""

from unittest.mock import MagicMock, patch

import pytest

from app.agents.document_generation.placeholder_templates import SECTION_PLACEHOLDERS
from app.agents.document_generation.template_agent import (
    TemplateExtractionAgent,
    build_section,
    clean_template_body,
    extract_instructions,
    extract_title,
)
from app.core.errors import TemplateStoreError
from app.core.schemas_document_generation import GenerationParams

from tests.conftest import DOCUMENT_ID, ENTITY_ID

MODULE = "app.agents.document_generation.template_agent"

STORED_TEMPLATE = (
    '{"title": "Board of Directors", "ai_instructions": "List every director", '
    '"The board of {{public.issuers.organization_name}} comprises experienced directors."}'
)


class TestParsing:
    def test_json_title_and_instructions(self):
        assert extract_title("sec1prompt_boardofdirectors", STORED_TEMPLATE) == "Board of Directors"
        assert extract_instructions(STORED_TEMPLATE) == "List every director"

    def test_plain_title_line(self):
        assert extract_title("sec1prompt_warning", "title: Important Notice\nRead carefully.") == "Important Notice"

    def test_title_from_template_name(self):
        assert extract_title("sec1prompt_forwardlooking_statements", "tiny") == "Forwardlooking Statements"

    def test_title_keeps_lower_case_after_digits(self):
        assert extract_title("sec6prompt_merjlistingapplication1styearfees", "tiny") == "Merjlistingapplication1styearfees"
        assert extract_title("sec4prompt_risks_12th_item", "tiny") == "Risks 12th Item"

    def test_clean_body_strips_metadata_and_wrapping(self):
        assert clean_template_body(STORED_TEMPLATE) == (
            "The board of {{public.issuers.organization_name}} comprises experienced directors."
        )

    def test_escaped_newlines_restored(self):
        body = '"First paragraph of the section.\\nSecond paragraph."'
        assert clean_template_body(body) == "First paragraph of the section.\nSecond paragraph."

    def test_short_body_is_empty(self):
        assert clean_template_body('{"title": "Warning"}') == ""
        assert clean_template_body("   ") == ""


class TestBuildSection:
    def test_known_suffix_uses_canned_body(self):
        section = build_section("sec1prompt_warning", '{"title": "Warning"}')

        assert section.title == "Warning"
        assert section.content == SECTION_PLACEHOLDERS["warning"]
        assert section.instructions is None

    def test_unknown_suffix_uses_generic_body(self):
        section = build_section("sec1prompt_mystery", "tiny")

        assert section.title == "Mystery"
        assert section.content.endswith("Generated from template: sec1prompt_mystery")

    def test_usable_body_kept(self):
        section = build_section("sec1prompt_boardofdirectors", STORED_TEMPLATE)

        assert section.template_name == "sec1prompt_boardofdirectors"
        assert "comprises experienced directors" in section.content
        assert section.instructions == "List every director"


class TestExecute:
    @pytest.mark.asyncio
    async def test_extracts_all_templates_and_skips_missing(self):
        bodies = {"sec1prompt_boardofdirectors": STORED_TEMPLATE, "sec1prompt_warning": "x"}

        def fake_get_template(name, client=None):
            if name == "sec1prompt_broken":
                raise RuntimeError("timeout")
            return bodies.get(name)

        names = ["sec1prompt_boardofdirectors", "sec1prompt_broken", "sec1prompt_gone", "sec1prompt_warning"]
        params = GenerationParams(document_id=DOCUMENT_ID, entity_id=ENTITY_ID, sections=["sec1prompt"])

        with patch(f"{MODULE}.list_template_names", return_value=names), patch(
            f"{MODULE}.get_template", side_effect=fake_get_template
        ):
            output = await TemplateExtractionAgent(supabase=MagicMock()).execute(params)

        assert [s.template_name for s in output.sections] == ["sec1prompt_boardofdirectors", "sec1prompt_warning"]
        assert output.skipped_templates == ["sec1prompt_broken", "sec1prompt_gone"]
        assert output.document_id == DOCUMENT_ID
        assert output.entity_id == ENTITY_ID

    @pytest.mark.asyncio
    async def test_multiple_section_types(self):
        params = GenerationParams(document_id=DOCUMENT_ID, entity_id=ENTITY_ID, sections=["sec1prompt", "sec2prompt"])
        listed = {"sec1prompt": ["sec1prompt_warning"], "sec2prompt": ["sec2prompt_costs"]}

        with patch(f"{MODULE}.list_template_names", side_effect=lambda prefix, client=None: listed[prefix]), patch(
            f"{MODULE}.get_template", return_value=""
        ):
            output = await TemplateExtractionAgent(supabase=MagicMock()).execute(params)

        assert [s.template_name for s in output.sections] == ["sec1prompt_warning", "sec2prompt_costs"]

    @pytest.mark.asyncio
    async def test_repeated_section_types_extract_each_template_once(self):
        params = GenerationParams(document_id=DOCUMENT_ID, entity_id=ENTITY_ID, sections=["sec1prompt", "sec1prompt"])
        names = ["sec1prompt_warning", "sec1prompt_boardofdirectors"]

        with patch(f"{MODULE}.list_template_names", return_value=names), patch(
            f"{MODULE}.get_template", return_value=STORED_TEMPLATE
        ) as get_template:
            output = await TemplateExtractionAgent(supabase=MagicMock()).execute(params)

        assert [s.template_name for s in output.sections] == names
        assert get_template.call_count == 2

    @pytest.mark.asyncio
    async def test_catalog_failure_raises(self):
        params = GenerationParams(document_id=DOCUMENT_ID, entity_id=ENTITY_ID, sections=["sec1prompt"])

        with patch(f"{MODULE}.list_template_names", side_effect=RuntimeError("db down")):
            with pytest.raises(TemplateStoreError):
                await TemplateExtractionAgent(supabase=MagicMock()).execute(params)
