"""Tests for the field/mode registry."""

import pytest

from app.core.field_registry import (
    DEFAULT_FIELD_KEY,
    get_field_descriptor,
    get_field_label,
    get_field_mode,
    get_required_attributes,
    infer_field_from_prompt,
    section_prefix,
)
from app.core.schemas_section_context import AssistantMode


class TestInferFieldFromPrompt:
    @pytest.mark.parametrize(
        "prompt,expected",
        [
            ("Draft the risk section", "sec4_riskfactors1"),
            ("Who sits on the board?", "sec1_boardofdirectors"),
            ("Summarise the financial position", "sec3_issuerfinanposition"),
            ("Describe the instrument", "sec5_informaboutsecurts1"),
            ("What are the sponsor fees", "sec6_sponsoradvisorfees"),
            ("Tell me about the company", DEFAULT_FIELD_KEY),
            ("", DEFAULT_FIELD_KEY),
        ],
    )
    def test_keyword_rules(self, prompt, expected):
        assert infer_field_from_prompt(prompt) == expected

    def test_first_rule_wins(self):
        # "risk" outranks "board"
        assert infer_field_from_prompt("board risk appetite") == "sec4_riskfactors1"


class TestModesAndLabels:
    def test_known_field_modes(self):
        assert get_field_mode("sec1_boardofdirectors") == AssistantMode.DOCUMENT_COMPLETION
        assert get_field_mode("sec3_issuerprinpactivities") == AssistantMode.INDUSTRY_RESEARCH
        assert get_field_mode("sec4_risks12") == AssistantMode.REGULATORY_GUIDANCE
        assert get_field_mode("general_inquiry") == AssistantMode.AGENT_MODE

    def test_unknown_field_uses_agent_mode(self):
        assert get_field_mode("sec9_unknown") == AssistantMode.AGENT_MODE

    def test_label_falls_back_to_key(self):
        assert get_field_label("sec1_boardofdirectors") == "Board of Directors"
        assert get_field_label("sec9_unknown") == "sec9_unknown"

    def test_descriptor(self):
        descriptor = get_field_descriptor("sec1_boardofdirectors")
        assert descriptor.section_label == "Board of Directors"
        assert [a.label for a in descriptor.required_business_attributes] == [
            "CEO information",
            "Financial Director information",
            "Total number of directors",
        ]

    def test_fields_without_checklist(self):
        assert get_required_attributes("sec2_tableofcontents") == []

    def test_section_prefix(self):
        assert section_prefix("sec1_boardofdirectors") == "sec1"
