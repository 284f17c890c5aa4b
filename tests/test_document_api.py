"""Tests for the document generation and section assistant endpoints."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import (
    get_memory_service,
    get_orchestrator,
    get_output_handler,
    get_section_assistant,
)
from app.chains.section_assistant import AssistantContextInfo, AssistantResponse
from app.core.errors import ContextAggregationError, NotFoundError
from app.core.schemas_document_generation import (
    GeneratedSection,
    PipelineOutput,
    SaveResult,
    TemplateValidation,
)
from app.core.schemas_section_context import AssistantMode, SectionContext
from app.main import app

from tests.conftest import DOCUMENT_ID, ENTITY_ID


@pytest.fixture
def orchestrator():
    orchestrator = MagicMock()
    orchestrator.generate = AsyncMock(
        return_value=PipelineOutput(
            document_id=DOCUMENT_ID,
            entity_id=ENTITY_ID,
            sections=[
                GeneratedSection(template_name="sec1prompt_warning", title="Warning", content="Read carefully."),
                GeneratedSection(template_name="sec1prompt_title", title="Title", content="Acme Listing"),
            ],
            skipped_templates=["sec1prompt_gone"],
        )
    )
    return orchestrator


@pytest.fixture
def output_handler():
    handler = MagicMock()
    handler.persist = AsyncMock(
        return_value=SaveResult(success=True, sections_processed=2, columns_updated=["sec1_documentname", "sec1_warning"])
    )
    handler.validate_templates = AsyncMock(
        return_value=TemplateValidation(
            valid_templates=["sec1prompt_warning"],
            invalid_templates=["sec1prompt_costs"],
            column_mapping={"sec1prompt_warning": "sec1_warning"},
        )
    )
    return handler


@pytest.fixture
def assistant():
    assistant = MagicMock()
    assistant.respond = AsyncMock(
        return_value=AssistantResponse(
            message="Drafted.",
            context=AssistantContextInfo(
                mode=AssistantMode.DOCUMENT_COMPLETION,
                field_key="sec1_warning",
                section_label="Warning Statement",
            ),
        )
    )
    return assistant


@pytest.fixture
def memory():
    memory = MagicMock()
    memory.is_configured = True
    memory.store_section_completion = AsyncMock(return_value="m-1")
    memory.store_entity_fact = AsyncMock(return_value="m-2")
    memory.store_tone_reference = AsyncMock(return_value=None)
    return memory


@pytest.fixture
def client(orchestrator, output_handler, assistant, memory):
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    app.dependency_overrides[get_output_handler] = lambda: output_handler
    app.dependency_overrides[get_section_assistant] = lambda: assistant
    app.dependency_overrides[get_memory_service] = lambda: memory
    yield TestClient(app)
    app.dependency_overrides.clear()


GENERATE_BODY = {"document_id": DOCUMENT_ID, "entity_id": ENTITY_ID, "sections": ["sec1prompt"]}


class TestGenerateEndpoint:
    def test_generate_and_save(self, client, output_handler):
        response = client.post("/v1/documents/generate", json=GENERATE_BODY)

        assert response.status_code == 200
        data = response.json()
        assert [s["template_name"] for s in data["sections"]] == ["sec1prompt_title", "sec1prompt_warning"]
        assert data["skipped_templates"] == ["sec1prompt_gone"]
        assert data["save_result"]["success"] is True
        output_handler.persist.assert_awaited_once()

    def test_missing_listing_is_404(self, client, orchestrator, output_handler):
        orchestrator.generate.side_effect = NotFoundError("listing", DOCUMENT_ID)

        response = client.post("/v1/documents/generate", json=GENERATE_BODY)

        assert response.status_code == 404
        assert response.json()["detail"] == f"listing not found: {DOCUMENT_ID}"
        output_handler.persist.assert_not_awaited()

    def test_failed_save_is_500(self, client, output_handler):
        output_handler.persist.return_value = SaveResult(success=False, error="permission denied")

        response = client.post("/v1/documents/generate", json=GENERATE_BODY)

        assert response.status_code == 500
        assert "permission denied" in response.json()["detail"]

    def test_empty_sections_rejected(self, client):
        response = client.post("/v1/documents/generate", json={**GENERATE_BODY, "sections": []})
        assert response.status_code == 422

    def test_validate_templates(self, client):
        response = client.post(
            "/v1/documents/validate-templates",
            json={"template_names": ["sec1prompt_warning", "sec1prompt_costs"]},
        )

        assert response.status_code == 200
        assert response.json()["invalid_templates"] == ["sec1prompt_costs"]


class TestAssistantEndpoints:
    def test_section_context(self, client, assistant):
        assistant.aggregator.aggregate = AsyncMock(
            return_value=SectionContext(
                field_key="sec1_warning",
                section_label="Warning Statement",
                mode=AssistantMode.DOCUMENT_COMPLETION,
                source_trace=["none"],
            )
        )

        response = client.post(
            "/v1/assistant/section-context",
            json={"user_prompt": "Draft the warning", "document_id": DOCUMENT_ID, "field_key": "sec1_warning"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["context"]["source_trace"] == ["none"]
        assert data["composition"]["prompt"].endswith('User Request: "Draft the warning"')

    def test_canvas_chat(self, client, assistant):
        response = client.post(
            "/v1/assistant/canvas-chat",
            json={"user_prompt": "Draft the warning", "document_id": DOCUMENT_ID, "field_key": "sec1_warning"},
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Drafted."
        assistant.respond.assert_awaited_once_with("Draft the warning", DOCUMENT_ID, "sec1_warning")

    def test_canvas_chat_aggregation_failure(self, client, assistant):
        assistant.respond.side_effect = ContextAggregationError("store unavailable")

        response = client.post("/v1/assistant/canvas-chat", json={"user_prompt": "Draft", "document_id": DOCUMENT_ID})

        assert response.status_code == 500

    def test_store_section_completion(self, client, memory):
        response = client.post(
            "/v1/assistant/memories",
            json={
                "kind": "section_completion",
                "entity_id": ENTITY_ID,
                "document_id": DOCUMENT_ID,
                "section_key": "sec1_warning",
                "content": "Final warning text",
            },
        )

        assert response.status_code == 200
        assert response.json() == {"stored": True, "memory_id": "m-1"}
        memory.store_section_completion.assert_awaited_once_with(ENTITY_ID, DOCUMENT_ID, "sec1_warning", "Final warning text")

    def test_section_completion_requires_section_key(self, client):
        response = client.post(
            "/v1/assistant/memories",
            json={"kind": "section_completion", "entity_id": ENTITY_ID, "content": "text"},
        )
        assert response.status_code == 422

    def test_failed_store_reported(self, client):
        response = client.post(
            "/v1/assistant/memories",
            json={"kind": "tone_reference", "entity_id": ENTITY_ID, "content": "Formal"},
        )
        assert response.json() == {"stored": False, "memory_id": None}

    def test_memory_not_configured(self, client, memory):
        memory.is_configured = False

        response = client.post(
            "/v1/assistant/memories",
            json={"kind": "entity_fact", "entity_id": ENTITY_ID, "content": "Founded 2015"},
        )

        assert response.status_code == 503
