"""Tests for the document generation LangGraph pipeline."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.core.errors import NotFoundError
from app.core.schemas_document_generation import GeneratedSection, GenerationParams, StageOutput
from app.graphs.document_generation_graph import (
    MAX_STEPS,
    DocumentGenerationOrchestrator,
    DocumentGenerationState,
    _check_max_steps,
)

from tests.conftest import DOCUMENT_ID, ENTITY_ID


def _stage(content: str, skipped: list[str] | None = None) -> StageOutput:
    return StageOutput(
        document_id=DOCUMENT_ID,
        entity_id=ENTITY_ID,
        sections=[GeneratedSection(template_name="sec1prompt_warning", title="Warning", content=content)],
        skipped_templates=skipped or [],
    )


def _agent(**kwargs) -> MagicMock:
    agent = MagicMock()
    agent.execute = AsyncMock(**kwargs)
    return agent


def _params() -> GenerationParams:
    return GenerationParams(document_id=DOCUMENT_ID, entity_id=ENTITY_ID, sections=["sec1prompt"])


class TestOrchestrator:
    @pytest.mark.asyncio
    async def test_stages_run_in_sequence(self):
        extracted = _stage("template", skipped=["sec1prompt_gone"])
        drafted = _stage("drafted")
        # Completion output no longer carries the skip list
        completed = _stage("final")
        template_agent = _agent(return_value=extracted)
        compliance_agent = _agent(return_value=drafted)
        completion_agent = _agent(return_value=completed)

        orchestrator = DocumentGenerationOrchestrator(template_agent, compliance_agent, completion_agent)
        output = await orchestrator.generate(_params())

        template_agent.execute.assert_awaited_once_with(_params())
        compliance_agent.execute.assert_awaited_once_with(extracted)
        completion_agent.execute.assert_awaited_once_with(drafted)
        assert [s.content for s in output.sections] == ["final"]
        assert output.skipped_templates == ["sec1prompt_gone"]
        assert output.document_id == DOCUMENT_ID
        assert output.entity_id == ENTITY_ID

    @pytest.mark.asyncio
    async def test_stage_failure_aborts_run(self):
        template_agent = _agent(return_value=_stage("template"))
        compliance_agent = _agent(return_value=_stage("drafted"))
        completion_agent = _agent(side_effect=NotFoundError("listing", DOCUMENT_ID))

        orchestrator = DocumentGenerationOrchestrator(template_agent, compliance_agent, completion_agent)

        with pytest.raises(NotFoundError):
            await orchestrator.generate(_params())

    @pytest.mark.asyncio
    async def test_extraction_failure_skips_later_stages(self):
        template_agent = _agent(side_effect=RuntimeError("catalog unavailable"))
        compliance_agent = _agent(return_value=_stage("drafted"))
        completion_agent = _agent(return_value=_stage("final"))

        orchestrator = DocumentGenerationOrchestrator(template_agent, compliance_agent, completion_agent)

        with pytest.raises(RuntimeError):
            await orchestrator.generate(_params())
        compliance_agent.execute.assert_not_awaited()
        completion_agent.execute.assert_not_awaited()


def test_max_steps_guard():
    state = DocumentGenerationState(params=_params(), run_id="run-1", step_count=MAX_STEPS)
    with pytest.raises(RuntimeError):
        _check_max_steps(state)
