"""Document generation LangGraph pipeline.

extract_templates -> apply_compliance -> complete_data -> END

Stages run strictly in sequence; each consumes the full output of the previous
one. Any stage exception aborts the run and nothing is persisted.
"""

from dataclasses import dataclass
from typing import Any
from uuid import uuid4

from langgraph.graph import END, StateGraph

from app.agents.document_generation.compliance_agent import ComplianceAgent
from app.agents.document_generation.completion_agent import DataCompletionAgent
from app.agents.document_generation.template_agent import TemplateExtractionAgent
from app.core.logging import get_logger
from app.core.schemas_document_generation import GenerationParams, PipelineOutput, StageOutput

logger = get_logger(__name__)

MAX_STEPS = 5


@dataclass
class DocumentGenerationState:
    """State for the document generation graph."""

    # Input fields
    params: GenerationParams
    run_id: str

    # Processing state
    step_count: int = 0
    templates: StageOutput | None = None
    drafted: StageOutput | None = None

    # Output
    completed: StageOutput | None = None


def _check_max_steps(state: DocumentGenerationState) -> DocumentGenerationState:
    """Check and increment step count, raise if exceeded."""
    state.step_count += 1
    if state.step_count > MAX_STEPS:
        raise RuntimeError(f"Graph exceeded max steps ({MAX_STEPS})")
    return state


class DocumentGenerationOrchestrator:
    """Runs the three generation stages over one listing document."""

    def __init__(
        self,
        template_agent: TemplateExtractionAgent | None = None,
        compliance_agent: ComplianceAgent | None = None,
        completion_agent: DataCompletionAgent | None = None,
    ):
        self.template_agent = template_agent or TemplateExtractionAgent()
        self.compliance_agent = compliance_agent or ComplianceAgent()
        self.completion_agent = completion_agent or DataCompletionAgent()
        self._graph = self._build_graph().compile()

    async def extract_templates(self, state: DocumentGenerationState) -> dict[str, Any]:
        """Stage 1: load and parse prompt templates."""
        state = _check_max_steps(state)
        logger.info("Stage 1: extracting templates", extra={"run_id": state.run_id, "stage": "extract_templates"})

        templates = await self.template_agent.execute(state.params)
        return {"templates": templates, "step_count": state.step_count}

    async def apply_compliance(self, state: DocumentGenerationState) -> dict[str, Any]:
        """Stage 2: compliance rewriting."""
        state = _check_max_steps(state)
        if state.templates is None:
            raise ValueError("No templates to rewrite")
        logger.info(
            "Stage 2: applying compliance",
            extra={"run_id": state.run_id, "stage": "apply_compliance", "section_count": len(state.templates.sections)},
        )

        drafted = await self.compliance_agent.execute(state.templates)
        return {"drafted": drafted, "step_count": state.step_count}

    async def complete_data(self, state: DocumentGenerationState) -> dict[str, Any]:
        """Stage 3: data completion."""
        state = _check_max_steps(state)
        if state.drafted is None:
            raise ValueError("No drafted sections to complete")
        logger.info("Stage 3: completing data", extra={"run_id": state.run_id, "stage": "complete_data"})

        completed = await self.completion_agent.execute(state.drafted)
        return {"completed": completed, "step_count": state.step_count}

    def _build_graph(self) -> StateGraph:
        """Build the LangGraph for document generation."""
        graph = StateGraph(DocumentGenerationState)

        graph.add_node("extract_templates", self.extract_templates)
        graph.add_node("apply_compliance", self.apply_compliance)
        graph.add_node("complete_data", self.complete_data)

        graph.set_entry_point("extract_templates")
        graph.add_edge("extract_templates", "apply_compliance")
        graph.add_edge("apply_compliance", "complete_data")
        graph.add_edge("complete_data", END)

        return graph

    async def generate(self, params: GenerationParams) -> PipelineOutput:
        """
        Run the full pipeline.

        Args:
            params: Document id, entity id and section types to generate

        Returns:
            Final sections plus the templates skipped during extraction

        Raises:
            DocumentEngineError: If any stage fails (nothing is persisted)
        """
        run_id = str(uuid4())
        logger.info(
            f"Starting document generation for sections {', '.join(params.sections)}",
            extra={"run_id": run_id, "document_id": params.document_id, "entity_id": params.entity_id},
        )

        final_state = await self._graph.ainvoke(DocumentGenerationState(params=params, run_id=run_id))

        # LangGraph returns the final state as a dict
        templates: StageOutput = final_state["templates"]
        completed: StageOutput = final_state["completed"]

        logger.info(
            "Document generation complete",
            extra={"run_id": run_id, "document_id": params.document_id, "section_count": len(completed.sections)},
        )
        return PipelineOutput(
            document_id=completed.document_id,
            entity_id=completed.entity_id,
            sections=completed.sections,
            skipped_templates=templates.skipped_templates,
        )
