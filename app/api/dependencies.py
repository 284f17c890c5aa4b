"""Process-owned service instances for the API layer."""

from functools import lru_cache

from app.chains.section_assistant import SectionAssistant
from app.core.memory_service import MemoryService
from app.graphs.document_generation_graph import DocumentGenerationOrchestrator
from app.services.document_output import DocumentOutputHandler


@lru_cache(maxsize=1)
def get_orchestrator() -> DocumentGenerationOrchestrator:
    return DocumentGenerationOrchestrator()


@lru_cache(maxsize=1)
def get_output_handler() -> DocumentOutputHandler:
    return DocumentOutputHandler()


@lru_cache(maxsize=1)
def get_section_assistant() -> SectionAssistant:
    return SectionAssistant()


@lru_cache(maxsize=1)
def get_memory_service() -> MemoryService:
    return MemoryService()
