"""API router for v1 endpoints."""

from fastapi import APIRouter

from app.api import document_generation, section_assistant

router = APIRouter()

# Document generation pipeline and template validation
router.include_router(document_generation.router, prefix="/documents", tags=["documents"])

# Section assistant (canvas chat) and memory writes
router.include_router(section_assistant.router, prefix="/assistant", tags=["assistant"])
