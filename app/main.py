"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from app.api import router as api_router
from app.core.logging import get_logger

logger = get_logger(__name__)

app = FastAPI(
    title="Listing Document Engine",
    description="LangGraph-based listing document generation and section assistant service",
    version="0.1.0",
)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "ok"}, status_code=200)


# Document generation and section assistant endpoints
app.include_router(api_router, prefix="/v1", tags=["v1"])
logger.info(f"Registered {len(api_router.routes)} v1 routes")
