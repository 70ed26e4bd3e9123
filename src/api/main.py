"""
FastAPI application entry-point.
"""
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.routers import generate, tiers
from src.core.logging import get_logger

logger = get_logger(__name__)

app = FastAPI(
    title="KPI Generator",
    version="0.1.0",
    description="Suggests KPIs with SQL, Pandas and DAX implementations for a described dataset",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(generate.router, prefix="/api", tags=["Generation"])
app.include_router(tiers.router, prefix="/api", tags=["Catalog"])


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Bad request bodies get the same opaque failure as any other error."""
    logger.warning("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=500, content={"error": generate.GENERATION_FAILED})


@app.get("/health")
def health():
    return {"status": "ok"}
